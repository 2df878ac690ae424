"""
Core Package.

Contains the migration backend:
- JSX front-end (tree model, scanner, emitter)
- Alias resolution, prop transformation and style merging
- Element Rewriter and Import Synthesizer
- Migration Engine and tracing
"""
