"""
Semantics Package.

Declarative migration knowledge: the pydantic rule schema, the packaged JSON
rule tables and the `RuleRegistry` that loads and validates them.
"""
