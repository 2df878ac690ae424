"""
Orchestration Engine for JSX Migrations.

This module provides the `MigrationEngine`, the primary driver of a migration.
The pipeline for one module:

1.  **Parsing** (text hosts only): source text -> `Module` via the JSX front-end.
2.  **Alias Resolution**: the import section -> `AliasTable`. A module that
    never imports the source library stops here, unchanged.
3.  **Element Rewriting**: `ElementRewriter` renames, re-props and restyles
    elements (pass 1), then applies structural rules (pass 2).
4.  **Import Synthesis**: `ImportSynthesizer` prunes migrated source imports
    and injects target imports.
5.  **Emission** (text hosts only): `Module` -> text. Unchanged modules are
    returned as the exact input text.

`migrate` is the tree-level boundary; `run` wraps it for text.
"""

import logging
from typing import List, Optional

from ui_switcheroo.config import RuntimeConfig
from ui_switcheroo.core.aliases import build_alias_table
from ui_switcheroo.core.conversion_result import ConversionResult, RewriteResult
from ui_switcheroo.core.diagnostics import Diagnostic, DiagnosticSink
from ui_switcheroo.core.import_fixer import ImportSynthesizer
from ui_switcheroo.core.jsx import emit_module, parse_module
from ui_switcheroo.core.jsx.nodes import Module
from ui_switcheroo.core.rewriter import ElementRewriter
from ui_switcheroo.core.tracer import TraceLogger
from ui_switcheroo.enums import DiagnosticKind, Severity
from ui_switcheroo.semantics.registry import RuleRegistry, get_default_registry

logger = logging.getLogger(__name__)

_UNMAPPED_KINDS = (DiagnosticKind.UNMAPPED_COMPONENT, DiagnosticKind.UNMAPPED_SUB_COMPONENT)


class MigrationEngine:
  """
  The main migration unit.

  Holds the read-only registry and configuration; every call to `migrate` or
  `run` works on its own tree, alias table and trace logger, so one engine may
  serve many files, including from several threads.
  """

  def __init__(
    self,
    registry: Optional[RuleRegistry] = None,
    config: Optional[RuntimeConfig] = None,
    sink: Optional[DiagnosticSink] = None,
  ):
    """
    Initializes the Engine.

    Args:
        registry: Rule registry. Defaults to the packaged rules plus the
            configured overlays.
        config: Runtime configuration. Loaded from pyproject.toml if None.
        sink: Optional receiver for every diagnostic.

    Raises:
        RuleRegistryValidationError: If the rule configuration is invalid.
    """
    self.config = config or RuntimeConfig.load()
    if registry is not None:
      self.registry = registry
    elif self.config.rule_paths:
      self.registry = RuleRegistry.from_files(self.config.rule_paths)
    else:
      self.registry = get_default_registry()
    self.sink = sink

  def parse(self, code: str) -> Module:
    """
    Parses source text into a tree.

    Args:
        code: JavaScript / TypeScript module text.

    Returns:
        Module: The tree. Parsing never fails; unknown syntax stays opaque.
    """
    return parse_module(code)

  def to_source(self, tree: Module) -> str:
    """Serializes a tree back into text."""
    return emit_module(tree)

  def migrate(self, tree: Module, tracer: Optional[TraceLogger] = None) -> RewriteResult:
    """
    Migrates a parsed module in place.

    Args:
        tree: The module.
        tracer: Trace logger for this call. A fresh one is used if None.

    Returns:
        RewriteResult: ``changed=False`` leaves the tree untouched.
    """
    tracer = tracer or TraceLogger()
    tracer.start_phase("Alias Resolution", self.config.source_library)
    aliases = build_alias_table(tree, self.config.source_library, self.config.stylesheet_sources)
    tracer.end_phase()

    if len(aliases) == 0:
      logger.debug("No bindings from %s; skipping", self.config.source_library)
      return RewriteResult(changed=False, tree=tree)

    rewriter = ElementRewriter(self.registry, self.config, sink=self.sink, tracer=tracer)
    result = rewriter.rewrite(tree, aliases)
    if not result.changed:
      return result

    ImportSynthesizer(aliases, rewriter.summary, tracer=tracer).synthesize(tree)
    return result

  def run(self, code: str) -> ConversionResult:
    """
    Executes the full pipeline on source text.

    In strict mode unmapped components are errors and `success` is False;
    otherwise every diagnostic is a warning.

    Args:
        code: Source text.

    Returns:
        ConversionResult: Migrated code (or the input verbatim) and diagnostics.
    """
    tracer = TraceLogger()
    tracer.start_phase("Migration Pipeline", f"{self.config.source_library} -> {', '.join(self.registry.target_modules)}")

    tree = self.parse(code)
    result = self.migrate(tree, tracer)
    final_code = self.to_source(result.tree) if result.changed else code

    errors, warnings = self._classify(result.diagnostics)
    tracer.end_phase()

    return ConversionResult(
      code=final_code,
      changed=result.changed,
      errors=errors,
      warnings=warnings,
      diagnostics=[d.to_dict() for d in result.diagnostics],
      success=not errors,
      trace_events=tracer.export(),
    )

  def _classify(self, diagnostics: List[Diagnostic]):
    errors: List[str] = []
    warnings: List[str] = []
    for diag in diagnostics:
      if diag.severity == Severity.ERROR or (self.config.strict_mode and diag.kind in _UNMAPPED_KINDS):
        errors.append(diag.format())
      else:
        warnings.append(diag.format())
    return errors, warnings
