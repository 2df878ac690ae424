"""
Base Element Rewriter.

This module provides ``BaseElementRewriter``, the foundation of the
``ElementRewriter``. It handles:

1.  **Traversal**: Collecting every JSX element in document order, with its
    parent element and the list that owns it.
2.  **State Machine**: Driving each node through
    ``UNVISITED -> RESOLVED -> {UNTOUCHED | RENAMED | RESTRUCTURED} -> DONE``.
3.  **Bookkeeping**: Target symbols required (in first-required order), and
    which local bindings were migrated or are still referenced.
4.  **Diagnostics**: Forwarding recoverable issues to the sink.

Attribute, style and structural edits live in the mixins.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from ui_switcheroo.config import RuntimeConfig
from ui_switcheroo.core.aliases import AliasTable, ResolvedReference
from ui_switcheroo.core.conversion_result import RewriteResult
from ui_switcheroo.core.diagnostics import Diagnostic, DiagnosticSink, make_diagnostic
from ui_switcheroo.core.jsx.nodes import (
  ExpressionContainer,
  JsxElement,
  JsxName,
  JsxSpreadAttribute,
  Module,
)
from ui_switcheroo.core.tracer import TraceLogger
from ui_switcheroo.enums import DiagnosticKind, NodeState, Severity
from ui_switcheroo.semantics.registry import RuleRegistry
from ui_switcheroo.semantics.schema import ComponentRule

logger = logging.getLogger(__name__)


@dataclass
class NodeRecord:
  """
  Per-node working state for one rewrite pass.

  Attributes:
      element: The element.
      parent: Enclosing JSX element, if any.
      owner: The list holding the element (children list, container body or
          module body). None for elements used directly as attribute values.
      in_children: True when `owner` is a JSX children list.
      state: Current state.
      outcome: Final state before ``DONE``.
      reference: Alias resolution result.
      rule: Matched rule.
      defaulted: Attribute names added from the rule's defaults.
  """

  element: JsxElement
  parent: Optional[JsxElement]
  owner: Optional[list]
  in_children: bool
  state: NodeState = NodeState.UNVISITED
  outcome: Optional[NodeState] = None
  reference: Optional[ResolvedReference] = None
  rule: Optional[ComponentRule] = None
  defaulted: Set[str] = field(default_factory=set)


@dataclass
class RewriteSummary:
  """
  What the import synthesizer needs to know about a finished pass.

  Attributes:
      required_symbols: Target module -> names, both in first-required order.
      migrated_locals: Local bindings with at least one applied rule.
      referenced_locals: Local bindings still used by untouched elements.
      target_elements: (module, name) -> elements whose tag uses that name.
  """

  required_symbols: Dict[str, List[str]] = field(default_factory=dict)
  target_elements: Dict[Tuple[str, str], List[JsxElement]] = field(default_factory=dict)
  migrated_locals: Set[str] = field(default_factory=set)
  referenced_locals: Set[str] = field(default_factory=set)


class BaseElementRewriter:
  """
  Traversal and state management shared by the rewriter mixins.
  """

  def __init__(
    self,
    registry: RuleRegistry,
    config: Optional[RuntimeConfig] = None,
    sink: Optional[DiagnosticSink] = None,
    tracer: Optional[TraceLogger] = None,
  ):
    """
    Initializes the rewriter.

    Args:
        registry: The rule registry (read-only).
        config: Runtime settings (class / style attribute names).
        sink: Optional extra receiver for diagnostics.
        tracer: Optional trace logger.
    """
    self.registry = registry
    self.config = config or RuntimeConfig()
    self.sink = sink
    self.tracer = tracer or TraceLogger()

    self.records: List[NodeRecord] = []
    self.diagnostics: List[Diagnostic] = []
    self.summary = RewriteSummary()
    self._by_element: Dict[int, NodeRecord] = {}

  # --- Entry point ---

  def rewrite(self, module: Module, aliases: AliasTable) -> RewriteResult:
    """
    Runs both passes over the module.

    Args:
        module: The tree; mutated in place.
        aliases: Alias table built from the module's imports.

    Returns:
        RewriteResult: ``changed=False`` if no rule was applied.
    """
    self.records = []
    self.diagnostics = []
    self.summary = RewriteSummary()
    self._by_element = {}

    if len(aliases) == 0:
      return RewriteResult(changed=False, tree=module)

    self._collect(module)

    self.tracer.start_phase("Element Pass", "Resolve, rename and re-prop elements")
    for record in self.records:
      self._visit(record, aliases)
    self.tracer.end_phase()

    self.tracer.start_phase("Structural Pass", "Apply graft / wrap / lift rules")
    for record in self.records:
      if record.rule is not None and record.rule.structural and record.state != NodeState.UNTOUCHED:
        self._apply_structural(record)
    self.tracer.end_phase()

    changed = False
    for record in self.records:
      record.outcome = record.state
      record.state = NodeState.DONE
      if record.outcome in (NodeState.RENAMED, NodeState.RESTRUCTURED):
        changed = True
        self.summary.migrated_locals.add(record.reference.local_root)
      elif record.element.name is not None and record.element.name.root in aliases:
        self.summary.referenced_locals.add(record.element.name.root)

    return RewriteResult(changed=changed, tree=module, diagnostics=list(self.diagnostics))

  # --- Traversal ---

  def _collect(self, module: Module) -> None:
    for item in module.body:
      if isinstance(item, JsxElement):
        self._collect_element(item, None, module.body, False)

  def _collect_element(self, element: JsxElement, parent: Optional[JsxElement], owner: Optional[list], in_children: bool) -> None:
    record = NodeRecord(element=element, parent=parent, owner=owner, in_children=in_children)
    self.records.append(record)
    self._by_element[id(element)] = record

    for attr in element.attributes:
      if isinstance(attr, JsxSpreadAttribute):
        self._collect_code(attr.container, element)
      elif isinstance(attr.value, JsxElement):
        self._collect_element(attr.value, element, None, False)
      elif isinstance(attr.value, ExpressionContainer):
        self._collect_code(attr.value, element)

    for child in element.children:
      if isinstance(child, JsxElement):
        self._collect_element(child, element, element.children, True)
      elif isinstance(child, ExpressionContainer):
        self._collect_code(child, element)

  def _collect_code(self, container: ExpressionContainer, parent: JsxElement) -> None:
    for item in container.body:
      if isinstance(item, JsxElement):
        self._collect_element(item, parent, container.body, False)

  def record_for(self, element: Optional[JsxElement]) -> Optional[NodeRecord]:
    if element is None:
      return None
    return self._by_element.get(id(element))

  # --- Pass 1 ---

  def _visit(self, record: NodeRecord, aliases: AliasTable) -> None:
    element = record.element
    if element.name is None:
      record.state = NodeState.UNTOUCHED
      return

    reference = aliases.resolve(element.name)
    if reference is None:
      record.state = NodeState.UNTOUCHED
      return
    record.reference = reference
    record.state = NodeState.RESOLVED

    if reference.child is None:
      rule = self.registry.lookup_component(reference.component)
      missing_kind = DiagnosticKind.UNMAPPED_COMPONENT
    else:
      rule = self.registry.lookup_sub_component(reference.component, reference.child)
      missing_kind = DiagnosticKind.UNMAPPED_SUB_COMPONENT

    if rule is None:
      record.state = NodeState.UNTOUCHED
      self.report(missing_kind, reference.canonical_name, f"no mapping for {reference.canonical_name}", element)
      return

    record.rule = rule
    self.tracer.log_match(reference.canonical_name, rule.target or "<graft>", rule.target_module)

    if rule.is_graft:
      # Resolved in the structural pass, once the parent is stable.
      return

    self._rename(record)
    self._rewrite_attributes(record)
    self._apply_class_styles(record)
    record.state = NodeState.RENAMED

  def _rename(self, record: NodeRecord) -> None:
    rule = record.rule
    before = record.element.name.dotted
    record.element.name = JsxName(parts=[rule.target])
    self.require_symbol(rule.target_module, rule.target, record.element)
    self.tracer.log_mutation("tag", before, rule.target)

  # --- Mixin hooks ---

  def _rewrite_attributes(self, record: NodeRecord) -> None:
    raise NotImplementedError

  def _apply_class_styles(self, record: NodeRecord) -> None:
    raise NotImplementedError

  def _apply_structural(self, record: NodeRecord) -> None:
    raise NotImplementedError

  # --- Bookkeeping ---

  def require_symbol(self, module: Optional[str], name: str, element: Optional[JsxElement] = None) -> None:
    """
    Records that `name` must be imported from `module`.

    Args:
        module: Target module; falls back to the registry default.
        name: Symbol name.
        element: The element whose tag now uses `name`, if any.
    """
    target_module = module or self.registry.default_target_module
    names = self.summary.required_symbols.setdefault(target_module, [])
    if name not in names:
      names.append(name)
    if element is not None:
      self.summary.target_elements.setdefault((target_module, name), []).append(element)

  def report(
    self,
    kind: DiagnosticKind,
    canonical_name: str,
    message: str,
    node: Optional[JsxElement] = None,
    severity: Severity = Severity.WARNING,
  ) -> None:
    """
    Emits a diagnostic to the local list, the sink and the trace.
    """
    diagnostic = make_diagnostic(kind, canonical_name, message, node=node, severity=severity)
    self.diagnostics.append(diagnostic)
    if self.sink is not None:
      self.sink.report(diagnostic)
    self.tracer.log_warning(diagnostic.format())
    logger.debug(diagnostic.format())
