"""
Structural Rules Mixin.

Second pass of the element rewriter. Runs after every node has been renamed
and re-propped so that parents are stable before children are moved:

- ``graft``: splice the node's children into the parent's children (in place
  of the node) or into a parent attribute, then delete the node. Attributes of
  the node move onto the parent (utility classes are converted there); a
  clash with an attribute the parent already has blocks the graft.
  ``<DialogTitle><Modal.Title>Hi</Modal.Title></DialogTitle>`` becomes
  ``<DialogTitle>Hi</DialogTitle>``.
- ``wrap``: wrap the node's children in a new element
  (``<AppBar><Toolbar>...</Toolbar></AppBar>``).
- ``lift``: move the node's children into one of its own attributes
  (``<CardHeader title="Featured" />``).

A rule whose expected shape is absent is a no-op reported as
`STRUCTURAL_TARGET_MISSING`; it never aborts the pass.
"""

from typing import List, Optional

from ui_switcheroo.core.jsx.nodes import (
  AttributeValue,
  ExpressionContainer,
  JsxAttribute,
  JsxChild,
  JsxElement,
  JsxName,
  JsxSpreadAttribute,
  JsxText,
  StringValue,
)
from ui_switcheroo.enums import DiagnosticKind, NodeState, StructuralKind
from ui_switcheroo.semantics.schema import GraftRule, LiftRule, WrapRule

_STABLE_PARENT_STATES = (NodeState.RENAMED, NodeState.RESTRUCTURED)


def _trim_children(children: List[JsxChild]) -> List[JsxChild]:
  """Drops whitespace-only text at both ends."""
  items = list(children)
  while items and isinstance(items[0], JsxText) and not items[0].text.strip():
    items.pop(0)
  while items and isinstance(items[-1], JsxText) and not items[-1].text.strip():
    items.pop()
  return items


def children_as_value(children: List[JsxChild]) -> Optional[AttributeValue]:
  """
  Converts a children list into an attribute value.

  Pure text becomes a string, a single expression container is reused as-is,
  anything else is wrapped in ``{...}`` (with a fragment when needed).

  Returns:
      Optional[AttributeValue]: None when there are no meaningful children.
  """
  items = _trim_children(children)
  if not items:
    return None

  if all(isinstance(c, JsxText) for c in items):
    text = " ".join("".join(c.text for c in items).split())
    if '"' not in text:
      return StringValue(value=text, quote='"')
    if "'" not in text:
      return StringValue(value=text, quote="'")

  if len(items) == 1 and isinstance(items[0], ExpressionContainer):
    return items[0]
  if len(items) == 1 and isinstance(items[0], JsxElement):
    return ExpressionContainer(body=[items[0]])
  return ExpressionContainer(body=[JsxElement(name=None, children=items)])


class StructureMixin:
  """
  Mixin applying structural rules in the second pass.

  Assumed attributes on self:
      registry (RuleRegistry): For default target modules.
      config (RuntimeConfig): For the class attribute name.
  """

  def _apply_structural(self, record) -> None:
    for struct in record.rule.structural:
      if struct.kind == StructuralKind.GRAFT:
        self._apply_graft(record, struct)
      elif struct.kind == StructuralKind.WRAP:
        self._apply_wrap(record, struct)
      elif struct.kind == StructuralKind.LIFT:
        self._apply_lift(record, struct)

  def _structural_miss(self, record, message: str) -> None:
    self.report(
      DiagnosticKind.STRUCTURAL_TARGET_MISSING,
      record.reference.canonical_name,
      message,
      record.element,
    )

  def _apply_graft(self, record, rule: GraftRule) -> None:
    """
    Moves the node's children into its parent and deletes the node.
    """
    element = record.element
    canonical = record.reference.canonical_name
    parent_record = self.record_for(record.parent)

    if parent_record is None or parent_record.state not in _STABLE_PARENT_STATES:
      record.state = NodeState.UNTOUCHED
      self._structural_miss(record, f"{canonical} must be nested directly in a migrated parent")
      return

    parent = parent_record.element
    if rule.parent and parent.name.dotted != rule.parent:
      record.state = NodeState.UNTOUCHED
      self._structural_miss(record, f"{canonical} expects parent {rule.parent}, found {parent.name.dotted}")
      return

    owner = record.owner
    index = self._index_in(owner, element)
    if not record.in_children or index is None:
      record.state = NodeState.UNTOUCHED
      self._structural_miss(record, f"{canonical} is not a direct child of {parent.name.dotted}")
      return

    if rule.slot == "children":
      clashes = self._attribute_clashes(element, parent)
      if clashes:
        record.state = NodeState.UNTOUCHED
        self._structural_miss(
          record, f"{canonical} attributes {', '.join(clashes)} conflict with {parent.name.dotted}; not grafted"
        )
        return
      carried = list(element.attributes)
      moved = element.children
      owner[index : index + 1] = moved
      self._rehome(moved, parent, owner)
      if carried:
        parent.attributes.extend(carried)
        if any(isinstance(a, JsxAttribute) and a.name == self.config.class_attribute for a in carried):
          self._apply_class_styles(parent_record)
    else:
      if parent.find_attribute(rule.slot) is not None:
        record.state = NodeState.UNTOUCHED
        self._structural_miss(record, f"slot '{rule.slot}' of {parent.name.dotted} is already set")
        return
      if element.attributes:
        record.state = NodeState.UNTOUCHED
        self._structural_miss(record, f"{canonical} has attributes that slot '{rule.slot}' cannot carry; not grafted")
        return
      value = children_as_value(element.children)
      if value is None:
        record.state = NodeState.UNTOUCHED
        self._structural_miss(record, f"{canonical} has no content for slot '{rule.slot}'")
        return
      parent.attributes.append(JsxAttribute(name=rule.slot, value=value))
      del owner[index]

    record.state = NodeState.RESTRUCTURED
    self.tracer.log_mutation("graft", canonical, f"{parent.name.dotted}.{rule.slot}")

  def _apply_wrap(self, record, rule: WrapRule) -> None:
    """
    Wraps the node's children in a new target element.
    """
    element = record.element
    if element.self_closing or not _trim_children(element.children):
      return

    wrapper = JsxElement(name=JsxName(parts=[rule.target]), children=element.children)
    element.children = [wrapper]
    self.require_symbol(rule.target_module, rule.target, wrapper)
    record.state = NodeState.RESTRUCTURED
    self.tracer.log_mutation("wrap", element.name.dotted, rule.target)

  def _apply_lift(self, record, rule: LiftRule) -> None:
    """
    Moves the node's children into its own attribute and self-closes it.
    """
    element = record.element
    value = children_as_value(element.children)
    if value is None:
      return

    if element.find_attribute(rule.slot) is not None:
      self._structural_miss(record, f"slot '{rule.slot}' of {element.name.dotted} is already set")
      return

    element.attributes.append(JsxAttribute(name=rule.slot, value=value))
    element.children = []
    element.self_closing = True
    element.closing_leading = ""
    element.closing_trailing = ""
    if not element.before_close:
      element.before_close = " "
    record.state = NodeState.RESTRUCTURED
    self.tracer.log_mutation("lift", element.name.dotted, rule.slot)

  def _rehome(self, children: List[JsxChild], parent: JsxElement, owner: list) -> None:
    for child in children:
      child_record = self.record_for(child) if isinstance(child, JsxElement) else None
      if child_record is not None:
        child_record.parent = parent
        child_record.owner = owner

  @staticmethod
  def _index_in(owner: Optional[list], element: JsxElement) -> Optional[int]:
    if owner is None:
      return None
    for idx, item in enumerate(owner):
      if item is element:
        return idx
    return None

  @staticmethod
  def _attribute_clashes(element: JsxElement, parent: JsxElement) -> List[str]:
    """Attributes of `element` that cannot move onto `parent` unchanged."""
    taken = set(parent.attribute_names())
    clashes = []
    for attr in element.attributes:
      if isinstance(attr, JsxSpreadAttribute):
        clashes.append("{...spread}")
      elif attr.name in taken:
        clashes.append(attr.name)
    return clashes
