"""
Prop Transformer.

Applies one `PropRule` to one attribute. Each rule is a pure function of the
attribute it receives; sibling attributes are never consulted, so rewriting an
element's attribute list is a plain map.

- ``rename``: new name, same value.
- ``value_map``: mapped static value, optionally under a new name. Values the
  map does not know pass through unchanged.
- ``expand``: zero or more attributes chosen by the static value. Dynamic or
  unmatched values pass through unchanged.
- ``drop``: no output.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from ui_switcheroo.core.jsx.nodes import ExpressionContainer, JsxAttribute
from ui_switcheroo.core.jsx.values import DYNAMIC, static_value, value_node
from ui_switcheroo.enums import DiagnosticKind, PropRuleKind
from ui_switcheroo.semantics.schema import AttributeSpec, PropRule


@dataclass
class PropOutcome:
  """
  Result of applying a prop rule.

  Attributes:
      attributes: Output attributes (empty for ``drop``).
      changed: False when the input attribute passed through as-is.
      diagnostic: Set to `DYNAMIC_VALUE_SKIPPED` when a rule could not run
          because the value is computed at runtime.
  """

  attributes: List[JsxAttribute] = field(default_factory=list)
  changed: bool = False
  diagnostic: Optional[DiagnosticKind] = None


def attribute_from_spec(spec: AttributeSpec, captures: Optional[Sequence[str]] = None, leading: str = " ") -> JsxAttribute:
  """
  Materializes an `AttributeSpec` as a JSX attribute.

  Args:
      spec: The attribute template.
      captures: Values for ``{0}``, ``{1}``... placeholders (Expand rules only).
      leading: Whitespace placed before the attribute.

  Returns:
      JsxAttribute: The new attribute.
  """
  if spec.expression is not None:
    code = spec.expression.format(*captures) if captures else spec.expression
    return JsxAttribute(name=spec.name, value=ExpressionContainer.from_code(code), leading=leading)

  value: Any = spec.value
  if isinstance(value, str) and captures:
    value = value.format(*captures)
  return JsxAttribute(name=spec.name, value=value_node(value), leading=leading)


def _map_key(value: Any) -> str:
  if isinstance(value, bool):
    return "true" if value else "false"
  if value is None:
    return "null"
  return str(value)


def apply_prop_rule(rule: Optional[PropRule], attribute: JsxAttribute) -> PropOutcome:
  """
  Applies a prop rule to a single attribute.

  Args:
      rule: The rule, or None for "no rule registered" (pass-through).
      attribute: The attribute to transform. It is never mutated.

  Returns:
      PropOutcome: The output attributes and what happened.
  """
  passthrough = PropOutcome(attributes=[attribute])
  if rule is None:
    return passthrough

  if rule.kind == PropRuleKind.DROP:
    return PropOutcome(attributes=[], changed=True)

  if rule.kind == PropRuleKind.RENAME:
    if rule.to == attribute.name:
      return passthrough
    renamed = JsxAttribute(
      name=rule.to,
      value=attribute.value,
      leading=attribute.leading,
      separator=attribute.separator,
    )
    return PropOutcome(attributes=[renamed], changed=True)

  value = static_value(attribute)
  if value is DYNAMIC:
    return PropOutcome(attributes=[attribute], diagnostic=DiagnosticKind.DYNAMIC_VALUE_SKIPPED)

  if rule.kind == PropRuleKind.VALUE_MAP:
    key = _map_key(value)
    if key not in rule.values:
      return passthrough
    mapped = JsxAttribute(
      name=rule.to or attribute.name,
      value=value_node(rule.values[key]),
      leading=attribute.leading,
    )
    return PropOutcome(attributes=[mapped], changed=True)

  if rule.kind == PropRuleKind.EXPAND:
    for case in rule.cases:
      captures = case.match(value)
      if captures is None:
        continue
      emitted = [
        attribute_from_spec(spec, captures, leading=attribute.leading if idx == 0 else " ")
        for idx, spec in enumerate(case.emit)
      ]
      return PropOutcome(attributes=emitted, changed=True)
    return passthrough

  return passthrough
