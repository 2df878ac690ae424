"""
Class-to-Style Mixin.

Integrates the Style Merger with an element:

1.  Only a static class string is processed; computed class expressions are
    left untouched.
2.  The component's ``class_prop_rules`` turn classes such as grid or
    ``btn-*`` classes into attributes. Attributes written by the author win;
    attributes that only came from the rule's defaults are replaced.
3.  The registry's style rules turn utility classes into entries of the style
    attribute. An existing style attribute must be a plain object literal;
    its keys win over derived ones.
4.  Unmatched tokens stay on the class attribute, which is removed only when
    no token remains.
"""

from typing import Dict, Optional

from ui_switcheroo.core.jsx.nodes import ExpressionContainer, JsxAttribute, StringValue
from ui_switcheroo.core.jsx.values import (
  DYNAMIC,
  merge_object_literal,
  parse_object_literal,
  render_object,
  static_value,
  value_node,
)
from ui_switcheroo.core.styles import merge_styles
from ui_switcheroo.enums import DiagnosticKind, Severity


class StyleMixin:
  """
  Mixin converting utility classes on renamed elements.

  Assumed attributes on self:
      config (RuntimeConfig): Class / style attribute names.
      registry (RuleRegistry): Source of the style rules.
  """

  def _apply_class_styles(self, record) -> None:
    element = record.element
    canonical = record.reference.canonical_name
    class_attr = element.find_attribute(self.config.class_attribute)
    if class_attr is None:
      return

    class_value = static_value(class_attr)
    if not isinstance(class_value, str):
      if class_value is DYNAMIC:
        self._skip_dynamic(record, f"{self.config.class_attribute} of {canonical} is computed at runtime; kept as-is")
      return

    style_attr = element.find_attribute(self.config.style_attribute)
    style_code: Optional[str] = None
    existing: Dict[str, str] = {}
    if style_attr is not None:
      style_code = self._object_code(style_attr)
      entries = parse_object_literal(style_code) if style_code is not None else None
      if entries is None or any(key is None for key, _ in entries):
        self._skip_dynamic(
          record,
          f"{self.config.style_attribute} of {canonical} is not a plain object literal; classes kept as-is",
        )
        return
      existing = {key: value for key, value in entries}

    remaining = class_value
    consumed = False

    rule = record.rule
    if rule.class_prop_rules:
      present = {name: True for name in element.attribute_names() if name not in record.defaulted}
      prop_result = merge_styles(present, remaining, rule.class_prop_rules)
      for name, value in prop_result.derived.items():
        default_attr = element.find_attribute(name) if name in record.defaulted else None
        if default_attr is not None:
          default_attr.value = value_node(value)
          record.defaulted.discard(name)
        else:
          element.attributes.append(JsxAttribute(name=name, value=value_node(value)))
      remaining = prop_result.remaining_class
      consumed = prop_result.consumed

    style_result = merge_styles(existing, remaining, self.registry.style_rules)
    if style_result.derived:
      if style_attr is not None:
        style_attr.value = ExpressionContainer.from_code(merge_object_literal(style_code, style_result.derived))
      else:
        code = render_object(style_result.derived)
        element.attributes.append(JsxAttribute(name=self.config.style_attribute, value=ExpressionContainer.from_code(code)))
      self.tracer.log_mutation("style", class_value, str(style_result.derived))
    remaining = style_result.remaining_class

    if not (consumed or style_result.consumed):
      return
    if not remaining:
      element.attributes = [a for a in element.attributes if a is not class_attr]
    else:
      quote = class_attr.value.quote if isinstance(class_attr.value, StringValue) else '"'
      class_attr.value = StringValue(value=remaining, quote=quote)

  @staticmethod
  def _object_code(attr: JsxAttribute) -> Optional[str]:
    if isinstance(attr.value, ExpressionContainer):
      return attr.value.code_text()
    return None

  def _skip_dynamic(self, record, message: str) -> None:
    self.report(
      DiagnosticKind.DYNAMIC_VALUE_SKIPPED,
      record.reference.canonical_name,
      message,
      record.element,
      severity=Severity.INFO,
    )
