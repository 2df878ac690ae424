"""
Attribute Rewriting Mixin.

Maps every attribute of a renamed element through its prop rule, then appends
the rule's default attributes that are not already present. The class
attribute is left for the style mixin; spread attributes always pass through.
Defaulted names are remembered so class-derived attributes may replace them.
"""

from typing import List, Set, Union

from ui_switcheroo.core.jsx.nodes import JsxAttribute, JsxSpreadAttribute
from ui_switcheroo.core.props import apply_prop_rule, attribute_from_spec
from ui_switcheroo.enums import Severity


class AttributeMixin:
  """
  Mixin for prop rules and default attributes.

  Assumed attributes on self:
      config (RuntimeConfig): For the class attribute name.
  """

  def _rewrite_attributes(self, record) -> None:
    """
    Rewrites the attribute list of a renamed element.

    Args:
        record: The node record (rule already matched).
    """
    element = record.element
    rule = record.rule
    class_attr = self.config.class_attribute
    rewritten: List[Union[JsxAttribute, JsxSpreadAttribute]] = []

    for attr in element.attributes:
      if isinstance(attr, JsxSpreadAttribute) or attr.name == class_attr:
        rewritten.append(attr)
        continue

      outcome = apply_prop_rule(rule.props.get(attr.name), attr)
      if outcome.diagnostic is not None:
        self.report(
          outcome.diagnostic,
          record.reference.canonical_name,
          f"'{attr.name}' of {record.reference.canonical_name} is computed at runtime; kept as-is",
          element,
          severity=Severity.INFO,
        )
      if outcome.changed:
        after = ", ".join(a.name for a in outcome.attributes) or "<dropped>"
        self.tracer.log_mutation("attribute", attr.name, after)
      rewritten.extend(outcome.attributes)

    present: Set[str] = {a.name for a in rewritten if isinstance(a, JsxAttribute)}
    for spec in rule.default_attributes:
      if spec.name in present:
        continue
      rewritten.append(attribute_from_spec(spec))
      present.add(spec.name)
      record.defaulted.add(spec.name)

    element.attributes = rewritten
