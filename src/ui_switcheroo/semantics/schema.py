"""
Pydantic Schemas for the Rule Registry.

This module defines the structure of the JSON rule files
(`react_bootstrap_mui.json`, `bootstrap_utilities.json`, user overlays):

- `PropRule`: tagged variants (`rename`, `value_map`, `expand`, `drop`)
  discriminated on `kind`.
- `StructuralRule`: tagged variants (`graft`, `wrap`, `lift`).
- `StyleRule`: a token regex plus a style template.
- `ComponentRule`: everything needed to migrate one component.
- `RuleFile`: the top-level document.

All models are frozen; the registry never mutates a rule after validation.
"""

import re
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ui_switcheroo.enums import StructuralKind

Scalar = Union[bool, int, float, str]
StyleValue = Union[Scalar, Dict[str, Scalar]]


class _FrozenModel(BaseModel):
  model_config = ConfigDict(frozen=True, extra="forbid")


def _check_regex(pattern: str) -> str:
  try:
    re.compile(pattern)
  except re.error as e:
    raise ValueError(f"Invalid regex {pattern!r}: {e}") from e
  return pattern


class AttributeSpec(_FrozenModel):
  """
  A target attribute to emit.

  Exactly one of `value` or `expression` is given. A string `value` renders
  ``name="value"``, ``true`` renders the shorthand ``name`` and any other
  scalar renders ``name={literal}``. `expression` renders ``name={expression}``.
  """

  name: str = Field(..., min_length=1, description="Attribute name.")
  value: Optional[Scalar] = Field(None, description="Static JSON scalar value.")
  expression: Optional[str] = Field(None, description="Raw JavaScript expression.")

  @model_validator(mode="after")
  def _one_value(self) -> "AttributeSpec":
    if self.expression is None and "value" not in self.model_fields_set:
      raise ValueError(f"Attribute '{self.name}' needs either 'value' or 'expression'")
    if self.expression is not None and self.value is not None:
      raise ValueError(f"Attribute '{self.name}' cannot set both 'value' and 'expression'")
    return self


# --- Prop Rules ---


class RenameRule(_FrozenModel):
  """Renames the attribute, keeping its value."""

  kind: Literal["rename"] = "rename"
  to: str = Field(..., min_length=1)


class ValueMapRule(_FrozenModel):
  """Maps static enumeration values. Unknown values pass through unchanged."""

  kind: Literal["value_map"] = "value_map"
  values: Dict[str, Scalar] = Field(default_factory=dict)
  to: Optional[str] = Field(None, description="Optional new attribute name for mapped values.")


class ExpandCase(_FrozenModel):
  """
  One branch of an `ExpandRule`.

  Matches the static value exactly (`value`) or by full regex match
  (`pattern`). String templates in `emit` may reference ``{0}`` (the whole
  value) and ``{1}``, ``{2}``... (regex groups).
  """

  value: Optional[Scalar] = None
  pattern: Optional[str] = None
  emit: List[AttributeSpec] = Field(default_factory=list)

  @field_validator("pattern")
  @classmethod
  def _valid_pattern(cls, v: Optional[str]) -> Optional[str]:
    return v if v is None else _check_regex(v)

  @model_validator(mode="after")
  def _one_matcher(self) -> "ExpandCase":
    has_value = "value" in self.model_fields_set
    if has_value == (self.pattern is not None):
      raise ValueError("Expand case needs exactly one of 'value' or 'pattern'")
    return self

  def match(self, value: Any) -> Optional[List[str]]:
    """
    Tests a static value against this case.

    Returns:
        Optional[List[str]]: Template captures on success, else None.
    """
    if self.pattern is not None:
      if not isinstance(value, str):
        return None
      m = re.fullmatch(self.pattern, value)
      if m is None:
        return None
      return [m.group(0)] + [g or "" for g in m.groups()]
    if type(value) is type(self.value) and value == self.value:
      return [str(value)]
    return None


class ExpandRule(_FrozenModel):
  """Expands one attribute into several, chosen by its static value."""

  kind: Literal["expand"] = "expand"
  cases: List[ExpandCase] = Field(default_factory=list)


class DropRule(_FrozenModel):
  """Removes the attribute."""

  kind: Literal["drop"] = "drop"


PropRule = Annotated[Union[RenameRule, ValueMapRule, ExpandRule, DropRule], Field(discriminator="kind")]


# --- Style Rules ---


class StyleRule(_FrozenModel):
  """
  Maps a class token to style entries.

  Attributes:
      pattern: Regex matched against the whole token.
      style: Keys to templates. String templates are formatted with the
          captures (``{0}`` whole token, ``{1}``... groups). A mapping value
          is a responsive value keyed by breakpoint (``{"{1}": "none"}``);
          its keys and values are formatted the same way.
      cast: Optional conversion applied to templated string results.
  """

  pattern: str
  style: Dict[str, StyleValue] = Field(default_factory=dict)
  cast: Optional[Literal["int", "float"]] = None

  @field_validator("pattern")
  @classmethod
  def _valid_pattern(cls, v: str) -> str:
    return _check_regex(v)

  def match(self, token: str) -> Optional[List[str]]:
    m = re.fullmatch(self.pattern, token)
    if m is None:
      return None
    return [m.group(0)] + [g or "" for g in m.groups()]

  def to_style(self, captures: List[str]) -> Dict[str, StyleValue]:
    """
    Builds the style entries for a matched token.

    Args:
        captures: Output of `match`.

    Returns:
        Dict[str, StyleValue]: Style keys and values, in rule order.
    """
    result: Dict[str, StyleValue] = {}
    for key, template in self.style.items():
      if isinstance(template, dict):
        result[key] = {k.format(*captures): self._render(v, captures) for k, v in template.items()}
      else:
        result[key] = self._render(template, captures)
    return result

  def _render(self, template: Scalar, captures: List[str]) -> Scalar:
    if not isinstance(template, str):
      return template
    rendered = template.format(*captures)
    if self.cast and rendered != template:
      try:
        return int(rendered) if self.cast == "int" else float(rendered)
      except ValueError:
        pass
    return rendered


# --- Structural Rules ---


class GraftRule(_FrozenModel):
  """Splices the node's children into a slot of its parent and deletes the node."""

  kind: Literal["graft"] = "graft"
  slot: str = Field("children", min_length=1)
  parent: Optional[str] = Field(None, description="Required target name of the parent.")


class WrapRule(_FrozenModel):
  """Wraps the node's children in a new target element."""

  kind: Literal["wrap"] = "wrap"
  target: str = Field(..., min_length=1)
  target_module: Optional[str] = None


class LiftRule(_FrozenModel):
  """Moves the node's children into one of its own attributes."""

  kind: Literal["lift"] = "lift"
  slot: str = Field(..., min_length=1)


StructuralRule = Annotated[Union[GraftRule, WrapRule, LiftRule], Field(discriminator="kind")]


# --- Components ---


class ComponentRule(_FrozenModel):
  """
  Migration rule for a component or sub-component.

  `canonical_name` is filled in by the registry from the JSON key
  (``"Button"`` or ``"Card.Body"`` for sub-components).
  """

  canonical_name: str = ""
  target: Optional[str] = Field(None, description="Target component name. Null only for graft rules.")
  target_module: Optional[str] = Field(None, description="Defaults to the file's default_target_module.")
  props: Dict[str, PropRule] = Field(default_factory=dict)
  default_attributes: List[AttributeSpec] = Field(default_factory=list)
  structural: List[StructuralRule] = Field(default_factory=list)
  class_prop_rules: List[StyleRule] = Field(default_factory=list)

  @property
  def is_graft(self) -> bool:
    return any(s.kind == StructuralKind.GRAFT for s in self.structural)


class RuleFile(_FrozenModel):
  """
  Top-level document of a rule JSON file.
  """

  source_library: Optional[str] = None
  target_modules: List[str] = Field(default_factory=list)
  default_target_module: Optional[str] = None
  components: Dict[str, ComponentRule] = Field(default_factory=dict)
  sub_components: Dict[str, Dict[str, ComponentRule]] = Field(default_factory=dict)
  style_rules: List[StyleRule] = Field(default_factory=list)
