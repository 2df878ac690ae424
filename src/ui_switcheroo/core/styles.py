"""
Style Merger.

Turns a utility-class string (``"d-flex mt-3 custom"``) into style entries
(``{display: 'flex', mt: 3}``) plus the tokens no rule understood
(``"custom"``). Element-agnostic: it only sees strings and mappings.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence

from ui_switcheroo.semantics.schema import StyleRule


@dataclass
class StyleMergeResult:
  """
  Attributes:
      style: The merged style (existing keys first), or the unmodified
          existing style when nothing was derived.
      remaining_class: Unmatched tokens in original order, space separated.
      derived: Only the newly added entries, in derivation order.
      consumed: True when at least one token matched a rule.
  """

  style: Optional[Mapping[str, Any]]
  remaining_class: str
  derived: Dict[str, Any] = field(default_factory=dict)
  consumed: bool = False


def merge_styles(
  existing_style: Optional[Mapping[str, Any]],
  class_string: str,
  rules: Sequence[StyleRule],
) -> StyleMergeResult:
  """
  Merges class-derived style entries into an existing style.

  Tokens are scanned left to right; for each, the first matching rule in
  registration order wins. A derived key is skipped when the existing style
  or an earlier token already set it, except that responsive values
  (breakpoint mappings) for the same key are combined: ``d-none d-md-flex``
  gives ``display: { xs: 'none', md: 'flex' }``.

  Args:
      existing_style: Keys already present on the element (they always win).
      class_string: Whitespace separated class tokens.
      rules: Ordered style rules.

  Returns:
      StyleMergeResult: Merged style, leftover classes and derived entries.
  """
  existing = existing_style or {}
  derived: Dict[str, Any] = {}
  remaining = []
  consumed = False

  for token in class_string.split():
    for rule in rules:
      captures = rule.match(token)
      if captures is None:
        continue
      consumed = True
      for key, value in rule.to_style(captures).items():
        if key in existing:
          continue
        if key in derived:
          combined = _merge_responsive(derived[key], value)
          if combined is not None:
            derived[key] = combined
          continue
        derived[key] = value
      break
    else:
      remaining.append(token)

  if not derived:
    return StyleMergeResult(style=existing_style, remaining_class=" ".join(remaining), consumed=consumed)

  merged: Dict[str, Any] = dict(existing)
  merged.update(derived)
  return StyleMergeResult(style=merged, remaining_class=" ".join(remaining), derived=derived, consumed=consumed)


def _merge_responsive(current: Any, addition: Any) -> Optional[Dict[str, Any]]:
  """
  Combines two values of one key when at least one is a breakpoint mapping.

  A plain value counts as the ``xs`` breakpoint. Breakpoints already set win.

  Returns:
      Optional[Dict[str, Any]]: The combined mapping, or None when neither
      value is responsive.
  """
  if not isinstance(current, dict) and not isinstance(addition, dict):
    return None
  combined = dict(current) if isinstance(current, dict) else {"xs": current}
  extra = addition if isinstance(addition, dict) else {"xs": addition}
  for breakpoint, value in extra.items():
    combined.setdefault(breakpoint, value)
  return combined
