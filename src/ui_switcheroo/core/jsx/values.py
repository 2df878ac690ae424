"""
Static Value Helpers.

Utilities to read literal attribute values and to render Python scalars back
into JSX / JavaScript source:

- `static_value`: the statically known value of an attribute, or `DYNAMIC`.
- `render_literal` / `value_node`: Python scalar -> JS literal / attribute value.
- `parse_object_literal` / `merge_object_literal`: read and extend flat
  ``{ key: value }`` object literals (used for the style attribute).
"""

import re
from typing import Any, Dict, List, Optional, Tuple

from ui_switcheroo.core.jsx.nodes import AttributeValue, ExpressionContainer, JsxAttribute, StringValue


class _Dynamic:
  """Sentinel type for values that are not statically known."""

  def __repr__(self) -> str:
    return "DYNAMIC"


DYNAMIC = _Dynamic()

_NUMBER_RE = re.compile(r"-?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_IDENT_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")


def parse_literal(code: str) -> Any:
  """
  Parses a single JavaScript literal.

  Args:
      code: Expression source.

  Returns:
      The Python value (str, int, float, bool, None) or `DYNAMIC`.
  """
  text = code.strip()
  if not text:
    return DYNAMIC

  if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"`":
    inner = text[1:-1]
    if text[0] in inner or "\\" in inner:
      return DYNAMIC
    if text[0] == "`" and "${" in inner:
      return DYNAMIC
    return inner

  if text == "true":
    return True
  if text == "false":
    return False
  if text == "null":
    return None

  if _NUMBER_RE.fullmatch(text):
    number = float(text)
    return int(number) if number.is_integer() and not re.search(r"[.eE]", text) else number

  return DYNAMIC


def static_value(attr: JsxAttribute) -> Any:
  """
  Returns the statically known value of an attribute.

  String attributes yield their text, shorthand attributes yield ``True``,
  and containers holding one literal yield that literal.

  Args:
      attr: The attribute.

  Returns:
      The value, or `DYNAMIC` when it depends on runtime state.
  """
  if attr.value is None:
    return True
  if isinstance(attr.value, StringValue):
    return attr.value.value
  if isinstance(attr.value, ExpressionContainer):
    code = attr.value.code_text()
    if code is None:
      return DYNAMIC
    return parse_literal(code)
  return DYNAMIC


def render_literal(value: Any) -> str:
  """
  Renders a Python value as a JavaScript literal.

  Args:
      value: str, int, float, bool, None or a dict of those (rendered as an
          object literal).

  Returns:
      str: e.g. ``'primary.main'``, ``2``, ``true``.
  """
  if value is None:
    return "null"
  if isinstance(value, dict):
    return render_object(value)
  if isinstance(value, bool):
    return "true" if value else "false"
  if isinstance(value, (int, float)):
    return repr(value)
  text = str(value).replace("\\", "\\\\").replace("'", "\\'")
  return f"'{text}'"


def value_node(value: Any) -> Optional[AttributeValue]:
  """
  Builds an attribute value node for a Python scalar.

  Args:
      value: ``True`` renders as the shorthand (no value), strings as a quoted
          attribute string, everything else as ``{literal}``.

  Returns:
      Optional[AttributeValue]: The value node, None for the shorthand.
  """
  if value is True:
    return None
  if isinstance(value, str):
    quote = "'" if '"' in value else '"'
    return StringValue(value=value, quote=quote)
  return ExpressionContainer.from_code(render_literal(value))


def _render_key(key: str) -> str:
  return key if _IDENT_RE.fullmatch(key) else render_literal(key)


def render_object(entries: Dict[str, Any]) -> str:
  """Renders ``{ key: value, ... }`` from Python values."""
  if not entries:
    return "{}"
  body = ", ".join(f"{_render_key(k)}: {render_literal(v)}" for k, v in entries.items())
  return "{ " + body + " }"


def _split_top_level(text: str) -> List[str]:
  """Splits on commas not nested in brackets, strings or templates."""
  parts = []
  depth = 0
  quote = None
  start = 0
  i = 0
  while i < len(text):
    ch = text[i]
    if quote:
      if ch == "\\":
        i += 2
        continue
      if ch == quote:
        quote = None
    elif ch in "'\"`":
      quote = ch
    elif ch in "([{":
      depth += 1
    elif ch in ")]}":
      depth -= 1
    elif ch == "," and depth == 0:
      parts.append(text[start:i])
      start = i + 1
    i += 1
  parts.append(text[start:])
  return parts


def _object_bounds(code: str) -> Optional[Tuple[int, int]]:
  stripped = code.strip()
  if not (stripped.startswith("{") and stripped.endswith("}")):
    return None
  return code.index("{"), code.rindex("}")


def parse_object_literal(code: str) -> Optional[List[Tuple[Optional[str], str]]]:
  """
  Parses a flat object literal into ``(key, value_source)`` entries.

  Spread entries (``...base``) have a None key. Computed keys or shorthand
  methods make the literal unparseable.

  Args:
      code: Expression source such as ``{ color: 'red', ...extra }``.

  Returns:
      Optional[List[Tuple[Optional[str], str]]]: Entries, or None if `code` is
      not an object literal this helper understands.
  """
  bounds = _object_bounds(code)
  if bounds is None:
    return None
  inner = code[bounds[0] + 1 : bounds[1]]
  if not inner.strip():
    return []

  entries: List[Tuple[Optional[str], str]] = []
  for raw in _split_top_level(inner):
    part = raw.strip()
    if not part:
      continue
    if part.startswith("..."):
      entries.append((None, part[3:].strip()))
      continue
    colon = part.find(":")
    if colon < 0:
      if _IDENT_RE.fullmatch(part):
        entries.append((part, part))
        continue
      return None
    key_src = part[:colon].strip()
    if _IDENT_RE.fullmatch(key_src):
      key = key_src
    else:
      literal = parse_literal(key_src)
      if not isinstance(literal, str):
        return None
      key = literal
    entries.append((key, part[colon + 1 :].strip()))
  return entries


def merge_object_literal(code: str, additions: Dict[str, Any]) -> str:
  """
  Appends entries to an object literal, keeping the existing text.

  Args:
      code: Existing object literal source (must parse with `parse_object_literal`).
      additions: New keys and Python values, in insertion order.

  Returns:
      str: The extended literal.
  """
  if not additions:
    return code
  bounds = _object_bounds(code)
  if bounds is None:
    raise ValueError(f"Not an object literal: {code!r}")
  open_idx, close_idx = bounds
  inner = code[open_idx + 1 : close_idx]
  rendered = ", ".join(f"{_render_key(k)}: {render_literal(v)}" for k, v in additions.items())

  content = inner.rstrip()
  if not content.strip():
    return code[:open_idx] + "{ " + rendered + " }" + code[close_idx + 1 :]

  trailing = inner[len(content) :] or " "
  joiner = " " if content.endswith(",") else ", "
  return code[: open_idx + 1] + content + joiner + rendered + trailing + code[close_idx:]
