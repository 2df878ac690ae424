"""
JSX Module Scanner.

This module provides the `JsxParser`, a tolerant front-end that splits
JavaScript / TypeScript module text into the tree defined in
`ui_switcheroo.core.jsx.nodes`.

It is not a general-purpose JavaScript parser. It recognises exactly what the
migration engine needs:

1.  **Imports**: Top-level ``import`` statements (default, namespace, named,
    side-effect and ``import type`` forms).
2.  **JSX**: Elements and fragments appearing where an expression may start,
    including JSX nested inside ``{...}`` expression containers.
3.  **Everything else**: Carried as opaque `CodeChunk` text. Strings, template
    literals, comments and regex literals are skipped so that a ``<`` or
    ``import`` inside them is never misread.

A JSX candidate that fails to parse (e.g. a TypeScript generic ``<T,>``) is
kept as opaque text. Parsing never fails.
"""

import bisect
import re
from typing import List, Optional, Tuple, Union

from ui_switcheroo.core.jsx.nodes import (
  AttributeValue,
  CodeChunk,
  ExpressionContainer,
  ImportDeclaration,
  ImportSpecifier,
  JsxAttribute,
  JsxElement,
  JsxName,
  JsxSpreadAttribute,
  JsxText,
  Module,
  StringValue,
)

# Characters after which an expression (and therefore JSX or a regex) may start
_EXPR_START_PUNCT = frozenset("([{,=:?!&|;>")
_REGEX_START_PUNCT = frozenset("([{,=:?!&|;}+-*%<>~^")
_EXPR_KEYWORDS = frozenset({"return", "yield", "await", "case", "default", "else", "do", "in", "of", "typeof"})

# Marker stored as the previous significant token after a value (identifier, literal, ')')
_VALUE = "a"


class _JsxSyntaxError(Exception):
  """Internal backtracking signal. Never escapes `JsxParser.parse`."""


def _is_ident_start(ch: str) -> bool:
  return ch.isalpha() or ch in "_$"


def _is_ident_char(ch: str) -> bool:
  return ch.isalnum() or ch in "_$"


def _is_name_char(ch: str) -> bool:
  return _is_ident_char(ch) or ch == "-"


def _is_attr_name_char(ch: str) -> bool:
  return _is_name_char(ch) or ch == ":"


_NON_NEWLINE = re.compile(r"[^\n]")


def _blank(text: str) -> str:
  return _NON_NEWLINE.sub(" ", text)


def strip_literals(text: str) -> str:
  """
  Blanks comments, strings, template text and regex literals in code text.

  Identifier searches over the result only see real code.
  """
  return JsxParser(text).mask_literals()


class JsxParser:
  """
  Scans module text into a `Module` tree.

  Example:
      >>> module = JsxParser("import { Button } from 'react-bootstrap';").parse()
      >>> module.imports[0].source
      'react-bootstrap'
  """

  def __init__(self, text: str):
    self.text = text
    self.length = len(text)
    self._line_starts = [0]
    for idx, ch in enumerate(text):
      if ch == "\n":
        self._line_starts.append(idx + 1)

  def parse(self) -> Module:
    """
    Main entry point.

    Returns:
        Module: The parsed tree. Emitting it reproduces the input exactly.
    """
    body, _ = self._scan_code(0, in_braces=False)
    return Module(body=body)

  # --- Positions ---

  def _location(self, pos: int) -> Tuple[int, int]:
    line_idx = bisect.bisect_right(self._line_starts, pos) - 1
    return line_idx + 1, pos - self._line_starts[line_idx] + 1

  def _at_line_start(self, pos: int) -> bool:
    line_idx = bisect.bisect_right(self._line_starts, pos) - 1
    return self.text[self._line_starts[line_idx] : pos].strip() == ""

  # --- Code scanning ---

  def _scan_code(self, pos: int, in_braces: bool) -> Tuple[List[Union[CodeChunk, ImportDeclaration, JsxElement]], int]:
    """
    Scans opaque code, extracting imports (top level only) and JSX.

    Args:
        pos: Start offset.
        in_braces: If True, stops at the ``}`` closing the enclosing container.

    Returns:
        Tuple: The body segments and the offset where scanning stopped
        (the closing ``}`` when `in_braces`, else the end of text).
    """
    text = self.text
    n = self.length
    segments: List[Union[CodeChunk, ImportDeclaration, JsxElement]] = []
    chunk_start = pos
    depth = 0
    prev: Optional[str] = None
    i = pos

    def flush(end: int) -> None:
      if end > chunk_start:
        segments.append(CodeChunk(text[chunk_start:end]))

    while i < n:
      ch = text[i]
      nxt = text[i + 1] if i + 1 < n else ""

      if ch in "'\"":
        i = self._skip_string(i)
        prev = _VALUE
        continue

      if ch == "`":
        i = self._skip_template(i)
        prev = _VALUE
        continue

      if ch == "/" and nxt == "/":
        i = self._skip_line_comment(i)
        continue

      if ch == "/" and nxt == "*":
        i = self._skip_block_comment(i)
        continue

      if ch == "/" and (prev is None or prev in _REGEX_START_PUNCT or prev in _EXPR_KEYWORDS):
        end = self._skip_regex(i)
        if end is not None:
          i = end
          prev = _VALUE
          continue

      if ch == "{":
        depth += 1
        prev = "{"
        i += 1
        continue

      if ch == "}":
        if depth == 0 and in_braces:
          flush(i)
          return segments, i
        depth = max(0, depth - 1)
        prev = "}"
        i += 1
        continue

      if ch == "<" and (_is_ident_start(nxt) or nxt == ">"):
        if prev is None or prev in _EXPR_START_PUNCT or prev in _EXPR_KEYWORDS:
          element, end = self._try_parse_element(i)
          if element is not None:
            flush(i)
            segments.append(element)
            i = end
            chunk_start = i
            prev = _VALUE
            continue

      if _is_ident_start(ch):
        j = i
        while j < n and _is_ident_char(text[j]):
          j += 1
        word = text[i:j]

        if word == "import" and not in_braces and depth == 0 and (prev in (None, ";") or self._at_line_start(i)):
          decl, end = self._try_parse_import(i)
          if decl is not None:
            flush(i)
            segments.append(decl)
            i = end
            chunk_start = i
            prev = ";"
            continue

        prev = word if word in _EXPR_KEYWORDS else _VALUE
        i = j
        continue

      if ch.isdigit():
        j = i
        while j < n and (text[j].isalnum() or text[j] in "._"):
          j += 1
        prev = _VALUE
        i = j
        continue

      if ch.isspace():
        i += 1
        continue

      prev = _VALUE if ch in ")]" else ch
      i += 1

    flush(n)
    return segments, n

  def _skip_string(self, pos: int) -> int:
    quote = self.text[pos]
    j = pos + 1
    while j < self.length:
      c = self.text[j]
      if c == "\\":
        j += 2
        continue
      if c == quote:
        return j + 1
      if c == "\n":
        return j
      j += 1
    return self.length

  def _skip_template(self, pos: int) -> int:
    j = pos + 1
    while j < self.length:
      c = self.text[j]
      if c == "\\":
        j += 2
        continue
      if c == "`":
        return j + 1
      if c == "$" and self.text.startswith("{", j + 1):
        _, end = self._scan_code(j + 2, in_braces=True)
        j = end + 1
        continue
      j += 1
    return self.length

  def _skip_line_comment(self, pos: int) -> int:
    end = self.text.find("\n", pos)
    return self.length if end < 0 else end

  def _skip_block_comment(self, pos: int) -> int:
    end = self.text.find("*/", pos + 2)
    return self.length if end < 0 else end + 2

  def _skip_regex(self, pos: int) -> Optional[int]:
    """Skips a regex literal. Returns None if the ``/`` is not one (line ends first)."""
    j = pos + 1
    in_class = False
    while j < self.length:
      c = self.text[j]
      if c == "\n":
        return None
      if c == "\\":
        j += 2
        continue
      if in_class:
        if c == "]":
          in_class = False
      elif c == "[":
        in_class = True
      elif c == "/":
        j += 1
        while j < self.length and self.text[j].isalpha():
          j += 1
        return j
      j += 1
    return None

  def _skip_trivia(self, pos: int) -> int:
    """Skips whitespace and comments."""
    j = pos
    while j < self.length:
      if self.text[j].isspace():
        j += 1
      elif self.text.startswith("//", j):
        j = self._skip_line_comment(j)
      elif self.text.startswith("/*", j):
        j = self._skip_block_comment(j)
      else:
        break
    return j

  def _skip_ws(self, pos: int) -> int:
    j = pos
    while j < self.length and self.text[j].isspace():
      j += 1
    return j

  # --- Literal masking ---

  def mask_literals(self) -> str:
    """
    Returns the text with comments, string bodies, template text and regex
    literals replaced by spaces.

    Template substitutions (``${...}``) are code and are kept. Line breaks
    are preserved so offsets stay meaningful line-wise.
    """
    text = self.text
    n = self.length
    parts: List[str] = []
    start = 0
    prev: Optional[str] = None
    i = 0

    while i < n:
      ch = text[i]
      nxt = text[i + 1] if i + 1 < n else ""

      if ch in "'\"":
        end = self._skip_string(i)
        parts.append(text[start:i] + _blank(text[i:end]))
        i = start = end
        prev = _VALUE
        continue

      if ch == "`":
        masked, end = self._mask_template(i)
        parts.append(text[start:i] + masked)
        i = start = end
        prev = _VALUE
        continue

      if ch == "/" and nxt in ("/", "*"):
        end = self._skip_line_comment(i) if nxt == "/" else self._skip_block_comment(i)
        parts.append(text[start:i] + _blank(text[i:end]))
        i = start = end
        continue

      if ch == "/" and (prev is None or prev in _REGEX_START_PUNCT or prev in _EXPR_KEYWORDS):
        end = self._skip_regex(i)
        if end is not None:
          parts.append(text[start:i] + _blank(text[i:end]))
          i = start = end
          prev = _VALUE
          continue

      if _is_ident_start(ch):
        j = i
        while j < n and _is_ident_char(text[j]):
          j += 1
        word = text[i:j]
        prev = word if word in _EXPR_KEYWORDS else _VALUE
        i = j
        continue

      if ch.isdigit():
        j = i
        while j < n and (text[j].isalnum() or text[j] in "._"):
          j += 1
        prev = _VALUE
        i = j
        continue

      if not ch.isspace():
        prev = _VALUE if ch in ")]" else ch
      i += 1

    parts.append(text[start:])
    return "".join(parts)

  def _mask_template(self, pos: int) -> Tuple[str, int]:
    out = ["`"]
    j = pos + 1
    seg = j
    while j < self.length:
      c = self.text[j]
      if c == "\\":
        j += 2
        continue
      if c == "`":
        out.append(_blank(self.text[seg:j]) + "`")
        return "".join(out), j + 1
      if c == "$" and self.text.startswith("{", j + 1):
        out.append(_blank(self.text[seg:j]))
        _, end = self._scan_code(j + 2, in_braces=True)
        out.append("${" + JsxParser(self.text[j + 2 : end]).mask_literals() + self.text[end : end + 1])
        j = seg = end + 1
        continue
      j += 1
    out.append(_blank(self.text[seg:]))
    return "".join(out), self.length

  # --- Imports ---

  def _read_ident(self, pos: int) -> Tuple[str, int]:
    if pos >= self.length or not _is_ident_start(self.text[pos]):
      raise _JsxSyntaxError(f"Expected identifier at offset {pos}")
    j = pos
    while j < self.length and _is_ident_char(self.text[j]):
      j += 1
    return self.text[pos:j], j

  def _read_string(self, pos: int) -> Tuple[str, str, int]:
    if pos >= self.length or self.text[pos] not in "'\"":
      raise _JsxSyntaxError(f"Expected string at offset {pos}")
    quote = self.text[pos]
    end = self.text.find(quote, pos + 1)
    if end < 0 or "\n" in self.text[pos:end]:
      raise _JsxSyntaxError("Unterminated string")
    return self.text[pos + 1 : end], quote, end + 1

  def _peek_word(self, pos: int) -> str:
    if pos >= self.length or not _is_ident_start(self.text[pos]):
      return ""
    word, _ = self._read_ident(pos)
    return word

  def _try_parse_import(self, pos: int) -> Tuple[Optional[ImportDeclaration], int]:
    try:
      return self._parse_import(pos)
    except _JsxSyntaxError:
      return None, pos

  def _parse_import(self, pos: int) -> Tuple[ImportDeclaration, int]:
    """
    Parses ``import [type] [Default][, * as NS | { a, b as c }] from 'src'[;]``
    and ``import 'src'[;]``.
    """
    line, _ = self._location(pos)
    k = self._skip_trivia(pos + len("import"))
    if k >= self.length or self.text[k] in "(.":
      raise _JsxSyntaxError("Dynamic import")

    type_only = False
    if self._peek_word(k) == "type":
      after = self._skip_trivia(k + len("type"))
      if after < self.length and (self.text[after] in "{*" or self._peek_word(after) not in ("", "from")):
        type_only = True
        k = after

    specifiers: List[ImportSpecifier] = []

    if k < self.length and self.text[k] in "'\"":
      source, quote, k = self._read_string(k)
      return self._finish_import(pos, k, source, quote, specifiers, type_only, line)

    if _is_ident_start(self.text[k]) and self._peek_word(k) != "from":
      local, k = self._read_ident(k)
      specifiers.append(ImportSpecifier(imported="default", local=local))
      k = self._skip_trivia(k)
      if k < self.length and self.text[k] == ",":
        k = self._skip_trivia(k + 1)

    if k < self.length and self.text[k] == "*":
      k = self._skip_trivia(k + 1)
      if self._peek_word(k) != "as":
        raise _JsxSyntaxError("Expected 'as'")
      k = self._skip_trivia(k + 2)
      local, k = self._read_ident(k)
      specifiers.append(ImportSpecifier(imported="*", local=local))
      k = self._skip_trivia(k)
    elif k < self.length and self.text[k] == "{":
      k += 1
      while True:
        k = self._skip_trivia(k)
        if k >= self.length:
          raise _JsxSyntaxError("Unterminated import clause")
        if self.text[k] == "}":
          k += 1
          break
        imported, k = self._read_ident(k)
        k = self._skip_trivia(k)
        if imported == "type" and k < self.length and _is_ident_start(self.text[k]) and self._peek_word(k) != "as":
          # inline type modifier: { type Foo }
          raise _JsxSyntaxError("Inline type specifiers are carried verbatim")
        local = imported
        if self._peek_word(k) == "as":
          k = self._skip_trivia(k + 2)
          local, k = self._read_ident(k)
          k = self._skip_trivia(k)
        specifiers.append(ImportSpecifier(imported=imported, local=local))
        if k < self.length and self.text[k] == ",":
          k += 1
        elif k < self.length and self.text[k] == "}":
          continue
        else:
          raise _JsxSyntaxError("Malformed import clause")
      k = self._skip_trivia(k)

    if not specifiers:
      raise _JsxSyntaxError("Empty import clause")
    if self._peek_word(k) != "from":
      raise _JsxSyntaxError("Expected 'from'")
    k = self._skip_trivia(k + 4)
    source, quote, k = self._read_string(k)
    return self._finish_import(pos, k, source, quote, specifiers, type_only, line)

  def _finish_import(
    self,
    start: int,
    end: int,
    source: str,
    quote: str,
    specifiers: List[ImportSpecifier],
    type_only: bool,
    line: int,
  ) -> Tuple[ImportDeclaration, int]:
    semicolon = end < self.length and self.text[end] == ";"
    if semicolon:
      end += 1
    decl = ImportDeclaration(
      source=source,
      specifiers=specifiers,
      quote=quote,
      semicolon=semicolon,
      type_only=type_only,
      text=self.text[start:end],
      line=line,
    )
    return decl, end

  # --- JSX ---

  def _try_parse_element(self, pos: int) -> Tuple[Optional[JsxElement], int]:
    try:
      return self._parse_element(pos)
    except _JsxSyntaxError:
      return None, pos

  def _parse_name(self, pos: int) -> Tuple[JsxName, int]:
    if pos >= self.length or not _is_ident_start(self.text[pos]):
      raise _JsxSyntaxError(f"Expected tag name at offset {pos}")
    parts = []
    j = pos
    while True:
      start = j
      while j < self.length and _is_name_char(self.text[j]):
        j += 1
      parts.append(self.text[start:j])
      if j + 1 < self.length and self.text[j] == "." and _is_ident_start(self.text[j + 1]):
        j += 1
        continue
      break
    return JsxName(parts=parts), j

  def _parse_element(self, pos: int) -> Tuple[JsxElement, int]:
    line, column = self._location(pos)
    j = pos + 1

    if j < self.length and self.text[j] == ">":
      children, closing_leading, closing_trailing, end = self._parse_children(j + 1, None)
      fragment = JsxElement(
        name=None,
        children=children,
        closing_leading=closing_leading,
        closing_trailing=closing_trailing,
        line=line,
        column=column,
      )
      return fragment, end

    name, j = self._parse_name(j)
    attributes: List[Union[JsxAttribute, JsxSpreadAttribute]] = []

    while True:
      ws_start = j
      j = self._skip_trivia(j)
      leading = self.text[ws_start:j]
      if j >= self.length:
        raise _JsxSyntaxError("Unterminated opening tag")
      c = self.text[j]

      if c == "/":
        if not self.text.startswith("/>", j):
          raise _JsxSyntaxError("Expected '/>'")
        element = JsxElement(
          name=name,
          attributes=attributes,
          self_closing=True,
          before_close=leading,
          line=line,
          column=column,
        )
        return element, j + 2

      if c == ">":
        children, closing_leading, closing_trailing, end = self._parse_children(j + 1, name)
        element = JsxElement(
          name=name,
          attributes=attributes,
          children=children,
          before_close=leading,
          closing_leading=closing_leading,
          closing_trailing=closing_trailing,
          line=line,
          column=column,
        )
        return element, end

      if c == "{":
        container, j = self._parse_container(j)
        code = container.code_text()
        if code is None or not code.lstrip().startswith("..."):
          raise _JsxSyntaxError("Expected spread attribute")
        attributes.append(JsxSpreadAttribute(container=container, leading=leading))
        continue

      if not _is_ident_start(c):
        raise _JsxSyntaxError(f"Unexpected {c!r} in tag")

      start = j
      while j < self.length and _is_attr_name_char(self.text[j]):
        j += 1
      attr_name = self.text[start:j]

      k = self._skip_ws(j)
      if k < self.length and self.text[k] == "=":
        value_start = self._skip_ws(k + 1)
        separator = self.text[j:value_start]
        value, j = self._parse_attr_value(value_start)
        attributes.append(JsxAttribute(name=attr_name, value=value, leading=leading, separator=separator))
      else:
        attributes.append(JsxAttribute(name=attr_name, value=None, leading=leading))

  def _parse_attr_value(self, pos: int) -> Tuple[AttributeValue, int]:
    if pos >= self.length:
      raise _JsxSyntaxError("Missing attribute value")
    c = self.text[pos]
    if c in "'\"":
      end = self.text.find(c, pos + 1)
      if end < 0:
        raise _JsxSyntaxError("Unterminated attribute string")
      return StringValue(value=self.text[pos + 1 : end], quote=c), end + 1
    if c == "{":
      return self._parse_container(pos)
    if c == "<":
      return self._parse_element(pos)
    raise _JsxSyntaxError(f"Unexpected attribute value {c!r}")

  def _parse_container(self, pos: int) -> Tuple[ExpressionContainer, int]:
    body, end = self._scan_code(pos + 1, in_braces=True)
    if end >= self.length or self.text[end] != "}":
      raise _JsxSyntaxError("Unterminated expression container")
    return ExpressionContainer(body=body), end + 1

  def _parse_children(self, pos: int, name: Optional[JsxName]) -> Tuple[list, str, str, int]:
    """
    Parses children up to and including the matching closing tag.

    Returns:
        Tuple: (children, closing_leading, closing_trailing, offset after ``>``).
    """
    children: list = []
    j = pos
    while True:
      if j >= self.length:
        raise _JsxSyntaxError("Unterminated element")
      c = self.text[j]

      if c == "<":
        if self.text.startswith("</", j):
          k = j + 2
          name_start = self._skip_ws(k)
          closing_leading = self.text[k:name_start]
          if name is None:
            close_end = name_start
          else:
            closing_name, close_end = self._parse_name(name_start)
            if closing_name.dotted != name.dotted:
              raise _JsxSyntaxError(f"Mismatched closing tag {closing_name.dotted}")
          gt = self._skip_ws(close_end)
          closing_trailing = self.text[close_end:gt]
          if gt >= self.length or self.text[gt] != ">":
            raise _JsxSyntaxError("Expected '>' in closing tag")
          return children, closing_leading, closing_trailing, gt + 1

        child, j = self._parse_element(j)
        children.append(child)
        continue

      if c == "{":
        container, j = self._parse_container(j)
        children.append(container)
        continue

      k = j
      while k < self.length and self.text[k] not in "<{":
        k += 1
      children.append(JsxText(text=self.text[j:k]))
      j = k
