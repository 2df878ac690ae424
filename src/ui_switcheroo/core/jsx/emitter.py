"""
JSX Module Emitter.

Serializes a `Module` tree back into source text. Nodes carrying their original
formatting are reproduced exactly; edited import declarations (``text is None``)
are regenerated in a canonical ``import { A, B } from 'src';`` form.
"""

from typing import List

from ui_switcheroo.core.jsx.nodes import (
  CodeChunk,
  ExpressionContainer,
  ImportDeclaration,
  JsxAttribute,
  JsxElement,
  JsxNode,
  JsxSpreadAttribute,
  JsxText,
  Module,
  StringValue,
)


class JsxEmitter:
  """
  Converts tree nodes to source text.
  """

  def emit(self, node: JsxNode) -> str:
    """
    Serializes any node.

    Args:
        node: The node (usually a `Module`).

    Returns:
        str: Source text.

    Raises:
        TypeError: If the node type is unknown.
    """
    parts: List[str] = []
    self._emit_into(node, parts)
    return "".join(parts)

  def _emit_into(self, node: JsxNode, out: List[str]) -> None:
    if isinstance(node, Module):
      for item in node.body:
        self._emit_into(item, out)
    elif isinstance(node, CodeChunk):
      out.append(node.text)
    elif isinstance(node, JsxText):
      out.append(node.text)
    elif isinstance(node, ImportDeclaration):
      out.append(node.text if node.text is not None else self.render_import(node))
    elif isinstance(node, StringValue):
      out.append(f"{node.quote}{node.value}{node.quote}")
    elif isinstance(node, ExpressionContainer):
      out.append("{")
      for item in node.body:
        self._emit_into(item, out)
      out.append("}")
    elif isinstance(node, JsxAttribute):
      out.append(node.leading)
      out.append(node.name)
      if node.value is not None:
        out.append(node.separator)
        self._emit_into(node.value, out)
    elif isinstance(node, JsxSpreadAttribute):
      out.append(node.leading)
      self._emit_into(node.container, out)
    elif isinstance(node, JsxElement):
      self._emit_element(node, out)
    else:
      raise TypeError(f"Cannot emit node of type {type(node).__name__}")

  def _emit_element(self, node: JsxElement, out: List[str]) -> None:
    name = node.name.dotted if node.name is not None else ""
    out.append(f"<{name}")
    for attr in node.attributes:
      self._emit_into(attr, out)
    out.append(node.before_close)
    if node.self_closing:
      out.append("/>")
      return
    out.append(">")
    for child in node.children:
      self._emit_into(child, out)
    out.append(f"</{node.closing_leading}{name}{node.closing_trailing}>")

  @staticmethod
  def render_import(decl: ImportDeclaration) -> str:
    """
    Renders an import declaration from its structured fields.

    Args:
        decl: The declaration.

    Returns:
        str: e.g. ``import Foo, { A, B as C } from '@mui/material';``
    """
    q = decl.quote
    end = ";" if decl.semicolon else ""
    if not decl.specifiers:
      return f"import {q}{decl.source}{q}{end}"

    clauses = []
    named = []
    for spec in decl.specifiers:
      if spec.is_default:
        clauses.insert(0, spec.local)
      elif spec.is_namespace:
        clauses.append(f"* as {spec.local}")
      elif spec.imported == spec.local:
        named.append(spec.imported)
      else:
        named.append(f"{spec.imported} as {spec.local}")
    if named:
      clauses.append("{ " + ", ".join(named) + " }")

    prefix = "import type " if decl.type_only else "import "
    return f"{prefix}{', '.join(clauses)} from {q}{decl.source}{q}{end}"
