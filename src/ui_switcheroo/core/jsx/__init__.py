"""
JSX Front-End Package.

Provides the tree model, a tolerant module scanner and a lossless emitter.
The migration engine only consumes and mutates the tree; text enters and
leaves exclusively through `parse_module` and `emit_module`.
"""

from ui_switcheroo.core.jsx.emitter import JsxEmitter
from ui_switcheroo.core.jsx.nodes import (
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
from ui_switcheroo.core.jsx.parser import JsxParser, strip_literals


def parse_module(text: str) -> Module:
  """Parses module source text into a tree."""
  return JsxParser(text).parse()


def emit_module(module: Module) -> str:
  """Serializes a tree back into source text."""
  return JsxEmitter().emit(module)


__all__ = [
  "CodeChunk",
  "ExpressionContainer",
  "ImportDeclaration",
  "ImportSpecifier",
  "JsxAttribute",
  "JsxElement",
  "JsxEmitter",
  "JsxName",
  "JsxParser",
  "JsxSpreadAttribute",
  "JsxText",
  "Module",
  "StringValue",
  "emit_module",
  "parse_module",
  "strip_literals",
]
