"""
Tests for the JSX Module Scanner.

Verifies:
1.  Lossless round trip: emitting a parsed module reproduces the input.
2.  Import forms (default, named, aliased, namespace, type-only, side-effect).
3.  JSX recognition in expression position only (not comparisons, generics,
    strings, comments or regex literals).
4.  Backtracking on malformed JSX keeps the text opaque.
5.  Literal masking for identifier searches.
"""

import pytest

from ui_switcheroo.core.jsx import emit_module, parse_module, strip_literals
from ui_switcheroo.core.jsx.nodes import (
  ExpressionContainer,
  ImportDeclaration,
  JsxElement,
  JsxSpreadAttribute,
  JsxText,
  StringValue,
  iter_child_elements,
)

APP_SOURCE = """import React, { useState } from 'react';
import { Button as BsButton, Card } from "react-bootstrap"
import type { Props } from './types';
import 'bootstrap/dist/css/bootstrap.min.css';

// a < b comment mentioning import x from 'y'
const re = /<div>/g;
const s = "<Button>";
const t = `import ${x} <Card>`;

export function App({ items }: Props) {
  const [open, setOpen] = useState<boolean>(false);
  if (items.length < 3) return null;
  return (
    <>
      <BsButton variant="primary" onClick={() => setOpen(!open)} {...rest}>
        Toggle
      </BsButton>
      {open && <Card.Body className='mt-3'>{items.map((i) => <span key={i}>{i}</span>)}</Card.Body>}
    </>
  );
}
"""


def _all_elements(node):
  for element in iter_child_elements(node):
    yield element
    yield from _all_elements(element)


def test_round_trip_is_lossless():
  assert emit_module(parse_module(APP_SOURCE)) == APP_SOURCE


@pytest.mark.parametrize(
  "code",
  [
    "",
    "const x = 1;\n",
    "const f = <T,>(x: T) => x;\n",
    "const a = <Foo><Bar></Foo>;\n",
    "const c = a < b && b > c;\n",
    "const el = <Foo\n  bar='1'\n  /* note */ baz\n/>;\n",
    "const m = import('./lazy');\n",
    "const s = 'unterminated\n<Foo />;\n",
  ],
)
def test_round_trip_edge_cases(code):
  assert emit_module(parse_module(code)) == code


def test_import_forms():
  module = parse_module(APP_SOURCE)
  imports = module.imports

  assert [d.source for d in imports] == ["react", "react-bootstrap", "./types", "bootstrap/dist/css/bootstrap.min.css"]

  react = imports[0]
  assert [(s.imported, s.local) for s in react.specifiers] == [("default", "React"), ("useState", "useState")]

  rb = imports[1]
  assert rb.quote == '"'
  assert rb.semicolon is False
  assert [(s.imported, s.local) for s in rb.specifiers] == [("Button", "BsButton"), ("Card", "Card")]
  assert rb.line == 2

  assert imports[2].type_only is True
  assert imports[3].specifiers == []


def test_namespace_import():
  module = parse_module("import * as RB from 'react-bootstrap';\n")
  spec = module.imports[0].specifiers[0]
  assert spec.is_namespace
  assert spec.local == "RB"


def test_imports_inside_strings_and_dynamic_imports_are_opaque():
  code = "const s = \"import x from 'y'\";\nconst m = import('./x');\nimport('./y');\n"
  assert parse_module(code).imports == []


def test_inline_type_specifier_kept_verbatim():
  code = "import { type Foo, Bar } from 'lib';\n"
  module = parse_module(code)
  assert module.imports == []
  assert emit_module(module) == code


def test_jsx_structure():
  module = parse_module(APP_SOURCE)
  fragment = next(item for item in module.body if isinstance(item, JsxElement))
  assert fragment.is_fragment

  button = next(iter_child_elements(fragment))
  assert button.name.dotted == "BsButton"
  assert button.attribute_names() == ["variant", "onClick"]
  assert isinstance(button.attributes[0].value, StringValue)
  assert isinstance(button.attributes[1].value, ExpressionContainer)
  assert isinstance(button.attributes[2], JsxSpreadAttribute)
  assert isinstance(button.children[0], JsxText)

  names = [e.name.dotted for e in _all_elements(fragment)]
  assert names == ["BsButton", "Card.Body", "span"]

  card_body = [e for e in _all_elements(fragment) if e.name.dotted == "Card.Body"][0]
  class_attr = card_body.find_attribute("className")
  assert class_attr.value.value == "mt-3"
  assert class_attr.value.quote == "'"


def test_comparisons_and_generics_are_not_jsx():
  code = "const ok = a < b;\nconst s = useState<boolean>(false);\nconst f = <T,>(x: T) => x;\n"
  module = parse_module(code)
  assert not any(isinstance(item, JsxElement) for item in module.body)


def test_malformed_jsx_backtracks():
  module = parse_module("const a = <Foo><Bar></Foo>;\n")
  assert not any(isinstance(item, JsxElement) for item in module.body)


def test_element_location():
  module = parse_module("const a = 1;\nconst b = <Foo />;\n")
  element = next(item for item in module.body if isinstance(item, JsxElement))
  assert (element.line, element.column) == (2, 11)
  assert element.self_closing
  assert element.before_close == " "


def test_find_attribute_returns_last_occurrence():
  module = parse_module('const a = <Foo size="sm" size="lg" />;')
  element = next(item for item in module.body if isinstance(item, JsxElement))
  assert element.find_attribute("size").value.value == "lg"


def test_non_import_declarations_are_untouched():
  module = parse_module("export { Button } from 'react-bootstrap';\n")
  assert module.imports == []
  assert not any(isinstance(item, ImportDeclaration) for item in module.body)


def test_strip_literals_keeps_only_code():
  code = 'a(/* B */ "B", `t ${B} u`, /B/g); // B\nB'
  masked = strip_literals(code)
  assert len(masked) == len(code)
  assert masked.count("B") == 2
  assert "${B}" in masked
  assert masked.endswith("\nB")


def test_strip_literals_leaves_division_alone():
  assert strip_literals("x = a / b / c;") == "x = a / b / c;"
  assert strip_literals("const n = (total) / 2; // B") == "const n = (total) / 2;     "
