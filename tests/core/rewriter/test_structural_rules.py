"""
Tests for the structural pass (graft, wrap, lift).
"""

import pytest

from ui_switcheroo.config import RuntimeConfig
from ui_switcheroo.core.aliases import build_alias_table
from ui_switcheroo.core.jsx import emit_module, parse_module
from ui_switcheroo.core.rewriter import ElementRewriter
from ui_switcheroo.core.rewriter.structure import children_as_value
from ui_switcheroo.core.jsx.nodes import ExpressionContainer, JsxElement, JsxName, JsxText, StringValue
from ui_switcheroo.enums import DiagnosticKind, NodeState
from ui_switcheroo.semantics.registry import RuleRegistry

HEADER = "import { Modal, Card, Navbar } from 'react-bootstrap';\n"

MODAL = """const m = (
  <Modal show={open} onHide={close}>
    <Modal.Header closeButton>
      <Modal.Title>Hello</Modal.Title>
    </Modal.Header>
    <Modal.Body>Body</Modal.Body>
  </Modal>
);
"""


def _rewrite(registry, body):
  module = parse_module(HEADER + body)
  rewriter = ElementRewriter(registry, RuntimeConfig())
  result = rewriter.rewrite(module, build_alias_table(module, "react-bootstrap"))
  return rewriter, result, emit_module(module)[len(HEADER) :]


def test_graft_into_parent_children(registry):
  rewriter, result, out = _rewrite(registry, MODAL)
  assert out == """const m = (
  <Dialog open={open} onClose={close}>
    <DialogTitle>
      Hello
    </DialogTitle>
    <DialogContent>Body</DialogContent>
  </Dialog>
);
"""
  assert result.diagnostics == []
  title = [r for r in rewriter.records if r.reference and r.reference.canonical_name == "Modal.Title"][0]
  assert title.outcome == NodeState.RESTRUCTURED
  assert rewriter.summary.required_symbols == {"@mui/material": ["Dialog", "DialogTitle", "DialogContent"]}


def test_graft_without_expected_parent(registry):
  body = "const m = <Modal><Modal.Title>Hi</Modal.Title></Modal>;\n"
  rewriter, result, out = _rewrite(registry, body)
  assert out == "const m = <Dialog><Modal.Title>Hi</Modal.Title></Dialog>;\n"
  assert [d.kind for d in result.diagnostics] == [DiagnosticKind.STRUCTURAL_TARGET_MISSING]
  assert "expects parent DialogTitle" in result.diagnostics[0].message
  assert "Modal" in rewriter.summary.referenced_locals


def test_graft_outside_children_list(registry):
  body = "const m = <Modal.Header>{show && <Modal.Title>Hi</Modal.Title>}</Modal.Header>;\n"
  _, result, out = _rewrite(registry, body)
  assert out == "const m = <DialogTitle>{show && <Modal.Title>Hi</Modal.Title>}</DialogTitle>;\n"
  assert result.diagnostics[0].kind == DiagnosticKind.STRUCTURAL_TARGET_MISSING


def _slot_registry():
  return RuleRegistry.from_data(
    {
      "target_modules": ["@mui/material"],
      "default_target_module": "@mui/material",
      "components": {"Card": {"target": "Card"}},
      "sub_components": {
        "Card": {
          "Header": {"target": "CardHeader"},
          "Title": {"structural": [{"kind": "graft", "slot": "title", "parent": "CardHeader"}]},
        }
      },
    }
  )


def test_graft_into_attribute_slot():
  module = parse_module("import { Card } from 'react-bootstrap';\n<Card.Header>\n  <Card.Title>Hi</Card.Title>\n</Card.Header>;\n")
  ElementRewriter(_slot_registry()).rewrite(module, build_alias_table(module, "react-bootstrap"))
  assert emit_module(module) == (
    "import { Card } from 'react-bootstrap';\n<CardHeader title=\"Hi\">\n  \n</CardHeader>;\n"
  )


@pytest.mark.parametrize("title", ["<Card.Title />", "<Card.Title>  </Card.Title>"])
def test_empty_graft_into_attribute_slot_is_skipped(title):
  code = f"import {{ Card }} from 'react-bootstrap';\nconst h = <Card.Header>{title}</Card.Header>;\n"
  module = parse_module(code)
  rewriter = ElementRewriter(_slot_registry())
  result = rewriter.rewrite(module, build_alias_table(module, "react-bootstrap"))
  assert emit_module(module) == code.replace("<Card.Header>", "<CardHeader>").replace("</Card.Header>", "</CardHeader>")
  assert [d.kind for d in result.diagnostics] == [DiagnosticKind.STRUCTURAL_TARGET_MISSING]
  assert "no content for slot 'title'" in result.diagnostics[0].message
  assert "Card" in rewriter.summary.referenced_locals


def test_graft_into_attribute_slot_refuses_own_attributes():
  code = "import { Card } from 'react-bootstrap';\nconst h = <Card.Header><Card.Title id=\"t\">Hi</Card.Title></Card.Header>;\n"
  module = parse_module(code)
  result = ElementRewriter(_slot_registry()).rewrite(module, build_alias_table(module, "react-bootstrap"))
  assert '<CardHeader><Card.Title id="t">Hi</Card.Title></CardHeader>' in emit_module(module)
  assert [d.kind for d in result.diagnostics] == [DiagnosticKind.STRUCTURAL_TARGET_MISSING]


def test_graft_carries_attributes_to_parent(registry):
  body = 'const m = <Modal><Modal.Header><Modal.Title id="dlg-title" className="text-danger">Hi</Modal.Title></Modal.Header></Modal>;\n'
  rewriter, result, out = _rewrite(registry, body)
  assert out == "const m = <Dialog><DialogTitle id=\"dlg-title\" sx={{ color: 'error.main' }}>Hi</DialogTitle></Dialog>;\n"
  assert result.diagnostics == []
  title = [r for r in rewriter.records if r.reference and r.reference.canonical_name == "Modal.Title"][0]
  assert title.outcome == NodeState.RESTRUCTURED


def test_graft_classes_merge_into_parent_style(registry):
  body = '<Modal.Header className="p-2"><Modal.Title className="text-danger">Hi</Modal.Title></Modal.Header>;\n'
  _, _, out = _rewrite(registry, body)
  assert out == "<DialogTitle sx={{ p: 2, color: 'error.main' }}>Hi</DialogTitle>;\n"


def test_graft_with_clashing_attribute_is_refused(registry):
  body = '<Modal.Header id="a"><Modal.Title id="b">Hi</Modal.Title></Modal.Header>;\n'
  rewriter, result, out = _rewrite(registry, body)
  assert out == '<DialogTitle id="a"><Modal.Title id="b">Hi</Modal.Title></DialogTitle>;\n'
  assert [d.kind for d in result.diagnostics] == [DiagnosticKind.STRUCTURAL_TARGET_MISSING]
  assert "id" in result.diagnostics[0].message
  assert "Modal" in rewriter.summary.referenced_locals


def test_lift_children_into_attribute(registry):
  _, _, out = _rewrite(registry, "const h = <Card.Header>Featured</Card.Header>;\n")
  assert out == 'const h = <CardHeader title="Featured" />;\n'


def test_lift_element_child(registry):
  _, _, out = _rewrite(registry, "const h = <Card.Header><b>Hi</b></Card.Header>;\n")
  assert out == "const h = <CardHeader title={<b>Hi</b>} />;\n"


def test_lift_with_occupied_slot(registry):
  rewriter, result, out = _rewrite(registry, 'const h = <Card.Header title="x">Featured</Card.Header>;\n')
  assert out == 'const h = <CardHeader title="x">Featured</CardHeader>;\n'
  assert result.diagnostics[0].kind == DiagnosticKind.STRUCTURAL_TARGET_MISSING
  assert rewriter.records[0].outcome == NodeState.RENAMED


def test_lift_on_empty_element_is_noop(registry):
  _, result, out = _rewrite(registry, "const h = <Card.Header />;\n")
  assert out == "const h = <CardHeader />;\n"
  assert result.diagnostics == []


def test_wrap_children(registry):
  rewriter, _, out = _rewrite(registry, 'const n = <Navbar bg="dark" expand="lg"><Navbar.Brand>Logo</Navbar.Brand></Navbar>;\n')
  assert out == (
    'const n = <AppBar position="static"><Toolbar><Typography variant="h6" component="div">Logo</Typography>'
    "</Toolbar></AppBar>;\n"
  )
  assert rewriter.summary.required_symbols == {"@mui/material": ["AppBar", "Typography", "Toolbar"]}
  assert rewriter.records[0].outcome == NodeState.RESTRUCTURED


def test_wrap_skips_self_closing(registry):
  _, _, out = _rewrite(registry, 'const n = <Navbar fixed="top" />;\n')
  assert out == 'const n = <AppBar position="fixed" />;\n'


def test_children_as_value():
  assert children_as_value([JsxText("\n  ")]) is None

  text = children_as_value([JsxText("\n  Hello\n  world  ")])
  assert isinstance(text, StringValue) and text.value == "Hello world"

  container = ExpressionContainer.from_code("label")
  assert children_as_value([JsxText(" "), container]) is container

  mixed = children_as_value([JsxText("Hi "), JsxElement(name=JsxName(parts=["b"]), children=[JsxText("x")])])
  assert isinstance(mixed, ExpressionContainer)
  assert mixed.body[0].is_fragment
