"""
Tests for the Element Rewriter (pass 1): resolution, renaming, prop rules,
default attributes, class-to-style conversion and node state bookkeeping.

The import section is left as-is here; see the import synthesizer tests.
"""

import pytest

from ui_switcheroo.config import RuntimeConfig
from ui_switcheroo.core.aliases import build_alias_table
from ui_switcheroo.core.diagnostics import DiagnosticCollector
from ui_switcheroo.core.jsx import emit_module, parse_module
from ui_switcheroo.core.rewriter import ElementRewriter
from ui_switcheroo.enums import DiagnosticKind, NodeState, Severity

HEADER = "import { Button, Card, Col, Accordion } from 'react-bootstrap';\n"


def _rewrite(registry, body, header=HEADER, sink=None):
  module = parse_module(header + body)
  aliases = build_alias_table(module, "react-bootstrap")
  rewriter = ElementRewriter(registry, RuntimeConfig(), sink=sink)
  result = rewriter.rewrite(module, aliases)
  return rewriter, result, emit_module(module)[len(header) :]


def test_rename_props_and_defaults(registry):
  _, result, out = _rewrite(registry, 'const a = <Button variant="danger" size="sm" active>Go</Button>;\n')
  assert out == 'const a = <Button variant="contained" color="error" size="small">Go</Button>;\n'
  assert result.changed


def test_default_attributes_do_not_override(registry):
  _, _, out = _rewrite(registry, 'const a = <Button color="secondary" />;\n')
  assert out == 'const a = <Button color="secondary" variant="contained" />;\n'


def test_aliased_and_namespace_tags(registry):
  header = "import { Button as BsButton } from 'react-bootstrap';\nimport * as RB from 'react-bootstrap';\n"
  body = "const a = <BsButton size='lg'>A</BsButton>;\nconst b = <RB.Card.Body>B</RB.Card.Body>;\n"
  rewriter, _, out = _rewrite(registry, body, header=header)
  assert out == (
    'const a = <Button size="large" variant="contained" color="primary">A</Button>;\n'
    "const b = <CardContent>B</CardContent>;\n"
  )
  assert rewriter.summary.migrated_locals == {"BsButton", "RB"}
  assert rewriter.summary.required_symbols == {"@mui/material": ["Button", "CardContent"]}


def test_local_elements_untouched(registry):
  body = 'const a = <div className="mt-3"><Widget size="sm" /></div>;\n'
  rewriter, result, out = _rewrite(registry, body)
  assert out == body
  assert not result.changed
  assert all(r.outcome == NodeState.UNTOUCHED for r in rewriter.records)
  assert all(r.state == NodeState.DONE for r in rewriter.records)


def test_unmapped_component_is_reported(registry):
  collector = DiagnosticCollector()
  body = "const a = <Accordion><Card.Link href='#'>x</Card.Link></Accordion>;\n"
  rewriter, result, out = _rewrite(registry, body, sink=collector)

  assert out == body
  assert not result.changed
  kinds = [d.kind for d in result.diagnostics]
  assert kinds == [DiagnosticKind.UNMAPPED_COMPONENT, DiagnosticKind.UNMAPPED_SUB_COMPONENT]
  assert result.diagnostics[0].canonical_name == "Accordion"
  assert result.diagnostics[1].canonical_name == "Card.Link"
  assert (result.diagnostics[0].line, result.diagnostics[0].column) == (2, 11)
  assert len(collector) == 2
  assert rewriter.summary.referenced_locals == {"Accordion", "Card"}


def test_dynamic_prop_value_kept(registry):
  _, result, out = _rewrite(registry, "const a = <Button size={size} />;\n")
  assert out == 'const a = <Button size={size} variant="contained" color="primary" />;\n'
  diag = result.diagnostics[0]
  assert diag.kind == DiagnosticKind.DYNAMIC_VALUE_SKIPPED
  assert diag.severity == Severity.INFO


def test_class_tokens_become_style_entries(registry):
  _, _, out = _rewrite(registry, 'const a = <Button className="mt-2 d-flex custom">Go</Button>;\n')
  assert out == (
    'const a = <Button className="custom" variant="contained" color="primary" '
    "sx={{ mt: 2, display: 'flex' }}>Go</Button>;\n"
  )


def test_fully_consumed_class_is_removed_and_existing_style_wins(registry):
  _, _, out = _rewrite(registry, "const a = <Card className='m-2 text-danger' sx={{ color: 'red' }}>x</Card>;\n")
  assert out == "const a = <Card sx={{ color: 'red', m: 2 }}>x</Card>;\n"


def test_class_prop_rules(registry):
  _, _, out = _rewrite(registry, 'const a = <Col className="col-md-6 text-center">x</Col>;\n')
  assert out == "const a = <Grid item md={6} sx={{ textAlign: 'center' }}>x</Grid>;\n"


def test_button_classes_become_props(registry):
  _, _, out = _rewrite(registry, 'const a = <Button className="btn btn-outline-danger btn-sm">Go</Button>;\n')
  assert out == 'const a = <Button variant="outlined" color="error" size="small">Go</Button>;\n'


def test_button_props_win_over_button_classes(registry):
  _, _, out = _rewrite(registry, 'const a = <Button variant="success" className="btn-danger btn-lg">Go</Button>;\n')
  assert out == 'const a = <Button variant="contained" color="success" size="large">Go</Button>;\n'


def test_button_block_class(registry):
  _, _, out = _rewrite(registry, 'const a = <Button className="btn-primary btn-block mt-2">Go</Button>;\n')
  assert out == "const a = <Button variant=\"contained\" color=\"primary\" fullWidth sx={{ mt: 2 }}>Go</Button>;\n"


WIDGETS = "import { Nav, Form, InputGroup, Dropdown, Tabs, Tab } from 'react-bootstrap';\n"


@pytest.mark.parametrize(
  "body, expected",
  [
    (
      '<Nav activeKey={key} onSelect={setKey}><Nav.Item><Nav.Link eventKey="home">Home</Nav.Link></Nav.Item></Nav>;\n',
      '<Tabs value={key} onChange={setKey}><Tab value="home" label="Home" /></Tabs>;\n',
    ),
    (
      '<Form.Check type="checkbox" label="Remember me" />;\n',
      '<Checkbox aria-label="Remember me" />;\n',
    ),
    (
      '<InputGroup className="mb-3"><InputGroup.Text>@</InputGroup.Text></InputGroup>;\n',
      "<Box sx={{ display: 'flex', alignItems: 'stretch', mb: 3 }}>"
      '<InputAdornment position="start">@</InputAdornment></Box>;\n',
    ),
    (
      '<Dropdown><Dropdown.Toggle variant="success">Menu</Dropdown.Toggle>'
      '<Dropdown.Menu><Dropdown.Item href="#a">A</Dropdown.Item><Dropdown.Divider /></Dropdown.Menu></Dropdown>;\n',
      '<Box><Button variant="contained" color="success">Menu</Button>'
      '<Menu><MenuItem href="#a">A</MenuItem><Divider /></Menu></Box>;\n',
    ),
    (
      '<Tabs activeKey={key} onSelect={setKey}><Tab eventKey="a" title="A">Body</Tab></Tabs>;\n',
      '<Tabs value={key} onChange={setKey}><Tab value="a" label="A">Body</Tab></Tabs>;\n',
    ),
  ],
)
def test_navigation_and_form_widgets(registry, body, expected):
  _, result, out = _rewrite(registry, body, header=WIDGETS)
  assert out == expected
  assert result.diagnostics == []


@pytest.mark.parametrize(
  "body",
  [
    "const a = <Card className={cls}>x</Card>;\n",
    "const a = <Card className=\"m-2\" sx={{ ...base }}>x</Card>;\n",
    "const a = <Card className=\"m-2\" sx={styles.card}>x</Card>;\n",
  ],
)
def test_classes_kept_when_not_statically_mergeable(registry, body):
  _, result, out = _rewrite(registry, body)
  assert out == body
  assert DiagnosticKind.DYNAMIC_VALUE_SKIPPED in [d.kind for d in result.diagnostics]
  assert result.changed


def test_unknown_classes_leave_class_attribute_untouched(registry):
  body = "const a = <Card className='  shadow-xl  fancy '>x</Card>;\n"
  _, _, out = _rewrite(registry, body)
  assert out == body


def test_records_follow_state_machine(registry):
  rewriter, _, _ = _rewrite(registry, "const a = <Card><Card.Body>x</Card.Body><span /></Card>;\n")
  outcomes = [(r.element.name.dotted, r.outcome) for r in rewriter.records]
  assert outcomes == [
    ("Card", NodeState.RENAMED),
    ("CardContent", NodeState.RENAMED),
    ("span", NodeState.UNTOUCHED),
  ]


def test_empty_alias_table_short_circuits(registry):
  module = parse_module("const a = <Button />;\n")
  rewriter = ElementRewriter(registry)
  result = rewriter.rewrite(module, build_alias_table(module, "react-bootstrap"))
  assert not result.changed
  assert rewriter.records == []
