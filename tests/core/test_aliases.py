"""
Tests for Alias Resolution.

Verifies that only bindings imported from the source library resolve, under
whatever local name they were given.
"""

import pytest

from ui_switcheroo.config import DEFAULT_STYLESHEETS
from ui_switcheroo.core.aliases import build_alias_table, matches_library
from ui_switcheroo.core.jsx import parse_module
from ui_switcheroo.core.jsx.nodes import JsxName

IMPORTS = """import { Button as BsButton, Card } from 'react-bootstrap';
import Modal from 'react-bootstrap/Modal';
import * as RB from 'react-bootstrap';
import type { ButtonProps } from 'react-bootstrap';
import { Button } from './ui';
import 'bootstrap/dist/css/bootstrap.min.css';
import './app.css';
"""


@pytest.fixture
def table():
  return build_alias_table(parse_module(IMPORTS), "react-bootstrap", DEFAULT_STYLESHEETS)


def test_entries(table):
  assert set(table) == {"BsButton", "Card", "Modal", "RB"}
  assert table["BsButton"].canonical_name == "Button"
  assert table["Modal"].canonical_name == "Modal"
  assert table["Modal"].origin_library == "react-bootstrap/Modal"
  assert table["RB"].canonical_name == "*"


def test_import_bookkeeping(table):
  assert [d.source for d in table.source_imports] == ["react-bootstrap", "react-bootstrap/Modal", "react-bootstrap"]
  assert [d.source for d in table.stylesheet_imports] == ["bootstrap/dist/css/bootstrap.min.css"]


@pytest.mark.parametrize(
  "parts, canonical, local_root",
  [
    (["BsButton"], "Button", "BsButton"),
    (["Card", "Body"], "Card.Body", "Card"),
    (["Modal", "Title"], "Modal.Title", "Modal"),
    (["RB", "Button"], "Button", "RB"),
    (["RB", "Card", "Body"], "Card.Body", "RB"),
  ],
)
def test_resolve(table, parts, canonical, local_root):
  ref = table.resolve(JsxName(parts=parts))
  assert ref is not None
  assert ref.canonical_name == canonical
  assert ref.local_root == local_root


@pytest.mark.parametrize("parts", [["Button"], ["RB"], ["div"], ["ButtonProps"]])
def test_unresolved(table, parts):
  assert table.resolve(JsxName(parts=parts)) is None


def test_table_is_read_only(table):
  with pytest.raises(TypeError):
    table["Other"] = table["Card"]


def test_no_source_imports_gives_empty_table():
  table = build_alias_table(parse_module("import { Button } from './Button';\n"), "react-bootstrap")
  assert len(table) == 0
  assert table.source_imports == ()


def test_matches_library():
  assert matches_library("react-bootstrap", "react-bootstrap")
  assert matches_library("react-bootstrap/Button", "react-bootstrap")
  assert not matches_library("react-bootstrap-icons", "react-bootstrap")
