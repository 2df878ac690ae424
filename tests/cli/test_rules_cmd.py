"""
Tests for the 'rules' command handler.
"""

import json

from ui_switcheroo.cli.handlers.rules import handle_rules


def test_validate_packaged_rules(recorded_console):
  assert handle_rules(validate_only=True) == 0
  assert "Rules valid" in recorded_console.export_text()


def test_list_rules(recorded_console):
  assert handle_rules() == 0
  text = recorded_console.export_text()
  assert "Migration Rules: react-bootstrap" in text
  assert "CardContent" in text
  assert "graft->DialogTitle.children" in text
  assert "wrap:Toolbar" in text


def test_invalid_overlay(tmp_path, recorded_console):
  overlay = tmp_path / "bad.json"
  overlay.write_text(json.dumps({"components": {"Button": {"target": "Button", "target_module": "@x/y"}}}), encoding="utf-8")
  assert handle_rules(validate_only=True, rule_paths=[overlay]) == 1
  assert "not declared in target_modules" in recorded_console.export_text()
