"""
Tests for the console proxy and logging helpers.

Verifies:
1. Logging output follows the console installed with `set_console`.
2. The custom SUCCESS level and the message prefixes.
3. Theme styles used in markup resolve on injected consoles.
"""

import io
import logging

import pytest
from rich.console import Console
from rich.logging import RichHandler

from ui_switcheroo.utils.console import (
  SUCCESS_LEVEL_NUM,
  console,
  get_console,
  log_error,
  log_success,
  log_warning,
  reset_console,
  set_console,
)


@pytest.fixture
def capture():
  rec = Console(file=io.StringIO(), record=True, width=200)
  set_console(rec)
  yield rec
  reset_console()


def test_logging_follows_console(capture):
  log_warning("Card.Link has no mapping")
  log_error("Input not found")
  text = capture.export_text()
  assert "⚠️  Card.Link has no mapping" in text
  assert "❌ Input not found" in text


def test_success_level(capture):
  assert logging.getLevelName(SUCCESS_LEVEL_NUM) == "SUCCESS"
  log_success("Migrated: [path]App.jsx[/path]")
  text = capture.export_text()
  assert "✅ Migrated: App.jsx" in text
  assert "[path]" not in text


def test_single_rich_handler(capture):
  set_console(Console(file=io.StringIO()))
  handlers = [h for h in logging.getLogger().handlers if isinstance(h, RichHandler)]
  assert len(handlers) == 1
  assert handlers[0].console is get_console()


def test_proxy_delegates_to_backend(capture):
  assert get_console() is capture
  console.print("[tag]Toolbar[/tag]")
  assert "Toolbar" in capture.export_text()
  assert console.width == 200


def test_reset_creates_fresh_backend(capture):
  reset_console()
  assert get_console() is not capture
