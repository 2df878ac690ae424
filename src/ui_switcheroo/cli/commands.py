"""
CLI Command Handlers Facade.

Re-exports handlers from `ui_switcheroo.cli.handlers` so the dispatcher and
tests have a single patch target.
"""

from ui_switcheroo.cli.handlers.audit import handle_audit
from ui_switcheroo.cli.handlers.convert import (
  handle_convert,
  _convert_single_file,
  _print_batch_summary,
)
from ui_switcheroo.cli.handlers.rules import handle_rules

__all__ = [
  "_convert_single_file",
  "_print_batch_summary",
  "handle_audit",
  "handle_convert",
  "handle_rules",
]
