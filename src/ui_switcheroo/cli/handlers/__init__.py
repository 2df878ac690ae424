from .audit import handle_audit
from .convert import handle_convert, _convert_single_file, _print_batch_summary
from .rules import handle_rules

__all__ = [
  "_convert_single_file",
  "_print_batch_summary",
  "handle_audit",
  "handle_convert",
  "handle_rules",
]
