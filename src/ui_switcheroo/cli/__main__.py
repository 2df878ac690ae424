"""
Main Entry Point for ui-switcheroo CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `ui_switcheroo.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from ui_switcheroo.cli import commands
from ui_switcheroo import __version__


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="ui-switcheroo: react-bootstrap to MUI migration")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: CONVERT ---
  cmd_conv = subparsers.add_parser("convert", help="Migrate a JSX/TSX file or directory")
  cmd_conv.add_argument("path", type=Path, help="Input source file or directory")
  cmd_conv.add_argument("--out", type=Path, help="Output destination (file or dir)")
  cmd_conv.add_argument("--source", default=None, help="Source library import name (default: from toml)")
  cmd_conv.add_argument(
    "--strict",
    action="store_true",
    default=None,
    help="Fail on unmapped components instead of leaving them untouched (Overrides config)",
  )
  cmd_conv.add_argument(
    "--rules",
    type=Path,
    nargs="+",
    default=None,
    help="Extra rule JSON files applied after the packaged rules",
  )
  cmd_conv.add_argument(
    "--json-trace", type=Path, default=None, help="Dump full execution trace (phases, matches, imports) to a JSON file."
  )

  # --- Command: AUDIT ---
  cmd_audit = subparsers.add_parser("audit", help="Report which source-library components have rules")
  cmd_audit.add_argument("path", type=Path, help="Input source file or directory")
  cmd_audit.add_argument("--json", action="store_true", help="Print the report as JSON")

  # --- Command: RULES ---
  cmd_rules = subparsers.add_parser("rules", help="List the loaded migration rules")
  cmd_rules.add_argument("--validate", action="store_true", help="Only validate the rule files")
  cmd_rules.add_argument("--rules", type=Path, nargs="+", default=None, help="Extra rule JSON files to load")

  args = parser.parse_args(argv)

  if args.command == "convert":
    return commands.handle_convert(args.path, args.out, args.source, args.strict, args.rules, args.json_trace)

  elif args.command == "audit":
    return commands.handle_audit(args.path, args.json)

  elif args.command == "rules":
    return commands.handle_rules(args.validate, args.rules)

  return 1


if __name__ == "__main__":
  sys.exit(main())
