"""
Audit Command Handler.

Scans source files for components imported from the source library and
reports which of them the rule registry can migrate.
"""

import json
from pathlib import Path
from typing import Dict, Iterator, List, Union

from rich.table import Table

from ui_switcheroo.cli.handlers.convert import discover_sources
from ui_switcheroo.config import RuntimeConfig
from ui_switcheroo.core.aliases import build_alias_table
from ui_switcheroo.core.jsx import parse_module
from ui_switcheroo.core.jsx.nodes import ExpressionContainer, JsxElement, Module, iter_child_elements
from ui_switcheroo.semantics.registry import RuleRegistry, RuleRegistryValidationError, get_default_registry
from ui_switcheroo.utils.console import console, log_error, log_info


def _walk(node: Union[Module, JsxElement, ExpressionContainer]) -> Iterator[JsxElement]:
  for element in iter_child_elements(node):
    yield element
    yield from _walk(element)


def scan_usage(code: str, registry: RuleRegistry, config: RuntimeConfig) -> Dict[str, bool]:
  """
  Lists the source-library components used in one module.

  Args:
      code: Module text.
      registry: Rules to check against.
      config: Source library and stylesheet settings.

  Returns:
      Dict[str, bool]: Canonical name -> whether a rule exists.
  """
  module = parse_module(code)
  aliases = build_alias_table(module, config.source_library, config.stylesheet_sources)
  found: Dict[str, bool] = {}
  if len(aliases) == 0:
    return found

  for element in _walk(module):
    if element.name is None:
      continue
    reference = aliases.resolve(element.name)
    if reference is None:
      continue
    if reference.child is None:
      rule = registry.lookup_component(reference.component)
    else:
      rule = registry.lookup_sub_component(reference.component, reference.child)
    found[reference.canonical_name] = rule is not None
  return found


def handle_audit(path: Path, json_mode: bool = False) -> int:
  """
  Scans a directory/file to determine rule coverage.

  Args:
      path: Input source file or directory.
      json_mode: If True, output JSON to stdout and suppress Rich logs.

  Returns:
      int: Exit code (0 if every component has a rule, 1 otherwise).
  """
  if not path.exists():
    log_error(f"Path not found: {path}")
    return 1

  config = RuntimeConfig.load(search_path=path if path.is_dir() else path.parent)
  try:
    registry = RuleRegistry.from_files(config.rule_paths) if config.rule_paths else get_default_registry()
  except RuleRegistryValidationError as e:
    log_error(str(e))
    return 1
  files = [path] if path.is_file() else discover_sources(path, config.extensions)

  if not json_mode:
    log_info(f"Auditing {len(files)} files for {config.source_library} components...")

  # canonical name -> (supported, files using it)
  usage: Dict[str, List] = {}

  for f in files:
    try:
      code = f.read_text("utf-8")
    except (OSError, UnicodeDecodeError) as e:
      log_error(f"Failed to read {f.name}: {e}")
      continue
    for name, supported in scan_usage(code, registry, config).items():
      entry = usage.setdefault(name, [supported, 0])
      entry[1] += 1

  missing = sorted(name for name, (supported, _) in usage.items() if not supported)

  if json_mode:
    output_list = []
    for name in sorted(usage):
      supported, count = usage[name]
      output_list.append({"component": name, "supported": supported, "files": count})
    print(json.dumps(output_list, indent=2))
    return 1 if missing else 0

  if missing:
    table = Table(title="❌ Unmapped Components")
    table.add_column("Component", style="red")
    table.add_column("Files", justify="right")
    for name in missing:
      table.add_row(name, str(usage[name][1]))
    console.print(table)
    console.print("\n")

  total = len(usage)
  count_supp = total - len(missing)
  percent = (count_supp / total * 100) if total > 0 else 0

  console.print(f"[bold]Audit Summary for {path.name}[/bold]")
  console.print(f"Unique Components: {total}")
  console.print(f"Supported:         [green]{count_supp}[/green]")
  console.print(f"Missing:           [red]{len(missing)}[/red]")
  console.print(f"Coverage:          [blue]{percent:.1f}%[/blue]")

  return 1 if missing else 0
