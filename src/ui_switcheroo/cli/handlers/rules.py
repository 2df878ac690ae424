"""CLI handler for the 'rules' command."""

from pathlib import Path
from typing import List, Optional

from rich.table import Table

from ui_switcheroo.enums import StructuralKind
from ui_switcheroo.semantics.registry import RuleRegistry, RuleRegistryValidationError
from ui_switcheroo.semantics.schema import ComponentRule
from ui_switcheroo.utils.console import console, log_error, log_success


def _describe_structural(rule: ComponentRule) -> str:
  parts = []
  for struct in rule.structural:
    if struct.kind == StructuralKind.GRAFT:
      parts.append(f"graft->{struct.parent or 'parent'}.{struct.slot}")
    elif struct.kind == StructuralKind.WRAP:
      parts.append(f"wrap:{struct.target}")
    else:
      parts.append(f"lift->{struct.slot}")
  return ", ".join(parts)


def handle_rules(validate_only: bool = False, rule_paths: Optional[List[Path]] = None) -> int:
  """
  Handles 'rules' command.

  Loads the packaged rules plus overlays. With `validate_only` it only
  reports whether they are consistent; otherwise it prints a table.

  Args:
      validate_only: Skip the listing.
      rule_paths: Extra rule JSON files.

  Returns:
      int: 0 if the rules are valid, 1 otherwise.
  """
  try:
    registry = RuleRegistry.from_files(rule_paths or [])
  except RuleRegistryValidationError as e:
    log_error(str(e))
    return 1

  if validate_only:
    log_success(
      f"Rules valid: {registry.rule_count()} component rules, {len(registry.style_rules)} style rules "
      f"({registry.source_library} -> {', '.join(registry.target_modules)})."
    )
    return 0

  table = Table(title=f"Migration Rules: {registry.source_library}")
  table.add_column("Source", style="cyan")
  table.add_column("Target", style="green")
  table.add_column("Module", style="dim")
  table.add_column("Props", justify="right")
  table.add_column("Structural", style="tag")

  rows = [(name, rule) for name, rule in registry.components.items()]
  for parent, children in registry.sub_components.items():
    rows.extend((f"{parent}.{child}", rule) for child, rule in children.items())

  for name, rule in sorted(rows, key=lambda r: r[0]):
    table.add_row(name, rule.target or "-", rule.target_module or "-", str(len(rule.props)), _describe_structural(rule))

  console.print(table)
  console.print(f"\n[bold]{registry.rule_count()}[/bold] component rules, [bold]{len(registry.style_rules)}[/bold] style rules.")
  return 0
