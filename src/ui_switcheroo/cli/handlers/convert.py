"""
Convert Command Handler.

This module implements the logic for the `ui_switcheroo convert` command.
It orchestrates:
1. Configuration loading (pyproject.toml + CLI overrides).
2. Rule registry initialization (packaged rules + overlays).
3. Tree migration via the Engine.
4. Output writing and trace logging.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional

from rich.table import Table

from ui_switcheroo.config import RuntimeConfig
from ui_switcheroo.core.conversion_result import ConversionResult
from ui_switcheroo.core.engine import MigrationEngine
from ui_switcheroo.semantics.registry import RuleRegistry, RuleRegistryValidationError, get_default_registry
from ui_switcheroo.utils.console import (
  console,
  log_error,
  log_info,
  log_success,
  log_warning,
)

SKIPPED_DIRS = {"node_modules", ".git"}


def handle_convert(
  input_path: Path,
  output_path: Optional[Path],
  source: Optional[str],
  strict: Optional[bool],
  rule_paths: Optional[List[Path]] = None,
  json_trace_path: Optional[Path] = None,
) -> int:
  """
  Handles the 'convert' command execution.

  Args:
      input_path: Path to the source file or directory to convert.
      output_path: Where migrated code is written. A single file without
          `output_path` is printed to stdout.
      source: Override for the source library import name.
      strict: If True, unmapped components fail the file.
      rule_paths: Extra rule JSON files.
      json_trace_path: Optional path to dump execution trace JSON.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  # 1. Load Configuration (TOML + CLI overrides)
  config = RuntimeConfig.load(
    source_library=source,
    strict_mode=strict,
    rule_paths=rule_paths,
    search_path=input_path if input_path.is_dir() else input_path.parent,
  )

  # 2. Rules
  try:
    registry = RuleRegistry.from_files(config.rule_paths) if config.rule_paths else get_default_registry()
  except RuleRegistryValidationError as e:
    log_error(str(e))
    return 1
  if config.rule_paths:
    log_info(f"Loaded {len(config.rule_paths)} rule overlay(s); {registry.rule_count()} component rules active.")

  engine = MigrationEngine(registry=registry, config=config)
  batch_results: Dict[str, ConversionResult] = {}

  # 3. Process Input (File vs Directory)
  if input_path.is_file():
    result = _convert_single_file(input_path, output_path, engine, json_trace_path)
    batch_results[input_path.name] = result
    if not result.success:
      _print_batch_summary(batch_results)
      return 1

  elif input_path.is_dir():
    if not output_path:
      log_error("Directory conversion requires --out destination directory.")
      return 1

    files = discover_sources(input_path, config.extensions)
    if not files:
      log_warning(f"No {'/'.join(config.extensions)} files found in {input_path}")
      return 0

    log_info(f"Processing {len(files)} files from {input_path}...")

    for src_file in files:
      rel_path = src_file.relative_to(input_path)
      dest_file = output_path / rel_path

      batch_trace = None
      if json_trace_path:
        batch_trace = dest_file.with_name(f"{dest_file.name}.trace.json")

      result = _convert_single_file(src_file, dest_file, engine, batch_trace)
      batch_results[str(rel_path)] = result

  _print_batch_summary(batch_results)
  return 0 if all(r.success for r in batch_results.values()) else 1


def discover_sources(root: Path, extensions: List[str]) -> List[Path]:
  """
  Lists migratable files below `root`, skipping dependency folders.

  Args:
      root: Directory to scan.
      extensions: Accepted suffixes (lower case, with dot).

  Returns:
      List[Path]: Matching files, sorted.
  """
  found = []
  for path in root.rglob("*"):
    if not path.is_file() or path.suffix.lower() not in extensions:
      continue
    if any(part in SKIPPED_DIRS for part in path.relative_to(root).parts):
      continue
    found.append(path)
  return sorted(found)


def _convert_single_file(
  input_path: Path,
  output_path: Optional[Path],
  engine: MigrationEngine,
  json_trace_path: Optional[Path] = None,
) -> ConversionResult:
  """
  Helper to execute the migration on a single file.

  Args:
      input_path: Source file path.
      output_path: Destination file path.
      engine: Configured migration engine.
      json_trace_path: Path to save trace event logs.

  Returns:
      ConversionResult: Result object containing status and code.
  """
  try:
    with open(input_path, "rt", encoding="utf-8") as f:
      code = f.read()
    result = engine.run(code)

    if json_trace_path and result.trace_events:
      try:
        json_trace_path.parent.mkdir(parents=True, exist_ok=True)
        with open(json_trace_path, "wt", encoding="utf-8") as f:
          json.dump(result.trace_events, f, indent=2)
        log_info(f"Trace saved to [path]{json_trace_path}[/path]")
      except OSError as e:
        log_error(f"Failed to write trace: {e}")

    if not result.success:
      return result

    for warning in result.warnings:
      log_warning(f"{input_path.name} {warning}")

    if output_path:
      output_path.parent.mkdir(parents=True, exist_ok=True)
      with open(output_path, "wt", encoding="utf-8") as f:
        f.write(result.code)
      verb = "Migrated" if result.changed else "Copied (no changes)"
      log_success(f"{verb}: [path]{input_path}[/path] -> [path]{output_path}[/path]")
    else:
      print(result.code, end="")

    return result
  except (OSError, UnicodeDecodeError) as e:
    log_error(f"Failed to convert {input_path}: {e}")
    return ConversionResult(success=False, errors=[str(e)])


def _print_batch_summary(results: Dict[str, ConversionResult]) -> None:
  """
  Renders a summary table of conversion results to the console.

  Args:
      results: Dictionary mapping filenames to conversion results.
  """
  total = len(results)
  changed = sum(1 for r in results.values() if r.changed)
  clean = sum(1 for r in results.values() if r.success and not r.warnings)
  issues = total - clean

  if issues == 0:
    log_success(f"Batch Complete: {total} files processed, {changed} migrated.")
    return

  table = Table(title="Migration Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Issues", style="red")

  for filename, res in results.items():
    if res.success and not res.warnings:
      continue
    status = "❌ Failed" if not res.success else "⚠️ Warnings"
    messages = res.errors if res.errors else res.warnings
    table.add_row(filename, status, "; ".join(messages) if messages else "Unknown Error")

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {clean} Clean, {issues} with Issues, {changed} Migrated.")
