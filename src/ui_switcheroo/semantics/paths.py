"""
Path Resolution Utilities for Semantics.

Handles locating the packaged rule JSON files within the package or source tree.
"""

from importlib.resources import files
from pathlib import Path
from typing import List

COMPONENT_RULES_FILE = "react_bootstrap_mui.json"
STYLE_RULES_FILE = "bootstrap_utilities.json"


def resolve_semantics_dir() -> Path:
  """
  Locates the directory containing the rule JSON definitions.

  Prioritizes the local file system (relative to this file) so tests and
  editable installs find the source of truth. Falls back to package resources
  for installed distributions.

  Returns:
      Path: The absolute path to the 'semantics' directory.
  """
  local_path = Path(__file__).parent
  if (local_path / COMPONENT_RULES_FILE).exists():
    return local_path

  try:
    return Path(str(files("ui_switcheroo.semantics")))
  except (ModuleNotFoundError, TypeError):
    return local_path


def default_rule_files() -> List[Path]:
  """
  Returns the packaged rule files in load order (components, then styles).
  """
  base = resolve_semantics_dir()
  return [base / COMPONENT_RULES_FILE, base / STYLE_RULES_FILE]
