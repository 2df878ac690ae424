"""
Runtime Configuration Store.

`RuntimeConfig` holds the host-level settings of a migration run. Values come
from the ``[tool.ui_switcheroo]`` table of the nearest ``pyproject.toml``
and are overridden by explicit (CLI) arguments.

.. code-block:: toml

    [tool.ui_switcheroo]
    source_library = "react-bootstrap"
    strict_mode = true
    rule_paths = ["migration/overrides.json"]
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

DEFAULT_STYLESHEETS = [
  "bootstrap/dist/css/bootstrap.min.css",
  "bootstrap/dist/css/bootstrap.css",
]
DEFAULT_EXTENSIONS = [".js", ".jsx", ".ts", ".tsx"]


class RuntimeConfig(BaseModel):
  """
  Global configuration container for the migration engine.
  """

  source_library: str = Field("react-bootstrap", description="Import source being migrated away from.")
  stylesheet_sources: List[str] = Field(
    default_factory=lambda: list(DEFAULT_STYLESHEETS),
    description="Suffixes of the source library's stylesheet imports.",
  )
  class_attribute: str = Field("className", description="Attribute carrying utility classes.")
  style_attribute: str = Field("sx", description="Attribute receiving class-derived style entries.")
  strict_mode: bool = Field(False, description="If True, unmapped components make the run fail.")
  rule_paths: List[Path] = Field(default_factory=list, description="Rule JSON overlays applied after the defaults.")
  extensions: List[str] = Field(
    default_factory=lambda: list(DEFAULT_EXTENSIONS),
    description="File extensions processed when converting directories.",
  )

  @field_validator("source_library", "class_attribute", "style_attribute")
  @classmethod
  def _non_empty(cls, v: str) -> str:
    v_clean = v.strip()
    if not v_clean:
      raise ValueError("Value must not be empty")
    return v_clean

  @field_validator("extensions")
  @classmethod
  def _dotted_extensions(cls, v: List[str]) -> List[str]:
    """
    Normalizes extensions to a leading dot and lower case.

    Args:
        v: Raw extension list (``"tsx"`` or ``".tsx"``).

    Returns:
        List[str]: Normalized extensions.
    """
    return [e.lower() if e.startswith(".") else f".{e.lower()}" for e in v]

  @classmethod
  def load(
    cls,
    source_library: Optional[str] = None,
    strict_mode: Optional[bool] = None,
    rule_paths: Optional[List[Path]] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        source_library: Override for the source library.
        strict_mode: Override for strict mode.
        rule_paths: Extra rule overlays, applied after those from the TOML file.
        search_path: Directory to start searching for the TOML file.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, toml_dir = _load_toml_settings(start_dir)

    settings: Dict[str, Any] = {}
    for key in ("source_library", "stylesheet_sources", "class_attribute", "style_attribute", "extensions"):
      if key in toml_config:
        settings[key] = toml_config[key]

    if source_library:
      settings["source_library"] = source_library

    if strict_mode is not None:
      settings["strict_mode"] = strict_mode
    else:
      settings["strict_mode"] = toml_config.get("strict_mode", False)

    # TOML-relative paths resolve against the directory holding pyproject.toml
    base = toml_dir or Path.cwd()
    paths = [(base / Path(p)).resolve() for p in toml_config.get("rule_paths", [])]
    paths.extend(Path(p).resolve() for p in (rule_paths or []))
    settings["rule_paths"] = paths

    return cls(**settings)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches `start_path` and its parents for 'pyproject.toml'.

  Args:
      start_path: Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The ``[tool.ui_switcheroo]`` table and the
      directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}, None
      return data.get("tool", {}).get("ui_switcheroo", {}), parent

  return {}, None
