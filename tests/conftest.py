"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Shared registry / engine fixtures built from the packaged rules.
- Console isolation so Rich output can be inspected per test.
"""

import io
import sys
from pathlib import Path

import pytest
from rich.console import Console

# Add src to path so we can import 'ui_switcheroo' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from ui_switcheroo.config import RuntimeConfig  # noqa: E402
from ui_switcheroo.core.engine import MigrationEngine  # noqa: E402
from ui_switcheroo.semantics.registry import get_default_registry  # noqa: E402
from ui_switcheroo.utils.console import reset_console, set_console  # noqa: E402


@pytest.fixture
def registry():
  """The packaged react-bootstrap -> MUI rules."""
  return get_default_registry()


@pytest.fixture
def engine(registry):
  """Engine with default settings (no pyproject lookup)."""
  return MigrationEngine(registry=registry, config=RuntimeConfig())


@pytest.fixture
def migrate(engine):
  """Runs the full text pipeline and returns the migrated code."""

  def _run(code: str) -> str:
    return engine.run(code).code

  return _run


@pytest.fixture
def recorded_console():
  """Redirects console and logging output into a recording console."""
  buffer = io.StringIO()
  rec = Console(file=buffer, record=True, width=200, force_terminal=False)
  set_console(rec)
  yield rec
  reset_console()
