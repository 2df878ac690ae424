"""
ui-switcheroo Package.

A deterministic, rule-driven migration tool that rewrites JSX written against
react-bootstrap into equivalent MUI (Material UI) markup.

This package exposes the migration engine and configuration utilities for
programmatic usage.

Usage
-----

Simple String Conversion
^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import ui_switcheroo as uis
    code = "import { Button } from 'react-bootstrap';\\nconst A = () => <Button size=\\"lg\\">Go</Button>;\\n"
    print(uis.convert(code))
    # import { Button } from '@mui/material';
    # const A = () => <Button size="large" variant="contained" color="primary">Go</Button>;

Advanced Usage (Migration Engine)
^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from ui_switcheroo import MigrationEngine, RuntimeConfig

    engine = MigrationEngine(config=RuntimeConfig(strict_mode=True))
    res = engine.run(code)

    if res.success:
        print(res.code)
    else:
        print(f"Errors: {res.errors}")
"""

from typing import Optional

from ui_switcheroo.config import RuntimeConfig
from ui_switcheroo.core.conversion_result import ConversionResult, RewriteResult
from ui_switcheroo.core.engine import MigrationEngine
from ui_switcheroo.semantics.registry import RuleRegistry, RuleRegistryValidationError

__version__ = "0.0.1"


def convert(
  code: str,
  source: str = "react-bootstrap",
  strict: bool = False,
  registry: Optional[RuleRegistry] = None,
) -> str:
  """
  Migrates a string of JSX source code.

  This is a high-level convenience wrapper around the `MigrationEngine`. For
  file-based conversions use `ui_switcheroo.cli` or the engine directly.

  Args:
      code (str): The source module text.
      source (str): Import source being migrated away from.
      strict (bool): If True, unmapped components make the conversion fail.
      registry (RuleRegistry, optional): Rules to apply. Defaults to the
          packaged react-bootstrap -> MUI tables.

  Returns:
      str: The migrated source code (the input itself if nothing matched).

  Raises:
      ValueError: If the conversion fails (strict mode violations).
  """
  config = RuntimeConfig(source_library=source, strict_mode=strict)
  engine = MigrationEngine(registry=registry, config=config)
  result = engine.run(code)

  if not result.success:
    error_msg = "\n".join(result.errors)
    raise ValueError(f"Migration failed:\n{error_msg}")

  return result.code


__all__ = [
  "ConversionResult",
  "MigrationEngine",
  "RewriteResult",
  "RuleRegistry",
  "RuleRegistryValidationError",
  "RuntimeConfig",
  "convert",
  "__version__",
]
