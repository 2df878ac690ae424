"""
Import Fixer Package.

This package provides the ``ImportSynthesizer`` class, responsible for:
1.  **Pruning**: Removing migrated source-library imports (and stylesheets).
2.  **Injection**: Adding or merging target-library imports without duplicates.

It is composed of mixins handling each step.
"""

from ui_switcheroo.core.import_fixer.base import BaseImportSynthesizer, iter_code_chunks
from ui_switcheroo.core.import_fixer.injection import InjectionMixin
from ui_switcheroo.core.import_fixer.pruning import PruningMixin


class ImportSynthesizer(PruningMixin, InjectionMixin, BaseImportSynthesizer):
  """
  Composite editor for the import section.

  Inherits functionality from:
  - :class:`PruningMixin`: removing migrated source imports.
  - :class:`InjectionMixin`: injecting target imports.
  - :class:`BaseImportSynthesizer`: state and orchestration.
  """


__all__ = ["ImportSynthesizer", "iter_code_chunks"]
