"""
Source Import Pruning Mixin.

Removes source-library bindings that are fully migrated:

- a specifier goes when its local name had an applied rule and is neither
  used by an untouched element nor mentioned in the surrounding code;
- a declaration left without specifiers goes entirely;
- stylesheet imports of the source library go (the synthesizer only runs on
  changed trees).
"""

import logging
from typing import Set

from ui_switcheroo.core.jsx.nodes import Module

logger = logging.getLogger(__name__)


class PruningMixin:
  """
  Mixin for removing migrated source imports.
  """

  def _plan_pruning(self, module: Module) -> None:
    candidates = self.summary.migrated_locals - self.summary.referenced_locals
    still_used = self._code_references(module, candidates)
    removable = candidates - still_used

    for name in sorted(candidates & still_used):
      logger.debug("Keeping import of '%s': still referenced in code", name)

    for decl in self.aliases.source_imports:
      self._kept[id(decl)] = [s for s in decl.specifiers if s.local not in removable]

  def _bound_after_pruning(self, module: Module) -> Set[str]:
    """Local names that remain bound once pruning is applied."""
    bound: Set[str] = set()
    for decl in module.imports:
      kept = self._kept.get(id(decl))
      specifiers = decl.specifiers if kept is None else kept
      bound.update(s.local for s in specifiers)
    return bound

  def _apply_pruning(self, module: Module) -> None:
    for decl in self.aliases.source_imports:
      kept = self._kept.get(id(decl))
      if kept is None or len(kept) == len(decl.specifiers):
        continue
      removed = [s.local for s in decl.specifiers if s not in kept]
      if kept:
        decl.specifiers = kept
        decl.mark_modified()
      else:
        self._remove_item(module, decl)
      self.tracer.log_import("remove", decl.source, removed)

    for sheet in self.aliases.stylesheet_imports:
      self._remove_item(module, sheet)
      self.tracer.log_import("remove", sheet.source, [])
