"""
Target Import Injection Mixin.

For each target module, in the order its symbols were first required:

1.  Merge the missing names into an existing named import of that module, or
2.  Synthesize ``import { A, B } from 'module';`` right after the original
    import block.

A name already bound in the module (by a remaining import or a local
declaration) is imported under a free alias instead (``Card as MuiCard``) and
the rewritten tags use that alias. A target import that already provides the
name is reused under its existing local binding.
New statements reuse the quote and semicolon style of the source import.
"""

import logging
from typing import List, Optional, Set

from ui_switcheroo.core.jsx.nodes import CodeChunk, ImportDeclaration, ImportSpecifier, JsxName, Module

logger = logging.getLogger(__name__)

_ALIAS_PREFIX = "Mui"


class InjectionMixin:
  """
  Mixin for injecting target-library imports.
  """

  def _inject_target_imports(self, module: Module) -> None:
    bound = self._bound_after_pruning(module)
    wanted = {name for names in self.summary.required_symbols.values() for name in names}
    bound |= self._code_declarations(module, wanted)
    anchor = self._last_import_index(module)
    quote, semicolon = self._import_style()
    new_decls: List[ImportDeclaration] = []

    for target_module, names in self.summary.required_symbols.items():
      existing = self._find_mergeable_import(module, target_module)
      imported = {s.imported: s.local for s in existing.specifiers} if existing is not None else {}

      missing: List[ImportSpecifier] = []
      for name in names:
        if name in imported:
          self._retag(target_module, name, imported[name])
          continue
        local = name
        if name in bound:
          local = self._free_alias(module, name, bound)
          self._retag(target_module, name, local)
          logger.info("'%s' is already bound in this module; importing it from %s as '%s'", name, target_module, local)
        missing.append(ImportSpecifier(imported=name, local=local))
        bound.add(local)

      if not missing:
        continue

      labels = [s.imported if s.imported == s.local else f"{s.imported} as {s.local}" for s in missing]
      if existing is not None:
        existing.specifiers.extend(missing)
        existing.mark_modified()
        self.tracer.log_import("merge", target_module, labels)
      else:
        new_decls.append(
          ImportDeclaration(
            source=target_module,
            specifiers=missing,
            quote=quote,
            semicolon=semicolon,
          )
        )
        self.tracer.log_import("add", target_module, labels)

    if not new_decls:
      return

    inserted: list = []
    if anchor is None:
      for decl in new_decls:
        inserted.extend([decl, CodeChunk("\n")])
      module.body[0:0] = inserted
      return

    for decl in new_decls:
      inserted.extend([CodeChunk("\n"), decl])
    module.body[anchor + 1 : anchor + 1] = inserted

  @staticmethod
  def _last_import_index(module: Module) -> Optional[int]:
    last = None
    for idx, item in enumerate(module.body):
      if isinstance(item, ImportDeclaration):
        last = idx
    return last

  @staticmethod
  def _find_mergeable_import(module: Module, target_module: str) -> Optional[ImportDeclaration]:
    for decl in module.imports:
      if decl.source != target_module or decl.type_only:
        continue
      if any(s.is_namespace for s in decl.specifiers) or not decl.specifiers:
        continue
      return decl
    return None

  def _import_style(self):
    """Quote character and semicolon flag of the first source import."""
    for decl in self.aliases.source_imports:
      return decl.quote, decl.semicolon
    return "'", True

  def _free_alias(self, module: Module, name: str, bound: Set[str]) -> str:
    """First of ``MuiName``, ``MuiName2``, ... that nothing in the module uses."""
    base = f"{_ALIAS_PREFIX}{name}"
    candidate = base
    suffix = 2
    while candidate in bound or self._code_references(module, {candidate}):
      candidate = f"{base}{suffix}"
      suffix += 1
    return candidate

  def _retag(self, target_module: str, name: str, local: str) -> None:
    """Points every element rewritten to `name` at the local binding `local`."""
    if local == name:
      return
    for element in self.summary.target_elements.get((target_module, name), []):
      element.name = JsxName(parts=[local])
