"""
Base Import Synthesizer Logic.

Defines the base class for the `ImportSynthesizer`: configuration, the
orchestration of a run and small helpers for editing the module body.
"""

import re
from typing import Dict, Iterator, List, Optional, Set

from ui_switcheroo.core.aliases import AliasTable
from ui_switcheroo.core.jsx import strip_literals
from ui_switcheroo.core.jsx.nodes import (
  CodeChunk,
  ExpressionContainer,
  ImportDeclaration,
  ImportSpecifier,
  JsxElement,
  JsxSpreadAttribute,
  Module,
)
from ui_switcheroo.core.rewriter.base import RewriteSummary
from ui_switcheroo.core.tracer import TraceLogger


def iter_code_chunks(module: Module) -> Iterator[CodeChunk]:
  """
  Yields every opaque code chunk of the module, including those nested in
  JSX expression containers and spread attributes.
  """

  def from_container(container: ExpressionContainer) -> Iterator[CodeChunk]:
    for item in container.body:
      if isinstance(item, CodeChunk):
        yield item
      elif isinstance(item, JsxElement):
        yield from from_element(item)

  def from_element(element: JsxElement) -> Iterator[CodeChunk]:
    for attr in element.attributes:
      if isinstance(attr, JsxSpreadAttribute):
        yield from from_container(attr.container)
      elif isinstance(attr.value, ExpressionContainer):
        yield from from_container(attr.value)
      elif isinstance(attr.value, JsxElement):
        yield from from_element(attr.value)
    for child in element.children:
      if isinstance(child, ExpressionContainer):
        yield from from_container(child)
      elif isinstance(child, JsxElement):
        yield from from_element(child)

  for item in module.body:
    if isinstance(item, CodeChunk):
      yield item
    elif isinstance(item, JsxElement):
      yield from from_element(item)


class BaseImportSynthesizer:
  """
  Base class for import manipulation.

  Holds the alias table and rewrite summary of one pass, and runs the
  pruning and injection steps provided by the mixins.
  """

  def __init__(self, aliases: AliasTable, summary: RewriteSummary, tracer: Optional[TraceLogger] = None):
    """
    Initializes the synthesizer state.

    Args:
        aliases: Alias table of the module (source and stylesheet imports).
        summary: Required target symbols and migrated / referenced locals.
        tracer: Optional trace logger.
    """
    self.aliases = aliases
    self.summary = summary
    self.tracer = tracer or TraceLogger()

    # decl id -> specifiers kept after pruning
    self._kept: Dict[int, List[ImportSpecifier]] = {}

  def synthesize(self, module: Module) -> None:
    """
    Edits the import section in place.

    New imports are placed after the original import block, so their
    position is computed before any source import is removed.

    Args:
        module: The rewritten module.
    """
    self.tracer.start_phase("Import Synthesis", "Prune source imports, inject target imports")
    self._plan_pruning(module)
    self._inject_target_imports(module)
    self._apply_pruning(module)
    self.tracer.end_phase()

  # --- Mixin hooks ---

  def _plan_pruning(self, module: Module) -> None:
    raise NotImplementedError

  def _apply_pruning(self, module: Module) -> None:
    raise NotImplementedError

  def _inject_target_imports(self, module: Module) -> None:
    raise NotImplementedError

  # --- Helpers ---

  def _code_references(self, module: Module, names: Set[str]) -> Set[str]:
    """
    Finds which of `names` appear as identifiers in the module's code.

    Property accesses (``obj.Button``) do not count, nor do mentions inside
    comments, strings, template text or regex literals.
    """
    if not names:
      return set()
    pattern = re.compile(r"(?<![\w$.])(" + "|".join(re.escape(n) for n in sorted(names)) + r")(?![\w$])")
    found: Set[str] = set()
    for chunk in iter_code_chunks(module):
      found.update(pattern.findall(strip_literals(chunk.text)))
    return found

  def _code_declarations(self, module: Module, names: Set[str]) -> Set[str]:
    """Finds which of `names` are declared by the module's own code (``const Button = ...``)."""
    if not names:
      return set()
    alternatives = "|".join(re.escape(n) for n in sorted(names))
    pattern = re.compile(r"\b(?:const|let|var|function|class)\s+(" + alternatives + r")(?![\w$])")
    found: Set[str] = set()
    for chunk in iter_code_chunks(module):
      found.update(pattern.findall(strip_literals(chunk.text)))
    return found

  @staticmethod
  def _remove_item(module: Module, item: ImportDeclaration) -> None:
    """Removes a body item together with the line break that followed it."""
    for idx, candidate in enumerate(module.body):
      if candidate is item:
        del module.body[idx]
        if idx < len(module.body) and isinstance(module.body[idx], CodeChunk):
          following = module.body[idx]
          for newline in ("\r\n", "\n"):
            if following.text.startswith(newline):
              following.text = following.text[len(newline) :]
              break
          if not following.text:
            del module.body[idx]
        return
