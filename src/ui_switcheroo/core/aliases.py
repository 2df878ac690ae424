"""
Alias Resolution.

Builds the `AliasTable` tying locally bound identifiers back to the symbols
of the source library they were imported from:

.. code-block:: javascript

    import { Button as BsButton, Card } from 'react-bootstrap';
    import Modal from 'react-bootstrap/Modal';
    import * as RB from 'react-bootstrap';

yields ``BsButton -> Button``, ``Card -> Card``, ``Modal -> Modal`` and
``RB -> *``. Tags are then resolved through the table, so a local component
that merely shares a name with a library symbol is never rewritten.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from ui_switcheroo.core.jsx.nodes import ImportDeclaration, JsxName, Module

DEFAULT_BINDING = "default"
NAMESPACE_BINDING = "*"


@dataclass(frozen=True)
class AliasEntry:
  """
  Canonical identity of a local binding.

  Attributes:
      canonical_name: Exported name, ``"default"`` or ``"*"``.
      origin_library: The import source the binding came from.
  """

  canonical_name: str
  origin_library: str


@dataclass(frozen=True)
class ResolvedReference:
  """
  A tag resolved to the source library.

  Attributes:
      component: Canonical component name (e.g. 'Card').
      child: Member property for sub-components (e.g. 'Body'), else None.
      local_root: The local identifier the tag started with.
  """

  component: str
  child: Optional[str]
  local_root: str

  @property
  def canonical_name(self) -> str:
    return f"{self.component}.{self.child}" if self.child else self.component


def matches_library(source: str, library: str) -> bool:
  """True for the library itself and any ``library/sub/path``."""
  return source == library or source.startswith(library + "/")


class AliasTable(Mapping[str, AliasEntry]):
  """
  Read-only mapping of local identifier to `AliasEntry`.

  Also keeps the import declarations it was built from so the import
  synthesizer can edit exactly those.
  """

  def __init__(
    self,
    entries: Dict[str, AliasEntry],
    source_imports: Iterable[ImportDeclaration] = (),
    stylesheet_imports: Iterable[ImportDeclaration] = (),
  ):
    self._entries: Mapping[str, AliasEntry] = MappingProxyType(dict(entries))
    self._source_imports: Tuple[ImportDeclaration, ...] = tuple(source_imports)
    self._stylesheet_imports: Tuple[ImportDeclaration, ...] = tuple(stylesheet_imports)

  def __getitem__(self, key: str) -> AliasEntry:
    return self._entries[key]

  def __iter__(self) -> Iterator[str]:
    return iter(self._entries)

  def __len__(self) -> int:
    return len(self._entries)

  @property
  def source_imports(self) -> Tuple[ImportDeclaration, ...]:
    return self._source_imports

  @property
  def stylesheet_imports(self) -> Tuple[ImportDeclaration, ...]:
    return self._stylesheet_imports

  def resolve(self, name: JsxName) -> Optional[ResolvedReference]:
    """
    Resolves a tag reference.

    Args:
        name: The tag (``Button``, ``Card.Body``, ``RB.Card.Body``).

    Returns:
        Optional[ResolvedReference]: None if the root is not bound by the
        source library (or a namespace binding is used as a bare tag).
    """
    entry = self._entries.get(name.root)
    if entry is None:
      return None

    rest = name.parts[1:]
    if entry.canonical_name == NAMESPACE_BINDING:
      if not rest:
        return None
      child = ".".join(rest[1:]) or None
      return ResolvedReference(component=rest[0], child=child, local_root=name.root)

    child = ".".join(rest) or None
    return ResolvedReference(component=entry.canonical_name, child=child, local_root=name.root)


def build_alias_table(
  module: Module,
  source_library: str,
  stylesheet_sources: Iterable[str] = (),
) -> AliasTable:
  """
  Builds the alias table from the module's import section.

  Args:
      module: The parsed module.
      source_library: Library being migrated away from (e.g. 'react-bootstrap').
      stylesheet_sources: Suffixes identifying the library's stylesheet imports.

  Returns:
      AliasTable: Possibly empty; never raises.
  """
  sheets = tuple(stylesheet_sources)
  entries: Dict[str, AliasEntry] = {}
  source_imports: List[ImportDeclaration] = []
  stylesheet_imports: List[ImportDeclaration] = []

  for decl in module.imports:
    if not decl.specifiers and any(decl.source.endswith(s) for s in sheets):
      stylesheet_imports.append(decl)
      continue

    if not matches_library(decl.source, source_library) or decl.type_only:
      continue

    source_imports.append(decl)
    subpath = decl.source[len(source_library) :].strip("/")
    for spec in decl.specifiers:
      canonical = spec.imported
      if spec.is_default and subpath:
        canonical = subpath.split("/")[-1]
      entries[spec.local] = AliasEntry(canonical_name=canonical, origin_library=decl.source)

  return AliasTable(entries, source_imports, stylesheet_imports)
