"""
JSX Module Tree Nodes.

Defines the tree consumed and mutated by the migration engine:

- `Module`: the root, a flat body of opaque code, imports and top-level JSX.
- `ImportDeclaration` / `ImportSpecifier`: the import section.
- `JsxElement`, `JsxAttribute`, `JsxSpreadAttribute`, `StringValue`,
  `ExpressionContainer`, `JsxText`: the element tree.

Nodes keep the formatting details (whitespace, quotes, raw expression text)
required for the emitter to reproduce untouched source byte-for-byte.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Union


@dataclass
class JsxNode:
  """Base class for all tree nodes."""


@dataclass
class CodeChunk(JsxNode):
  """
  Opaque JavaScript/TypeScript text carried through verbatim.

  Attributes:
      text (str): The raw source text.
  """

  text: str


@dataclass
class ImportSpecifier:
  """
  A single binding introduced by an import declaration.

  Attributes:
      imported (str): The exported name. ``"default"`` for default bindings,
          ``"*"`` for namespace bindings.
      local (str): The locally bound identifier.
  """

  imported: str
  local: str

  @property
  def is_default(self) -> bool:
    return self.imported == "default"

  @property
  def is_namespace(self) -> bool:
    return self.imported == "*"

  @property
  def is_named(self) -> bool:
    return not (self.is_default or self.is_namespace)


@dataclass
class ImportDeclaration(JsxNode):
  """
  An ``import ... from '...'`` statement.

  Attributes:
      source (str): The module specifier string.
      specifiers (List[ImportSpecifier]): Bindings, in source order.
      quote (str): Quote character used around the source.
      semicolon (bool): Whether the statement ends with ``;``.
      type_only (bool): True for TypeScript ``import type`` statements.
      text (Optional[str]): The original source text. Set to None once the
          declaration is edited (or for synthesized declarations), which makes
          the emitter regenerate it.
      line (int): 1-based line of the ``import`` keyword.
  """

  source: str
  specifiers: List[ImportSpecifier] = field(default_factory=list)
  quote: str = "'"
  semicolon: bool = True
  type_only: bool = False
  text: Optional[str] = None
  line: int = 0

  def mark_modified(self) -> None:
    """Drops the cached source text so the emitter regenerates the statement."""
    self.text = None

  def local_names(self) -> List[str]:
    return [spec.local for spec in self.specifiers]


@dataclass
class JsxName:
  """
  An element tag reference: ``Button`` or a member chain like ``Card.Body``.
  """

  parts: List[str]

  @property
  def root(self) -> str:
    return self.parts[0]

  @property
  def is_qualified(self) -> bool:
    return len(self.parts) > 1

  @property
  def dotted(self) -> str:
    return ".".join(self.parts)

  def __str__(self) -> str:
    return self.dotted


@dataclass
class JsxText(JsxNode):
  """Literal text between JSX tags."""

  text: str


@dataclass
class StringValue(JsxNode):
  """
  A quoted attribute value (``"primary"``). JSX strings carry no escapes.
  """

  value: str
  quote: str = '"'


@dataclass
class ExpressionContainer(JsxNode):
  """
  A ``{...}`` container. The body interleaves opaque code with nested JSX.
  """

  body: List[Union[CodeChunk, "JsxElement"]] = field(default_factory=list)

  @classmethod
  def from_code(cls, code: str) -> "ExpressionContainer":
    return cls(body=[CodeChunk(code)])

  def code_text(self) -> Optional[str]:
    """
    Returns the raw expression text if the container holds no nested JSX.

    Returns:
        Optional[str]: The expression source, or None when JSX is embedded.
    """
    parts = []
    for item in self.body:
      if not isinstance(item, CodeChunk):
        return None
      parts.append(item.text)
    return "".join(parts)


AttributeValue = Union[StringValue, ExpressionContainer, "JsxElement"]


@dataclass
class JsxAttribute(JsxNode):
  """
  A ``name=value`` attribute. A None value is the boolean shorthand (``disabled``).

  Attributes:
      name (str): Attribute name.
      value (Optional[AttributeValue]): The value node.
      leading (str): Whitespace (and comments) preceding the attribute.
      separator (str): The raw ``=`` text, including surrounding whitespace.
  """

  name: str
  value: Optional[AttributeValue] = None
  leading: str = " "
  separator: str = "="


@dataclass
class JsxSpreadAttribute(JsxNode):
  """A ``{...props}`` attribute. Always passed through untouched."""

  container: ExpressionContainer
  leading: str = " "


JsxChild = Union[JsxText, ExpressionContainer, "JsxElement"]


@dataclass
class JsxElement(JsxNode):
  """
  A JSX element or fragment (``name is None``).

  Attributes:
      name (Optional[JsxName]): Tag reference, shared by opening and closing tags.
      attributes (List): Attributes in source order.
      children (List[JsxChild]): Child nodes.
      self_closing (bool): ``<X />`` form.
      before_close (str): Whitespace before ``>`` / ``/>`` of the opening tag.
      closing_leading (str): Whitespace after ``</``.
      closing_trailing (str): Whitespace before the final ``>`` of the closing tag.
      line (int): 1-based line of the opening ``<``.
      column (int): 1-based column of the opening ``<``.
  """

  name: Optional[JsxName]
  attributes: List[Union[JsxAttribute, JsxSpreadAttribute]] = field(default_factory=list)
  children: List[JsxChild] = field(default_factory=list)
  self_closing: bool = False
  before_close: str = ""
  closing_leading: str = ""
  closing_trailing: str = ""
  line: int = 0
  column: int = 0

  @property
  def is_fragment(self) -> bool:
    return self.name is None

  def find_attribute(self, name: str) -> Optional[JsxAttribute]:
    """
    Finds the last attribute with the given name (the one JSX applies).

    Args:
        name: Attribute name.

    Returns:
        Optional[JsxAttribute]: The attribute or None.
    """
    found = None
    for attr in self.attributes:
      if isinstance(attr, JsxAttribute) and attr.name == name:
        found = attr
    return found

  def attribute_names(self) -> List[str]:
    return [a.name for a in self.attributes if isinstance(a, JsxAttribute)]


ModuleItem = Union[CodeChunk, ImportDeclaration, JsxElement]


@dataclass
class Module(JsxNode):
  """
  Root of a parsed source file.

  Attributes:
      body (List[ModuleItem]): Top-level items in source order.
  """

  body: List[ModuleItem] = field(default_factory=list)

  @property
  def imports(self) -> List[ImportDeclaration]:
    return [item for item in self.body if isinstance(item, ImportDeclaration)]


def iter_child_elements(node: Union[Module, JsxElement, ExpressionContainer]) -> Iterator[JsxElement]:
  """
  Yields the JSX elements directly reachable from a node, without descending
  into the elements themselves. Attribute values holding JSX are included.

  Args:
      node: A module, element or expression container.

  Yields:
      JsxElement: Directly nested elements in document order.
  """
  if isinstance(node, Module):
    for item in node.body:
      if isinstance(item, JsxElement):
        yield item
    return

  if isinstance(node, ExpressionContainer):
    for item in node.body:
      if isinstance(item, JsxElement):
        yield item
    return

  for attr in node.attributes:
    if isinstance(attr, JsxSpreadAttribute):
      yield from iter_child_elements(attr.container)
    elif isinstance(attr.value, JsxElement):
      yield attr.value
    elif isinstance(attr.value, ExpressionContainer):
      yield from iter_child_elements(attr.value)

  for child in node.children:
    if isinstance(child, JsxElement):
      yield child
    elif isinstance(child, ExpressionContainer):
      yield from iter_child_elements(child)
