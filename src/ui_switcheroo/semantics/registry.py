"""
Rule Registry.

Loads, merges and validates rule files, then serves read-only lookups:

- `lookup_component(canonical_name)`
- `lookup_sub_component(parent_canonical_name, child_property)`
- `style_rules`

Files are applied in order; later files override earlier ones per component
key (and per child key for sub-components). Style rules of later files are
tried before those of earlier files.

Any problem in the configuration raises `RuleRegistryValidationError` at
construction, before a single tree is processed.
"""

import json
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from ui_switcheroo.enums import StructuralKind
from ui_switcheroo.semantics.paths import default_rule_files
from ui_switcheroo.semantics.schema import ComponentRule, RuleFile, StyleRule

DEFAULT_SOURCE_LIBRARY = "react-bootstrap"


class RuleRegistryValidationError(Exception):
  """
  Raised when the rule configuration is malformed.

  Attributes:
      problems (List[str]): One human readable line per problem.
  """

  def __init__(self, problems: List[str]):
    self.problems = problems
    detail = "\n".join(f"  - {p}" for p in problems)
    super().__init__(f"Invalid rule configuration ({len(problems)} problem(s)):\n{detail}")


def _format_validation_error(label: str, err: ValidationError) -> List[str]:
  lines = []
  for item in err.errors():
    loc = ".".join(str(x) for x in item.get("loc", ()))
    lines.append(f"{label}: {loc}: {item.get('msg')}")
  return lines


def parse_rule_file(data: Dict[str, Any], label: str = "<data>") -> RuleFile:
  """
  Validates one rule document.

  Args:
      data: Decoded JSON content.
      label: Name used in error messages.

  Returns:
      RuleFile: The validated document.

  Raises:
      RuleRegistryValidationError: On schema errors.
  """
  try:
    return RuleFile.model_validate(data)
  except ValidationError as e:
    raise RuleRegistryValidationError(_format_validation_error(label, e)) from e


def load_rule_file(path: Union[str, Path]) -> RuleFile:
  """
  Reads and validates a rule JSON file.

  Raises:
      RuleRegistryValidationError: If the file is unreadable, not JSON, or invalid.
  """
  fpath = Path(path)
  try:
    with open(fpath, "r", encoding="utf-8") as f:
      content = json.load(f)
  except (OSError, json.JSONDecodeError) as e:
    raise RuleRegistryValidationError([f"{fpath.name}: {e}"]) from e
  return parse_rule_file(content, label=fpath.name)


class RuleRegistry:
  """
  Process-wide, read-only table of migration rules.
  """

  def __init__(self, rule_files: Sequence[RuleFile]):
    """
    Merges and validates rule documents.

    Args:
        rule_files: Documents in load order.

    Raises:
        RuleRegistryValidationError: If the merged configuration is inconsistent.
    """
    source_library: Optional[str] = None
    default_module: Optional[str] = None
    modules: List[str] = []
    components: Dict[str, ComponentRule] = {}
    sub_components: Dict[str, Dict[str, ComponentRule]] = {}
    style_rules: List[StyleRule] = []

    for doc in rule_files:
      source_library = doc.source_library or source_library
      default_module = doc.default_target_module or default_module
      for module in doc.target_modules:
        if module not in modules:
          modules.append(module)
      for name, rule in doc.components.items():
        components[name] = rule
      for parent, children in doc.sub_components.items():
        sub_components.setdefault(parent, {}).update(children)
      style_rules = list(doc.style_rules) + style_rules

    self._source_library = source_library or DEFAULT_SOURCE_LIBRARY
    self._default_target_module = default_module
    self._target_modules = tuple(modules)

    resolved_components = {name: self._finalize(name, rule) for name, rule in components.items()}
    resolved_subs = {
      parent: {child: self._finalize(f"{parent}.{child}", rule) for child, rule in children.items()}
      for parent, children in sub_components.items()
    }

    problems: List[str] = []
    for label, rule in self._iter_labeled(resolved_components, resolved_subs):
      problems.extend(self._check_rule(label, rule))
    if problems:
      raise RuleRegistryValidationError(problems)

    self._components: Mapping[str, ComponentRule] = MappingProxyType(resolved_components)
    self._sub_components: Mapping[str, Mapping[str, ComponentRule]] = MappingProxyType(
      {parent: MappingProxyType(children) for parent, children in resolved_subs.items()}
    )
    self._style_rules: Tuple[StyleRule, ...] = tuple(style_rules)

  # --- Construction helpers ---

  @classmethod
  def from_data(cls, *payloads: Dict[str, Any]) -> "RuleRegistry":
    """
    Builds a registry from decoded JSON documents (mainly for tests and overlays).
    """
    docs = [parse_rule_file(p, label=f"<data {idx}>") for idx, p in enumerate(payloads)]
    return cls(docs)

  @classmethod
  def from_files(cls, paths: Iterable[Union[str, Path]] = (), include_defaults: bool = True) -> "RuleRegistry":
    """
    Builds a registry from the packaged rule files plus optional overlays.

    Args:
        paths: Overlay files, applied after the packaged defaults.
        include_defaults: If False, only `paths` are loaded.
    """
    all_paths: List[Union[str, Path]] = list(default_rule_files()) if include_defaults else []
    all_paths.extend(paths)
    return cls([load_rule_file(p) for p in all_paths])

  def _finalize(self, canonical_name: str, rule: ComponentRule) -> ComponentRule:
    update: Dict[str, Any] = {"canonical_name": canonical_name}
    if rule.target and not rule.target_module:
      update["target_module"] = self._default_target_module
    return rule.model_copy(update=update)

  @staticmethod
  def _iter_labeled(
    components: Dict[str, ComponentRule], subs: Dict[str, Dict[str, ComponentRule]]
  ) -> Iterator[Tuple[str, ComponentRule]]:
    for name, rule in components.items():
      yield f"components.{name}", rule
    for parent, children in subs.items():
      for child, rule in children.items():
        yield f"sub_components.{parent}.{child}", rule

  def _check_module(self, label: str, module: Optional[str]) -> List[str]:
    if module is None:
      return [f"{label}: no target_module and no default_target_module declared"]
    if module not in self._target_modules:
      return [f"{label}: target module '{module}' is not declared in target_modules"]
    return []

  def _check_rule(self, label: str, rule: ComponentRule) -> List[str]:
    problems: List[str] = []
    if rule.is_graft:
      if rule.target:
        problems.append(f"{label}: graft rule must not declare a target")
    elif not rule.target:
      problems.append(f"{label}: missing target")
    else:
      problems.extend(self._check_module(label, rule.target_module))

    for struct in rule.structural:
      if struct.kind == StructuralKind.WRAP:
        problems.extend(self._check_module(f"{label}.wrap", struct.target_module or self._default_target_module))
    return problems

  # --- Lookups ---

  @property
  def source_library(self) -> str:
    return self._source_library

  @property
  def target_modules(self) -> Tuple[str, ...]:
    return self._target_modules

  @property
  def default_target_module(self) -> Optional[str]:
    return self._default_target_module

  @property
  def components(self) -> Mapping[str, ComponentRule]:
    return self._components

  @property
  def sub_components(self) -> Mapping[str, Mapping[str, ComponentRule]]:
    return self._sub_components

  @property
  def style_rules(self) -> Tuple[StyleRule, ...]:
    return self._style_rules

  def lookup_component(self, canonical_name: str) -> Optional[ComponentRule]:
    """
    Finds the rule for a top-level component.

    Args:
        canonical_name: Name exported by the source library (e.g. 'Button').

    Returns:
        Optional[ComponentRule]: The rule, or None if unmapped.
    """
    return self._components.get(canonical_name)

  def lookup_sub_component(self, parent_canonical_name: str, child_property: str) -> Optional[ComponentRule]:
    """
    Finds the rule for a member-style reference such as ``Card.Body``.

    Args:
        parent_canonical_name: Canonical name of the parent component.
        child_property: The member name.

    Returns:
        Optional[ComponentRule]: The rule, or None if unmapped.
    """
    children = self._sub_components.get(parent_canonical_name)
    if children is None:
      return None
    return children.get(child_property)

  def rule_count(self) -> int:
    return len(self._components) + sum(len(c) for c in self._sub_components.values())


@lru_cache(maxsize=1)
def get_default_registry() -> RuleRegistry:
  """Returns the shared registry built from the packaged rule files."""
  return RuleRegistry.from_files()
