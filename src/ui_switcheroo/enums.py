"""
Enumerations for ui-switcheroo.

This module defines the standard enumerations shared by the rule registry,
the element rewriter and the diagnostics channel.
"""

from enum import Enum


class PropRuleKind(str, Enum):
  """
  Discriminator for the tagged `PropRule` variants in the rule JSON files.
  """

  RENAME = "rename"
  VALUE_MAP = "value_map"
  EXPAND = "expand"
  DROP = "drop"


class StructuralKind(str, Enum):
  """
  Discriminator for structural rules (edits between a node and its parent).
  """

  GRAFT = "graft"  # splice own children into the parent's slot, delete self
  WRAP = "wrap"  # wrap own children in a new target element
  LIFT = "lift"  # move own children into one of own attributes


class NodeState(str, Enum):
  """
  Per-node states of the element rewriter state machine.
  """

  UNVISITED = "unvisited"
  RESOLVED = "resolved"
  UNTOUCHED = "untouched"
  RENAMED = "renamed"
  RESTRUCTURED = "restructured"
  DONE = "done"


class Severity(str, Enum):
  """Severity attached to a diagnostic record."""

  INFO = "info"
  WARNING = "warning"
  ERROR = "error"


class DiagnosticKind(str, Enum):
  """
  Recoverable outcomes reported through the diagnostics channel.

  `UNRESOLVED_ALIAS` is part of the taxonomy but is never emitted: a tag that
  no source import binds is simply not applicable.
  """

  UNRESOLVED_ALIAS = "unresolved_alias"
  UNMAPPED_COMPONENT = "unmapped_component"
  UNMAPPED_SUB_COMPONENT = "unmapped_sub_component"
  DYNAMIC_VALUE_SKIPPED = "dynamic_value_skipped"
  STRUCTURAL_TARGET_MISSING = "structural_target_missing"
