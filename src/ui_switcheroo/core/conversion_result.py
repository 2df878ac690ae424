"""
Data structures representing the output of the migration pipeline.

- `RewriteResult`: tree-level result threaded through every engine pass.
- `ConversionResult`: text-level result (pydantic) returned to hosts.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from ui_switcheroo.core.diagnostics import Diagnostic
from ui_switcheroo.core.jsx.nodes import Module


@dataclass
class RewriteResult:
  """
  Outcome of a tree-level operation.

  Attributes:
      changed: False means the tree was not modified at all and serializes
          to the exact input text.
      tree: The (possibly mutated) module.
      diagnostics: Recoverable issues found during the pass.
  """

  changed: bool
  tree: Module
  diagnostics: List[Diagnostic] = field(default_factory=list)


class ConversionResult(BaseModel):
  """
  Container for the result of migrating one source text.
  """

  code: str = Field(default="", description="The migrated source code.")
  changed: bool = Field(default=False, description="True if any rule was applied.")
  errors: List[str] = Field(default_factory=list, description="Messages treated as failures.")
  warnings: List[str] = Field(default_factory=list, description="Recoverable diagnostics.")
  diagnostics: List[Dict[str, Any]] = Field(default_factory=list, description="Structured diagnostic records.")
  success: bool = Field(default=True, description="False if the host policy turned diagnostics into failures.")
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="Execution trace log data.")

  @property
  def has_errors(self) -> bool:
    """
    Check if the result contains any error messages.

    Returns:
        True if one or more errors are present.
    """
    return len(self.errors) > 0
