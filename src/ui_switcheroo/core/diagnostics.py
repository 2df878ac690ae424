"""
Diagnostics Channel.

Recoverable outcomes of a migration (unmapped components, skipped dynamic
values, failed structural edits) are reported as `Diagnostic` records to a
`DiagnosticSink`. The engine never raises for them; the host decides whether
they are warnings or failures.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

from ui_switcheroo.enums import DiagnosticKind, Severity


@dataclass(frozen=True)
class Diagnostic:
  """
  A single diagnostic record.

  Attributes:
      severity: How serious the issue is.
      kind: Taxonomy entry.
      canonical_name: The library symbol concerned (e.g. 'Card.Footer').
      line: 1-based line of the node (0 if unknown).
      column: 1-based column of the node (0 if unknown).
      message: Human readable explanation.
  """

  severity: Severity
  kind: DiagnosticKind
  canonical_name: str
  line: int = 0
  column: int = 0
  message: str = ""

  def format(self) -> str:
    loc = f"{self.line}:{self.column}" if self.line else "?"
    return f"[{loc}] {self.kind.value}: {self.message}"

  def to_dict(self) -> Dict[str, Any]:
    return {
      "severity": self.severity.value,
      "kind": self.kind.value,
      "canonical_name": self.canonical_name,
      "line": self.line,
      "column": self.column,
      "message": self.message,
    }


class DiagnosticSink(Protocol):
  """Receiver of diagnostics."""

  def report(self, diagnostic: Diagnostic) -> None: ...


class DiagnosticCollector:
  """
  Default sink: accumulates diagnostics in emission order.
  """

  def __init__(self) -> None:
    self.diagnostics: List[Diagnostic] = []

  def report(self, diagnostic: Diagnostic) -> None:
    self.diagnostics.append(diagnostic)

  def of_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
    return [d for d in self.diagnostics if d.kind == kind]

  def __len__(self) -> int:
    return len(self.diagnostics)


def make_diagnostic(
  kind: DiagnosticKind,
  canonical_name: str,
  message: str,
  node: Optional[Any] = None,
  severity: Severity = Severity.WARNING,
) -> Diagnostic:
  """
  Builds a diagnostic, taking the location from a tree node if given.

  Args:
      kind: Taxonomy entry.
      canonical_name: Symbol concerned.
      message: Explanation.
      node: Optional node with `line` / `column` attributes.
      severity: Defaults to WARNING.
  """
  line = getattr(node, "line", 0) if node is not None else 0
  column = getattr(node, "column", 0) if node is not None else 0
  return Diagnostic(
    severity=severity,
    kind=kind,
    canonical_name=canonical_name,
    line=line,
    column=column,
    message=message,
  )
