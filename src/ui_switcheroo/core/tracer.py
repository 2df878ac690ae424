"""
Migration Trace Logger.

Records the step-by-step execution of a migration as JSON-serialisable events:

1. Lifecycle phases (alias resolution, rewriting, structural pass, imports).
2. Rule matches (``Button`` -> ``@mui/material.Button``).
3. Tree mutations (attribute rewrites, grafts, import edits).
4. Warnings (diagnostics surfaced during the walk).
"""

import time
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class TraceEventType(str, Enum):
  PHASE_START = "phase_start"
  PHASE_END = "phase_end"
  RULE_MATCH = "rule_match"
  TREE_MUTATION = "tree_mutation"
  WARNING = "warning"
  IMPORT_ACTION = "import_action"


@dataclass
class TraceEvent:
  id: str
  type: TraceEventType
  timestamp: float
  description: str
  parent_id: Optional[str] = None
  metadata: Dict[str, Any] = field(default_factory=dict)


class TraceLogger:
  """
  Collects trace events for one migration run.

  Phases nest: events are attributed to the innermost open phase.
  """

  def __init__(self) -> None:
    self._events: List[TraceEvent] = []
    self._active_phases: List[str] = []

  def start_phase(self, name: str, description: str = "") -> str:
    """Opens a nested phase. Returns its id."""
    phase_id = str(uuid.uuid4())
    parent = self._active_phases[-1] if self._active_phases else None
    self._events.append(
      TraceEvent(
        id=phase_id,
        type=TraceEventType.PHASE_START,
        timestamp=time.time(),
        description=name,
        parent_id=parent,
        metadata={"detail": description},
      )
    )
    self._active_phases.append(phase_id)
    return phase_id

  def end_phase(self) -> None:
    if not self._active_phases:
      return
    phase_id = self._active_phases.pop()
    self._events.append(
      TraceEvent(
        id=str(uuid.uuid4()),
        type=TraceEventType.PHASE_END,
        timestamp=time.time(),
        description="End Phase",
        parent_id=phase_id,
      )
    )

  def log_match(self, canonical_name: str, target: str, module: Optional[str]) -> None:
    self._log_simple(
      TraceEventType.RULE_MATCH,
      f"Mapped {canonical_name} -> {target}",
      {"source": canonical_name, "target": target, "module": module},
    )

  def log_mutation(self, node: str, before: str, after: str) -> None:
    self._log_simple(TraceEventType.TREE_MUTATION, f"Transformed {node}", {"before": before, "after": after})

  def log_import(self, action: str, module: str, names: List[str]) -> None:
    self._log_simple(TraceEventType.IMPORT_ACTION, f"{action} {module}", {"names": list(names)})

  def log_warning(self, message: str) -> None:
    self._log_simple(TraceEventType.WARNING, message, {"level": "warning"})

  def _log_simple(self, evt_type: TraceEventType, desc: str, meta: Dict[str, Any]) -> None:
    parent = self._active_phases[-1] if self._active_phases else None
    self._events.append(
      TraceEvent(
        id=str(uuid.uuid4()),
        type=evt_type,
        timestamp=time.time(),
        description=desc,
        parent_id=parent,
        metadata=meta,
      )
    )

  @property
  def events(self) -> List[TraceEvent]:
    return list(self._events)

  def export(self) -> List[Dict[str, Any]]:
    """Returns the events as plain dicts for JSON serialization."""
    return [asdict(e) for e in self._events]
