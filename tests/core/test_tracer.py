"""
Tests for the TraceLogger.
"""

import json

from ui_switcheroo.core.tracer import TraceEventType, TraceLogger


def test_events_nest_under_phases():
  tracer = TraceLogger()
  outer = tracer.start_phase("Migration Pipeline", "react-bootstrap -> @mui/material")
  inner = tracer.start_phase("Element Pass")
  tracer.log_match("Button", "Button", "@mui/material")
  tracer.end_phase()
  tracer.log_import("add", "@mui/material", ["Button"])
  tracer.end_phase()

  events = tracer.events
  assert [e.type for e in events] == [
    TraceEventType.PHASE_START,
    TraceEventType.PHASE_START,
    TraceEventType.RULE_MATCH,
    TraceEventType.PHASE_END,
    TraceEventType.IMPORT_ACTION,
    TraceEventType.PHASE_END,
  ]
  assert events[1].parent_id == outer
  assert events[2].parent_id == inner
  assert events[4].parent_id == outer
  assert events[4].metadata == {"names": ["Button"]}


def test_unbalanced_end_phase_is_ignored():
  tracer = TraceLogger()
  tracer.end_phase()
  assert tracer.events == []


def test_export_is_json_serializable():
  tracer = TraceLogger()
  tracer.start_phase("Import Synthesis")
  tracer.log_warning("'Button' is already bound")
  tracer.end_phase()
  data = json.loads(json.dumps(tracer.export()))
  assert data[1]["type"] == "warning"
  assert data[1]["metadata"] == {"level": "warning"}
