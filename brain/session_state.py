# -*- coding: utf-8 -*-
"""
session_state.py

Per-session conversation state for the incident chat.

🎯 Main pieces
--------------------------------------
1) WorkflowState
   - the eight states of the reporting workflow

2) IncidentType
   - HUMAN / FACILITY / EMERGENCY

3) ConversationContext
   - everything the engine remembers about one session:
     state, incident type, first message, attachment, confidence,
     collected fields and timestamps
   - update_field() / has_field() / get_field() for the collected fields
   - copy() so a turn can work on a private copy and only commit on success

4) debug_view()
   - JSON-friendly dict of the context (used by main.py and the debug route)
"""

from __future__ import annotations

import copy as _copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------
# Enums
# ---------------------------------------------------------

class WorkflowState(str, Enum):
    INITIAL = "INITIAL"
    AWAITING_CLASSIFICATION_CONFIRMATION = "AWAITING_CLASSIFICATION_CONFIRMATION"
    CLASSIFICATION_CONFIRMED = "CLASSIFICATION_CONFIRMED"
    COLLECTING_DETAILS = "COLLECTING_DETAILS"
    AWAITING_REPORT_CONFIRMATION = "AWAITING_REPORT_CONFIRMATION"
    REPORT_READY = "REPORT_READY"
    EMERGENCY_ACTIVE = "EMERGENCY_ACTIVE"
    COMPLETED = "COMPLETED"


class IncidentType(str, Enum):
    HUMAN = "HUMAN"
    FACILITY = "FACILITY"
    EMERGENCY = "EMERGENCY"


# Fields a report must contain before it can reach REPORT_READY.
# The facility picture is recommended, not mandatory.
MANDATORY_FIELDS: Dict[IncidentType, tuple] = {
    IncidentType.HUMAN: ("who", "what", "when", "where"),
    IncidentType.FACILITY: ("what", "where"),
    IncidentType.EMERGENCY: ("location",),
}

# Fields announced to the user when collection starts.
REQUIRED_FIELDS: Dict[IncidentType, tuple] = {
    IncidentType.HUMAN: ("who", "what", "when", "where"),
    IncidentType.FACILITY: ("what", "where", "picture"),
    IncidentType.EMERGENCY: ("location", "personName", "condition"),
}


# ---------------------------------------------------------
# Context
# ---------------------------------------------------------

@dataclass
class ConversationContext:
    """
    One session's conversation state.

    collected_fields only grows: values are added or overwritten,
    never removed.
    """
    session_id: str
    workflow_state: WorkflowState = WorkflowState.INITIAL
    incident_type: Optional[IncidentType] = None

    # first user message, kept verbatim
    initial_message: Optional[str] = None
    image_url: Optional[str] = None

    classification_confidence: Optional[float] = None
    classification_reasoning: str = ""

    collected_fields: Dict[str, str] = field(default_factory=dict)

    # responder alert already dispatched for this session
    emergency_alert_sent: bool = False

    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # -----------------------------------------------------
    # collected fields
    # -----------------------------------------------------

    def update_field(self, name: str, value: str) -> None:
        self.collected_fields[name] = value
        self.touch()

    def get_field(self, name: str) -> Optional[str]:
        return self.collected_fields.get(name)

    def has_field(self, name: str) -> bool:
        value = self.collected_fields.get(name)
        return value is not None and bool(value.strip())

    def missing_fields(self, names) -> list:
        return [name for name in names if not self.has_field(name)]

    # -----------------------------------------------------
    # state
    # -----------------------------------------------------

    def set_state(self, state: WorkflowState) -> None:
        self.workflow_state = state
        self.touch()

    def touch(self) -> None:
        self.updated_at = _utcnow()

    def copy(self) -> "ConversationContext":
        return _copy.deepcopy(self)

    # -----------------------------------------------------
    # debug view
    # -----------------------------------------------------

    def debug_view(self) -> Dict[str, Any]:
        return {
            "sessionId": self.session_id,
            "workflowState": self.workflow_state.value,
            "incidentType": self.incident_type.value if self.incident_type else None,
            "initialMessage": self.initial_message,
            "imageUrl": self.image_url,
            "classificationConfidence": self.classification_confidence,
            "collectedFields": dict(self.collected_fields),
            "emergencyAlertSent": self.emergency_alert_sent,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }
