# -*- coding: utf-8 -*-
"""
brain.builders

Packs engine results into the response shape the chat frontend reads:

{
  "message": str,
  "incidentType": "HUMAN" | "FACILITY" | "EMERGENCY",   (optional)
  "workflowState": "<WorkflowState>",
  "suggestedActions": [str, ...],                       (optional)
  "resources": [str, ...],                              (optional)
  "metadata": {...}                                     (optional)
}

Keys whose value is None are left out.
Also holds the fixed user-facing texts of the workflow.
"""

from typing import Any, Dict, List, Optional

from .resources import EmergencyNumbers
from .session_state import ConversationContext, IncidentType, WorkflowState

GENERIC_ERROR_MESSAGE = "I encountered an error processing your request. Please try again."


def build_chat_response(
    message: str,
    workflow_state: Optional[WorkflowState],
    incident_type: Optional[IncidentType] = None,
    suggested_actions: Optional[List[str]] = None,
    resources: Optional[List[str]] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    response: Dict[str, Any] = {
        "message": message,
        "incidentType": incident_type.value if incident_type else None,
        "workflowState": workflow_state.value if workflow_state else None,
        "suggestedActions": suggested_actions,
        "resources": resources,
        "metadata": metadata,
    }
    return {key: value for key, value in response.items() if value is not None}


def build_context_response(ctx: ConversationContext, message: str, **extra: Any) -> Dict[str, Any]:
    """Shortcut: state and incident type taken from the context."""
    return build_chat_response(
        message,
        ctx.workflow_state,
        incident_type=ctx.incident_type,
        **extra,
    )


def build_error_response(
    message: str,
    workflow_state: Optional[WorkflowState] = None,
    error_kind: Optional[str] = None,
) -> Dict[str, Any]:
    return build_chat_response(
        message,
        workflow_state,
        metadata={"error": error_kind} if error_kind else None,
    )


# ---------------------------------------------------------
# Fixed texts
# ---------------------------------------------------------

def classification_question(incident_type: IncidentType, reasoning: str) -> str:
    return (
        f"I understand this is a {incident_type.value.lower()} incident. {reasoning}"
        "\n\nIs this correct?"
    )


def human_support_message(resources: List[str]) -> str:
    lines = ["I'm here to support you through this. Here are some resources that might help:", ""]
    lines.extend(f"• {resource}" for resource in resources)
    lines.extend(["", "Would you like me to help you draft an incident report?"])
    return "\n".join(lines)


def emergency_protocol_message(numbers: EmergencyNumbers) -> str:
    return (
        "🚨 EMERGENCY PROTOCOL ACTIVATED 🚨\n"
        "\n"
        "Swiss Emergency Numbers:\n"
        f"• Police: {numbers.police}\n"
        f"• Ambulance: {numbers.ambulance}\n"
        f"• Fire: {numbers.fire}\n"
        f"• Company Samaritans: {numbers.samaritan}\n"
        "\n"
        "Please provide the LOCATION of the emergency immediately."
    )


def emergency_alert_message(location: str) -> str:
    return (
        "✅ Emergency alert sent to company Samaritans!\n"
        f"Location: {location}\n"
        "\n"
        "Help is on the way. Please stay calm.\n"
        "\n"
        "Can you provide the name of the person who needs assistance?"
    )


def report_summary_message(summary: str) -> str:
    return f"Here's a summary of your report:\n\n{summary}\n\nWould you like to submit this report?"


RECLASSIFY_MESSAGE = (
    "I apologize for the misunderstanding. "
    "Could you please provide more details about what happened?"
)
FACILITY_START_MESSAGE = (
    "I'll help you report this facility issue. Let me gather some details.\n\n"
    "Please describe what happened in detail."
)
HUMAN_REPORT_START_MESSAGE = (
    "I'll help you document this. Let me gather the necessary information.\n\n"
    "First, can you tell me who was involved?"
)
DECLINED_REPORT_MESSAGE = (
    "I understand. If you change your mind or need support, "
    "please don't hesitate to reach out."
)
REPORT_READY_MESSAGE = (
    "Your report is ready. Please choose whether to submit it, "
    "submit it anonymously, or cancel."
)
COMPLETED_MESSAGE = (
    "This conversation has been closed. "
    "Start a new session if you need to report something else."
)
MISSING_FIELDS_MESSAGE = "I still need a few more details: {fields}."

CLASSIFICATION_ACTIONS = ["Yes", "No"]
REPORT_OFFER_ACTIONS = ["Yes, help me report this", "No, thank you"]
SUBMIT_ACTIONS = ["Submit", "Submit Anonymously", "Cancel"]
