# -*- coding: utf-8 -*-
"""
brain package

Core logic of the workplace incident reporting chat.

From outside (app_fastapi.py, main.py) the usual entry points are:

- process_message(session_id, message, image_url=None):
    runs one user turn through the workflow and returns the chat response
    (message, workflowState, incidentType, suggestedActions, resources,
    metadata).
- IncidentWorkflowEngine:
    the same with injectable LLM / session store / resources, for tests
    and custom wiring.

Modules
- utils_text       : normalization, keyword checks, field value cleanup
- llm_client       : OpenAI Chat wrapper (complete(prompt) -> str)
- response_parser  : JSON extraction from raw model text
- prompts          : prompt templates and single-pass rendering
- classifier       : incident classification, yes/no detection
- field_collector  : per-turn field extraction and merge
- summarizer       : final report summary
- resources        : support resources and emergency numbers
- builders         : outbound response shape and fixed texts
- session_state    : ConversationContext, WorkflowState, IncidentType
- session_store    : in-memory session map with per-session locks
- incident_engine  : the state machine
"""

from .incident_engine import IncidentWorkflowEngine, get_engine, process_message
from .session_state import ConversationContext, IncidentType, WorkflowState

__all__ = [
    "IncidentWorkflowEngine",
    "get_engine",
    "process_message",
    "ConversationContext",
    "IncidentType",
    "WorkflowState",
]
