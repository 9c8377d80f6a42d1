# routers/chat.py
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field, field_validator

from brain import IncidentType, IncidentWorkflowEngine, WorkflowState, get_engine
from core.logging import logger

router = APIRouter()


class ChatRequest(BaseModel):
    """
    One chat turn.
    - sessionId: conversation id chosen by the frontend
    - message: what the user typed
    - imageUrl: optional attachment (photo of the issue)
    """
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(
        ...,
        alias="sessionId",
        min_length=1,
        description="Conversation id. Reuse the same value for every turn of a conversation.",
        examples=["c3b9d2c8-1234-4f10-9f21-abcdef123456"],
    )
    message: str = Field(
        ...,
        description="User message",
        examples=["I am experiencing harassment from my colleague"],
    )
    image_url: Optional[str] = Field(
        default=None,
        alias="imageUrl",
        description="Optional attachment reference",
    )

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("message must not be empty")
        return value


class ChatResponse(BaseModel):
    """
    Chat reply.
    - workflowState: state of the conversation after this turn
    - suggestedActions: quick-reply buttons for the frontend
    - resources: support links (HUMAN incidents)
    - metadata: requiredFields, collectedFields, summary, emergencyNumbers, ...
    """
    model_config = ConfigDict(populate_by_name=True)

    message: str
    incident_type: Optional[IncidentType] = Field(default=None, alias="incidentType")
    workflow_state: Optional[WorkflowState] = Field(default=None, alias="workflowState")
    suggested_actions: Optional[List[str]] = Field(default=None, alias="suggestedActions")
    resources: Optional[List[str]] = None
    metadata: Optional[Dict[str, Any]] = None


@router.post(
    "/api/chat",
    response_model=ChatResponse,
    response_model_exclude_none=True,
    response_model_by_alias=True,
    summary="Process one chat turn",
    tags=["chat"],
)
def chat(body: ChatRequest, engine: IncidentWorkflowEngine = Depends(get_engine)):
    logger.info(f"Received chat request from session: {body.session_id}")
    result = engine.process_message(body.session_id, body.message, body.image_url)
    return ChatResponse.model_validate(result)
