# routers/session.py
from fastapi import APIRouter, Depends, HTTPException

from brain import IncidentWorkflowEngine, get_engine

router = APIRouter()


@router.get(
    "/api/session/{session_id}",
    summary="Current conversation context (debug)",
    tags=["session"],
)
def get_session(session_id: str, engine: IncidentWorkflowEngine = Depends(get_engine)):
    ctx = engine.store.get(session_id)
    if ctx is None:
        raise HTTPException(status_code=404, detail="Unknown session")
    return ctx.debug_view()


@router.delete(
    "/api/session/{session_id}",
    summary="Forget a conversation",
    tags=["session"],
)
def clear_session(session_id: str, engine: IncidentWorkflowEngine = Depends(get_engine)):
    return {"sessionId": session_id, "cleared": engine.clear_session(session_id)}
