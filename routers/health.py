# routers/health.py
from fastapi import APIRouter

router = APIRouter()


@router.get("/", summary="Health check", tags=["health"])
def root():
    return {"message": "Incident Reporting Backend is running"}


@router.get("/api/health", summary="Health check", tags=["health"])
def health():
    return {"status": "ok", "message": "Incident Reporting Backend is running"}
