# app_fastapi.py
# -*- coding: utf-8 -*-

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import CORS_ALLOW_ORIGINS
from core.logging import logger
from routers import chat, health, session

# ============================================================
# FastAPI app (Swagger description included)
# ============================================================

app = FastAPI(
    title="Incident Reporting Chat API",
    description="""
Backend of the **workplace incident reporting chat**.

- The frontend sends each user message (plus an optional image reference)
  with a session id to `POST /api/chat`.
- The backend
  - classifies the incident (HUMAN / FACILITY / EMERGENCY) and asks the user to confirm it
  - shows support resources or emergency numbers
  - collects the details of the report over several turns
  - generates a report summary ready for submission
- Conversation state lives in memory only and is lost on restart.
""",
    version="1.0.0",
)

# CORS: "*" during development, restrict with CORS_ALLOW_ORIGINS in deployment
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(chat.router)
app.include_router(session.router)

logger.info("Registered routes: " + ", ".join(r.path for r in app.routes))


# uvicorn entry point
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app_fastapi:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
