# core/logging.py
# -*- coding: utf-8 -*-

import re
import sys
import json
import hashlib
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from . import config

# ------------------------------------------------
# Console logger
# ------------------------------------------------
logger = logging.getLogger("incident_chat")
logger.setLevel(logging.DEBUG)

if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        "[%(asctime)s] [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


# ------------------------------------------------
# JSONL event log
# ------------------------------------------------
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")
_MAX_NAME_LEN = 80


def event_log_path(session_id: str) -> Path:
    """
    File for one session's events under config.LOG_DIR.

    Session ids are opaque client strings: anything outside [A-Za-z0-9_.-]
    becomes "_", and ids that had to be changed or are too long get a
    short sha256 suffix so two different ids never share a file.
    """
    name = _UNSAFE_CHARS.sub("_", session_id)
    if name != session_id or len(name) > _MAX_NAME_LEN or name.strip(".") == "":
        digest = hashlib.sha256(session_id.encode("utf-8")).hexdigest()[:16]
        name = f"{name[:_MAX_NAME_LEN]}-{digest}"
    return config.LOG_DIR / f"{name}.jsonl"


def log_event(session_id: str, payload: Dict[str, Any]) -> None:
    """
    Append one JSON line to the per-session event log.
    Used for after-the-fact analysis of conversations.

    Values that are not JSON serializable (enums, datetimes) are written
    with str(). Write failures are logged and never reach the caller.
    """
    if not config.EVENT_LOG_ENABLED:
        return

    record = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "session_id": session_id,
        **payload,
    }

    try:
        log_path = event_log_path(session_id)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        with log_path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")
    except OSError as e:
        logger.warning(f"Event log write failed for session {session_id!r}: {e}")
