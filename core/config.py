# core/config.py
# -*- coding: utf-8 -*-

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env before anything reads the environment
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# --------------------------------
# Paths / log directory
# --------------------------------

# Repository root
BASE_DIR = Path(__file__).resolve().parent.parent

# Per-session JSONL event logs
LOG_DIR = Path(os.getenv("INCIDENT_LOG_DIR", str(BASE_DIR / "data" / "logs")))
EVENT_LOG_ENABLED = _env_flag("EVENT_LOG_ENABLED", True)

# --------------------------------
# LLM (text completion backend)
# --------------------------------

# Only required once the first real completion call is made.
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")

CHAT_MODEL = os.getenv("INCIDENT_CHAT_MODEL", "gpt-4o-mini")
CHAT_TEMPERATURE = float(os.getenv("INCIDENT_CHAT_TEMPERATURE", "0.2"))
CHAT_MAX_TOKENS = int(os.getenv("INCIDENT_CHAT_MAX_TOKENS", "512"))

# When no confirmation keyword matches, ask the LLM whether the reply
# was affirmative instead of treating it as a "no".
AFFIRMATION_LLM_FALLBACK = _env_flag("AFFIRMATION_LLM_FALLBACK", False)

# --------------------------------
# Emergency numbers (Switzerland by default)
# --------------------------------

EMERGENCY_PHONE_POLICE = os.getenv("EMERGENCY_PHONE_POLICE", "117")
EMERGENCY_PHONE_AMBULANCE = os.getenv("EMERGENCY_PHONE_AMBULANCE", "144")
EMERGENCY_PHONE_FIRE = os.getenv("EMERGENCY_PHONE_FIRE", "118")
EMERGENCY_PHONE_SAMARITAN = os.getenv("EMERGENCY_PHONE_SAMARITAN", "143")

# --------------------------------
# HTTP
# --------------------------------

CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]
