# brain/classifier.py
# -*- coding: utf-8 -*-
"""
Incident classification and yes/no detection.

Role
----
- classify_incident(message, has_image, llm):
    asks the model for HUMAN / FACILITY / EMERGENCY with a confidence score.
- is_classification_confirmed(text):
    keyword check after "Is this correct?" (yes / correct / right).
- wants_report(text):
    keyword check after "Would you like me to help you draft a report?"
    (yes / help).
- is_affirmative_reply(reply, llm):
    small LLM judge for replies the keyword checks do not recognise.

Note
----
The keyword checks are plain substring matches, so "not right" still counts
as a yes. That is the documented behaviour of the confirmation step; the LLM
judge is only consulted when no keyword matches at all.
"""

from __future__ import annotations

from core.logging import logger

from .llm_client import TextCompletion
from .prompts import build_affirmation_prompt, build_classification_prompt
from .response_parser import IncidentClassification, parse_classification, parse_json_response
from .utils_text import as_bool, contains_any, normalize

# ------------------------------------------------------------
# 1. Confirmation keywords
# ------------------------------------------------------------

CONFIRM_CLASSIFICATION_KEYWORDS = [
    "yes",
    "correct",
    "right",
]

CONFIRM_REPORT_KEYWORDS = [
    "yes",
    "help",
]


def is_classification_confirmed(text: str) -> bool:
    return contains_any(normalize(text), CONFIRM_CLASSIFICATION_KEYWORDS)


def wants_report(text: str) -> bool:
    return contains_any(normalize(text), CONFIRM_REPORT_KEYWORDS)


# ------------------------------------------------------------
# 2. LLM calls
# ------------------------------------------------------------

def classify_incident(message: str, has_image: bool, llm: TextCompletion) -> IncidentClassification:
    """One classification round trip. Raises ClassificationFormatError on bad output."""
    prompt = build_classification_prompt(message, has_image)
    raw = llm.complete(prompt)
    return parse_classification(raw)


def is_affirmative_reply(reply: str, llm: TextCompletion) -> bool:
    """
    Ask the model whether a short reply means "yes".

    A blank reply is never affirmative and costs no LLM call.
    A response without the "affirmative" key counts as False.
    """
    trimmed = (reply or "").strip()
    if not trimmed:
        return False

    raw = llm.complete(build_affirmation_prompt(trimmed))
    data = parse_json_response(raw)

    affirmative = as_bool(data.get("affirmative", False))
    logger.debug(f"Affirmation judge: {trimmed!r} -> {affirmative}")
    return affirmative
