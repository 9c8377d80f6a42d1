# -*- coding: utf-8 -*-
"""
brain.field_collector

Extraction round trip used while details are being collected.

Input:
- ctx          : the (working copy of the) conversation context
- user_message : the latest reply
- llm          : text completion backend

Output (ExtractionResult):
{
  "extracted": {"who": "...", ...},   # only values worth storing
  "message": "next question for the user" | None,
  "done": True / False                 # allFieldsCollected or hasLocation
}

The filtered values are merged into ctx.collected_fields (overwrite).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from core.logging import logger

from .errors import ClassificationFormatError
from .llm_client import TextCompletion
from .prompts import build_details_prompt
from .response_parser import parse_json_response, require_key
from .session_state import ConversationContext, IncidentType
from .utils_text import as_bool, clean_field_value

# completion flag name per incident type
DONE_FLAG_BY_TYPE = {
    IncidentType.HUMAN: "allFieldsCollected",
    IncidentType.FACILITY: "allFieldsCollected",
    IncidentType.EMERGENCY: "hasLocation",
}


# written by the engine only, never taken from extraction output
RESERVED_FIELDS = frozenset({"summary"})


@dataclass
class ExtractionResult:
    extracted: Dict[str, str] = field(default_factory=dict)
    message: Optional[str] = None
    done: bool = False


def filter_extracted_fields(raw_fields: Dict[str, Any]) -> Dict[str, str]:
    """Drop reserved names and null / "null" / empty values, stringify the rest."""
    kept: Dict[str, str] = {}
    for name, value in raw_fields.items():
        if name in RESERVED_FIELDS:
            continue
        cleaned = clean_field_value(value)
        if cleaned is not None:
            kept[name] = cleaned
    return kept


def merge_fields(ctx: ConversationContext, fields: Dict[str, str]) -> None:
    for name, value in fields.items():
        ctx.update_field(name, value)


def collect_fields(
    ctx: ConversationContext,
    user_message: str,
    llm: TextCompletion,
    incident_type: Optional[IncidentType] = None,
) -> ExtractionResult:
    """
    Build the details prompt for the incident type, call the model,
    merge what it extracted into ctx and report whether it considers
    collection done.
    """
    incident_type = incident_type or ctx.incident_type
    if incident_type is None:
        raise ClassificationFormatError("Cannot collect details without an incident type")

    prompt = build_details_prompt(
        incident_type,
        ctx.initial_message or "",
        ctx.collected_fields,
        user_message,
    )
    raw = llm.complete(prompt)
    data = parse_json_response(raw)

    raw_fields = require_key(data, "extractedFields")
    if raw_fields is None:
        raw_fields = {}
    if not isinstance(raw_fields, dict):
        raise ClassificationFormatError("'extractedFields' is not an object", raw_response=raw)

    extracted = filter_extracted_fields(raw_fields)
    merge_fields(ctx, extracted)

    message = data.get("message")
    done = as_bool(data.get(DONE_FLAG_BY_TYPE[incident_type], False))

    logger.info(
        f"[{ctx.session_id}] extracted {sorted(extracted)} "
        f"({DONE_FLAG_BY_TYPE[incident_type]}={done})"
    )
    return ExtractionResult(
        extracted=extracted,
        message=str(message) if message is not None else None,
        done=done,
    )
