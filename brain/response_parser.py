# -*- coding: utf-8 -*-
"""
brain.response_parser

Reads the JSON object out of raw model text.

Models often wrap the JSON in prose or ```json fences, so the object is
located by the first "{" and the last "}" and only that slice is decoded.
A literal "}" after the object (inside trailing prose) still breaks the
slice; that case surfaces as a ClassificationFormatError like any other
bad output.

- extract_json_block(text)
- parse_json_response(text) -> dict
- require_key(data, key)
- parse_classification(text) -> IncidentClassification
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict

from core.logging import logger

from .errors import ClassificationFormatError
from .session_state import IncidentType

DEFAULT_CONFIDENCE = 0.5
DEFAULT_REASONING = "No reasoning provided"


@dataclass(frozen=True)
class IncidentClassification:
    type: IncidentType
    confidence: float
    reasoning: str


def extract_json_block(text: str) -> str:
    """
    Slice from the first "{" to the last "}" inclusive.
    Without a usable brace pair the trimmed text is returned as-is
    (and will then fail to decode).
    """
    trimmed = (text or "").strip()

    start = trimmed.find("{")
    end = trimmed.rfind("}")
    if start != -1 and end != -1 and end > start:
        return trimmed[start:end + 1]

    return trimmed


def parse_json_response(text: str) -> Dict[str, Any]:
    block = extract_json_block(text)
    try:
        data = json.loads(block)
    except (json.JSONDecodeError, TypeError) as e:
        logger.error(f"Failed to parse JSON response: {text!r}")
        raise ClassificationFormatError("Invalid JSON response format", raw_response=text) from e

    if not isinstance(data, dict):
        raise ClassificationFormatError("Expected a JSON object", raw_response=text)
    return data


def require_key(data: Dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ClassificationFormatError(f"Response is missing '{key}'")
    return data[key]


def _clamp_confidence(value: Any) -> float:
    try:
        confidence = float(value)
    except (TypeError, ValueError):
        return DEFAULT_CONFIDENCE
    return min(1.0, max(0.0, confidence))


def parse_classification(text: str) -> IncidentClassification:
    data = parse_json_response(text)

    type_raw = require_key(data, "type")
    try:
        incident_type = IncidentType(str(type_raw).strip().upper())
    except ValueError as e:
        raise ClassificationFormatError(
            f"Unknown incident type: {type_raw!r}", raw_response=text
        ) from e

    confidence = _clamp_confidence(data.get("confidence", DEFAULT_CONFIDENCE))
    reasoning = data.get("reasoning") or DEFAULT_REASONING

    logger.info(f"Classified as {incident_type.value} with confidence {confidence}")
    return IncidentClassification(
        type=incident_type,
        confidence=confidence,
        reasoning=str(reasoning),
    )
