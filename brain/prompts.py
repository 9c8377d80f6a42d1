# -*- coding: utf-8 -*-
"""
brain.prompts

Prompt templates for the incident engine and the function that fills them.

Templates
---------
- CLASSIFICATION_PROMPT       : HUMAN / FACILITY / EMERGENCY + confidence
- HUMAN_DETAILS_PROMPT        : who / what / when / where
- FACILITY_DETAILS_PROMPT     : what / where / picture
- EMERGENCY_DETAILS_PROMPT    : location / personName / condition
- SUMMARY_PROMPT              : final report summary
- AFFIRMATION_PROMPT          : is a short reply a "yes"?

Placeholders are written {name}. render_template() replaces them in a
single pass: a value that itself contains "{something}" is inserted as-is.
A placeholder without a value raises PromptTemplateError.
JSON examples inside the templates ("{" followed by a newline or a space)
are not placeholders and are left alone.
"""

from __future__ import annotations

import json
import re
from enum import Enum
from typing import Dict, Mapping

from .errors import PromptTemplateError
from .session_state import IncidentType

_PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


class PromptKind(str, Enum):
    CLASSIFICATION = "classification"
    HUMAN_DETAILS = "human_details"
    FACILITY_DETAILS = "facility_details"
    EMERGENCY_DETAILS = "emergency_details"
    SUMMARY = "summary"
    AFFIRMATION = "affirmation"


# ---------------------------------------------------------
# 1) Classification
# ---------------------------------------------------------

CLASSIFICATION_PROMPT = """
You are an incident classifier for a workplace safety system.
Analyze the following message and classify it as one of these incident types:

- HUMAN: Harassment, discrimination, bullying, mental health issues, interpersonal conflicts, workplace behavior concerns
- FACILITY: Equipment damage, maintenance issues, physical hazards, broken infrastructure, building problems
- EMERGENCY: Immediate danger, medical emergency, fire, security threat, life-threatening situations

Message: {message}
Has attached image: {hasImage}

Respond ONLY with valid JSON in this exact format:
{
  "type": "HUMAN" or "FACILITY" or "EMERGENCY",
  "confidence": 0.85,
  "reasoning": "brief explanation"
}
""".strip()


# ---------------------------------------------------------
# 2) Field collection, one template per incident type
# ---------------------------------------------------------

HUMAN_DETAILS_PROMPT = """
You are a supportive HR assistant helping someone report a human incident.
Use an empathetic and understanding tone.

Current conversation context:
Initial incident: {initialMessage}

The user needs to provide these mandatory details:
- Who: Person/people involved in causing the incident
- What: Detailed description of what happened
- When: Date and time of the incident
- Where: Location where it occurred

Already collected fields: {collectedFields}

User's latest message: {userMessage}

Extract any information from the user's message that fills in the missing fields.
Then respond with helpful guidance to collect any remaining information.

Respond ONLY with valid JSON:
{
  "extractedFields": {
    "who": "extracted value or null",
    "what": "extracted value or null",
    "when": "extracted value or null",
    "where": "extracted value or null"
  },
  "message": "Your empathetic response asking for missing information",
  "allFieldsCollected": true or false
}
""".strip()

FACILITY_DETAILS_PROMPT = """
You are an assistant helping report a facility incident.

Current conversation context:
Initial incident: {initialMessage}

The user needs to provide these mandatory details:
- What: Detailed description of the facility issue
- Where: Location (will be pinned on floor plan)
- Picture: Photo of the issue (optional but recommended)

Already collected fields: {collectedFields}

User's latest message: {userMessage}

Extract any information from the user's message that fills in the missing fields.

Respond ONLY with valid JSON:
{
  "extractedFields": {
    "what": "extracted value or null",
    "where": "extracted value or null"
  },
  "message": "Your response asking for missing information",
  "allFieldsCollected": true or false
}
""".strip()

EMERGENCY_DETAILS_PROMPT = """
You are responding to an EMERGENCY situation. Be direct and clear.

Initial report: {initialMessage}

Critical information needed:
- Location: Where is the emergency? (MANDATORY)
- Person in distress: Name of the person who needs help
- Condition: Current state/medical condition

Already collected fields: {collectedFields}

User's latest message: {userMessage}

Extract information and guide the user urgently but calmly.

Respond ONLY with valid JSON:
{
  "extractedFields": {
    "location": "extracted value or null",
    "personName": "extracted value or null",
    "condition": "extracted value or null"
  },
  "message": "Your urgent but calm response",
  "hasLocation": true or false
}
""".strip()


# ---------------------------------------------------------
# 3) Report summary
# ---------------------------------------------------------

SUMMARY_PROMPT = """
Generate a professional incident report summary based on this information:

Incident Type: {incidentType}
Initial Description: {initialMessage}
Collected Details: {collectedFields}

Create a clear, concise summary suitable for official reporting.

Respond ONLY with valid JSON:
{
  "summary": "Your professional summary here"
}
""".strip()


# ---------------------------------------------------------
# 4) Affirmation check
# ---------------------------------------------------------

AFFIRMATION_PROMPT = """
You are a classifier that decides whether a short user reply is AFFIRMATIVE or NOT.

- AFFIRMATIVE means the user confirms, agrees, or wants to proceed
  (e.g. "yes", "yeah", "yep", "sure", "correct", "right", "agree",
  "proceed", "go ahead", "confirm", "ok", "okay", "fine", "sounds good",
  "let's go", "looks good", "exactly", "absolutely", "works for me").
- NOT AFFIRMATIVE means the user disagrees, rejects, corrects, or wants a change
  (e.g. "no", "nope", "nah", "not really", "wrong", "change", "different",
  "disagree", "stop", "cancel", "that's not", "is not correct",
  "no thanks", "rather not").

Respond ONLY with a JSON object in this exact format:
{ "affirmative": true }  or  { "affirmative": false }

User reply: "{reply}"
""".strip()


TEMPLATES: Dict[PromptKind, str] = {
    PromptKind.CLASSIFICATION: CLASSIFICATION_PROMPT,
    PromptKind.HUMAN_DETAILS: HUMAN_DETAILS_PROMPT,
    PromptKind.FACILITY_DETAILS: FACILITY_DETAILS_PROMPT,
    PromptKind.EMERGENCY_DETAILS: EMERGENCY_DETAILS_PROMPT,
    PromptKind.SUMMARY: SUMMARY_PROMPT,
    PromptKind.AFFIRMATION: AFFIRMATION_PROMPT,
}

DETAILS_KIND_BY_TYPE: Dict[IncidentType, PromptKind] = {
    IncidentType.HUMAN: PromptKind.HUMAN_DETAILS,
    IncidentType.FACILITY: PromptKind.FACILITY_DETAILS,
    IncidentType.EMERGENCY: PromptKind.EMERGENCY_DETAILS,
}


# ---------------------------------------------------------
# Rendering
# ---------------------------------------------------------

def render_template(template: str, values: Mapping[str, object]) -> str:
    """Replace every {name} in template with str(values[name]), once."""

    def _sub(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name not in values:
            raise PromptTemplateError(f"No value for placeholder '{{{name}}}'")
        return str(values[name])

    return _PLACEHOLDER.sub(_sub, template)


def build_prompt(kind: PromptKind, values: Mapping[str, object]) -> str:
    return render_template(TEMPLATES[kind], values)


def format_fields(fields: Mapping[str, str]) -> str:
    return json.dumps(dict(fields), ensure_ascii=False)


def build_classification_prompt(message: str, has_image: bool) -> str:
    return build_prompt(
        PromptKind.CLASSIFICATION,
        {"message": message, "hasImage": "true" if has_image else "false"},
    )


def build_details_prompt(
    incident_type: IncidentType,
    initial_message: str,
    collected_fields: Mapping[str, str],
    user_message: str,
) -> str:
    return build_prompt(
        DETAILS_KIND_BY_TYPE[incident_type],
        {
            "initialMessage": initial_message or "",
            "collectedFields": format_fields(collected_fields),
            "userMessage": user_message,
        },
    )


def build_summary_prompt(
    incident_type: IncidentType,
    initial_message: str,
    fields: Mapping[str, str],
) -> str:
    return build_prompt(
        PromptKind.SUMMARY,
        {
            "incidentType": incident_type.value,
            "initialMessage": initial_message or "",
            "collectedFields": format_fields(fields),
        },
    )


def build_affirmation_prompt(reply: str) -> str:
    return build_prompt(PromptKind.AFFIRMATION, {"reply": reply})
