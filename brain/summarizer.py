# brain/summarizer.py
# -*- coding: utf-8 -*-
"""
brain.summarizer

Turns the collected fields into the final report summary.

- summarize_report(ctx, llm):
    summary prompt -> LLM -> {"summary": "..."}.
    The summary must be a non-empty string; anything else raises
    ClassificationFormatError and the turn fails as a whole.
"""

from core.logging import logger

from .errors import ClassificationFormatError
from .llm_client import TextCompletion
from .prompts import build_summary_prompt
from .response_parser import parse_json_response, require_key
from .session_state import ConversationContext


def summarize_report(ctx: ConversationContext, llm: TextCompletion) -> str:
    if ctx.incident_type is None:
        raise ClassificationFormatError("Cannot summarize a report without an incident type")

    prompt = build_summary_prompt(
        ctx.incident_type,
        ctx.initial_message or "",
        ctx.collected_fields,
    )
    raw = llm.complete(prompt)
    data = parse_json_response(raw)

    summary = require_key(data, "summary")
    summary = str(summary).strip() if summary is not None else ""
    if not summary or summary.lower() == "null":
        raise ClassificationFormatError("Summary is empty", raw_response=raw)

    logger.info(f"[{ctx.session_id}] report summary generated ({len(summary)} chars)")
    return summary
