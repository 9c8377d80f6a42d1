# -*- coding: utf-8 -*-
"""
brain.errors

Exceptions raised inside the incident engine.

Helpers (parser, completion client, prompt builder) raise these;
IncidentWorkflowEngine.process_message is the only place that catches them
and turns them into a chat-style error reply.
"""

from typing import Optional


class IncidentEngineError(Exception):
    """Base class for every error the engine knows how to answer."""

    kind = "engine_error"


class ClassificationFormatError(IncidentEngineError):
    """Model output could not be read as the expected JSON shape."""

    kind = "format_error"

    def __init__(self, message: str, raw_response: Optional[str] = None):
        super().__init__(message)
        self.raw_response = raw_response


class BackendUnavailableError(IncidentEngineError):
    """The text-completion call itself failed."""

    kind = "backend_unavailable"


class InvalidStateError(IncidentEngineError):
    """No handler exists for the context's workflow state."""

    kind = "invalid_state"


class PromptTemplateError(IncidentEngineError):
    """A template placeholder had no value to substitute."""

    kind = "prompt_template"
