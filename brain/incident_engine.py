# -*- coding: utf-8 -*-
"""
Incident chat engine: one user turn in, one chat response out.

Flow per turn
-------------
session lock -> load context -> work on a copy -> handler for the current
state (zero or more LLM round trips) -> write the copy back -> response.

If anything fails half way (bad model output, backend down), the copy is
dropped: the stored context is exactly what it was before the turn, so the
client can simply send the same message again.

States
------
INITIAL                               classify the first message
AWAITING_CLASSIFICATION_CONFIRMATION  yes -> CLASSIFICATION_CONFIRMED, no -> INITIAL
CLASSIFICATION_CONFIRMED              branch on incident type (same turn)
AWAITING_REPORT_CONFIRMATION          HUMAN only: draft a report or close
COLLECTING_DETAILS                    extract fields, summarize when complete
EMERGENCY_ACTIVE                      extract location/person/condition, alert once
REPORT_READY, COMPLETED               terminal, informational replies only
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Optional

from core import config
from core.logging import logger, log_event

from . import builders
from .builders import (
    build_context_response,
    build_error_response,
    GENERIC_ERROR_MESSAGE,
)
from .classifier import (
    classify_incident,
    is_affirmative_reply,
    is_classification_confirmed,
    wants_report,
)
from .errors import ClassificationFormatError, IncidentEngineError, InvalidStateError
from .field_collector import collect_fields
from .llm_client import CompletionClient, TextCompletion
from .resources import EmergencyNumbers, ResourceProvider
from .session_state import (
    ConversationContext,
    IncidentType,
    MANDATORY_FIELDS,
    REQUIRED_FIELDS,
    WorkflowState,
)
from .session_store import SessionStore
from .summarizer import summarize_report
from .utils_text import preview

AlertNotifier = Callable[[ConversationContext], None]
Handler = Callable[[ConversationContext, str, Optional[str]], Dict[str, Any]]

INVALID_STATE_MESSAGE = "I encountered an error: Invalid workflow state"
EMPTY_MESSAGE_REPLY = "Could you please describe what happened?"


def _state_name(state: Any) -> str:
    return state.value if isinstance(state, WorkflowState) else str(state)


def log_emergency_alert(ctx: ConversationContext) -> None:
    """Default responder notification: a WARNING line plus an event record."""
    location = ctx.get_field("location")
    logger.warning(f"EMERGENCY ALERT: Location confirmed - {location}")
    log_event(
        ctx.session_id,
        {
            "type": "emergency_alert",
            "location": location,
            "collected_fields": dict(ctx.collected_fields),
        },
    )


class IncidentWorkflowEngine:
    """
    Drives the reporting workflow for every session in the store.

    llm, store, resources, numbers and alert notifier are injectable;
    the defaults talk to OpenAI and keep sessions in memory.
    """

    def __init__(
        self,
        llm: Optional[TextCompletion] = None,
        store: Optional[SessionStore] = None,
        resources: Optional[ResourceProvider] = None,
        emergency_numbers: Optional[EmergencyNumbers] = None,
        notify_alert: Optional[AlertNotifier] = None,
        affirmation_fallback: bool = config.AFFIRMATION_LLM_FALLBACK,
    ):
        self.llm = llm if llm is not None else CompletionClient()
        self.store = store if store is not None else SessionStore()
        self.resources = resources if resources is not None else ResourceProvider()
        self.emergency_numbers = emergency_numbers or EmergencyNumbers.from_config()
        self.notify_alert = notify_alert or log_emergency_alert
        self.affirmation_fallback = affirmation_fallback

        self._handlers: Dict[WorkflowState, Handler] = {
            WorkflowState.INITIAL: self._handle_initial,
            WorkflowState.AWAITING_CLASSIFICATION_CONFIRMATION: self._handle_classification_confirmation,
            WorkflowState.CLASSIFICATION_CONFIRMED: self._handle_classification_confirmed,
            WorkflowState.AWAITING_REPORT_CONFIRMATION: self._handle_report_confirmation,
            WorkflowState.COLLECTING_DETAILS: self._handle_details_collection,
            WorkflowState.EMERGENCY_ACTIVE: self._handle_emergency,
            WorkflowState.REPORT_READY: self._handle_report_ready,
            WorkflowState.COMPLETED: self._handle_completed,
        }

    # -------------------------------------------------------------
    # Entry point
    # -------------------------------------------------------------
    def process_message(
        self,
        session_id: str,
        message: str,
        image_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        logger.info(f"Processing message for session: {session_id}")

        with self.store.session_lock(session_id):
            stored = self.store.get_or_create(session_id)
            state_before = stored.workflow_state
            state_name = _state_name(state_before)
            # the error reply only echoes states the API knows about
            reply_state = state_before if isinstance(state_before, WorkflowState) else None
            ctx = stored.copy()

            try:
                response = self._dispatch(ctx, message, image_url)
            except InvalidStateError as e:
                logger.error(f"[{session_id}] {e}")
                self._log_failure(session_id, state_name, message, e.kind, str(e))
                return build_error_response(INVALID_STATE_MESSAGE, reply_state, e.kind)
            except IncidentEngineError as e:
                logger.warning(f"[{session_id}] turn failed in {state_name}: {e}")
                self._log_failure(session_id, state_name, message, e.kind, str(e))
                return build_error_response(GENERIC_ERROR_MESSAGE, reply_state, e.kind)
            except Exception as e:
                logger.exception(f"[{session_id}] unexpected error in {state_name}")
                self._log_failure(session_id, state_name, message, "internal_error", str(e))
                return build_error_response(GENERIC_ERROR_MESSAGE, reply_state, "internal_error")

            self.store.update(ctx)

        log_event(
            session_id,
            {
                "type": "turn",
                "state_before": state_name,
                "state_after": ctx.workflow_state.value,
                "input_text": message,
                "image_url": image_url,
                "response": response,
            },
        )
        logger.info(
            f"[{session_id}] {state_name} -> {ctx.workflow_state.value}: "
            f"{preview(response.get('message', ''))}"
        )
        return response

    def clear_session(self, session_id: str) -> bool:
        return self.store.clear(session_id)

    def _dispatch(self, ctx: ConversationContext, message: str, image_url: Optional[str]) -> Dict[str, Any]:
        handler = self._handlers.get(ctx.workflow_state)
        if handler is None:
            raise InvalidStateError(f"Invalid workflow state: {ctx.workflow_state!r}")
        return handler(ctx, message, image_url)

    def _log_failure(self, session_id: str, state: str, message: str, kind: str, detail: str) -> None:
        log_event(
            session_id,
            {
                "type": "turn_error",
                "state": state,
                "input_text": message,
                "error": kind,
                "detail": detail,
            },
        )

    # -------------------------------------------------------------
    # 1) INITIAL: classify
    # -------------------------------------------------------------
    def _handle_initial(self, ctx, message, image_url):
        if not (message or "").strip():
            return build_context_response(ctx, EMPTY_MESSAGE_REPLY)

        if ctx.initial_message is None:
            ctx.initial_message = message
        if image_url and not ctx.image_url:
            ctx.image_url = image_url

        has_image = bool(image_url or ctx.image_url)
        classification = classify_incident(message, has_image, self.llm)

        ctx.incident_type = classification.type
        ctx.classification_confidence = classification.confidence
        ctx.classification_reasoning = classification.reasoning
        ctx.set_state(WorkflowState.AWAITING_CLASSIFICATION_CONFIRMATION)

        return build_context_response(
            ctx,
            builders.classification_question(classification.type, classification.reasoning),
            suggested_actions=list(builders.CLASSIFICATION_ACTIONS),
            metadata={
                "confidence": classification.confidence,
                "reasoning": classification.reasoning,
            },
        )

    # -------------------------------------------------------------
    # 2) Is the classification correct?
    # -------------------------------------------------------------
    def _is_yes(self, message: str, keyword_check: Callable[[str], bool]) -> bool:
        if keyword_check(message):
            return True
        if self.affirmation_fallback:
            return is_affirmative_reply(message, self.llm)
        return False

    def _handle_classification_confirmation(self, ctx, message, image_url):
        if self._is_yes(message, is_classification_confirmed):
            ctx.set_state(WorkflowState.CLASSIFICATION_CONFIRMED)
            return self._handle_classification_confirmed(ctx, message, image_url)

        # collected_fields from the rejected episode are kept
        ctx.incident_type = None
        ctx.set_state(WorkflowState.INITIAL)
        return build_context_response(ctx, builders.RECLASSIFY_MESSAGE)

    # -------------------------------------------------------------
    # 3) Confirmed: branch on incident type
    # -------------------------------------------------------------
    def _handle_classification_confirmed(self, ctx, message, image_url):
        logger.info(f"Handling post-classification actions for type: {ctx.incident_type}")

        if ctx.incident_type is IncidentType.HUMAN:
            return self._start_human(ctx)
        if ctx.incident_type is IncidentType.FACILITY:
            return self._start_facility(ctx)
        if ctx.incident_type is IncidentType.EMERGENCY:
            return self._start_emergency(ctx)

        raise InvalidStateError("Classification confirmed without an incident type")

    def _start_human(self, ctx):
        resources = self.resources.resources_for(IncidentType.HUMAN)
        ctx.set_state(WorkflowState.AWAITING_REPORT_CONFIRMATION)

        return build_context_response(
            ctx,
            builders.human_support_message(resources),
            resources=resources,
            suggested_actions=list(builders.REPORT_OFFER_ACTIONS),
        )

    def _start_facility(self, ctx):
        # a photo sent with the first message already answers "picture"
        if ctx.image_url and not ctx.has_field("picture"):
            ctx.update_field("picture", ctx.image_url)
        ctx.set_state(WorkflowState.COLLECTING_DETAILS)

        return build_context_response(
            ctx,
            builders.FACILITY_START_MESSAGE,
            metadata={"requiredFields": list(REQUIRED_FIELDS[IncidentType.FACILITY])},
        )

    def _start_emergency(self, ctx):
        ctx.set_state(WorkflowState.EMERGENCY_ACTIVE)

        return build_context_response(
            ctx,
            builders.emergency_protocol_message(self.emergency_numbers),
            metadata={
                "isEmergency": True,
                "emergencyNumbers": self.emergency_numbers.as_dict(),
                "requiredFields": list(REQUIRED_FIELDS[IncidentType.EMERGENCY]),
            },
        )

    # -------------------------------------------------------------
    # 4) HUMAN: draft a report?
    # -------------------------------------------------------------
    def _handle_report_confirmation(self, ctx, message, image_url):
        if self._is_yes(message, wants_report):
            ctx.set_state(WorkflowState.COLLECTING_DETAILS)
            return build_context_response(
                ctx,
                builders.HUMAN_REPORT_START_MESSAGE,
                metadata={"requiredFields": list(REQUIRED_FIELDS[IncidentType.HUMAN])},
            )

        ctx.set_state(WorkflowState.COMPLETED)
        return build_context_response(ctx, builders.DECLINED_REPORT_MESSAGE)

    # -------------------------------------------------------------
    # 5) Collect details, summarize when complete
    # -------------------------------------------------------------
    def _handle_details_collection(self, ctx, message, image_url):
        if ctx.incident_type is None:
            raise InvalidStateError("Collecting details without an incident type")
        logger.info(f"Collecting details for {ctx.incident_type.value} incident")

        if image_url and ctx.incident_type is IncidentType.FACILITY:
            ctx.update_field("picture", image_url)

        result = collect_fields(ctx, message, self.llm)
        missing = ctx.missing_fields(MANDATORY_FIELDS[ctx.incident_type])

        if result.done and not missing:
            summary = summarize_report(ctx, self.llm)
            ctx.update_field("summary", summary)
            ctx.set_state(WorkflowState.REPORT_READY)

            return build_context_response(
                ctx,
                builders.report_summary_message(summary),
                suggested_actions=list(builders.SUBMIT_ACTIONS),
                metadata={
                    "summary": summary,
                    "collectedFields": dict(ctx.collected_fields),
                },
            )

        if result.done:
            logger.info(f"[{ctx.session_id}] model reported completion, still missing {missing}")
            reply = builders.MISSING_FIELDS_MESSAGE.format(fields=", ".join(missing))
        else:
            reply = self._require_message(result.message)

        return build_context_response(
            ctx,
            reply,
            metadata={
                "collectedFields": dict(ctx.collected_fields),
                "missingFields": missing,
            },
        )

    # -------------------------------------------------------------
    # 6) Emergency (absorbing state)
    # -------------------------------------------------------------
    def _handle_emergency(self, ctx, message, image_url):
        logger.warning(f"Handling emergency flow for session: {ctx.session_id}")

        result = collect_fields(ctx, message, self.llm, IncidentType.EMERGENCY)

        # the alert confirmation is sent on the first located turn only;
        # later turns get the model's follow-up question instead
        if result.done and ctx.has_field("location") and not ctx.emergency_alert_sent:
            location = ctx.get_field("location")
            self._send_alert(ctx)

            return build_context_response(
                ctx,
                builders.emergency_alert_message(location),
                metadata={
                    "alertSent": True,
                    "location": location,
                    "collectedFields": dict(ctx.collected_fields),
                },
            )

        metadata: Dict[str, Any] = {
            "alertSent": ctx.emergency_alert_sent,
            "collectedFields": dict(ctx.collected_fields),
        }
        if ctx.emergency_alert_sent:
            metadata["location"] = ctx.get_field("location")

        return build_context_response(ctx, self._require_message(result.message), metadata=metadata)

    def _send_alert(self, ctx) -> None:
        # fire-and-forget: delivery is not verified and a failing notifier
        # does not fail the user's turn
        try:
            self.notify_alert(ctx)
        except Exception:
            logger.exception(f"[{ctx.session_id}] emergency notifier failed")
        ctx.emergency_alert_sent = True
        ctx.touch()

    # -------------------------------------------------------------
    # 7) Terminal states
    # -------------------------------------------------------------
    def _handle_report_ready(self, ctx, message, image_url):
        return build_context_response(
            ctx,
            builders.REPORT_READY_MESSAGE,
            suggested_actions=list(builders.SUBMIT_ACTIONS),
            metadata={"summary": ctx.get_field("summary")},
        )

    def _handle_completed(self, ctx, message, image_url):
        return build_context_response(ctx, builders.COMPLETED_MESSAGE)

    @staticmethod
    def _require_message(message: Optional[str]) -> str:
        if message is None or not message.strip():
            raise ClassificationFormatError("Response is missing 'message'")
        return message


# -------------------------------------------------
# Module-level engine used by the API and the console demo
# -------------------------------------------------
_default_engine: Optional[IncidentWorkflowEngine] = None
_default_engine_lock = threading.Lock()


def get_engine() -> IncidentWorkflowEngine:
    global _default_engine
    with _default_engine_lock:
        if _default_engine is None:
            _default_engine = IncidentWorkflowEngine()
        return _default_engine


def process_message(session_id: str, message: str, image_url: Optional[str] = None) -> Dict[str, Any]:
    return get_engine().process_message(session_id, message, image_url)
