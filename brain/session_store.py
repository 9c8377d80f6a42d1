# -*- coding: utf-8 -*-
"""
brain.session_store

In-memory mapping session_id -> ConversationContext.

- get_or_create(session_id): atomic create-if-absent
- session_lock(session_id): one lock per session, held by the engine for a
  whole turn so two requests for the same session cannot overwrite each
  other's updates
- update / get / has
- clear(session_id): waits for the session lock, then drops the context

Nothing is persisted and nothing expires; contexts live until the process
restarts or clear() is called.
"""

from __future__ import annotations

import threading
from typing import Dict, Optional

from core.logging import logger, log_event

from .session_state import ConversationContext, WorkflowState


class SessionStore:

    def __init__(self):
        self._contexts: Dict[str, ConversationContext] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def get_or_create(self, session_id: str) -> ConversationContext:
        created = False
        with self._guard:
            ctx = self._contexts.get(session_id)
            if ctx is None:
                ctx = ConversationContext(
                    session_id=session_id,
                    workflow_state=WorkflowState.INITIAL,
                )
                self._contexts[session_id] = ctx
                created = True

        if created:
            logger.info(f"Creating new conversation context for session: {session_id}")
            log_event(session_id, {"type": "session_start"})
        return ctx

    def get(self, session_id: str) -> Optional[ConversationContext]:
        with self._guard:
            return self._contexts.get(session_id)

    def update(self, ctx: ConversationContext) -> None:
        logger.debug(
            f"Updating context for session: {ctx.session_id}, state: {ctx.workflow_state.value}"
        )
        with self._guard:
            self._contexts[ctx.session_id] = ctx

    def clear(self, session_id: str) -> bool:
        """
        Forget a session. Waits for an in-flight turn of the same session to
        finish; the session lock itself is kept so later turns still queue
        behind any turn that holds it.
        """
        with self.session_lock(session_id):
            with self._guard:
                removed = self._contexts.pop(session_id, None)

        if removed is not None:
            logger.info(f"Clearing context for session: {session_id}")
            log_event(session_id, {"type": "session_cleared"})
        return removed is not None

    def has(self, session_id: str) -> bool:
        with self._guard:
            return session_id in self._contexts

    def session_lock(self, session_id: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(session_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[session_id] = lock
            return lock

    def __len__(self) -> int:
        with self._guard:
            return len(self._contexts)
