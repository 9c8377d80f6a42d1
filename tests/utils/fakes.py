"""
Fake implementations for testing without a real LLM backend.
"""
import json
import threading
from typing import Any, Dict, List, Union

from brain.errors import BackendUnavailableError


class ScriptedLLM:
    """
    Text-completion fake that replays queued responses in order.

    Queue a str to return it verbatim, a dict to return it as JSON,
    or an exception instance to raise it. Every prompt is recorded.
    """

    def __init__(self, *responses: Union[str, Dict[str, Any], Exception]):
        self._responses: List[Union[str, Dict[str, Any], Exception]] = list(responses)
        self.prompts: List[str] = []
        self._lock = threading.Lock()

    def queue(self, *responses: Union[str, Dict[str, Any], Exception]) -> "ScriptedLLM":
        with self._lock:
            self._responses.extend(responses)
        return self

    def complete(self, prompt: str) -> str:
        with self._lock:
            self.prompts.append(prompt)
            if not self._responses:
                raise AssertionError(f"Unexpected LLM call:\n{prompt}")
            response = self._responses.pop(0)

        if isinstance(response, Exception):
            raise response
        if isinstance(response, dict):
            return json.dumps(response)
        return response

    @property
    def calls(self) -> int:
        return len(self.prompts)

    @property
    def remaining(self) -> int:
        return len(self._responses)


class DownLLM:
    """Backend that is always unreachable."""

    def __init__(self):
        self.calls = 0

    def complete(self, prompt: str) -> str:
        self.calls += 1
        raise BackendUnavailableError("connection refused")


class BlockingLLM(ScriptedLLM):
    """
    ScriptedLLM that parks every call until release is set.
    entered is set as soon as a call is waiting.
    """

    def __init__(self, *responses: Union[str, Dict[str, Any], Exception]):
        super().__init__(*responses)
        self.entered = threading.Event()
        self.release = threading.Event()

    def complete(self, prompt: str) -> str:
        self.entered.set()
        if not self.release.wait(timeout=5):
            raise AssertionError("BlockingLLM was never released")
        return super().complete(prompt)
