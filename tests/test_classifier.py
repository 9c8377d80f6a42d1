"""
Tests for classification and yes/no detection.
"""
import pytest

from brain.classifier import (
    classify_incident,
    is_affirmative_reply,
    is_classification_confirmed,
    wants_report,
)
from brain.errors import BackendUnavailableError, ClassificationFormatError
from brain.session_state import IncidentType
from tests.utils.fakes import ScriptedLLM
from tests.utils.payloads import classification


class TestKeywordChecks:

    @pytest.mark.parametrize("text", ["Yes", "yes, that's correct", "That's RIGHT", "correct"])
    def test_classification_confirmed(self, text):
        assert is_classification_confirmed(text)

    @pytest.mark.parametrize("text", ["No", "nope", "it is something else", ""])
    def test_classification_rejected(self, text):
        assert not is_classification_confirmed(text)

    @pytest.mark.parametrize("text", ["Yes, help me report this", "please HELP", "yes"])
    def test_wants_report(self, text):
        assert wants_report(text)

    @pytest.mark.parametrize("text", ["No, thank you", "not now", "correct"])
    def test_does_not_want_report(self, text):
        assert not wants_report(text)


class TestClassifyIncident:

    def test_returns_parsed_classification(self):
        llm = ScriptedLLM(classification("HUMAN", 0.92, "Harassment by a colleague."))

        result = classify_incident("I am experiencing harassment from my colleague", False, llm)

        assert result.type is IncidentType.HUMAN
        assert result.confidence == pytest.approx(0.92)
        assert "harassment from my colleague" in llm.prompts[0]

    def test_malformed_output_raises(self):
        llm = ScriptedLLM("I think this is about HR.")
        with pytest.raises(ClassificationFormatError):
            classify_incident("something", False, llm)

    def test_backend_error_propagates(self):
        llm = ScriptedLLM(BackendUnavailableError("down"))
        with pytest.raises(BackendUnavailableError):
            classify_incident("something", False, llm)


class TestAffirmationJudge:

    def test_blank_reply_is_not_affirmative_and_costs_no_call(self):
        llm = ScriptedLLM()
        assert is_affirmative_reply("   ", llm) is False
        assert llm.calls == 0

    def test_affirmative_true(self):
        llm = ScriptedLLM('{ "affirmative": true }')
        assert is_affirmative_reply("sounds good", llm) is True
        assert 'User reply: "sounds good"' in llm.prompts[0]

    def test_affirmative_false(self):
        assert is_affirmative_reply("rather not", ScriptedLLM({"affirmative": False})) is False

    def test_missing_key_defaults_to_false(self):
        assert is_affirmative_reply("hmm", ScriptedLLM({"answer": "yes"})) is False

    def test_string_flag_is_read(self):
        assert is_affirmative_reply("ok", ScriptedLLM({"affirmative": "false"})) is False
        assert is_affirmative_reply("ok", ScriptedLLM({"affirmative": "true"})) is True

    def test_unparseable_judge_output_raises(self):
        with pytest.raises(ClassificationFormatError):
            is_affirmative_reply("ok", ScriptedLLM("yes"))
