"""Tests for insight generation.

Validates:
1. Empty record sets are refused without contacting the collaborator
2. Event filtering is applied before summarization
3. Collaborator failures become error results, never exceptions
4. Busy flag and the single active-insight slot
"""

import threading
from types import SimpleNamespace

import pytest
from openai import OpenAIError

from cbms_events.core.errors import InsightValidationError, SummarizationError
from cbms_events.insight.base import SummarizerBase
from cbms_events.insight.mock import MockSummarizer
from cbms_events.insight.openai_summarizer import (
    OpenAIConfig,
    OpenAISummarizer,
    build_prompt,
)
from cbms_events.insight.requester import NO_DATA_MESSAGE, InsightRequester


class RecordingSummarizer(SummarizerBase):
    """Summarizer that records its inputs."""

    def __init__(self, reply="Briefing text", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def summarize(self, records):
        self.calls.append(list(records))
        if self.error is not None:
            raise self.error
        return self.reply


class TestSummarizerBase:
    """Test base summarizer interface."""

    def test_is_abstract(self):
        with pytest.raises(TypeError):
            SummarizerBase()

    def test_mock_inherits_from_base(self):
        assert issubclass(MockSummarizer, SummarizerBase)
        assert issubclass(OpenAISummarizer, SummarizerBase)


class TestRequesterValidation:
    """Test empty-input refusal."""

    def test_empty_records_raise_without_calling(self):
        summarizer = RecordingSummarizer()
        requester = InsightRequester(summarizer)

        with pytest.raises(InsightValidationError, match=NO_DATA_MESSAGE):
            requester.request_insight([])

        assert summarizer.calls == []
        assert requester.busy is False

    def test_empty_records_refused_regardless_of_filter(self):
        summarizer = RecordingSummarizer()
        requester = InsightRequester(summarizer)

        with pytest.raises(InsightValidationError):
            requester.request_insight([], "Summit")

        assert summarizer.calls == []


class TestRequesterFiltering:
    """Test event filter application."""

    def test_filter_applied_before_call(self, make_participant):
        summarizer = RecordingSummarizer()
        requester = InsightRequester(summarizer)
        a = make_participant(event_name="A")
        b = make_participant(event_name="B")

        requester.request_insight([a, b], "B")

        assert summarizer.calls == [[b]]

    def test_all_sends_everything(self, make_participant):
        summarizer = RecordingSummarizer()
        requester = InsightRequester(summarizer)
        records = [make_participant(event_name="A"), make_participant(event_name="B")]

        requester.request_insight(records, "all")

        assert summarizer.calls == [records]


class TestRequesterResults:
    """Test result slot lifecycle."""

    def test_success_sets_active_insight(self, make_participant):
        requester = InsightRequester(RecordingSummarizer(reply="Need 12 rooms in Bulan."))

        result = requester.request_insight([make_participant()])

        assert result.ok
        assert result.text == "Need 12 rooms in Bulan."
        assert requester.insight == "Need 12 rooms in Bulan."

    def test_dismiss_clears_insight(self, make_participant):
        requester = InsightRequester(RecordingSummarizer())
        requester.request_insight([make_participant()])

        requester.dismiss()

        assert requester.insight is None

    def test_new_insight_replaces_old(self, make_participant):
        summarizer = RecordingSummarizer(reply="first")
        requester = InsightRequester(summarizer)
        requester.request_insight([make_participant()])

        summarizer.reply = "second"
        requester.request_insight([make_participant()])

        assert requester.insight == "second"

    def test_failure_returns_error_result(self, make_participant):
        requester = InsightRequester(
            RecordingSummarizer(error=SummarizationError("model unavailable"))
        )

        result = requester.request_insight([make_participant()])

        assert not result.ok
        assert result.text is None
        assert "model unavailable" in result.error
        assert requester.insight is None
        assert "model unavailable" in requester.last_error
        assert requester.busy is False

    def test_unexpected_failure_is_absorbed(self, make_participant):
        requester = InsightRequester(RecordingSummarizer(error=KeyError("choices")))

        result = requester.request_insight([make_participant()])

        assert not result.ok

    def test_success_clears_previous_error(self, make_participant):
        summarizer = RecordingSummarizer(error=SummarizationError("down"))
        requester = InsightRequester(summarizer)
        requester.request_insight([make_participant()])

        summarizer.error = None
        requester.request_insight([make_participant()])

        assert requester.last_error is None
        assert requester.insight == "Briefing text"


class TestRequesterBusy:
    """Test busy flag while a request is in flight."""

    def test_busy_during_call(self, make_participant):
        started = threading.Event()
        release = threading.Event()

        class BlockingSummarizer(SummarizerBase):
            def summarize(self, records):
                started.set()
                release.wait(timeout=2.0)
                return "done"

        requester = InsightRequester(BlockingSummarizer())
        worker = threading.Thread(
            target=requester.request_insight, args=([make_participant()],)
        )
        worker.start()

        assert started.wait(timeout=2.0)
        assert requester.busy is True

        release.set()
        worker.join(timeout=2.0)
        assert requester.busy is False
        assert requester.insight == "done"


class TestMockSummarizer:
    """Test offline summarizer output."""

    def test_mentions_totals(self, make_participant):
        records = [
            make_participant(municipality="Gubat", avail_accommodation=True, days=[True] * 3 + [False] * 2),
            make_participant(municipality="Gubat", sex="Female"),
            make_participant(municipality="Matnog"),
        ]

        text = MockSummarizer().summarize(records)

        assert "3 participants" in text
        assert "Gubat (2)" in text
        assert "3 room-night(s)" in text

    def test_empty_records(self):
        assert "No registrations" in MockSummarizer().summarize([])

    def test_counts_calls(self, make_participant):
        summarizer = MockSummarizer()
        summarizer.summarize([make_participant()])
        assert summarizer.calls == 1


def _fake_client(content=None, error=None):
    """Build an object shaped like OpenAI().chat.completions."""
    calls = []

    def create(**kwargs):
        calls.append(kwargs)
        if error is not None:
            raise error
        message = SimpleNamespace(content=content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    return client, calls


class TestOpenAISummarizer:
    """Test OpenAI summarizer against a fake client."""

    def test_returns_stripped_content(self, make_participant):
        client, calls = _fake_client(content="  Briefing.  \n")
        summarizer = OpenAISummarizer(OpenAIConfig(api_key="test", model="gpt-test"), client=client)

        text = summarizer.summarize([make_participant()])

        assert text == "Briefing."
        assert calls[0]["model"] == "gpt-test"
        assert calls[0]["messages"][0]["role"] == "system"

    def test_client_error_becomes_summarization_error(self, make_participant):
        client, _ = _fake_client(error=OpenAIError("rate limited"))
        summarizer = OpenAISummarizer(OpenAIConfig(api_key="test"), client=client)

        with pytest.raises(SummarizationError, match="rate limited"):
            summarizer.summarize([make_participant()])

    def test_empty_content_is_malformed(self, make_participant):
        client, _ = _fake_client(content="")
        summarizer = OpenAISummarizer(OpenAIConfig(api_key="test"), client=client)

        with pytest.raises(SummarizationError):
            summarizer.summarize([make_participant()])

    def test_missing_api_key_is_summarization_error(self, make_participant, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        summarizer = OpenAISummarizer(OpenAIConfig())

        with pytest.raises(SummarizationError, match="OPENAI_API_KEY"):
            summarizer.summarize([make_participant()])

    def test_config_reads_key_from_env(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        assert OpenAIConfig().api_key == "sk-env"


class TestBuildPrompt:
    """Test prompt rendering."""

    def test_contains_stats_and_listing(self, make_participant):
        records = [
            make_participant(municipality="Pilar", avail_accommodation=True, days=[True, True, False, False, False]),
        ]

        prompt = build_prompt(records)

        assert '"total_participants": 1' in prompt
        assert '"municipality": "Pilar"' in prompt
        assert '"room_nights": 2' in prompt

    def test_excludes_contact_details(self, make_participant):
        record = make_participant(email="secret@example.gov.ph")
        assert "secret@example.gov.ph" not in build_prompt([record])
