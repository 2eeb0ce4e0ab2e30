"""OpenAI-backed logistics summarizer.

Sends the aggregate statistics and a compact participant listing to a
chat completion model and returns its narrative reply.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from openai import OpenAI, OpenAIError

from cbms_events.aggregation.summary import room_nights, summarize
from cbms_events.core.errors import SummarizationError
from cbms_events.insight.base import SummarizerBase
from cbms_events.models.domain import ParticipantEntity

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a logistics analyst for the Provincial Government of Sorsogon. "
    "Given event registration data, write a short briefing for the events team covering:\n"
    "1. Attendance and which municipalities send the largest delegations\n"
    "2. Gender balance\n"
    "3. Accommodation demand (room-nights) and any lodging risks\n"
    "4. Concrete logistics recommendations\n"
    "Keep it under 250 words, plain text, no markdown tables."
)


@dataclass
class OpenAIConfig:
    """OpenAI configuration settings."""

    api_key: str = ""
    model: str = "gpt-4o-mini"
    temperature: float = 0.3
    max_tokens: int = 600
    timeout: float = 30.0

    def __post_init__(self):
        """Load API key from environment if not provided."""
        if not self.api_key:
            self.api_key = os.environ.get("OPENAI_API_KEY", "")

    def validate(self) -> bool:
        """Validate the configuration."""
        if not self.api_key:
            raise ValueError("OPENAI_API_KEY environment variable is required")
        return True


def build_prompt(records: Sequence[ParticipantEntity]) -> str:
    """Render the user prompt for a record set.

    Pure function - no network access.
    """
    stats = summarize(records)
    listing: list[dict[str, Any]] = [
        {
            "event": r.event_name,
            "municipality": r.municipality,
            "sex": r.sex,
            "designation": r.designation,
            "room_nights": room_nights(r),
        }
        for r in records
    ]
    return (
        "Aggregate statistics:\n"
        f"{stats.model_dump_json(indent=2)}\n\n"
        "Participants:\n"
        f"{json.dumps(listing, ensure_ascii=False)}"
    )


class OpenAISummarizer(SummarizerBase):
    """Summarizer using the OpenAI chat completions API."""

    def __init__(self, config: OpenAIConfig | None = None, client: OpenAI | None = None):
        """Initialize summarizer.

        Args:
            config: Model settings. Defaults to OpenAIConfig().
            client: Pre-built client. Created lazily from config when omitted.
        """
        self.config = config or OpenAIConfig()
        self._client = client

    def _get_client(self) -> OpenAI:
        if self._client is None:
            self.config.validate()
            self._client = OpenAI(api_key=self.config.api_key, timeout=self.config.timeout)
        return self._client

    def summarize(self, records: Sequence[ParticipantEntity]) -> str:
        try:
            client = self._get_client()
            response = client.chat.completions.create(
                model=self.config.model,
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(records)},
                ],
            )
        except (OpenAIError, ValueError) as e:
            logger.error(f"OpenAI summarization failed: {e}")
            raise SummarizationError(str(e)) from e

        if not response.choices or not response.choices[0].message.content:
            raise SummarizationError("Empty response from summarization model")

        return response.choices[0].message.content.strip()
