"""Tests for the extraction prompt builder."""

from __future__ import annotations

from tests.helpers import SAMPLE_ICS
from thermo_ai.prompts import build_extraction_prompt


class TestBuildExtractionPrompt:
    def test_embeds_feed_verbatim(self) -> None:
        prompt = build_extraction_prompt(SAMPLE_ICS)

        assert SAMPLE_ICS in prompt

    def test_is_deterministic(self) -> None:
        assert build_extraction_prompt(SAMPLE_ICS) == build_extraction_prompt(SAMPLE_ICS)

    def test_names_every_output_field(self) -> None:
        prompt = build_extraction_prompt("BEGIN:VCALENDAR\nEND:VCALENDAR")

        for name in ("uid", "summary", "startDate", "endDate", "description", "location"):
            assert name in prompt

    def test_states_output_contract(self) -> None:
        prompt = build_extraction_prompt("")

        assert "UTC" in prompt
        assert "TZID" in prompt
        assert "VALUE=DATE" in prompt
        assert "DTSTART" in prompt
        assert "do NOT set" in prompt
        assert '{ "events": [' in prompt

    def test_feed_braces_are_not_interpreted(self) -> None:
        body = "BEGIN:VCALENDAR\nX-NOTE:{weird}\nEND:VCALENDAR"

        assert "X-NOTE:{weird}" in build_extraction_prompt(body)
