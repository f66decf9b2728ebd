"""Tests for the iCalendar shape gate."""

from __future__ import annotations

import pytest

from tests.helpers import SAMPLE_ICS
from thermo_ai.exceptions import InvalidFeedContentError
from thermo_ai.validator import looks_like_icalendar, make_preview, validate_feed_content

HTML_BODY = "<!DOCTYPE html><html><body>Login required</body></html>"


class TestLooksLikeIcalendar:
    @pytest.mark.parametrize(
        ("body", "strict", "expected"),
        [
            (SAMPLE_ICS, False, True),
            (SAMPLE_ICS, True, True),
            ("\n  BEGIN:VCALENDAR\nEND:VCALENDAR", True, True),
            ("begin:vcalendar\nend:vcalendar", False, True),
            ("begin:vcalendar\nend:vcalendar", True, False),
            ("X-PREAMBLE\nBEGIN:VCALENDAR\nEND:VCALENDAR", False, True),
            ("X-PREAMBLE\nBEGIN:VCALENDAR\nEND:VCALENDAR", True, False),
            (HTML_BODY, False, False),
            ("", False, False),
            ("", True, False),
        ],
    )
    def test_shape_checks(self, body: str, strict: bool, expected: bool) -> None:
        assert looks_like_icalendar(body, strict=strict) is expected


class TestMakePreview:
    def test_truncates_and_escapes_newlines(self) -> None:
        body = "line1\nline2\n" + "x" * 500

        preview = make_preview(body)

        assert preview.startswith("line1\\nline2\\n")
        assert "\n" not in preview
        assert len(preview) == 200 + 2  # two newlines became two-char escapes


class TestValidateFeedContent:
    def test_valid_body_passes(self) -> None:
        validate_feed_content(SAMPLE_ICS)

    def test_html_body_rejected_with_preview(self) -> None:
        with pytest.raises(InvalidFeedContentError, match="missing BEGIN:VCALENDAR") as exc_info:
            validate_feed_content(HTML_BODY)

        assert exc_info.value.preview == HTML_BODY
        assert "Login required" in str(exc_info.value)

    def test_strict_mode_rejects_preamble(self) -> None:
        with pytest.raises(InvalidFeedContentError):
            validate_feed_content("junk\nBEGIN:VCALENDAR", strict=True)

    def test_content_type_ignored_by_default(self) -> None:
        validate_feed_content(SAMPLE_ICS, content_type="text/plain")

    def test_content_type_required_and_matching(self) -> None:
        validate_feed_content(
            SAMPLE_ICS,
            content_type="Text/Calendar; charset=utf-8",
            require_content_type=True,
        )

    @pytest.mark.parametrize("content_type", [None, "text/html", "application/json"])
    def test_content_type_required_and_wrong(self, content_type: str | None) -> None:
        with pytest.raises(InvalidFeedContentError, match="Unexpected content type"):
            validate_feed_content(
                SAMPLE_ICS, content_type=content_type, require_content_type=True
            )

    def test_content_type_checked_before_shape(self) -> None:
        with pytest.raises(InvalidFeedContentError, match="Unexpected content type"):
            validate_feed_content(
                HTML_BODY, content_type="text/html", require_content_type=True
            )
