"""Single-feed iCal ingestion pipeline.

Wires the stages together for one feed URL, strictly forward:

1. **Fetch** -- :class:`~thermo_ai.fetcher.FeedFetcher`.
2. **Validate feed** -- :func:`~thermo_ai.validator.validate_feed_content`.
3. **Extract** -- build the prompt and call the model.
4. **Validate response** -- :func:`~thermo_ai.response.parse_model_response`.
5. **Reconcile** -- :func:`~thermo_ai.reconcile.reconcile`.

:func:`parse_ical_feed_action` is the single-property entry point used by
UI callers; it never raises.
"""

from __future__ import annotations

import logging
from typing import Protocol

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from thermo_ai.config import Settings
from thermo_ai.exceptions import IcalSyncError
from thermo_ai.fetcher import FeedFetcher
from thermo_ai.llm import GeminiClient
from thermo_ai.models.events import ActionResult, ExtractionResult
from thermo_ai.prompts import build_extraction_prompt
from thermo_ai.reconcile import ReconciledOutcome, reconcile
from thermo_ai.response import parse_model_response
from thermo_ai.validator import validate_feed_content

logger = logging.getLogger(__name__)

_URL_ADAPTER = TypeAdapter(AnyHttpUrl)


class ModelClient(Protocol):
    """Anything that turns a prompt into raw model reply text."""

    def generate(self, prompt: str) -> str: ...


class IcalPipeline:
    """Fetch, validate, extract, and classify one iCal feed.

    Args:
        fetcher: Feed fetcher.
        model_client: Model collaborator (normally
            :class:`~thermo_ai.llm.GeminiClient`).
        strict: Use the strict ``BEGIN:VCALENDAR`` prefix check instead of
            the lenient containment check.
        require_content_type: Also require a ``text/calendar`` response.
    """

    def __init__(
        self,
        fetcher: FeedFetcher,
        model_client: ModelClient,
        strict: bool = False,
        require_content_type: bool = False,
    ) -> None:
        self._fetcher = fetcher
        self._model_client = model_client
        self._strict = strict
        self._require_content_type = require_content_type

    @classmethod
    def from_settings(cls, settings: Settings) -> IcalPipeline:
        """Build a pipeline backed by Gemini from application settings."""
        return cls(
            fetcher=FeedFetcher(user_agent=settings.user_agent),
            model_client=GeminiClient(
                api_key=settings.gemini_api_key, model=settings.gemini_model
            ),
            strict=settings.feed_check_mode == "strict",
            require_content_type=settings.require_calendar_content_type,
        )

    def extract(self, url: str) -> ExtractionResult:
        """Run stages 1-4 for *url*.

        Raises:
            FetchError: The feed could not be retrieved.
            InvalidFeedContentError: The body is not iCalendar data.  The
                model is not called.
            ModelUnavailableError: The model call failed.
            MalformedModelResponseError: The reply was not a JSON object.
        """
        feed = self._fetcher.fetch(url)
        validate_feed_content(
            feed.text,
            strict=self._strict,
            content_type=feed.content_type,
            require_content_type=self._require_content_type,
        )

        prompt = build_extraction_prompt(feed.text)
        raw_text = self._model_client.generate(prompt)

        result = parse_model_response(raw_text)
        logger.info(
            "Model returned %d event(s), %d valid, for %s",
            result.claimed_count,
            len(result.events),
            url,
        )
        return result

    def run(self, url: str) -> ReconciledOutcome:
        """Run the full pipeline for *url* and classify the result.

        Raises:
            IcalSyncError: Any terminal error from :meth:`extract`.  A
                reconciled hard error is returned, not raised.
        """
        return reconcile(self.extract(url))


def parse_ical_feed_action(feed_url: str, pipeline: IcalPipeline) -> ActionResult:
    """Sync a single feed on behalf of a UI caller.

    Every failure becomes ``success=False`` with a human-readable message
    and no events; nothing is raised.

    Args:
        feed_url: The feed URL; must be a syntactically valid http(s) URL.
        pipeline: The pipeline to run.

    Returns:
        An :class:`ActionResult`.
    """
    try:
        _URL_ADAPTER.validate_python(feed_url)
    except ValidationError as exc:
        messages = "; ".join(
            f"feedUrl : {error['msg']}" for error in exc.errors()
        )
        return ActionResult(success=False, error=f"Invalid input: {messages}")

    try:
        outcome = pipeline.run(feed_url)
    except IcalSyncError as exc:
        logger.warning("iCal sync failed for %s: %s", feed_url, exc)
        return ActionResult(success=False, error=str(exc))
    except Exception as exc:
        logger.exception("Unexpected error parsing iCal feed %s", feed_url)
        return ActionResult(success=False, error=str(exc) or "Failed to parse iCal feed.")

    return outcome.to_action_result()
