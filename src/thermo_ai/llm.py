"""Gemini client for iCal event extraction.

Wraps the Google ``google-genai`` SDK.  The client only submits the
prompt and returns the raw reply text; parsing and validation live in
:mod:`thermo_ai.response` so they can be tested without the SDK.
"""

from __future__ import annotations

import logging

from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from thermo_ai.config import DEFAULT_MODEL
from thermo_ai.exceptions import ModelUnavailableError
from thermo_ai.models.events import LLMResponseSchema

logger = logging.getLogger(__name__)

# Calendar text is not sensitive; block only medium-and-above so booking
# summaries are not refused spuriously.
_SAFETY_CATEGORIES = (
    genai_types.HarmCategory.HARM_CATEGORY_HARASSMENT,
    genai_types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
    genai_types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
    genai_types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
)


def build_safety_settings() -> list[genai_types.SafetySetting]:
    """Return the safety settings used for every extraction call."""
    return [
        genai_types.SafetySetting(
            category=category,
            threshold=genai_types.HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
        )
        for category in _SAFETY_CATEGORIES
    ]


class GeminiClient:
    """Client for extracting booking events via Google Gemini.

    Args:
        api_key: Google Gemini API key.
        model: Model identifier to use for generation.  Defaults to
            ``"gemini-2.0-flash"``.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
    ) -> None:
        self._client = genai.Client(api_key=api_key)
        self._model = model

    def generate(self, prompt: str) -> str:
        """Submit *prompt* and return the raw reply text.

        The call requests JSON output shaped like
        :class:`~thermo_ai.models.events.LLMResponseSchema`.  There is no
        retry; a failed call is terminal for the current feed.

        Args:
            prompt: The full extraction prompt.

        Returns:
            The raw text of the first candidate (``""`` if the model
            returned no text, e.g. after a safety block).

        Raises:
            ModelUnavailableError: On API-level failures (network, quota,
                auth).
        """
        config = genai_types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=LLMResponseSchema,
            safety_settings=build_safety_settings(),
        )

        logger.debug("Extraction prompt sent to Gemini:\n%s", prompt)
        try:
            response = self._client.models.generate_content(
                model=self._model,
                contents=prompt,
                config=config,
            )
        except genai_errors.APIError as exc:
            logger.error("Gemini API error: %s", exc)
            raise ModelUnavailableError(f"Gemini API call failed: {exc}") from exc

        raw_text = response.text or ""
        logger.debug("Raw Gemini response:\n%s", raw_text)
        return raw_text
