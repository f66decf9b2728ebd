"""HTTP retrieval of iCalendar booking feeds.

Feeds are public URLs supplied by property managers.  Each fetch is a
single uncached GET carrying an identifying ``User-Agent``; failures are
terminal for that sync attempt and are never retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import requests

from thermo_ai.config import DEFAULT_USER_AGENT
from thermo_ai.exceptions import FetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchedFeed:
    """Raw body and response metadata for one fetched feed.

    Attributes:
        url: The requested URL.
        text: Response body decoded as text.
        status_code: HTTP status code.
        status_text: HTTP reason phrase.
        content_type: ``Content-Type`` header, or ``None`` if absent.
    """

    url: str
    text: str
    status_code: int
    status_text: str = ""
    content_type: str | None = None


class FeedFetcher:
    """Fetch iCalendar feeds over HTTP.

    Args:
        user_agent: Value of the ``User-Agent`` header on every request.
        session: Optional :class:`requests.Session`.  When omitted each
            fetch goes through :func:`requests.get`, which is safe to call
            from several worker threads.
        timeout: Optional per-request timeout in seconds.  ``None`` (the
            default) leaves time-bounding to the fleet deadline.
    """

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        self._user_agent = user_agent
        self._session = session
        self._timeout = timeout

    @property
    def user_agent(self) -> str:
        return self._user_agent

    def fetch(self, url: str) -> FetchedFeed:
        """GET *url* and return its body.

        Raises:
            FetchError: On network/DNS failure (``status_code`` is
                ``None``) or on any non-2xx response.
        """
        headers = {
            "User-Agent": self._user_agent,
            "Cache-Control": "no-cache",
        }
        get = self._session.get if self._session is not None else requests.get

        logger.info("Fetching iCal feed from %s", url)
        try:
            response = get(url, headers=headers, timeout=self._timeout)
        except requests.RequestException as exc:
            logger.error("Network error fetching %s: %s", url, exc)
            raise FetchError(f"Failed to fetch iCal feed: {exc}") from exc

        status_text = response.reason or ""
        if not 200 <= response.status_code < 300:
            logger.error(
                "Feed %s returned HTTP %d %s", url, response.status_code, status_text
            )
            raise FetchError(
                f"Failed to fetch iCal feed: {response.status_code} {status_text}".rstrip(),
                status_code=response.status_code,
                status_text=status_text,
            )

        logger.debug("Fetched %d characters from %s", len(response.text), url)
        return FetchedFeed(
            url=url,
            text=response.text,
            status_code=response.status_code,
            status_text=status_text,
            content_type=response.headers.get("Content-Type"),
        )
