"""FastAPI surface for iCal syncing.

Endpoints
---------
- ``POST /api/sync-icals`` (``GET`` also accepted, for manual triggering):
  run the fleet sync.  Always 200 when the run completes, whatever the
  per-property outcomes; 500 only when the run cannot start (missing
  ``GEMINI_API_KEY``, unreadable property store).
- ``POST /api/parse-ical``: sync one feed URL and return
  ``{success, events, error?}``.

Collaborators are built from settings on first use unless injected, so
the app imports without credentials.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from thermo_ai import __version__
from thermo_ai.config import DEFAULT_DEADLINE_SECONDS, Settings, load_settings
from thermo_ai.orchestrator import sync_all_feeds
from thermo_ai.pipeline import IcalPipeline, parse_ical_feed_action
from thermo_ai.repository import PropertyRepository, build_repository

logger = logging.getLogger(__name__)


class ParseIcalRequest(BaseModel):
    """Body of ``POST /api/parse-ical``."""

    model_config = ConfigDict(populate_by_name=True)

    feed_url: str = Field(alias="feedUrl")


class _Runtime:
    """Lazily resolved collaborators shared by the route handlers."""

    def __init__(
        self,
        settings: Settings | None,
        repository: PropertyRepository | None,
        pipeline: IcalPipeline | None,
    ) -> None:
        self._settings = settings
        self._repository = repository
        self._pipeline = pipeline
        self._lock = threading.Lock()

    def _load_settings(self) -> Settings:
        if self._settings is None:
            self._settings = load_settings()
        return self._settings

    @property
    def repository(self) -> PropertyRepository:
        with self._lock:
            if self._repository is None:
                self._repository = build_repository(self._load_settings().properties_file)
            return self._repository

    @property
    def pipeline(self) -> IcalPipeline:
        with self._lock:
            if self._pipeline is None:
                self._pipeline = IcalPipeline.from_settings(self._load_settings())
            return self._pipeline

    @property
    def max_workers(self) -> int:
        return self._settings.sync_max_workers if self._settings else 1

    @property
    def deadline_seconds(self) -> float:
        if self._settings is None:
            return DEFAULT_DEADLINE_SECONDS
        return self._settings.sync_deadline_seconds


def _server_error(exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=500, content={"detail": f"Internal Server Error: {exc}"}
    )


def create_app(
    settings: Settings | None = None,
    repository: PropertyRepository | None = None,
    pipeline: IcalPipeline | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Application settings; loaded from the environment on
            first request when omitted and a collaborator needs them.
        repository: Property store; built from settings when omitted.
        pipeline: Single-feed pipeline; built from settings when omitted.
    """
    runtime = _Runtime(settings, repository, pipeline)

    app = FastAPI(
        title="ThermoAI iCal Sync API",
        version=__version__,
        description="Fetches booking calendars and extracts check-in/check-out events.",
    )

    # Sync handlers run in FastAPI's threadpool; fetches and model calls block.
    @app.api_route("/api/sync-icals", methods=["GET", "POST"], tags=["Sync"])
    def sync_icals() -> Any:
        logger.info("Attempting to sync all iCal feeds")
        try:
            report = sync_all_feeds(
                runtime.repository,
                runtime.pipeline,
                max_workers=runtime.max_workers,
                deadline_seconds=runtime.deadline_seconds,
            )
        except Exception as exc:
            logger.exception("Unhandled error in fleet iCal sync")
            return _server_error(exc)
        return report.to_dict()

    @app.post("/api/parse-ical", tags=["Sync"])
    def parse_ical(request: ParseIcalRequest) -> Any:
        try:
            pipeline_ = runtime.pipeline
        except Exception as exc:
            logger.exception("Cannot build iCal pipeline")
            return _server_error(exc)
        return parse_ical_feed_action(request.feed_url, pipeline_).to_wire()

    return app


app = create_app()
