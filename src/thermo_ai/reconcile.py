"""Three-way classification of a validated extraction result.

The model is allowed to phrase "this calendar is valid but empty" as an
``error`` string instead of omitting the field.  Whether an error string
is such a benign phrasing is decided in one place, :func:`is_benign_error`,
against :data:`BENIGN_ERROR_PHRASES`.

Classification (total over every ``events``/``error`` pair):

=================  ===============  ==========================================
events             error            outcome
=================  ===============  ==========================================
non-empty          any              ``SUCCESS`` (error kept as an advisory)
empty              none             ``VALID_EMPTY``
empty              benign phrasing  ``VALID_EMPTY`` (error cleared)
empty              anything else    ``HARD_ERROR`` (message kept verbatim)
=================  ===============  ==========================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from thermo_ai.exceptions import HardExtractionError, UnexpectedResponseFormatError
from thermo_ai.models.events import ActionResult, BookingEvent, ExtractionResult
from thermo_ai.response import UNEXPECTED_FORMAT_MESSAGE

logger = logging.getLogger(__name__)

# Lower-case substrings; a match anywhere in the error marks it benign.
BENIGN_ERROR_PHRASES: tuple[str, ...] = (
    "no vevent",
    "no events found",
    "valid but contains no events",
    "valid but contains no vevent",
)


class OutcomeKind(str, Enum):
    """Final classification of one feed's extraction."""

    SUCCESS = "success"
    VALID_EMPTY = "valid_empty"
    HARD_ERROR = "hard_error"


@dataclass(frozen=True)
class ReconciledOutcome:
    """A classified extraction result.

    Attributes:
        kind: The outcome classification.
        events: Events to store/display (always empty for hard errors).
        error: Failure message for ``HARD_ERROR``; advisory caveat (or
            ``None``) for ``SUCCESS``; always ``None`` for ``VALID_EMPTY``.
    """

    kind: OutcomeKind
    events: list[BookingEvent] = field(default_factory=list)
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.kind is not OutcomeKind.HARD_ERROR

    def raise_for_error(self) -> None:
        """Raise the matching exception if this is a hard error."""
        if self.kind is not OutcomeKind.HARD_ERROR:
            return
        if self.error == UNEXPECTED_FORMAT_MESSAGE:
            raise UnexpectedResponseFormatError(self.error)
        raise HardExtractionError(self.error or "Unknown extraction error")

    def to_action_result(self) -> ActionResult:
        return ActionResult(
            success=self.success, events=list(self.events), error=self.error
        )


def is_benign_error(message: str | None) -> bool:
    """Return ``True`` if *message* describes a valid-but-empty calendar.

    Matching is a case-insensitive substring test against
    :data:`BENIGN_ERROR_PHRASES`.
    """
    if not message:
        return False
    lowered = message.lower()
    return any(phrase in lowered for phrase in BENIGN_ERROR_PHRASES)


def reconcile(result: ExtractionResult) -> ReconciledOutcome:
    """Classify a validated extraction result.

    Args:
        result: Output of :func:`~thermo_ai.response.parse_model_response`.

    Returns:
        The :class:`ReconciledOutcome`; see the module docstring for the
        mapping.
    """
    if result.events:
        if result.error:
            logger.info(
                "Extraction returned %d event(s) with advisory: %s",
                len(result.events),
                result.error,
            )
        return ReconciledOutcome(
            kind=OutcomeKind.SUCCESS, events=list(result.events), error=result.error
        )

    if not result.error:
        return ReconciledOutcome(kind=OutcomeKind.VALID_EMPTY)

    if is_benign_error(result.error):
        logger.info("Treating model error as empty calendar: %s", result.error)
        return ReconciledOutcome(kind=OutcomeKind.VALID_EMPTY)

    return ReconciledOutcome(kind=OutcomeKind.HARD_ERROR, error=result.error)
