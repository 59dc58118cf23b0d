"""Stage timeline events and the structured logging hook that emits them."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import structlog


def domain_build_stage_event(
    stage: str,
    status: str,
    details: dict[str, Any] | None = None,
) -> dict[str, object]:
    """Build one structured timeline event payload.

    Args:
        stage: Stage name.
        status: Stage status marker.
        details: Optional structured details object.

    Returns:
        dict[str, object]: Structured timeline event.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    event_payload: dict[str, object] = {
        "stage": stage,
        "status": status,
        "at_utc": datetime.now(timezone.utc).isoformat(),
    }
    if details is not None:
        event_payload["details"] = details
    return event_payload


class StageTimeline:
    """Collects stage events and emits each one through a structured logger.

    Attributes:
        events: Events recorded so far, oldest first.
    """

    _LOG_EVENT_NAME = "orchestrator_stage_event"

    def __init__(self, logger: Any | None = None):
        self.events: list[dict[str, object]] = []
        self._logger = logger if logger is not None else structlog.get_logger(__name__)

    def timeline_record(self, stage: str, status: str, details: dict[str, Any] | None = None) -> dict[str, object]:
        """Append one stage event and log it.

        Args:
            stage: Stage name.
            status: Stage status marker.
            details: Optional structured details object.

        Returns:
            dict[str, object]: The recorded event.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        event_payload = domain_build_stage_event(stage=stage, status=status, details=details)
        self.events.append(event_payload)
        if status == "failed":
            self._logger.warning(self._LOG_EVENT_NAME, stage=stage, status=status, details=details or {})
        else:
            self._logger.info(self._LOG_EVENT_NAME, stage=stage, status=status, details=details or {})
        return event_payload

    def timeline_snapshot(self) -> list[dict[str, object]]:
        """Return a shallow copy of the recorded events."""

        return list(self.events)
