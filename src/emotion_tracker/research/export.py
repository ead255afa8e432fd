"""JSON export / import of session history for offline analysis."""

from __future__ import annotations

from typing import Sequence

import structlog
from pydantic import TypeAdapter

from emotion_tracker.models import Sample

logger = structlog.get_logger(__name__)

_SAMPLES = TypeAdapter(list[Sample])


def export_history_json(samples: Sequence[Sample], *, indent: int | None = 2) -> str:
    """Serialise ``samples`` as a JSON array in the given (chronological) order.

    Records use the field names ``timestamp``, ``heartRate``, ``eda``,
    ``temperature``, ``emotion`` and ``confidence``.
    """
    payload = _SAMPLES.dump_json(list(samples), by_alias=True, indent=indent).decode("utf-8")
    logger.debug("export.json_serialised", rows=len(samples))
    return payload


def load_history_json(text: str | bytes) -> list[Sample]:
    """Parse the output of :func:`export_history_json` back into samples.

    Raises :class:`pydantic.ValidationError` for malformed input.
    """
    samples = _SAMPLES.validate_json(text)
    logger.debug("export.json_loaded", rows=len(samples))
    return samples
