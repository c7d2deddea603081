"""
Event record type for blocked event sets.

An event record is the unit handed to an event set: a typed, timestamped
occurrence with an optional certainty and, for data that was segmented
before it reached us, the blocks (epochs) it belongs to.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from ..exceptions import EventValidationError

# Accepted spellings for each record field, first match wins
START_TIME_KEYS = ("startTime", "start_time")
BLOCK_KEYS = ("blocks", "block")


@dataclass(frozen=True)
class EventRecord:
    """A single event.

    Records are immutable; an event set keeps them in start time order.

    Attributes:
        type: Event type label (non-empty)
        start_time: Seconds from the start of the recording
        certainty: Confidence in [0, 1] for computed or detected events
        blocks: One-based block numbers containing the event, or None when
            membership is to be derived from the start time
    """

    type: str
    start_time: float
    certainty: float = 1.0
    blocks: tuple[int, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary using the external field names."""
        data: dict[str, Any] = {
            "type": self.type,
            "startTime": self.start_time,
            "certainty": self.certainty,
        }
        if self.blocks is not None:
            data["blocks"] = list(self.blocks)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], index: int | None = None) -> EventRecord:
        """Build a record from a mapping.

        Extra keys are ignored. A missing or None certainty defaults to 1.

        Args:
            data: Mapping with ``type``, ``startTime`` and optional
                ``certainty`` and ``blocks`` entries
            index: Position of the record in its input, used in errors

        Raises:
            EventValidationError: If ``type`` or ``startTime`` is missing, or
                a value cannot be converted
        """
        if "type" not in data:
            raise EventValidationError("type", "missing required field", index=index)
        start_time = _first_present(data, START_TIME_KEYS)
        if start_time is None:
            raise EventValidationError("startTime", "missing required field", index=index)

        raw_type = data["type"]
        certainty = data.get("certainty")

        return cls(
            type="" if raw_type is None else str(raw_type),
            start_time=_to_float(start_time, "startTime", index),
            certainty=1.0 if certainty is None else _to_float(certainty, "certainty", index),
            blocks=normalize_blocks(_first_present(data, BLOCK_KEYS), index),
        )


def normalize_blocks(value: Any, index: int | None = None) -> tuple[int, ...] | None:
    """Normalize a block membership value to a sorted tuple of distinct ints.

    A scalar is treated as a one-element membership and None stays None.
    """
    if value is None:
        return None
    if isinstance(value, (str, bytes)):
        raise EventValidationError("blocks", "must be block numbers", index=index, value=value)
    if not isinstance(value, Iterable):
        value = (value,)
    blocks = set()
    for block in value:
        try:
            number = int(block)
        except (TypeError, ValueError):
            raise EventValidationError(
                "blocks", "must be block numbers", index=index, value=block
            ) from None
        if number != block:
            raise EventValidationError("blocks", "must be whole numbers", index=index, value=block)
        blocks.add(number)
    return tuple(sorted(blocks))


def _first_present(data: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _to_float(value: Any, field: str, index: int | None) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise EventValidationError(field, "must be a number", index=index, value=value) from None
