"""
Validated, time-ordered storage for event records.

The store is the immutable base of an event set. It checks every record
once, sorts the events by start time and derives the type registry;
everything that depends on block geometry is computed elsewhere and can
be thrown away and rebuilt without touching the store.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any

import numpy as np
from numpy.typing import NDArray

from ..exceptions import (
    CertaintyOutOfRangeError,
    EventValidationError,
    NonemptyTypeError,
    NonNegativeStartTimeError,
)
from .registry import TypeRegistry
from .types import EventRecord, normalize_blocks

logger = logging.getLogger(__name__)


def coerce_record(event: EventRecord | Mapping[str, Any], index: int) -> EventRecord:
    """Convert one input event to an EventRecord with normalized blocks."""
    if isinstance(event, EventRecord):
        return replace(event, blocks=normalize_blocks(event.blocks, index))
    if isinstance(event, Mapping):
        return EventRecord.from_dict(event, index=index)
    raise EventValidationError(
        "event", f"expected a mapping or EventRecord, got {type(event).__name__}", index=index
    )


def validate_records(records: list[EventRecord]) -> None:
    """Check start times, then certainties, then types.

    Raises the first failure found, scanning each field over all
    records before moving to the next field.

    Raises:
        NonNegativeStartTimeError: If a start time is NaN, infinite or negative
        CertaintyOutOfRangeError: If a certainty is NaN or outside [0, 1]
        NonemptyTypeError: If a type label is empty or blank
    """
    for k, record in enumerate(records):
        if not math.isfinite(record.start_time) or record.start_time < 0:
            raise NonNegativeStartTimeError(k, record.start_time)
    for k, record in enumerate(records):
        if not 0.0 <= record.certainty <= 1.0:
            raise CertaintyOutOfRangeError(k, record.certainty)
    for k, record in enumerate(records):
        if not isinstance(record.type, str) or not record.type.strip():
            raise NonemptyTypeError(k, record.type)


class EventStore:
    """Immutable, start-time-ordered array of events.

    Events are sorted by start time; ties keep their input order. The
    per-field arrays are read-only numpy views over the sorted events,
    indexed by zero-based event index.

    Attributes:
        records: Sorted event records
        start_times: Event start times in seconds
        certainty: Event certainties
        type_numbers: One-based type number of each event
        input_order: Input position of each stored event
        registry: Type registry built from the event types
    """

    def __init__(self, events: Iterable[EventRecord | Mapping[str, Any]]) -> None:
        """Validate and store events.

        Args:
            events: Event records or mappings with ``type``, ``startTime``
                and optional ``certainty`` and ``blocks``

        Raises:
            EventValidationError: If any event is invalid; nothing is stored
        """
        records = [coerce_record(event, k) for k, event in enumerate(events)]
        validate_records(records)

        start_times = np.array([r.start_time for r in records], dtype=np.float64)
        order = np.argsort(start_times, kind="stable")

        self.records: tuple[EventRecord, ...] = tuple(records[k] for k in order)
        self.registry = TypeRegistry(r.type for r in self.records)

        self.start_times = _frozen(start_times[order])
        self.certainty = _frozen(np.array([r.certainty for r in self.records], dtype=np.float64))
        self.type_numbers = _frozen(self.registry.numbers_for(r.type for r in self.records))
        self.input_order = _frozen(order.astype(np.intp))

        logger.debug(
            "Stored %d events of %d types", len(self.records), len(self.registry)
        )

    @property
    def types(self) -> tuple[str, ...]:
        """Type label of each event."""
        return tuple(r.type for r in self.records)

    @property
    def blocks(self) -> tuple[tuple[int, ...] | None, ...]:
        """Explicit block membership of each event (None where not given)."""
        return tuple(r.blocks for r in self.records)

    @property
    def max_start_time(self) -> float:
        """Latest event start time, 0 for an empty store."""
        return float(self.start_times[-1]) if len(self.records) else 0.0

    def __len__(self) -> int:
        return len(self.records)


def _frozen(array: NDArray[Any]) -> NDArray[Any]:
    array.flags.writeable = False
    return array
