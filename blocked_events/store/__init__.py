"""
Validated event storage.

Events are checked once, sorted by start time and never changed
afterwards; the type registry is derived from them.
"""

from .event_store import EventStore, coerce_record, validate_records
from .registry import TypeRegistry
from .types import EventRecord, normalize_blocks

__all__ = [
    "EventRecord",
    "EventStore",
    "TypeRegistry",
    "coerce_record",
    "normalize_blocks",
    "validate_records",
]
