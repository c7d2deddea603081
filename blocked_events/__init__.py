"""
Blocked Events

In-memory indexing of timestamped, typed events against a partition of
elapsed time into blocks, for block-based time series viewers.

Provides:
- Validated, time-ordered event storage with a sorted type registry
- Computed (uniform) and fixed (epoched, possibly overlapping) block partitions
- Block to event lists, event to block lists and type x block counts
- A version ID that changes on every rebuild, for cache invalidation

Usage:

    >>> from blocked_events import BlockedEvents
    >>> blocked = BlockedEvents(events, BlockTime=2.0)
    >>> visible = blocked.get_blocks(3, 5)
    >>> times = blocked.get_start_times(visible)
    >>> blocked.reblock(5.0)
    True

Epoched data:

    # Each event lists the epochs it falls in; epochs may overlap
    blocked = BlockedEvents(events, BlockStartTimes=[0.0, 0.5, 1.0], BlockTime=1.0)
"""

from .blocks import (
    BlockPartition,
    ComputedPartition,
    FixedPartition,
    PartitionMode,
    VersionCounter,
    infer_block_membership,
)
from .config import BlockingConfig
from .event_set import BlockedEvents

# Exceptions
from .exceptions import (
    BlockedEventsError,
    BlockMembershipOutOfRangeError,
    CertaintyOutOfRangeError,
    ConfigurationError,
    EventValidationError,
    MissingBlockMembershipError,
    NonemptyTypeError,
    NonNegativeStartTimeError,
)
from .index import EventIndex, IndexRebuilder, RebuildResult
from .store import EventRecord, EventStore, TypeRegistry

__all__ = [
    # Event sets
    "BlockedEvents",
    "BlockingConfig",
    # Building blocks
    "EventRecord",
    "EventStore",
    "TypeRegistry",
    "BlockPartition",
    "ComputedPartition",
    "FixedPartition",
    "PartitionMode",
    "VersionCounter",
    "EventIndex",
    "IndexRebuilder",
    "RebuildResult",
    "infer_block_membership",
    # Exceptions
    "BlockedEventsError",
    "ConfigurationError",
    "EventValidationError",
    "NonNegativeStartTimeError",
    "CertaintyOutOfRangeError",
    "NonemptyTypeError",
    "MissingBlockMembershipError",
    "BlockMembershipOutOfRangeError",
]

__version__ = "0.1.0"
