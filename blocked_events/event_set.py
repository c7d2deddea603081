"""
Blocked event sets.

A BlockedEvents object holds the events shown by a block-based viewer and
answers the viewer's queries: which events fall in a range of blocks, how
many events of each type each block holds, and the per-event attributes
needed to draw them. The block length can be changed later with reblock,
which rebuilds the index and bumps the version ID.

Usage:

    >>> events = [
    ...     {"type": "A", "startTime": 0.2},
    ...     {"type": "B", "startTime": 1.1},
    ...     {"type": "A", "startTime": 1.9},
    ... ]
    >>> blocked = BlockedEvents(events, BlockTime=1, MaxTime=3)
    >>> blocked.get_blocks(2, 2).tolist()
    [1, 2]
    >>> blocked.get_event_counts().tolist()
    [[1, 1, 0], [0, 1, 0]]
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace
from typing import Any

import numpy as np
from numpy.typing import NDArray

from .blocks.partition import BlockPartition, PartitionMode, resolve_partition
from .blocks.version import VersionCounter
from .config import BlockingConfig, is_positive_number
from .index.rebuilder import IndexRebuilder
from .index.types import Range
from .logging_utils import EventSetLoggerAdapter
from .store.event_store import EventStore
from .store.types import EventRecord

logger = logging.getLogger(__name__)

Indices = int | Sequence[int] | NDArray[np.integer] | None


class BlockedEvents:
    """Events indexed by (possibly overlapping) time blocks.

    Event indices are zero-based positions in start time order. Block
    numbers and type numbers are one-based.

    Not safe to query while another thread reblocks; callers caching query
    results should compare get_version_id() with the version they saw.
    """

    def __init__(
        self,
        events: Iterable[EventRecord | Mapping[str, Any]],
        config: BlockingConfig | None = None,
        *,
        counter: VersionCounter | None = None,
        **options: Any,
    ) -> None:
        """Validate events, resolve the partition and build the first index.

        Args:
            events: Event records or mappings with ``type``, ``startTime`` and
                optional ``certainty`` and ``blocks``
            config: Blocking options; keyword options override its fields
            counter: Version counter to draw version IDs from. Each event set
                gets its own counter if not provided.
            **options: ``BlockStartTimes``, ``BlockTime``, ``MaxTime`` (or the
                snake_case spellings)

        Raises:
            ConfigurationError: If an option is unknown or invalid
            EventValidationError: If an event is invalid
        """
        resolved = (config or BlockingConfig()).merged(options).validate()

        self._store = EventStore(events)
        self._partition: BlockPartition = resolve_partition(resolved, self._store)
        self._rebuilder = IndexRebuilder(counter)
        self._index = self._rebuilder.rebuild(self._store, self._partition).index
        self._log = EventSetLoggerAdapter(logger, self)

        self._log.info(
            "Indexed %d events of %d types into %d %s blocks (block time %gs, max time %gs)",
            len(self._store),
            len(self._store.registry),
            self._partition.number_blocks,
            self._partition.mode.value,
            self._partition.block_time,
            self._partition.max_time,
        )

    # =========================================================================
    # Reblocking
    # =========================================================================

    def reblock(self, block_time: float | None, max_time: float | None = None) -> bool:
        """Rebuild the index for a new block length.

        Block start times given at construction are kept as they are; only
        computed blocks change geometry. Invalid values (a missing, NaN or
        non-positive block time or max time) leave everything unchanged,
        including the version ID.

        Args:
            block_time: New block length in seconds
            max_time: Optional new end of the time range in seconds

        Returns:
            True if the index was rebuilt, False if the call was ignored
        """
        if not is_positive_number(block_time):
            self._log.debug("Reblock ignored: block time %r is not positive", block_time)
            return False
        if max_time is not None and not is_positive_number(max_time):
            self._log.debug("Reblock ignored: max time %r is not positive", max_time)
            return False

        partition = self._partition.reblocked(
            float(block_time), None if max_time is None else float(max_time)
        )
        result = self._rebuilder.rebuild(self._store, partition)

        self._partition = partition
        self._index = result.index
        return True

    # =========================================================================
    # Block queries
    # =========================================================================

    def get_blocks(self, start_block: int, end_block: int) -> NDArray[np.intp]:
        """Events in blocks start_block..end_block.

        Block numbers are one-based and the range is inclusive and clamped.
        Returns distinct, ascending zero-based event indices, ready for the
        projection accessors.
        """
        return self._index.events_in_block_range(start_block, end_block)

    def get_block_list(self) -> tuple[NDArray[np.intp], ...]:
        """Event indices of every block, by block number - 1."""
        return self._index.block_list

    def get_event_counts(
        self,
        type_range: Range | None = None,
        block_range: Range | None = None,
    ) -> NDArray[np.int64]:
        """Types x blocks counts for inclusive, one-based ranges (None = all)."""
        return self._index.counts(type_range, block_range)

    def get_block_start_times(self, block: Indices = None) -> NDArray[np.float64]:
        """Start times of all blocks, or of the given one-based block numbers.

        Raises:
            IndexError: If a block number is outside 1..number of blocks
        """
        starts = self._partition.block_start_times
        if block is None:
            return starts
        numbers = np.asarray(block, dtype=np.intp)
        if np.any(numbers < 1) or np.any(numbers > len(starts)):
            raise IndexError(f"Block number {block} is outside 1..{len(starts)}")
        return starts[numbers - 1]

    def get_block_time(self) -> float:
        return self._partition.block_time

    def get_max_time(self) -> float:
        return self._partition.max_time

    def get_number_blocks(self) -> int:
        return self._partition.number_blocks

    def get_partition_mode(self) -> PartitionMode:
        return self._partition.mode

    def is_preblocked(self) -> bool:
        """Whether block start times were fixed at construction."""
        return self._partition.mode is PartitionMode.FIXED

    # =========================================================================
    # Event queries
    # =========================================================================

    def get_event(self, index: int) -> EventRecord | None:
        """Return event ``index`` with its current blocks, or None if out of range."""
        if index < 0 or index >= len(self._store):
            return None
        return replace(self._store.records[index], blocks=self._index.event_blocks[index])

    def get_event_blocks(self, indices: Indices = None) -> tuple[tuple[int, ...], ...]:
        """Block numbers of all events, or of the given event indices."""
        event_blocks = self._index.event_blocks
        if indices is None:
            return event_blocks
        return tuple(event_blocks[k] for k in np.atleast_1d(np.asarray(indices, dtype=np.intp)))

    def get_start_times(self, indices: Indices = None) -> NDArray[np.float64]:
        return _project(self._store.start_times, indices)

    def get_certainty(self, indices: Indices = None) -> NDArray[np.float64]:
        return _project(self._store.certainty, indices)

    def get_type_numbers(self, indices: Indices = None) -> NDArray[np.intp]:
        return _project(self._store.type_numbers, indices)

    def get_types(self, indices: Indices = None) -> list[str]:
        """Type labels of all events, or of the given event indices."""
        labels = self._store.registry.types
        return [labels[number - 1] for number in np.atleast_1d(self.get_type_numbers(indices))]

    def get_unique_types(self) -> tuple[str, ...]:
        """Registered type labels in type number order."""
        return self._store.registry.types

    def get_number_events(self) -> int:
        return len(self._store)

    def get_version_id(self) -> int:
        return self._index.version

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return (
            f"BlockedEvents(events={len(self._store)}, types={len(self._store.registry)}, "
            f"blocks={self._partition.number_blocks}, mode={self._partition.mode.value}, "
            f"version={self._index.version})"
        )


def _project(array: NDArray[Any], indices: Indices) -> NDArray[Any]:
    if indices is None:
        return array
    return array[np.asarray(indices, dtype=np.intp)]

