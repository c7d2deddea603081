"""
Full event index reconstruction.

Rebuilding is a coarse, user-initiated operation (changing the block
length in a viewer), so the index is always recomputed from scratch from
the event store and the current partition rather than patched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

import numpy as np

from ..blocks.partition import BlockPartition
from ..blocks.version import VersionCounter
from ..store.event_store import EventStore
from .types import EventIndex

logger = logging.getLogger(__name__)


@dataclass
class RebuildResult:
    """Result of an index rebuild."""

    index: EventIndex
    events_processed: int
    memberships_processed: int
    unplaced_events: int
    duration_ms: int

    @property
    def version(self) -> int:
        return self.index.version


class IndexRebuilder:
    """Rebuilds event indexes from an event store and a partition.

    Each rebuild takes exactly one version from the counter.
    """

    def __init__(self, counter: VersionCounter | None = None) -> None:
        """Initialize the rebuilder.

        Args:
            counter: Optional VersionCounter. Creates one if not provided.
        """
        self.counter = counter or VersionCounter()

    def rebuild(self, store: EventStore, partition: BlockPartition) -> RebuildResult:
        """Compute block lists, event blocks and counts for a partition.

        Args:
            store: Validated event store
            partition: Block partition to index against

        Returns:
            RebuildResult with the new index and statistics
        """
        start_time = datetime.now(UTC)

        memberships = partition.memberships(store)
        number_blocks = partition.number_blocks

        members: list[list[int]] = [[] for _ in range(number_blocks)]
        counts = np.zeros((len(store.registry), number_blocks), dtype=np.int64)
        memberships_processed = 0
        unplaced = 0

        # Events are visited in index order, so each block list comes out sorted
        for event, blocks in enumerate(memberships):
            if not blocks:
                unplaced += 1
                continue
            row = store.type_numbers[event] - 1
            for block in blocks:
                members[block - 1].append(event)
                counts[row, block - 1] += 1
                memberships_processed += 1

        counts.flags.writeable = False
        block_list = tuple(_frozen_indices(m) for m in members)

        index = EventIndex(
            block_list=block_list,
            event_blocks=tuple(memberships),
            event_counts=counts,
            version=self.counter.next_version(),
        )

        duration_ms = int((datetime.now(UTC) - start_time).total_seconds() * 1000)
        logger.debug(
            "Rebuilt index version %d: %d events, %d blocks, %d unplaced",
            index.version,
            len(store),
            number_blocks,
            unplaced,
        )

        return RebuildResult(
            index=index,
            events_processed=len(store),
            memberships_processed=memberships_processed,
            unplaced_events=unplaced,
            duration_ms=duration_ms,
        )


def _frozen_indices(events: list[int]) -> np.ndarray:
    array = np.array(events, dtype=np.intp)
    array.flags.writeable = False
    return array
