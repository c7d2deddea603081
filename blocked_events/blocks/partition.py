"""
Block partitions of elapsed time.

A partition is one of two shapes:

- ComputedPartition: consecutive blocks of ``block_time`` seconds starting
  at zero and covering [0, max_time]. Changing the block time recomputes
  the geometry.
- FixedPartition: block start times supplied up front (epoched data).
  Blocks may be irregular or overlap, and each event names the blocks it
  belongs to. Changing the block time only updates bookkeeping.

Blocks are numbered from 1 in both shapes.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

import numpy as np
from numpy.typing import NDArray

from ..exceptions import BlockMembershipOutOfRangeError, MissingBlockMembershipError

if TYPE_CHECKING:
    from ..config import BlockingConfig
    from ..store.event_store import EventStore

Membership = tuple[int, ...]


class PartitionMode(Enum):
    """How block geometry was obtained."""

    COMPUTED = "computed"  # Uniform blocks from a block length
    FIXED = "fixed"  # Externally supplied block start times


@dataclass(frozen=True)
class ComputedPartition:
    """Uniform, non-overlapping blocks covering [0, max_time].

    When events start after ``max_time`` the blocks run on until the block
    holding ``latest_start``, so every event is placed.
    """

    block_time: float
    max_time: float
    latest_start: float = 0.0

    mode: ClassVar[PartitionMode] = PartitionMode.COMPUTED

    @property
    def number_blocks(self) -> int:
        number_blocks = math.ceil(self.max_time / self.block_time)
        if self.latest_start > self.max_time:
            number_blocks = max(number_blocks, math.floor(self.latest_start / self.block_time) + 1)
        return number_blocks

    @property
    def block_start_times(self) -> NDArray[np.float64]:
        starts = np.arange(self.number_blocks, dtype=np.float64) * self.block_time
        starts.flags.writeable = False
        return starts

    def memberships(self, store: EventStore) -> tuple[Membership, ...]:
        """Place each event in the single block containing its start time.

        An event exactly at the end of the last block closes it.
        """
        if not len(store):
            return ()
        blocks = np.floor(store.start_times / self.block_time).astype(np.intp) + 1
        blocks = np.minimum(blocks, self.number_blocks)
        return tuple((int(block),) for block in blocks)

    def reblocked(self, block_time: float, max_time: float | None = None) -> ComputedPartition:
        """Return the partition for a new block length (and optional end time)."""
        return replace(
            self,
            block_time=block_time,
            max_time=self.max_time if max_time is None else max_time,
        )


@dataclass(frozen=True)
class FixedPartition:
    """Externally supplied, possibly irregular or overlapping blocks."""

    starts: tuple[float, ...]
    block_time: float
    max_time: float

    mode: ClassVar[PartitionMode] = PartitionMode.FIXED

    @property
    def number_blocks(self) -> int:
        return len(self.starts)

    @property
    def block_start_times(self) -> NDArray[np.float64]:
        starts = np.array(self.starts, dtype=np.float64)
        starts.flags.writeable = False
        return starts

    def memberships(self, store: EventStore) -> tuple[Membership, ...]:
        """Use the block membership each event carries."""
        self.check_memberships(store)
        return tuple(blocks or () for blocks in store.blocks)

    def check_memberships(self, store: EventStore) -> None:
        """Require every event to name existing blocks.

        Raises:
            MissingBlockMembershipError: If an event has no membership
            BlockMembershipOutOfRangeError: If an event names a block
                outside 1..number_blocks
        """
        number_blocks = self.number_blocks
        for k, blocks in enumerate(store.blocks):
            if blocks is None:
                raise MissingBlockMembershipError(k)
            for block in blocks:
                if block < 1 or block > number_blocks:
                    raise BlockMembershipOutOfRangeError(k, block, number_blocks)

    def reblocked(self, block_time: float, max_time: float | None = None) -> FixedPartition:
        """Return the partition with new bookkeeping; start times never change."""
        return replace(
            self,
            block_time=block_time,
            max_time=self.max_time if max_time is None else max_time,
        )


BlockPartition = ComputedPartition | FixedPartition


def resolve_partition(config: BlockingConfig, store: EventStore) -> BlockPartition:
    """Choose the partition for a validated config and event store.

    With block start times, ``max_time`` defaults to the last block start
    plus the block time. Without them it defaults to the latest event start
    time, or to one block time when every event starts at zero.
    """
    if config.block_start_times is not None:
        starts = config.block_start_times
        max_time = config.max_time
        if max_time is None:
            max_time = max(starts) + config.block_time
        partition: BlockPartition = FixedPartition(
            starts=starts, block_time=config.block_time, max_time=max_time
        )
        partition.check_memberships(store)
        return partition

    max_time = config.max_time
    if max_time is None:
        max_time = store.max_start_time or config.block_time
    return ComputedPartition(
        block_time=config.block_time,
        max_time=max_time,
        latest_start=store.max_start_time,
    )


def infer_block_membership(
    start_time: float,
    block_start_times: Sequence[float],
    block_time: float,
) -> Membership:
    """Find every block whose [start, start + block_time) contains a time.

    Intended for adapters that build explicit memberships for epoched data;
    all overlapping blocks are returned, not just the first.
    """
    return tuple(
        k + 1
        for k, start in enumerate(block_start_times)
        if start <= start_time < start + block_time
    )
