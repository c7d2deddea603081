"""
Derived block index for an event set.

The index answers "which events are in these blocks" and "how many events
of each type are in these blocks". It is rebuilt in full whenever the
block geometry changes and is read-only in between.

Index Invariants:
1. ``block_list[b - 1]`` is the ascending, distinct event indices in block b
2. ``event_blocks[e]`` is the ascending, distinct block numbers of event e
3. ``event_counts[t - 1, b - 1]`` counts events of type t listing block b,
   so an event in k blocks adds to k counts
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

Range = tuple[int, int]


@dataclass(frozen=True)
class EventIndex:
    """Block membership and per-type counts for one block geometry.

    Attributes:
        block_list: Event indices of each block, by block number - 1
        event_blocks: Block numbers of each event, by event index
        event_counts: Types x blocks count matrix
        version: Version number stamped on this rebuild
    """

    block_list: tuple[NDArray[np.intp], ...]
    event_blocks: tuple[tuple[int, ...], ...]
    event_counts: NDArray[np.int64]
    version: int

    @property
    def number_blocks(self) -> int:
        return len(self.block_list)

    @property
    def number_types(self) -> int:
        return int(self.event_counts.shape[0])

    def events_in_block_range(self, start_block: int, end_block: int) -> NDArray[np.intp]:
        """Distinct event indices in blocks start_block..end_block (inclusive).

        The range is clamped to 1..number_blocks. Events in several of the
        requested blocks appear once.
        """
        first, last = clamp_range((start_block, end_block), self.number_blocks)
        if first > last:
            return np.empty(0, dtype=np.intp)
        return np.unique(np.concatenate(self.block_list[first - 1 : last])).astype(np.intp)

    def counts(
        self,
        type_range: Range | None = None,
        block_range: Range | None = None,
    ) -> NDArray[np.int64]:
        """Sub-matrix of event counts for inclusive, one-based ranges.

        None selects every type or block. Ranges are clamped to the valid
        numbers; an empty range gives a zero-sized axis.
        """
        t_first, t_last = clamp_range(type_range or (1, self.number_types), self.number_types)
        b_first, b_last = clamp_range(block_range or (1, self.number_blocks), self.number_blocks)
        rows = slice(t_first - 1, max(t_first - 1, t_last))
        cols = slice(b_first - 1, max(b_first - 1, b_last))
        return self.event_counts[rows, cols].copy()


def clamp_range(bounds: Range, upper: int) -> Range:
    """Clamp an inclusive one-based range to 1..upper."""
    first, last = bounds
    return max(int(first), 1), min(int(last), upper)
