"""
Block geometry and version numbering.

A partition divides elapsed time into numbered blocks, either computed
from a block length or fixed up front for epoched data.
"""

from .partition import (
    BlockPartition,
    ComputedPartition,
    FixedPartition,
    PartitionMode,
    infer_block_membership,
    resolve_partition,
)
from .version import VersionCounter

__all__ = [
    # Partitions
    "BlockPartition",
    "ComputedPartition",
    "FixedPartition",
    "PartitionMode",
    "infer_block_membership",
    "resolve_partition",
    # Versions
    "VersionCounter",
]
