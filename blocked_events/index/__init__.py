"""
Derived block index: block lists, event blocks and per-type counts.
"""

from .rebuilder import IndexRebuilder, RebuildResult
from .types import EventIndex, clamp_range

__all__ = [
    "EventIndex",
    "IndexRebuilder",
    "RebuildResult",
    "clamp_range",
]
