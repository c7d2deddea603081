"""
Event type registry.

Maps the distinct event type labels of an event set to dense type
numbers. Labels are ordered lexicographically and numbered from 1, so
type number ``t`` is row ``t - 1`` of the event count matrix.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import numpy as np
from numpy.typing import NDArray


class TypeRegistry:
    """Bidirectional mapping between type labels and type numbers.

    Built once from the event types of an event set and never changed
    afterwards; reblocking does not add or remove types.
    """

    def __init__(self, types: Iterable[str]) -> None:
        """Initialize from the event type labels (duplicates allowed).

        Args:
            types: Event type labels in any order
        """
        self._types: tuple[str, ...] = tuple(sorted(set(types)))
        self._numbers: dict[str, int] = {label: k + 1 for k, label in enumerate(self._types)}

    @property
    def types(self) -> tuple[str, ...]:
        """Registered labels in type number order."""
        return self._types

    def number_of(self, label: str) -> int:
        """Get the type number of a label.

        Raises:
            KeyError: If the label is not registered
        """
        return self._numbers[label]

    def label_of(self, number: int) -> str:
        """Get the label of a one-based type number.

        Raises:
            IndexError: If the number is outside 1..len(registry)
        """
        if number < 1 or number > len(self._types):
            raise IndexError(f"Type number {number} is outside 1..{len(self._types)}")
        return self._types[number - 1]

    def numbers_for(self, labels: Iterable[str]) -> NDArray[np.intp]:
        """Map a sequence of labels to their type numbers."""
        return np.array([self._numbers[label] for label in labels], dtype=np.intp)

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, label: object) -> bool:
        return label in self._numbers

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)
