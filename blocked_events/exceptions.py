"""
Custom exceptions for blocked event indexing.

Every exception is raised while building an event set or its
configuration. Once an event set exists, queries clamp their
ranges and reblocking with bad parameters is a no-op, so nothing
here is raised after construction succeeds.
"""

from __future__ import annotations

from typing import Any


class BlockedEventsError(Exception):
    """Base exception for all blocked event errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(BlockedEventsError):
    """Raised when a construction option is invalid."""

    def __init__(self, option: str, reason: str, value: Any = None):
        details: dict[str, Any] = {"option": option, "reason": reason}
        if value is not None:
            details["value"] = value
        super().__init__(f"Invalid option {option}: {reason}", details)
        self.option = option
        self.reason = reason
        self.value = value


class EventValidationError(BlockedEventsError):
    """Raised when an event record fails validation."""

    def __init__(
        self,
        field: str,
        reason: str,
        index: int | None = None,
        value: Any = None,
    ):
        details: dict[str, Any] = {"field": field, "reason": reason}
        if index is not None:
            details["index"] = index
        if value is not None:
            details["value"] = value
        message = f"Validation failed for {field}: {reason}"
        if index is not None:
            message += f" (event {index})"
        super().__init__(message, details)
        self.field = field
        self.reason = reason
        self.index = index
        self.value = value


class NonNegativeStartTimeError(EventValidationError):
    """Raised when an event start time is NaN, infinite or negative."""

    def __init__(self, index: int, value: float):
        super().__init__(
            "startTime",
            "event start times must be finite and non negative",
            index=index,
            value=value,
        )


class CertaintyOutOfRangeError(EventValidationError):
    """Raised when an event certainty is outside [0, 1]."""

    def __init__(self, index: int, value: float):
        super().__init__(
            "certainty",
            "event certainties must be between 0 and 1 inclusive",
            index=index,
            value=value,
        )


class NonemptyTypeError(EventValidationError):
    """Raised when an event type is empty or blank."""

    def __init__(self, index: int, value: str | None = None):
        super().__init__("type", "event types must be non empty", index=index, value=value)


class MissingBlockMembershipError(EventValidationError):
    """Raised when a preblocked event set has an event without block membership.

    Block start times given up front may overlap, so membership cannot be
    recovered from event times and has to be supplied per event.
    """

    def __init__(self, index: int):
        super().__init__(
            "blocks",
            "events must list their blocks when block start times are fixed",
            index=index,
        )


class BlockMembershipOutOfRangeError(EventValidationError):
    """Raised when an event lists a block number that does not exist."""

    def __init__(self, index: int, block: int, number_blocks: int):
        super().__init__(
            "blocks",
            f"block {block} is outside 1..{number_blocks}",
            index=index,
            value=block,
        )
        self.block = block
        self.number_blocks = number_blocks
