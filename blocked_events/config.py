"""
Construction options for blocked event sets.

Options can be given in code, loaded from a YAML file, or read from the
environment. Both the original option names (``BlockStartTimes``,
``BlockTime``, ``MaxTime``) and their snake_case forms are accepted.
"""

from __future__ import annotations

import math
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigurationError

OPTION_NAMES = {
    "BlockStartTimes": "block_start_times",
    "block_start_times": "block_start_times",
    "BlockTime": "block_time",
    "block_time": "block_time",
    "MaxTime": "max_time",
    "max_time": "max_time",
}


@dataclass
class BlockingConfig:
    """How an event set is divided into blocks.

    Supplying ``block_start_times`` fixes the block geometry (epoched data);
    otherwise blocks of ``block_time`` seconds are computed from zero.
    An empty start time sequence counts as not supplied.
    """

    block_start_times: tuple[float, ...] | None = None
    block_time: float = 1.0
    max_time: float | None = None

    def __post_init__(self) -> None:
        """Normalize block start times to a tuple of floats."""
        if self.block_start_times is not None:
            starts = _as_float_tuple(self.block_start_times, "BlockStartTimes")
            self.block_start_times = starts or None

    @property
    def preblocked(self) -> bool:
        """Whether the block geometry is fixed up front."""
        return self.block_start_times is not None

    def validate(self) -> BlockingConfig:
        """Check option values.

        Returns:
            The config itself, for chaining

        Raises:
            ConfigurationError: If an option value is invalid
        """
        if not is_positive_number(self.block_time):
            raise ConfigurationError("BlockTime", "must be a positive number", self.block_time)
        if self.max_time is not None and not is_positive_number(self.max_time):
            raise ConfigurationError("MaxTime", "must be a positive number", self.max_time)
        self.block_time = float(self.block_time)
        if self.max_time is not None:
            self.max_time = float(self.max_time)
        if self.block_start_times is not None:
            for start in self.block_start_times:
                if not math.isfinite(start):
                    raise ConfigurationError("BlockStartTimes", "must be finite", start)
        return self

    def merged(self, options: Mapping[str, Any]) -> BlockingConfig:
        """Return a copy with the given options applied on top."""
        values = {
            "block_start_times": self.block_start_times,
            "block_time": self.block_time,
            "max_time": self.max_time,
        }
        values.update(_normalize_keys(options))
        return BlockingConfig(**values)

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the original option names."""
        return {
            "BlockStartTimes": list(self.block_start_times) if self.block_start_times else None,
            "BlockTime": self.block_time,
            "MaxTime": self.max_time,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BlockingConfig:
        """Create config from a mapping of option names to values.

        Raises:
            ConfigurationError: If an option name is unknown or a value is invalid
        """
        return cls().merged(data).validate()

    @classmethod
    def from_yaml(cls, path: str | Path) -> BlockingConfig:
        """Load config from a YAML file.

        The options may sit at the top level or under a ``blocking`` key:

        ```yaml
        blocking:
          BlockTime: 2.0
          MaxTime: 600
        ```
        """
        content = Path(path).read_text()
        data = yaml.safe_load(content) or {}
        if not isinstance(data, Mapping):
            raise ConfigurationError("config", "YAML content must be a mapping")
        if "blocking" in data:
            data = data["blocking"] or {}
        return cls.from_dict(data)

    @classmethod
    def from_env(cls) -> BlockingConfig:
        """Create config from environment variables."""
        values: dict[str, Any] = {}
        block_time = os.environ.get("BLOCKED_EVENTS_BLOCK_TIME")
        if block_time:
            values["block_time"] = _env_float(block_time, "BlockTime")
        max_time = os.environ.get("BLOCKED_EVENTS_MAX_TIME")
        if max_time:
            values["max_time"] = _env_float(max_time, "MaxTime")
        starts = os.environ.get("BLOCKED_EVENTS_BLOCK_START_TIMES")
        if starts:
            values["block_start_times"] = [
                _env_float(part, "BlockStartTimes") for part in starts.split(",") if part.strip()
            ]
        return cls.from_dict(values)


def _normalize_keys(options: Mapping[str, Any]) -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    for key, value in options.items():
        if key not in OPTION_NAMES:
            raise ConfigurationError(key, "unknown option")
        normalized[OPTION_NAMES[key]] = value
    return normalized


def _as_float_tuple(values: Any, option: str) -> tuple[float, ...]:
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        values = (values,)
    try:
        return tuple(float(v) for v in values)
    except (TypeError, ValueError):
        raise ConfigurationError(option, "must be numbers", values) from None


def is_positive_number(value: Any) -> bool:
    """Whether a value converts to a finite number greater than zero."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(number) and number > 0


def _env_float(raw: str, option: str) -> float:
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(option, "must be a number", raw) from None
