"""Tests for BlockingConfig loading and validation."""

from __future__ import annotations

import math
from pathlib import Path

import pytest

from blocked_events import BlockingConfig, ConfigurationError


class TestFromDict:
    """Tests for BlockingConfig.from_dict."""

    def test_defaults(self) -> None:
        config = BlockingConfig.from_dict({})

        assert config.block_start_times is None
        assert config.block_time == 1.0
        assert config.max_time is None
        assert not config.preblocked

    def test_original_option_names(self) -> None:
        config = BlockingConfig.from_dict(
            {"BlockStartTimes": [0, 0.5], "BlockTime": 2, "MaxTime": "10"}
        )

        assert config.block_start_times == (0.0, 0.5)
        assert config.block_time == 2.0
        assert config.max_time == 10.0
        assert config.preblocked

    def test_snake_case_names(self) -> None:
        config = BlockingConfig.from_dict({"block_time": 0.25, "max_time": 4})

        assert config.block_time == 0.25
        assert config.max_time == 4.0

    def test_scalar_block_start_time(self) -> None:
        config = BlockingConfig.from_dict({"BlockStartTimes": 3})

        assert config.block_start_times == (3.0,)

    def test_empty_block_start_times(self) -> None:
        """An empty start time list means blocks are computed."""
        config = BlockingConfig.from_dict({"BlockStartTimes": []})

        assert config.block_start_times is None
        assert not config.preblocked

    def test_unknown_option(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            BlockingConfig.from_dict({"BlockLength": 2})

        assert exc_info.value.option == "BlockLength"
        assert exc_info.value.reason == "unknown option"

    @pytest.mark.parametrize("block_time", [0, -2.5, math.nan, math.inf, "long", None])
    def test_invalid_block_time(self, block_time) -> None:
        with pytest.raises(ConfigurationError, match="BlockTime"):
            BlockingConfig.from_dict({"BlockTime": block_time})

    @pytest.mark.parametrize("max_time", [0, -1, math.nan])
    def test_invalid_max_time(self, max_time) -> None:
        with pytest.raises(ConfigurationError, match="MaxTime"):
            BlockingConfig.from_dict({"MaxTime": max_time})

    def test_non_numeric_block_start_times(self) -> None:
        with pytest.raises(ConfigurationError, match="BlockStartTimes"):
            BlockingConfig.from_dict({"BlockStartTimes": ["start", 1.0]})

    def test_infinite_block_start_time(self) -> None:
        with pytest.raises(ConfigurationError, match="must be finite"):
            BlockingConfig.from_dict({"BlockStartTimes": [0.0, math.inf]})


class TestMergeAndSerialize:
    """Tests for merged and to_dict."""

    def test_merged_overrides(self) -> None:
        base = BlockingConfig(block_time=2.0, max_time=8.0)

        merged = base.merged({"MaxTime": 12.0})

        assert merged.block_time == 2.0
        assert merged.max_time == 12.0
        assert base.max_time == 8.0

    def test_to_dict(self) -> None:
        config = BlockingConfig(block_start_times=[0, 1], block_time=1.0, max_time=2.0)

        assert config.to_dict() == {
            "BlockStartTimes": [0.0, 1.0],
            "BlockTime": 1.0,
            "MaxTime": 2.0,
        }

    def test_to_dict_round_trips_through_from_dict(self) -> None:
        config = BlockingConfig(block_time=0.5, max_time=3.0)

        assert BlockingConfig.from_dict(config.to_dict()) == config


class TestFromYaml:
    """Tests for BlockingConfig.from_yaml."""

    def test_top_level_options(self, tmp_path: Path) -> None:
        path = tmp_path / "blocking.yaml"
        path.write_text("BlockTime: 2.0\nMaxTime: 600\n")

        config = BlockingConfig.from_yaml(path)

        assert config.block_time == 2.0
        assert config.max_time == 600.0

    def test_nested_blocking_section(self, tmp_path: Path) -> None:
        path = tmp_path / "viewer.yaml"
        path.write_text("blocking:\n  BlockStartTimes: [0, 0.5, 1.0]\n  BlockTime: 1\n")

        config = BlockingConfig.from_yaml(str(path))

        assert config.block_start_times == (0.0, 0.5, 1.0)
        assert config.preblocked

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert BlockingConfig.from_yaml(path) == BlockingConfig()

    def test_non_mapping_content(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            BlockingConfig.from_yaml(path)

    def test_invalid_value_in_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("BlockTime: -1\n")

        with pytest.raises(ConfigurationError, match="BlockTime"):
            BlockingConfig.from_yaml(path)


class TestFromEnv:
    """Tests for BlockingConfig.from_env."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (
            "BLOCKED_EVENTS_BLOCK_TIME",
            "BLOCKED_EVENTS_MAX_TIME",
            "BLOCKED_EVENTS_BLOCK_START_TIMES",
        ):
            monkeypatch.delenv(name, raising=False)

    def test_defaults_without_variables(self) -> None:
        assert BlockingConfig.from_env() == BlockingConfig()

    def test_reads_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BLOCKED_EVENTS_BLOCK_TIME", "2.5")
        monkeypatch.setenv("BLOCKED_EVENTS_MAX_TIME", "30")
        monkeypatch.setenv("BLOCKED_EVENTS_BLOCK_START_TIMES", "0, 10, 20,")

        config = BlockingConfig.from_env()

        assert config.block_time == 2.5
        assert config.max_time == 30.0
        assert config.block_start_times == (0.0, 10.0, 20.0)

    def test_non_numeric_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BLOCKED_EVENTS_MAX_TIME", "forever")

        with pytest.raises(ConfigurationError, match="MaxTime"):
            BlockingConfig.from_env()
