"""
Shared test fixtures.

Provides small event sets for both partition modes:
- scenario_events: three events of two types for computed blocks
- epoched_events: events with explicit memberships in overlapping epochs
"""

import pytest


@pytest.fixture
def scenario_events() -> list[dict]:
    """Two A events and one B event spread over two seconds."""
    return [
        {"type": "A", "startTime": 0.2},
        {"type": "B", "startTime": 1.1},
        {"type": "A", "startTime": 1.9},
    ]


@pytest.fixture
def epoched_events() -> list[dict]:
    """Events for epochs starting at 0.0 and 0.5 with 1 second blocks.

    The middle event falls in the overlap and is listed in both epochs.
    """
    return [
        {"type": "stim", "startTime": 0.1, "certainty": 0.9, "blocks": [1]},
        {"type": "resp", "startTime": 0.7, "certainty": 0.4, "blocks": [1, 2]},
        {"type": "stim", "startTime": 1.2, "blocks": [2]},
    ]
