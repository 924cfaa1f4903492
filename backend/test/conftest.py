"""Shared fixtures for lucky draw tests."""

from typing import List
from unittest.mock import AsyncMock, MagicMock

import pytest

from luckydraw.services.draw_session import DrawSession


class ScriptedRandomSource:
    """Returns the scripted indices in order, then repeats the last one."""

    def __init__(self, *indices: int):
        self.indices: List[int] = list(indices) or [0]
        self.calls: List[int] = []

    def pick_index(self, upper: int) -> int:
        self.calls.append(upper)
        if len(self.indices) > 1:
            return self.indices.pop(0)
        return self.indices[0]


@pytest.fixture
def scripted_random():
    return ScriptedRandomSource(0)


@pytest.fixture
def session(scripted_random):
    return DrawSession(random_source=scripted_random)


@pytest.fixture
def mock_sio():
    """Stand-in for socketio.AsyncServer that records emits."""
    sio = MagicMock()
    sio.emit = AsyncMock()
    return sio
