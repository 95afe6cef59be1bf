"""
Shared fixtures for chat gateway tests.
"""
from typing import Any, Dict, List

import pytest

from helpers import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def events() -> List[str]:
    return []


@pytest.fixture
def chat_body() -> Dict[str, Any]:
    """Minimal valid chat request."""
    return {
        "messages": [{"role": "user", "content": "hi"}],
        "chatId": "c1",
        "userId": "u1",
        "model": "m1",
        "isAuthenticated": False,
        "systemPrompt": "",
        "enableSearch": False,
    }
