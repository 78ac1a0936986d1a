from __future__ import annotations

import pytest
from _fakes import Counter

from cmdroute_core.instrumentation import HookRegistry, set_hook_registry


@pytest.fixture(autouse=True)
def hooks() -> HookRegistry:
    """Fresh context-local hook registry for every test."""
    registry = HookRegistry()
    set_hook_registry(registry)
    return registry


@pytest.fixture
def counter() -> Counter:
    return Counter()
