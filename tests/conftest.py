"""Shared fixtures for unitylauncher tests."""

from __future__ import annotations

from datetime import datetime

import pytest

from unitylauncher.notify import CollectingWarningChannel

from tests.fakes import RecordingLauncher

FIXED_NOW = datetime(2026, 3, 1, 12, 0, 0)


@pytest.fixture
def warnings() -> CollectingWarningChannel:
    """A warning channel that keeps messages for assertions."""
    return CollectingWarningChannel()


@pytest.fixture
def launcher() -> RecordingLauncher:
    """A launcher that records instead of spawning."""
    return RecordingLauncher()


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW
