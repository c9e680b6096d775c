"""Shared test fixtures."""

import os

# Settings() requires JWT_SECRET; set it before any src import reads config.
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")

import pytest  # noqa: E402

from src.pm_account.domain.custody import CustodyBook  # noqa: E402
from src.pm_common.clock import ManualClock  # noqa: E402
from src.pm_common.events import RecordingEventSink  # noqa: E402
from src.pm_engine.engine import ExchangeEngine  # noqa: E402

START_MS = 1_700_000_000_000
DAY_MS = 86_400_000


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(START_MS)


@pytest.fixture
def sink() -> RecordingEventSink:
    return RecordingEventSink()


@pytest.fixture
def engine(clock: ManualClock, sink: RecordingEventSink) -> ExchangeEngine:
    """Fresh engine per test, with a settable clock and recorded events."""
    return ExchangeEngine(custody=CustodyBook(), clock=clock, sink=sink)
