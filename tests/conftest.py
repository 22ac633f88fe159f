from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.hr_suite.hr_suite.container import build_container


class FakeClock:
    """Callable clock that only moves when a test says so."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 9, 0, 0)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def container(clock):
    return build_container(clock=clock)
