import itertools
from datetime import datetime, timedelta, timezone

import pytest

from todostore.handlers import TaskHandlers
from todostore.repository import TaskRepository
from todostore.store import InMemoryTaskStore


class TickingClock:
    """Clock returning a strictly increasing ISO-8601 timestamp per call."""

    def __init__(self, start=None, step=timedelta(seconds=1)):
        self.start = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.step = step
        self._ticks = itertools.count()

    def __call__(self):
        return (self.start + self.step * next(self._ticks)).isoformat()


@pytest.fixture
def store():
    return InMemoryTaskStore()


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def repository(store, clock):
    return TaskRepository(store, clock=clock)


@pytest.fixture
def handlers(repository):
    return TaskHandlers(repository)
