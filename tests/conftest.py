"""
Pytest configuration and shared fixtures for Habitally tests.
"""

import random
from datetime import datetime
from typing import Iterable

import pytest
import pytz

from habitally.core.models import (
    Habit,
    HabitCategory,
    Routine,
    TimeOfDay,
)
from habitally.utils.datetime_utils import days_ago

BERLIN = pytz.timezone("Europe/Berlin")


@pytest.fixture
def tz():
    """Fixed local timezone for calendar-day comparisons."""
    return BERLIN


@pytest.fixture
def now(tz):
    """Sunday 2025-06-15 10:00 local time."""
    return tz.localize(datetime(2025, 6, 15, 10, 0))


@pytest.fixture
def rng():
    return random.Random(42)


def complete_on(item, now, tz, offsets: Iterable[int], times: int = 1):
    """Add `times` completions on each of the given day offsets back from now."""
    for offset in offsets:
        for _ in range(times):
            item.complete(now=days_ago(offset, now, tz))
    return item


@pytest.fixture
def make_habit(now, tz):
    def _make(target_frequency: int = 1, active: bool = True) -> Habit:
        habit = Habit.create(
            "Read", "Read a few pages", HabitCategory.LEARNING,
            target_frequency=target_frequency,
            motivational_message="Keep going",
            now=days_ago(60, now, tz),
        )
        habit.is_active = active
        return habit
    return _make


@pytest.fixture
def make_routine(now, tz):
    def _make() -> Routine:
        return Routine.create("Morning", "Start the day", TimeOfDay.MORNING, now=days_ago(60, now, tz), tz=tz)
    return _make


@pytest.fixture
def data_dir(tmp_path):
    """Create a temporary data directory."""
    directory = tmp_path / "data"
    directory.mkdir()
    return directory
