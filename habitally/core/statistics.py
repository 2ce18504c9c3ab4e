#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habitally - Derived Statistics
Серии, проценты выполнения и прогресс

Все функции чистые: состояние сущностей + момент "сейчас" -> значение.
Сравнения "тот же день" выполняются в одном часовом поясе (config.tz,
если не передан явно).
"""

import logging
from datetime import date, datetime, timedelta, tzinfo
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from habitally.config import config
from habitally.core.models import (
    Goal,
    Habit,
    HabitCompletion,
    MeditationSession,
    Reflection,
    Routine,
    RoutineCompletion,
)
from habitally.utils.datetime_utils import (
    days_ago,
    end_of_week,
    is_same_calendar_day,
    local_date,
    now_in,
    start_of_week,
)

logger = logging.getLogger(__name__)

Tracked = Union[Habit, Routine]


def _resolve(now: Optional[datetime], tz: Optional[tzinfo]) -> Tuple[datetime, tzinfo]:
    tz = tz or config.tz
    return (now or now_in(tz)), tz

# ===== ПРИВЫЧКИ =====

def completions_for_date(habit: Habit, day: datetime, tz: Optional[tzinfo] = None) -> List[HabitCompletion]:
    tz = tz or config.tz
    return [c for c in habit.completions if is_same_calendar_day(c.completed_date, day, tz)]


def is_completed_for_date(habit: Habit, day: datetime, tz: Optional[tzinfo] = None) -> bool:
    return len(completions_for_date(habit, day, tz)) >= habit.target_frequency


def progress_for_date(habit: Habit, day: datetime, tz: Optional[tzinfo] = None) -> float:
    """Доля дневной цели, не больше 1.0"""
    count = len(completions_for_date(habit, day, tz))
    return min(count / habit.target_frequency, 1.0)

# ===== РАСПОРЯДКИ =====

def routine_completions_for_date(routine: Routine, day: datetime,
                                 tz: Optional[tzinfo] = None) -> List[RoutineCompletion]:
    tz = tz or config.tz
    return [c for c in routine.completions if is_same_calendar_day(c.completed_date, day, tz)]


def is_routine_completed_for_date(routine: Routine, day: datetime, tz: Optional[tzinfo] = None) -> bool:
    return bool(routine_completions_for_date(routine, day, tz))


def routine_estimated_duration(routine: Routine) -> int:
    return routine.estimated_duration


def routines_completed_today(routines: Iterable[Routine], now: Optional[datetime] = None,
                             tz: Optional[tzinfo] = None) -> int:
    now, tz = _resolve(now, tz)
    return sum(1 for r in routines if is_routine_completed_for_date(r, now, tz))

# ===== СЕРИИ =====

def _predicate_for(item: Tracked) -> Callable[[Tracked, datetime, tzinfo], bool]:
    if isinstance(item, Routine):
        return is_routine_completed_for_date
    return is_completed_for_date


def current_streak(item: Tracked, now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> int:
    """
    Текущая серия: идём назад по календарным дням, начиная с сегодня.

    Если сегодня ещё не выполнено, серия равна 0 независимо от
    предыдущих дней.
    """
    now, tz = _resolve(now, tz)
    is_done = _predicate_for(item)

    streak = 0
    while is_done(item, days_ago(streak, now, tz), tz):
        streak += 1

    return streak


def longest_streak(habit: Habit, tz: Optional[tzinfo] = None) -> int:
    """Самая длинная серия подряд выполненных дней за всю историю"""
    tz = tz or config.tz
    counts = {}
    for completion in habit.completions:
        day = local_date(completion.completed_date, tz)
        counts[day] = counts.get(day, 0) + 1

    completed_days = sorted(d for d, count in counts.items() if count >= habit.target_frequency)
    if not completed_days:
        return 0

    max_streak = 1
    streak = 1
    for previous, current in zip(completed_days, completed_days[1:]):
        if current == previous + timedelta(days=1):
            streak += 1
            max_streak = max(max_streak, streak)
        else:
            streak = 1

    return max_streak


def best_streak(items: Iterable[Tracked], now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> int:
    now, tz = _resolve(now, tz)
    return max((current_streak(item, now, tz) for item in items), default=0)

# ===== ПРОЦЕНТЫ ВЫПОЛНЕНИЯ =====

def completion_rate(habit: Habit, window_days: int = 30, now: Optional[datetime] = None,
                    tz: Optional[tzinfo] = None) -> float:
    """Доля выполненных дней среди последних window_days дней, включая сегодня"""
    if window_days <= 0:
        return 0.0
    now, tz = _resolve(now, tz)

    completed_days = sum(
        1 for offset in range(window_days)
        if is_completed_for_date(habit, days_ago(offset, now, tz), tz)
    )
    return completed_days / window_days


def weekly_progress(habit: Habit, now: Optional[datetime] = None, tz: Optional[tzinfo] = None,
                    days: int = 7) -> List[Tuple[date, float, bool]]:
    """Прогресс по дням за последние days дней, от старых к новым"""
    now, tz = _resolve(now, tz)
    result = []
    for offset in reversed(range(days)):
        day = days_ago(offset, now, tz)
        result.append((local_date(day, tz), progress_for_date(habit, day, tz), is_completed_for_date(habit, day, tz)))
    return result


def completions_this_week(habit: Habit, now: Optional[datetime] = None, tz: Optional[tzinfo] = None,
                          first_weekday: Optional[int] = None) -> int:
    now, tz = _resolve(now, tz)
    if first_weekday is None:
        first_weekday = config.calendar.first_weekday
    week_start = start_of_week(now, tz, first_weekday)
    week_end = end_of_week(now, tz, first_weekday)
    return sum(1 for c in habit.completions if week_start <= c.completed_date < week_end)


def today_completion_rate(habits: Iterable[Habit], now: Optional[datetime] = None,
                          tz: Optional[tzinfo] = None) -> float:
    """Доля активных привычек, выполненных сегодня"""
    now, tz = _resolve(now, tz)
    active = [h for h in habits if h.is_active]
    if not active:
        return 0.0
    completed = sum(1 for h in active if is_completed_for_date(h, now, tz))
    return completed / len(active)

# ===== ЦЕЛИ =====

def goal_progress(goal: Goal) -> float:
    return goal.progress


def active_count(goals: Iterable[Goal]) -> int:
    return sum(1 for g in goals if not g.is_completed)


def completed_count(goals: Iterable[Goal]) -> int:
    return sum(1 for g in goals if g.is_completed)


def active_goals(goals: Iterable[Goal]) -> List[Goal]:
    """Незавершённые цели: сначала срочные, затем по сроку"""
    return sorted(
        (g for g in goals if not g.is_completed),
        key=lambda g: (g.priority.sort_order, g.target_date),
    )


def completed_goals(goals: Iterable[Goal]) -> List[Goal]:
    return sorted((g for g in goals if g.is_completed), key=lambda g: g.created_date, reverse=True)


def goal_success_rate(goals: Sequence[Goal]) -> float:
    if not goals:
        return 0.0
    return completed_count(goals) / len(goals)

# ===== МЕДИТАЦИЯ И РЕФЛЕКСИЯ =====

def total_meditation_minutes(sessions: Iterable[MeditationSession], window_days: Optional[int] = 30,
                             now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> int:
    """Сумма минут за последние window_days дней; None - за всё время"""
    if window_days is None:
        return sum(s.duration for s in sessions)
    now, tz = _resolve(now, tz)
    cutoff = days_ago(window_days, now, tz)
    return sum(s.duration for s in sessions if s.completed_date >= cutoff)


def reflection_for_date(reflections: Iterable[Reflection], day: datetime,
                        tz: Optional[tzinfo] = None) -> Optional[Reflection]:
    tz = tz or config.tz
    return next((r for r in reflections if is_same_calendar_day(r.date, day, tz)), None)


def has_reflected_today(reflections: Iterable[Reflection], now: Optional[datetime] = None,
                        tz: Optional[tzinfo] = None) -> bool:
    now, tz = _resolve(now, tz)
    return reflection_for_date(reflections, now, tz) is not None


def reflections_this_week(reflections: Iterable[Reflection], now: Optional[datetime] = None,
                          tz: Optional[tzinfo] = None, first_weekday: Optional[int] = None) -> int:
    now, tz = _resolve(now, tz)
    if first_weekday is None:
        first_weekday = config.calendar.first_weekday
    week_start = start_of_week(now, tz, first_weekday)
    week_end = end_of_week(now, tz, first_weekday)
    return sum(1 for r in reflections if week_start <= r.date < week_end)
