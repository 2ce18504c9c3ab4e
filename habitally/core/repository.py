#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habitally - Repository
Единственный владелец коллекций приложения

Хранит привычки, цели, распорядки, рефлексии и сессии медитации в памяти.
После каждой мутации вызывает change-callbacks с ключом изменённой
коллекции; сохранение и debounce - забота подписчика (см. services.autosave).
Поиск по несуществующему id - тихий no-op: мутаторы возвращают False.

get_* и представления-кортежи отдают сами объекты, а не копии. Правка
объекта на месте не порождает события: после неё вызывайте update_*
(или доменный мутатор), иначе автосохранение изменения не увидит.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from habitally.core.models import (
    Goal,
    Habit,
    MeditationSession,
    Reflection,
    Routine,
)
from habitally.core.serialization import (
    COLLECTION_KEYS,
    GOALS,
    HABITS,
    MEDITATION_SESSIONS,
    ONBOARDING,
    REFLECTIONS,
    ROUTINES,
)

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[str], None]


class Repository:
    """Хранилище коллекций с уведомлениями об изменениях"""

    def __init__(self,
                 habits: Optional[Iterable[Habit]] = None,
                 goals: Optional[Iterable[Goal]] = None,
                 routines: Optional[Iterable[Routine]] = None,
                 reflections: Optional[Iterable[Reflection]] = None,
                 meditation_sessions: Optional[Iterable[MeditationSession]] = None,
                 has_completed_onboarding: bool = False):
        self._collections: Dict[str, List[Any]] = {
            HABITS: list(habits or []),
            GOALS: list(goals or []),
            ROUTINES: list(routines or []),
            REFLECTIONS: list(reflections or []),
            MEDITATION_SESSIONS: list(meditation_sessions or []),
        }
        self._has_completed_onboarding = has_completed_onboarding

        # Callbacks
        self.change_callbacks: List[ChangeCallback] = []

    # ===== CHANGE NOTIFICATION =====

    def add_change_callback(self, callback: ChangeCallback) -> None:
        """Подписаться на изменения; callback получает ключ коллекции"""
        self.change_callbacks.append(callback)

    def remove_change_callback(self, callback: ChangeCallback) -> bool:
        if callback in self.change_callbacks:
            self.change_callbacks.remove(callback)
            return True
        return False

    def _notify(self, key: str) -> None:
        for callback in list(self.change_callbacks):
            try:
                callback(key)
            except Exception as e:
                logger.warning(f"Change callback failed for '{key}': {e}")

    # ===== READ-ONLY VIEWS =====

    @property
    def habits(self) -> Tuple[Habit, ...]:
        return tuple(self._collections[HABITS])

    @property
    def goals(self) -> Tuple[Goal, ...]:
        return tuple(self._collections[GOALS])

    @property
    def routines(self) -> Tuple[Routine, ...]:
        return tuple(self._collections[ROUTINES])

    @property
    def reflections(self) -> Tuple[Reflection, ...]:
        return tuple(self._collections[REFLECTIONS])

    @property
    def meditation_sessions(self) -> Tuple[MeditationSession, ...]:
        return tuple(self._collections[MEDITATION_SESSIONS])

    def collection(self, key: str) -> Tuple[Any, ...]:
        return tuple(self._collections[key])

    # ===== GENERIC HELPERS =====

    def _find(self, key: str, entity_id: str) -> Optional[Any]:
        return next((e for e in self._collections[key] if e.id == entity_id), None)

    def _add(self, key: str, entity: Any) -> None:
        self._collections[key].append(entity)
        logger.debug(f"Added {key} entry {entity.id}")
        self._notify(key)

    def _update(self, key: str, entity: Any) -> bool:
        items = self._collections[key]
        for index, existing in enumerate(items):
            if existing.id == entity.id:
                items[index] = entity
                logger.debug(f"Updated {key} entry {entity.id}")
                self._notify(key)
                return True
        logger.debug(f"Update ignored: {key} entry {entity.id} not found")
        return False

    def _delete(self, key: str, entity_id: str) -> bool:
        items = self._collections[key]
        remaining = [e for e in items if e.id != entity_id]
        if len(remaining) == len(items):
            logger.debug(f"Delete ignored: {key} entry {entity_id} not found")
            return False
        self._collections[key] = remaining
        logger.debug(f"Deleted {key} entry {entity_id}")
        self._notify(key)
        return True

    # ===== HABITS =====

    def get_habit(self, habit_id: str) -> Optional[Habit]:
        """Живой объект; изменения сохранять через update_habit"""
        return self._find(HABITS, habit_id)

    def add_habit(self, habit: Habit) -> None:
        self._add(HABITS, habit)

    def update_habit(self, habit: Habit) -> bool:
        return self._update(HABITS, habit)

    def delete_habit(self, habit_id: str) -> bool:
        return self._delete(HABITS, habit_id)

    def complete_habit(self, habit_id: str, notes: Optional[str] = None,
                       now: Optional[datetime] = None) -> bool:
        """Добавить выполнение привычке; no-op если id не найден"""
        habit = self.get_habit(habit_id)
        if habit is None:
            logger.debug(f"Complete ignored: habit {habit_id} not found")
            return False
        habit.complete(notes=notes, now=now)
        self._notify(HABITS)
        return True

    # ===== GOALS =====

    def get_goal(self, goal_id: str) -> Optional[Goal]:
        """Живой объект; изменения сохранять через update_goal"""
        return self._find(GOALS, goal_id)

    def add_goal(self, goal: Goal) -> None:
        self._add(GOALS, goal)

    def update_goal(self, goal: Goal) -> bool:
        return self._update(GOALS, goal)

    def delete_goal(self, goal_id: str) -> bool:
        return self._delete(GOALS, goal_id)

    def complete_goal(self, goal_id: str) -> bool:
        goal = self.get_goal(goal_id)
        if goal is None:
            logger.debug(f"Complete ignored: goal {goal_id} not found")
            return False
        goal.is_completed = True
        self._notify(GOALS)
        return True

    def toggle_milestone(self, goal_id: str, milestone_id: str,
                         now: Optional[datetime] = None) -> bool:
        """Переключить веху цели; no-op если не найдена цель или веха"""
        goal = self.get_goal(goal_id)
        if goal is None or not goal.toggle_milestone(milestone_id, now=now):
            logger.debug(f"Toggle ignored: milestone {milestone_id} of goal {goal_id} not found")
            return False
        self._notify(GOALS)
        return True

    # ===== ROUTINES =====

    def get_routine(self, routine_id: str) -> Optional[Routine]:
        return self._find(ROUTINES, routine_id)

    def add_routine(self, routine: Routine) -> None:
        self._add(ROUTINES, routine)

    def update_routine(self, routine: Routine) -> bool:
        return self._update(ROUTINES, routine)

    def delete_routine(self, routine_id: str) -> bool:
        return self._delete(ROUTINES, routine_id)

    def complete_routine(self, routine_id: str, notes: Optional[str] = None,
                         duration: Optional[int] = None, now: Optional[datetime] = None) -> bool:
        routine = self.get_routine(routine_id)
        if routine is None:
            logger.debug(f"Complete ignored: routine {routine_id} not found")
            return False
        routine.complete(notes=notes, duration=duration, now=now)
        self._notify(ROUTINES)
        return True

    # ===== REFLECTIONS =====

    def get_reflection(self, reflection_id: str) -> Optional[Reflection]:
        return self._find(REFLECTIONS, reflection_id)

    def add_reflection(self, reflection: Reflection) -> None:
        self._add(REFLECTIONS, reflection)

    def update_reflection(self, reflection: Reflection) -> bool:
        return self._update(REFLECTIONS, reflection)

    def delete_reflection(self, reflection_id: str) -> bool:
        return self._delete(REFLECTIONS, reflection_id)

    # ===== MEDITATION =====

    def get_meditation_session(self, session_id: str) -> Optional[MeditationSession]:
        return self._find(MEDITATION_SESSIONS, session_id)

    def add_meditation_session(self, session: MeditationSession) -> None:
        self._add(MEDITATION_SESSIONS, session)

    def update_meditation_session(self, session: MeditationSession) -> bool:
        return self._update(MEDITATION_SESSIONS, session)

    def delete_meditation_session(self, session_id: str) -> bool:
        return self._delete(MEDITATION_SESSIONS, session_id)

    # ===== ONBOARDING / RESET =====

    @property
    def has_completed_onboarding(self) -> bool:
        return self._has_completed_onboarding

    @has_completed_onboarding.setter
    def has_completed_onboarding(self, value: bool) -> None:
        self._has_completed_onboarding = bool(value)
        self._notify(ONBOARDING)

    def reset_all(self) -> None:
        """Очистить все коллекции и флаг онбординга"""
        for key in COLLECTION_KEYS:
            self._collections[key] = []
        self._has_completed_onboarding = False
        logger.info("Repository reset: all collections cleared")

        for key in COLLECTION_KEYS:
            self._notify(key)
        self._notify(ONBOARDING)

    # ===== STATS =====

    def summary(self) -> Dict[str, int]:
        """Количество записей в каждой коллекции"""
        return {key: len(self._collections[key]) for key in COLLECTION_KEYS}
