#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habitally - Core Package
Модели, статистика и репозиторий
"""

from .models import (
    ValidationError,
    HabitCategory,
    FrequencyType,
    GoalCategory,
    Priority,
    TimeOfDay,
    PromptCategory,
    Mood,
    MeditationType,
    Habit,
    HabitCompletion,
    Goal,
    Milestone,
    Routine,
    RoutineActivity,
    RoutineCompletion,
    Reflection,
    ReflectionPrompt,
    MeditationSession,
)

from .repository import Repository

__all__ = [
    # Enums
    'HabitCategory',
    'FrequencyType',
    'GoalCategory',
    'Priority',
    'TimeOfDay',
    'PromptCategory',
    'Mood',
    'MeditationType',

    # Models
    'ValidationError',
    'Habit',
    'HabitCompletion',
    'Goal',
    'Milestone',
    'Routine',
    'RoutineActivity',
    'RoutineCompletion',
    'Reflection',
    'ReflectionPrompt',
    'MeditationSession',

    # Store
    'Repository',
]
