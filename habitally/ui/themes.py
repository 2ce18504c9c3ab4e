# ui/themes.py
# Иконки и цвета для отображения; доменные enum о них не знают.

from enum import Enum
from typing import Dict

from habitally.core.models import (
    GoalCategory,
    HabitCategory,
    MeditationType,
    Mood,
    Priority,
    PromptCategory,
    TimeOfDay,
)

DEFAULT_STYLE = {"icon": "circle.fill", "color": "#95A5A6"}

HABIT_CATEGORY_STYLES = {
    HabitCategory.HEALTH: {"icon": "heart.fill", "color": "#FF6B6B"},
    HabitCategory.PRODUCTIVITY: {"icon": "checkmark.circle.fill", "color": "#2DCC72"},
    HabitCategory.MINDFULNESS: {"icon": "leaf.fill", "color": "#4ECDC4"},
    HabitCategory.FITNESS: {"icon": "figure.walk", "color": "#45B7D1"},
    HabitCategory.LEARNING: {"icon": "book.fill", "color": "#96CEB4"},
    HabitCategory.SOCIAL: {"icon": "person.2.fill", "color": "#FFEAA7"},
    HabitCategory.CREATIVITY: {"icon": "paintbrush.fill", "color": "#DDA0DD"},
}

GOAL_CATEGORY_STYLES = {
    GoalCategory.HEALTH: {"icon": "heart.fill", "color": "#FF6B6B"},
    GoalCategory.CAREER: {"icon": "briefcase.fill", "color": "#2DCC72"},
    GoalCategory.PERSONAL: {"icon": "person.fill", "color": "#4ECDC4"},
    GoalCategory.FINANCIAL: {"icon": "dollarsign.circle.fill", "color": "#45B7D1"},
    GoalCategory.RELATIONSHIPS: {"icon": "heart.2.fill", "color": "#FFEAA7"},
    GoalCategory.EDUCATION: {"icon": "graduationcap.fill", "color": "#96CEB4"},
    GoalCategory.LIFESTYLE: {"icon": "house.fill", "color": "#DDA0DD"},
}

PRIORITY_STYLES = {
    Priority.LOW: {"icon": "flag.fill", "color": "#95A5A6"},
    Priority.MEDIUM: {"icon": "flag.fill", "color": "#F39C12"},
    Priority.HIGH: {"icon": "flag.fill", "color": "#E74C3C"},
    Priority.CRITICAL: {"icon": "flag.fill", "color": "#8E44AD"},
}

TIME_OF_DAY_STYLES = {
    TimeOfDay.MORNING: {"icon": "sunrise.fill", "color": "#FFD93D"},
    TimeOfDay.AFTERNOON: {"icon": "sun.max.fill", "color": "#FF6B35"},
    TimeOfDay.EVENING: {"icon": "sunset.fill", "color": "#6BCF7F"},
    TimeOfDay.NIGHT: {"icon": "moon.fill", "color": "#4D4DFF"},
}

PROMPT_CATEGORY_STYLES = {
    PromptCategory.GRATITUDE: {"icon": "heart.fill", "color": "#FF6B6B"},
    PromptCategory.GROWTH: {"icon": "arrow.up.circle.fill", "color": "#2DCC72"},
    PromptCategory.RELATIONSHIPS: {"icon": "person.2.fill", "color": "#FFEAA7"},
    PromptCategory.GOALS: {"icon": "target", "color": "#45B7D1"},
    PromptCategory.MINDFULNESS: {"icon": "leaf.fill", "color": "#4ECDC4"},
    PromptCategory.CREATIVITY: {"icon": "paintbrush.fill", "color": "#DDA0DD"},
    PromptCategory.WELLNESS: {"icon": "figure.mind.and.body", "color": "#96CEB4"},
}

MOOD_STYLES = {
    Mood.EXCELLENT: {"icon": "😄", "color": "#2DCC72"},
    Mood.GOOD: {"icon": "😊", "color": "#96CEB4"},
    Mood.OKAY: {"icon": "😐", "color": "#FFEAA7"},
    Mood.CHALLENGING: {"icon": "😔", "color": "#FDCB6E"},
    Mood.DIFFICULT: {"icon": "😞", "color": "#E17055"},
}

MEDITATION_TYPE_STYLES = {
    MeditationType.MINDFULNESS: {"icon": "brain.head.profile", "color": "#4ECDC4"},
    MeditationType.BREATHING: {"icon": "wind", "color": "#45B7D1"},
    MeditationType.BODY_SCANNING: {"icon": "figure.mind.and.body", "color": "#96CEB4"},
    MeditationType.LOVING_KINDNESS: {"icon": "heart.fill", "color": "#FF6B6B"},
    MeditationType.VISUALIZATION: {"icon": "eye.fill", "color": "#DDA0DD"},
    MeditationType.WALKING: {"icon": "figure.walk", "color": "#2DCC72"},
}

STYLE_TABLES = {
    HabitCategory: HABIT_CATEGORY_STYLES,
    GoalCategory: GOAL_CATEGORY_STYLES,
    Priority: PRIORITY_STYLES,
    TimeOfDay: TIME_OF_DAY_STYLES,
    PromptCategory: PROMPT_CATEGORY_STYLES,
    Mood: MOOD_STYLES,
    MeditationType: MEDITATION_TYPE_STYLES,
}


def get_style(value: Enum) -> Dict[str, str]:
    return STYLE_TABLES.get(type(value), {}).get(value, DEFAULT_STYLE)


def get_icon(value: Enum) -> str:
    return get_style(value)["icon"]


def get_color(value: Enum) -> str:
    return get_style(value)["color"]


def mood_emoji(mood: Mood) -> str:
    return MOOD_STYLES[mood]["icon"]
