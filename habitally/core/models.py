#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habitally - Core Data Models
Модели данных с валидацией и типизацией

Привычки, цели с вехами, распорядки дня, рефлексии и сессии медитации.
Поля JSON совпадают с ранее сохранёнными данными (camelCase, сырые
значения enum вроде "Health" или "Critical").
"""

import uuid
import logging
import random
from datetime import datetime, tzinfo
from typing import Dict, List, Optional, Any, Tuple
from dataclasses import dataclass, field
from enum import Enum

from habitally.config import config
from habitally.utils.datetime_utils import (
    add_months,
    at_clock_time,
    days_until,
    now_in,
    parse_iso,
    to_iso,
)

logger = logging.getLogger(__name__)

# ===== ENUMS =====

class HabitCategory(Enum):
    """Категории привычек"""
    HEALTH = "Health"
    PRODUCTIVITY = "Productivity"
    MINDFULNESS = "Mindfulness"
    FITNESS = "Fitness"
    LEARNING = "Learning"
    SOCIAL = "Social"
    CREATIVITY = "Creativity"


class FrequencyType(Enum):
    """Период, в котором считается целевая частота"""
    DAILY = "Daily"
    WEEKLY = "Weekly"

    @property
    def description(self) -> str:
        return {
            FrequencyType.DAILY: "times per day",
            FrequencyType.WEEKLY: "times per week",
        }[self]


class GoalCategory(Enum):
    """Категории целей"""
    HEALTH = "Health"
    CAREER = "Career"
    PERSONAL = "Personal"
    FINANCIAL = "Financial"
    RELATIONSHIPS = "Relationships"
    EDUCATION = "Education"
    LIFESTYLE = "Lifestyle"


class Priority(Enum):
    """Приоритеты целей"""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def sort_order(self) -> int:
        """0 - самый срочный"""
        return {
            Priority.CRITICAL: 0,
            Priority.HIGH: 1,
            Priority.MEDIUM: 2,
            Priority.LOW: 3,
        }[self]


class TimeOfDay(Enum):
    """Слот выполнения распорядка"""
    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    EVENING = "Evening"
    NIGHT = "Night"

    @property
    def suggested_clock_time(self) -> Tuple[int, int]:
        return {
            TimeOfDay.MORNING: (7, 0),
            TimeOfDay.AFTERNOON: (14, 0),
            TimeOfDay.EVENING: (18, 0),
            TimeOfDay.NIGHT: (21, 0),
        }[self]

    def suggested_time(self, now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> datetime:
        """Рекомендуемое время напоминания в день now"""
        tz = tz or config.tz
        hour, minute = self.suggested_clock_time
        return at_clock_time(now or now_in(tz), hour, minute, tz)


class PromptCategory(Enum):
    """Категории вопросов для рефлексии"""
    GRATITUDE = "Gratitude"
    GROWTH = "Growth"
    RELATIONSHIPS = "Relationships"
    GOALS = "Goals"
    MINDFULNESS = "Mindfulness"
    CREATIVITY = "Creativity"
    WELLNESS = "Wellness"


class Mood(Enum):
    """Настроение в рефлексии"""
    EXCELLENT = "Excellent"
    GOOD = "Good"
    OKAY = "Okay"
    CHALLENGING = "Challenging"
    DIFFICULT = "Difficult"

    @property
    def description(self) -> str:
        return {
            Mood.EXCELLENT: "Feeling amazing and energized",
            Mood.GOOD: "Positive and content",
            Mood.OKAY: "Neutral, going through the motions",
            Mood.CHALLENGING: "Facing some difficulties",
            Mood.DIFFICULT: "Having a tough time",
        }[self]


class MeditationType(Enum):
    """Типы медитации"""
    MINDFULNESS = "Mindfulness"
    BREATHING = "Breathing"
    BODY_SCANNING = "Body Scanning"
    LOVING_KINDNESS = "Loving Kindness"
    VISUALIZATION = "Visualization"
    WALKING = "Walking"

    @property
    def description(self) -> str:
        return {
            MeditationType.MINDFULNESS: "Focus on present moment awareness",
            MeditationType.BREATHING: "Concentrate on breath patterns",
            MeditationType.BODY_SCANNING: "Progressive body awareness",
            MeditationType.LOVING_KINDNESS: "Cultivate compassion and love",
            MeditationType.VISUALIZATION: "Guided imagery and visualization",
            MeditationType.WALKING: "Mindful movement meditation",
        }[self]

# ===== VALIDATION HELPERS =====

class ValidationError(Exception):
    """Ошибка валидации данных"""
    pass


def new_id() -> str:
    return str(uuid.uuid4()).upper()


def validate_enum_value(value: Any, enum_class: type, field_name: str = "value") -> Enum:
    """Приводит сырое значение к члену enum"""
    if isinstance(value, enum_class):
        return value
    try:
        return enum_class(value)
    except ValueError:
        valid_values = [e.value for e in enum_class]
        raise ValidationError(f"{field_name} должен быть одним из: {valid_values}")


def validate_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f"{field_name} должен быть положительным целым числом")
    return value


def validate_datetime(value: Any, field_name: str) -> datetime:
    """Момент времени с часовым поясом; наивные значения считаются UTC"""
    if not isinstance(value, datetime):
        raise ValidationError(f"{field_name} должен быть datetime")
    return parse_iso(value)


def _optional_datetime_field(value: Any, field_name: str) -> Optional[datetime]:
    return validate_datetime(value, field_name) if value is not None else None


def _optional_iso(value: Optional[datetime]) -> Optional[str]:
    return to_iso(value) if value is not None else None


def _optional_datetime(value: Any) -> Optional[datetime]:
    return parse_iso(value) if value is not None else None


def _required(data: Dict[str, Any], key: str, model: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValidationError(f"{model}: отсутствует обязательное поле '{key}'")

# ===== HABITS =====

@dataclass
class HabitCompletion:
    """Запись о выполнении привычки"""
    id: str
    completed_date: datetime
    notes: Optional[str] = None

    def __post_init__(self):
        self.completed_date = validate_datetime(self.completed_date, "completedDate")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "completedDate": to_iso(self.completed_date),
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HabitCompletion":
        return cls(
            id=_required(data, "id", "HabitCompletion"),
            completed_date=parse_iso(_required(data, "completedDate", "HabitCompletion")),
            notes=data.get("notes"),
        )

    @classmethod
    def create(cls, notes: Optional[str] = None, now: Optional[datetime] = None) -> "HabitCompletion":
        return cls(id=new_id(), completed_date=now or now_in(), notes=notes)


@dataclass
class Habit:
    """Привычка с историей выполнений"""
    id: str
    name: str
    description: str
    category: HabitCategory
    target_frequency: int = 1
    frequency_type: FrequencyType = FrequencyType.DAILY
    is_active: bool = True
    created_date: datetime = field(default_factory=now_in)
    completions: List[HabitCompletion] = field(default_factory=list)
    motivational_message: str = ""

    def __post_init__(self):
        """Валидация после создания объекта"""
        self.category = validate_enum_value(self.category, HabitCategory, "category")
        self.frequency_type = validate_enum_value(self.frequency_type, FrequencyType, "frequencyType")
        self.target_frequency = validate_positive_int(self.target_frequency, "targetFrequency")
        self.created_date = validate_datetime(self.created_date, "createdDate")

    def complete(self, notes: Optional[str] = None, now: Optional[datetime] = None) -> HabitCompletion:
        """Добавить выполнение с текущим временем"""
        completion = HabitCompletion.create(notes=notes, now=now)
        self.completions.append(completion)
        return completion

    # ===== SERIALIZATION =====

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category.value,
            "targetFrequency": self.target_frequency,
            "frequencyType": self.frequency_type.value,
            "isActive": self.is_active,
            "createdDate": to_iso(self.created_date),
            "completions": [c.to_dict() for c in self.completions],
            "motivationalMessage": self.motivational_message,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Habit":
        return cls(
            id=_required(data, "id", "Habit"),
            name=_required(data, "name", "Habit"),
            description=data.get("description", ""),
            category=_required(data, "category", "Habit"),
            target_frequency=data.get("targetFrequency", 1),
            frequency_type=data.get("frequencyType", FrequencyType.DAILY.value),
            is_active=data.get("isActive", True),
            created_date=parse_iso(_required(data, "createdDate", "Habit")),
            completions=[HabitCompletion.from_dict(c) for c in data.get("completions", [])],
            motivational_message=data.get("motivationalMessage", ""),
        )

    @classmethod
    def create(cls, name: str, description: str, category: HabitCategory,
               target_frequency: int = 1, frequency_type: FrequencyType = FrequencyType.DAILY,
               motivational_message: str = "", rng: Optional[random.Random] = None,
               now: Optional[datetime] = None) -> "Habit":
        """Создание новой привычки; пустое сообщение берётся из пула"""
        if not motivational_message:
            from habitally.core.catalog import random_motivational_message
            motivational_message = random_motivational_message(rng)

        return cls(
            id=new_id(),
            name=name,
            description=description,
            category=category,
            target_frequency=target_frequency,
            frequency_type=frequency_type,
            created_date=now or now_in(),
            motivational_message=motivational_message,
        )

# ===== GOALS =====

@dataclass
class Milestone:
    """Веха цели"""
    id: str
    title: str
    description: str
    target_date: datetime
    is_completed: bool = False
    completed_date: Optional[datetime] = None
    created_date: datetime = field(default_factory=now_in)

    def __post_init__(self):
        self.target_date = validate_datetime(self.target_date, "targetDate")
        self.completed_date = _optional_datetime_field(self.completed_date, "completedDate")
        self.created_date = validate_datetime(self.created_date, "createdDate")

    def mark_completed(self, now: Optional[datetime] = None) -> None:
        self.is_completed = True
        self.completed_date = now or now_in()

    def toggle(self, now: Optional[datetime] = None) -> bool:
        """Переключить статус; дата выполнения ставится или сбрасывается"""
        if self.is_completed:
            self.is_completed = False
            self.completed_date = None
        else:
            self.mark_completed(now)
        return self.is_completed

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        return not self.is_completed and self.target_date < (now or now_in())

    def days_remaining(self, now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> int:
        tz = tz or config.tz
        return days_until(self.target_date, now or now_in(tz), tz)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "targetDate": to_iso(self.target_date),
            "isCompleted": self.is_completed,
            "completedDate": _optional_iso(self.completed_date),
            "createdDate": to_iso(self.created_date),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Milestone":
        return cls(
            id=_required(data, "id", "Milestone"),
            title=_required(data, "title", "Milestone"),
            description=data.get("description", ""),
            target_date=parse_iso(_required(data, "targetDate", "Milestone")),
            is_completed=data.get("isCompleted", False),
            completed_date=_optional_datetime(data.get("completedDate")),
            created_date=parse_iso(_required(data, "createdDate", "Milestone")),
        )

    @classmethod
    def create(cls, title: str, description: str, target_date: datetime,
               now: Optional[datetime] = None) -> "Milestone":
        return cls(
            id=new_id(),
            title=title,
            description=description,
            target_date=target_date,
            created_date=now or now_in(),
        )


@dataclass
class Goal:
    """
    Цель с вехами.

    Вехи всегда упорядочены по target_date (стабильная сортировка после
    каждой вставки). related_habits - только ссылки на id привычек.
    """
    id: str
    title: str
    description: str
    category: GoalCategory
    target_date: datetime
    priority: Priority = Priority.MEDIUM
    is_completed: bool = False
    created_date: datetime = field(default_factory=now_in)
    milestones: List[Milestone] = field(default_factory=list)
    related_habits: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.category = validate_enum_value(self.category, GoalCategory, "category")
        self.priority = validate_enum_value(self.priority, Priority, "priority")
        self.target_date = validate_datetime(self.target_date, "targetDate")
        self.created_date = validate_datetime(self.created_date, "createdDate")
        self.related_habits = list(dict.fromkeys(self.related_habits))
        self.milestones.sort(key=lambda m: m.target_date)

    # ===== PROPERTIES =====

    @property
    def progress(self) -> float:
        """Доля выполненных вех; без вех - 1.0 или 0.0 по is_completed"""
        if not self.milestones:
            return 1.0 if self.is_completed else 0.0
        completed = sum(1 for m in self.milestones if m.is_completed)
        return completed / len(self.milestones)

    @property
    def next_milestone(self) -> Optional[Milestone]:
        return next((m for m in self.milestones if not m.is_completed), None)

    def is_short_term(self, now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> bool:
        """Срок цели не дальше чем через short_term_months месяцев"""
        tz = tz or config.tz
        horizon = add_months(now or now_in(tz), config.calendar.short_term_months, tz)
        return self.target_date <= horizon

    def is_long_term(self, now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> bool:
        return not self.is_short_term(now, tz)

    def days_remaining(self, now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> int:
        tz = tz or config.tz
        return days_until(self.target_date, now or now_in(tz), tz)

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        return not self.is_completed and self.target_date < (now or now_in())

    # ===== METHODS =====

    def add_milestone(self, milestone: Milestone) -> None:
        self.milestones.append(milestone)
        self.milestones.sort(key=lambda m: m.target_date)

    def find_milestone(self, milestone_id: str) -> Optional[Milestone]:
        return next((m for m in self.milestones if m.id == milestone_id), None)

    def complete_milestone(self, milestone_id: str, now: Optional[datetime] = None) -> bool:
        milestone = self.find_milestone(milestone_id)
        if milestone is None:
            return False
        milestone.mark_completed(now)
        return True

    def toggle_milestone(self, milestone_id: str, now: Optional[datetime] = None) -> bool:
        """Переключить веху; False если веха не найдена"""
        milestone = self.find_milestone(milestone_id)
        if milestone is None:
            return False
        milestone.toggle(now)
        return True

    def link_habit(self, habit_id: str) -> bool:
        if habit_id in self.related_habits:
            return False
        self.related_habits.append(habit_id)
        return True

    def unlink_habit(self, habit_id: str) -> bool:
        if habit_id not in self.related_habits:
            return False
        self.related_habits.remove(habit_id)
        return True

    # ===== SERIALIZATION =====

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category.value,
            "targetDate": to_iso(self.target_date),
            "isCompleted": self.is_completed,
            "createdDate": to_iso(self.created_date),
            "milestones": [m.to_dict() for m in self.milestones],
            "relatedHabits": list(self.related_habits),
            "priority": self.priority.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Goal":
        return cls(
            id=_required(data, "id", "Goal"),
            title=_required(data, "title", "Goal"),
            description=data.get("description", ""),
            category=_required(data, "category", "Goal"),
            target_date=parse_iso(_required(data, "targetDate", "Goal")),
            priority=data.get("priority", Priority.MEDIUM.value),
            is_completed=data.get("isCompleted", False),
            created_date=parse_iso(_required(data, "createdDate", "Goal")),
            milestones=[Milestone.from_dict(m) for m in data.get("milestones", [])],
            related_habits=list(data.get("relatedHabits", [])),
        )

    @classmethod
    def create(cls, title: str, description: str, category: GoalCategory,
               target_date: datetime, priority: Priority = Priority.MEDIUM,
               now: Optional[datetime] = None) -> "Goal":
        return cls(
            id=new_id(),
            title=title,
            description=description,
            category=category,
            target_date=target_date,
            priority=priority,
            created_date=now or now_in(),
        )

# ===== ROUTINES =====

@dataclass
class RoutineActivity:
    """Шаг распорядка"""
    id: str
    name: str
    description: str
    estimated_minutes: int
    is_optional: bool = False
    order: int = 0

    def __post_init__(self):
        self.estimated_minutes = validate_positive_int(self.estimated_minutes, "estimatedMinutes")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "estimatedMinutes": self.estimated_minutes,
            "isOptional": self.is_optional,
            "order": self.order,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoutineActivity":
        return cls(
            id=_required(data, "id", "RoutineActivity"),
            name=_required(data, "name", "RoutineActivity"),
            description=data.get("description", ""),
            estimated_minutes=_required(data, "estimatedMinutes", "RoutineActivity"),
            is_optional=data.get("isOptional", False),
            order=data.get("order", 0),
        )

    @classmethod
    def create(cls, name: str, description: str, estimated_minutes: int,
               is_optional: bool = False, order: int = 0) -> "RoutineActivity":
        return cls(
            id=new_id(),
            name=name,
            description=description,
            estimated_minutes=estimated_minutes,
            is_optional=is_optional,
            order=order,
        )


@dataclass
class RoutineCompletion:
    """Запись о прохождении распорядка"""
    id: str
    completed_date: datetime
    notes: Optional[str] = None
    duration: Optional[int] = None  # фактическая длительность, минуты

    def __post_init__(self):
        if self.duration is not None:
            if isinstance(self.duration, bool) or not isinstance(self.duration, int) or self.duration < 0:
                raise ValidationError("duration должен быть неотрицательным целым числом")
        self.completed_date = validate_datetime(self.completed_date, "completedDate")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "completedDate": to_iso(self.completed_date),
            "notes": self.notes,
            "duration": self.duration,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoutineCompletion":
        return cls(
            id=_required(data, "id", "RoutineCompletion"),
            completed_date=parse_iso(_required(data, "completedDate", "RoutineCompletion")),
            notes=data.get("notes"),
            duration=data.get("duration"),
        )

    @classmethod
    def create(cls, notes: Optional[str] = None, duration: Optional[int] = None,
               now: Optional[datetime] = None) -> "RoutineCompletion":
        return cls(id=new_id(), completed_date=now or now_in(), notes=notes, duration=duration)


@dataclass
class Routine:
    """Распорядок дня из упорядоченных шагов"""
    id: str
    name: str
    description: str
    time_of_day: TimeOfDay
    is_active: bool = True
    created_date: datetime = field(default_factory=now_in)
    activities: List[RoutineActivity] = field(default_factory=list)
    reminder_enabled: bool = False
    reminder_time: Optional[datetime] = None
    completions: List[RoutineCompletion] = field(default_factory=list)

    def __post_init__(self):
        self.time_of_day = validate_enum_value(self.time_of_day, TimeOfDay, "timeOfDay")
        self.created_date = validate_datetime(self.created_date, "createdDate")
        self.reminder_time = _optional_datetime_field(self.reminder_time, "reminderTime")

    @property
    def estimated_duration(self) -> int:
        """Сумма оценок всех шагов, минуты"""
        return sum(a.estimated_minutes for a in self.activities)

    @property
    def sorted_activities(self) -> List[RoutineActivity]:
        return sorted(self.activities, key=lambda a: a.order)

    def add_activity(self, activity: RoutineActivity) -> None:
        self.activities.append(activity)

    def remove_activity(self, activity_id: str) -> bool:
        initial_count = len(self.activities)
        self.activities = [a for a in self.activities if a.id != activity_id]
        return len(self.activities) < initial_count

    def renumber_activities(self) -> None:
        """Перенумеровать order подряд с 1 в текущем порядке отображения"""
        for index, activity in enumerate(self.sorted_activities, start=1):
            activity.order = index

    def complete(self, notes: Optional[str] = None, duration: Optional[int] = None,
                 now: Optional[datetime] = None) -> RoutineCompletion:
        completion = RoutineCompletion.create(notes=notes, duration=duration, now=now)
        self.completions.append(completion)
        return completion

    # ===== SERIALIZATION =====

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "timeOfDay": self.time_of_day.value,
            "isActive": self.is_active,
            "createdDate": to_iso(self.created_date),
            "activities": [a.to_dict() for a in self.activities],
            "reminderEnabled": self.reminder_enabled,
            "reminderTime": _optional_iso(self.reminder_time),
            "completions": [c.to_dict() for c in self.completions],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Routine":
        return cls(
            id=_required(data, "id", "Routine"),
            name=_required(data, "name", "Routine"),
            description=data.get("description", ""),
            time_of_day=_required(data, "timeOfDay", "Routine"),
            is_active=data.get("isActive", True),
            created_date=parse_iso(_required(data, "createdDate", "Routine")),
            activities=[RoutineActivity.from_dict(a) for a in data.get("activities", [])],
            reminder_enabled=data.get("reminderEnabled", False),
            reminder_time=_optional_datetime(data.get("reminderTime")),
            completions=[RoutineCompletion.from_dict(c) for c in data.get("completions", [])],
        )

    @classmethod
    def create(cls, name: str, description: str, time_of_day: TimeOfDay,
               now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> "Routine":
        """Новый распорядок; напоминание по умолчанию - рекомендуемое время слота"""
        now = now or now_in()
        return cls(
            id=new_id(),
            name=name,
            description=description,
            time_of_day=time_of_day,
            created_date=now,
            reminder_time=time_of_day.suggested_time(now, tz),
        )

# ===== MINDFULNESS =====

@dataclass
class ReflectionPrompt:
    """Вопрос для рефлексии; в Reflection хранится копия"""
    id: str
    question: str
    category: PromptCategory
    is_daily: bool = False

    def __post_init__(self):
        self.category = validate_enum_value(self.category, PromptCategory, "category")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "question": self.question,
            "category": self.category.value,
            "isDaily": self.is_daily,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReflectionPrompt":
        return cls(
            id=_required(data, "id", "ReflectionPrompt"),
            question=_required(data, "question", "ReflectionPrompt"),
            category=_required(data, "category", "ReflectionPrompt"),
            is_daily=data.get("isDaily", False),
        )

    @classmethod
    def create(cls, question: str, category: PromptCategory, is_daily: bool = False) -> "ReflectionPrompt":
        return cls(id=new_id(), question=question, category=category, is_daily=is_daily)


@dataclass
class Reflection:
    """Запись рефлексии"""
    id: str
    date: datetime
    prompt: ReflectionPrompt
    response: str = ""
    mood: Optional[Mood] = None
    gratitude: List[str] = field(default_factory=list)
    insights: str = ""
    created_date: datetime = field(default_factory=now_in)

    def __post_init__(self):
        if self.mood is not None:
            self.mood = validate_enum_value(self.mood, Mood, "mood")
        self.date = validate_datetime(self.date, "date")
        self.created_date = validate_datetime(self.created_date, "createdDate")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": to_iso(self.date),
            "prompt": self.prompt.to_dict(),
            "response": self.response,
            "mood": self.mood.value if self.mood is not None else None,
            "gratitude": list(self.gratitude),
            "insights": self.insights,
            "createdDate": to_iso(self.created_date),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Reflection":
        return cls(
            id=_required(data, "id", "Reflection"),
            date=parse_iso(_required(data, "date", "Reflection")),
            prompt=ReflectionPrompt.from_dict(_required(data, "prompt", "Reflection")),
            response=data.get("response", ""),
            mood=data.get("mood"),
            gratitude=list(data.get("gratitude", [])),
            insights=data.get("insights", ""),
            created_date=parse_iso(_required(data, "createdDate", "Reflection")),
        )

    @classmethod
    def create(cls, prompt: ReflectionPrompt, response: str = "", mood: Optional[Mood] = None,
               gratitude: Optional[List[str]] = None, insights: str = "",
               now: Optional[datetime] = None) -> "Reflection":
        now = now or now_in()
        return cls(
            id=new_id(),
            date=now,
            prompt=prompt,
            response=response,
            mood=mood,
            gratitude=gratitude or [],
            insights=insights,
            created_date=now,
        )


@dataclass
class MeditationSession:
    """Завершённая сессия медитации"""
    id: str
    duration: int  # минуты
    meditation_type: MeditationType
    completed_date: datetime = field(default_factory=now_in)
    notes: Optional[str] = None

    def __post_init__(self):
        self.duration = validate_positive_int(self.duration, "duration")
        self.meditation_type = validate_enum_value(self.meditation_type, MeditationType, "type")
        self.completed_date = validate_datetime(self.completed_date, "completedDate")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "duration": self.duration,
            "type": self.meditation_type.value,
            "completedDate": to_iso(self.completed_date),
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MeditationSession":
        return cls(
            id=_required(data, "id", "MeditationSession"),
            duration=_required(data, "duration", "MeditationSession"),
            meditation_type=_required(data, "type", "MeditationSession"),
            completed_date=parse_iso(_required(data, "completedDate", "MeditationSession")),
            notes=data.get("notes"),
        )

    @classmethod
    def create(cls, duration: int, meditation_type: MeditationType, notes: Optional[str] = None,
               now: Optional[datetime] = None) -> "MeditationSession":
        return cls(
            id=new_id(),
            duration=duration,
            meditation_type=meditation_type,
            completed_date=now or now_in(),
            notes=notes,
        )
