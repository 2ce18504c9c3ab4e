# core/catalog.py
"""
Фиксированные наборы: мотивационные сообщения, вопросы для рефлексии,
шаблоны распорядков и стартовые данные для первого запуска.

Случайный выбор принимает внешний random.Random, чтобы тесты были детерминированы.
"""

import random
from datetime import datetime, timedelta, tzinfo
from typing import List, Optional, Sequence, TypeVar

from habitally.config import config
from habitally.core.models import (
    FrequencyType,
    Goal,
    GoalCategory,
    Habit,
    HabitCategory,
    Milestone,
    Priority,
    PromptCategory,
    ReflectionPrompt,
    Routine,
    RoutineActivity,
    TimeOfDay,
)
from habitally.utils.datetime_utils import add_months, now_in

T = TypeVar("T")

MOTIVATIONAL_MESSAGES = [
    "Great job! You're building a better you! 🌟",
    "Consistency is key! Keep it up! 💪",
    "Another step towards your goals! 🎯",
    "You're creating positive change! ✨",
    "Progress over perfection! 🚀",
    "Your future self will thank you! 🙏",
    "Small steps, big results! 👏",
    "You're unstoppable! 🔥",
]

FALLBACK_MESSAGE = "Well done!"

DAILY_PROMPTS = [
    ("What are three things you're grateful for today?", PromptCategory.GRATITUDE),
    ("What was the highlight of your day?", PromptCategory.MINDFULNESS),
    ("How did you grow or learn something new today?", PromptCategory.GROWTH),
    ("What challenged you today, and how did you handle it?", PromptCategory.GROWTH),
    ("How did you take care of your well-being today?", PromptCategory.WELLNESS),
]

WEEKLY_PROMPTS = [
    ("What progress have you made toward your goals this week?", PromptCategory.GOALS),
    ("How have your relationships evolved this week?", PromptCategory.RELATIONSHIPS),
    ("What creative ideas or solutions came to you this week?", PromptCategory.CREATIVITY),
    ("What patterns do you notice in your thoughts and behaviors?", PromptCategory.MINDFULNESS),
    ("What would you like to improve or change next week?", PromptCategory.GROWTH),
]

MONTHLY_PROMPTS = [
    ("What are your biggest accomplishments this month?", PromptCategory.GOALS),
    ("How have you changed or grown this month?", PromptCategory.GROWTH),
    ("What relationships have been most meaningful this month?", PromptCategory.RELATIONSHIPS),
    ("What habits have served you well, and which need adjustment?", PromptCategory.WELLNESS),
    ("What are you most excited about for next month?", PromptCategory.GOALS),
]


def choose(pool: Sequence[T], rng: Optional[random.Random] = None) -> T:
    return (rng or random).choice(pool)


def random_motivational_message(rng: Optional[random.Random] = None) -> str:
    if not MOTIVATIONAL_MESSAGES:
        return FALLBACK_MESSAGE
    return choose(MOTIVATIONAL_MESSAGES, rng)

# ===== ВОПРОСЫ ДЛЯ РЕФЛЕКСИИ =====

def _build_prompts(pool, is_daily: bool) -> List[ReflectionPrompt]:
    return [ReflectionPrompt.create(question, category, is_daily=is_daily) for question, category in pool]


def daily_prompts() -> List[ReflectionPrompt]:
    return _build_prompts(DAILY_PROMPTS, is_daily=True)


def weekly_prompts() -> List[ReflectionPrompt]:
    return _build_prompts(WEEKLY_PROMPTS, is_daily=False)


def monthly_prompts() -> List[ReflectionPrompt]:
    return _build_prompts(MONTHLY_PROMPTS, is_daily=False)


def random_daily_prompt(rng: Optional[random.Random] = None) -> ReflectionPrompt:
    return choose(daily_prompts(), rng)


def random_weekly_prompt(rng: Optional[random.Random] = None) -> ReflectionPrompt:
    return choose(weekly_prompts(), rng)


def random_monthly_prompt(rng: Optional[random.Random] = None) -> ReflectionPrompt:
    return choose(monthly_prompts(), rng)

# ===== ШАБЛОНЫ РАСПОРЯДКОВ =====

def _template(name: str, description: str, time_of_day: TimeOfDay, steps,
              now: Optional[datetime], tz: Optional[tzinfo]) -> Routine:
    routine = Routine.create(name, description, time_of_day, now=now, tz=tz)
    for order, (step_name, step_description, minutes, optional) in enumerate(steps, start=1):
        routine.add_activity(RoutineActivity.create(
            step_name, step_description, minutes, is_optional=optional, order=order
        ))
    return routine


def morning_routine_template(now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> Routine:
    return _template("Energizing Morning", "Start your day with purpose and energy", TimeOfDay.MORNING, [
        ("Drink Water", "Hydrate after sleep", 2, False),
        ("Stretch", "Light stretching or yoga", 10, False),
        ("Meditation", "5-minute mindfulness practice", 5, False),
        ("Review Goals", "Check daily priorities", 5, False),
        ("Healthy Breakfast", "Nutritious meal to fuel your day", 15, False),
    ], now, tz)


def evening_routine_template(now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> Routine:
    return _template("Peaceful Evening", "Wind down and prepare for rest", TimeOfDay.EVENING, [
        ("Reflect on Day", "Journal about today's experiences", 10, False),
        ("Plan Tomorrow", "Set priorities for tomorrow", 5, False),
        ("Digital Detox", "Put away devices", 1, False),
        ("Reading", "Read something inspiring", 20, True),
        ("Prepare for Sleep", "Get ready for restful sleep", 15, False),
    ], now, tz)


def workout_routine_template(now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> Routine:
    return _template("Fitness Focus", "Stay active and healthy", TimeOfDay.AFTERNOON, [
        ("Warm-up", "Light cardio and stretching", 10, False),
        ("Main Workout", "Strength or cardio training", 30, False),
        ("Cool Down", "Stretching and recovery", 10, False),
        ("Hydrate", "Drink water and refuel", 5, False),
    ], now, tz)


def study_routine_template(now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> Routine:
    return _template("Learning Session", "Focused time for growth and learning", TimeOfDay.AFTERNOON, [
        ("Review Previous Material", "Quick recap of last session", 10, False),
        ("Active Learning", "Engage with new content", 25, False),
        ("Break", "Short rest to recharge", 5, False),
        ("Practice/Apply", "Apply what you've learned", 20, False),
        ("Summarize", "Note key takeaways", 10, False),
    ], now, tz)


def routine_templates(now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> List[Routine]:
    """Свежие копии всех шаблонов"""
    return [
        morning_routine_template(now, tz),
        evening_routine_template(now, tz),
        workout_routine_template(now, tz),
        study_routine_template(now, tz),
    ]

# ===== СТАРТОВЫЕ ДАННЫЕ =====

def sample_habits(now: Optional[datetime] = None) -> List[Habit]:
    now = now or now_in()
    return [
        Habit.create("Drink Water", "Stay hydrated throughout the day", HabitCategory.HEALTH,
                     target_frequency=8, frequency_type=FrequencyType.DAILY,
                     motivational_message="Hydration is the foundation of health! 💧", now=now),
        Habit.create("Morning Meditation", "Start the day with mindfulness", HabitCategory.MINDFULNESS,
                     motivational_message="Peace begins with a single breath 🧘‍♀️", now=now),
        Habit.create("Read for 30 minutes", "Expand knowledge and imagination", HabitCategory.LEARNING,
                     motivational_message="Every page is a step toward wisdom 📚", now=now),
        Habit.create("Exercise", "Keep your body strong and healthy", HabitCategory.FITNESS,
                     motivational_message="Your body is your temple - treat it well! 💪", now=now),
    ]


def sample_goals(now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> List[Goal]:
    tz = tz or config.tz
    now = now or now_in(tz)

    routine_goal = Goal.create(
        "Build a Consistent Morning Routine",
        "Establish a healthy morning routine that sets a positive tone for each day",
        GoalCategory.LIFESTYLE, add_months(now, 1, tz), priority=Priority.HIGH, now=now,
    )
    routine_goal.add_milestone(Milestone.create(
        "Define routine activities", "List 5 key morning activities", now + timedelta(days=7), now=now))
    routine_goal.add_milestone(Milestone.create(
        "Practice for 1 week", "Follow routine for 7 consecutive days", now + timedelta(days=14), now=now))

    skill_goal = Goal.create(
        "Learn a New Skill",
        "Master a new skill that contributes to personal or professional growth",
        GoalCategory.EDUCATION, add_months(now, 12, tz), priority=Priority.MEDIUM, now=now,
    )
    skill_goal.add_milestone(Milestone.create(
        "Choose skill to learn", "Research and select a skill to focus on", now + timedelta(days=3), now=now))
    skill_goal.add_milestone(Milestone.create(
        "Complete first course", "Finish an introductory course or tutorial", add_months(now, 3, tz), now=now))

    return [routine_goal, skill_goal]
