# core/serialization.py
"""
JSON-кодек для пяти коллекций.

Каждая коллекция хранится как JSON-массив записей; имена полей и сырые
значения enum совпадают с ранее сохранёнными данными.
"""

import json
import logging
from typing import Any, Callable, Dict, List, Sequence

from habitally.core.models import (
    Goal,
    Habit,
    MeditationSession,
    Reflection,
    Routine,
    ValidationError,
)

logger = logging.getLogger(__name__)

HABITS = "habits"
GOALS = "goals"
ROUTINES = "routines"
REFLECTIONS = "reflections"
MEDITATION_SESSIONS = "meditationSessions"
ONBOARDING = "hasCompletedOnboarding"

COLLECTION_KEYS = (HABITS, GOALS, ROUTINES, REFLECTIONS, MEDITATION_SESSIONS)

MODEL_BY_KEY: Dict[str, Callable[[Dict[str, Any]], Any]] = {
    HABITS: Habit.from_dict,
    GOALS: Goal.from_dict,
    ROUTINES: Routine.from_dict,
    REFLECTIONS: Reflection.from_dict,
    MEDITATION_SESSIONS: MeditationSession.from_dict,
}


class SerializationError(Exception):
    """Ошибка кодирования/декодирования сохранённых данных"""
    pass


def _check_key(key: str) -> None:
    if key not in MODEL_BY_KEY:
        raise SerializationError(f"Unknown collection key: {key}")


def encode_collection(key: str, entities: Sequence[Any]) -> bytes:
    _check_key(key)
    payload = [entity.to_dict() for entity in entities]
    return json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")


def decode_collection(key: str, raw: bytes) -> List[Any]:
    """Декодирование коллекции; любая ошибка формата -> SerializationError"""
    _check_key(key)
    try:
        payload = json.loads(raw.decode("utf-8") if isinstance(raw, (bytes, bytearray)) else raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SerializationError(f"{key}: invalid JSON: {e}")

    if not isinstance(payload, list):
        raise SerializationError(f"{key}: expected a JSON array, got {type(payload).__name__}")

    factory = MODEL_BY_KEY[key]
    try:
        return [factory(record) for record in payload]
    except (ValidationError, ValueError, TypeError, AttributeError) as e:
        raise SerializationError(f"{key}: invalid record: {e}")


def encode_flag(value: bool) -> bytes:
    return json.dumps(bool(value)).encode("utf-8")


def decode_flag(raw: bytes) -> bool:
    try:
        value = json.loads(raw.decode("utf-8") if isinstance(raw, (bytes, bytearray)) else raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SerializationError(f"{ONBOARDING}: invalid JSON: {e}")
    if not isinstance(value, bool):
        raise SerializationError(f"{ONBOARDING}: expected a boolean")
    return value
