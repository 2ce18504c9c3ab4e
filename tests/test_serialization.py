"""
Tests for the collection JSON codec.
"""
import json
from datetime import datetime, timedelta

import pytest
import pytz

from habitally.core.catalog import morning_routine_template, sample_goals, sample_habits
from habitally.core.models import (
    MeditationSession,
    MeditationType,
    Mood,
    PromptCategory,
    Reflection,
    ReflectionPrompt,
)
from habitally.core.serialization import (
    COLLECTION_KEYS,
    GOALS,
    HABITS,
    MEDITATION_SESSIONS,
    REFLECTIONS,
    ROUTINES,
    SerializationError,
    decode_collection,
    decode_flag,
    encode_collection,
    encode_flag,
)


@pytest.fixture
def collections(now, tz):
    habits = sample_habits(now)
    habits[0].complete(notes="first glass", now=now)
    goals = sample_goals(now, tz)
    goals[0].milestones[0].mark_completed(now)
    goals[0].link_habit(habits[0].id)
    routine = morning_routine_template(now, tz)
    routine.complete(duration=30, now=now)
    routine.complete(now=now + timedelta(hours=1))
    prompt = ReflectionPrompt.create("What went well?", PromptCategory.GRATITUDE, is_daily=True)
    reflections = [
        Reflection.create(prompt, "Plenty", Mood.EXCELLENT, ["sun", "tea"], "Rest matters", now=now),
        Reflection.create(prompt, now=now),
    ]
    sessions = [
        MeditationSession.create(10, MeditationType.BODY_SCANNING, now=now),
        MeditationSession.create(5, MeditationType.BREATHING, notes="short", now=now),
    ]
    return {
        HABITS: habits,
        GOALS: goals,
        ROUTINES: [routine],
        REFLECTIONS: reflections,
        MEDITATION_SESSIONS: sessions,
    }


@pytest.mark.unit
class TestRoundTrip:

    @pytest.mark.parametrize("key", COLLECTION_KEYS)
    def test_collection_survives_round_trip(self, collections, key):
        entities = collections[key]
        assert decode_collection(key, encode_collection(key, entities)) == entities

    @pytest.mark.parametrize("key", COLLECTION_KEYS)
    def test_empty_collection(self, key):
        raw = encode_collection(key, [])
        assert json.loads(raw) == []
        assert decode_collection(key, raw) == []

    def test_flag(self):
        assert decode_flag(encode_flag(True)) is True
        assert decode_flag(encode_flag(False)) is False


@pytest.mark.unit
class TestStoredFormat:

    def test_habit_record_keys(self, collections):
        record = json.loads(encode_collection(HABITS, collections[HABITS]))[0]

        assert set(record) == {
            "id", "name", "description", "category", "targetFrequency", "frequencyType",
            "isActive", "createdDate", "completions", "motivationalMessage",
        }
        assert record["category"] == "Health"
        assert record["frequencyType"] == "Daily"
        assert record["targetFrequency"] == 8
        assert set(record["completions"][0]) == {"id", "completedDate", "notes"}

    def test_goal_record_uses_raw_values(self, collections):
        record = json.loads(encode_collection(GOALS, collections[GOALS]))[0]

        assert record["category"] == "Lifestyle"
        assert record["priority"] == "High"
        assert record["milestones"][1]["completedDate"] is None
        assert record["relatedHabits"] == [collections[HABITS][0].id]

    def test_meditation_type_key(self, collections):
        record = json.loads(encode_collection(MEDITATION_SESSIONS, collections[MEDITATION_SESSIONS]))[0]
        assert record["type"] == "Body Scanning"
        assert "meditationType" not in record

    def test_unset_optionals_are_null(self, collections):
        reflection = json.loads(encode_collection(REFLECTIONS, collections[REFLECTIONS]))[1]
        assert reflection["mood"] is None
        assert reflection["gratitude"] == []
        assert reflection["prompt"]["isDaily"] is True

    def test_dates_carry_utc_offset(self, collections):
        record = json.loads(encode_collection(HABITS, collections[HABITS]))[0]
        assert record["createdDate"].endswith("+02:00")

    def test_non_ascii_is_kept_readable(self, collections):
        raw = encode_collection(HABITS, collections[HABITS])
        assert "💧" in raw.decode("utf-8")

    def test_z_suffixed_dates_are_accepted(self):
        raw = json.dumps([{
            "id": "A1", "duration": 12, "type": "Walking",
            "completedDate": "2025-06-15T08:00:00Z", "notes": None,
        }]).encode("utf-8")

        session = decode_collection(MEDITATION_SESSIONS, raw)[0]

        assert session.completed_date == pytz.utc.localize(datetime(2025, 6, 15, 8, 0))
        assert session.meditation_type is MeditationType.WALKING


@pytest.mark.unit
class TestDecodeErrors:

    @pytest.mark.parametrize("raw", [b"{not json", b"\xff\xfe", b'{"id": "x"}', b"42"])
    def test_malformed_payload(self, raw):
        with pytest.raises(SerializationError):
            decode_collection(HABITS, raw)

    def test_invalid_record(self):
        raw = json.dumps([{"id": "x", "name": "y", "category": "Nope",
                           "createdDate": "2025-06-15T08:00:00Z"}]).encode("utf-8")
        with pytest.raises(SerializationError, match="habits"):
            decode_collection(HABITS, raw)

    def test_record_missing_field(self):
        raw = json.dumps([{"id": "x"}]).encode("utf-8")
        with pytest.raises(SerializationError):
            decode_collection(GOALS, raw)

    def test_bad_date(self):
        raw = json.dumps([{"id": "x", "duration": 5, "type": "Walking",
                           "completedDate": "yesterday"}]).encode("utf-8")
        with pytest.raises(SerializationError):
            decode_collection(MEDITATION_SESSIONS, raw)

    def test_record_that_is_not_an_object(self):
        with pytest.raises(SerializationError):
            decode_collection(ROUTINES, b'["just a string"]')

    def test_unknown_key(self):
        with pytest.raises(SerializationError):
            encode_collection("todos", [])

    @pytest.mark.parametrize("raw", [b"1", b'"yes"', b"nope"])
    def test_bad_flag(self, raw):
        with pytest.raises(SerializationError):
            decode_flag(raw)
