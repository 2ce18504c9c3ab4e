"""
Tests for the in-memory repository and its change notifications.
"""
from datetime import timedelta

import pytest

from habitally.core.models import (
    Goal,
    GoalCategory,
    MeditationSession,
    MeditationType,
    Milestone,
    PromptCategory,
    Reflection,
    ReflectionPrompt,
)
from habitally.core.repository import Repository
from habitally.core.serialization import (
    COLLECTION_KEYS,
    GOALS,
    HABITS,
    MEDITATION_SESSIONS,
    ONBOARDING,
    REFLECTIONS,
    ROUTINES,
)


@pytest.fixture
def events():
    return []


@pytest.fixture
def repo(events):
    repository = Repository()
    repository.add_change_callback(events.append)
    return repository


@pytest.fixture
def goal(now):
    goal = Goal.create("Ship it", "", GoalCategory.CAREER, now + timedelta(days=30), now=now)
    goal.add_milestone(Milestone.create("Draft", "", now + timedelta(days=5), now=now))
    return goal


@pytest.mark.unit
class TestCrud:

    def test_add_and_get(self, repo, make_habit, events):
        habit = make_habit()
        repo.add_habit(habit)

        assert repo.get_habit(habit.id) is habit
        assert repo.habits == (habit,)
        assert events == [HABITS]

    def test_views_are_read_only_snapshots(self, repo, make_habit):
        repo.add_habit(make_habit())
        view = repo.habits

        assert isinstance(view, tuple)
        repo.add_habit(make_habit())
        assert len(view) == 1
        assert len(repo.habits) == 2

    def test_update_replaces_by_id(self, repo, make_habit, events):
        habit = make_habit()
        repo.add_habit(habit)
        edited = make_habit(target_frequency=3)
        edited.id = habit.id

        assert repo.update_habit(edited)
        assert repo.get_habit(habit.id).target_frequency == 3
        assert events == [HABITS, HABITS]

    def test_in_place_edit_is_saved_via_update(self, repo, goal, now, events):
        repo.add_goal(goal)
        events.clear()

        live = repo.get_goal(goal.id)
        live.add_milestone(Milestone.create("Review", "", now + timedelta(days=10), now=now))
        assert events == []
        assert len(repo.get_goal(goal.id).milestones) == 2

        assert repo.update_goal(live)
        assert events == [GOALS]

    def test_delete(self, repo, make_routine, events):
        routine = make_routine()
        repo.add_routine(routine)

        assert repo.delete_routine(routine.id)
        assert repo.routines == ()
        assert events == [ROUTINES, ROUTINES]

    def test_delete_removes_every_entry_with_the_id(self, repo, make_habit):
        habit = make_habit()
        twin = make_habit()
        twin.id = habit.id
        repo.add_habit(habit)
        repo.add_habit(twin)

        assert repo.delete_habit(habit.id)
        assert repo.habits == ()

    def test_reflections_and_sessions(self, repo, now, events):
        prompt = ReflectionPrompt.create("Why?", PromptCategory.GROWTH)
        reflection = Reflection.create(prompt, now=now)
        session = MeditationSession.create(10, MeditationType.MINDFULNESS, now=now)

        repo.add_reflection(reflection)
        repo.add_meditation_session(session)
        reflection.response = "Because"
        repo.update_reflection(reflection)
        repo.delete_meditation_session(session.id)

        assert repo.get_reflection(reflection.id).response == "Because"
        assert repo.get_meditation_session(session.id) is None
        assert events == [REFLECTIONS, MEDITATION_SESSIONS, REFLECTIONS, MEDITATION_SESSIONS]

    def test_collection_by_key(self, repo, goal):
        repo.add_goal(goal)
        assert repo.collection(GOALS) == (goal,)

    def test_summary(self, repo, make_habit, goal):
        repo.add_habit(make_habit())
        repo.add_habit(make_habit())
        repo.add_goal(goal)

        assert repo.summary() == {HABITS: 2, GOALS: 1, ROUTINES: 0, REFLECTIONS: 0, MEDITATION_SESSIONS: 0}


@pytest.mark.unit
class TestUnknownIds:

    def test_mutators_are_silent_no_ops(self, repo, make_habit, goal, events):
        repo.add_goal(goal)
        events.clear()
        stranger = make_habit()

        assert repo.get_habit("missing") is None
        assert not repo.update_habit(stranger)
        assert not repo.delete_habit("missing")
        assert not repo.complete_habit("missing")
        assert not repo.complete_goal("missing")
        assert not repo.complete_routine("missing")
        assert not repo.toggle_milestone("missing", goal.milestones[0].id)
        assert events == []
        assert repo.habits == ()

    def test_unknown_milestone_leaves_goals_unchanged(self, repo, goal, events):
        repo.add_goal(goal)
        events.clear()
        before = [g.to_dict() for g in repo.goals]

        assert not repo.toggle_milestone(goal.id, "missing")

        assert [g.to_dict() for g in repo.goals] == before
        assert events == []


@pytest.mark.unit
class TestDomainMutators:

    def test_complete_habit(self, repo, make_habit, now, events):
        habit = make_habit()
        repo.add_habit(habit)

        assert repo.complete_habit(habit.id, notes="done", now=now)

        completion = repo.get_habit(habit.id).completions[-1]
        assert completion.completed_date == now
        assert completion.notes == "done"
        assert events == [HABITS, HABITS]

    def test_complete_goal(self, repo, goal, events):
        repo.add_goal(goal)
        assert repo.complete_goal(goal.id)
        assert repo.get_goal(goal.id).is_completed
        assert events == [GOALS, GOALS]

    def test_toggle_milestone_twice(self, repo, goal, now):
        repo.add_goal(goal)
        milestone_id = goal.milestones[0].id

        assert repo.toggle_milestone(goal.id, milestone_id, now=now)
        assert repo.get_goal(goal.id).milestones[0].completed_date == now
        assert repo.toggle_milestone(goal.id, milestone_id, now=now)
        assert repo.get_goal(goal.id).milestones[0].completed_date is None

    def test_complete_routine(self, repo, make_routine, now, events):
        routine = make_routine()
        repo.add_routine(routine)

        assert repo.complete_routine(routine.id, duration=12, now=now)
        assert repo.get_routine(routine.id).completions[-1].duration == 12
        assert events == [ROUTINES, ROUTINES]


@pytest.mark.unit
class TestNotifications:

    def test_failing_callback_does_not_block_others(self, repo, make_habit, events, mocker):
        broken = mocker.Mock(side_effect=RuntimeError("boom"))
        repo.change_callbacks.insert(0, broken)

        repo.add_habit(make_habit())

        broken.assert_called_once_with(HABITS)
        assert events == [HABITS]

    def test_remove_callback(self, repo, make_habit, events):
        assert repo.remove_change_callback(events.append)
        assert not repo.remove_change_callback(events.append)

        repo.add_habit(make_habit())
        assert events == []

    def test_onboarding_flag(self, repo, events):
        assert not repo.has_completed_onboarding
        repo.has_completed_onboarding = True
        assert repo.has_completed_onboarding
        assert events == [ONBOARDING]

    def test_reset_all(self, repo, make_habit, goal, events):
        repo.add_habit(make_habit())
        repo.add_goal(goal)
        repo.has_completed_onboarding = True
        events.clear()

        repo.reset_all()

        assert all(len(repo.collection(key)) == 0 for key in COLLECTION_KEYS)
        assert not repo.has_completed_onboarding
        assert events == list(COLLECTION_KEYS) + [ONBOARDING]
