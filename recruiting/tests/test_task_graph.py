"""
Tests for checklist prerequisite locking and validated transitions.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from recruiting.logic.contracts import AthleteTaskStatus, TaskDefinition
from recruiting.logic.errors import TaskLockedError, TaskNotFoundError
from recruiting.logic.task_graph import TaskDependencyGraph

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


def _catalog():
    return [
        TaskDefinition(
            id="video", title="Create highlight video", grade_level=10, required=True,
            why_it_matters="Coaches evaluate video before anything else.",
        ),
        TaskDefinition(id="ncaa", title="Register with NCAA", grade_level=10, required=True),
        TaskDefinition(
            id="email", title="Email coaches", grade_level=10, required=True,
            dependency_task_ids=["video"],
        ),
        TaskDefinition(
            id="visit", title="Plan campus visits", grade_level=11,
            dependency_task_ids=["video", "ncaa"],
        ),
        TaskDefinition(id="orphan", title="Orphan task", dependency_task_ids=["retired-task"]),
    ]


def _graph(statuses=None, persist=None):
    athlete_tasks = [
        AthleteTaskStatus(athlete_id="a1", task_id=task_id, status=status)
        for task_id, status in (statuses or {}).items()
    ]
    return TaskDependencyGraph(_catalog(), athlete_tasks, "a1", persist=persist)


def test_task_without_dependencies_is_never_locked():
    graph = _graph()
    assert not graph.is_locked("video")
    assert not graph.is_locked("ncaa")


def test_dependent_unlocks_when_prerequisite_completes():
    graph = _graph()
    assert graph.is_locked("email")

    graph.update_status("video", "completed", now=NOW)

    assert not graph.is_locked("email")
    assert graph.update_status("email", "completed", now=NOW).status == "completed"


def test_completing_locked_task_names_every_prerequisite():
    graph = _graph()
    with pytest.raises(TaskLockedError) as exc_info:
        graph.update_status("visit", "completed")

    assert str(exc_info.value) == (
        "Cannot complete task. Please complete these prerequisites first: "
        "Create highlight video, Register with NCAA"
    )
    assert exc_info.value.prerequisite_titles == ["Create highlight video", "Register with NCAA"]


def test_skipped_prerequisite_does_not_unlock():
    graph = _graph({"video": "skipped"})
    assert graph.is_locked("email")
    with pytest.raises(TaskLockedError):
        graph.update_status("email", "completed")


def test_locked_task_can_be_started_skipped_or_reset():
    graph = _graph()
    assert graph.update_status("email", "in_progress").status == "in_progress"
    assert graph.update_status("email", "skipped").status == "skipped"
    assert graph.update_status("email", "not_started").status == "not_started"


def test_rejected_transition_is_not_persisted():
    writes = []
    graph = _graph(persist=lambda row: writes.append(row))

    with pytest.raises(TaskLockedError):
        graph.update_status("email", "completed")
    assert writes == []
    assert graph.status_of("email") == "not_started"

    graph.update_status("video", "completed", now=NOW)
    assert [row.task_id for row in writes] == ["video"]


def test_persisted_row_replaces_local_row():
    def persist(row):
        return row.model_copy(update={"id": "stored-1"})

    graph = _graph(persist=persist)
    row = graph.update_status("video", "completed", now=NOW)
    assert row.id == "stored-1"


def test_completed_at_tracks_completion():
    graph = _graph()
    assert graph.update_status("video", "completed", now=NOW).completed_at == NOW
    assert graph.update_status("video", "in_progress").completed_at is None
    assert graph.is_locked("email")


def test_unknown_task_raises():
    with pytest.raises(TaskNotFoundError):
        _graph().update_status("nope", "completed")


def test_missing_dependency_is_shown_by_id():
    graph = _graph()
    with pytest.raises(TaskLockedError) as exc_info:
        graph.update_status("orphan", "completed")
    assert exc_info.value.prerequisite_titles == ["retired-task"]


def test_locked_task_ids():
    graph = _graph({"video": "completed"})
    assert graph.locked_task_ids() == {"visit", "orphan"}


def test_dependency_warning():
    graph = _graph()
    warning = graph.dependency_warning("email")
    assert warning.message == 'This task works best after completing "Create highlight video".'
    assert warning.prerequisite_task_id == "video"
    assert warning.why_it_matters == "Coaches evaluate video before anything else."
    assert graph.dependency_warning("video") is None


def test_completion_stats():
    graph = _graph({"video": "completed", "ncaa": "in_progress"})
    stats = graph.completion_stats(10)
    assert stats.total == 3
    assert stats.completed == 1
    assert stats.in_progress == 1
    assert stats.not_started == 1
    assert stats.percent_complete == 33
    assert graph.required_completion_rate(10) == pytest.approx(100 / 3)


def test_tasks_with_status_reports_lock_state():
    graph = _graph({"video": "completed"})
    checklist = {item.task.id: item for item in graph.tasks_with_status()}

    assert set(checklist) == {"video", "ncaa", "email", "visit", "orphan"}
    assert checklist["video"].athlete_task.status == "completed"
    assert checklist["ncaa"].athlete_task is None
    assert not checklist["email"].is_locked
    assert checklist["visit"].is_locked
    assert checklist["visit"].prerequisite_task_ids == ["video", "ncaa"]


def test_tasks_with_status_filters_by_grade():
    graph = _graph()
    assert [item.task.id for item in graph.tasks_with_status(grade_level=10)] == ["video", "ncaa", "email"]
    assert [item.task.id for item in graph.tasks_with_status(grade_level=12)] == []


def test_task_category():
    assert TaskDefinition(id="t", title="T").category == "recruiting"
    assert TaskDefinition(id="t", title="T", category="mindset").category == "mindset"
    with pytest.raises(ValidationError):
        TaskDefinition(id="t", title="T", category="hobbies")
