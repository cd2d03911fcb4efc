"""
Task Dependency Graph

Resolves prerequisite relationships between checklist tasks against one
athlete's task statuses.

A task is locked while any of its dependency tasks is not `completed`.
Lock state is derived from the live status map on every query and is never
stored, so completing a prerequisite unlocks its dependents immediately.
Completing a locked task is rejected; skipping, starting or resetting a task
is always allowed. Skipping does not satisfy dependents.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Set, Union

from .constants import TaskStatus
from .contracts import (
    AthleteTaskStatus,
    DependencyWarning,
    TaskCompletionStats,
    TaskDefinition,
    TaskWithStatus,
)
from .errors import TaskLockedError, TaskNotFoundError
from .status_score import round_half_up

logger = logging.getLogger(__name__)


PersistStatus = Callable[[AthleteTaskStatus], Optional[AthleteTaskStatus]]


class TaskDependencyGraph:
    """
    Lock/unlock view over a task catalog and one athlete's statuses.

    Args:
        tasks: Full task catalog
        athlete_tasks: The athlete's existing status rows
        athlete_id: Owner of the status rows
        persist: Optional write callback; receives the new status row and may
            return the stored row (e.g. with its id assigned)
    """

    def __init__(
        self,
        tasks: List[TaskDefinition],
        athlete_tasks: List[AthleteTaskStatus],
        athlete_id: str,
        persist: Optional[PersistStatus] = None,
    ):
        self.athlete_id = athlete_id
        self._tasks: Dict[str, TaskDefinition] = {t.id: t for t in tasks}
        self._statuses: Dict[str, AthleteTaskStatus] = {at.task_id: at for at in athlete_tasks}
        self._persist = persist

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_task(self, task_id: str) -> TaskDefinition:
        task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def status_of(self, task_id: str) -> str:
        row = self._statuses.get(task_id)
        return row.status if row else TaskStatus.NOT_STARTED.value

    def incomplete_prerequisites(self, task_id: str) -> List[str]:
        """Dependency ids of `task_id` that are not completed, in catalog order."""
        task = self.get_task(task_id)
        return [
            dep_id for dep_id in task.dependency_task_ids
            if self.status_of(dep_id) != TaskStatus.COMPLETED
        ]

    def is_locked(self, task_id: str) -> bool:
        return bool(self.incomplete_prerequisites(task_id))

    def locked_task_ids(self) -> Set[str]:
        return {task_id for task_id in self._tasks if self.is_locked(task_id)}

    def _title(self, task_id: str) -> str:
        # A dependency missing from the catalog is shown by id
        task = self._tasks.get(task_id)
        return task.title if task else task_id

    def dependency_warning(self, task_id: str) -> Optional[DependencyWarning]:
        """Soft warning naming the first open prerequisite, if any."""
        missing = self.incomplete_prerequisites(task_id)
        if not missing:
            return None
        prerequisite = self._tasks.get(missing[0])
        why = prerequisite.why_it_matters if prerequisite else None
        return DependencyWarning(
            message=f'This task works best after completing "{self._title(missing[0])}".',
            prerequisite_task_id=missing[0],
            why_it_matters=why or "Complete this prerequisite first.",
        )

    def tasks_with_status(self, grade_level: Optional[int] = None) -> List[TaskWithStatus]:
        return [
            TaskWithStatus(
                task=task,
                athlete_task=self._statuses.get(task.id),
                is_locked=self.is_locked(task.id),
                prerequisite_task_ids=list(task.dependency_task_ids),
            )
            for task in self._tasks.values()
            if grade_level is None or task.grade_level == grade_level
        ]

    def completion_stats(self, grade_level: int) -> TaskCompletionStats:
        statuses = [self.status_of(t.id) for t in self._tasks.values() if t.grade_level == grade_level]
        stats = TaskCompletionStats(
            total=len(statuses),
            completed=statuses.count(TaskStatus.COMPLETED.value),
            in_progress=statuses.count(TaskStatus.IN_PROGRESS.value),
            not_started=statuses.count(TaskStatus.NOT_STARTED.value),
            skipped=statuses.count(TaskStatus.SKIPPED.value),
        )
        if stats.total:
            stats.percent_complete = round_half_up(stats.completed / stats.total * 100)
        return stats

    def required_completion_rate(self, grade_level: int) -> float:
        required = [t.id for t in self._tasks.values() if t.required and t.grade_level == grade_level]
        if not required:
            return 0.0
        done = sum(1 for task_id in required if self.status_of(task_id) == TaskStatus.COMPLETED)
        return done / len(required) * 100

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def update_status(
        self,
        task_id: str,
        new_status: Union[TaskStatus, str],
        now: Optional[datetime] = None,
    ) -> AthleteTaskStatus:
        """
        Move a task to `new_status`.

        Args:
            task_id: Catalog task id
            new_status: Target status
            now: Completion timestamp override

        Returns:
            The new AthleteTaskStatus row

        Raises:
            TaskNotFoundError: task_id is not in the catalog
            TaskLockedError: completing a task with open prerequisites
        """
        self.get_task(task_id)
        status = TaskStatus(new_status)

        if status == TaskStatus.COMPLETED:
            missing = self.incomplete_prerequisites(task_id)
            if missing:
                titles = [self._title(dep_id) for dep_id in missing]
                logger.info(
                    f"Rejected completion of task {task_id} for athlete {self.athlete_id}: "
                    f"{len(missing)} prerequisite(s) open"
                )
                raise TaskLockedError(task_id, titles)

        existing = self._statuses.get(task_id)
        completed_at = None
        if status == TaskStatus.COMPLETED:
            completed_at = now or datetime.now(timezone.utc)

        row = AthleteTaskStatus(
            id=existing.id if existing else None,
            athlete_id=self.athlete_id,
            task_id=task_id,
            status=status,
            completed_at=completed_at,
            is_recovery_task=existing.is_recovery_task if existing else False,
        )

        if self._persist is not None:
            stored = self._persist(row)
            if stored is not None:
                row = stored

        self._statuses[task_id] = row
        return row
