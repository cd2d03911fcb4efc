"""
Data Adapter for the Recruiting Core

Reads athlete, school, interaction, task, media and suggestion rows and
converts them into core contracts; writes status scores, fit score
snapshots, task statuses and suggestions back.

This is a pure READ + WRITE layer:
- NO scoring logic
- NO rule evaluation
- Each write commits on its own (no multi-row transaction)
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from recruiting.models import (
    AthleteModel,
    AthleteTaskModel,
    EventModel,
    InteractionModel,
    SuggestionModel,
    TargetSchoolModel,
    TaskModel,
    VideoModel,
)

from .constants import TaskCategory
from .contracts import (
    AthleteProfile,
    AthleteTaskStatus,
    Event,
    FitScoreResult,
    FitScoreSnapshot,
    Interaction,
    StatusScoreResult,
    Suggestion,
    TargetSchool,
    TaskDefinition,
    Video,
)


# =============================================================================
# ROW -> CONTRACT
# =============================================================================

def _school_from_row(row: TargetSchoolModel) -> TargetSchool:
    fit = None
    if row.fit_score is not None:
        fit = FitScoreSnapshot(
            score=row.fit_score,
            tier=row.fit_tier or "unlikely",
            breakdown=row.fit_breakdown or {},
            missing_dimensions=row.fit_missing_dimensions or [],
        )
    return TargetSchool(
        id=row.id,
        athlete_id=row.athlete_id,
        name=row.name,
        priority=row.priority,
        status=row.status,
        division=row.division,
        conference=row.conference,
        state=row.state,
        position_needs=row.position_needs or [],
        coach_interest=row.coach_interest,
        roster_depth_pct=row.roster_depth_pct,
        years_to_graduate=row.years_to_graduate,
        scholarship_availability=row.scholarship_availability,
        walk_on_history=row.walk_on_history,
        avg_gpa=row.avg_gpa,
        avg_sat=row.avg_sat,
        avg_act=row.avg_act,
        offered_majors=row.offered_majors or [],
        major_strength=row.major_strength,
        enrollment=row.enrollment,
        cost_of_attendance=row.cost_of_attendance,
        fit=fit,
    )


def _task_from_row(row: TaskModel) -> TaskDefinition:
    return TaskDefinition(
        id=row.id,
        title=row.title,
        category=(row.category or TaskCategory.RECRUITING.value).strip().lower(),
        grade_level=row.grade_level or 9,
        description=row.description,
        required=bool(row.required),
        dependency_task_ids=row.dependency_task_ids or [],
        why_it_matters=row.why_it_matters,
        failure_risk=row.failure_risk,
        division_applicability=row.division_applicability or [],
        deadline_date=row.deadline_date,
    )


def _athlete_task_from_row(row: AthleteTaskModel) -> AthleteTaskStatus:
    return AthleteTaskStatus(
        id=row.id,
        athlete_id=row.athlete_id,
        task_id=row.task_id,
        status=row.status,
        completed_at=row.completed_at,
        is_recovery_task=bool(row.is_recovery_task),
    )


def _suggestion_from_row(row: SuggestionModel) -> Suggestion:
    return Suggestion(
        id=row.id,
        athlete_id=row.athlete_id,
        rule_type=row.rule_type,
        urgency=row.urgency,
        message=row.message,
        action_type=row.action_type or "",
        related_school_id=row.related_school_id,
        related_task_id=row.related_task_id,
        dismissed=bool(row.dismissed),
        dismissed_at=row.dismissed_at,
        completed=bool(row.completed),
        completed_at=row.completed_at,
        pending_surface=bool(row.pending_surface),
        surfaced_at=row.surfaced_at,
        condition_snapshot=row.condition_snapshot,
        reappeared=bool(row.reappeared),
        previous_suggestion_id=row.previous_suggestion_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


_SUGGESTION_COLUMNS = (
    "athlete_id", "rule_type", "urgency", "message", "action_type",
    "related_school_id", "related_task_id",
    "dismissed", "dismissed_at", "completed", "completed_at",
    "pending_surface", "surfaced_at",
    "condition_snapshot", "reappeared", "previous_suggestion_id",
    "created_at", "updated_at",
)


# =============================================================================
# STORE
# =============================================================================

class RecruitingStore:
    """
    Persistence collaborator for the recruiting core, backed by a SQLAlchemy session.
    """

    def __init__(self, db: Session):
        self.db = db

    def rollback(self) -> None:
        self.db.rollback()

    # -- Athletes -------------------------------------------------------------

    def get_athlete(self, athlete_id: str) -> Optional[AthleteProfile]:
        row = self.db.get(AthleteModel, athlete_id)
        if row is None:
            return None
        return AthleteProfile.model_validate(row, from_attributes=True)

    def list_athlete_ids(self) -> List[str]:
        return list(self.db.scalars(select(AthleteModel.id).order_by(AthleteModel.id)))

    def save_status_score(self, athlete_id: str, result: StatusScoreResult) -> None:
        row = self.db.get(AthleteModel, athlete_id)
        if row is None:
            return
        row.status_score = result.score
        row.status_label = result.label
        row.status_updated_at = datetime.now(timezone.utc)
        self.db.commit()

    # -- Schools --------------------------------------------------------------

    def list_schools(self, athlete_id: str) -> List[TargetSchool]:
        rows = self.db.scalars(
            select(TargetSchoolModel)
            .where(TargetSchoolModel.athlete_id == athlete_id)
            .order_by(TargetSchoolModel.id)
        )
        return [_school_from_row(row) for row in rows]

    def get_school(self, school_id: str) -> Optional[TargetSchool]:
        row = self.db.get(TargetSchoolModel, school_id)
        return _school_from_row(row) if row else None

    def save_fit_score(self, school: TargetSchool, fit: FitScoreResult) -> None:
        row = self.db.get(TargetSchoolModel, school.id)
        if row is None:
            raise LookupError(f"Target school {school.id} not found")
        row.fit_score = fit.score
        row.fit_tier = fit.tier
        row.fit_breakdown = dict(fit.breakdown)
        row.fit_missing_dimensions = list(fit.missing_dimensions)
        row.fit_updated_at = datetime.now(timezone.utc)
        self.db.commit()

    def save_school_division(self, school: TargetSchool) -> None:
        row = self.db.get(TargetSchoolModel, school.id)
        if row is None:
            return
        row.division = school.division
        row.conference = school.conference
        self.db.commit()

    # -- Interactions ---------------------------------------------------------

    def list_interactions(self, athlete_id: str) -> List[Interaction]:
        rows = self.db.scalars(
            select(InteractionModel)
            .where(InteractionModel.athlete_id == athlete_id)
            .order_by(InteractionModel.occurred_at)
        )
        return [Interaction.model_validate(row, from_attributes=True) for row in rows]

    def add_interaction(self, interaction: Interaction) -> Interaction:
        self.db.add(InteractionModel(**interaction.model_dump()))
        self.db.commit()
        return interaction

    # -- Tasks ----------------------------------------------------------------

    def list_tasks(self) -> List[TaskDefinition]:
        rows = self.db.scalars(select(TaskModel).order_by(TaskModel.grade_level, TaskModel.id))
        return [_task_from_row(row) for row in rows]

    def get_task(self, task_id: str) -> Optional[TaskDefinition]:
        row = self.db.get(TaskModel, task_id)
        return _task_from_row(row) if row else None

    def list_athlete_tasks(self, athlete_id: str) -> List[AthleteTaskStatus]:
        rows = self.db.scalars(
            select(AthleteTaskModel).where(AthleteTaskModel.athlete_id == athlete_id)
        )
        return [_athlete_task_from_row(row) for row in rows]

    def save_athlete_task(self, status: AthleteTaskStatus) -> AthleteTaskStatus:
        """Create the (athlete, task) row on first change, update it afterwards."""
        row = self.db.scalars(
            select(AthleteTaskModel).where(
                AthleteTaskModel.athlete_id == status.athlete_id,
                AthleteTaskModel.task_id == status.task_id,
            )
        ).first()
        if row is None:
            row = AthleteTaskModel(
                id=status.id or str(uuid.uuid4()),
                athlete_id=status.athlete_id,
                task_id=status.task_id,
            )
            self.db.add(row)
        row.status = status.status
        row.completed_at = status.completed_at
        row.is_recovery_task = status.is_recovery_task
        self.db.commit()
        return _athlete_task_from_row(row)

    # -- Media ----------------------------------------------------------------

    def list_videos(self, athlete_id: str) -> List[Video]:
        rows = self.db.scalars(select(VideoModel).where(VideoModel.athlete_id == athlete_id))
        return [Video.model_validate(row, from_attributes=True) for row in rows]

    def list_events(self, athlete_id: str) -> List[Event]:
        rows = self.db.scalars(select(EventModel).where(EventModel.athlete_id == athlete_id))
        return [
            Event(
                id=row.id,
                athlete_id=row.athlete_id,
                name=row.name or "",
                event_type=row.event_type,
                start_date=row.start_date,
                attended=bool(row.attended),
                school_id=row.school_id,
            )
            for row in rows
        ]

    # -- Suggestions ----------------------------------------------------------

    def list_suggestions(self, athlete_id: str) -> List[Suggestion]:
        rows = self.db.scalars(
            select(SuggestionModel)
            .where(SuggestionModel.athlete_id == athlete_id)
            .order_by(SuggestionModel.created_at)
        )
        return [_suggestion_from_row(row) for row in rows]

    def get_suggestion(self, suggestion_id: str) -> Optional[Suggestion]:
        row = self.db.get(SuggestionModel, suggestion_id)
        return _suggestion_from_row(row) if row else None

    def save_suggestion(self, suggestion: Suggestion) -> Suggestion:
        """Upsert by id."""
        row = self.db.get(SuggestionModel, suggestion.id)
        if row is None:
            row = SuggestionModel(id=suggestion.id)
            self.db.add(row)
        for column in _SUGGESTION_COLUMNS:
            setattr(row, column, getattr(suggestion, column))
        self.db.commit()
        return suggestion
