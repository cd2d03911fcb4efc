"""
Data Contracts for the Recruiting Decision-Support Core

Defines Pydantic models for the records the core reads (athlete, target
schools, interactions, checklist tasks, videos, events), the immutable
RuleContext handed to suggestion rules, and the results the core returns.
These contracts are the boundary between the core and its persistence layer.
"""

from datetime import date, datetime, timezone
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field

from .constants import TaskCategory, TaskStatus, Urgency, FitTier, StatusLabel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

class AthleteProfile(BaseModel):
    """
    Recruiting attributes of a single athlete.
    Every field except the id may be missing.
    """
    id: str
    name: Optional[str] = None

    # Timeline
    grade_level: Optional[int] = None  # 9-12
    graduation_year: Optional[int] = None

    # Athletic
    sport: Optional[str] = None
    primary_position: Optional[str] = None  # e.g. "RHP", "OF", "IF"
    height_inches: Optional[float] = None
    weight_lbs: Optional[float] = None
    velocity_mph: Optional[float] = None  # pitch velo or exit velo

    # Academic
    gpa: Optional[float] = None
    sat_score: Optional[int] = None
    act_score: Optional[int] = None
    eligibility_status: Optional[str] = None  # registered/pending/not_started
    intended_major: Optional[str] = None

    # Preferences
    home_state: Optional[str] = None
    campus_size_preference: Optional[str] = None  # small/medium/large
    cost_sensitivity: Optional[str] = None  # high/medium/low


class FitScoreSnapshot(BaseModel):
    """Latest stored fit score for a target school."""
    score: int = 0
    tier: str = FitTier.UNLIKELY.value
    breakdown: Dict[str, Optional[float]] = Field(default_factory=dict)
    missing_dimensions: List[str] = Field(default_factory=list)


class TargetSchool(BaseModel):
    """
    A school an athlete is tracking, with the attributes fit scoring reads.
    """
    id: str
    athlete_id: str
    name: str

    # Classification
    priority: Optional[str] = None  # A/B/C or None
    status: Optional[str] = None  # researching/contacted/interested/visited/offered/committed
    division: Optional[str] = None  # D1/D2/D3
    conference: Optional[str] = None
    state: Optional[str] = None

    # Athletic program
    position_needs: List[str] = Field(default_factory=list)
    coach_interest: Optional[str] = None  # high/medium/low
    roster_depth_pct: Optional[float] = None
    years_to_graduate: Optional[int] = None
    scholarship_availability: Optional[str] = None  # high/medium/low
    walk_on_history: Optional[bool] = None

    # Academic program
    avg_gpa: Optional[float] = None
    avg_sat: Optional[int] = None
    avg_act: Optional[int] = None
    offered_majors: List[str] = Field(default_factory=list)
    major_strength: Optional[int] = None  # 1-10

    # Campus
    enrollment: Optional[int] = None
    cost_of_attendance: Optional[float] = None

    fit: Optional[FitScoreSnapshot] = None

    @property
    def fit_score(self) -> Optional[int]:
        return self.fit.score if self.fit else None


class Interaction(BaseModel):
    """A logged contact event with a school or coach."""
    id: str
    athlete_id: str
    school_id: Optional[str] = None
    event_id: Optional[str] = None
    interaction_type: Optional[str] = None  # email/call/camp/official_visit/...
    direction: Optional[str] = None  # inbound/outbound
    sentiment: Optional[str] = None  # positive/neutral/negative
    occurred_at: datetime


class TaskDefinition(BaseModel):
    """Immutable checklist catalog entry."""
    id: str
    title: str
    category: TaskCategory = TaskCategory.RECRUITING
    grade_level: int = 9
    description: Optional[str] = None
    required: bool = False
    dependency_task_ids: List[str] = Field(default_factory=list)
    why_it_matters: Optional[str] = None
    failure_risk: Optional[str] = None
    division_applicability: List[str] = Field(default_factory=list)
    deadline_date: Optional[date] = None

    class Config:
        use_enum_values = True


class AthleteTaskStatus(BaseModel):
    """One athlete's progress on one checklist task."""
    id: Optional[str] = None
    athlete_id: str
    task_id: str
    status: TaskStatus = TaskStatus.NOT_STARTED
    completed_at: Optional[datetime] = None
    is_recovery_task: bool = False

    class Config:
        use_enum_values = True


class Video(BaseModel):
    id: str
    athlete_id: str
    title: Optional[str] = None
    url: Optional[str] = None
    health_status: Optional[str] = None  # healthy/broken/unknown


class Event(BaseModel):
    """A showcase, camp or tournament on the athlete's calendar."""
    id: str
    athlete_id: str
    name: str = ""
    event_type: Optional[str] = None
    start_date: Optional[datetime] = None
    attended: bool = False
    school_id: Optional[str] = None


class RuleContext(BaseModel):
    """
    Immutable snapshot every suggestion rule evaluates against.
    `now` is fixed at construction so evaluation is deterministic.
    """
    athlete_id: str
    athlete: Optional[AthleteProfile] = None
    schools: List[TargetSchool] = Field(default_factory=list)
    interactions: List[Interaction] = Field(default_factory=list)
    tasks: List[TaskDefinition] = Field(default_factory=list)
    athlete_tasks: List[AthleteTaskStatus] = Field(default_factory=list)
    videos: List[Video] = Field(default_factory=list)
    events: List[Event] = Field(default_factory=list)
    now: datetime = Field(default_factory=_utcnow)

    class Config:
        frozen = True

    @property
    def grade_level(self) -> Optional[int]:
        return self.athlete.grade_level if self.athlete else None


class StatusScoreInputs(BaseModel):
    """Pre-aggregated raw signals for the status score, each 0-100."""
    task_completion_rate: Optional[float] = None
    interaction_frequency_score: Optional[float] = None
    coach_interest_score: Optional[float] = None
    academic_standing_score: Optional[float] = None


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class StatusScoreResult(BaseModel):
    score: int = Field(ge=0, le=100)
    label: StatusLabel
    color: str
    breakdown: Dict[str, float] = Field(default_factory=dict)

    class Config:
        use_enum_values = True


class StatusReport(BaseModel):
    """Status score plus the advice shown alongside it."""
    result: StatusScoreResult
    inputs: StatusScoreInputs
    advice: str
    next_actions: List[str] = Field(default_factory=list)
    phase: str


class FitScoreResult(BaseModel):
    """
    Per-school fit score. `breakdown` holds points per dimension;
    a dimension with unavailable inputs is None and named in
    `missing_dimensions`.
    """
    school_id: Optional[str] = None
    score: int = Field(ge=0, le=100)
    tier: FitTier
    breakdown: Dict[str, Optional[float]] = Field(default_factory=dict)
    missing_dimensions: List[str] = Field(default_factory=list)
    recommendation: str = ""

    class Config:
        use_enum_values = True


class FitRecalculationResult(BaseModel):
    success: bool = True
    updated: int = 0
    failed: int = 0
    message: str = ""
    failures: Dict[str, str] = Field(default_factory=dict)


class PortfolioHealth(BaseModel):
    reaches: int = 0
    matches: int = 0
    safeties: int = 0
    unlikelies: int = 0
    total: int = 0
    status: str = "not_started"  # not_started/good/needs_attention
    warnings: List[str] = Field(default_factory=list)


class SchoolLookupResult(BaseModel):
    division: str
    conference: Optional[str] = None


class TaskCompletionStats(BaseModel):
    total: int = 0
    completed: int = 0
    in_progress: int = 0
    not_started: int = 0
    skipped: int = 0
    percent_complete: int = 0


class DependencyWarning(BaseModel):
    """Soft warning shown before starting a task with open prerequisites."""
    message: str
    prerequisite_task_id: str
    why_it_matters: str


class TaskWithStatus(BaseModel):
    task: TaskDefinition
    athlete_task: Optional[AthleteTaskStatus] = None
    is_locked: bool = False
    prerequisite_task_ids: List[str] = Field(default_factory=list)


class SuggestionData(BaseModel):
    """Payload a rule emits when its condition is met."""
    rule_type: str
    urgency: Urgency
    message: str
    action_type: str
    related_school_id: Optional[str] = None
    related_task_id: Optional[str] = None

    class Config:
        use_enum_values = True


class Suggestion(BaseModel):
    """Persisted suggestion with its lifecycle fields."""
    id: str
    athlete_id: str
    rule_type: str
    urgency: Urgency
    message: str
    action_type: str
    related_school_id: Optional[str] = None
    related_task_id: Optional[str] = None

    # Lifecycle
    dismissed: bool = False
    dismissed_at: Optional[datetime] = None
    completed: bool = False
    completed_at: Optional[datetime] = None
    pending_surface: bool = True
    surfaced_at: Optional[datetime] = None

    # Resurfacing
    condition_snapshot: Optional[Dict[str, Any]] = None
    reappeared: bool = False
    previous_suggestion_id: Optional[str] = None

    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    class Config:
        use_enum_values = True

    @property
    def is_unresolved(self) -> bool:
        return not self.dismissed and not self.completed

    @property
    def is_visible(self) -> bool:
        return self.is_unresolved and not self.pending_surface


class GenerationResult(BaseModel):
    created: List[str] = Field(default_factory=list)
    refreshed: List[str] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)


class SuggestionPage(BaseModel):
    suggestions: List[Suggestion] = Field(default_factory=list)
    more_count: int = 0
    pending_count: int = 0


class TriggerResult(BaseModel):
    generated: int = 0
    surfaced: int = 0
    reason: str


class BatchResult(BaseModel):
    total: int = 0
    updated: int = 0
    failed: int = 0
    failures: Dict[str, str] = Field(default_factory=dict)
