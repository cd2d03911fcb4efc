"""
Status Score

Combines four raw recruiting signals into a 0-100 status score:
- Task completion rate (35%)
- Interaction frequency (25%)
- Coach interest (25%)
- Academic standing (15%)

Each signal is clamped to [0, 100], weighted and summed; the sum is rounded
half-up and clamped. Labels: >=75 on_track, >=50 slightly_behind, else at_risk.
"""

import math
import numbers
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from .constants import (
    ACT_BANDS,
    ELIGIBILITY_POINTS,
    GPA_BANDS,
    INTEREST_LEVEL_POINTS,
    INTERACTION_RECENCY_STEPS,
    NEXT_ACTIONS,
    PHASE_GRADE,
    PRIORITY_INTEREST_BONUS,
    PRIORITY_INTEREST_BONUS_CAP,
    PRIORITY_TIERS,
    SAT_BANDS,
    STATUS_ADVICE,
    STATUS_COLORS,
    STATUS_THRESHOLDS,
    STATUS_WEIGHTS,
    Phase,
    StatusLabel,
    TaskStatus,
)
from .contracts import (
    AthleteProfile,
    AthleteTaskStatus,
    Interaction,
    StatusReport,
    StatusScoreInputs,
    StatusScoreResult,
    TargetSchool,
    TaskDefinition,
)
from .dates import current_grade_from_graduation_year, days_between, ensure_utc
from .errors import InvalidScoreInputError


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; scores round .5 upward
    return int(math.floor(round(value, 6) + 0.5))


# =============================================================================
# COMPOSITE
# =============================================================================

def _validate_inputs(inputs: Union[StatusScoreInputs, Dict[str, Any], None]) -> Dict[str, float]:
    """Return the four signals as floats (absent -> 0), rejecting non-numbers."""
    if inputs is None:
        raw: Dict[str, Any] = {}
    elif isinstance(inputs, StatusScoreInputs):
        raw = inputs.model_dump()
    else:
        raw = dict(inputs)

    problems: List[str] = []
    values: Dict[str, float] = {}
    for field in STATUS_WEIGHTS:
        value = raw.get(field)
        if value is None:
            values[field] = 0.0
            continue
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            problems.append(f"{field} must be a number, got {value!r}")
            continue
        if math.isnan(value) or math.isinf(value):
            problems.append(f"{field} must be a finite number, got {value!r}")
            continue
        values[field] = float(value)

    if problems:
        raise InvalidScoreInputError(problems)
    return values


def label_for_score(score: int) -> StatusLabel:
    if score >= STATUS_THRESHOLDS[StatusLabel.ON_TRACK]:
        return StatusLabel.ON_TRACK
    if score >= STATUS_THRESHOLDS[StatusLabel.SLIGHTLY_BEHIND]:
        return StatusLabel.SLIGHTLY_BEHIND
    return StatusLabel.AT_RISK


def calculate_composite_score(
    inputs: Union[StatusScoreInputs, Dict[str, Any], None]
) -> StatusScoreResult:
    """
    Compute the weighted status score.

    Args:
        inputs: StatusScoreInputs or a dict with any subset of its fields.
            Absent fields count as 0.

    Returns:
        StatusScoreResult with score, label, color and weighted breakdown

    Raises:
        InvalidScoreInputError: a field is present but not a finite number
    """
    values = _validate_inputs(inputs)

    breakdown: Dict[str, float] = {}
    for field, weight in STATUS_WEIGHTS.items():
        breakdown[field] = _clamp(values[field]) * weight

    score = int(_clamp(round_half_up(sum(breakdown.values()))))
    label = label_for_score(score)

    return StatusScoreResult(
        score=score,
        label=label,
        color=STATUS_COLORS[label],
        breakdown=breakdown,
    )


# =============================================================================
# SUB-SCORES
# =============================================================================

def task_completion_rate(completed_required: int, total_required: int) -> float:
    if total_required <= 0:
        return 0.0
    return completed_required / total_required * 100


def interaction_frequency_score(days_since_last: Optional[int], has_schools: bool = True) -> float:
    """Step function of days since the most recent interaction."""
    if days_since_last is None or not has_schools:
        return 0.0
    for max_days, points in INTERACTION_RECENCY_STEPS:
        if days_since_last <= max_days:
            return float(points)
    return 0.0


def coach_interest_score(interest_levels: List[str], priority_schools_with_interest: int = 0) -> float:
    """Average of interest-level points plus a capped priority-school bonus."""
    if not interest_levels:
        return 0.0
    average = sum(INTEREST_LEVEL_POINTS.get(level, 0) for level in interest_levels) / len(interest_levels)
    bonus = min(PRIORITY_INTEREST_BONUS_CAP, PRIORITY_INTEREST_BONUS * priority_schools_with_interest)
    return min(100.0, average + bonus)


def academic_standing_score(
    gpa: Optional[float],
    sat: Optional[int],
    act: Optional[int],
    eligibility_status: Optional[str],
) -> float:
    score = 0

    if gpa is not None:
        for threshold, points in GPA_BANDS:
            if gpa >= threshold:
                score += points
                break

    # SAT takes precedence when both are present
    if sat:
        for threshold, points in SAT_BANDS:
            if sat >= threshold:
                score += points
                break
    elif act:
        for threshold, points in ACT_BANDS:
            if act >= threshold:
                score += points
                break

    score += ELIGIBILITY_POINTS.get(eligibility_status or "", 0)
    return float(min(100, score))


def interest_level_from_sentiment(sentiment: Optional[str]) -> str:
    sentiment = (sentiment or "").strip().lower()
    if sentiment == "positive":
        return "high"
    if sentiment == "negative":
        return "low"
    return "medium"


# =============================================================================
# PHASE
# =============================================================================

def phase_for_grade(grade_level: Optional[int], committed: bool = False) -> Phase:
    if committed:
        return Phase.COMMITTED
    if grade_level is None or grade_level <= 9:
        return Phase.FRESHMAN
    if grade_level == 10:
        return Phase.SOPHOMORE
    if grade_level == 11:
        return Phase.JUNIOR
    return Phase.SENIOR


def grade_for_phase(phase: Phase) -> int:
    return PHASE_GRADE[Phase(phase)]


def resolve_grade_level(athlete: AthleteProfile, now: Optional[datetime] = None) -> int:
    """Stored grade level, else derived from graduation year, else 9."""
    if athlete.grade_level is not None:
        return athlete.grade_level
    if athlete.graduation_year:
        return current_grade_from_graduation_year(athlete.graduation_year, now)
    return 9


# =============================================================================
# INPUT DERIVATION
# =============================================================================

def build_status_inputs(
    athlete: AthleteProfile,
    tasks: List[TaskDefinition],
    athlete_tasks: List[AthleteTaskStatus],
    interactions: List[Interaction],
    schools: List[TargetSchool],
    now: Optional[datetime] = None,
) -> StatusScoreInputs:
    """
    Derive the four raw status signals from an athlete's stored records.

    Required tasks are those for the athlete's current grade level.
    Interaction sentiment stands in for coach interest
    (positive -> high, negative -> low, otherwise medium).
    """
    now = now or datetime.now(timezone.utc)
    grade_level = resolve_grade_level(athlete, now)

    required_ids = {t.id for t in tasks if t.required and t.grade_level == grade_level}
    completed_ids = {
        at.task_id for at in athlete_tasks
        if at.status == TaskStatus.COMPLETED and at.task_id in required_ids
    }

    days_since_last: Optional[int] = None
    if interactions:
        latest = max(ensure_utc(i.occurred_at) for i in interactions)
        days_since_last = max(0, days_between(latest, now))

    levels = [interest_level_from_sentiment(i.sentiment) for i in interactions]
    priority_ids = {s.id for s in schools if s.priority in PRIORITY_TIERS}
    priority_with_interest = len({
        i.school_id for i in interactions
        if i.school_id in priority_ids and interest_level_from_sentiment(i.sentiment) == "high"
    })

    return StatusScoreInputs(
        task_completion_rate=task_completion_rate(len(completed_ids), len(required_ids)),
        interaction_frequency_score=interaction_frequency_score(days_since_last, bool(schools)),
        coach_interest_score=coach_interest_score(levels, priority_with_interest),
        academic_standing_score=academic_standing_score(
            athlete.gpa, athlete.sat_score, athlete.act_score, athlete.eligibility_status
        ),
    )


def build_status_report(inputs: StatusScoreInputs, phase: Phase) -> StatusReport:
    """Score the inputs and attach the label's advice and phase next actions."""
    result = calculate_composite_score(inputs)
    label = StatusLabel(result.label)
    phase = Phase(phase)
    return StatusReport(
        result=result,
        inputs=inputs,
        advice=STATUS_ADVICE[label],
        next_actions=list(NEXT_ACTIONS[label][phase]),
        phase=phase.value,
    )
