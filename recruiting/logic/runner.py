"""
Recruiting Runner

Wires the pure core to persistence:
1. Loads athlete records via the store
2. Runs scoring, task transitions or the suggestion engine
3. Writes results back through the store

This is a pure orchestration layer - NO scoring math, NO rule logic.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Union

from .adapter import RecruitingStore
from .constants import TriggerReason
from .contracts import (
    AthleteTaskStatus,
    BatchResult,
    FitRecalculationResult,
    FitScoreResult,
    Interaction,
    RuleContext,
    StatusReport,
    TargetSchool,
    TaskWithStatus,
    TriggerResult,
)
from .engine import SuggestionEngine
from .errors import AthleteProfileMissingError, SchoolNotFoundError
from .fit_score import recalculate_all_fit_scores, score_school_fit
from .school_matching import SchoolMatchCache, resolve_school_division
from .status_score import (
    build_status_inputs,
    build_status_report,
    phase_for_grade,
    resolve_grade_level,
)
from .task_graph import TaskDependencyGraph

logger = logging.getLogger(__name__)


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.now(timezone.utc)


# =============================================================================
# CONTEXT
# =============================================================================

def build_rule_context(store: RecruitingStore, athlete_id: str, now: Optional[datetime] = None) -> RuleContext:
    """
    Snapshot everything the rules read for one athlete.

    The grade level falls back to the graduation year, then to 9.

    Raises:
        AthleteProfileMissingError: no athlete with this id
    """
    now = _now(now)
    athlete = store.get_athlete(athlete_id)
    if athlete is None:
        raise AthleteProfileMissingError(athlete_id)

    athlete = athlete.model_copy(update={"grade_level": resolve_grade_level(athlete, now)})
    return RuleContext(
        athlete_id=athlete_id,
        athlete=athlete,
        schools=store.list_schools(athlete_id),
        interactions=store.list_interactions(athlete_id),
        tasks=store.list_tasks(),
        athlete_tasks=store.list_athlete_tasks(athlete_id),
        videos=store.list_videos(athlete_id),
        events=store.list_events(athlete_id),
        now=now,
    )


# =============================================================================
# SUGGESTIONS
# =============================================================================

def trigger_suggestion_update(
    store: RecruitingStore,
    athlete_id: str,
    reason: Union[TriggerReason, str],
    interaction_school_id: Optional[str] = None,
    engine: Optional[SuggestionEngine] = None,
    now: Optional[datetime] = None,
) -> TriggerResult:
    """
    Re-evaluate an athlete's suggestions and surface new ones.

    For `interaction_logged`, unresolved log_interaction suggestions for the
    contacted school are completed first; an interaction with no school
    completes nothing. Generation always finishes before
    surfacing, so the athlete never sees a partial set.

    Args:
        store: Persistence
        athlete_id: Athlete to evaluate
        reason: profile_change, interaction_logged or daily_refresh
        interaction_school_id: School of the interaction just logged
        engine: Engine override (rules, settings)
        now: Evaluation time

    Returns:
        TriggerResult with generated/surfaced counts
    """
    reason = TriggerReason(reason)
    now = _now(now)
    engine = engine or SuggestionEngine(store)

    if reason == TriggerReason.INTERACTION_LOGGED and interaction_school_id:
        engine.complete_for_action(
            athlete_id, "log_interaction", related_school_id=interaction_school_id, now=now
        )

    context = build_rule_context(store, athlete_id, now)
    generation = engine.generate_suggestions(context)
    surfaced = engine.surface_pending(athlete_id, now=now)

    logger.info(
        f"🔔 Suggestion update for athlete {athlete_id} ({reason.value}): "
        f"{len(generation.created)} generated, {surfaced} surfaced"
    )
    return TriggerResult(generated=len(generation.created), surfaced=surfaced, reason=reason.value)


def run_daily_refresh(
    store: RecruitingStore,
    engine: Optional[SuggestionEngine] = None,
    now: Optional[datetime] = None,
) -> BatchResult:
    """
    Re-evaluate suggestions for every athlete.

    Each athlete is processed independently; a failure is logged, recorded
    and does not stop the others. Safe to re-run: existing unresolved
    suggestions are refreshed rather than duplicated.
    """
    now = _now(now)
    engine = engine or SuggestionEngine(store)
    athlete_ids = store.list_athlete_ids()
    result = BatchResult(total=len(athlete_ids))

    logger.info(f"🚀 Daily suggestion refresh for {len(athlete_ids)} athlete(s)")
    for athlete_id in athlete_ids:
        try:
            trigger_suggestion_update(store, athlete_id, TriggerReason.DAILY_REFRESH, engine=engine, now=now)
            result.updated += 1
        except Exception as e:
            store.rollback()
            logger.exception(f"Daily refresh failed for athlete {athlete_id}")
            result.failed += 1
            result.failures[athlete_id] = str(e)

    logger.info(f"✅ Daily refresh complete: {result.updated} updated, {result.failed} failed")
    return result


def log_interaction(
    store: RecruitingStore,
    interaction: Interaction,
    engine: Optional[SuggestionEngine] = None,
    now: Optional[datetime] = None,
) -> TriggerResult:
    """Store an interaction, then complete and regenerate suggestions."""
    if store.get_athlete(interaction.athlete_id) is None:
        raise AthleteProfileMissingError(interaction.athlete_id)
    store.add_interaction(interaction)
    return trigger_suggestion_update(
        store,
        interaction.athlete_id,
        TriggerReason.INTERACTION_LOGGED,
        interaction_school_id=interaction.school_id,
        engine=engine,
        now=now,
    )


def new_interaction_id() -> str:
    return str(uuid.uuid4())


# =============================================================================
# SCORING
# =============================================================================

def recalculate_status(store: RecruitingStore, athlete_id: str, now: Optional[datetime] = None) -> StatusReport:
    """Recompute and store an athlete's status score."""
    now = _now(now)
    athlete = store.get_athlete(athlete_id)
    if athlete is None:
        raise AthleteProfileMissingError(athlete_id)

    schools = store.list_schools(athlete_id)
    inputs = build_status_inputs(
        athlete,
        store.list_tasks(),
        store.list_athlete_tasks(athlete_id),
        store.list_interactions(athlete_id),
        schools,
        now,
    )
    committed = any(s.status == "committed" for s in schools)
    phase = phase_for_grade(resolve_grade_level(athlete, now), committed=committed)

    report = build_status_report(inputs, phase)
    store.save_status_score(athlete_id, report.result)

    logger.info(f"📊 Status score for athlete {athlete_id}: {report.result.score} ({report.result.label})")
    return report


def recalculate_fit_scores(
    store: RecruitingStore,
    athlete_id: str,
    cache: Optional[SchoolMatchCache] = None,
) -> FitRecalculationResult:
    """
    Recompute fit scores for all of an athlete's schools.

    When a matching cache is given, missing divisions are filled in first.
    """
    athlete = store.get_athlete(athlete_id)
    schools = store.list_schools(athlete_id) if athlete is not None else []

    if cache is not None:
        schools = [_resolve_division(store, cache, school) for school in schools]

    def save(school: TargetSchool, fit: FitScoreResult) -> None:
        try:
            store.save_fit_score(school, fit)
        except Exception:
            store.rollback()
            raise

    result = recalculate_all_fit_scores(athlete, schools, save=save, athlete_id=athlete_id)
    logger.info(f"🎯 Fit scores for athlete {athlete_id}: {result.updated} updated, {result.failed} failed")
    return result


def _resolve_division(store: RecruitingStore, cache: SchoolMatchCache, school: TargetSchool) -> TargetSchool:
    resolved = resolve_school_division(cache, school)
    if resolved is not school:
        store.save_school_division(resolved)
    return resolved


def score_single_school(store: RecruitingStore, athlete_id: str, school_id: str) -> FitScoreResult:
    """Score and store the fit for one target school."""
    athlete = store.get_athlete(athlete_id)
    if athlete is None:
        raise AthleteProfileMissingError(athlete_id)
    school = store.get_school(school_id)
    if school is None or school.athlete_id != athlete_id:
        raise SchoolNotFoundError(school_id)

    fit = score_school_fit(athlete, school)
    store.save_fit_score(school, fit)
    return fit


# =============================================================================
# TASKS
# =============================================================================

def task_graph_for(store: RecruitingStore, athlete_id: str) -> TaskDependencyGraph:
    return TaskDependencyGraph(
        store.list_tasks(),
        store.list_athlete_tasks(athlete_id),
        athlete_id,
        persist=store.save_athlete_task,
    )


def update_task_status(store: RecruitingStore, athlete_id: str, task_id: str, status: str) -> AthleteTaskStatus:
    """Validated task transition; nothing is written when it is rejected."""
    return task_graph_for(store, athlete_id).update_status(task_id, status)


def locked_task_ids(store: RecruitingStore, athlete_id: str) -> List[str]:
    return sorted(task_graph_for(store, athlete_id).locked_task_ids())


def task_checklist(store: RecruitingStore, athlete_id: str, grade_level: Optional[int] = None) -> List[TaskWithStatus]:
    """Catalog tasks with the athlete's status and lock state, optionally for one grade."""
    return task_graph_for(store, athlete_id).tasks_with_status(grade_level)
