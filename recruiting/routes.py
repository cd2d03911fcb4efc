"""
Recruiting API Routes

Exposes status/fit scoring, checklist task transitions, suggestions and the
scheduled batch refresh via REST API under /recruiting.
"""

import secrets
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from db import get_session
from .config import Settings, get_settings
from .logic.adapter import RecruitingStore
from .logic.constants import TaskStatus, TriggerReason
from .logic.contracts import Interaction
from .logic.engine import SuggestionEngine
from .logic.errors import (
    RecruitingError,
    SchoolNotFoundError,
    SuggestionNotFoundError,
    TaskNotFoundError,
)
from .logic.runner import (
    locked_task_ids,
    log_interaction,
    new_interaction_id,
    recalculate_fit_scores,
    recalculate_status,
    run_daily_refresh,
    score_single_school,
    task_checklist,
    trigger_suggestion_update,
    update_task_status,
)
from .logic.school_matching import SchoolMatchCache


router = APIRouter(prefix="/recruiting", tags=["recruiting"])


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class TaskStatusUpdate(BaseModel):
    """Request body for a checklist task transition."""
    status: TaskStatus = Field(..., description="not_started, in_progress, completed or skipped")


class InteractionCreate(BaseModel):
    """Request body for logging a coach/school interaction."""
    school_id: Optional[str] = None
    event_id: Optional[str] = None
    interaction_type: Optional[str] = Field(default=None, examples=["email"])
    direction: Optional[str] = Field(default=None, examples=["outbound"])
    sentiment: Optional[str] = Field(default=None, examples=["positive"])
    occurred_at: Optional[datetime] = None


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_store(db: Session = Depends(get_session)) -> RecruitingStore:
    return RecruitingStore(db)


def get_engine(
    store: RecruitingStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> SuggestionEngine:
    return SuggestionEngine(store, settings=settings)


def get_match_cache(request: Request) -> SchoolMatchCache:
    """The application's matching cache, created on first use."""
    cache = getattr(request.app.state, "match_cache", None)
    if cache is None:
        cache = SchoolMatchCache()
        request.app.state.match_cache = cache
    return cache


def _http_error(error: RecruitingError) -> HTTPException:
    if isinstance(error, (TaskNotFoundError, SuggestionNotFoundError, SchoolNotFoundError)):
        return HTTPException(status_code=404, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))


# =============================================================================
# SCORING
# =============================================================================

@router.post("/athletes/{athlete_id}/status/recalculate", summary="Recalculate status score")
def recalculate_status_score(athlete_id: str, store: RecruitingStore = Depends(get_store)):
    """
    Recompute the athlete's on-track status from tasks, interactions,
    coach interest and academics, and store it.
    """
    try:
        report = recalculate_status(store, athlete_id)
    except RecruitingError as e:
        raise _http_error(e)

    return {
        "score": report.result.score,
        "label": report.result.label,
        "color": report.result.color,
        "breakdown": report.result.breakdown,
        "inputs": report.inputs.model_dump(),
        "advice": report.advice,
        "next_actions": report.next_actions,
        "phase": report.phase,
    }


@router.post("/athletes/{athlete_id}/fit-scores/recalculate-all", summary="Recalculate all fit scores")
def recalculate_all_fit(
    athlete_id: str,
    store: RecruitingStore = Depends(get_store),
    cache: SchoolMatchCache = Depends(get_match_cache),
):
    try:
        result = recalculate_fit_scores(store, athlete_id, cache=cache)
    except RecruitingError as e:
        raise _http_error(e)
    return {
        "success": result.success,
        "updated": result.updated,
        "failed": result.failed,
        "message": result.message,
    }


@router.post("/athletes/{athlete_id}/schools/{school_id}/fit-score", summary="Recalculate one school's fit score")
def recalculate_school_fit(athlete_id: str, school_id: str, store: RecruitingStore = Depends(get_store)):
    try:
        return score_single_school(store, athlete_id, school_id)
    except RecruitingError as e:
        raise _http_error(e)


# =============================================================================
# TASKS
# =============================================================================

@router.patch("/athletes/{athlete_id}/tasks/{task_id}", summary="Update a checklist task status")
def patch_task_status(
    athlete_id: str,
    task_id: str,
    body: TaskStatusUpdate,
    store: RecruitingStore = Depends(get_store),
):
    """
    Move a task to a new status. Completing a task whose prerequisites are
    not all completed returns 400 naming every open prerequisite.
    """
    if store.get_athlete(athlete_id) is None:
        raise HTTPException(status_code=404, detail=f"Athlete {athlete_id} not found")
    try:
        return update_task_status(store, athlete_id, task_id, body.status)
    except RecruitingError as e:
        raise _http_error(e)


@router.get("/athletes/{athlete_id}/tasks", summary="List checklist tasks with lock state")
def get_tasks(
    athlete_id: str,
    grade_level: Optional[int] = Query(default=None, ge=9, le=12),
    store: RecruitingStore = Depends(get_store),
):
    return task_checklist(store, athlete_id, grade_level)


@router.get("/athletes/{athlete_id}/tasks/locked", summary="List locked task ids")
def get_locked_tasks(athlete_id: str, store: RecruitingStore = Depends(get_store)):
    return {"locked_task_ids": locked_task_ids(store, athlete_id)}


# =============================================================================
# SUGGESTIONS
# =============================================================================

@router.post("/athletes/{athlete_id}/suggestions/evaluate", summary="Re-evaluate suggestions")
def evaluate_suggestions(
    athlete_id: str,
    store: RecruitingStore = Depends(get_store),
    engine: SuggestionEngine = Depends(get_engine),
):
    try:
        return trigger_suggestion_update(store, athlete_id, TriggerReason.PROFILE_CHANGE, engine=engine)
    except RecruitingError as e:
        raise _http_error(e)


@router.get("/athletes/{athlete_id}/suggestions", summary="Get visible suggestions")
def get_suggestions(
    athlete_id: str,
    limit: int = Query(default=3, ge=1, le=20),
    engine: SuggestionEngine = Depends(get_engine),
):
    return engine.active_suggestions(athlete_id, limit=limit)


@router.post("/athletes/{athlete_id}/suggestions/surface-more", summary="Surface more suggestions")
def surface_more_suggestions(
    athlete_id: str,
    count: Optional[int] = Query(default=None, ge=1, le=20),
    engine: SuggestionEngine = Depends(get_engine),
):
    surfaced = engine.surface_more(athlete_id, count)
    return {"surfaced": surfaced}


@router.post("/suggestions/{suggestion_id}/dismiss", summary="Dismiss a suggestion")
def dismiss_suggestion(suggestion_id: str, engine: SuggestionEngine = Depends(get_engine)):
    try:
        return engine.dismiss(suggestion_id)
    except RecruitingError as e:
        raise _http_error(e)


@router.post("/suggestions/{suggestion_id}/complete", summary="Complete a suggestion")
def complete_suggestion(suggestion_id: str, engine: SuggestionEngine = Depends(get_engine)):
    try:
        return engine.complete(suggestion_id)
    except RecruitingError as e:
        raise _http_error(e)


@router.post("/athletes/{athlete_id}/interactions", summary="Log an interaction")
def create_interaction(
    athlete_id: str,
    body: InteractionCreate,
    store: RecruitingStore = Depends(get_store),
    engine: SuggestionEngine = Depends(get_engine),
):
    """Log a contact and complete the suggestions it satisfies."""
    interaction = Interaction(
        id=new_interaction_id(),
        athlete_id=athlete_id,
        school_id=body.school_id,
        event_id=body.event_id,
        interaction_type=body.interaction_type,
        direction=body.direction,
        sentiment=body.sentiment,
        occurred_at=body.occurred_at or datetime.now(timezone.utc),
    )
    try:
        trigger = log_interaction(store, interaction, engine=engine)
    except RecruitingError as e:
        raise _http_error(e)
    return {"interaction_id": interaction.id, "suggestions": trigger}


# =============================================================================
# BATCH
# =============================================================================

@router.post("/batch/daily-refresh", summary="Re-evaluate suggestions for all athletes")
def daily_refresh(
    authorization: Optional[str] = Header(default=None),
    store: RecruitingStore = Depends(get_store),
    engine: SuggestionEngine = Depends(get_engine),
    settings: Settings = Depends(get_settings),
):
    """Scheduler entry point. Requires `Authorization: Bearer <CRON_SECRET>`."""
    expected = settings.cron_secret
    if not expected or not authorization or not secrets.compare_digest(authorization, f"Bearer {expected}"):
        raise HTTPException(status_code=401, detail="Unauthorized")

    result = run_daily_refresh(store, engine=engine)
    return {"total": result.total, "updated": result.updated, "failed": result.failed}


# =============================================================================
# LOOKUP + HEALTH
# =============================================================================

@router.get("/schools/lookup", summary="Look up a school's NCAA division")
def lookup_school(name: str = Query(..., min_length=1), cache: SchoolMatchCache = Depends(get_match_cache)):
    result = cache.lookup(name)
    if result is None:
        raise HTTPException(status_code=404, detail=f"No NCAA match for '{name}'")
    return result


@router.get("/health", summary="Recruiting engine health check")
def health_check():
    """Check if the recruiting engine is operational."""
    return {"status": "ok", "engine": "recruiting", "version": "1.0.0"}
