"""
Suggestion Engine

Runs the rule catalog against a RuleContext and manages the resulting
suggestion records.

Lifecycle:
1. Evaluation - every rule runs in isolation; a failing rule is logged and skipped
2. Generation - payloads become pending suggestions, one unresolved per rule type
3. Surfacing - pending suggestions become visible, highest urgency first
4. Resolution - dismiss/complete, directly or through the underlying action

Repeats are governed by the configured cooldowns: a dismissed rule type
stays quiet for `dismiss_cooldown_days`, then returns only if the rule's
`should_re_evaluate` agrees; a completed one stays quiet for
`recreate_window_days`.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Protocol, Sequence, Tuple

from recruiting.config import Settings, get_settings

from .constants import URGENCY_RANK
from .contracts import (
    GenerationResult,
    RuleContext,
    Suggestion,
    SuggestionData,
    SuggestionPage,
)
from .dates import days_between, ensure_utc
from .errors import SuggestionNotFoundError
from .rules import DEFAULT_RULES, Rule

logger = logging.getLogger(__name__)


class SuggestionStore(Protocol):
    """Persistence the engine needs for suggestion records."""

    def list_suggestions(self, athlete_id: str) -> List[Suggestion]: ...

    def get_suggestion(self, suggestion_id: str) -> Optional[Suggestion]: ...

    def save_suggestion(self, suggestion: Suggestion) -> Suggestion: ...


def _surface_order(suggestion: Suggestion):
    return (-URGENCY_RANK.get(suggestion.urgency, 0), ensure_utc(suggestion.created_at))


def _targets(suggestion: Suggestion, school_id: Optional[str], task_id: Optional[str]) -> bool:
    # An action with no school or task satisfies nothing
    if school_id is None and task_id is None:
        return False
    if suggestion.related_school_id is None and suggestion.related_task_id is None:
        return True
    return (
        (school_id is not None and suggestion.related_school_id == school_id)
        or (task_id is not None and suggestion.related_task_id == task_id)
    )


def _latest(suggestions: List[Suggestion], attr: str) -> Optional[Suggestion]:
    dated = [s for s in suggestions if getattr(s, attr) is not None]
    if not dated:
        return None
    return max(dated, key=lambda s: ensure_utc(getattr(s, attr)))


class SuggestionEngine:
    """
    Orchestrates rule evaluation and the suggestion lifecycle for athletes.

    Args:
        store: Suggestion persistence
        rules: Rule catalog, DEFAULT_RULES when omitted
        settings: Cooldowns and surfacing limit, from the environment when omitted
    """

    def __init__(
        self,
        store: SuggestionStore,
        rules: Optional[Sequence[Rule]] = None,
        settings: Optional[Settings] = None,
    ):
        self.store = store
        self.rules: List[Rule] = list(rules) if rules is not None else list(DEFAULT_RULES)
        self.settings = settings or get_settings()

    def add_rule(self, rule: Rule) -> None:
        self.rules.append(rule)

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def _evaluate_rules(self, context: RuleContext) -> List[Tuple[Rule, SuggestionData]]:
        results = []
        for rule in self.rules:
            try:
                payload = rule.evaluate(context)
            except Exception:
                logger.exception(f"Rule {rule.id} failed for athlete {context.athlete_id}")
                continue
            if payload is not None:
                results.append((rule, payload))
        return results

    def evaluate_all(self, context: RuleContext) -> List[SuggestionData]:
        """Run every rule; returns the non-null payloads in catalog order."""
        return [payload for _, payload in self._evaluate_rules(context)]

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def _blocked(self, rule: Rule, history: List[Suggestion], context: RuleContext) -> Tuple[bool, Optional[Suggestion]]:
        """
        Decide whether resolved history blocks a new instance.

        Returns:
            (blocked, previous dismissed suggestion to link a reappearance to)
        """
        now = context.now
        last_completed = _latest([s for s in history if s.completed], "completed_at")
        if last_completed and days_between(last_completed.completed_at, now) < self.settings.recreate_window_days:
            return True, None

        last_dismissed = _latest([s for s in history if s.dismissed], "dismissed_at")
        if last_dismissed is None:
            return False, None
        if days_between(last_dismissed.dismissed_at, now) < self.settings.dismiss_cooldown_days:
            return True, None

        try:
            allowed = rule.should_re_evaluate(last_dismissed, context)
        except Exception:
            logger.exception(f"Rule {rule.id} re-evaluation check failed for athlete {context.athlete_id}")
            allowed = False
        return (not allowed), last_dismissed

    def generate_suggestions(self, context: RuleContext) -> GenerationResult:
        """
        Evaluate all rules and persist their results without duplicates.

        An unresolved suggestion of the same rule type is refreshed in place;
        otherwise a new pending suggestion is created unless a recent
        dismissal or completion blocks it.
        """
        now = ensure_utc(context.now)
        existing = self.store.list_suggestions(context.athlete_id)
        result = GenerationResult()

        for rule, payload in self._evaluate_rules(context):
            same_type = [s for s in existing if s.rule_type == payload.rule_type]
            unresolved = next((s for s in same_type if s.is_unresolved), None)

            if unresolved is not None:
                if (
                    unresolved.urgency != payload.urgency
                    or unresolved.message != payload.message
                    or unresolved.related_school_id != payload.related_school_id
                ):
                    unresolved.urgency = payload.urgency
                    unresolved.message = payload.message
                    unresolved.related_school_id = payload.related_school_id
                    unresolved.updated_at = now
                    self.store.save_suggestion(unresolved)
                result.refreshed.append(unresolved.id)
                continue

            blocked, previous = self._blocked(rule, same_type, context)
            if blocked:
                result.skipped.append(payload.rule_type)
                continue

            suggestion = Suggestion(
                id=str(uuid.uuid4()),
                athlete_id=context.athlete_id,
                rule_type=payload.rule_type,
                urgency=payload.urgency,
                message=payload.message,
                action_type=payload.action_type,
                related_school_id=payload.related_school_id,
                related_task_id=payload.related_task_id,
                pending_surface=True,
                condition_snapshot=rule.create_condition_snapshot(context, payload.related_school_id),
                reappeared=previous is not None,
                previous_suggestion_id=previous.id if previous else None,
                created_at=now,
                updated_at=now,
            )
            suggestion = self.store.save_suggestion(suggestion)
            existing.append(suggestion)
            result.created.append(suggestion.id)

        logger.info(
            f"Generated suggestions for athlete {context.athlete_id}: "
            f"{len(result.created)} created, {len(result.refreshed)} refreshed, {len(result.skipped)} skipped"
        )
        return result

    # -------------------------------------------------------------------------
    # Surfacing
    # -------------------------------------------------------------------------

    def _pending(self, athlete_id: str) -> List[Suggestion]:
        pending = [
            s for s in self.store.list_suggestions(athlete_id)
            if s.is_unresolved and s.pending_surface
        ]
        return sorted(pending, key=_surface_order)

    def _visible(self, athlete_id: str) -> List[Suggestion]:
        visible = [s for s in self.store.list_suggestions(athlete_id) if s.is_visible]
        return sorted(visible, key=_surface_order)

    def _surface(self, suggestions: List[Suggestion], now: datetime) -> int:
        for suggestion in suggestions:
            suggestion.pending_surface = False
            suggestion.surfaced_at = now
            suggestion.updated_at = now
            self.store.save_suggestion(suggestion)
        return len(suggestions)

    def surface_pending(self, athlete_id: str, limit: Optional[int] = None, now: Optional[datetime] = None) -> int:
        """
        Surface pending suggestions until `limit` are visible.

        Returns:
            Number of suggestions surfaced
        """
        limit = self.settings.surface_limit if limit is None else limit
        now = ensure_utc(now) or datetime.now(timezone.utc)
        slots = limit - len(self._visible(athlete_id))
        if slots <= 0:
            return 0
        return self._surface(self._pending(athlete_id)[:slots], now)

    def surface_more(self, athlete_id: str, count: Optional[int] = None, now: Optional[datetime] = None) -> int:
        """Explicitly surface the next `count` pending suggestions."""
        count = self.settings.surface_limit if count is None else count
        now = ensure_utc(now) or datetime.now(timezone.utc)
        return self._surface(self._pending(athlete_id)[:max(0, count)], now)

    def active_suggestions(self, athlete_id: str, limit: Optional[int] = None) -> SuggestionPage:
        """Visible suggestions by urgency, plus counts of what is left."""
        limit = self.settings.surface_limit if limit is None else limit
        visible = self._visible(athlete_id)
        pending_count = len(self._pending(athlete_id))
        return SuggestionPage(
            suggestions=visible[:limit],
            more_count=max(0, len(visible) - limit) + pending_count,
            pending_count=pending_count,
        )

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def _get(self, suggestion_id: str) -> Suggestion:
        suggestion = self.store.get_suggestion(suggestion_id)
        if suggestion is None:
            raise SuggestionNotFoundError(suggestion_id)
        return suggestion

    def dismiss(self, suggestion_id: str, now: Optional[datetime] = None) -> Suggestion:
        now = ensure_utc(now) or datetime.now(timezone.utc)
        suggestion = self._get(suggestion_id)
        suggestion.dismissed = True
        suggestion.dismissed_at = now
        suggestion.updated_at = now
        return self.store.save_suggestion(suggestion)

    def complete(self, suggestion_id: str, now: Optional[datetime] = None) -> Suggestion:
        now = ensure_utc(now) or datetime.now(timezone.utc)
        suggestion = self._get(suggestion_id)
        suggestion.completed = True
        suggestion.completed_at = now
        suggestion.updated_at = now
        return self.store.save_suggestion(suggestion)

    def complete_for_action(
        self,
        athlete_id: str,
        action_type: str,
        related_school_id: Optional[str] = None,
        related_task_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> List[str]:
        """
        Complete unresolved suggestions the athlete has just acted on.

        A suggestion matches when its action type matches and it either
        targets nothing specific or targets the school/task acted on.
        Nothing is completed when neither a school nor a task is given, and
        a task-bound suggestion is never completed by a school action.

        Returns:
            Ids of the completed suggestions
        """
        now = ensure_utc(now) or datetime.now(timezone.utc)
        completed = []
        for suggestion in self.store.list_suggestions(athlete_id):
            if not suggestion.is_unresolved or suggestion.action_type != action_type:
                continue
            if not _targets(suggestion, related_school_id, related_task_id):
                continue
            suggestion.completed = True
            suggestion.completed_at = now
            suggestion.updated_at = now
            self.store.save_suggestion(suggestion)
            completed.append(suggestion.id)
        return completed
