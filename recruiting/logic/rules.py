"""
Suggestion Rules

Each rule inspects an immutable RuleContext and returns at most one
SuggestionData, or None when its condition is not met. Rules are
independent of each other and of evaluation order. Missing grade level,
empty lists and absent optional fields resolve to None; rules never raise
for missing data.

Adding a rule means adding a Rule subclass and listing it in DEFAULT_RULES.
"""

from typing import Any, Dict, List, Optional, Tuple

from .constants import (
    ACTIVE_RECRUITING_STATUSES,
    EVENT_FOLLOW_UP_DAYS,
    FORMAL_OUTREACH_GAP_DAYS,
    GAP_GROWTH_RESURFACE_DAYS,
    INTERACTION_GAP_DAYS,
    INTERACTION_GAP_HIGH_DAYS,
    NCAA_DIVISIONS_REQUIRING_REGISTRATION,
    NCAA_REGISTRATION_TASK_ID,
    NO_CONTACT_DAYS,
    OFFICIAL_VISIT_TARGET,
    PORTFOLIO_UNLIKELY_SCORE,
    PRIORITY_REMINDER_DAYS,
    PRIORITY_TIERS,
    SCHOOL_LIST_TARGET,
    SHOWCASE_WINDOW_MONTHS,
    VISIT_KEYWORDS,
    TaskStatus,
    Urgency,
)
from .contracts import RuleContext, Suggestion, SuggestionData, TargetSchool
from .dates import days_between, ensure_utc, subtract_months


# =============================================================================
# HELPERS
# =============================================================================

_DIVISION_ALIASES = {
    "di": "D1", "d1": "D1", "division i": "D1", "division 1": "D1",
    "dii": "D2", "d2": "D2", "division ii": "D2", "division 2": "D2",
    "diii": "D3", "d3": "D3", "division iii": "D3", "division 3": "D3",
}


def normalize_division(division: Optional[str]) -> Optional[str]:
    """Map "DI"/"D1"/"Division I" style labels onto D1/D2/D3."""
    if not division:
        return None
    return _DIVISION_ALIASES.get(division.strip().lower(), division.strip().upper())


def priority_schools(context: RuleContext, tiers=PRIORITY_TIERS) -> List[TargetSchool]:
    return [s for s in context.schools if s.priority in tiers]


def days_since_contact(context: RuleContext, school_id: str) -> int:
    """Days since the latest interaction with a school, NO_CONTACT_DAYS if none."""
    dates = [ensure_utc(i.occurred_at) for i in context.interactions if i.school_id == school_id]
    if not dates:
        return NO_CONTACT_DAYS
    return days_between(max(dates), context.now)


def most_overdue(context: RuleContext, schools: List[TargetSchool], min_days: int) -> Optional[Tuple[TargetSchool, int]]:
    """The school with the largest contact gap at or above `min_days`; first wins ties."""
    best: Optional[Tuple[TargetSchool, int]] = None
    for school in schools:
        gap = days_since_contact(context, school.id)
        if gap >= min_days and (best is None or gap > best[1]):
            best = (school, gap)
    return best


# =============================================================================
# RULE BASE
# =============================================================================

class Rule:
    """
    One suggestion rule. Subclasses set `id` (used as the rule_type),
    `name` and `description`, and implement `evaluate`.
    """
    id: str = ""
    name: str = ""
    description: str = ""

    def evaluate(self, context: RuleContext) -> Optional[SuggestionData]:
        raise NotImplementedError

    def create_condition_snapshot(self, context: RuleContext, school_id: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """State stored with a new suggestion, compared on resurfacing."""
        return None

    def should_re_evaluate(self, dismissed: Suggestion, context: RuleContext) -> bool:
        """Whether a dismissed suggestion of this rule may be recreated."""
        return True

    def _suggest(self, urgency: Urgency, message: str, action_type: str, **related) -> SuggestionData:
        return SuggestionData(
            rule_type=self.id,
            urgency=urgency,
            message=message,
            action_type=action_type,
            **related,
        )


# =============================================================================
# PHASE-CRITICAL RULES
# =============================================================================

class NcaaRegistrationRule(Rule):
    id = "ncaa-registration"
    name = "NCAA Eligibility Center Registration"
    description = "Junior with Division I/II schools who has not registered"

    def evaluate(self, context):
        if context.grade_level != 11:
            return None

        divisions = {normalize_division(s.division) for s in context.schools}
        if not divisions.intersection(NCAA_DIVISIONS_REQUIRING_REGISTRATION):
            return None

        registered = any(
            at.task_id == NCAA_REGISTRATION_TASK_ID and at.status == TaskStatus.COMPLETED
            for at in context.athlete_tasks
        )
        if registered:
            return None

        return self._suggest(
            Urgency.HIGH,
            "Register with the NCAA Eligibility Center. Division I and II schools on "
            "your list can't offer you until you're registered.",
            "log_interaction",
            related_task_id=NCAA_REGISTRATION_TASK_ID,
        )


class SchoolListRule(Rule):
    id = "school-list-building"
    name = "Build Your School List"
    description = "Sophomore or junior tracking fewer than 20 schools"

    def evaluate(self, context):
        grade = context.grade_level
        if grade not in (10, 11):
            return None

        count = len(context.schools)
        if count >= SCHOOL_LIST_TARGET:
            return None

        plural = "" if count == 1 else "s"
        return self._suggest(
            Urgency.HIGH if grade == 11 else Urgency.MEDIUM,
            f"You have {count} school{plural} on your list. Aim for at least "
            f"{SCHOOL_LIST_TARGET} to keep your options open.",
            "add_school",
        )


class OfficialVisitRule(Rule):
    id = "official-visit"
    name = "Schedule Official Visits"
    description = "Junior or senior with priority schools and fewer than 2 visits"

    def evaluate(self, context):
        grade = context.grade_level
        if grade is None or grade < 11:
            return None
        if not priority_schools(context):
            return None

        visits = sum(
            1 for i in context.interactions
            if i.interaction_type
            and any(keyword in i.interaction_type.lower() for keyword in VISIT_KEYWORDS)
        )
        if visits >= OFFICIAL_VISIT_TARGET:
            return None

        return self._suggest(
            Urgency.HIGH if grade >= 12 else Urgency.MEDIUM,
            f"You've logged {visits} of {OFFICIAL_VISIT_TARGET} recommended visits. "
            "Schedule visits with your top priority schools.",
            "log_interaction",
        )


class FormalOutreachRule(Rule):
    id = "formal-outreach"
    name = "Formal Coach Outreach"
    description = "Priority school not contacted in over 30 days"

    def evaluate(self, context):
        grade = context.grade_level
        if grade is None or grade < 11:
            return None

        schools = priority_schools(context)
        if not schools:
            return None

        # Any single school over the threshold fires, not the average gap
        overdue = most_overdue(context, schools, FORMAL_OUTREACH_GAP_DAYS + 1)
        if overdue is None:
            return None

        school, gap = overdue
        if gap >= NO_CONTACT_DAYS:
            message = f"You haven't contacted {school.name} yet. Send the coaching staff a formal introduction."
        else:
            message = f"It's been {gap} days since you contacted {school.name}. Send the coaching staff a formal update."

        return self._suggest(
            Urgency.HIGH if grade >= 12 else Urgency.MEDIUM,
            message,
            "log_interaction",
            related_school_id=school.id,
        )


class ShowcaseAttendanceRule(Rule):
    id = "showcase-attendance"
    name = "Attend a Showcase"
    description = "Sophomore with no event in the last 6 months"

    def evaluate(self, context):
        if context.grade_level != 10:
            return None

        cutoff = subtract_months(ensure_utc(context.now), SHOWCASE_WINDOW_MONTHS)
        dates = [ensure_utc(e.start_date) for e in context.events if e.start_date is not None]
        if dates and max(dates) >= cutoff:
            return None

        return self._suggest(
            Urgency.MEDIUM,
            "You haven't been to a showcase in 6 months. Find one where your target schools recruit.",
            "log_interaction",
        )


# =============================================================================
# ONGOING RULES
# =============================================================================

class InteractionGapRule(Rule):
    id = "interaction-gap"
    name = "Interaction Gap Detected"
    description = "Priority school has not been contacted in 21+ days"

    def _candidates(self, context: RuleContext) -> List[TargetSchool]:
        return [s for s in priority_schools(context) if s.status in ACTIVE_RECRUITING_STATUSES]

    def evaluate(self, context):
        overdue = most_overdue(context, self._candidates(context), INTERACTION_GAP_DAYS)
        if overdue is None:
            return None

        school, gap = overdue
        if gap >= NO_CONTACT_DAYS:
            message = f"You haven't contacted {school.name} yet. Reach out to get on their radar!"
        else:
            message = f"It's been {gap} days since you contacted {school.name}. Stay on their radar!"

        return self._suggest(
            Urgency.HIGH if gap >= INTERACTION_GAP_HIGH_DAYS else Urgency.MEDIUM,
            message,
            "log_interaction",
            related_school_id=school.id,
        )

    def create_condition_snapshot(self, context, school_id=None):
        school = next((s for s in context.schools if s.id == school_id), None)
        if school is None:
            return None
        return {
            "days_since_contact": days_since_contact(context, school.id),
            "school_priority": school.priority,
            "school_status": school.status,
        }

    def should_re_evaluate(self, dismissed, context):
        if dismissed.dismissed_at is not None:
            if days_between(dismissed.dismissed_at, context.now) < GAP_GROWTH_RESURFACE_DAYS:
                return False

        previous = dismissed.condition_snapshot
        if not previous:
            return True

        current = self.create_condition_snapshot(context, dismissed.related_school_id)
        if current is None:
            return False

        gap_growth = current["days_since_contact"] - previous.get("days_since_contact", 0)
        if gap_growth >= GAP_GROWTH_RESURFACE_DAYS:
            return True
        return current["school_priority"] != previous.get("school_priority")


class MissingVideoRule(Rule):
    id = "missing-video"
    name = "Missing Highlight Video"
    description = "Sophomore or beyond without a highlight video"

    def evaluate(self, context):
        grade = context.grade_level
        if grade is None or grade < 10 or context.videos:
            return None
        return self._suggest(
            Urgency.MEDIUM,
            "Create a highlight video to showcase your skills to coaches",
            "add_video",
        )


class EventFollowUpRule(Rule):
    id = "event-follow-up"
    name = "Event Follow-Up Needed"
    description = "Attended event but no follow-up interaction logged"

    def evaluate(self, context):
        for event in context.events:
            if not event.attended or event.start_date is None:
                continue
            event_date = ensure_utc(event.start_date)
            days_since = days_between(event_date, context.now)
            if not 0 <= days_since <= EVENT_FOLLOW_UP_DAYS:
                continue

            followed_up = any(
                i.event_id == event.id or ensure_utc(i.occurred_at) > event_date
                for i in context.interactions
            )
            if not followed_up:
                return self._suggest(
                    Urgency.MEDIUM,
                    f"Follow up on {event.name} with a thank-you email to coaches you met",
                    "log_interaction",
                    related_school_id=event.school_id,
                )
        return None


class VideoLinkHealthRule(Rule):
    id = "video-link-health"
    name = "Broken Video Link"
    description = "Video URL is not accessible"

    def evaluate(self, context):
        for video in context.videos:
            if video.health_status == "broken":
                title = video.title or "highlight video"
                return self._suggest(
                    Urgency.HIGH,
                    f'Your video "{title}" link is broken. Update it immediately.',
                    "update_video",
                )
        return None


class PortfolioHealthRule(Rule):
    id = "portfolio-health"
    name = "Portfolio Health Issue"
    description = "All schools are unlikely fits"

    def evaluate(self, context):
        if not context.schools:
            return None
        if all((s.fit_score or 0) < PORTFOLIO_UNLIKELY_SCORE for s in context.schools):
            return self._suggest(
                Urgency.HIGH,
                "Your school list has no strong matches. Add schools that align better with your profile.",
                "add_school",
            )
        return None


class PrioritySchoolReminderRule(Rule):
    id = "priority-school-reminder"
    name = "Priority School Check-In"
    description = "Top priority school needs attention"

    def evaluate(self, context):
        overdue = most_overdue(context, priority_schools(context, ("A",)), PRIORITY_REMINDER_DAYS)
        if overdue is None:
            return None
        school, _ = overdue
        return self._suggest(
            Urgency.HIGH,
            f"{school.name} is your top priority. Check in with coaches this week.",
            "log_interaction",
            related_school_id=school.id,
        )


# Phase-critical rules first
DEFAULT_RULES: List[Rule] = [
    NcaaRegistrationRule(),
    SchoolListRule(),
    OfficialVisitRule(),
    FormalOutreachRule(),
    ShowcaseAttendanceRule(),
    InteractionGapRule(),
    MissingVideoRule(),
    EventFollowUpRule(),
    VideoLinkHealthRule(),
    PortfolioHealthRule(),
    PrioritySchoolReminderRule(),
]
