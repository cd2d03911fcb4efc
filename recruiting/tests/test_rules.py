"""
Tests for the suggestion rule catalog.

Every context is built at a fixed `now` so day counts are exact.
"""

from datetime import datetime, timedelta, timezone

from recruiting.logic.contracts import (
    AthleteProfile,
    AthleteTaskStatus,
    Event,
    FitScoreSnapshot,
    Interaction,
    RuleContext,
    Suggestion,
    TargetSchool,
    Video,
)
from recruiting.logic.dates import subtract_months
from recruiting.logic.rules import (
    DEFAULT_RULES,
    EventFollowUpRule,
    FormalOutreachRule,
    InteractionGapRule,
    MissingVideoRule,
    NcaaRegistrationRule,
    OfficialVisitRule,
    PortfolioHealthRule,
    PrioritySchoolReminderRule,
    SchoolListRule,
    ShowcaseAttendanceRule,
    VideoLinkHealthRule,
    normalize_division,
)

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


def _context(grade=11, schools=(), interactions=(), athlete_tasks=(), videos=(), events=()):
    athlete = AthleteProfile(id="a1", grade_level=grade) if grade is not None else None
    return RuleContext(
        athlete_id="a1",
        athlete=athlete,
        schools=list(schools),
        interactions=list(interactions),
        athlete_tasks=list(athlete_tasks),
        videos=list(videos),
        events=list(events),
        now=NOW,
    )


def _school(school_id="s1", priority="A", status="interested", **kwargs):
    return TargetSchool(
        id=school_id, athlete_id="a1", name=kwargs.pop("name", f"School {school_id}"),
        priority=priority, status=status, **kwargs,
    )


def _contact(school_id, days_ago, interaction_type="email", **kwargs):
    return Interaction(
        id=f"i-{school_id}-{days_ago}-{interaction_type}",
        athlete_id="a1",
        school_id=school_id,
        interaction_type=interaction_type,
        occurred_at=NOW - timedelta(days=days_ago),
        **kwargs,
    )


# =============================================================================
# CATALOG
# =============================================================================

def test_rule_ids_are_unique():
    ids = [rule.id for rule in DEFAULT_RULES]
    assert len(ids) == len(set(ids)) == 11


def test_no_rule_fires_on_empty_context():
    context = _context(grade=None)
    assert [rule.evaluate(context) for rule in DEFAULT_RULES] == [None] * len(DEFAULT_RULES)


def test_normalize_division():
    assert normalize_division("DI") == "D1"
    assert normalize_division("Division II") == "D2"
    assert normalize_division("d3") == "D3"
    assert normalize_division("NAIA") == "NAIA"
    assert normalize_division(None) is None


# =============================================================================
# PHASE-CRITICAL
# =============================================================================

def test_ncaa_registration():
    rule = NcaaRegistrationRule()

    payload = rule.evaluate(_context(schools=[_school(division="D1")]))
    assert payload.urgency == "high"
    assert payload.related_task_id == "task-11-a3"

    assert rule.evaluate(_context(schools=[_school(division="DII")])) is not None
    assert rule.evaluate(_context(schools=[_school(division="D3")])) is None
    assert rule.evaluate(_context(schools=[_school(division="NAIA")])) is None
    assert rule.evaluate(_context(grade=12, schools=[_school(division="D1")])) is None


def test_ncaa_registration_done():
    rule = NcaaRegistrationRule()
    done = AthleteTaskStatus(athlete_id="a1", task_id="task-11-a3", status="completed")
    started = AthleteTaskStatus(athlete_id="a1", task_id="task-11-a3", status="in_progress")

    assert rule.evaluate(_context(schools=[_school(division="D1")], athlete_tasks=[done])) is None
    assert rule.evaluate(_context(schools=[_school(division="D1")], athlete_tasks=[started])) is not None


def test_school_list():
    rule = SchoolListRule()
    fifteen = [_school(f"s{i}") for i in range(15)]

    payload = rule.evaluate(_context(grade=10, schools=fifteen))
    assert payload.urgency == "medium"
    assert "15 schools" in payload.message
    assert payload.action_type == "add_school"

    assert rule.evaluate(_context(grade=11, schools=fifteen)).urgency == "high"
    assert "0 schools" in rule.evaluate(_context(grade=10)).message
    assert rule.evaluate(_context(grade=10, schools=[_school(f"s{i}") for i in range(20)])) is None
    assert rule.evaluate(_context(grade=9)) is None
    assert rule.evaluate(_context(grade=12)) is None


def test_official_visit():
    rule = OfficialVisitRule()
    schools = [_school()]

    one_visit = [_contact("s1", 10, "official_visit"), _contact("s1", 5, None)]
    payload = rule.evaluate(_context(schools=schools, interactions=one_visit))
    assert payload.urgency == "medium"
    assert "1 of 2" in payload.message

    assert rule.evaluate(_context(grade=12, schools=schools)).urgency == "high"

    two_visits = [_contact("s1", 10, "Campus Visit"), _contact("s1", 5, "OFFICIAL")]
    assert rule.evaluate(_context(schools=schools, interactions=two_visits)) is None
    assert rule.evaluate(_context(schools=[_school(priority="C")])) is None
    assert rule.evaluate(_context(grade=10, schools=schools)) is None


def test_formal_outreach_urgency_by_grade():
    rule = FormalOutreachRule()
    schools = [_school(name="Florida State")]

    junior = rule.evaluate(_context(grade=11, schools=schools))
    assert junior.urgency == "medium"
    assert junior.related_school_id == "s1"
    assert junior.message == (
        "You haven't contacted Florida State yet. Send the coaching staff a formal introduction."
    )

    assert rule.evaluate(_context(grade=12, schools=schools)).urgency == "high"
    assert rule.evaluate(_context(grade=10, schools=schools)) is None
    assert rule.evaluate(_context(grade=None, schools=schools)) is None
    assert rule.evaluate(_context(grade=11)) is None


def test_formal_outreach_fires_for_any_overdue_school():
    rule = FormalOutreachRule()
    schools = [_school("s1"), _school("s2", priority="B")]
    interactions = [_contact("s1", 2), _contact("s2", 45)]

    payload = rule.evaluate(_context(schools=schools, interactions=interactions))
    assert payload.related_school_id == "s2"
    assert "45 days" in payload.message


def test_formal_outreach_threshold_is_exclusive():
    rule = FormalOutreachRule()
    schools = [_school()]
    assert rule.evaluate(_context(schools=schools, interactions=[_contact("s1", 30)])) is None
    assert rule.evaluate(_context(schools=schools, interactions=[_contact("s1", 31)])) is not None


def test_showcase_attendance():
    rule = ShowcaseAttendanceRule()

    def event(start):
        return Event(id="e1", athlete_id="a1", name="PG Showcase", start_date=start)

    assert rule.evaluate(_context(grade=10)).urgency == "medium"
    assert rule.evaluate(_context(grade=10, events=[event(NOW - timedelta(days=90))])) is None
    assert rule.evaluate(_context(grade=10, events=[event(subtract_months(NOW, 6))])) is None
    assert rule.evaluate(_context(grade=10, events=[event(subtract_months(NOW, 7))])) is not None
    assert rule.evaluate(_context(grade=10, events=[event(None)])) is not None
    assert rule.evaluate(_context(grade=11)) is None


# =============================================================================
# ONGOING
# =============================================================================

def test_interaction_gap_urgency():
    rule = InteractionGapRule()
    schools = [_school()]

    medium = rule.evaluate(_context(schools=schools, interactions=[_contact("s1", 25)]))
    assert medium.urgency == "medium"
    assert "25 days" in medium.message

    high = rule.evaluate(_context(schools=schools, interactions=[_contact("s1", 35)]))
    assert high.urgency == "high"

    assert rule.evaluate(_context(schools=schools, interactions=[_contact("s1", 20)])) is None


def test_interaction_gap_candidates():
    rule = InteractionGapRule()
    assert rule.evaluate(_context(schools=[_school(priority="C")])) is None
    assert rule.evaluate(_context(schools=[_school(status="researching")])) is None

    schools = [_school("s1"), _school("s2", status="contacted")]
    interactions = [_contact("s1", 25), _contact("s2", 40)]
    payload = rule.evaluate(_context(schools=schools, interactions=interactions))
    assert payload.related_school_id == "s2"


def test_interaction_gap_snapshot():
    rule = InteractionGapRule()
    context = _context(schools=[_school()], interactions=[_contact("s1", 25)])
    assert rule.create_condition_snapshot(context, "s1") == {
        "days_since_contact": 25,
        "school_priority": "A",
        "school_status": "interested",
    }
    assert rule.create_condition_snapshot(context, "missing") is None


def _dismissed(days_ago, snapshot):
    return Suggestion(
        id="old",
        athlete_id="a1",
        rule_type="interaction-gap",
        urgency="medium",
        message="old",
        action_type="log_interaction",
        related_school_id="s1",
        dismissed=True,
        dismissed_at=NOW - timedelta(days=days_ago),
        condition_snapshot=snapshot,
    )


def test_interaction_gap_re_evaluation():
    rule = InteractionGapRule()
    context = _context(schools=[_school()], interactions=[_contact("s1", 30)])

    # Too soon after dismissal
    assert not rule.should_re_evaluate(_dismissed(10, {"days_since_contact": 5, "school_priority": "A"}), context)
    # Gap grew by 20 days
    assert rule.should_re_evaluate(_dismissed(20, {"days_since_contact": 10, "school_priority": "A"}), context)
    # Gap grew by only 5 days
    assert not rule.should_re_evaluate(_dismissed(20, {"days_since_contact": 25, "school_priority": "A"}), context)
    # Priority changed
    assert rule.should_re_evaluate(_dismissed(20, {"days_since_contact": 25, "school_priority": "B"}), context)
    # No snapshot stored
    assert rule.should_re_evaluate(_dismissed(20, None), context)


def test_missing_video():
    rule = MissingVideoRule()
    assert rule.evaluate(_context(grade=10)).action_type == "add_video"
    assert rule.evaluate(_context(grade=9)) is None
    video = Video(id="v1", athlete_id="a1", url="https://example.com/v1")
    assert rule.evaluate(_context(grade=10, videos=[video])) is None


def test_event_follow_up():
    rule = EventFollowUpRule()
    event = Event(
        id="e1", athlete_id="a1", name="Perfect Game Showcase",
        start_date=NOW - timedelta(days=3), attended=True, school_id="s1",
    )

    payload = rule.evaluate(_context(events=[event]))
    assert "Perfect Game Showcase" in payload.message
    assert payload.related_school_id == "s1"

    after = _contact("s1", 1)
    assert rule.evaluate(_context(events=[event], interactions=[after])) is None

    linked = _contact("s9", 10, event_id="e1")
    assert rule.evaluate(_context(events=[event], interactions=[linked])) is None

    before = _contact("s1", 5)
    assert rule.evaluate(_context(events=[event], interactions=[before])) is not None

    skipped = event.model_copy(update={"attended": False})
    assert rule.evaluate(_context(events=[skipped])) is None

    old = event.model_copy(update={"start_date": NOW - timedelta(days=10)})
    assert rule.evaluate(_context(events=[old])) is None


def test_video_link_health():
    rule = VideoLinkHealthRule()
    broken = Video(id="v1", athlete_id="a1", title="Junior season", health_status="broken")
    healthy = Video(id="v2", athlete_id="a1", health_status="healthy")

    payload = rule.evaluate(_context(videos=[healthy, broken]))
    assert payload.urgency == "high"
    assert payload.action_type == "update_video"
    assert "Junior season" in payload.message
    assert rule.evaluate(_context(videos=[healthy])) is None


def test_portfolio_health():
    rule = PortfolioHealthRule()

    def scored(school_id, score):
        return _school(school_id, fit=FitScoreSnapshot(score=score, tier="reach"))

    assert rule.evaluate(_context(schools=[scored("s1", 30), scored("s2", 45)])).urgency == "high"
    assert rule.evaluate(_context(schools=[scored("s1", 30), scored("s2", 70)])) is None
    # Unscored schools count as 0
    assert rule.evaluate(_context(schools=[_school()])) is not None
    assert rule.evaluate(_context()) is None


def test_priority_school_reminder():
    rule = PrioritySchoolReminderRule()

    payload = rule.evaluate(_context(schools=[_school(name="Vanderbilt")], interactions=[_contact("s1", 14)]))
    assert payload.urgency == "high"
    assert payload.message.startswith("Vanderbilt is your top priority")

    assert rule.evaluate(_context(schools=[_school()], interactions=[_contact("s1", 13)])) is None
    assert rule.evaluate(_context(schools=[_school(priority="B")])) is None
