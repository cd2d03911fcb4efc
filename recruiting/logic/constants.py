"""
Decision-Support Constants

Defines all weights, thresholds, band tables, enums and static advice used by
the scoring, task and suggestion components.
All values are deterministic with no AI/ML components.
"""

from enum import Enum
from typing import Dict, List, Tuple


# =============================================================================
# ENUMS
# =============================================================================

class TaskStatus(str, Enum):
    """Athlete progress on a single checklist task."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    SKIPPED = "skipped"


class TaskCategory(str, Enum):
    ACADEMIC = "academic"
    ATHLETIC = "athletic"
    RECRUITING = "recruiting"
    EXPOSURE = "exposure"
    MINDSET = "mindset"


class Phase(str, Enum):
    """Recruiting phase, derived from grade level."""
    FRESHMAN = "freshman"
    SOPHOMORE = "sophomore"
    JUNIOR = "junior"
    SENIOR = "senior"
    COMMITTED = "committed"


class StatusLabel(str, Enum):
    ON_TRACK = "on_track"
    SLIGHTLY_BEHIND = "slightly_behind"
    AT_RISK = "at_risk"


class FitTier(str, Enum):
    SAFETY = "safety"            # Strong chance
    MATCH = "match"              # Realistic target
    REACH = "reach"              # Stretch goal
    UNLIKELY = "unlikely"        # Poor fit on current data


class Urgency(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class EligibilityStatus(str, Enum):
    """Eligibility-center registration status."""
    REGISTERED = "registered"
    PENDING = "pending"
    NOT_STARTED = "not_started"


class TriggerReason(str, Enum):
    PROFILE_CHANGE = "profile_change"
    INTERACTION_LOGGED = "interaction_logged"
    DAILY_REFRESH = "daily_refresh"


# =============================================================================
# STATUS SCORE
# =============================================================================

# Weights for the composite status score (must sum to 1.0)
STATUS_WEIGHTS: Dict[str, float] = {
    "task_completion_rate": 0.35,
    "interaction_frequency_score": 0.25,
    "coach_interest_score": 0.25,
    "academic_standing_score": 0.15,
}

STATUS_THRESHOLDS: Dict[StatusLabel, int] = {
    StatusLabel.ON_TRACK: 75,
    StatusLabel.SLIGHTLY_BEHIND: 50,
    StatusLabel.AT_RISK: 0,
}

STATUS_COLORS: Dict[StatusLabel, str] = {
    StatusLabel.ON_TRACK: "green",
    StatusLabel.SLIGHTLY_BEHIND: "yellow",
    StatusLabel.AT_RISK: "red",
}

# (max days since last interaction, score); anything older scores 0
INTERACTION_RECENCY_STEPS: List[Tuple[int, int]] = [
    (7, 100),
    (14, 80),
    (21, 60),
    (30, 40),
]

INTEREST_LEVEL_POINTS: Dict[str, int] = {
    "high": 100,
    "medium": 60,
    "low": 20,
}

PRIORITY_INTEREST_BONUS = 5
PRIORITY_INTEREST_BONUS_CAP = 10

# Academic standing bands, checked top-down (threshold, points)
GPA_BANDS: List[Tuple[float, int]] = [
    (3.5, 40),
    (3.0, 30),
    (2.5, 20),
    (2.0, 10),
]
SAT_BANDS: List[Tuple[int, int]] = [
    (1200, 30),
    (1000, 20),
    (900, 10),
]
ACT_BANDS: List[Tuple[int, int]] = [
    (28, 30),
    (24, 20),
    (20, 10),
]
ELIGIBILITY_POINTS: Dict[str, int] = {
    EligibilityStatus.REGISTERED.value: 30,
    EligibilityStatus.PENDING.value: 15,
    EligibilityStatus.NOT_STARTED.value: 0,
}

STATUS_ADVICE: Dict[StatusLabel, str] = {
    StatusLabel.ON_TRACK: "Keep up the momentum! You're doing great with your recruiting efforts.",
    StatusLabel.SLIGHTLY_BEHIND: "You're slightly behind. Focus on consistent coach outreach this week.",
    StatusLabel.AT_RISK: "You're at risk. We recommend activating your recovery plan immediately.",
}

NEXT_ACTIONS: Dict[StatusLabel, Dict[Phase, List[str]]] = {
    StatusLabel.ON_TRACK: {
        Phase.FRESHMAN: ["Continue your training routine", "Document stats and achievements"],
        Phase.SOPHOMORE: ["Send follow-up emails to coaches", "Attend summer camps"],
        Phase.JUNIOR: ["Schedule unofficial visits", "Update highlight video"],
        Phase.SENIOR: ["Schedule official visits", "Finalize college applications"],
        Phase.COMMITTED: ["Prepare for college transition", "Stay in touch with coaching staff"],
    },
    StatusLabel.SLIGHTLY_BEHIND: {
        Phase.FRESHMAN: ["Increase travel ball participation", "Take PSAT practice tests"],
        Phase.SOPHOMORE: ["Prioritize highlight video completion", "Send intro emails weekly"],
        Phase.JUNIOR: ["Increase coach contact frequency", "Attend more showcases"],
        Phase.SENIOR: ["Follow up with coaches", "Schedule more official visits"],
        Phase.COMMITTED: ["Review scholarship details", "Confirm enrollment requirements"],
    },
    StatusLabel.AT_RISK: {
        Phase.FRESHMAN: ["Meet with school counselor", "Join travel ball team immediately"],
        Phase.SOPHOMORE: ["Complete highlight video NOW", "Send intros to all target schools"],
        Phase.JUNIOR: ["Activate recovery plan", "Intensive coach outreach"],
        Phase.SENIOR: ["Contact all interested coaches", "Attend every possible camp"],
        Phase.COMMITTED: ["Reach out to coaching staff", "Confirm all details"],
    },
}

PHASE_GRADE: Dict[Phase, int] = {
    Phase.FRESHMAN: 9,
    Phase.SOPHOMORE: 10,
    Phase.JUNIOR: 11,
    Phase.SENIOR: 12,
    Phase.COMMITTED: 12,
}

# =============================================================================
# FIT SCORE
# =============================================================================

# Maximum points per fit dimension (sum to 100)
FIT_DIMENSION_MAX: Dict[str, int] = {
    "athletic": 40,
    "academic": 25,
    "opportunity": 20,
    "personal": 15,
}

# Score thresholds for fit tiers, checked top-down
FIT_THRESHOLDS: List[Tuple[FitTier, int]] = [
    (FitTier.SAFETY, 85),
    (FitTier.MATCH, 70),
    (FitTier.REACH, 50),
    (FitTier.UNLIKELY, 0),
]

FIT_TIER_COLORS: Dict[FitTier, str] = {
    FitTier.MATCH: "emerald",
    FitTier.SAFETY: "blue",
    FitTier.REACH: "orange",
    FitTier.UNLIKELY: "red",
}

COACH_INTEREST_FIT_POINTS: Dict[str, int] = {
    "high": 10,
    "medium": 6,
    "low": 2,
}

SCHOLARSHIP_AVAILABILITY_POINTS: Dict[str, int] = {
    "high": 4,
    "medium": 2,
    "low": 1,
}

# Target enrollment and tolerance for each campus size preference
CAMPUS_SIZE_TARGETS: Dict[str, Tuple[int, int]] = {
    "small": (5000, 3000),
    "medium": (15000, 5000),
    "large": (25000, 10000),
}

# =============================================================================
# SUGGESTIONS
# =============================================================================

URGENCY_RANK: Dict[str, int] = {
    Urgency.HIGH.value: 3,
    Urgency.MEDIUM.value: 2,
    Urgency.LOW.value: 1,
}

PRIORITY_TIERS = ("A", "B")
ACTIVE_RECRUITING_STATUSES = ("interested", "contacted", "visited")
NCAA_DIVISIONS_REQUIRING_REGISTRATION = ("D1", "D2")
NCAA_REGISTRATION_TASK_ID = "task-11-a3"

VISIT_KEYWORDS = ("official", "visit")

SCHOOL_LIST_TARGET = 20
OFFICIAL_VISIT_TARGET = 2
FORMAL_OUTREACH_GAP_DAYS = 30
INTERACTION_GAP_DAYS = 21
INTERACTION_GAP_HIGH_DAYS = 30
PRIORITY_REMINDER_DAYS = 14
SHOWCASE_WINDOW_MONTHS = 6
EVENT_FOLLOW_UP_DAYS = 7
PORTFOLIO_UNLIKELY_SCORE = 50
GAP_GROWTH_RESURFACE_DAYS = 14

# Sentinel gap for a school that has never been contacted
NO_CONTACT_DAYS = 999
