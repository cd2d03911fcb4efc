"""
Recruiting Logic Module

Deterministic decision support for athlete recruiting: school matching,
status and fit scoring, task dependencies and rule-driven suggestions.
"""

from .contracts import (
    AthleteProfile,
    AthleteTaskStatus,
    BatchResult,
    Event,
    FitRecalculationResult,
    FitScoreResult,
    Interaction,
    PortfolioHealth,
    RuleContext,
    SchoolLookupResult,
    StatusReport,
    StatusScoreInputs,
    StatusScoreResult,
    Suggestion,
    SuggestionData,
    SuggestionPage,
    TargetSchool,
    TaskDefinition,
    TriggerResult,
    Video,
)
from .constants import FitTier, Phase, StatusLabel, TaskStatus, TriggerReason, Urgency
from .errors import (
    AthleteProfileMissingError,
    InvalidScoreInputError,
    RecruitingError,
    SchoolNotFoundError,
    SuggestionNotFoundError,
    TaskLockedError,
    TaskNotFoundError,
)
from .school_matching import SchoolMatchCache, normalize_school_name
from .status_score import calculate_composite_score
from .fit_score import calculate_fit_score, calculate_portfolio_health, recalculate_all_fit_scores, score_school_fit
from .task_graph import TaskDependencyGraph
from .rules import DEFAULT_RULES, Rule
from .engine import SuggestionEngine

__all__ = [
    # Components
    "SchoolMatchCache",
    "normalize_school_name",
    "calculate_composite_score",
    "calculate_fit_score",
    "calculate_portfolio_health",
    "recalculate_all_fit_scores",
    "score_school_fit",
    "TaskDependencyGraph",
    "Rule",
    "DEFAULT_RULES",
    "SuggestionEngine",

    # Contracts
    "AthleteProfile",
    "AthleteTaskStatus",
    "BatchResult",
    "Event",
    "FitRecalculationResult",
    "FitScoreResult",
    "Interaction",
    "PortfolioHealth",
    "RuleContext",
    "SchoolLookupResult",
    "StatusReport",
    "StatusScoreInputs",
    "StatusScoreResult",
    "Suggestion",
    "SuggestionData",
    "SuggestionPage",
    "TargetSchool",
    "TaskDefinition",
    "TriggerResult",
    "Video",

    # Enums
    "FitTier",
    "Phase",
    "StatusLabel",
    "TaskStatus",
    "TriggerReason",
    "Urgency",

    # Errors
    "RecruitingError",
    "AthleteProfileMissingError",
    "InvalidScoreInputError",
    "SchoolNotFoundError",
    "SuggestionNotFoundError",
    "TaskLockedError",
    "TaskNotFoundError",
]
