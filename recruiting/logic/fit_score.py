"""
Fit Score

Scores how well a target school fits an athlete on four dimensions:
- Athletic (0-40): position need, coach interest, size, velocity
- Academic (0-25): GPA and test-score gap, major offered, support
- Opportunity (0-20): roster depth, graduation timeline, scholarships, walk-ons
- Personal (0-15): location, campus size, cost, priority, major strength

Dimension points are clamped to their maxima and summed into a 0-100 score.
A dimension whose inputs are unavailable scores None and is reported in
`missing_dimensions`.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Union

from .constants import (
    CAMPUS_SIZE_TARGETS,
    COACH_INTEREST_FIT_POINTS,
    FIT_DIMENSION_MAX,
    FIT_THRESHOLDS,
    FIT_TIER_COLORS,
    SCHOLARSHIP_AVAILABILITY_POINTS,
    FitTier,
)
from .contracts import (
    AthleteProfile,
    FitRecalculationResult,
    FitScoreResult,
    PortfolioHealth,
    TargetSchool,
)
from .errors import AthleteProfileMissingError
from .status_score import round_half_up

logger = logging.getLogger(__name__)


# =============================================================================
# DIMENSION SCORERS
# =============================================================================

def score_athletic_fit(athlete: AthleteProfile, school: TargetSchool) -> Optional[float]:
    """
    Athletic fit (0-40).

    Returns None when the athlete has no position, measurements or velocity.
    """
    has_position = bool(athlete.primary_position)
    has_size = bool(athlete.height_inches and athlete.weight_lbs)
    has_velocity = bool(athlete.velocity_mph)
    if not (has_position or has_size or has_velocity):
        return None

    score = 0

    # Position need (0-10)
    position = athlete.primary_position
    needs = school.position_needs
    if position and needs:
        if position in needs:
            score += 10
        elif any("OF" in need for need in needs) and "OF" in position:
            score += 7
        elif any("IF" in need for need in needs) and "IF" in position:
            score += 7
        else:
            score += 3

    # Coach interest (0-10)
    score += COACH_INTEREST_FIT_POINTS.get(school.coach_interest or "low", 2)

    # Measurements (0-8)
    if has_size:
        height, weight = athlete.height_inches, athlete.weight_lbs
        if 69 <= height <= 76 and 180 <= weight <= 220:
            score += 8
        elif 67 <= height <= 78 and 160 <= weight <= 240:
            score += 5
        else:
            score += 2

    # Velocity (0-10)
    if has_velocity:
        velo = athlete.velocity_mph
        if velo >= 88:
            score += 10
        elif velo >= 85:
            score += 8
        elif velo >= 82:
            score += 5
        else:
            score += 2

    return float(min(FIT_DIMENSION_MAX["athletic"], score))


def score_academic_fit(athlete: AthleteProfile, school: TargetSchool) -> Optional[float]:
    """
    Academic fit (0-25).

    Returns None when the athlete has no GPA and no test scores.
    """
    if not (athlete.gpa or athlete.sat_score or athlete.act_score):
        return None

    score = 0

    # GPA (0-10): gap to the school's average, else absolute GPA
    if athlete.gpa and school.avg_gpa:
        gap = school.avg_gpa - athlete.gpa
        if gap <= 0.2:
            score += 10
        elif gap <= 0.5:
            score += 8
        elif gap <= 1.0:
            score += 5
        else:
            score += 2
    elif athlete.gpa:
        if athlete.gpa >= 3.5:
            score += 9
        elif athlete.gpa >= 3.0:
            score += 7
        elif athlete.gpa >= 2.5:
            score += 5
        else:
            score += 2

    # Test scores (0-8), SAT before ACT
    if athlete.sat_score and school.avg_sat:
        gap = school.avg_sat - athlete.sat_score
        if gap <= 50:
            score += 8
        elif gap <= 150:
            score += 5
        else:
            score += 2
    elif athlete.act_score and school.avg_act:
        gap = school.avg_act - athlete.act_score
        if gap <= 2:
            score += 8
        elif gap <= 4:
            score += 5
        else:
            score += 2

    # Major offered (0-5)
    major = athlete.intended_major
    if major and school.offered_majors:
        if any(major.lower() in offered.lower() for offered in school.offered_majors):
            score += 5
        else:
            score += 2

    # Academic support, assumed at every school
    score += 2

    return float(min(FIT_DIMENSION_MAX["academic"], score))


def score_opportunity_fit(athlete: AthleteProfile, school: TargetSchool) -> Optional[float]:
    """
    Opportunity fit (0-20).

    Returns None when the school has no roster or scholarship data at all.
    """
    if (
        school.roster_depth_pct is None
        and school.years_to_graduate is None
        and school.scholarship_availability is None
        and school.walk_on_history is None
    ):
        return None

    depth = school.roster_depth_pct if school.roster_depth_pct is not None else 50
    years = school.years_to_graduate if school.years_to_graduate is not None else 3
    availability = school.scholarship_availability or "medium"

    score = 0

    # Roster depth at position (0-7), lower is better
    if depth <= 60:
        score += 7
    elif depth <= 75:
        score += 5
    elif depth <= 90:
        score += 3
    else:
        score += 1

    # Years until starters graduate (0-5)
    if years <= 2:
        score += 5
    elif years <= 3:
        score += 4
    elif years <= 4:
        score += 2
    else:
        score += 1

    score += SCHOLARSHIP_AVAILABILITY_POINTS.get(availability, 2)
    score += 3 if school.walk_on_history else 1

    return float(min(FIT_DIMENSION_MAX["opportunity"], score))


def _campus_size_points(preference: str, enrollment: int) -> int:
    target = CAMPUS_SIZE_TARGETS.get(preference)
    if target is None:
        return 1
    center, tolerance = target
    return 3 if abs(enrollment - center) <= tolerance else 1


def score_personal_fit(athlete: AthleteProfile, school: TargetSchool) -> Optional[float]:
    """
    Personal fit (0-15).

    Returns None when the athlete has stated no location, size or cost
    preference.
    """
    if not (athlete.home_state or athlete.campus_size_preference or athlete.cost_sensitivity):
        return None

    score = 0

    # Location (0-4)
    if athlete.home_state and school.state:
        score += 4 if athlete.home_state == school.state else 1

    # Campus size (0-3)
    enrollment = school.enrollment if school.enrollment is not None else 10000
    score += _campus_size_points(athlete.campus_size_preference or "medium", enrollment)

    # Cost (0-4)
    cost = school.cost_of_attendance if school.cost_of_attendance is not None else 30000
    sensitivity = athlete.cost_sensitivity or "medium"
    if sensitivity == "high":
        if cost <= 20000:
            score += 4
        elif cost <= 35000:
            score += 2
    elif sensitivity == "medium":
        if cost <= 30000:
            score += 3
        elif cost <= 45000:
            score += 2
        else:
            score += 1
    else:
        score += 4

    # Priority school (0-2)
    if school.priority == "A":
        score += 2

    # Major strength (0-2)
    strength = school.major_strength if school.major_strength is not None else 5
    if strength >= 7:
        score += 2
    elif strength >= 4:
        score += 1

    return float(min(FIT_DIMENSION_MAX["personal"], score))


DIMENSION_SCORERS: Dict[str, Callable[[AthleteProfile, TargetSchool], Optional[float]]] = {
    "athletic": score_athletic_fit,
    "academic": score_academic_fit,
    "opportunity": score_opportunity_fit,
    "personal": score_personal_fit,
}


# =============================================================================
# COMBINER
# =============================================================================

def tier_for_score(score: float) -> FitTier:
    for tier, threshold in FIT_THRESHOLDS:
        if score >= threshold:
            return tier
    return FitTier.UNLIKELY


def tier_color(tier: Union[FitTier, str]) -> str:
    return FIT_TIER_COLORS[FitTier(tier)]


def fit_score_recommendation(score: int, tier: Union[FitTier, str]) -> str:
    """Advice for a tier. A higher tier never gets weaker advice than a lower one."""
    tier = FitTier(tier)
    if tier == FitTier.SAFETY:
        return "Excellent fit! You have a strong chance at this school."
    if tier == FitTier.MATCH:
        return "Good fit! This school aligns well with your profile."
    if tier == FitTier.REACH:
        return (
            f"Possible fit with some growth. Score: {score}/100. "
            "Focus on the missing dimensions."
        )
    return "Not a strong fit based on current data. Work on improving key dimensions."


def calculate_fit_score(dimensions: Dict[str, Optional[float]]) -> FitScoreResult:
    """
    Combine per-dimension points into a fit score.

    Args:
        dimensions: points keyed by dimension name; a None or absent
            dimension is treated as missing and contributes 0

    Returns:
        FitScoreResult with score, tier, breakdown and missing dimensions
    """
    breakdown: Dict[str, Optional[float]] = {}
    missing: List[str] = []
    total = 0.0

    for name, maximum in FIT_DIMENSION_MAX.items():
        value = dimensions.get(name)
        if value is None:
            breakdown[name] = None
            missing.append(name)
            continue
        clamped = max(0.0, min(float(maximum), float(value)))
        breakdown[name] = clamped
        total += clamped

    score = max(0, min(100, round_half_up(total)))
    tier = tier_for_score(score)

    return FitScoreResult(
        score=score,
        tier=tier,
        breakdown=breakdown,
        missing_dimensions=missing,
        recommendation=fit_score_recommendation(score, tier),
    )


def score_school_fit(athlete: AthleteProfile, school: TargetSchool) -> FitScoreResult:
    """Score every dimension for one school and combine them."""
    dimensions = {name: scorer(athlete, school) for name, scorer in DIMENSION_SCORERS.items()}
    result = calculate_fit_score(dimensions)
    result.school_id = school.id
    return result


# =============================================================================
# BATCH + PORTFOLIO
# =============================================================================

def recalculate_all_fit_scores(
    athlete: Optional[AthleteProfile],
    schools: List[TargetSchool],
    save: Optional[Callable[[TargetSchool, FitScoreResult], Any]] = None,
    scorer: Callable[[AthleteProfile, TargetSchool], FitScoreResult] = score_school_fit,
    athlete_id: str = "",
) -> FitRecalculationResult:
    """
    Recompute fit scores for every target school independently.

    A school whose scoring or save raises is counted as failed and logged;
    the rest are still processed.

    Args:
        athlete: Athlete profile; None is a precondition failure
        schools: Target schools to score
        save: Optional persistence callback, called once per scored school
        scorer: Per-school scoring function
        athlete_id: Used in the error when the profile is absent

    Returns:
        FitRecalculationResult with updated/failed counts

    Raises:
        AthleteProfileMissingError: athlete is None
    """
    if athlete is None:
        raise AthleteProfileMissingError(athlete_id)

    if not schools:
        return FitRecalculationResult(
            success=True, updated=0, failed=0,
            message="No schools found to recalculate",
        )

    result = FitRecalculationResult()
    for school in schools:
        try:
            fit = scorer(athlete, school)
            if save is not None:
                save(school, fit)
            result.updated += 1
        except Exception as e:
            logger.exception(f"Failed to calculate fit score for school {school.id}")
            result.failed += 1
            result.failures[school.id] = str(e)

    plural = "" if result.updated == 1 else "s"
    result.message = f"Updated fit scores for {result.updated} school{plural}"
    return result


def calculate_portfolio_health(schools: List[TargetSchool]) -> PortfolioHealth:
    """Count fit tiers across the list and flag an unbalanced portfolio."""
    if not schools:
        return PortfolioHealth(
            status="not_started",
            warnings=["You haven't added any schools yet. Start building your college list!"],
        )

    counts = {tier: 0 for tier in FitTier}
    for school in schools:
        if school.fit is None:
            continue
        counts[FitTier(school.fit.tier)] += 1

    health = PortfolioHealth(
        reaches=counts[FitTier.REACH],
        matches=counts[FitTier.MATCH],
        safeties=counts[FitTier.SAFETY],
        unlikelies=counts[FitTier.UNLIKELY],
        total=len(schools),
        status="good",
    )

    if health.safeties == 0:
        health.warnings.append("Add at least 2-3 safety schools to ensure you have options.")
    if health.matches == 0:
        health.warnings.append("Consider adding match schools where you have a realistic chance.")
    if health.reaches > health.matches + health.safeties:
        health.warnings.append(
            "You have more reach schools than match and safety combined. Balance your list."
        )
    if health.total < 5:
        health.warnings.append("Consider adding more schools to diversify your options.")

    if health.warnings:
        health.status = "needs_attention"
    return health
