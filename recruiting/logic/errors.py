"""
Decision-Support Errors

Validation and precondition failures raised to callers. Missing or incomplete
data never raises; it resolves to neutral scores or null results instead.
"""

from typing import List


class RecruitingError(Exception):
    """Base class for errors reported by the decision-support core."""


class TaskLockedError(RecruitingError):
    """Raised when completing a task whose prerequisites are not all completed."""

    def __init__(self, task_id: str, prerequisite_titles: List[str]):
        self.task_id = task_id
        self.prerequisite_titles = prerequisite_titles
        super().__init__(
            "Cannot complete task. Please complete these prerequisites first: "
            + ", ".join(prerequisite_titles)
        )


class TaskNotFoundError(RecruitingError):
    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")


class InvalidScoreInputError(RecruitingError):
    """Raised when raw score inputs are not numeric."""

    def __init__(self, problems: List[str]):
        self.problems = problems
        super().__init__("Invalid score inputs: " + "; ".join(problems))


class AthleteProfileMissingError(RecruitingError):
    """Raised when an operation needs an athlete profile that does not exist."""

    def __init__(self, athlete_id: str):
        self.athlete_id = athlete_id
        super().__init__(
            f"Athlete profile {athlete_id} not found. Add athlete profile data first."
        )


class SuggestionNotFoundError(RecruitingError):
    def __init__(self, suggestion_id: str):
        self.suggestion_id = suggestion_id
        super().__init__(f"Suggestion {suggestion_id} not found")


class SchoolNotFoundError(RecruitingError):
    def __init__(self, school_id: str):
        self.school_id = school_id
        super().__init__(f"Target school {school_id} not found")
