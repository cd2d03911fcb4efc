# Export all recruiting models for easy imports
from .base import Base
from .athlete import AthleteModel
from .school import TargetSchoolModel
from .interaction import InteractionModel
from .task import TaskModel, AthleteTaskModel
from .suggestion import SuggestionModel
from .media import VideoModel, EventModel

__all__ = [
    "Base",
    "AthleteModel",
    "TargetSchoolModel",
    "InteractionModel",
    "TaskModel",
    "AthleteTaskModel",
    "SuggestionModel",
    "VideoModel",
    "EventModel",
]
