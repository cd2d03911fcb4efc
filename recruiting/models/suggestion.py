from sqlalchemy import Column, String, Boolean, DateTime, Text, JSON

from .base import Base


class SuggestionModel(Base):
    __tablename__ = "suggestions"

    id = Column(String, primary_key=True)
    athlete_id = Column(String, index=True, nullable=False)
    rule_type = Column(String, nullable=False)
    urgency = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    action_type = Column(String)
    related_school_id = Column(String)
    related_task_id = Column(String)

    dismissed = Column(Boolean, default=False)
    dismissed_at = Column(DateTime(timezone=True))
    completed = Column(Boolean, default=False)
    completed_at = Column(DateTime(timezone=True))
    pending_surface = Column(Boolean, default=True)
    surfaced_at = Column(DateTime(timezone=True))

    condition_snapshot = Column(JSON)
    reappeared = Column(Boolean, default=False)
    previous_suggestion_id = Column(String)

    created_at = Column(DateTime(timezone=True))
    updated_at = Column(DateTime(timezone=True))
