from sqlalchemy import Column, String, DateTime

from .base import Base


class InteractionModel(Base):
    __tablename__ = "interactions"

    id = Column(String, primary_key=True)
    athlete_id = Column(String, index=True, nullable=False)
    school_id = Column(String, index=True)
    event_id = Column(String)
    interaction_type = Column(String)
    direction = Column(String)
    sentiment = Column(String)
    occurred_at = Column(DateTime(timezone=True), nullable=False)
