from sqlalchemy import Column, String, Boolean, DateTime

from .base import Base


class VideoModel(Base):
    __tablename__ = "videos"

    id = Column(String, primary_key=True)
    athlete_id = Column(String, index=True, nullable=False)
    title = Column(String)
    url = Column(String)
    health_status = Column(String)


class EventModel(Base):
    __tablename__ = "events"

    id = Column(String, primary_key=True)
    athlete_id = Column(String, index=True, nullable=False)
    name = Column(String)
    event_type = Column(String)
    start_date = Column(DateTime(timezone=True))
    attended = Column(Boolean, default=False)
    school_id = Column(String)
