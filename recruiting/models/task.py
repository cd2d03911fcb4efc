from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, Text, JSON, UniqueConstraint

from .base import Base


class TaskModel(Base):
    __tablename__ = "tasks"

    id = Column(String, primary_key=True)
    title = Column(String, nullable=False)
    category = Column(String)
    grade_level = Column(Integer)
    description = Column(Text)
    required = Column(Boolean, default=False)
    dependency_task_ids = Column(JSON)
    why_it_matters = Column(Text)
    failure_risk = Column(Text)
    division_applicability = Column(JSON)
    deadline_date = Column(Date)


class AthleteTaskModel(Base):
    __tablename__ = "athlete_tasks"
    __table_args__ = (UniqueConstraint("athlete_id", "task_id", name="uq_athlete_task"),)

    id = Column(String, primary_key=True)
    athlete_id = Column(String, index=True, nullable=False)
    task_id = Column(String, nullable=False)
    status = Column(String, nullable=False, default="not_started")
    completed_at = Column(DateTime(timezone=True))
    is_recovery_task = Column(Boolean, default=False)
