from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, JSON

from .base import Base


class TargetSchoolModel(Base):
    __tablename__ = "target_schools"

    id = Column(String, primary_key=True)
    athlete_id = Column(String, index=True, nullable=False)
    name = Column(String, nullable=False)
    priority = Column(String)
    status = Column(String)
    division = Column(String)
    conference = Column(String)
    state = Column(String)

    position_needs = Column(JSON)
    coach_interest = Column(String)
    roster_depth_pct = Column(Float)
    years_to_graduate = Column(Integer)
    scholarship_availability = Column(String)
    walk_on_history = Column(Boolean)

    avg_gpa = Column(Float)
    avg_sat = Column(Integer)
    avg_act = Column(Integer)
    offered_majors = Column(JSON)
    major_strength = Column(Integer)

    enrollment = Column(Integer)
    cost_of_attendance = Column(Float)

    # Latest fit score snapshot
    fit_score = Column(Integer)
    fit_tier = Column(String)
    fit_breakdown = Column(JSON)
    fit_missing_dimensions = Column(JSON)
    fit_updated_at = Column(DateTime(timezone=True))
