from sqlalchemy import Column, Integer, String, Float, DateTime

from .base import Base


class AthleteModel(Base):
    __tablename__ = "athletes"

    id = Column(String, primary_key=True)
    name = Column(String)
    grade_level = Column(Integer)
    graduation_year = Column(Integer)
    sport = Column(String)
    primary_position = Column(String)
    height_inches = Column(Float)
    weight_lbs = Column(Float)
    velocity_mph = Column(Float)
    gpa = Column(Float)
    sat_score = Column(Integer)
    act_score = Column(Integer)
    eligibility_status = Column(String)
    intended_major = Column(String)
    home_state = Column(String)
    campus_size_preference = Column(String)
    cost_sensitivity = Column(String)

    # Latest status score snapshot
    status_score = Column(Integer)
    status_label = Column(String)
    status_updated_at = Column(DateTime(timezone=True))
