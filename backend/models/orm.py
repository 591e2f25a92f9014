"""
SQLAlchemy tables for the audit store and weight configuration.

profiles     - one row per scoring request (inputs, factors, score, LLM output)
llm_outputs  - one row per narrative call that produced content
weights      - weight vector history; the most recently updated row is active
app_users    - admin flags for the weight editor
"""

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from database import Base


class ProfileRow(Base):
    __tablename__ = "profiles"

    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=False, index=True)

    full_name = Column(String, nullable=False, default="")
    email = Column(String, nullable=False, default="")
    date_of_birth = Column(String, nullable=True)
    gender = Column(String, nullable=True)
    employment_status = Column(String, nullable=True)
    total_experience = Column(Float, nullable=True)
    skill_proficiency_avg = Column(Float, nullable=True)
    training_hours_12mo = Column(Float, nullable=True)
    performance_rating = Column(Float, nullable=True)
    linkedin_network_size = Column(String, nullable=True)
    willing_to_relocate = Column(String, nullable=True)
    preferred_work_model = Column(String, nullable=True)
    notice_period_days = Column(Float, nullable=True)

    risk_score = Column(Integer, nullable=False)
    risk_tier = Column(String, nullable=False)
    risk_details = Column(JSON, nullable=False)  # FactorSet
    llm_explain = Column(Text, nullable=True)
    llm_recommendations = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now())


class LLMOutputRow(Base):
    __tablename__ = "llm_outputs"

    id = Column(String, primary_key=True)
    profile_id = Column(String, ForeignKey("profiles.id"), nullable=False, index=True)
    provider = Column(String, nullable=False)
    model = Column(String, nullable=False)
    prompt = Column(Text, nullable=False)
    response = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class WeightsRow(Base):
    __tablename__ = "weights"

    id = Column(Integer, primary_key=True, autoincrement=True)
    weights = Column(JSON, nullable=False)
    updated_by = Column(String, nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)


class AppUserRow(Base):
    __tablename__ = "app_users"

    id = Column(String, primary_key=True)
    email = Column(String, nullable=True)
    is_admin = Column(Boolean, nullable=False, default=False)
