import uuid

from sqlalchemy import Column, Text, DateTime, Numeric, Uuid, CheckConstraint

from .base import Base, JSONType, utcnow


class SearchProfile(Base):
    """
    A user's saved job-search criteria.

    One profile per user. Written by the profile owner only; the matching
    engine treats it as read-only. ``created_at`` is the on-demand matching
    cutoff and is never changed after insert.
    """
    __tablename__ = 'search_profile'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, unique=True)
    profile_name = Column(Text, nullable=True)

    desired_skills = Column(JSONType, default=list)
    desired_employment_types = Column(JSONType, default=list)  # EmploymentType names
    desired_job_titles = Column(JSONType, default=list)
    desired_country = Column(Text, nullable=True)  # country name or ISO code

    min_salary = Column(Numeric(14, 2), nullable=True)
    max_salary = Column(Numeric(14, 2), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint(
            'min_salary IS NULL OR max_salary IS NULL OR min_salary <= max_salary',
            name='ck_search_profile_salary_range'
        ),
    )
