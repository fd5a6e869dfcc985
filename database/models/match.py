import uuid

from sqlalchemy import Column, Text, DateTime, Boolean, Float, Numeric, Uuid, UniqueConstraint, Index

from .base import Base, JSONType, utcnow


class MatchedJobPost(Base):
    """
    Stores one successful scoring of a job posting against a user's
    search profile.

    Posting fields are denormalized at match time: postings belong to an
    external catalog and may disappear or change, while the match record
    must stay self-describing for history and notifications.

    Tracks:
    - Composite score and the five per-factor credits
    - Skills shared by the profile and the posting
    - Viewed flag (client) and notified flag (notification gate)
    """
    __tablename__ = 'matched_job_post'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False)
    job_post_id = Column(Text, nullable=False)

    # Denormalized posting snapshot
    job_title = Column(Text, nullable=True)
    job_description = Column(Text, nullable=True)
    location = Column(Text, nullable=True)
    employment_types = Column(JSONType, default=list)
    required_skills = Column(JSONType, default=list)
    salary_min = Column(Numeric(14, 2), nullable=True)
    salary_max = Column(Numeric(14, 2), nullable=True)
    salary_currency = Column(Text, nullable=True)
    posted_date = Column(DateTime(timezone=True), nullable=True)
    expiry_date = Column(DateTime(timezone=True), nullable=True)

    # Score breakdown (0-100 each)
    match_score = Column(Float, nullable=False)
    skills_score = Column(Float, nullable=False)
    salary_score = Column(Float, nullable=False)
    location_score = Column(Float, nullable=False)
    employment_score = Column(Float, nullable=False)
    title_score = Column(Float, nullable=False)
    matched_skills = Column(JSONType, default=list)

    is_viewed = Column(Boolean, nullable=False, default=False)
    is_notified = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        UniqueConstraint('user_id', 'job_post_id', name='uq_matched_job_post_user_job'),
        Index('idx_matched_job_post_user', 'user_id', 'created_at'),
        Index('idx_matched_job_post_job', 'job_post_id'),
        Index('idx_matched_job_post_viewed', 'user_id', 'is_viewed'),
        Index('idx_matched_job_post_notified', 'is_notified'),
    )
