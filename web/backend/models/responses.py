#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict, Any


class ScoreBreakdownResponse(BaseModel):
    """Per-factor credits as stored at match time (0-100 each)."""
    composite: float = Field(ge=0, le=100)
    skills: float = Field(ge=0, le=100)
    salary: float = Field(ge=0, le=100)
    location: float = Field(ge=0, le=100)
    employment: float = Field(ge=0, le=100)
    title: float = Field(ge=0, le=100)


class MatchResponse(BaseModel):
    """A persisted match with its posting snapshot and full breakdown."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "match_id": "550e8400-e29b-41d4-a716-446655440000",
                "user_id": "user-123",
                "job_post_id": "job-42",
                "job_title": "Senior Backend Engineer",
                "location": "Ho Chi Minh City, Vietnam",
                "employment_types": ["FULL_TIME"],
                "required_skills": ["React", "Go", "SQL"],
                "matched_skills": ["react", "go"],
                "salary_min": 4000.0,
                "salary_max": 6000.0,
                "salary_currency": "USD",
                "breakdown": {
                    "composite": 90.0,
                    "skills": 66.67,
                    "salary": 100.0,
                    "location": 100.0,
                    "employment": 100.0,
                    "title": 100.0
                },
                "is_viewed": False,
                "is_notified": True,
                "created_at": "2026-02-01T12:00:00+00:00"
            }
        }
    )

    match_id: str
    user_id: str
    job_post_id: str
    job_title: Optional[str] = None
    job_description: Optional[str] = None
    location: Optional[str] = None
    employment_types: List[str] = []
    required_skills: List[str] = []
    matched_skills: List[str] = []
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    salary_currency: Optional[str] = None
    posted_date: Optional[str] = None
    expiry_date: Optional[str] = None
    breakdown: ScoreBreakdownResponse
    is_viewed: bool = False
    is_notified: bool = False
    created_at: Optional[str] = None


class MatchesResponse(BaseModel):
    """Response for match list endpoints."""
    success: bool
    count: int
    matches: List[MatchResponse]


class RefreshMatchesResponse(BaseModel):
    """Response for on-demand refresh: only matches created by this call."""
    success: bool
    count: int
    matches: List[MatchResponse]
    notified_count: int = 0


class MatchDetailResponse(BaseModel):
    """One match with its full breakdown, for a client detail view."""
    success: bool
    match: MatchResponse


class MarkViewedResponse(BaseModel):
    success: bool
    match: MatchResponse


class DeleteMatchesResponse(BaseModel):
    success: bool
    deleted_count: int


class PostingEventResponse(BaseModel):
    """Response for posting-event ingestion."""
    success: bool
    mode: str
    job_id: Optional[str] = None
    result: Optional[Dict[str, Any]] = None
