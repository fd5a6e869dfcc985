from typing import List, Optional, Dict, Any

from pydantic import BaseModel

from database.models import MatchedJobPost

MATCH_TITLE = "New Job Match Found!"


class BreakdownInfo(BaseModel):
    composite: float
    skills: float
    salary: float
    location: float
    employment: float
    title: float


class MatchMetadata(BaseModel):
    match_id: str
    job_post_id: str
    job_title: Optional[str] = None
    match_score: float
    location: Optional[str] = None
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    salary_currency: Optional[str] = None
    employment_types: List[str] = []
    required_skills: List[str] = []
    matched_skills: List[str] = []
    breakdown: BreakdownInfo


class MatchNotificationPayload(BaseModel):
    user_id: str
    title: str
    body: str
    type: str
    metadata: MatchMetadata


def _optional_float(value) -> Optional[float]:
    return float(value) if value is not None else None


class NotificationMessageBuilder:
    @staticmethod
    def build_body(match: MatchedJobPost) -> str:
        job_title = match.job_title or "Untitled position"
        return (
            f"A new job post '{job_title}' matches your profile "
            f"({match.match_score:.1f}% match). Check it out!"
        )

    @staticmethod
    def build_breakdown(match: MatchedJobPost) -> BreakdownInfo:
        """Stored sub-scores, copied as persisted."""
        return BreakdownInfo(
            composite=match.match_score,
            skills=match.skills_score,
            salary=match.salary_score,
            location=match.location_score,
            employment=match.employment_score,
            title=match.title_score,
        )

    @staticmethod
    def build_metadata(match: MatchedJobPost) -> MatchMetadata:
        return MatchMetadata(
            match_id=str(match.id),
            job_post_id=match.job_post_id,
            job_title=match.job_title,
            match_score=match.match_score,
            location=match.location,
            salary_min=_optional_float(match.salary_min),
            salary_max=_optional_float(match.salary_max),
            salary_currency=match.salary_currency,
            employment_types=list(match.employment_types or []),
            required_skills=list(match.required_skills or []),
            matched_skills=list(match.matched_skills or []),
            breakdown=NotificationMessageBuilder.build_breakdown(match),
        )

    @staticmethod
    def build_payload(match: MatchedJobPost, notification_type: str = "JOB_MATCH") -> MatchNotificationPayload:
        return MatchNotificationPayload(
            user_id=match.user_id,
            title=MATCH_TITLE,
            body=NotificationMessageBuilder.build_body(match),
            type=notification_type,
            metadata=NotificationMessageBuilder.build_metadata(match),
        )

    @staticmethod
    def metadata_dict(payload: MatchNotificationPayload) -> Dict[str, Any]:
        return payload.metadata.model_dump()
