"""Data Transfer Objects for matcher service.

DTOs are used to transfer data outside of the Unit of Work context,
allowing ORM objects and feed payloads to be converted to plain Python
objects that can be safely shared by scoring threads after the
database session is closed.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
import logging

from database.models import ensure_utc

logger = logging.getLogger(__name__)

PUBLISHED_STATUS = "published"


def _first(payload: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in payload and payload[key] is not None:
            return payload[key]
    return None


def _parse_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_str_list(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple, set)):
        return ()
    return tuple(str(item).strip() for item in value if item is not None and str(item).strip())


def _parse_amount(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse ISO-8601 strings, datetimes or epoch seconds/millis into aware UTC datetimes."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = value / 1000 if value > 1e11 else value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return ensure_utc(datetime.fromisoformat(text))
        except ValueError:
            logger.debug(f"Ignoring unparseable timestamp: {value!r}")
            return None
    return None


@dataclass(frozen=True)
class SalaryDTO:
    min: Optional[float] = None
    max: Optional[float] = None
    currency: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> Optional['SalaryDTO']:
        if not isinstance(payload, dict):
            return None
        salary = cls(
            min=_parse_amount(_first(payload, 'min', 'minimum')),
            max=_parse_amount(_first(payload, 'max', 'maximum')),
            currency=_parse_text(payload.get('currency')),
        )
        if salary.min is None and salary.max is None:
            return None
        return salary


@dataclass(frozen=True)
class JobPostingDTO:
    """Immutable snapshot of one external job posting.

    Built from feed payloads (push events or catalog pulls). Absent or
    malformed fields become None or empty rather than raising.
    """
    id: Optional[str]
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    employment_types: Tuple[str, ...] = ()
    skills: Tuple[str, ...] = ()
    salary: Optional[SalaryDTO] = None
    status: Optional[str] = None
    posted_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> 'JobPostingDTO':
        if not isinstance(payload, dict):
            payload = {}
        return cls(
            id=_parse_text(_first(payload, 'id', 'jobPostId', 'job_post_id')),
            title=_parse_text(payload.get('title')),
            description=_parse_text(payload.get('description')),
            location=_parse_text(payload.get('location')),
            employment_types=_parse_str_list(
                _first(payload, 'employmentTypes', 'employmentType', 'employment_types')
            ),
            skills=_parse_str_list(_first(payload, 'skills', 'requiredSkills', 'required_skills')),
            salary=SalaryDTO.from_payload(payload.get('salary')),
            status=_parse_text(payload.get('status')),
            posted_date=parse_timestamp(_first(payload, 'postedDate', 'posted_date')),
            expiry_date=parse_timestamp(_first(payload, 'expiryDate', 'expiry_date')),
        )

    @property
    def is_published(self) -> bool:
        return (self.status or "").lower() == PUBLISHED_STATUS

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expiry_date is None:
            return False
        now = now or datetime.now(timezone.utc)
        return self.expiry_date < now

    def is_active(self, now: Optional[datetime] = None) -> bool:
        return self.is_published and not self.is_expired(now)


@dataclass(frozen=True)
class SearchProfileDTO:
    """Search profile fields needed for scoring, detached from the session."""
    id: Any
    user_id: str
    desired_skills: Tuple[str, ...] = ()
    desired_employment_types: Tuple[str, ...] = ()
    desired_job_titles: Tuple[str, ...] = ()
    desired_country: Optional[str] = None
    min_salary: Optional[float] = None
    max_salary: Optional[float] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_orm(cls, profile) -> 'SearchProfileDTO':
        return cls(
            id=profile.id,
            user_id=profile.user_id,
            desired_skills=_parse_str_list(profile.desired_skills),
            desired_employment_types=_parse_str_list(profile.desired_employment_types),
            desired_job_titles=_parse_str_list(profile.desired_job_titles),
            desired_country=_parse_text(profile.desired_country),
            min_salary=_parse_amount(profile.min_salary),
            max_salary=_parse_amount(profile.max_salary),
            created_at=ensure_utc(profile.created_at),
        )


@dataclass
class OnDemandResult:
    """Outcome of one on-demand refresh.

    `catalog_error` distinguishes "catalog unreachable" from "nothing new".
    """
    user_id: str
    matches: List[Any] = field(default_factory=list)
    catalog_error: Optional[str] = None
    postings_considered: int = 0

    @property
    def ok(self) -> bool:
        return self.catalog_error is None


@dataclass
class MatchedJobPostDTO:
    """Data transfer object for a persisted match outside UoW context.

    Carries the denormalized posting snapshot and the full breakdown so
    API responses never recompute scores.
    """
    id: str
    user_id: str
    job_post_id: str
    job_title: Optional[str]
    job_description: Optional[str]
    location: Optional[str]
    employment_types: List[str]
    required_skills: List[str]
    salary_min: Optional[float]
    salary_max: Optional[float]
    salary_currency: Optional[str]
    posted_date: Optional[datetime]
    expiry_date: Optional[datetime]
    match_score: float
    skills_score: float
    salary_score: float
    location_score: float
    employment_score: float
    title_score: float
    matched_skills: List[str]
    is_viewed: bool
    is_notified: bool
    created_at: Optional[datetime]

    @classmethod
    def from_orm(cls, match) -> 'MatchedJobPostDTO':
        return cls(
            id=str(match.id),
            user_id=match.user_id,
            job_post_id=match.job_post_id,
            job_title=match.job_title,
            job_description=match.job_description,
            location=match.location,
            employment_types=list(match.employment_types or []),
            required_skills=list(match.required_skills or []),
            salary_min=_parse_amount(match.salary_min),
            salary_max=_parse_amount(match.salary_max),
            salary_currency=match.salary_currency,
            posted_date=ensure_utc(match.posted_date),
            expiry_date=ensure_utc(match.expiry_date),
            match_score=match.match_score,
            skills_score=match.skills_score,
            salary_score=match.salary_score,
            location_score=match.location_score,
            employment_score=match.employment_score,
            title_score=match.title_score,
            matched_skills=list(match.matched_skills or []),
            is_viewed=bool(match.is_viewed),
            is_notified=bool(match.is_notified),
            created_at=ensure_utc(match.created_at),
        )
