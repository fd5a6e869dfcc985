#!/usr/bin/env python3
"""
Factor Credits - The five per-factor credit rules of the match score.

Every function returns a credit on a 0-100 scale and never raises for
absent or empty inputs:
- 50 when the posting leaves the factor unspecified (unknowable)
- 0 when the profile leaves it unspecified (except salary, which is 50)
"""

from typing import Iterable, List, Optional, Tuple
import re

from core.scorer.countries import resolve_country
from core.scorer.models import normalize_employment_label

UNKNOWN_CREDIT = 50.0
FULL_CREDIT = 100.0
NO_CREDIT = 0.0
CLOSE_SALARY_CREDIT = 75.0
FAR_SALARY_CREDIT = 30.0


def normalize_skills(skills: Optional[Iterable[str]]) -> List[str]:
    """Trim and lowercase, dropping blanks and duplicates (first occurrence wins)."""
    seen = set()
    normalized = []
    for skill in skills or []:
        if skill is None:
            continue
        value = str(skill).strip().lower()
        if value and value not in seen:
            seen.add(value)
            normalized.append(value)
    return normalized


def matched_skills(desired: Optional[Iterable[str]], required: Optional[Iterable[str]]) -> List[str]:
    """Desired skills (profile order, normalized) that the posting also requires."""
    required_set = set(normalize_skills(required))
    return [s for s in normalize_skills(desired) if s in required_set]


def skills_credit(desired: Optional[Iterable[str]], required: Optional[Iterable[str]]) -> float:
    required_norm = normalize_skills(required)
    if not required_norm:
        return UNKNOWN_CREDIT
    desired_norm = normalize_skills(desired)
    if not desired_norm:
        return NO_CREDIT
    overlap = len(matched_skills(desired_norm, required_norm))
    return FULL_CREDIT * overlap / len(required_norm)


def location_credit(desired_country: Optional[str], posting_location: Optional[str]) -> float:
    if not posting_location or not posting_location.strip():
        return UNKNOWN_CREDIT
    name, code = resolve_country(desired_country)
    if not name:
        return NO_CREDIT

    location = posting_location.lower()
    if name in location:
        return FULL_CREDIT
    # Two-letter codes only count as whole words ("in" must not hit "Berlin")
    if code and re.search(rf"\b{re.escape(code.lower())}\b", location):
        return FULL_CREDIT
    return UNKNOWN_CREDIT


def _within(value: float, low: Optional[float], high: Optional[float]) -> bool:
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True


def salary_credit(
    profile_min: Optional[float],
    profile_max: Optional[float],
    posting_min: Optional[float],
    posting_max: Optional[float],
    tolerance: float = 0.20
) -> float:
    """
    Salary credit comparing the profile range to the posting range.

    Non-overlapping ranges that are "close" (gap within `tolerance` of the
    profile's reference amount) earn partial credit.
    """
    if posting_min is None and posting_max is None:
        return UNKNOWN_CREDIT
    if profile_min is None and profile_max is None:
        return UNKNOWN_CREDIT

    if posting_min is not None and posting_max is not None:
        if profile_min is not None and profile_max is not None:
            if posting_max >= profile_min and posting_min <= profile_max:
                return FULL_CREDIT
            allowed = (profile_max - profile_min) * tolerance
            gap = posting_min - profile_max if posting_min > profile_max else profile_min - posting_max
            return CLOSE_SALARY_CREDIT if gap <= allowed else FAR_SALARY_CREDIT

        if profile_min is not None:
            if posting_max >= profile_min:
                return FULL_CREDIT
            shortfall = profile_min - posting_max
            return CLOSE_SALARY_CREDIT if shortfall <= profile_min * tolerance else FAR_SALARY_CREDIT

        if posting_min <= profile_max:
            return FULL_CREDIT
        excess = posting_min - profile_max
        return CLOSE_SALARY_CREDIT if excess <= profile_max * tolerance else FAR_SALARY_CREDIT

    single = posting_min if posting_min is not None else posting_max
    if _within(single, profile_min, profile_max):
        return FULL_CREDIT
    return FAR_SALARY_CREDIT


def employment_credit(desired: Optional[Iterable[str]], posting_labels: Optional[Iterable[str]]) -> float:
    posting_keys = {normalize_employment_label(label) for label in posting_labels or []}
    posting_keys.discard("")
    if not posting_keys:
        return UNKNOWN_CREDIT
    desired_keys = {normalize_employment_label(getattr(d, 'value', d)) for d in desired or []}
    desired_keys.discard("")
    if not desired_keys:
        return NO_CREDIT
    return FULL_CREDIT if desired_keys & posting_keys else NO_CREDIT


def title_credit(desired_titles: Optional[Iterable[str]], posting_title: Optional[str]) -> float:
    if not posting_title or not posting_title.strip():
        return UNKNOWN_CREDIT
    titles = [t.strip().lower() for t in desired_titles or [] if t and t.strip()]
    if not titles:
        return NO_CREDIT
    normalized_title = posting_title.strip().lower()
    return FULL_CREDIT if any(t in normalized_title for t in titles) else NO_CREDIT


def salary_bounds(value) -> Tuple[Optional[float], Optional[float]]:
    """Coerce a (min, max) pair of Decimal/str/None to floats, ignoring junk."""
    low, high = value
    return _to_float(low), _to_float(high)


def _to_float(value) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
