#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring results.
"""

from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field, asdict
from enum import Enum


FACTORS = ('skills', 'salary', 'location', 'employment', 'title')


class EmploymentType(str, Enum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    INTERNSHIP = "INTERNSHIP"
    CONTRACT = "CONTRACT"
    FRESHER = "FRESHER"

    @classmethod
    def from_label(cls, label: Optional[str]) -> Optional['EmploymentType']:
        """Resolve a free-form label ("Full-Time", "fulltime", "FULL_TIME")."""
        key = normalize_employment_label(label)
        for member in cls:
            if normalize_employment_label(member.value) == key:
                return member
        return None


def normalize_employment_label(label: Optional[str]) -> str:
    if not label:
        return ""
    return "".join(ch for ch in str(label).lower() if ch not in "-_ ")


@dataclass
class ScoreBreakdown:
    """Per-factor credits (0-100 each) and the weighted composite."""
    skills: float = 0.0
    salary: float = 0.0
    location: float = 0.0
    employment: float = 0.0
    title: float = 0.0
    composite: float = 0.0
    matched_skills: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
