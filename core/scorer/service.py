#!/usr/bin/env python3
"""
Scoring Service - Weighted five-factor match score.

Scores one search profile against one job posting:
- Skills, salary, location, employment type and job title credits (0-100)
- Composite: weighted sum of the credits, weights summing to 1.0

Pure and stateless apart from its config, so a single instance can be
shared by the worker threads of a matching batch.
"""

from typing import Optional
import logging

from core.config_loader import ScorerConfig
from core.scorer import factors
from core.scorer.models import ScoreBreakdown, FACTORS

logger = logging.getLogger(__name__)


class ScoringService:
    """
    Computes a ScoreBreakdown for (profile, posting) pairs.

    `profile` is anything exposing desired_skills, desired_country,
    min_salary, max_salary, desired_employment_types and desired_job_titles
    (SearchProfile ORM rows or SearchProfileDTO). `posting` is a
    JobPostingDTO.
    """

    def __init__(self, config: Optional[ScorerConfig] = None):
        self.config = config or ScorerConfig()

    def score(self, profile, posting) -> ScoreBreakdown:
        salary = getattr(posting, 'salary', None)
        posting_min, posting_max = factors.salary_bounds(
            (getattr(salary, 'min', None), getattr(salary, 'max', None)) if salary else (None, None)
        )
        profile_min, profile_max = factors.salary_bounds((profile.min_salary, profile.max_salary))

        breakdown = ScoreBreakdown(
            skills=factors.skills_credit(profile.desired_skills, posting.skills),
            salary=factors.salary_credit(
                profile_min, profile_max, posting_min, posting_max,
                tolerance=self.config.salary_tolerance
            ),
            location=factors.location_credit(profile.desired_country, posting.location),
            employment=factors.employment_credit(profile.desired_employment_types, posting.employment_types),
            title=factors.title_credit(profile.desired_job_titles, posting.title),
            matched_skills=factors.matched_skills(profile.desired_skills, posting.skills),
        )
        breakdown.composite = self.composite(breakdown)
        return breakdown

    def composite(self, breakdown: ScoreBreakdown) -> float:
        weights = self.config.weights
        return sum(weights[name] * getattr(breakdown, name) for name in FACTORS)


_default_service = ScoringService()


def score(profile, posting) -> ScoreBreakdown:
    """Score with the default weights {skills .30, salary .25, location .20, employment .15, title .10}."""
    return _default_service.score(profile, posting)
