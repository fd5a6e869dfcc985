#!/usr/bin/env python3
"""
Scoring Module - Five-factor profile/posting match score.

Public API:
- ScoringService / score: (profile, posting) -> ScoreBreakdown
- try_persist_match: threshold + insert-once persistence of a scored pair

- models.py: ScoreBreakdown, EmploymentType
- countries.py: Country name/code lookup for the location factor
- factors.py: Per-factor credit rules
- persistence.py: Match Persistence Guard
- service.py: ScoringService
"""

from core.scorer.models import ScoreBreakdown, EmploymentType
from core.scorer.service import ScoringService, score
from core.scorer.persistence import try_persist_match, MIN_MATCH_SCORE

__all__ = [
    'ScoringService',
    'ScoreBreakdown',
    'EmploymentType',
    'score',
    'try_persist_match',
    'MIN_MATCH_SCORE',
]
