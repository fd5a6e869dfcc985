"""Matcher Module - Streaming and on-demand matching orchestration."""
from core.matcher.dto import (
    JobPostingDTO, SalaryDTO, SearchProfileDTO, OnDemandResult, MatchedJobPostDTO
)
from core.matcher.service import MatchingService

__all__ = [
    'MatchingService',
    'JobPostingDTO', 'SalaryDTO', 'SearchProfileDTO', 'OnDemandResult', 'MatchedJobPostDTO',
]
