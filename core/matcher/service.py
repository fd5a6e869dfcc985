#!/usr/bin/env python3
"""
Matching Service - Drives scoring and persistence across profiles and postings.

Two trigger modes share the same downstream path (ScoringService ->
try_persist_match):
1. Streaming: one newly published posting against every search profile
2. On-demand: every active catalog posting newer than one user's profile

Scoring a batch runs on a thread pool; persistence stays sequential in
the caller's session. A failing (profile, posting) pair is logged and
skipped so one bad record cannot abort the batch.
"""
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from typing import List, Optional, Tuple
import logging

from core.config_loader import MatchingConfig
from core.exceptions import CatalogUnavailableError
from core.matcher.dto import JobPostingDTO, SearchProfileDTO, OnDemandResult
from core.scorer import ScoringService, ScoreBreakdown, try_persist_match
from database.models import MatchedJobPost

logger = logging.getLogger(__name__)

ScoredPair = Tuple[SearchProfileDTO, JobPostingDTO, ScoreBreakdown]


class MatchingService:
    """
    Orchestrates matching for one unit of work.

    The repository is passed per call so each trigger can run in its own
    matching_uow() while the service itself is shared.
    """

    def __init__(
        self,
        config: Optional[MatchingConfig] = None,
        catalog_client=None,
        scorer: Optional[ScoringService] = None
    ):
        """
        Args:
            config: MatchingConfig (threshold, worker count, scorer weights)
            catalog_client: JobCatalogClient used by on-demand matching
            scorer: ScoringService override, built from config when omitted
        """
        self.config = config or MatchingConfig()
        self.catalog_client = catalog_client
        self.scorer = scorer or ScoringService(self.config.scorer)

    def match_new_posting(
        self,
        repo,
        posting: JobPostingDTO,
        now: Optional[datetime] = None
    ) -> List[MatchedJobPost]:
        """
        Streaming mode: score one posting against every search profile.

        Returns the matches created by this call.
        """
        now = now or datetime.now(timezone.utc)

        if not posting.id:
            logger.warning("Skipping posting event without an id")
            return []
        if not posting.is_published:
            logger.debug(f"Skipping job post {posting.id} - status is not published: {posting.status}")
            return []
        if posting.is_expired(now):
            logger.debug(f"Skipping job post {posting.id} - expired on {posting.expiry_date}")
            return []

        profiles = [SearchProfileDTO.from_orm(p) for p in repo.profiles.list_all()]
        logger.info(f"Matching job post {posting.id} against {len(profiles)} search profiles")

        scored = self._score_pairs([(profile, posting) for profile in profiles])
        created = self._persist_scored(repo, scored)

        logger.info(f"Job post {posting.id}: created {len(created)} new matches")
        return created

    def match_for_user(
        self,
        repo,
        user_id: str,
        timeout: Optional[float] = None,
        now: Optional[datetime] = None
    ) -> OnDemandResult:
        """
        On-demand mode: score active catalog postings against one user's profile.

        Only postings published after the profile was created and not
        already matched for the user are considered, so an immediate
        re-run with an unchanged catalog creates nothing.
        """
        now = now or datetime.now(timezone.utc)
        result = OnDemandResult(user_id=user_id)

        profile_row = repo.profiles.get_by_user_id(user_id)
        if profile_row is None:
            logger.info(f"No search profile for user {user_id}; nothing to match")
            return result
        profile = SearchProfileDTO.from_orm(profile_row)

        if self.catalog_client is None:
            result.catalog_error = "No catalog client configured"
            logger.error(f"On-demand matching for user {user_id} aborted: {result.catalog_error}")
            return result

        try:
            postings = self.catalog_client.fetch_active_postings(timeout=timeout)
        except CatalogUnavailableError as e:
            result.catalog_error = str(e)
            logger.error(f"On-demand matching for user {user_id} aborted: {e}")
            return result

        already_matched = repo.matches.get_matched_job_post_ids(user_id)
        candidates = []
        for posting in postings:
            if not posting.id or not posting.is_active(now):
                continue
            if posting.id in already_matched:
                continue
            if not self._is_newer_than_profile(posting, profile):
                continue
            candidates.append(posting)

        result.postings_considered = len(candidates)
        logger.info(
            f"User {user_id}: {len(candidates)} of {len(postings)} catalog postings eligible for matching"
        )

        scored = self._score_pairs([(profile, posting) for posting in candidates])
        result.matches = self._persist_scored(repo, scored)

        logger.info(f"User {user_id}: created {len(result.matches)} new matches")
        return result

    @staticmethod
    def _is_newer_than_profile(posting: JobPostingDTO, profile: SearchProfileDTO) -> bool:
        if profile.created_at is None:
            return True
        if posting.posted_date is None:
            return False
        return posting.posted_date >= profile.created_at

    def _score_one(self, profile: SearchProfileDTO, posting: JobPostingDTO) -> ScoreBreakdown:
        return self.scorer.score(profile, posting)

    def _score_pairs(self, pairs: List[Tuple[SearchProfileDTO, JobPostingDTO]]) -> List[ScoredPair]:
        """Score pairs in parallel; pairs whose scoring raises are dropped."""
        if not pairs:
            return []

        scored: List[ScoredPair] = []
        max_workers = max(1, min(self.config.max_workers, len(pairs)))
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {
                executor.submit(self._score_one, profile, posting): (profile, posting)
                for profile, posting in pairs
            }
            for future in as_completed(futures):
                profile, posting = futures[future]
                try:
                    scored.append((profile, posting, future.result()))
                except Exception:
                    logger.exception(
                        f"Scoring failed for user {profile.user_id}, job post {posting.id}"
                    )

        # as_completed order is arbitrary; keep writes deterministic
        scored.sort(key=lambda item: (item[0].user_id, item[1].id))
        return scored

    def _persist_scored(self, repo, scored: List[ScoredPair]) -> List[MatchedJobPost]:
        created = []
        for profile, posting, breakdown in scored:
            try:
                match = try_persist_match(
                    repo, profile.user_id, posting, breakdown,
                    min_score=self.config.min_match_score
                )
            except Exception:
                logger.exception(
                    f"Persisting match failed for user {profile.user_id}, job post {posting.id}"
                )
                continue
            if match is not None:
                created.append(match)
        return created
