import logging
from typing import List, Optional, Any, Set
from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError

from database.models import MatchedJobPost
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class MatchRepository(BaseRepository):
    def exists(self, user_id: str, job_post_id: str) -> bool:
        stmt = select(MatchedJobPost.id).where(
            MatchedJobPost.user_id == user_id,
            MatchedJobPost.job_post_id == job_post_id
        )
        return self.db.execute(stmt).first() is not None

    def get_by_id(self, match_id: Any) -> Optional[MatchedJobPost]:
        return self.db.get(MatchedJobPost, match_id)

    def get_matched_job_post_ids(self, user_id: str) -> Set[str]:
        stmt = select(MatchedJobPost.job_post_id).where(MatchedJobPost.user_id == user_id)
        return set(self.db.execute(stmt).scalars().all())

    def insert_if_absent(self, match: MatchedJobPost) -> bool:
        """
        Insert a match inside a SAVEPOINT.

        Returns False when the (user_id, job_post_id) unique constraint
        rejects the row, leaving the outer transaction usable.
        """
        try:
            with self.db.begin_nested():
                self.db.add(match)
                self.db.flush()
        except IntegrityError:
            logger.debug(
                f"Duplicate match suppressed for user {match.user_id}, job post {match.job_post_id}"
            )
            return False
        return True

    def get_matches_for_user(self, user_id: str) -> List[MatchedJobPost]:
        stmt = select(MatchedJobPost).where(
            MatchedJobPost.user_id == user_id
        ).order_by(MatchedJobPost.created_at.desc())
        return list(self.db.execute(stmt).scalars().all())

    def get_unviewed_matches(self, user_id: str) -> List[MatchedJobPost]:
        stmt = select(MatchedJobPost).where(
            MatchedJobPost.user_id == user_id,
            MatchedJobPost.is_viewed.is_(False)
        ).order_by(MatchedJobPost.created_at.desc())
        return list(self.db.execute(stmt).scalars().all())

    def get_unnotified_for_job_post(self, job_post_id: str) -> List[MatchedJobPost]:
        stmt = select(MatchedJobPost).where(
            MatchedJobPost.job_post_id == job_post_id,
            MatchedJobPost.is_notified.is_(False)
        )
        return list(self.db.execute(stmt).scalars().all())

    def mark_viewed(self, user_id: str, match_id: Any) -> Optional[MatchedJobPost]:
        match = self.get_by_id(match_id)
        if match is None or match.user_id != user_id:
            return None
        match.is_viewed = True
        self.flush()
        return match

    def mark_notified(self, match: MatchedJobPost) -> None:
        match.is_notified = True
        self.flush()

    def delete_for_user(self, user_id: str) -> int:
        result = self.db.execute(
            delete(MatchedJobPost).where(MatchedJobPost.user_id == user_id)
        )
        count = result.rowcount or 0
        if count > 0:
            logger.info(f"Deleted {count} matches for user {user_id}")
        return count

    def get_by_ids(self, match_ids: List[Any]) -> List[MatchedJobPost]:
        if not match_ids:
            return []
        stmt = select(MatchedJobPost).where(MatchedJobPost.id.in_(match_ids))
        return list(self.db.execute(stmt).scalars().all())
