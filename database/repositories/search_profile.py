from typing import List, Optional
from sqlalchemy import select

from database.models import SearchProfile
from database.repositories.base import BaseRepository


class SearchProfileRepository(BaseRepository):
    def get_by_user_id(self, user_id: str) -> Optional[SearchProfile]:
        stmt = select(SearchProfile).where(SearchProfile.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def list_all(self) -> List[SearchProfile]:
        stmt = select(SearchProfile).order_by(SearchProfile.created_at)
        return list(self.db.execute(stmt).scalars().all())
