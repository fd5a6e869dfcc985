from typing import Optional
from sqlalchemy import select

from database.models import Subscription
from database.repositories.base import BaseRepository


class SubscriptionRepository(BaseRepository):
    def get_by_user_id(self, user_id: str) -> Optional[Subscription]:
        stmt = select(Subscription).where(Subscription.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()
