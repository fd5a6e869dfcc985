from sqlalchemy.orm import Session

from database.repositories import (
    SearchProfileRepository,
    MatchRepository,
    SubscriptionRepository,
)


class MatchingRepository:
    """Groups the per-aggregate repositories that share one Session."""

    def __init__(self, db: Session):
        self.db = db
        self.profiles = SearchProfileRepository(db)
        self.matches = MatchRepository(db)
        self.subscriptions = SubscriptionRepository(db)
