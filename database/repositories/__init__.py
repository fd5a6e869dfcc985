from database.repositories.base import BaseRepository
from database.repositories.search_profile import SearchProfileRepository
from database.repositories.match import MatchRepository
from database.repositories.subscription import SubscriptionRepository

__all__ = [
    'BaseRepository',
    'SearchProfileRepository',
    'MatchRepository',
    'SubscriptionRepository',
]
