from .base import Base, JSONType, utcnow, ensure_utc
from .search_profile import SearchProfile
from .match import MatchedJobPost
from .subscription import Subscription, PlanType, SubscriptionStatus

__all__ = [
    'Base',
    'JSONType',
    'utcnow',
    'ensure_utc',
    'SearchProfile',
    'MatchedJobPost',
    'Subscription',
    'PlanType',
    'SubscriptionStatus',
]
