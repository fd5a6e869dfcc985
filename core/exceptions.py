"""Domain exceptions raised by the matching engine."""


class MatchingError(Exception):
    """Base exception for matching engine failures."""


class CatalogUnavailableError(MatchingError):
    """The external job-posting catalog could not be queried."""
