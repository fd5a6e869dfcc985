import contextlib
import logging

from database.database import SessionLocal, get_engine
from database.repository import MatchingRepository

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def matching_uow():
    """Per-unit-of-work transaction scope.

    Yields a MatchingRepository bound to a fresh Session. Commits on success,
    rolls back on exception, always closes. Each trigger (one posting event
    or one on-demand request) runs in its own unit of work.

    Usage:
        with matching_uow() as repo:
            profile = repo.profiles.get_by_user_id(user_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    get_engine()
    session = SessionLocal()
    try:
        repo = MatchingRepository(session)
        yield repo
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
