"""API route handlers."""

from .matches import router as matches_router
from .postings import router as postings_router
