#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests can be run with standard Python tools:

    # Run all tests
    python -m pytest tests/ -v

    # Only tests that need no database
    python -m pytest tests/ -v -m "not db"

Database tests run against a throwaway SQLite file per test, so no
external server is required.
"""

import os
import shutil
import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from database import database
from database.models import SearchProfile, Subscription, PlanType, SubscriptionStatus
from database.repository import MatchingRepository

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def posting_payload(**overrides) -> Dict[str, Any]:
    """A published, unexpired posting in feed (camelCase) shape."""
    payload = {
        'id': 'job-1',
        'title': 'Senior Backend Engineer',
        'description': 'Build APIs',
        'location': 'Ho Chi Minh City, Vietnam',
        'employmentTypes': ['FULL_TIME'],
        'skills': ['React', 'Go', 'SQL'],
        'salary': {'min': 4000, 'max': 6000, 'currency': 'USD'},
        'status': 'published',
        'postedDate': (NOW - timedelta(days=1)).isoformat(),
        'expiryDate': (NOW + timedelta(days=30)).isoformat(),
    }
    payload.update(overrides)
    return payload


def profile_kwargs(**overrides) -> Dict[str, Any]:
    """Search profile fields matching the 90-point reference posting above."""
    values = {
        'user_id': 'user-1',
        'profile_name': 'Backend roles',
        'desired_skills': ['React', 'Go'],
        'desired_employment_types': ['FULL_TIME'],
        'desired_job_titles': ['Backend Engineer'],
        'desired_country': 'Vietnam',
        'min_salary': 3000,
        'max_salary': 5000,
        'created_at': NOW - timedelta(days=10),
    }
    values.update(overrides)
    return values


class SqliteTestCase(unittest.TestCase):
    """
    Base class for tests that need the real ORM.

    Binds the global session factory to a fresh SQLite file, creates all
    tables, and exposes `self.session` / `self.repo` for fixtures.

    SQLite transactions start with BEGIN IMMEDIATE, so a test must end its
    own transaction (commit or rollback) before code under test opens
    another session.
    """

    def setUp(self):
        super().setUp()
        self.tmp_dir = tempfile.mkdtemp(prefix="jobmatch-test-")
        self.db_url = f"sqlite:///{os.path.join(self.tmp_dir, 'test.db')}"
        self.engine = database.init_engine(self.db_url)
        database.init_db(self.engine)
        self.session = database.SessionLocal(expire_on_commit=False)
        self.repo = MatchingRepository(self.session)

    def tearDown(self):
        self.session.close()
        self.engine.dispose()
        shutil.rmtree(self.tmp_dir, ignore_errors=True)
        super().tearDown()

    def add_profile(self, **overrides) -> SearchProfile:
        profile = SearchProfile(**profile_kwargs(**overrides))
        self.session.add(profile)
        self.session.commit()
        return profile

    def add_subscription(
        self,
        user_id: str = 'user-1',
        plan_type: PlanType = PlanType.PREMIUM,
        status: SubscriptionStatus = SubscriptionStatus.ACTIVE,
        expires_at: Optional[datetime] = None
    ) -> Subscription:
        subscription = Subscription(
            user_id=user_id,
            plan_type=plan_type.value,
            status=status.value,
            expires_at=expires_at
        )
        self.session.add(subscription)
        self.session.commit()
        return subscription
