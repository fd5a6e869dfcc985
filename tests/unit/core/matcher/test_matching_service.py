import unittest
from datetime import timedelta
from unittest.mock import Mock

import pytest

from core.config_loader import MatchingConfig
from core.exceptions import CatalogUnavailableError
from core.matcher import MatchingService, JobPostingDTO
from core.scorer import ScoringService
from tests import SqliteTestCase, NOW, posting_payload


def _posting(**overrides) -> JobPostingDTO:
    return JobPostingDTO.from_payload(posting_payload(**overrides))


@pytest.mark.db
class TestStreamingMatching(SqliteTestCase):

    def setUp(self):
        super().setUp()
        self.service = MatchingService(MatchingConfig(max_workers=4))

    def test_new_posting_matches_every_qualifying_profile(self):
        self.add_profile(user_id='user-1')
        self.add_profile(user_id='user-2', desired_skills=['Go'])
        # Nothing in common: 0.3*0 + 0.25*30 + 0.2*50 + 0 + 0 = 17.5 < 30
        self.add_profile(
            user_id='user-3', desired_skills=['Cobol'], desired_country='Japan',
            desired_employment_types=['INTERNSHIP'], desired_job_titles=['Chef'],
            min_salary=20000, max_salary=30000
        )

        created = self.service.match_new_posting(self.repo, _posting(), now=NOW)
        self.session.commit()

        self.assertEqual(sorted(m.user_id for m in created), ['user-1', 'user-2'])
        by_user = {m.user_id: m for m in created}
        self.assertAlmostEqual(by_user['user-1'].match_score, 90.0, places=6)

    def test_unpublished_posting_is_skipped(self):
        self.add_profile()
        for status in ('draft', 'closed', None):
            created = self.service.match_new_posting(self.repo, _posting(status=status), now=NOW)
            self.assertEqual(created, [])

    def test_status_comparison_ignores_case(self):
        self.add_profile()
        created = self.service.match_new_posting(self.repo, _posting(status='PUBLISHED'), now=NOW)
        self.assertEqual(len(created), 1)

    def test_expired_posting_is_skipped(self):
        self.add_profile()
        expired = _posting(expiryDate=(NOW - timedelta(minutes=1)).isoformat())

        self.assertEqual(self.service.match_new_posting(self.repo, expired, now=NOW), [])

    def test_posting_without_expiry_is_matched(self):
        self.add_profile()
        created = self.service.match_new_posting(self.repo, _posting(expiryDate=None), now=NOW)
        self.assertEqual(len(created), 1)

    def test_replayed_event_creates_nothing(self):
        self.add_profile()
        self.service.match_new_posting(self.repo, _posting(), now=NOW)
        self.session.commit()

        again = self.service.match_new_posting(self.repo, _posting(), now=NOW)

        self.assertEqual(again, [])

    def test_one_failing_pair_does_not_abort_batch(self):
        self.add_profile(user_id='user-1')
        self.add_profile(user_id='user-2')
        real = ScoringService()

        def flaky_score(profile, posting):
            if profile.user_id == 'user-1':
                raise ValueError("corrupt profile")
            return real.score(profile, posting)

        scorer = Mock()
        scorer.score.side_effect = flaky_score
        service = MatchingService(MatchingConfig(), scorer=scorer)

        created = service.match_new_posting(self.repo, _posting(), now=NOW)

        self.assertEqual([m.user_id for m in created], ['user-2'])
        self.assertEqual(scorer.score.call_count, 2)


@pytest.mark.db
class TestOnDemandMatching(SqliteTestCase):

    def setUp(self):
        super().setUp()
        self.catalog = Mock()
        self.service = MatchingService(MatchingConfig(), catalog_client=self.catalog)

    def test_missing_profile_returns_empty_without_catalog_call(self):
        result = self.service.match_for_user(self.repo, 'nobody', now=NOW)

        self.assertEqual(result.matches, [])
        self.assertIsNone(result.catalog_error)
        self.catalog.fetch_active_postings.assert_not_called()

    def test_only_postings_newer_than_profile_are_matched(self):
        self.add_profile(created_at=NOW - timedelta(days=5))
        self.catalog.fetch_active_postings.return_value = [
            _posting(id='new', postedDate=(NOW - timedelta(days=1)).isoformat()),
            _posting(id='old', postedDate=(NOW - timedelta(days=30)).isoformat()),
            _posting(id='undated', postedDate=None),
        ]

        result = self.service.match_for_user(self.repo, 'user-1', now=NOW)

        self.assertEqual([m.job_post_id for m in result.matches], ['new'])
        self.assertEqual(result.postings_considered, 1)

    def test_inactive_postings_are_skipped(self):
        self.add_profile()
        self.catalog.fetch_active_postings.return_value = [
            _posting(id='draft', status='draft'),
            _posting(id='expired', expiryDate=(NOW - timedelta(days=1)).isoformat()),
            _posting(id='live'),
        ]

        result = self.service.match_for_user(self.repo, 'user-1', now=NOW)

        self.assertEqual([m.job_post_id for m in result.matches], ['live'])

    def test_rerun_with_unchanged_catalog_returns_nothing(self):
        self.add_profile()
        self.catalog.fetch_active_postings.return_value = [_posting(id='a'), _posting(id='b')]

        first = self.service.match_for_user(self.repo, 'user-1', now=NOW)
        self.session.commit()
        second = self.service.match_for_user(self.repo, 'user-1', now=NOW)

        self.assertEqual(len(first.matches), 2)
        self.assertEqual(second.matches, [])
        self.assertEqual(second.postings_considered, 0)

    def test_catalog_failure_is_reported(self):
        self.add_profile()
        self.catalog.fetch_active_postings.side_effect = CatalogUnavailableError("timed out")

        result = self.service.match_for_user(self.repo, 'user-1', now=NOW)

        self.assertEqual(result.matches, [])
        self.assertEqual(result.catalog_error, "timed out")
        self.assertFalse(result.ok)

    def test_timeout_is_passed_to_catalog(self):
        self.add_profile()
        self.catalog.fetch_active_postings.return_value = []

        self.service.match_for_user(self.repo, 'user-1', timeout=3.5, now=NOW)

        self.catalog.fetch_active_postings.assert_called_once_with(timeout=3.5)

    def test_missing_catalog_client_is_a_catalog_error(self):
        self.add_profile()
        service = MatchingService(MatchingConfig())

        result = service.match_for_user(self.repo, 'user-1', now=NOW)

        self.assertIsNotNone(result.catalog_error)


if __name__ == '__main__':
    unittest.main()
