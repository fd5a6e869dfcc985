import unittest
import uuid
from datetime import timedelta

import pytest

from database.models import MatchedJobPost, SearchProfile
from database.repository import MatchingRepository
from database.uow import matching_uow
from database import database
from tests import SqliteTestCase, NOW, profile_kwargs


def _match(user_id='user-1', job_post_id='job-1', **overrides) -> MatchedJobPost:
    values = dict(
        user_id=user_id,
        job_post_id=job_post_id,
        job_title='Backend Engineer',
        match_score=80.0,
        skills_score=66.7,
        salary_score=100.0,
        location_score=100.0,
        employment_score=100.0,
        title_score=100.0,
        matched_skills=['go'],
    )
    values.update(overrides)
    return MatchedJobPost(**values)


@pytest.mark.db
class TestMatchRepository(SqliteTestCase):

    def test_insert_if_absent_rejects_duplicate_pair(self):
        self.assertTrue(self.repo.matches.insert_if_absent(_match()))
        self.assertFalse(self.repo.matches.insert_if_absent(_match(match_score=99.0)))
        self.session.commit()

        stored = self.repo.matches.get_matches_for_user('user-1')
        self.assertEqual(len(stored), 1)
        self.assertEqual(stored[0].match_score, 80.0)

    def test_same_posting_for_different_users_is_allowed(self):
        self.assertTrue(self.repo.matches.insert_if_absent(_match(user_id='user-1')))
        self.assertTrue(self.repo.matches.insert_if_absent(_match(user_id='user-2')))
        self.session.commit()

        self.assertTrue(self.repo.matches.exists('user-2', 'job-1'))
        self.assertFalse(self.repo.matches.exists('user-3', 'job-1'))

    def test_matches_are_newest_first(self):
        for days, job in ((3, 'old'), (1, 'new'), (2, 'mid')):
            self.repo.matches.insert_if_absent(_match(job_post_id=job, created_at=NOW - timedelta(days=days)))
        self.session.commit()

        ordered = [m.job_post_id for m in self.repo.matches.get_matches_for_user('user-1')]

        self.assertEqual(ordered, ['new', 'mid', 'old'])
        self.assertEqual(self.repo.matches.get_matched_job_post_ids('user-1'), {'old', 'new', 'mid'})

    def test_mark_viewed_checks_ownership(self):
        match = _match()
        self.repo.matches.insert_if_absent(match)
        self.session.commit()

        self.assertIsNone(self.repo.matches.mark_viewed('someone-else', match.id))
        self.assertIsNone(self.repo.matches.mark_viewed('user-1', uuid.uuid4()))

        viewed = self.repo.matches.mark_viewed('user-1', match.id)
        self.session.commit()

        self.assertTrue(viewed.is_viewed)
        self.assertEqual(self.repo.matches.get_unviewed_matches('user-1'), [])

    def test_unnotified_for_job_post(self):
        self.repo.matches.insert_if_absent(_match(user_id='user-1'))
        self.repo.matches.insert_if_absent(_match(user_id='user-2', is_notified=True))
        self.repo.matches.insert_if_absent(_match(user_id='user-3', job_post_id='job-2'))
        self.session.commit()

        pending = self.repo.matches.get_unnotified_for_job_post('job-1')

        self.assertEqual([m.user_id for m in pending], ['user-1'])

    def test_delete_for_user_only_touches_that_user(self):
        self.repo.matches.insert_if_absent(_match(job_post_id='a'))
        self.repo.matches.insert_if_absent(_match(job_post_id='b'))
        self.repo.matches.insert_if_absent(_match(user_id='user-2', job_post_id='a'))
        self.session.commit()

        self.assertEqual(self.repo.matches.delete_for_user('user-1'), 2)
        self.session.commit()

        self.assertEqual(self.repo.matches.get_matches_for_user('user-1'), [])
        self.assertEqual(len(self.repo.matches.get_matches_for_user('user-2')), 1)
        self.assertEqual(self.repo.matches.delete_for_user('user-1'), 0)

    def test_get_by_ids(self):
        first, second = _match(job_post_id='a'), _match(job_post_id='b')
        self.repo.matches.insert_if_absent(first)
        self.repo.matches.insert_if_absent(second)
        self.session.commit()

        found = self.repo.matches.get_by_ids([first.id])

        self.assertEqual([m.job_post_id for m in found], ['a'])
        self.assertEqual(self.repo.matches.get_by_ids([]), [])


@pytest.mark.db
class TestMatchingUnitOfWork(SqliteTestCase):

    def test_commits_on_success(self):
        self.session.close()

        with matching_uow() as repo:
            repo.db.add(SearchProfile(**profile_kwargs()))

        with matching_uow() as repo:
            self.assertIsNotNone(repo.profiles.get_by_user_id('user-1'))

    def test_rolls_back_on_error(self):
        self.session.close()

        with self.assertRaises(RuntimeError):
            with matching_uow() as repo:
                repo.db.add(SearchProfile(**profile_kwargs()))
                repo.db.flush()
                raise RuntimeError("boom")

        with matching_uow() as repo:
            self.assertIsNone(repo.profiles.get_by_user_id('user-1'))
            self.assertEqual(repo.profiles.list_all(), [])


@pytest.mark.db
class TestSearchProfileRepository(SqliteTestCase):

    def test_list_all_orders_by_creation(self):
        self.add_profile(user_id='late', created_at=NOW - timedelta(days=1))
        self.add_profile(user_id='early', created_at=NOW - timedelta(days=9))

        self.assertEqual([p.user_id for p in self.repo.profiles.list_all()], ['early', 'late'])

    def test_repository_is_bound_to_one_session(self):
        repo = MatchingRepository(database.SessionLocal())
        try:
            self.assertIs(repo.profiles.db, repo.db)
            self.assertIs(repo.matches.db, repo.db)
        finally:
            repo.db.close()


if __name__ == '__main__':
    unittest.main()
