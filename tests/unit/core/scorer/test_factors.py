import unittest

from core.scorer import factors
from core.scorer.countries import resolve_country
from core.scorer.models import EmploymentType


class TestSkillsCredit(unittest.TestCase):

    def test_posting_without_skills_is_unknown(self):
        self.assertEqual(factors.skills_credit(['Python'], []), 50.0)
        self.assertEqual(factors.skills_credit([], None), 50.0)
        self.assertEqual(factors.skills_credit(None, ['  ', '']), 50.0)

    def test_profile_without_skills_scores_zero(self):
        self.assertEqual(factors.skills_credit([], ['Go']), 0.0)

    def test_denominator_is_required_count(self):
        credit = factors.skills_credit(['react', 'go'], ['React', 'Go', 'SQL'])
        self.assertAlmostEqual(credit, 200.0 / 3)

    def test_superset_profile_gets_full_credit(self):
        credit = factors.skills_credit(['Go', 'Rust', 'SQL', 'Kafka'], ['go', 'sql'])
        self.assertEqual(credit, 100.0)

    def test_normalization_trims_lowercases_and_dedupes(self):
        credit = factors.skills_credit([' PYTHON '], ['python', 'Python ', 'Docker'])
        self.assertEqual(credit, 50.0)

    def test_matched_skills_keep_profile_order(self):
        matched = factors.matched_skills(['SQL', 'React', 'Java'], ['react', 'sql'])
        self.assertEqual(matched, ['sql', 'react'])


class TestLocationCredit(unittest.TestCase):

    def test_posting_without_location_is_unknown(self):
        self.assertEqual(factors.location_credit('Vietnam', None), 50.0)
        self.assertEqual(factors.location_credit('Vietnam', '   '), 50.0)

    def test_profile_without_country_scores_zero(self):
        self.assertEqual(factors.location_credit(None, 'Hanoi, Vietnam'), 0.0)

    def test_country_name_match(self):
        self.assertEqual(factors.location_credit('vietnam', 'Hanoi, VIETNAM'), 100.0)

    def test_country_code_matches_as_word(self):
        self.assertEqual(factors.location_credit('Vietnam', 'Da Nang, VN'), 100.0)
        self.assertEqual(factors.location_credit('SG', 'Remote - Singapore'), 100.0)

    def test_code_inside_a_word_is_not_a_match(self):
        self.assertEqual(factors.location_credit('India', 'Berlin, Germany'), 50.0)

    def test_other_country_is_partial(self):
        self.assertEqual(factors.location_credit('Japan', 'Seoul, South Korea'), 50.0)

    def test_unknown_country_text_still_matches_by_substring(self):
        self.assertEqual(factors.location_credit('Atlantis', 'Central Atlantis'), 100.0)

    def test_resolve_country(self):
        self.assertEqual(resolve_country('vn'), ('vietnam', 'VN'))
        self.assertEqual(resolve_country(' United Kingdom '), ('united kingdom', 'GB'))
        self.assertEqual(resolve_country(''), (None, None))


class TestSalaryCredit(unittest.TestCase):

    def test_posting_without_salary_is_unknown(self):
        self.assertEqual(factors.salary_credit(3000, 5000, None, None), 50.0)

    def test_profile_without_bounds_is_unknown(self):
        self.assertEqual(factors.salary_credit(None, None, 4000, 6000), 50.0)

    def test_overlapping_ranges(self):
        self.assertEqual(factors.salary_credit(3000, 5000, 4000, 6000), 100.0)
        self.assertEqual(factors.salary_credit(3000, 5000, 5000, 7000), 100.0)

    def test_posting_range_inside_profile_range(self):
        self.assertEqual(factors.salary_credit(3000, 9000, 4000, 6000), 100.0)

    def test_gap_exactly_at_tolerance_is_close(self):
        # width 2000, 20% = 400
        self.assertEqual(factors.salary_credit(3000, 5000, 5400, 6000), 75.0)
        self.assertEqual(factors.salary_credit(3000, 5000, 2000, 2600), 75.0)

    def test_gap_beyond_tolerance_is_far(self):
        self.assertEqual(factors.salary_credit(3000, 5000, 5401, 6000), 30.0)
        self.assertEqual(factors.salary_credit(3000, 5000, 2000, 2599), 30.0)

    def test_profile_min_only(self):
        self.assertEqual(factors.salary_credit(5000, None, 3000, 5000), 100.0)
        self.assertEqual(factors.salary_credit(5000, None, 3000, 4000), 75.0)
        self.assertEqual(factors.salary_credit(5000, None, 3000, 3999), 30.0)

    def test_profile_max_only(self):
        self.assertEqual(factors.salary_credit(None, 5000, 5000, 7000), 100.0)
        self.assertEqual(factors.salary_credit(None, 5000, 6000, 7000), 75.0)
        self.assertEqual(factors.salary_credit(None, 5000, 6001, 7000), 30.0)

    def test_posting_single_bound_within_profile(self):
        self.assertEqual(factors.salary_credit(3000, 5000, 4000, None), 100.0)
        self.assertEqual(factors.salary_credit(3000, 5000, None, 4500), 100.0)
        self.assertEqual(factors.salary_credit(3000, None, 3500, None), 100.0)

    def test_posting_single_bound_outside_profile(self):
        self.assertEqual(factors.salary_credit(3000, 5000, 5200, None), 30.0)
        self.assertEqual(factors.salary_credit(None, 5000, None, 5200), 30.0)

    def test_custom_tolerance(self):
        self.assertEqual(factors.salary_credit(3000, 5000, 5500, 6000, tolerance=0.25), 75.0)


class TestEmploymentCredit(unittest.TestCase):

    def test_posting_without_types_is_unknown(self):
        self.assertEqual(factors.employment_credit(['FULL_TIME'], []), 50.0)

    def test_profile_without_types_scores_zero(self):
        self.assertEqual(factors.employment_credit([], ['FULL_TIME']), 0.0)

    def test_label_spelling_is_ignored(self):
        self.assertEqual(factors.employment_credit(['FULL_TIME'], ['Full-Time']), 100.0)
        self.assertEqual(factors.employment_credit([EmploymentType.PART_TIME], ['parttime']), 100.0)

    def test_no_overlap_is_binary_zero(self):
        self.assertEqual(factors.employment_credit(['INTERNSHIP'], ['FULL_TIME', 'CONTRACT']), 0.0)

    def test_enum_from_label(self):
        self.assertIs(EmploymentType.from_label('full time'), EmploymentType.FULL_TIME)
        self.assertIsNone(EmploymentType.from_label('gig'))


class TestTitleCredit(unittest.TestCase):

    def test_posting_without_title_is_unknown(self):
        self.assertEqual(factors.title_credit(['Engineer'], None), 50.0)

    def test_profile_without_titles_scores_zero(self):
        self.assertEqual(factors.title_credit([], 'Engineer'), 0.0)

    def test_substring_match(self):
        self.assertEqual(factors.title_credit(['Backend Engineer'], 'Senior BACKEND engineer'), 100.0)

    def test_no_match(self):
        self.assertEqual(factors.title_credit(['Designer'], 'Backend Engineer'), 0.0)


if __name__ == '__main__':
    unittest.main()
