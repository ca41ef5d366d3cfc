"""
Tests for Minis/Mods score suppression.
"""
import pytest

from dudleyscores.normalize import apply_score_suppression, is_minis_mods_grade


def result(grade, home=4, away=10):
    return {
        'date': '2025-08-10T09:00:00+10:00',
        'grade': grade,
        'homeTeam': 'Dudley Redhead',
        'awayTeam': 'Central',
        'scoreHome': home,
        'scoreAway': away,
        'status': 'FT',
        'source': 'sample',
    }


class TestMinisModsGrade:
    """Tests for the grade predicate."""

    @pytest.mark.parametrize('grade', ['U6', 'u7', 'U9', 'U10 Div 2', 'U12', 'Minis', 'Mod League', 'MODS'])
    def test_bracket_grades(self, grade):
        assert is_minis_mods_grade(grade) is True

    @pytest.mark.parametrize('grade', ['U13 Div 2', 'U15 Div 1', 'U19', 'U5', 'Open Age', 'U16s'])
    def test_other_grades(self, grade):
        assert is_minis_mods_grade(grade) is False

    def test_missing_grade(self):
        assert is_minis_mods_grade(None) is False
        assert is_minis_mods_grade('') is False


class TestScoreSuppression:
    """Tests for apply_score_suppression."""

    def test_minis_scores_removed(self):
        """U9 (4, 10) -> (None, None)."""
        out = apply_score_suppression(result('U9', 4, 10))
        assert out['scoreHome'] is None
        assert out['scoreAway'] is None

    def test_other_grades_untouched(self):
        """U15 Div 1 (12, 18) passes through."""
        out = apply_score_suppression(result('U15 Div 1', 12, 18))
        assert (out['scoreHome'], out['scoreAway']) == (12, 18)

    def test_input_not_mutated(self):
        record = result('U8', 6, 2)
        out = apply_score_suppression(record)
        assert out is not record
        assert (record['scoreHome'], record['scoreAway']) == (6, 2)

    def test_idempotent(self):
        for grade in ['U9', 'U15 Div 1', 'Mini League', None]:
            once = apply_score_suppression(result(grade))
            assert apply_score_suppression(once) == once

    def test_other_fields_kept(self):
        out = apply_score_suppression(result('U11'))
        assert out['homeTeam'] == 'Dudley Redhead'
        assert out['status'] == 'FT'
