"""Tests for rubric aggregation."""

import math
import random

import pytest

from bid_scoring import (
    Rubric,
    category_score,
    clamp_score,
    overall_score,
    rating_for,
    risk_level_for,
    round2,
    score_breakdown,
    update_category_comment,
    update_sub_criterion_comment,
    update_sub_criterion_score,
    weighted_score,
)
from bid_scoring.scoring import category_scores, score_band, weighted_scores


class TestClamp:

    @pytest.mark.parametrize('raw, expected', [
        (5, 5.0),
        (-5, 0.0),
        (110, 10.0),
        ('7', 7.0),
        (' 4.5 ', 4.5),
        ('abc', 0.0),
        ('', 0.0),
        (None, 0.0),
        (float('nan'), 0.0),
    ])
    def test_clamp_score(self, raw, expected):
        assert clamp_score(raw, 10) == expected


class TestAggregation:

    def test_two_category_scenario(self, two_category_rubric):
        """Technical 8/10 at 60%, Commercial 5/10 at 40% gives 68."""
        update_sub_criterion_score(two_category_rubric, 'technical', 'quality', 8)
        update_sub_criterion_score(two_category_rubric, 'commercial', 'price', 5)

        technical = two_category_rubric['technical']
        commercial = two_category_rubric['commercial']
        assert category_score(technical) == pytest.approx(80)
        assert category_score(commercial) == pytest.approx(50)
        assert weighted_score(technical) == pytest.approx(48)
        assert weighted_score(commercial) == pytest.approx(20)

        score = overall_score(two_category_rubric)
        assert score == 68.0
        assert rating_for(score).label == 'Good'
        assert risk_level_for(score).level == 'Medium'

    def test_all_scores_at_max(self):
        """A fully scored rubric whose weights sum to 100 scores exactly 100."""
        rubric = Rubric.default()
        for category in rubric:
            for sub in category.sub_criteria.values():
                update_sub_criterion_score(rubric, category.name, sub.name, sub.max)

        assert overall_score(rubric) == 100.00

    def test_empty_rubric_scores_zero(self):
        assert overall_score(Rubric()) == 0.0

    def test_category_without_points(self):
        """Zero available points resolves to 0 instead of dividing by zero."""
        rubric = (Rubric()
            .category('empty', 50)
            .category('zero_max', 50)
                .sub_criterion('a', 0)
                .sub_criterion('b', 0))

        assert category_score(rubric['empty']) == 0
        assert category_score(rubric['zero_max']) == 0
        assert overall_score(rubric) == 0

    def test_huge_max_does_not_overflow(self):
        rubric = (Rubric()
            .category('technical', 100)
                .sub_criterion('quality', 1e307))
        update_sub_criterion_score(rubric, 'technical', 'quality', 1e307)

        assert category_score(rubric['technical']) == 100
        assert overall_score(rubric) == 100.0

    def test_maxima_summing_past_float_range(self):
        rubric = (Rubric()
            .category('technical', 100)
                .sub_criterion('quality', 1e308, score=1e308)
                .sub_criterion('methodology', 1e308))

        assert math.isinf(rubric['technical'].total_max)
        assert category_score(rubric['technical']) == pytest.approx(50)
        assert overall_score(rubric) == 50.0

    def test_weighted_is_category_times_weight(self):
        rubric = Rubric.default()
        update_sub_criterion_score(rubric, 'commercial', 'price', 7)
        update_sub_criterion_score(rubric, 'commercial', 'delivery', 3)

        commercial = rubric['commercial']
        expected = category_score(commercial) * commercial.weight / 100
        assert abs(weighted_score(commercial) - expected) < 1e-9

    def test_category_score_bounded_after_random_updates(self):
        rng = random.Random(42)
        rubric = Rubric.default()
        subs = [(c.name, s.name) for c in rubric for s in c.sub_criteria.values()]

        for _ in range(500):
            category, sub = rng.choice(subs)
            update_sub_criterion_score(rubric, category, sub, rng.uniform(-50, 50))
            for c in rubric:
                assert 0 <= category_score(c) <= 100

        assert 0 <= overall_score(rubric) <= 100

    def test_order_invariance(self):
        """Reordering categories and sub-criteria leaves the overall score unchanged."""
        forward = (Rubric()
            .category('technical', 30)
                .sub_criterion('quality', 10, score=7)
                .sub_criterion('methodology', 10, score=3)
            .category('commercial', 45)
                .sub_criterion('price', 8, score=5)
            .category('financial', 25)
                .sub_criterion('stability', 6, score=6)
                .sub_criterion('insurance', 4, score=1))

        backward = Rubric()
        for category in reversed(list(forward)):
            backward.category(category.name, category.weight)
            for sub in reversed(list(category.sub_criteria.values())):
                backward.sub_criterion(sub.name, sub.max, score=sub.score)

        assert overall_score(backward) == overall_score(forward)

    def test_score_dicts(self, two_category_rubric):
        update_sub_criterion_score(two_category_rubric, 'technical', 'quality', 10)

        assert category_scores(two_category_rubric) == {'technical': 100.0, 'commercial': 0.0}
        assert weighted_scores(two_category_rubric) == {'technical': 60.0, 'commercial': 0.0}

    def test_derived_values_not_cached(self, two_category_rubric):
        assert overall_score(two_category_rubric) == 0
        update_sub_criterion_score(two_category_rubric, 'commercial', 'price', 10)
        assert overall_score(two_category_rubric) == 40


class TestRound2:

    @pytest.mark.parametrize('value, expected', [
        (68.0, 68.0),
        (68.004, 68.0),
        (0.125, 0.13),
        (-0.125, -0.13),
        (33.333333, 33.33),
        (66.666666, 66.67),
    ])
    def test_round2(self, value, expected):
        assert round2(value) == expected

    def test_overall_score_rounded(self):
        rubric = (Rubric()
            .category('only', 100)
                .sub_criterion('a', 3, score=1))

        assert overall_score(rubric) == 33.33


class TestUpdates:

    def test_clamps_below_zero(self, two_category_rubric):
        stored = update_sub_criterion_score(two_category_rubric, 'technical', 'quality', -5)
        assert stored == 0
        assert two_category_rubric['technical'].get('quality').score == 0

    def test_clamps_above_max(self, two_category_rubric):
        update_sub_criterion_score(two_category_rubric, 'technical', 'quality', 110)
        assert two_category_rubric['technical'].get('quality').score == 10

    def test_non_numeric_input(self, two_category_rubric):
        update_sub_criterion_score(two_category_rubric, 'technical', 'quality', 'seven')
        assert two_category_rubric['technical'].get('quality').score == 0

    def test_unknown_names(self, two_category_rubric):
        with pytest.raises(KeyError):
            update_sub_criterion_score(two_category_rubric, 'legal', 'quality', 5)
        with pytest.raises(KeyError):
            update_sub_criterion_score(two_category_rubric, 'technical', 'speed', 5)

    def test_comments(self, two_category_rubric):
        update_sub_criterion_comment(two_category_rubric, 'technical', 'quality', 'Solid build')
        update_category_comment(two_category_rubric, 'commercial', 'Pricey')

        assert two_category_rubric['technical'].get('quality').comment == 'Solid build'
        assert two_category_rubric['commercial'].comments == 'Pricey'


class TestBreakdown:

    @pytest.mark.parametrize('score, max_score, band', [
        (8, 10, 'high'),
        (6, 10, 'medium'),
        (5.9, 10, 'low'),
        (80, 100, 'high'),
        (3, 0, 'low'),
    ])
    def test_score_band(self, score, max_score, band):
        assert score_band(score, max_score) == band

    def test_score_breakdown(self, two_category_rubric):
        update_sub_criterion_score(two_category_rubric, 'technical', 'quality', 9)
        update_sub_criterion_score(two_category_rubric, 'commercial', 'price', 6)

        breakdown = score_breakdown(two_category_rubric).set_index('category')
        assert list(breakdown.index) == ['technical', 'commercial']
        assert breakdown.loc['technical', 'category_score'] == pytest.approx(90)
        assert breakdown.loc['technical', 'weighted_score'] == pytest.approx(54)
        assert breakdown.loc['technical', 'band'] == 'high'
        assert breakdown.loc['commercial', 'band'] == 'medium'
        assert math.isclose(breakdown['weighted_score'].sum(), 78)
