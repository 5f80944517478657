"""Tests for rating and risk level classification."""

import pandas as pd
import pytest

from bid_scoring import rating_for, risk_level_for
from bid_scoring.classification import rating_labels, risk_labels


class TestRating:

    @pytest.mark.parametrize('score, label', [
        (100, 'Excellent'),
        (90, 'Excellent'),
        (89.99, 'Very Good'),
        (80, 'Very Good'),
        (79.999, 'Good'),
        (70, 'Good'),
        (68, 'Good'),
        (60, 'Fair'),
        (59.99, 'Poor'),
        (0, 'Poor'),
    ])
    def test_boundaries(self, score, label):
        assert rating_for(score).label == label

    def test_out_of_range_scores(self):
        """Scores outside 0-100 are not clamped but still classify."""
        assert rating_for(150).label == 'Excellent'
        assert rating_for(-20).label == 'Poor'
        assert rating_for(float('nan')).label == 'Poor'

    def test_rating_carries_display_info(self):
        rating = rating_for(95)
        assert rating.color == '#10b981'
        assert rating.icon


class TestRiskLevel:

    @pytest.mark.parametrize('score, level', [
        (100, 'Low'),
        (80, 'Low'),
        (79.99, 'Medium-Low'),
        (70, 'Medium-Low'),
        (68, 'Medium'),
        (60, 'Medium'),
        (59.99, 'High'),
        (50, 'High'),
        (49.99, 'Very High'),
        (0, 'Very High'),
    ])
    def test_boundaries(self, score, level):
        assert risk_level_for(score).level == level

    def test_out_of_range_scores(self):
        assert risk_level_for(1000).level == 'Low'
        assert risk_level_for(-1).level == 'Very High'

    def test_descriptions(self):
        assert risk_level_for(85).description == 'Minimal risk'
        assert risk_level_for(10).description == 'Unacceptable risk'

    def test_independent_of_rating(self):
        """85 is Very Good but already Low risk."""
        assert rating_for(85).label == 'Very Good'
        assert risk_level_for(85).level == 'Low'


class TestVectorised:

    def test_rating_labels(self):
        scores = pd.Series([95, 85, 75, 65, 10, None], index=list('abcdef'))
        labels = rating_labels(scores)

        assert list(labels.index) == list('abcdef')
        assert list(labels) == ['Excellent', 'Very Good', 'Good', 'Fair', 'Poor', 'Poor']

    def test_risk_labels(self):
        scores = pd.Series([85, 72, 60, 55, 20])
        assert list(risk_labels(scores)) == ['Low', 'Medium-Low', 'Medium', 'High', 'Very High']

    def test_matches_scalar_functions(self):
        scores = pd.Series([x / 4 for x in range(0, 420)])
        assert list(rating_labels(scores)) == [rating_for(s).label for s in scores]
        assert list(risk_labels(scores)) == [risk_level_for(s).level for s in scores]
