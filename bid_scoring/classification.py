# classification.py
"""Qualitative rating and risk level derived from an overall score."""

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class Rating:
    label: str
    color: str
    icon: str


@dataclass(frozen=True)
class RiskLevel:
    level: str
    color: str
    description: str


# (lower bound, result); first bound the score reaches wins
RATING_THRESHOLDS: List[Tuple[float, Rating]] = [
    (90, Rating('Excellent', '#10b981', '\U0001F3C6')),
    (80, Rating('Very Good', '#22c55e', '⭐')),
    (70, Rating('Good', '#f59e0b', '\U0001F44D')),
    (60, Rating('Fair', '#f97316', '⚠️')),
]
RATING_FLOOR = Rating('Poor', '#ef4444', '❌')

RISK_THRESHOLDS: List[Tuple[float, RiskLevel]] = [
    (80, RiskLevel('Low', '#10b981', 'Minimal risk')),
    (70, RiskLevel('Medium-Low', '#22c55e', 'Acceptable risk')),
    (60, RiskLevel('Medium', '#f59e0b', 'Moderate risk')),
    (50, RiskLevel('High', '#f97316', 'Significant risk')),
]
RISK_FLOOR = RiskLevel('Very High', '#ef4444', 'Unacceptable risk')


def _step(score: float, thresholds, floor):
    for lower_bound, result in thresholds:
        if score >= lower_bound:
            return result
    return floor


def rating_for(score: float) -> Rating:
    """
    Rating for an overall score

    Defined for every real number; the input is not clamped, so scores above
    100 rate Excellent and negative scores rate Poor.
    """
    return _step(score, RATING_THRESHOLDS, RATING_FLOOR)


def risk_level_for(score: float) -> RiskLevel:
    """Risk level for an overall score (independent thresholds from the rating)"""
    return _step(score, RISK_THRESHOLDS, RISK_FLOOR)


def _labels(scores: pd.Series, thresholds, floor_label: str) -> pd.Series:
    values = pd.to_numeric(scores, errors='coerce').to_numpy(dtype=float)
    # NaN compares False everywhere and falls through to the floor
    with np.errstate(invalid='ignore'):
        conditions = [values >= lower_bound for lower_bound, _ in thresholds]
    choices = [_name(result) for _, result in thresholds]
    labels = np.select(conditions, choices, default=floor_label)
    return pd.Series(labels, index=scores.index, dtype=object)


def _name(result) -> str:
    return result.label if isinstance(result, Rating) else result.level


def rating_labels(scores: pd.Series) -> pd.Series:
    """Vectorised rating_for returning label strings"""
    return _labels(scores, RATING_THRESHOLDS, RATING_FLOOR.label)


def risk_labels(scores: pd.Series) -> pd.Series:
    """Vectorised risk_level_for returning level strings"""
    return _labels(scores, RISK_THRESHOLDS, RISK_FLOOR.level)
