# scoring.py
"""Aggregation of sub-criterion scores into category, weighted and overall scores.

All functions are pure projections over the current rubric state. Nothing is
cached, so every read reflects the latest edits.
"""

import math
from typing import Dict

import pandas as pd

from .rubric import Category, Rubric, clamp_score


def category_score(category: Category) -> float:
    """
    Percentage of available points earned in a category (0-100)

    Returns 0 when the category has no points available.
    """
    total_max = category.total_max
    if total_max == 0:
        return 0.0
    if math.isinf(total_max):
        # Maxima summed past float range; measure against the largest one
        subs = list(category.sub_criteria.values())
        largest = max(sub.max for sub in subs)
        total_score = sum(sub.score / largest for sub in subs)
        return 100 * (total_score / sum(sub.max / largest for sub in subs))
    return 100 * (category.total_score / total_max)


def weighted_score(category: Category) -> float:
    """Category score scaled by the category weight"""
    return category_score(category) * category.weight / 100


def round2(value: float) -> float:
    """Rounds to 2 decimals, half away from zero"""
    scaled = math.floor(abs(value) * 100 + 0.5)
    return math.copysign(scaled, value) / 100


def overall_score(rubric: Rubric) -> float:
    """Sum of weighted scores across all categories, rounded to 2 decimals"""
    return round2(sum(weighted_score(c) for c in rubric))


def category_scores(rubric: Rubric) -> Dict[str, float]:
    return {c.name: category_score(c) for c in rubric}


def weighted_scores(rubric: Rubric) -> Dict[str, float]:
    return {c.name: weighted_score(c) for c in rubric}


# === Rubric edits ===

def update_sub_criterion_score(rubric: Rubric, category: str, sub_criterion: str,
                               new_score) -> float:
    """
    Stores a new score for a sub-criterion

    Args:
        rubric: Rubric to update
        category: Category name
        sub_criterion: Sub-criterion name
        new_score: Raw input; clamped into [0, max], non-numeric counts as 0

    Returns:
        The value actually stored
    """
    sub = rubric.get(category).get(sub_criterion)
    sub.score = clamp_score(new_score, sub.max)
    return sub.score


def update_sub_criterion_comment(rubric: Rubric, category: str, sub_criterion: str,
                                 comment: str):
    rubric.get(category).get(sub_criterion).comment = comment


def update_category_comment(rubric: Rubric, category: str, comment: str):
    rubric.get(category).comments = comment


# === Presentation helpers ===

def score_band(score: float, max_score: float = 100.0) -> str:
    """Colour band of a score relative to its maximum: 'high', 'medium' or 'low'"""
    if not max_score:
        return 'low'
    percentage = 100 * score / max_score
    if percentage >= 80:
        return 'high'
    if percentage >= 60:
        return 'medium'
    return 'low'


def score_breakdown(rubric: Rubric) -> pd.DataFrame:
    """Returns one row per category with its category and weighted scores"""
    rows = []
    for category in rubric:
        score = category_score(category)
        rows.append({
            'category': category.name,
            'weight': category.weight,
            'category_score': score,
            'weighted_score': weighted_score(category),
            'band': score_band(score),
        })

    return pd.DataFrame(rows, columns=[
        'category', 'weight', 'category_score', 'weighted_score', 'band'
    ])
