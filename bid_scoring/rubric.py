# rubric.py
"""Hierarchical scoring rubric: categories of weighted sub-criteria."""

import copy
import json
import math
import warnings
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import pandas as pd
import yaml


WEIGHT_TOTAL = 100.0
WEIGHT_TOLERANCE = 1e-9


def _label(key: str) -> str:
    return key.replace('_', ' ').replace('-', ' ').title()


def _to_number(value: Any) -> float:
    """Coerces raw input to float; anything unparseable becomes NaN"""
    if isinstance(value, bool) or value is None:
        return math.nan
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def clamp_score(value: Any, max_score: float) -> float:
    """
    Clamps a raw score into [0, max_score]

    Non-numeric, empty or NaN input counts as 0. Out-of-range values are
    clamped, never rejected.
    """
    number = _to_number(value)
    if math.isnan(number):
        return 0.0
    return float(min(max(number, 0.0), max_score))


@dataclass
class SubCriterion:
    """Leaf scoring item. The score always stays within [0, max]."""

    name: str
    max: float
    score: float = 0.0
    comment: str = ''

    def __post_init__(self):
        max_score = _to_number(self.max)
        if not math.isfinite(max_score) or max_score < 0:
            raise ValueError(
                f"Sub-criterion '{self.name}' needs a finite, non-negative max, got: {self.max!r}"
            )
        self.max = max_score
        self.score = clamp_score(self.score, self.max)

    @property
    def label(self) -> str:
        return _label(self.name)


@dataclass
class Category:
    """Weighted top-level scoring dimension."""

    name: str
    weight: float
    sub_criteria: Dict[str, SubCriterion] = field(default_factory=OrderedDict)
    comments: str = ''

    def __post_init__(self):
        weight = _to_number(self.weight)
        if not 0 <= weight <= WEIGHT_TOTAL:
            raise ValueError(
                f"Category '{self.name}' weight must be between 0 and 100, got: {self.weight!r}"
            )
        self.weight = weight

    @property
    def label(self) -> str:
        return _label(self.name)

    @property
    def total_max(self) -> float:
        return sum(sub.max for sub in self.sub_criteria.values())

    @property
    def total_score(self) -> float:
        return sum(sub.score for sub in self.sub_criteria.values())

    def add_sub_criterion(self, sub: SubCriterion):
        self.sub_criteria[sub.name] = sub

    def get(self, name: str) -> SubCriterion:
        try:
            return self.sub_criteria[name]
        except KeyError:
            raise KeyError(
                f"Unknown sub-criterion '{name}' in category '{self.name}'. "
                f"Available: {list(self.sub_criteria.keys())}"
            ) from None


DEFAULT_RUBRIC_CONFIG = {
    'technical': {
        'weight': 30,
        'sub_criteria': {'quality': 10, 'specifications': 10, 'methodology': 10},
    },
    'commercial': {
        'weight': 25,
        'sub_criteria': {'price': 10, 'payment_terms': 8, 'delivery': 7},
    },
    'financial': {
        'weight': 20,
        'sub_criteria': {'stability': 10, 'references': 6, 'insurance': 4},
    },
    'compliance': {
        'weight': 15,
        'sub_criteria': {'documentation': 8, 'regulations': 7},
    },
    'experience': {
        'weight': 10,
        'sub_criteria': {'past_performance': 6, 'similar_projects': 4},
    },
}


class Rubric:
    """Ordered collection of categories making up one bid's scoring schema"""

    def __init__(self, categories: Optional[Dict[str, Category]] = None):
        self.categories: Dict[str, Category] = OrderedDict()
        for name, category in (categories or {}).items():
            self.categories[name] = category

    # === Factory methods ===

    @classmethod
    def from_config(cls, config: Dict[str, Dict[str, Any]],
                    validate_weights: bool = False) -> 'Rubric':
        """
        Create a rubric from a configuration dictionary

        Args:
            config: Mapping of category name to its definition
            validate_weights: If True, weights that don't sum to 100 raise
                ValueError instead of warning

        Example:
            config = {
                'technical': {'weight': 60, 'sub_criteria': {'quality': {'max': 10}}},
                'commercial': {'weight': 40, 'sub_criteria': {'price': 10}}
            }
            rubric = Rubric.from_config(config)
        """
        rubric = cls()

        for category_name, params in config.items():
            if not isinstance(params, dict):
                raise ValueError(
                    f"Category '{category_name}' must be a mapping with a weight, got: {params!r}"
                )
            params = dict(params)  # Don't modify original
            if 'weight' not in params:
                raise ValueError(f"Category '{category_name}' is missing a weight")
            category = Category(
                name=category_name,
                weight=params.pop('weight'),
                comments=params.pop('comments', '') or '',
            )

            for sub_name, sub_params in (params.pop('sub_criteria', None) or {}).items():
                if isinstance(sub_params, dict):
                    if 'max' not in sub_params:
                        raise ValueError(
                            f"Sub-criterion '{category_name}.{sub_name}' is missing a max"
                        )
                    sub = SubCriterion(
                        name=sub_name,
                        max=sub_params['max'],
                        score=sub_params.get('score', 0.0),
                        comment=sub_params.get('comment', '') or '',
                    )
                else:
                    sub = SubCriterion(name=sub_name, max=sub_params)
                category.add_sub_criterion(sub)

            if params:
                raise ValueError(
                    f"Unknown keys for category '{category_name}': {sorted(params)}"
                )
            rubric.categories[category_name] = category

        rubric.check_weights(strict=validate_weights)
        return rubric

    @classmethod
    def from_yaml(cls, filepath: str, validate_weights: bool = False) -> 'Rubric':
        """
        Create a rubric from a YAML file

        Example YAML:
            rubric:
              technical:
                weight: 60
                sub_criteria:
                  quality: {max: 10}
              commercial:
                weight: 40
                sub_criteria:
                  price: 10
        """
        with open(filepath, 'r') as f:
            data = yaml.safe_load(f) or {}
        return cls.from_config(data.get('rubric', data), validate_weights)

    @classmethod
    def from_json(cls, filepath: str, validate_weights: bool = False) -> 'Rubric':
        """Create a rubric from a JSON file (same layout as YAML)"""
        with open(filepath, 'r') as f:
            data = json.load(f)
        return cls.from_config(data.get('rubric', data), validate_weights)

    @classmethod
    def default(cls) -> 'Rubric':
        """Standard procurement rubric: technical, commercial, financial, compliance, experience"""
        return cls.from_config(DEFAULT_RUBRIC_CONFIG)

    # === Fluent interface ===

    def category(self, name: str, weight: float, comments: str = '') -> 'Rubric':
        """
        Add a category (fluent interface)

        Subsequent sub_criterion calls attach to this category.
        """
        self.categories[name] = Category(name=name, weight=weight, comments=comments)
        return self

    def sub_criterion(self, name: str, max: float, score: float = 0.0,
                      comment: str = '') -> 'Rubric':
        """Add a sub-criterion to the most recently added category"""
        if not self.categories:
            raise RuntimeError("No categories defined. Call category() first.")
        current = next(reversed(self.categories.values()))
        current.add_sub_criterion(
            SubCriterion(name=name, max=max, score=score, comment=comment)
        )
        return self

    # === Core methods ===

    def get(self, name: str) -> Category:
        try:
            return self.categories[name]
        except KeyError:
            raise KeyError(
                f"Unknown category '{name}'. Available: {list(self.categories.keys())}"
            ) from None

    def __getitem__(self, name: str) -> Category:
        return self.get(name)

    def __iter__(self):
        return iter(self.categories.values())

    def __len__(self):
        return len(self.categories)

    def __contains__(self, name) -> bool:
        return name in self.categories

    def total_weight(self) -> float:
        """Returns the sum of all category weights"""
        return sum(c.weight for c in self.categories.values())

    def check_weights(self, strict: bool = False) -> bool:
        """
        Checks that category weights sum to 100

        Args:
            strict: If True, raise ValueError on mismatch; otherwise warn

        Returns:
            True if weights sum to 100
        """
        total = self.total_weight()
        if abs(total - WEIGHT_TOTAL) <= WEIGHT_TOLERANCE:
            return True

        message = f"Category weights sum to {total:g}, expected 100."
        if strict:
            raise ValueError(message)
        warnings.warn(message)
        return False

    def to_config(self) -> Dict[str, Dict[str, Any]]:
        """Returns a plain dict accepted by from_config"""
        return {
            c.name: {
                'weight': c.weight,
                'comments': c.comments,
                'sub_criteria': {
                    s.name: {'max': s.max, 'score': s.score, 'comment': s.comment}
                    for s in c.sub_criteria.values()
                },
            }
            for c in self.categories.values()
        }

    def copy(self) -> 'Rubric':
        return copy.deepcopy(self)

    def summary(self) -> pd.DataFrame:
        """Returns one row per sub-criterion with its category and weight"""
        rows = []
        for category in self.categories.values():
            for sub in category.sub_criteria.values():
                rows.append({
                    'category': category.name,
                    'category_weight': category.weight,
                    'sub_criterion': sub.name,
                    'max': sub.max,
                    'score': sub.score,
                    'comment': sub.comment,
                })

        return pd.DataFrame(rows, columns=[
            'category', 'category_weight', 'sub_criterion', 'max', 'score', 'comment'
        ])
