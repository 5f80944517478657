"""
Bid Scoring Library
Weighted rubric scoring for procurement bid evaluations
"""

__version__ = "0.1.0"

from .rubric import (
    SubCriterion,
    Category,
    Rubric,
    clamp_score,
)

from .scoring import (
    category_score,
    weighted_score,
    overall_score,
    round2,
    update_sub_criterion_score,
    update_sub_criterion_comment,
    update_category_comment,
    score_breakdown,
)

from .classification import (
    Rating,
    RiskLevel,
    rating_for,
    risk_level_for,
)

from .bids import Supplier, BidItem, Bid, ComparisonBid, compare_bids

from .evaluation import (
    Evaluation,
    EvaluationStatus,
    EvaluationSaveError,
    Recommendation,
    RiskAssessment,
)

from .export import export_report

__all__ = [
    "SubCriterion",
    "Category",
    "Rubric",
    "clamp_score",
    "category_score",
    "weighted_score",
    "overall_score",
    "round2",
    "update_sub_criterion_score",
    "update_sub_criterion_comment",
    "update_category_comment",
    "score_breakdown",
    "Rating",
    "RiskLevel",
    "rating_for",
    "risk_level_for",
    "Supplier",
    "BidItem",
    "Bid",
    "ComparisonBid",
    "compare_bids",
    "Evaluation",
    "EvaluationStatus",
    "EvaluationSaveError",
    "Recommendation",
    "RiskAssessment",
    "export_report",
]
