# example_evaluation.py
"""Scoring a bid with the default rubric, a fluent rubric and a YAML rubric."""

import logging
from pathlib import Path

from bid_scoring import Bid, ComparisonBid, Evaluation, Rubric, compare_bids, score_breakdown

logging.basicConfig(level=logging.INFO)

bid = Bid.from_dict({
    'id': 'BID-2024-001',
    'rfqTitle': 'Laptop Procurement Q1 2024',
    'supplier': {'name': 'TechCorp Inc.', 'rating': 4.8, 'financialRating': 'A+'},
    'amount': 125000,
})

# ── Example 1: Default rubric ──

print("=== Example 1: Default rubric ===\n")

evaluation = Evaluation(bid.id, evaluator='J. Doe')
scores = {
    'technical': {'quality': 9, 'specifications': 8, 'methodology': 7},
    'commercial': {'price': 6, 'payment_terms': 7, 'delivery': 6},
    'financial': {'stability': 9, 'references': 5, 'insurance': 4},
    'compliance': {'documentation': 8, 'regulations': 6},
    'experience': {'past_performance': 5, 'similar_projects': 3},
}
for category, subs in scores.items():
    for sub, score in subs.items():
        evaluation.update_sub_criterion_score(category, sub, score)

print(score_breakdown(evaluation.rubric))
print(f"\nOverall: {evaluation.overall_score} "
      f"({evaluation.rating.label}, risk {evaluation.risk_level.level})\n")

# ── Example 2: Fluent rubric ──

print("=== Example 2: Fluent rubric ===\n")

rubric = (Rubric()
    .category('technical', 60)
        .sub_criterion('quality', 10, score=8)
    .category('commercial', 40)
        .sub_criterion('price', 10, score=5))

evaluation = Evaluation(bid.id, rubric=rubric)
print(f"Overall: {evaluation.overall_score} ({evaluation.rating.label})\n")

# ── Example 3: YAML rubric, comparison and completion ──

print("=== Example 3: YAML rubric ===\n")

rubric = Rubric.from_yaml(str(Path(__file__).parent / 'procurement_rubric.yaml'))
evaluation = Evaluation(
    bid.id,
    rubric=rubric,
    persist=lambda snapshot: print(f"persisted {snapshot['status']}"),
    on_complete=lambda snapshot: print(f"completed with {snapshot['overall_score']}"),
)
evaluation.update_sub_criterion_score('technical', 'quality', 9)
evaluation.update_sub_criterion_score('commercial', 'price', 8)
evaluation.recommendation = 'negotiate'
evaluation.complete()

competitors = [
    ComparisonBid.from_dict({'id': 'BID-2024-003', 'supplier': {'name': 'CompuGlobal Ltd'},
                             'amount': 118500, 'overallScore': 85}),
]
print(compare_bids(bid, evaluation.overall_score, competitors)[
    ['bid_id', 'supplier', 'overall_score', 'rating', 'price_difference']
])
