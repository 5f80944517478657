# export.py
"""Excel export of an evaluation report."""

from typing import List, Optional

import pandas as pd

from .bids import Bid, ComparisonBid, compare_bids
from .evaluation import NOTE_KINDS, Evaluation
from .scoring import score_breakdown


def summary_frame(evaluation: Evaluation, bid: Optional[Bid] = None) -> pd.DataFrame:
    """Key/value rows describing the evaluation outcome"""
    score = evaluation.overall_score
    rows = [
        ('Bid', evaluation.bid_id),
        ('Evaluator', evaluation.evaluator),
        ('Evaluation Date', evaluation.evaluation_date.isoformat()),
        ('Status', evaluation.status.value),
        ('Overall Score', score),
        ('Rating', evaluation.rating.label),
        ('Risk Level', evaluation.risk_level.level),
        ('Recommendation', evaluation.recommendation.value if evaluation.recommendation else ''),
        ('Risk Assessment', evaluation.risk_assessment.value),
        ('Justification', evaluation.justification),
    ]
    if bid is not None:
        rows[1:1] = [
            ('RFQ', bid.rfq_title),
            ('Supplier', bid.supplier.name),
            ('Amount', bid.amount),
            ('Currency', bid.currency),
        ]
    return pd.DataFrame(rows, columns=['field', 'value'])


def notes_frame(evaluation: Evaluation) -> pd.DataFrame:
    rows = []
    for kind in NOTE_KINDS:
        for position, text in enumerate(getattr(evaluation, kind), start=1):
            rows.append({'kind': kind, 'position': position, 'text': text})
    return pd.DataFrame(rows, columns=['kind', 'position', 'text'])


def export_report(evaluation: Evaluation, path_or_buffer,
                  bid: Optional[Bid] = None,
                  comparison: Optional[List[ComparisonBid]] = None):
    """
    Writes the evaluation to an Excel workbook

    Args:
        evaluation: Evaluation to export
        path_or_buffer: File path or binary buffer (e.g. BytesIO)
        bid: Bid record, adds bid details to the summary
        comparison: Competing bids, adds a Comparison sheet (requires bid)
    """
    with pd.ExcelWriter(path_or_buffer, engine='openpyxl') as writer:
        summary_frame(evaluation, bid).to_excel(writer, sheet_name='Summary', index=False)
        score_breakdown(evaluation.rubric).to_excel(writer, sheet_name='Breakdown', index=False)

        rubric = evaluation.rubric.summary()
        comments = {c.name: c.comments for c in evaluation.rubric}
        rubric['category_comments'] = rubric['category'].map(comments)
        rubric.to_excel(writer, sheet_name='Rubric', index=False)

        notes_frame(evaluation).to_excel(writer, sheet_name='Notes', index=False)

        if bid is not None and comparison:
            compare_bids(bid, evaluation.overall_score, comparison).to_excel(
                writer, sheet_name='Comparison', index=False
            )
