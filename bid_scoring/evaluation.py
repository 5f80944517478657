# evaluation.py
"""Evaluation of a single bid: rubric scores, evaluator notes and the save workflow."""

import logging
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from . import scoring
from .bids import Bid, ComparisonBid, compare_bids
from .classification import Rating, RiskLevel, rating_for, risk_level_for
from .rubric import Rubric

logger = logging.getLogger(__name__)

NOTE_KINDS = ('strengths', 'weaknesses', 'improvements')


class EvaluationStatus(str, Enum):
    IN_PROGRESS = 'in_progress'
    COMPLETED = 'completed'


class Recommendation(str, Enum):
    AWARD = 'award'
    NEGOTIATE = 'negotiate'
    CLARIFY = 'clarify'
    REJECT = 'reject'
    RESERVE = 'reserve'


class RiskAssessment(str, Enum):
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'
    VERY_HIGH = 'very_high'


class EvaluationSaveError(Exception):
    """Persisting an evaluation failed. Local state is kept so the user can retry."""

    def __init__(self, message: str, snapshot: Dict[str, Any]):
        super().__init__(message)
        self.snapshot = snapshot


def _coerce(enum_cls, value):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = [member.value for member in enum_cls]
        raise ValueError(
            f"Invalid {enum_cls.__name__}: {value!r}. Use one of {allowed}."
        ) from None


class Evaluation:
    """
    In-memory evaluation of one bid

    Scores are never cached: overall_score, rating and risk_level are
    recomputed from the rubric on every read. Persistence is delegated to the
    `persist` callable, which receives the full snapshot dict.
    """

    def __init__(self, bid_id: str, evaluator: str = '',
                 evaluation_date: Optional[date] = None,
                 rubric: Optional[Rubric] = None,
                 persist: Optional[Callable[[Dict[str, Any]], Any]] = None,
                 on_complete: Optional[Callable[[Dict[str, Any]], Any]] = None):
        """
        Args:
            bid_id: Identifier of the bid under evaluation
            evaluator: Name of the person scoring
            evaluation_date: Defaults to today
            rubric: Scoring schema (default: Rubric.default())
            persist: Called with the snapshot on save_draft/complete
            on_complete: Called with the snapshot after a successful complete()
        """
        self.bid_id = bid_id
        self.evaluator = evaluator
        self.evaluation_date = evaluation_date or date.today()
        self.rubric = rubric if rubric is not None else Rubric.default()
        self.status = EvaluationStatus.IN_PROGRESS
        self._recommendation: Optional[Recommendation] = None
        self.justification = ''
        self._risk_assessment = RiskAssessment.LOW
        self.strengths: List[str] = []
        self.weaknesses: List[str] = []
        self.improvements: List[str] = []

        self.persist = persist
        self.on_complete = on_complete
        self.saving = False
        self.weighted_scores: Dict[str, float] = {c.name: 0.0 for c in self.rubric}
        self.last_updated: Optional[str] = None

    # === Narrative fields ===

    @property
    def recommendation(self) -> Optional[Recommendation]:
        return self._recommendation

    @recommendation.setter
    def recommendation(self, value):
        self._recommendation = None if value in (None, '') else _coerce(Recommendation, value)

    @property
    def risk_assessment(self) -> RiskAssessment:
        return self._risk_assessment

    @risk_assessment.setter
    def risk_assessment(self, value):
        self._risk_assessment = _coerce(RiskAssessment, value)

    # === Derived scores ===

    @property
    def overall_score(self) -> float:
        return scoring.overall_score(self.rubric)

    @property
    def rating(self) -> Rating:
        return rating_for(self.overall_score)

    @property
    def risk_level(self) -> RiskLevel:
        return risk_level_for(self.overall_score)

    def category_score(self, category: str) -> float:
        return scoring.category_score(self.rubric.get(category))

    def weighted_score(self, category: str) -> float:
        return scoring.weighted_score(self.rubric.get(category))

    # === Rubric edits ===

    def update_sub_criterion_score(self, category: str, sub_criterion: str, score) -> float:
        return scoring.update_sub_criterion_score(self.rubric, category, sub_criterion, score)

    def update_sub_criterion_comment(self, category: str, sub_criterion: str, comment: str):
        scoring.update_sub_criterion_comment(self.rubric, category, sub_criterion, comment)

    def update_category_comment(self, category: str, comment: str):
        scoring.update_category_comment(self.rubric, category, comment)

    # === Strengths / weaknesses / improvements ===

    def _notes(self, kind: str) -> List[str]:
        if kind not in NOTE_KINDS:
            raise ValueError(f"Unknown note list: {kind}. Use one of {list(NOTE_KINDS)}.")
        return getattr(self, kind)

    def add_item(self, kind: str) -> int:
        """Appends an empty entry and returns its index"""
        notes = self._notes(kind)
        notes.append('')
        return len(notes) - 1

    def update_item(self, kind: str, index: int, value: str):
        notes = self._notes(kind)
        if not 0 <= index < len(notes):
            raise IndexError(f"{kind} index out of range: {index}")
        notes[index] = value

    def remove_item(self, kind: str, index: int):
        """Removes an entry; later entries shift down by one"""
        notes = self._notes(kind)
        if not 0 <= index < len(notes):
            raise IndexError(f"{kind} index out of range: {index}")
        del notes[index]

    def add_strength(self) -> int:
        return self.add_item('strengths')

    def update_strength(self, index: int, value: str):
        self.update_item('strengths', index, value)

    def remove_strength(self, index: int):
        self.remove_item('strengths', index)

    def add_weakness(self) -> int:
        return self.add_item('weaknesses')

    def update_weakness(self, index: int, value: str):
        self.update_item('weaknesses', index, value)

    def remove_weakness(self, index: int):
        self.remove_item('weaknesses', index)

    def add_improvement(self) -> int:
        return self.add_item('improvements')

    def update_improvement(self, index: int, value: str):
        self.update_item('improvements', index, value)

    def remove_improvement(self, index: int):
        self.remove_item('improvements', index)

    # === Save / complete ===

    def snapshot(self) -> Dict[str, Any]:
        """Full evaluation state with freshly computed scores"""
        return {
            'bid_id': self.bid_id,
            'evaluator': self.evaluator,
            'evaluation_date': self.evaluation_date.isoformat(),
            'status': self.status.value,
            'criteria': self.rubric.to_config(),
            'scores': scoring.category_scores(self.rubric),
            'weighted_scores': scoring.weighted_scores(self.rubric),
            'overall_score': self.overall_score,
            'recommendation': self.recommendation.value if self.recommendation else None,
            'justification': self.justification,
            'risk_assessment': self.risk_assessment.value,
            'strengths': list(self.strengths),
            'weaknesses': list(self.weaknesses),
            'improvements': list(self.improvements),
            'last_updated': datetime.now(timezone.utc).isoformat(),
        }

    def save_draft(self) -> Dict[str, Any]:
        """Persists the evaluation with status in_progress"""
        return self._save(EvaluationStatus.IN_PROGRESS)

    def complete(self) -> Dict[str, Any]:
        """Persists the evaluation as completed and notifies on_complete"""
        snapshot = self._save(EvaluationStatus.COMPLETED)
        if self.on_complete is not None:
            self.on_complete(snapshot)
        return snapshot

    def _save(self, status: EvaluationStatus) -> Dict[str, Any]:
        if self.saving:
            raise RuntimeError("A save is already pending for this evaluation.")

        self.status = status
        snapshot = self.snapshot()
        self.weighted_scores = dict(snapshot['weighted_scores'])
        self.last_updated = snapshot['last_updated']

        self.saving = True
        try:
            if self.persist is not None:
                self.persist(snapshot)
        except Exception as exc:
            logger.error("Saving evaluation for bid %s failed: %s", self.bid_id, exc)
            raise EvaluationSaveError(
                f"Error saving evaluation for bid {self.bid_id}. Please try again.",
                snapshot,
            ) from exc
        finally:
            self.saving = False

        logger.info("Evaluation for bid %s %s (overall score %.2f)", self.bid_id,
                    'completed' if status is EvaluationStatus.COMPLETED else 'saved',
                    snapshot['overall_score'])
        return snapshot

    # === Reporting ===

    def report(self, bid: Optional[Bid] = None,
               comparison: Optional[List[ComparisonBid]] = None) -> Dict[str, Any]:
        """
        Evaluation report: bid record, snapshot, score, rating and risk level

        Args:
            bid: Bid record under evaluation
            comparison: Competing bids; included as a list of rows when a bid is given
        """
        score = self.overall_score
        report = {
            'bid': bid.to_dict() if bid is not None else None,
            'evaluation': self.snapshot(),
            'overall_score': score,
            'rating': rating_for(score),
            'risk': risk_level_for(score),
            'generated_at': datetime.now(timezone.utc).isoformat(),
        }
        if bid is not None and comparison:
            report['comparison'] = compare_bids(bid, score, comparison).to_dict('records')
        return report
