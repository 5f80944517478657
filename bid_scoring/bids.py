# bids.py
"""Bid records supplied by the hosting application, and side-by-side comparison."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pandas as pd

from .classification import rating_labels, risk_labels


@dataclass
class Supplier:
    name: str
    rating: Optional[float] = None
    financial_rating: Optional[str] = None
    id: Optional[str] = None
    category: Optional[str] = None
    years_in_business: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Supplier':
        return cls(
            name=data['name'],
            rating=data.get('rating'),
            financial_rating=data.get('financialRating', data.get('financial_rating')),
            id=data.get('id'),
            category=data.get('category'),
            years_in_business=data.get('yearsInBusiness', data.get('years_in_business')),
        )


@dataclass
class BidItem:
    name: str
    quantity: float
    unit_price: float
    specifications: str = ''

    @property
    def total(self) -> float:
        return self.quantity * self.unit_price

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BidItem':
        return cls(
            name=data['name'],
            quantity=data.get('quantity', 0),
            unit_price=data.get('unitPrice', data.get('unit_price', 0)),
            specifications=data.get('specifications', '') or '',
        )


@dataclass
class Bid:
    """Read-only bid record, fetched once when an evaluation opens"""

    id: str
    rfq_title: str
    supplier: Supplier
    amount: float
    currency: str = 'USD'
    items: List[BidItem] = field(default_factory=list)
    documents: List[Dict[str, Any]] = field(default_factory=list)
    rfq_number: Optional[str] = None
    notes: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Bid':
        """Builds a bid from a provider record (camelCase or snake_case keys)"""
        return cls(
            id=data['id'],
            rfq_title=data.get('rfqTitle', data.get('rfq_title', '')),
            supplier=Supplier.from_dict(data['supplier']),
            amount=data['amount'],
            currency=data.get('currency', 'USD'),
            items=[BidItem.from_dict(item) for item in data.get('items', [])],
            documents=list(data.get('documents', [])),
            rfq_number=data.get('rfqNumber', data.get('rfq_number')),
            notes=data.get('notes', '') or '',
        )

    def items_total(self) -> float:
        return sum(item.total for item in self.items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'rfq_number': self.rfq_number,
            'rfq_title': self.rfq_title,
            'supplier': {
                'id': self.supplier.id,
                'name': self.supplier.name,
                'rating': self.supplier.rating,
                'financial_rating': self.supplier.financial_rating,
            },
            'amount': self.amount,
            'currency': self.currency,
            'items': [
                {'name': i.name, 'quantity': i.quantity, 'unit_price': i.unit_price,
                 'total': i.total, 'specifications': i.specifications}
                for i in self.items
            ],
            'documents': list(self.documents),
            'notes': self.notes,
        }


@dataclass
class ComparisonBid:
    """Competing bid shown next to the one under evaluation"""

    id: str
    supplier: Supplier
    amount: float
    overall_score: float
    status: str = 'submitted'

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ComparisonBid':
        return cls(
            id=data['id'],
            supplier=Supplier.from_dict(data['supplier']),
            amount=data['amount'],
            overall_score=data.get('overallScore', data.get('overall_score', 0)),
            status=data.get('status', 'submitted'),
        )


def compare_bids(current_bid: Bid, current_score: float,
                 comparison_bids: List[ComparisonBid]) -> pd.DataFrame:
    """
    Side-by-side table of the bid under evaluation and its competitors

    Args:
        current_bid: Bid being evaluated
        current_score: Its current overall score
        comparison_bids: Competing bids with their own scores

    Returns:
        DataFrame sorted by overall_score (highest first). price_difference is
        each bid's amount minus the current bid's amount.
    """
    rows = [{
        'bid_id': current_bid.id,
        'supplier': current_bid.supplier.name,
        'supplier_rating': current_bid.supplier.rating,
        'amount': current_bid.amount,
        'overall_score': current_score,
        'status': 'under_evaluation',
        'is_current': True,
    }]
    for other in comparison_bids:
        rows.append({
            'bid_id': other.id,
            'supplier': other.supplier.name,
            'supplier_rating': other.supplier.rating,
            'amount': other.amount,
            'overall_score': other.overall_score,
            'status': other.status,
            'is_current': False,
        })

    table = pd.DataFrame(rows)
    table['price_difference'] = table['amount'] - current_bid.amount
    table['cheaper'] = table['price_difference'] < 0
    table['rating'] = rating_labels(table['overall_score'])
    table['risk_level'] = risk_labels(table['overall_score'])

    return table.sort_values(
        by=['overall_score', 'is_current'], ascending=[False, False]
    ).reset_index(drop=True)
