"""Shared fixtures for bid_scoring tests."""

import pytest

from bid_scoring import Bid, ComparisonBid, Rubric


@pytest.fixture
def two_category_rubric():
    """Technical 60 / Commercial 40, one sub-criterion each (max 10)."""
    return (Rubric()
        .category('technical', 60)
            .sub_criterion('quality', 10)
        .category('commercial', 40)
            .sub_criterion('price', 10))


@pytest.fixture
def bid_record():
    """Provider record in the camelCase shape the bid service returns."""
    return {
        'id': 'BID-2024-001',
        'rfqNumber': 'RFQ-2024-015',
        'rfqTitle': 'Laptop Procurement Q1 2024',
        'supplier': {
            'id': 'SUPP-001',
            'name': 'TechCorp Inc.',
            'rating': 4.8,
            'category': 'Electronics',
            'yearsInBusiness': 12,
            'financialRating': 'A+',
        },
        'amount': 125000,
        'currency': 'USD',
        'items': [
            {'name': 'Dell XPS 13', 'quantity': 50, 'unitPrice': 1200,
             'specifications': 'Intel i7, 16GB RAM, 512GB SSD'},
            {'name': 'Dell XPS 15', 'quantity': 25, 'unitPrice': 1800,
             'specifications': 'Intel i9, 32GB RAM, 1TB SSD'},
            {'name': 'Extended Warranty', 'quantity': 75, 'unitPrice': 200,
             'specifications': '3-year on-site support'},
        ],
        'documents': [
            {'name': 'Technical_Specifications.pdf', 'type': 'technical'},
            {'name': 'Commercial_Offer.pdf', 'type': 'commercial'},
        ],
        'notes': 'Includes extended warranty and on-site support.',
    }


@pytest.fixture
def bid(bid_record):
    return Bid.from_dict(bid_record)


@pytest.fixture
def comparison_bids():
    return [
        ComparisonBid.from_dict({
            'id': 'BID-2024-003',
            'supplier': {'name': 'CompuGlobal Ltd', 'rating': 4.2},
            'amount': 118500,
            'overallScore': 85,
            'status': 'submitted',
        }),
        ComparisonBid.from_dict({
            'id': 'BID-2024-007',
            'supplier': {'name': 'IT Solutions Co', 'rating': 4.5},
            'amount': 127800,
            'overallScore': 88,
            'status': 'submitted',
        }),
    ]
