from decimal import Decimal

import pytest

from billsplit.models.expense import Expense, ShareDetail, SplitType


@pytest.fixture
def roster():
    """Three-member group used across the service tests."""
    return ["Alice", "Bob", "Carol"]


@pytest.fixture
def make_expense():
    """Factory for Expense records; split_details takes plain dicts."""
    def _make(
        amount,
        payer,
        split_type=SplitType.EQUAL,
        participants=None,
        split_details=None,
        description="Test expense"
    ):
        return Expense(
            description=description,
            amount=Decimal(str(amount)),
            payer=payer,
            split_type=split_type,
            participants=participants,
            split_details={
                name: ShareDetail(**detail)
                for name, detail in (split_details or {}).items()
            }
        )

    return _make


@pytest.fixture
def dinner_trip(make_expense):
    """A few expenses across the default roster with a mix of split types."""
    return [
        make_expense(300, "Alice", description="Hotel"),
        make_expense(100, "Bob", description="Dinner"),
        make_expense(
            90, "Carol", SplitType.EXACT,
            split_details={"Alice": {"amount": "20"}, "Bob": {"amount": "30"}, "Carol": {"amount": "40"}},
            description="Museum"
        ),
        make_expense(
            50, "Bob", SplitType.PERCENTAGE,
            split_details={"Alice": {"percentage": "50"}, "Carol": {"percentage": "50"}},
            description="Taxi"
        ),
        make_expense(
            61, "Alice", SplitType.ADJUST,
            participants=["Alice", "Bob"],
            split_details={"Alice": {"adjustment": "-5.5"}, "Bob": {"adjustment": "5.5"}},
            description="Groceries"
        ),
    ]
