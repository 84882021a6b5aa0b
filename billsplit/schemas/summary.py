from decimal import Decimal
from enum import Enum
from typing import List

from pydantic import BaseModel

from billsplit.models.settlement import Transfer


class BalanceStatus(str, Enum):
    GETS_BACK = "gets_back"
    OWES = "owes"
    SETTLED = "settled"


class BalanceEntry(BaseModel):
    """One member's line in the group summary."""
    participant: str
    paid: Decimal
    owed: Decimal
    balance: Decimal
    status: BalanceStatus

    model_config = {"from_attributes": True}


class GroupSummary(BaseModel):
    total_expenses: Decimal
    per_person_share: Decimal
    expense_count: int
    balances: List[BalanceEntry]
    settlements: List[Transfer]

    model_config = {"from_attributes": True}

    @property
    def settlement_count(self) -> int:
        return len(self.settlements)

    @property
    def is_settled(self) -> bool:
        return not self.settlements
