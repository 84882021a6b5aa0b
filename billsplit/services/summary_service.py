import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Sequence

from billsplit.core.config import settings
from billsplit.services.balance_service import BalanceService, ExpenseInput, as_expense
from billsplit.services.settlement_service import SettlementService
from billsplit.schemas.summary import BalanceEntry, BalanceStatus, GroupSummary
from billsplit.utils.money import CENT, from_cents, to_cents

logger = logging.getLogger(__name__)


class SummaryService:
    @staticmethod
    def summarize(roster: Sequence[str], expenses: Iterable[ExpenseInput]) -> GroupSummary:
        """
        Everything a group overview shows: total spent, average share,
        each member's paid/owed/net position and the settlement plan.
        """
        expenses = [as_expense(expense) for expense in expenses]
        paid, owed = BalanceService.tally(roster, expenses)
        net = BalanceService.net_positions(paid, owed)

        total_cents = sum(paid.values())
        per_person_share = (from_cents(total_cents) / Decimal(len(roster))).quantize(
            CENT, rounding=ROUND_HALF_UP
        )

        threshold = to_cents(settings.SETTLED_THRESHOLD)
        entries = [
            BalanceEntry(
                participant=name,
                paid=from_cents(paid[name]),
                owed=from_cents(owed[name]),
                balance=from_cents(cents),
                status=SummaryService._status(cents, threshold)
            )
            for name, cents in net.items()
        ]

        settlements = SettlementService.plan({name: from_cents(cents) for name, cents in net.items()})
        logger.debug(
            "Summarized %d expenses over %d members: %d transfers",
            len(expenses), len(roster), len(settlements)
        )

        return GroupSummary(
            total_expenses=from_cents(total_cents),
            per_person_share=per_person_share,
            expense_count=len(expenses),
            balances=entries,
            settlements=settlements
        )

    @staticmethod
    def _status(balance_cents: int, threshold: int) -> BalanceStatus:
        if balance_cents >= threshold:
            return BalanceStatus.GETS_BACK
        if balance_cents <= -threshold:
            return BalanceStatus.OWES
        return BalanceStatus.SETTLED


summarize_group = SummaryService.summarize
