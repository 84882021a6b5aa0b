"""
BalanceService - Net position of every group member.

Core algorithm:
1. Resolve each expense into per-participant shares (SplitService)
2. Credit the payer with the full amount
3. Debit every participant with their share
4. Net = paid - owed; must sum to zero across the roster

Balances are recomputed from scratch on every call. All amounts are integer
cents internally and converted to Decimal on the way out.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, Mapping, Sequence, Set, Tuple, Union

from billsplit.models.expense import Expense
from billsplit.services.split_service import SplitService
from billsplit.utils.money import from_cents, to_cents
from billsplit.utils.split_validation import (
    InternalConsistencyError,
    UnknownParticipantError,
    validate_roster,
)

logger = logging.getLogger(__name__)

ExpenseInput = Union[Expense, Mapping[str, Any]]


def as_expense(expense: ExpenseInput) -> Expense:
    if isinstance(expense, Expense):
        return expense
    return Expense.model_validate(expense)


def _label(expense: Expense) -> str:
    return f"expense '{expense.id or expense.description or expense.amount}'"


class BalanceService:
    @staticmethod
    def resolve_expense(expense: ExpenseInput, roster: Sequence[str]) -> Dict[str, int]:
        """
        Resolve one expense against the roster, in cents.

        Raises UnknownParticipantError if the payer, a participant or a
        split-details entry is not a roster member.
        """
        expense = as_expense(expense)
        members = set(roster)
        BalanceService._check_members(expense, roster, members)

        return SplitService.resolve_cents(
            to_cents(expense.amount),
            expense.split_type,
            expense.participating_members(roster),
            expense.split_details
        )

    @staticmethod
    def tally(
        roster: Sequence[str],
        expenses: Iterable[ExpenseInput]
    ) -> Tuple[Dict[str, int], Dict[str, int]]:
        """
        Total paid and total owed per roster member, in cents.

        Returns: (paid, owed), both keyed by every roster member in roster order.
        """
        validate_roster(roster)

        paid = {name: 0 for name in roster}
        owed = {name: 0 for name in roster}

        for raw in expenses:
            expense = as_expense(raw)
            shares = BalanceService.resolve_expense(expense, roster)

            # Payer fronted the whole amount, whether or not they participate
            paid[expense.payer] += to_cents(expense.amount)
            for name, cents in shares.items():
                owed[name] += cents

            logger.debug("Applied %s paid by %s: %s", _label(expense), expense.payer, shares)

        return paid, owed

    @staticmethod
    def compute_balances_cents(
        roster: Sequence[str],
        expenses: Iterable[ExpenseInput]
    ) -> Dict[str, int]:
        paid, owed = BalanceService.tally(roster, expenses)
        return BalanceService.net_positions(paid, owed)

    @staticmethod
    def compute_balances(
        roster: Sequence[str],
        expenses: Iterable[ExpenseInput]
    ) -> Dict[str, Decimal]:
        """
        Net balance per roster member.

        Positive = is owed money (creditor)
        Negative = owes money (debtor)
        Zero = settled up

        Members not referenced by any expense stay at zero.
        """
        net = BalanceService.compute_balances_cents(roster, expenses)
        return {name: from_cents(cents) for name, cents in net.items()}

    @staticmethod
    def net_positions(paid: Dict[str, int], owed: Dict[str, int]) -> Dict[str, int]:
        """Net position per member (paid - owed), checked to sum to zero."""
        net = {name: paid[name] - owed[name] for name in paid}
        BalanceService._check_zero_sum(net)
        return net

    @staticmethod
    def validate_expense(expense: ExpenseInput, roster: Sequence[str]) -> Dict[str, Decimal]:
        """
        Check an expense before it is accepted into a group.

        Returns the resolved share of each participant. Raises the same
        errors compute_balances would raise for this expense.
        """
        validate_roster(roster)
        shares = BalanceService.resolve_expense(expense, roster)
        return {name: from_cents(cents) for name, cents in shares.items()}

    # ===== PRIVATE HELPERS =====

    @staticmethod
    def _check_members(expense: Expense, roster: Sequence[str], members: Set[str]) -> None:
        referenced = [(expense.payer, "payer")]
        referenced += [(name, "participant") for name in expense.participating_members(roster)]
        referenced += [(name, "split details") for name in expense.split_details]

        for name, role in referenced:
            if name not in members:
                context = f"{_label(expense)} as {role}"
                logger.error("Unknown participant '%s' in %s", name, context)
                raise UnknownParticipantError(name, context=context)

    @staticmethod
    def _check_zero_sum(net: Dict[str, int]) -> None:
        total = sum(net.values())
        if total != 0:
            logger.error("Balances sum to %s cents instead of zero: %s", total, net)
            raise InternalConsistencyError(
                f"Balances sum to {from_cents(total)} instead of zero"
            )


compute_balances = BalanceService.compute_balances
validate_expense = BalanceService.validate_expense
