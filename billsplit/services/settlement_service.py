import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping

from billsplit.core.config import settings
from billsplit.models.settlement import Transfer
from billsplit.utils.money import Number, from_cents, to_cents, to_cents_preserving_sum, to_decimal
from billsplit.utils.split_validation import InternalConsistencyError, UnknownParticipantError

logger = logging.getLogger(__name__)


class SettlementService:
    @staticmethod
    def plan(balances: Mapping[str, Number]) -> List[Transfer]:
        """
        Turn net balances into pairwise transfers that zero every balance.

        Greedy largest-pair matching:
        1. Creditors (balance >= threshold) sorted descending,
           debtors (balance <= -threshold) sorted most negative first.
           Equal balances are ordered alphabetically by name.
        2. The head debtor pays the head creditor min(credit, |debt|).
        3. Whoever reaches zero leaves their list; repeat.

        Balances that don't sum to zero leave someone unmatched, which is
        reported as InternalConsistencyError.
        """
        threshold = to_cents(settings.SETTLED_THRESHOLD)
        cents = to_cents_preserving_sum(balances)

        creditors = sorted(
            ([name, amount] for name, amount in cents.items() if amount >= threshold),
            key=lambda entry: (-entry[1], entry[0])
        )
        debtors = sorted(
            ([name, amount] for name, amount in cents.items() if amount <= -threshold),
            key=lambda entry: (entry[1], entry[0])
        )

        max_iterations = settings.MAX_ITERATION_FACTOR * len(cents)
        iterations = 0
        transfers: List[Transfer] = []

        while creditors and debtors:
            iterations += 1
            if iterations > max_iterations:
                logger.error(
                    "Settlement did not converge after %d iterations: creditors=%s debtors=%s",
                    max_iterations, creditors, debtors
                )
                raise InternalConsistencyError(
                    f"Settlement did not converge within {max_iterations} iterations"
                )

            creditor = creditors[0]
            debtor = debtors[0]

            amount = min(creditor[1], -debtor[1])
            transfers.append(Transfer(
                from_participant=debtor[0],
                to_participant=creditor[0],
                amount=from_cents(amount)
            ))
            logger.debug("%s pays %s %s cents", debtor[0], creditor[0], amount)

            creditor[1] -= amount
            debtor[1] += amount

            if abs(creditor[1]) < threshold:
                creditors.pop(0)
            if abs(debtor[1]) < threshold:
                debtors.pop(0)

        if creditors or debtors:
            logger.error(
                "Unmatched balances after settlement: creditors=%s debtors=%s",
                creditors, debtors
            )
            raise InternalConsistencyError(
                "Balances do not sum to zero; unmatched: "
                + ", ".join(f"{name} ({from_cents(amount)})" for name, amount in creditors + debtors)
            )

        return transfers

    @staticmethod
    def apply(balances: Mapping[str, Number], transfers: Iterable[Transfer]) -> Dict[str, Decimal]:
        """
        Apply completed transfers to a balance map.

        Paying moves the debtor up and the creditor down by the amount.
        Returns the remaining balances at full precision, so sub-cent tails
        of the input stay visible; the input is left untouched.
        """
        remaining = {name: to_decimal(amount) for name, amount in balances.items()}

        for transfer in transfers:
            for name in (transfer.from_participant, transfer.to_participant):
                if name not in remaining:
                    logger.error("Transfer references unknown participant '%s'", name)
                    raise UnknownParticipantError(name, context="transfer")

            remaining[transfer.from_participant] += transfer.amount
            remaining[transfer.to_participant] -= transfer.amount

        return remaining


plan_settlement = SettlementService.plan
