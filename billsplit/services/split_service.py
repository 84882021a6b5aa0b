import logging
from decimal import Decimal
from typing import Dict, Mapping, Optional, Sequence, Union

from billsplit.core.config import settings
from billsplit.models.expense import ShareDetail, SplitType
from billsplit.utils.money import Number, apportion_cents, from_cents, to_cents
from billsplit.utils.split_validation import (
    SplitValidationError,
    validate_adjustments,
    validate_detail_names,
    validate_participants,
    validate_percentages,
    validate_shares,
    validate_split_total,
)

logger = logging.getLogger(__name__)


def _as_detail(value) -> ShareDetail:
    if value is None:
        return ShareDetail()
    if isinstance(value, ShareDetail):
        return value
    return ShareDetail.model_validate(value)


class SplitService:
    @staticmethod
    def resolve_cents(
        total_cents: int,
        split_type: SplitType,
        participants: Sequence[str],
        split_details: Optional[Mapping[str, ShareDetail]] = None
    ) -> Dict[str, int]:
        """
        Resolve one expense into the integer cents each participant owes.

        The returned shares cover exactly `participants` (in that order) and
        always sum to `total_cents`. Fractional cents are handed out by
        largest remainder, ties going to the alphabetically first name.

        Raises:
        - NoParticipantsError if nobody participates
        - SplitMismatchError if exact amounts or adjustments don't balance
        - PercentageMismatchError if percentages don't add up to 100
        - SplitValidationError for duplicates, stray details or negative shares
        """
        if total_cents <= 0:
            raise SplitValidationError(f"Expense amount must be at least one cent: {total_cents} cents")

        split_details = split_details or {}
        validate_participants(participants)
        validate_detail_names(participants, split_details.keys())

        count = len(participants)
        details = {name: _as_detail(split_details.get(name)) for name in participants}

        if split_type == SplitType.EQUAL:
            base = Decimal(total_cents) / count
            exact = {name: base for name in participants}

        elif split_type == SplitType.EXACT:
            exact = {name: details[name].amount.scaleb(2) for name in participants}

        elif split_type == SplitType.PERCENTAGE:
            validate_percentages(
                [details[name].percentage for name in participants],
                settings.PERCENTAGE_TOLERANCE
            )
            exact = {
                name: Decimal(total_cents) * details[name].percentage / 100
                for name in participants
            }

        elif split_type == SplitType.ADJUST:
            validate_adjustments(
                [details[name].adjustment for name in participants],
                settings.SPLIT_TOLERANCE
            )
            base = Decimal(total_cents) / count
            exact = {
                name: base + details[name].adjustment.scaleb(2)
                for name in participants
            }

        else:
            raise SplitValidationError(f"Unsupported split type: {split_type}")

        # Checked before rounding; only a residual within tolerance gets apportioned
        validate_split_total(
            expected=from_cents(total_cents),
            actual=sum(exact.values(), Decimal("0")).scaleb(-2),
            tolerance=settings.SPLIT_TOLERANCE
        )
        shares = apportion_cents(total_cents, exact)
        validate_shares(shares)

        logger.debug(
            "Resolved %s split of %s cents over %d participants: %s",
            split_type.value, total_cents, count, shares
        )
        return shares

    @staticmethod
    def resolve(
        amount: Number,
        split_type: Union[SplitType, str],
        participants: Sequence[str],
        split_details: Optional[Mapping[str, ShareDetail]] = None
    ) -> Dict[str, Decimal]:
        """Resolve a split given in currency units; shares are returned as cent-quantized Decimals."""
        if isinstance(split_type, str) and not isinstance(split_type, SplitType):
            try:
                split_type = SplitType(split_type.strip().lower())
            except ValueError:
                raise SplitValidationError(f"Unsupported split type: {split_type}")

        shares = SplitService.resolve_cents(to_cents(amount), split_type, participants, split_details)
        return {name: from_cents(cents) for name, cents in shares.items()}


resolve_split = SplitService.resolve
