"""Split validation utilities and the engine's error types."""
from decimal import Decimal
from typing import Iterable, List, Mapping, Optional, Sequence


class BillSplitError(Exception):
    """Base class for every error raised by the engine."""
    pass


class SplitValidationError(BillSplitError):
    """Recoverable input error: the caller should block submission and ask for a correction."""
    pass


class SplitMismatchError(SplitValidationError):
    """Resolved shares do not add up to the expense total."""

    def __init__(self, expected: Decimal, actual: Decimal, message: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        super().__init__(
            message or f"Split sum ({actual}) does not equal expense total ({expected})"
        )


class NoParticipantsError(SplitValidationError):
    def __init__(self, message: str = "At least one participant required"):
        super().__init__(message)


class PercentageMismatchError(SplitValidationError):
    def __init__(self, actual: Decimal, expected: Decimal = Decimal("100")):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Percentages sum to {actual}%, expected {expected}%")


class RosterError(SplitValidationError):
    pass


class IntegrityError(BillSplitError):
    """Data-integrity fault; not user-correctable."""
    pass


class UnknownParticipantError(IntegrityError):
    def __init__(self, name: str, context: str = "expense"):
        self.name = name
        super().__init__(f"Participant '{name}' referenced by {context} is not in the roster")


class InternalConsistencyError(IntegrityError):
    """Zero-sum invariant violated; indicates a bug rather than bad input."""
    pass


def validate_participants(participants: Sequence[str]) -> None:
    """
    Validate the participating members of one expense.

    Rules:
    - at least one participant
    - no name listed twice
    """
    if not participants:
        raise NoParticipantsError()

    seen = set()
    for name in participants:
        if name in seen:
            raise SplitValidationError(f"Participant '{name}' is listed more than once")
        seen.add(name)


def validate_detail_names(participants: Sequence[str], detail_names: Iterable[str]) -> None:
    """Reject split details given for someone who is not participating."""
    participating = set(participants)
    for name in detail_names:
        if name not in participating:
            raise SplitValidationError(
                f"Split details given for '{name}', who is not participating in this expense"
            )


def validate_split_total(expected: Decimal, actual: Decimal, tolerance: Decimal) -> None:
    """Conservation check: shares must add up to the total within tolerance."""
    if abs(actual - expected) > tolerance:
        raise SplitMismatchError(expected=expected, actual=actual)


def validate_percentages(percentages: List[Decimal], tolerance: Decimal) -> Decimal:
    """Check percentages add up to 100 and return their sum."""
    for percentage in percentages:
        if percentage < 0:
            raise SplitValidationError(f"Percentage cannot be negative: {percentage}")

    total = sum(percentages, Decimal("0"))
    if abs(total - Decimal("100")) > tolerance:
        raise PercentageMismatchError(actual=total)
    return total


def validate_adjustments(adjustments: List[Decimal], tolerance: Decimal) -> None:
    """Adjustments on top of an equal base must cancel out."""
    total = sum(adjustments, Decimal("0"))
    if abs(total) > tolerance:
        raise SplitMismatchError(
            expected=Decimal("0"),
            actual=total,
            message=f"Adjustments must sum to zero for the total to match (got {total})"
        )


def validate_shares(shares_cents: Mapping[str, int]) -> None:
    for name, cents in shares_cents.items():
        if cents < 0:
            raise SplitValidationError(f"Share for '{name}' cannot be negative: {cents} cents")


def validate_roster(roster: Sequence[str]) -> None:
    """
    Validate a group roster.

    The engine tolerates any size >= 1; minimum group size and
    case-insensitive duplicate checks belong to group management.
    """
    if not roster:
        raise RosterError("Roster must contain at least one participant")

    seen = set()
    for name in roster:
        if not name:
            raise RosterError("Participant name cannot be empty")
        if name in seen:
            raise RosterError(f"Participant '{name}' appears more than once in the roster")
        seen.add(name)
