"""Money helpers. All arithmetic inside the engine is done in integer cents."""
from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP
from itertools import cycle, islice
from typing import Dict, Mapping, Union

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # str() keeps 0.1 as 0.1 instead of its binary expansion
        return Decimal(str(value))
    return Decimal(value)


def to_cents(value: Number) -> int:
    """Convert a decimal amount to integer cents, rounding half up."""
    amount = to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    return int(amount.scaleb(2))


def from_cents(cents: int) -> Decimal:
    return Decimal(cents).scaleb(-2).quantize(CENT)


def apportion_cents(total_cents: int, exact_cents: Mapping[str, Decimal]) -> Dict[str, int]:
    """
    Round fractional cent shares so they sum exactly to total_cents.

    Largest-remainder method: every share is floored, then leftover cents go
    one at a time to the largest fractional remainders (ties by name). If the
    floors already overshoot the total, cents are taken back from the largest
    shares first. Result keeps the input key order.
    """
    if not exact_cents:
        return {}

    floors = {
        name: int(value.to_integral_value(rounding=ROUND_FLOOR))
        for name, value in exact_cents.items()
    }
    leftover = total_cents - sum(floors.values())

    if leftover > 0:
        order = sorted(
            exact_cents,
            key=lambda name: (-(exact_cents[name] - floors[name]), name)
        )
        for name in islice(cycle(order), leftover):
            floors[name] += 1
    elif leftover < 0:
        order = sorted(exact_cents, key=lambda name: (-floors[name], name))
        for name in islice(cycle(order), -leftover):
            floors[name] -= 1

    return floors


def to_cents_preserving_sum(amounts: Mapping[str, Number]) -> Dict[str, int]:
    """
    Convert several amounts to cents without letting rounding change their total.

    Values like 66.666.../-33.333.../-33.333... sum to zero but round to
    6667/-3333/-3333 one by one; here the rounded total is apportioned instead.
    """
    exact = {name: to_decimal(amount) for name, amount in amounts.items()}
    total_cents = to_cents(sum(exact.values(), Decimal("0")))
    return apportion_cents(total_cents, {name: value.scaleb(2) for name, value in exact.items()})
