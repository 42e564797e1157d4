"""Cent-exact money arithmetic for cart totals.

Amounts are stored as floats on the aggregate but every computation goes
through ``Decimal`` and is rounded half-up to the cent, so ``29.99 * 3`` is
``89.97`` and an emptied cart is exactly ``0.0``. Unit prices are rounded
when they are snapshotted, which keeps ``subtotal == price * quantity`` exact
for every stored line.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def to_money(value: float | int | str | Decimal) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def unit_price(price: float) -> float:
    """A catalogue price as it is snapshotted onto a cart line."""
    return float(to_money(price))


def line_subtotal(price: float, quantity: int) -> float:
    """Price times quantity for a single cart line."""
    return float((Decimal(str(price)) * quantity).quantize(CENT, rounding=ROUND_HALF_UP))


def sum_amounts(amounts: Iterable[float]) -> float:
    total = sum((to_money(amount) for amount in amounts), Decimal("0"))
    return float(total.quantize(CENT, rounding=ROUND_HALF_UP))
