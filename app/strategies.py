"""
Pluggable revenue and bonus calculations.

Both strategies are plain callables; any function or object with a matching
``__call__`` can be handed to the engine.

The bonus contract always yields an absolute amount. Policies that think in
rates can be wrapped with :class:`RateBonus`.
"""

from decimal import Decimal
from typing import Callable, Protocol, Union

from app.models import Product, PurchaseItem, SellerAccumulator

Number = Union[Decimal, int, float]

_HUNDRED = Decimal("100")


class RevenueStrategy(Protocol):
    def __call__(self, item: PurchaseItem, product: Product) -> Number: ...


class BonusStrategy(Protocol):
    def __call__(self, rank: int, total: int, seller: SellerAccumulator) -> Number: ...


def calculate_simple_revenue(item: PurchaseItem, _product: Product) -> Decimal:
    """Line revenue after the percentage discount."""
    discount_factor = 1 - item.discount / _HUNDRED
    return item.sale_price * item.quantity * discount_factor


def profit_rank_rate(rank: int, total: int) -> Decimal:
    # leader 15 %, runners-up 10 %, last place nothing, everyone else 5 %
    if rank == 0:
        return Decimal("0.15")
    if rank in (1, 2):
        return Decimal("0.10")
    if rank == total - 1:
        return Decimal("0")
    return Decimal("0.05")


def calculate_bonus_by_profit(rank: int, total: int, seller: SellerAccumulator) -> Decimal:
    return seller.profit * profit_rank_rate(rank, total)


class RateBonus:
    """Turns a ``(rank, total) -> rate`` policy into a bonus amount strategy."""

    def __init__(self, rate_for: Callable[[int, int], Number]) -> None:
        self.rate_for = rate_for

    def __call__(self, rank: int, total: int, seller: SellerAccumulator) -> Decimal:
        rate = Decimal(str(self.rate_for(rank, total)))
        return seller.profit * rate
