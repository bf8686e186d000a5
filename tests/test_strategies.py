"""
Unit tests for the default revenue and bonus strategies.
"""

from decimal import Decimal

from app.engine import analyze_sales_data
from app.models import Product, PurchaseItem, SellerAccumulator
from app.strategies import (
    RateBonus,
    calculate_bonus_by_profit,
    calculate_simple_revenue,
    profit_rank_rate,
)


def acc(profit):
    return SellerAccumulator(id="seller_1", name="Test Seller", profit=Decimal(str(profit)))


PRODUCT = Product(sku="SKU_001", purchase_price=Decimal("50"))


class TestSimpleRevenue:
    def test_no_discount(self):
        line = PurchaseItem(sku="SKU_001", quantity=2, sale_price=Decimal("100"))
        assert calculate_simple_revenue(line, PRODUCT) == Decimal("200")

    def test_percentage_discount(self):
        line = PurchaseItem(sku="SKU_001", quantity=3, sale_price=Decimal("10"), discount=Decimal("10"))
        assert calculate_simple_revenue(line, PRODUCT) == Decimal("27")

    def test_full_discount(self):
        line = PurchaseItem(sku="SKU_001", quantity=3, sale_price=Decimal("10"), discount=Decimal("100"))
        assert calculate_simple_revenue(line, PRODUCT) == Decimal("0")


class TestBonusByProfit:
    def test_tiers(self):
        total = 6
        rates = [profit_rank_rate(rank, total) for rank in range(total)]
        assert rates == [Decimal(v) for v in ("0.15", "0.10", "0.10", "0.05", "0.05", "0")]

    def test_amount_is_share_of_profit(self):
        assert calculate_bonus_by_profit(0, 5, acc(1000)) == Decimal("150")
        assert calculate_bonus_by_profit(2, 5, acc(1000)) == Decimal("100")
        assert calculate_bonus_by_profit(3, 5, acc(1000)) == Decimal("50")
        assert calculate_bonus_by_profit(4, 5, acc(1000)) == Decimal("0")

    def test_single_seller_gets_leader_bonus(self):
        # rank 0 is also the last rank
        assert calculate_bonus_by_profit(0, 1, acc(200)) == Decimal("30")

    def test_two_sellers_runner_up_tier_wins_over_last(self):
        assert calculate_bonus_by_profit(1, 2, acc(100)) == Decimal("10")


class TestRateBonus:
    def test_wraps_rate_policy(self):
        strategy = RateBonus(lambda rank, total: 0.2 if rank == 0 else 0)
        assert strategy(0, 3, acc(50)) == Decimal("10.0")
        assert strategy(1, 3, acc(50)) == Decimal("0")

    def test_rate_policy_in_analysis(self):
        data = {
            "sellers": [{"id": "seller_1", "first_name": "Test", "last_name": "Seller"}],
            "products": [{"sku": "SKU_001", "purchase_price": 50}],
            "purchase_records": [
                {"seller_id": "seller_1",
                 "items": [{"sku": "SKU_001", "quantity": 2, "sale_price": 100, "discount": 0}]},
            ],
        }
        options = {
            "calculate_revenue": calculate_simple_revenue,
            "calculate_bonus": RateBonus(profit_rank_rate),
        }
        [row] = analyze_sales_data(data, options)
        assert row.bonus == Decimal("15.00")
