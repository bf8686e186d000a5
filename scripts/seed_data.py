"""
Deterministic test-data generator.

Produces:
  - 5 sellers
  - 40 products across 4 categories (purchase price ~55-80 % of sale price)
  - 300 purchase records spread over Q1 2026
    - 1-5 line items per receipt
    - ~30 % of line items discounted by 5-30 %
"""

import random
from datetime import date, timedelta
from decimal import Decimal

from app.models import Product, PurchaseItem, PurchaseRecord, Seller
from app.store import DataStore

SEED = 42
START = date(2026, 1, 1)
END   = date(2026, 3, 31)

CATEGORIES = ["Electronics", "Home", "Garden", "Sports"]


def _money(value: float) -> Decimal:
    return Decimal(str(round(value, 2)))


def _rand_date(rng: random.Random, lo: date = START, hi: date = END) -> date:
    return lo + timedelta(days=rng.randint(0, (hi - lo).days))


def seed(store: DataStore) -> None:
    rng = random.Random(SEED)

    # ── sellers ──────────────────────────────────────────────────────────────
    sellers = [
        Seller(id="seller_1", first_name="Alexey",   last_name="Petrov",
               start_date=date(2024, 3, 1),  position="Senior Seller"),
        Seller(id="seller_2", first_name="Ivan",     last_name="Smirnov",
               start_date=date(2024, 7, 15), position="Seller"),
        Seller(id="seller_3", first_name="Maria",    last_name="Ivanova",
               start_date=date(2025, 1, 10), position="Seller"),
        Seller(id="seller_4", first_name="Ekaterina", last_name="Volkova",
               start_date=date(2025, 5, 20), position="Junior Seller"),
        Seller(id="seller_5", first_name="Dmitry",   last_name="Sokolov",
               start_date=date(2025, 9, 1),  position="Junior Seller"),
    ]
    for s in sellers:
        store.add_seller(s)

    # ── products ─────────────────────────────────────────────────────────────
    products: list[Product] = []
    for n in range(1, 41):
        sale_price = rng.uniform(5, 500)
        products.append(Product(
            sku=f"SKU_{n:03d}",
            name=f"Product {n:03d}",
            category=CATEGORIES[n % len(CATEGORIES)],
            sale_price=_money(sale_price),
            purchase_price=_money(sale_price * rng.uniform(0.55, 0.80)),
        ))
    for p in products:
        store.add_product(p)

    # stronger sellers close more receipts
    seller_weights = [30, 25, 20, 15, 10]

    # ── purchase records ─────────────────────────────────────────────────────
    for n in range(1, 301):
        seller = rng.choices(sellers, weights=seller_weights)[0]
        items: list[PurchaseItem] = []
        for product in rng.sample(products, rng.randint(1, 5)):
            discount = Decimal(rng.choice([5, 10, 15, 20, 25, 30])) if rng.random() < 0.3 else Decimal("0")
            items.append(PurchaseItem(
                sku=product.sku,
                quantity=rng.randint(1, 10),
                sale_price=product.sale_price,
                discount=discount,
            ))

        full_price = sum((i.sale_price * i.quantity for i in items), Decimal("0"))
        discounted = sum((i.sale_price * i.quantity * (1 - i.discount / 100) for i in items), Decimal("0"))
        store.add_purchase_record(PurchaseRecord(
            receipt_id=f"receipt_{n}",
            date=_rand_date(rng),
            seller_id=seller.id,
            customer_id=f"customer_{rng.randint(1, 120)}",
            items=items,
            total_amount=discounted.quantize(Decimal("0.01")),
            total_discount=(full_price - discounted).quantize(Decimal("0.01")),
        ))
