import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class Seller(BaseModel):
    id: str
    first_name: str
    last_name: str
    start_date: Optional[datetime.date] = None
    position: Optional[str] = None


class Product(BaseModel):
    sku: str
    purchase_price: Decimal
    name: Optional[str] = None
    category: Optional[str] = None
    sale_price: Optional[Decimal] = None  # catalog price, read by revenue strategies only


class PurchaseItem(BaseModel):
    sku: str
    quantity: int
    sale_price: Decimal
    discount: Decimal = Decimal("0")  # percent, 0..100


class PurchaseRecord(BaseModel):
    seller_id: str
    items: list[PurchaseItem]
    receipt_id: Optional[str] = None
    date: Optional[datetime.date] = None
    customer_id: Optional[str] = None
    total_amount: Optional[Decimal] = None
    total_discount: Optional[Decimal] = None


class SalesDataset(BaseModel):
    sellers: list[Seller]
    products: list[Product]
    purchase_records: list[PurchaseRecord]


# ── Working state ────────────────────────────────────────────────────────────

class SellerAccumulator(BaseModel):
    id: str
    name: str
    revenue: Decimal = Decimal("0")
    profit: Decimal = Decimal("0")
    sales_count: int = 0
    # sku → quantity, in first-sold order
    products_sold: dict[str, int] = Field(default_factory=dict)


# ── Response models ──────────────────────────────────────────────────────────

class TopProduct(BaseModel):
    sku: str
    quantity: int


class SellerReport(BaseModel):
    seller_id: str
    name: str
    revenue: Decimal
    profit: Decimal
    sales_count: int
    top_products: list[TopProduct]
    bonus: Decimal


class RankedSellerReport(SellerReport):
    rank: int
    total_sellers: int
