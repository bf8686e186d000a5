import logging
from collections.abc import Mapping, Sequence
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional, Union

import pydantic
from pydantic import BaseModel, Field

from app.config import get_settings
from app.errors import ConfigurationError, MissingReferenceError, ValidationError
from app.models import (
    Product,
    SalesDataset,
    SellerAccumulator,
    SellerReport,
    TopProduct,
)
from app.strategies import BonusStrategy, RevenueStrategy

logger = logging.getLogger(__name__)

_TWO_DP = Decimal("0.01")
_COLLECTIONS = ("sellers", "products", "purchase_records")


class AnalysisOptions(BaseModel):
    calculate_revenue: Optional[Any] = None
    calculate_bonus: Optional[Any] = None
    top_products_limit: Optional[int] = Field(default=None, ge=1)


def round_money(value: Decimal) -> Decimal:
    """Round to cents, halves away from zero."""
    return value.quantize(_TWO_DP, rounding=ROUND_HALF_UP)


def _to_decimal(value: Any, source: str) -> Decimal:
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ConfigurationError(f"{source} returned a non-numeric value: {value!r}")
    if not amount.is_finite():
        raise ConfigurationError(f"{source} returned a non-finite value: {value!r}")
    return amount


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _check_unique(label: str, keys: list[str]) -> None:
    seen: set[str] = set()
    for key in keys:
        if key in seen:
            raise ValidationError(f"Duplicate {label} '{key}'")
        seen.add(key)


def validate_dataset(data: Union[SalesDataset, Mapping, None]) -> SalesDataset:
    if data is None:
        raise ValidationError("Sales dataset is missing")
    if isinstance(data, SalesDataset):
        raw = {name: getattr(data, name) for name in _COLLECTIONS}
    elif isinstance(data, Mapping):
        raw = data
    else:
        raise ValidationError(f"Sales dataset must be a mapping, got {type(data).__name__}")

    for name in _COLLECTIONS:
        collection = raw.get(name)
        if not _is_sequence(collection):
            raise ValidationError(f"'{name}' must be a list")
        if len(collection) == 0:
            raise ValidationError(f"'{name}' must not be empty")

    if isinstance(data, SalesDataset):
        dataset = data
    else:
        try:
            dataset = SalesDataset.model_validate({name: list(raw[name]) for name in _COLLECTIONS})
        except pydantic.ValidationError as exc:
            raise ValidationError(f"Malformed sales dataset: {exc}") from exc

    _check_unique("seller id", [s.id for s in dataset.sellers])
    _check_unique("product sku", [p.sku for p in dataset.products])
    return dataset


def validate_options(options: Union[AnalysisOptions, Mapping, None]) -> AnalysisOptions:
    if options is None:
        raise ConfigurationError("Calculation options are missing")
    if not isinstance(options, AnalysisOptions):
        try:
            options = AnalysisOptions.model_validate(dict(options))
        except (pydantic.ValidationError, TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid calculation options: {exc}") from exc

    for name in ("calculate_revenue", "calculate_bonus"):
        if not callable(getattr(options, name)):
            raise ConfigurationError(f"Required function '{name}' was not provided")
    return options


def _top_products(products_sold: dict[str, int], limit: int) -> list[TopProduct]:
    # highest quantity first, ties in first-sold order
    ranked = sorted(products_sold.items(), key=lambda pair: pair[1], reverse=True)
    return [TopProduct(sku=sku, quantity=qty) for sku, qty in ranked[:limit]]


def analyze_sales_data(
    data: Union[SalesDataset, Mapping, None],
    options: Union[AnalysisOptions, Mapping, None],
) -> list[SellerReport]:
    dataset = validate_dataset(data)
    options = validate_options(options)
    calculate_revenue: RevenueStrategy = options.calculate_revenue
    calculate_bonus: BonusStrategy = options.calculate_bonus
    limit = options.top_products_limit or get_settings().TOP_PRODUCTS_LIMIT

    # ── 1. Accumulators and indexes ──────────────────────────────────────────
    stats = [
        SellerAccumulator(id=s.id, name=f"{s.first_name} {s.last_name}")
        for s in dataset.sellers
    ]
    seller_index: dict[str, SellerAccumulator] = {s.id: s for s in stats}
    product_index: dict[str, Product] = {p.sku: p for p in dataset.products}

    # ── 2. Single pass over purchase records ─────────────────────────────────
    for record in dataset.purchase_records:
        seller = seller_index.get(record.seller_id)
        if seller is None:
            logger.error("Purchase record %s references unknown seller %s",
                         record.receipt_id, record.seller_id)
            raise MissingReferenceError("seller", record.seller_id)
        seller.sales_count += 1

        for item in record.items:
            product = product_index.get(item.sku)
            if product is None:
                logger.error("Purchase record %s references unknown product %s",
                             record.receipt_id, item.sku)
                raise MissingReferenceError("product", item.sku)

            cost = product.purchase_price * item.quantity
            revenue = _to_decimal(calculate_revenue(item, product), "calculate_revenue")

            seller.revenue = round_money(seller.revenue + revenue)
            seller.profit += revenue - cost
            seller.products_sold[item.sku] = seller.products_sold.get(item.sku, 0) + item.quantity

    # ── 3. Ranking (stable: ties keep input order) ───────────────────────────
    stats.sort(key=lambda s: s.profit, reverse=True)

    # ── 4. Bonus, top products, projection ───────────────────────────────────
    total = len(stats)
    reports: list[SellerReport] = []
    for rank, seller in enumerate(stats):
        bonus = _to_decimal(calculate_bonus(rank, total, seller), "calculate_bonus")
        reports.append(
            SellerReport(
                seller_id=seller.id,
                name=seller.name,
                revenue=round_money(seller.revenue),
                profit=round_money(seller.profit),
                sales_count=seller.sales_count,
                top_products=_top_products(seller.products_sold, limit),
                bonus=round_money(bonus),
            )
        )

    logger.info(
        "Analyzed %d purchase records for %d sellers (%d products)",
        len(dataset.purchase_records), total, len(dataset.products),
    )
    return reports
