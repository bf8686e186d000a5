"""
Unit tests for the in-memory data store.
"""

from decimal import Decimal

from app.models import Product, PurchaseItem, PurchaseRecord, Seller
from app.store import DataStore


def make_store() -> DataStore:
    s = DataStore()
    s.add_seller(Seller(id="seller_1", first_name="Test", last_name="Seller"))
    s.add_product(Product(sku="SKU_001", purchase_price=Decimal("50")))
    s.add_purchase_record(PurchaseRecord(
        seller_id="seller_1",
        items=[PurchaseItem(sku="SKU_001", quantity=2, sale_price=Decimal("100"))],
    ))
    return s


class TestDataStore:
    def test_dataset_snapshot(self):
        s = make_store()
        dataset = s.dataset()
        assert [x.id for x in dataset.sellers] == ["seller_1"]
        assert [p.sku for p in dataset.products] == ["SKU_001"]
        assert len(dataset.purchase_records) == 1

        # later writes do not leak into an earlier snapshot
        s.add_purchase_record(dataset.purchase_records[0])
        assert len(dataset.purchase_records) == 1
        assert len(s.dataset().purchase_records) == 2

    def test_re_adding_seller_replaces_it(self):
        s = make_store()
        s.add_seller(Seller(id="seller_1", first_name="New", last_name="Name"))
        assert [x.first_name for x in s.list_sellers()] == ["New"]

    def test_clear(self):
        s = make_store()
        s.clear()
        assert s.get_seller("seller_1") is None
        assert s.list_products() == []
        assert s.purchase_records == []
