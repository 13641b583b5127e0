"""
Unit tests for ProductStore — the ordered grid and its local mirror.

Tests cover:
- create: fresh unique ids, defaults, head insertion, recompute, persist
- update: numeric/text coercion, plating override set/clear, unknown id no-op,
  non-editable fields rejected
- delete / delete_many: exact removal, unknown ids ignored
- list: case-insensitive filter on SKU, name, provider
- load / replace_all: lenient parsing and id de-duplication
"""
import json
import math

import pytest

from precifica.core.exceptions import StorageError, ValidationError
from precifica.db.product_store import ProductStore
from precifica.schemas.products import Product
from precifica.utils.pricing_engine import compute_plating_cost


pytestmark = pytest.mark.unit


def _saved(test_settings):
    with open(test_settings.products_file, encoding="utf-8") as fh:
        return json.load(fh)


# --------------------------------------------------------------------------
# create
# --------------------------------------------------------------------------

class TestCreate:

    def test_defaults(self, product_store, context):
        p = product_store.create({}, context)
        assert p.sku == "" and p.name == ""
        assert p.raw_cost == 0 and p.weight == 0 and p.thickness == 0
        assert p.markup_percent == 300
        assert p.manual_plating is False
        assert p.total_cost == 0 and p.sale_price == 0

    def test_explicit_markup_kept(self, product_store, context):
        assert product_store.create({"markupPercent": 150}, context).markup_percent == 150
        assert product_store.create({"markup_percent": 0}, context).markup_percent == 0

    def test_inserted_at_head(self, product_store, context):
        first = product_store.create({"sku": "A"}, context)
        second = product_store.create({"sku": "B"}, context)
        assert [p.id for p in product_store.all()] == [second.id, first.id]

    def test_initial_fields_are_priced(self, product_store, context):
        p = product_store.create({"rawCost": 10, "weight": 2, "thickness": 5}, context)
        assert p.total_cost == pytest.approx(12.572, abs=0.001)
        assert p.sale_price == pytest.approx(50.288, abs=0.005)

    def test_caller_cannot_choose_id_or_manual_flag(self, product_store, context):
        p = product_store.create({"id": "fixed", "manualPlating": True, "platingCost": 5}, context)
        assert p.id != "fixed"
        assert p.manual_plating is False

    def test_ids_unique_when_bulk_created(self, product_store, context):
        ids = {product_store.create({}, context).id for _ in range(500)}
        assert len(ids) == 500

    def test_persists(self, product_store, context, test_settings):
        p = product_store.create({"sku": "PERSIST"}, context)
        saved = _saved(test_settings)
        assert saved[0]["id"] == p.id
        assert saved[0]["sku"] == "PERSIST"
        assert "rawCost" in saved[0]


# --------------------------------------------------------------------------
# update
# --------------------------------------------------------------------------

class TestUpdate:

    @pytest.fixture
    def product(self, product_store, context):
        return product_store.create({"rawCost": 10, "weight": 2, "thickness": 5}, context)

    def test_numeric_field_parsed(self, product_store, product, context):
        updated = product_store.update(product.id, "rawCost", "20.5", context)
        assert updated.raw_cost == 20.5
        assert math.isclose(updated.total_cost, 20.5 + updated.plating_cost, abs_tol=1e-9)

    def test_numeric_parse_failure_becomes_zero(self, product_store, product, context):
        updated = product_store.update(product.id, "weight", "heavy", context)
        assert updated.weight == 0
        assert updated.plating_cost == 0

    def test_text_field_stored_raw(self, product_store, product, context):
        updated = product_store.update(product.id, "name", "  Anel Dourado ", context)
        assert updated.name == "  Anel Dourado "

    def test_snake_case_field_name_accepted(self, product_store, product, context):
        updated = product_store.update(product.id, "plating_provider", "Galvano SP", context)
        assert updated.plating_provider == "Galvano SP"

    def test_setting_plating_cost_freezes_it(self, product_store, product, context):
        updated = product_store.update(product.id, "platingCost", "3.00", context)
        assert updated.manual_plating is True
        assert updated.plating_cost == 3.0

        product_store.update(product.id, "weight", "50", context)
        product_store.recompute_all(context.model_copy(update={"gold_price_per_gram": 900}))
        assert product_store.get(product.id).plating_cost == 3.0
        assert product_store.get(product.id).total_cost == pytest.approx(13.0)

    def test_clearing_plating_cost_resumes_derivation(self, product_store, product, context):
        product_store.update(product.id, "platingCost", "3.00", context)
        updated = product_store.update(product.id, "platingCost", "", context)
        assert updated.manual_plating is False
        assert updated.plating_cost == pytest.approx(compute_plating_cost(2, 5, context))

    def test_none_clears_plating_override(self, product_store, product, context):
        product_store.update(product.id, "platingCost", "3", context)
        assert product_store.update(product.id, "platingCost", None, context).manual_plating is False

    def test_unknown_id_is_noop(self, product_store, product, context, test_settings):
        before = _saved(test_settings)
        assert product_store.update("missing", "rawCost", "99", context) is None
        assert _saved(test_settings) == before

    @pytest.mark.parametrize("field", ["id", "totalCost", "salePrice", "manualPlating", "color"])
    def test_non_editable_field_rejected(self, product_store, product, context, field):
        with pytest.raises(ValidationError):
            product_store.update(product.id, field, "1", context)

    def test_persists(self, product_store, product, context, test_settings):
        product_store.update(product.id, "sku", "NEW-SKU", context)
        assert _saved(test_settings)[0]["sku"] == "NEW-SKU"


# --------------------------------------------------------------------------
# delete
# --------------------------------------------------------------------------

class TestDelete:

    def test_delete_existing_removes_only_it(self, product_store, context):
        a = product_store.create({"sku": "A"}, context)
        b = product_store.create({"sku": "B"}, context)
        c = product_store.create({"sku": "C"}, context)

        assert product_store.delete(b.id) is True
        assert [p.id for p in product_store.all()] == [c.id, a.id]

    def test_delete_missing_is_noop(self, product_store, context):
        product_store.create({"sku": "A"}, context)
        assert product_store.delete("nope") is False
        assert product_store.count() == 1

    def test_delete_many(self, product_store, context, test_settings):
        a = product_store.create({"sku": "A"}, context)
        b = product_store.create({"sku": "B"}, context)
        c = product_store.create({"sku": "C"}, context)

        removed = product_store.delete_many([a.id, c.id, "ghost"])
        assert removed == 2
        assert [p.id for p in product_store.all()] == [b.id]
        assert [row["id"] for row in _saved(test_settings)] == [b.id]


# --------------------------------------------------------------------------
# list
# --------------------------------------------------------------------------

class TestList:

    @pytest.fixture
    def filled(self, product_store, context):
        product_store.create({"sku": "BR-001", "name": "Brinco Gota", "provider": "Fornecedor Sul"}, context)
        product_store.create({"sku": "AN-002", "name": "Anel Liso", "provider": "Metais Norte"}, context)
        product_store.create({"sku": "CO-003", "name": "Colar", "provider": "fornecedor sul"}, context)
        return product_store

    def test_empty_term_returns_all(self, filled):
        assert len(filled.list("")) == 3
        assert len(filled.list(None)) == 3
        assert len(filled.list("   ")) == 3

    def test_matches_sku_case_insensitive(self, filled):
        assert [p.sku for p in filled.list("an-0")] == ["AN-002"]

    def test_matches_name(self, filled):
        assert [p.sku for p in filled.list("gota")] == ["BR-001"]

    def test_matches_provider(self, filled):
        assert sorted(p.sku for p in filled.list("FORNECEDOR")) == ["BR-001", "CO-003"]

    def test_does_not_match_plating_provider(self, product_store, context):
        product_store.create({"sku": "X", "platingProvider": "Galvano"}, context)
        assert product_store.list("galvano") == []

    def test_filter_does_not_mutate_store(self, filled):
        filled.list("gota")
        assert filled.count() == 3


# --------------------------------------------------------------------------
# load / replace_all
# --------------------------------------------------------------------------

class TestLoadAndReplace:

    def test_load_missing_file_is_empty(self, product_store, context):
        assert product_store.load(context) == 0

    def test_load_legacy_file(self, test_settings, context):
        import os
        os.makedirs(test_settings.data_dir, exist_ok=True)
        legacy = [
            {"id": 1718000000000, "sku": "A1", "name": "Anel", "rawCost": "10", "weight": 2,
             "thickness": 5, "markupPercent": 300, "platingCost": 0, "totalCost": 0, "salePrice": 0},
            {"id": 1718000000000, "sku": "A2", "name": "Anel 2"},
        ]
        with open(test_settings.products_file, "w", encoding="utf-8") as fh:
            json.dump(legacy, fh)

        store = ProductStore(test_settings)
        assert store.load(context) == 2
        first, second = store.all()
        assert first.id == "1718000000000"
        assert second.id != first.id
        assert first.sale_price == pytest.approx(50.288, abs=0.005)

    def test_load_corrupt_file_is_empty(self, test_settings, context):
        import os
        os.makedirs(test_settings.data_dir, exist_ok=True)
        with open(test_settings.products_file, "w", encoding="utf-8") as fh:
            fh.write("{not json")
        assert ProductStore(test_settings).load(context) == 0

    def test_replace_all(self, product_store, context, test_settings):
        product_store.create({"sku": "OLD"}, context)
        count = product_store.replace_all(
            [Product(sku="N1", raw_cost=1), Product(sku="N2", raw_cost=2)], context
        )
        assert count == 2
        assert [p.sku for p in product_store.all()] == ["N1", "N2"]
        assert [row["sku"] for row in _saved(test_settings)] == ["N1", "N2"]
        assert product_store.get("N1") is None


# --------------------------------------------------------------------------
# failed writes leave the grid untouched
# --------------------------------------------------------------------------

class TestFailedWrite:

    @pytest.fixture
    def product(self, product_store, context):
        return product_store.create({"sku": "KEEP", "rawCost": 10, "weight": 2, "thickness": 5}, context)

    def test_create(self, product_store, product, context, disk_full):
        with disk_full():
            with pytest.raises(StorageError):
                product_store.create({"sku": "NEW"}, context)
        assert [p.id for p in product_store.all()] == [product.id]

    def test_update(self, product_store, product, context, disk_full):
        sale_before = product.sale_price
        with disk_full():
            with pytest.raises(StorageError):
                product_store.update(product.id, "platingCost", "99", context)
        assert product.manual_plating is False
        assert product.sale_price == sale_before

    def test_delete_many(self, product_store, product, disk_full):
        with disk_full():
            with pytest.raises(StorageError):
                product_store.delete_many([product.id])
        assert product_store.get(product.id) is product

    def test_replace_all(self, product_store, product, context, disk_full):
        with disk_full():
            with pytest.raises(StorageError):
                product_store.replace_all([Product(id="r1", sku="REMOTE")], context)
        assert [p.id for p in product_store.all()] == [product.id]

    def test_recompute_all(self, product_store, product, context, disk_full):
        plating_before = product.plating_cost
        with disk_full():
            with pytest.raises(StorageError):
                product_store.recompute_all(context.model_copy(update={"gold_price_per_gram": 900}))
        assert product.plating_cost == plating_before
