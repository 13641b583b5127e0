"""
Product store — the ordered product grid and its local mirror.

The in-memory list is the single source of truth; every mutation is
recomputed against the pricing context it is given and then written to
the products file.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional

from precifica.core.constants.pricing import (
    DEFAULT_MARKUP_PERCENT,
    EDITABLE_FIELDS,
    NUMERIC_FIELDS,
    PLATING_COST_FIELD,
    SEARCH_FIELDS,
)
from precifica.core.exceptions import StorageError, ValidationError
from precifica.db.base_store import BaseStore
from precifica.schemas.pricing import PricingContext
from precifica.schemas.products import Product, new_product_id
from precifica.utils import pricing_engine
from precifica.utils.type_converters import to_float, to_text

logger = logging.getLogger("product_store")

# Model attribute -> wire (camelCase) name, and the reverse lookup
_FIELD_ATTRS: Dict[str, str] = {
    name: info.alias or name
    for name, info in Product.model_fields.items()
}
_ATTR_BY_WIRE: Dict[str, str] = {wire: attr for attr, wire in _FIELD_ATTRS.items()}


class ProductStore(BaseStore):
    """CRUD over the ordered product list."""

    def __init__(self, settings=None) -> None:
        super().__init__(settings)
        self._products: List[Product] = []

    # -- Persistence -------------------------------------------------------------

    def load(self, context: PricingContext) -> int:
        """Replace the in-memory list with the products file, if any."""
        data = self._read_json(self._settings.products_file, [])
        if not isinstance(data, list):
            logger.warning("products file has unexpected type=%s; ignoring", type(data).__name__)
            data = []
        products = [Product.model_validate(row) for row in data if isinstance(row, dict)]
        self._products = self._dedupe_ids(products)
        pricing_engine.recompute_all(self._products, context)
        logger.info("products loaded count=%s", len(self._products))
        return len(self._products)

    def save(self) -> None:
        self._persist(self._products)

    def _persist(self, products: List[Product]) -> None:
        self._write_json(self._settings.products_file, [p.to_wire() for p in products])

    def to_wire(self) -> List[Dict[str, Any]]:
        return [p.to_wire() for p in self._products]

    # -- Queries -----------------------------------------------------------------

    def all(self) -> List[Product]:
        return list(self._products)

    def count(self) -> int:
        return len(self._products)

    def get(self, product_id: str) -> Optional[Product]:
        for product in self._products:
            if product.id == product_id:
                return product
        return None

    def list(self, filter_term: Optional[str] = None) -> List[Product]:
        """Products whose SKU, name or provider contains filter_term (case-insensitive)."""
        term = (filter_term or "").strip().lower()
        if not term:
            return self.all()
        return [
            p for p in self._products
            if any(term in (getattr(p, _ATTR_BY_WIRE[f]) or "").lower() for f in SEARCH_FIELDS)
        ]

    # -- Mutations ---------------------------------------------------------------
    # The file is written before the in-memory list changes; a failed write
    # (StorageError) leaves the grid exactly as it was.

    def create(self, fields: Dict[str, Any] | None, context: PricingContext) -> Product:
        """Insert a new product at the head of the list."""
        values = {k: v for k, v in (fields or {}).items() if v is not None}
        values.pop("id", None)
        values.pop("manualPlating", None)
        values.pop("manual_plating", None)
        if "markupPercent" not in values and "markup_percent" not in values:
            values["markupPercent"] = DEFAULT_MARKUP_PERCENT
        product = Product.model_validate({**values, "id": new_product_id(), "manualPlating": False})
        pricing_engine.recompute(product, context)

        products = [product] + self._products
        self._persist(products)
        self._products = products
        logger.info("product created id=%s sku=%s", product.id, product.sku)
        return product

    def update(
        self, product_id: str, field: str, raw_value: Any, context: PricingContext
    ) -> Optional[Product]:
        """
        Apply a single cell edit.

        Returns the updated product, or None when no product has that id
        (nothing is changed or written in that case).

        Raises:
            ValidationError: field is not user-editable
            StorageError: the products file could not be written; the edit is undone
        """
        if field not in _ATTR_BY_WIRE and field in _FIELD_ATTRS:
            field = _FIELD_ATTRS[field]
        if field not in EDITABLE_FIELDS:
            raise ValidationError(f"Field '{field}' is not editable")

        product = self.get(product_id)
        if product is None:
            logger.info("product update skipped, not found id=%s field=%s", product_id, field)
            return None

        with self._rollback_on_failure([product]):
            attr = _ATTR_BY_WIRE[field]
            if field == PLATING_COST_FIELD:
                if raw_value is None or (isinstance(raw_value, str) and raw_value.strip() == ""):
                    product.manual_plating = False
                else:
                    product.manual_plating = True
                    product.plating_cost = to_float(raw_value)
            elif field in NUMERIC_FIELDS:
                setattr(product, attr, to_float(raw_value))
            else:
                setattr(product, attr, to_text(raw_value))

            pricing_engine.recompute(product, context)
            self.save()
        return product

    def delete(self, product_id: str) -> bool:
        return self.delete_many([product_id]) == 1

    def delete_many(self, product_ids: Iterable[str]) -> int:
        """Remove every product whose id is listed; unknown ids are ignored."""
        targets = set(product_ids)
        kept = [p for p in self._products if p.id not in targets]
        removed = len(self._products) - len(kept)
        if removed:
            self._persist(kept)
            self._products = kept
        logger.info("products deleted requested=%s removed=%s", len(targets), removed)
        return removed

    def replace_all(self, products: Iterable[Product], context: PricingContext) -> int:
        """Swap the whole list (remote pull), recompute and persist."""
        incoming = self._dedupe_ids(list(products))
        pricing_engine.recompute_all(incoming, context)
        self._persist(incoming)
        self._products = incoming
        return len(incoming)

    def recompute_all(self, context: PricingContext) -> None:
        """Reprice every product; on a failed write the previous prices are restored."""
        with self._rollback_on_failure(self._products):
            pricing_engine.recompute_all(self._products, context)
            self.save()

    @staticmethod
    @contextmanager
    def _rollback_on_failure(products: List[Product]):
        snapshot = [(product, product.model_dump()) for product in products]
        try:
            yield
        except StorageError:
            for product, state in snapshot:
                for name, value in state.items():
                    setattr(product, name, value)
            raise

    @staticmethod
    def _dedupe_ids(products: List[Product]) -> List[Product]:
        seen = set()
        for product in products:
            if product.id in seen:
                fresh = new_product_id()
                logger.info("duplicate product id reassigned old=%s new=%s", product.id, fresh)
                product.id = fresh
            seen.add(product.id)
        return products
