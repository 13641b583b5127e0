"""
Products service — grid operations priced against the current context.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from precifica.db.product_store import ProductStore
from precifica.schemas.products import Product
from precifica.services.pricing_service import PricingService
from precifica.utils.csv_export import export_products_csv

logger = logging.getLogger(__name__)


class ProductsService:
    def __init__(self, product_store: ProductStore, pricing: PricingService) -> None:
        self._store = product_store
        self._pricing = pricing

    def list_products(self, search: Optional[str] = None) -> List[Product]:
        return self._store.list(search)

    def create_product(self, fields: Optional[Dict[str, Any]] = None) -> Product:
        return self._store.create(fields, self._pricing.context)

    def update_field(self, product_id: str, field: str, value: Any) -> Optional[Product]:
        return self._store.update(product_id, field, value, self._pricing.context)

    def delete_product(self, product_id: str) -> bool:
        return self._store.delete(product_id)

    def delete_products(self, product_ids: Iterable[str]) -> int:
        return self._store.delete_many(product_ids)

    def export_csv(self) -> str:
        return export_products_csv(self._store.all())
