"""
Remote document codec — base64 file content and the product JSON shapes.

The remote file has been written in three shapes over time:

- a bare array of products
- ``{"products": [...]}``
- ``{"data": [...]}``

Each accepted shape is unwrapped to the same list of products. Anything
else decodes to an empty list plus a warning instead of failing.
"""
import base64
import binascii
import enum
import json
import logging
from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict

from precifica.core.exceptions import ParseError, ValidationWarning
from precifica.schemas.products import Product

logger = logging.getLogger("remote_document")


class DocumentShape(str, enum.Enum):
    BARE_ARRAY = "bare_array"
    PRODUCTS_WRAPPER = "products_wrapper"
    DATA_WRAPPER = "data_wrapper"
    UNRECOGNIZED = "unrecognized"


class DecodedDocument(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    shape: DocumentShape
    products: List[Product]
    discarded: int = 0
    warning: Optional[ValidationWarning] = None


def decode_file_content(encoded: str) -> str:
    """Decode base64 file content (GitHub wraps it every 60 chars) to text."""
    if encoded is None:
        raise ParseError("remote file has no content")
    try:
        raw = base64.b64decode("".join(encoded.split()), validate=True)
        return raw.decode("utf-8")
    except (binascii.Error, ValueError) as exc:
        raise ParseError(f"remote file content is not valid base64 UTF-8: {exc}") from exc


def encode_file_content(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def _classify(payload: Any) -> tuple:
    if isinstance(payload, list):
        return DocumentShape.BARE_ARRAY, payload
    if isinstance(payload, dict):
        if isinstance(payload.get("products"), list):
            return DocumentShape.PRODUCTS_WRAPPER, payload["products"]
        if isinstance(payload.get("data"), list):
            return DocumentShape.DATA_WRAPPER, payload["data"]
    return DocumentShape.UNRECOGNIZED, []


def _is_identifiable(entry: Any) -> bool:
    if not isinstance(entry, dict):
        return False
    return bool(str(entry.get("sku") or "").strip() or str(entry.get("name") or "").strip())


def decode_product_document(text: str) -> DecodedDocument:
    """
    Parse the remote JSON text into products.

    Raises:
        ParseError: text is not JSON at all
    """
    try:
        payload = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise ParseError(f"remote file is not valid JSON: {exc}") from exc

    shape, entries = _classify(payload)
    if shape is DocumentShape.UNRECOGNIZED:
        warning = ValidationWarning(
            f"unexpected remote file format ({type(payload).__name__}); no products loaded"
        )
        logger.warning("remote document unrecognized type=%s", type(payload).__name__)
        return DecodedDocument(shape=shape, products=[], warning=warning)

    products = [Product.model_validate(entry) for entry in entries if _is_identifiable(entry)]
    discarded = len(entries) - len(products)
    if discarded:
        logger.info("remote document discarded entries without sku or name count=%s", discarded)
    return DecodedDocument(shape=shape, products=products, discarded=discarded)


def encode_product_document(products: Iterable[Product]) -> str:
    """Serialize products as a pretty-printed bare JSON array."""
    return json.dumps([p.to_wire() for p in products], indent=2, ensure_ascii=False)
