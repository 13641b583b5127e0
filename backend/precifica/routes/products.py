"""
Product routes — the pricing grid.

Confirmation before deleting rows is the UI's job; these endpoints act
immediately.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from precifica.container import get_products_service
from precifica.core.exceptions import StorageError, ValidationError
from precifica.schemas.products import (
    ProductCreate,
    ProductDeleteRequest,
    ProductDeleteResponse,
    ProductFieldUpdate,
    ProductListResponse,
)
from precifica.services.products_service import ProductsService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=ProductListResponse)
async def list_products(
    search: Optional[str] = Query(default=None),
    service: ProductsService = Depends(get_products_service),
):
    """List products, optionally filtered by SKU, name or provider."""
    products = service.list_products(search)
    return ProductListResponse(products=[p.to_wire() for p in products], total=len(products))


@router.get("/export.csv")
async def export_products_csv(service: ProductsService = Depends(get_products_service)):
    """Download the grid as a semicolon-separated CSV."""
    return Response(
        content=service.export_csv().encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="precifica_produtos.csv"'},
    )


@router.post("", status_code=201)
async def create_product(
    body: Optional[ProductCreate] = None,
    service: ProductsService = Depends(get_products_service),
):
    """Add a new row at the top of the grid."""
    fields = body.model_dump(by_alias=True, exclude_none=True) if body else {}
    try:
        product = service.create_product(fields)
    except StorageError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return product.to_wire()


@router.patch("/{product_id}")
async def update_product_field(
    product_id: str,
    body: ProductFieldUpdate,
    service: ProductsService = Depends(get_products_service),
):
    """
    Apply one cell edit.

    An empty value on platingCost clears the manual override and the
    plating cost goes back to being derived from the gold price.
    """
    try:
        product = service.update_field(product_id, body.field, body.value)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except StorageError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product.to_wire()


@router.post("/delete", response_model=ProductDeleteResponse)
async def delete_products(
    body: ProductDeleteRequest,
    service: ProductsService = Depends(get_products_service),
):
    """Bulk delete; unknown ids are ignored."""
    try:
        deleted = service.delete_products(body.ids)
    except StorageError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return ProductDeleteResponse(deleted=deleted)


@router.delete("/{product_id}", response_model=ProductDeleteResponse)
async def delete_product(
    product_id: str,
    service: ProductsService = Depends(get_products_service),
):
    try:
        deleted = service.delete_product(product_id)
    except StorageError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    if not deleted:
        raise HTTPException(status_code=404, detail="Product not found")
    return ProductDeleteResponse(deleted=1)
