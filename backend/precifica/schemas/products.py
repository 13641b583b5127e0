"""
Product schemas — the priced product record and grid request/response models.

Field aliases are the camelCase names used in local storage and in the
remote JSON file, so files written by the browser build load unchanged.
"""
import uuid
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from precifica.utils.type_converters import to_float, to_text


def new_product_id() -> str:
    return uuid.uuid4().hex


class Product(BaseModel):
    """
    One priced grid row.

    Inputs are coerced leniently: a missing or non-numeric number reads as
    zero, markup included (new rows get the 300% default from the store).
    Negative values and fractional thickness are accepted and priced as
    entered; nothing is clamped.
    """
    model_config = ConfigDict(populate_by_name=True, validate_assignment=False)

    id: str = Field(default_factory=new_product_id)
    sku: str = ""
    name: str = ""
    provider: str = ""
    plating_provider: str = Field(default="", alias="platingProvider")
    raw_cost: float = Field(default=0.0, alias="rawCost")
    weight: float = 0.0
    thickness: float = 0.0
    markup_percent: float = Field(default=0.0, alias="markupPercent")
    manual_plating: bool = Field(default=False, alias="manualPlating")
    plating_cost: float = Field(default=0.0, alias="platingCost")
    total_cost: float = Field(default=0.0, alias="totalCost")
    sale_price: float = Field(default=0.0, alias="salePrice")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        # Older files carry millisecond timestamps as integer ids
        if value is None or value == "":
            return new_product_id()
        return str(value)

    @field_validator("sku", "name", "provider", "plating_provider", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return to_text(value)

    @field_validator(
        "raw_cost", "weight", "thickness", "markup_percent",
        "plating_cost", "total_cost", "sale_price",
        mode="before",
    )
    @classmethod
    def _coerce_number(cls, value: Any) -> float:
        return to_float(value)

    @field_validator("manual_plating", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in ("true", "1", "yes")
        return bool(value)

    def to_wire(self) -> dict:
        """Dump using the camelCase storage names."""
        return self.model_dump(by_alias=True)


class ProductCreate(BaseModel):
    """Optional initial values for a new grid row."""
    model_config = ConfigDict(populate_by_name=True)

    sku: Optional[str] = None
    name: Optional[str] = None
    provider: Optional[str] = None
    plating_provider: Optional[str] = Field(default=None, alias="platingProvider")
    raw_cost: Optional[float] = Field(default=None, alias="rawCost")
    weight: Optional[float] = None
    thickness: Optional[float] = None
    markup_percent: Optional[float] = Field(default=None, alias="markupPercent")


class ProductFieldUpdate(BaseModel):
    """A single grid cell edit; value is the raw text typed by the user."""
    field: str
    value: Optional[str] = None


class ProductDeleteRequest(BaseModel):
    ids: List[str]


class ProductDeleteResponse(BaseModel):
    deleted: int


class ProductListResponse(BaseModel):
    products: List[dict]
    total: int
