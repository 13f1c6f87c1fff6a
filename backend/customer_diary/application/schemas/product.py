"""Pydantic DTOs for diary product lines."""

from decimal import Decimal

from pydantic import BaseModel, Field


class ProductLineCreate(BaseModel):
    upc: str | None = Field(None, max_length=64)
    name: str = Field(..., min_length=1, examples=["Pool filter cartridge"])
    qty: int = Field(..., gt=0)
    unit_price: Decimal = Field(..., ge=0)


class ProductLinesReplace(BaseModel):
    """The full product list for a diary; replaces whatever was stored."""

    products: list[ProductLineCreate] = Field(default_factory=list)


class ProductLineResponse(BaseModel):
    id: str
    diary_id: str
    upc: str | None
    name: str
    qty: int
    unit_price: Decimal
    line_total: Decimal

    model_config = {"from_attributes": True}
