from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from retailpos.money import coerce_amount


class Product(BaseModel):
    """Catalog product as read from the catalog service."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Unique product identifier")
    sku: str = Field(default="", description="Stock keeping unit code")
    name: str = Field(description="Product name")
    sale_price: int = Field(ge=0, description="Unit sale price in VND")
    barcode: Optional[str] = Field(default=None, description="Product barcode, if any")
    unit: str = Field(default="cái", description="Unit of measure shown on receipts")

    @field_validator("sale_price", mode="before")
    @classmethod
    def _whole_vnd(cls, v):
        return coerce_amount(v)
