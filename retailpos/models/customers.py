from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Customer(BaseModel):
    """Customer record; `id` is None for an ad hoc walk-in customer."""
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = Field(default=None, description="Unique customer identifier")
    name: str = Field(default="", description="Customer name")
    phone: str = Field(default="", description="Customer phone number")
    address: str = Field(default="", description="Customer address")
    email: str = Field(default="", description="Customer email")
