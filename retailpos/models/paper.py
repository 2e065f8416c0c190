from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

PaperSize = Literal["A4", "80mm", "57mm"]


class PaperProfile(BaseModel):
    """Print layout parameters for one paper size."""
    model_config = ConfigDict(frozen=True)

    id: PaperSize = Field(description="Paper size identifier")
    page_size: str = Field(description="CSS @page size value")
    margin: str = Field(description="CSS @page margin")
    body_width: Optional[str] = Field(default=None, description="Fixed printable width, None for full page")
    font_family: str = Field(description="CSS font family")
    font_size: str = Field(description="Base font size")
    title_font_size: str = Field(description="Font size for receipt titles")
    thermal: bool = Field(default=False, description="Narrow receipt-printer layout")
