from __future__ import annotations

from typing import Dict, Optional

from retailpos.config import get_config
from retailpos.models import PaperProfile

A4 = PaperProfile(
    id="A4",
    page_size="A4",
    margin="0.5in",
    body_width=None,
    font_family="'Times New Roman', serif",
    font_size="14px",
    title_font_size="18px",
    thermal=False,
)

THERMAL_80MM = PaperProfile(
    id="80mm",
    page_size="80mm auto",
    margin="0",
    body_width="76mm",
    font_family="'Courier New', monospace",
    font_size="10px",
    title_font_size="12px",
    thermal=True,
)

THERMAL_57MM = PaperProfile(
    id="57mm",
    page_size="57mm auto",
    margin="0",
    body_width="53mm",
    font_family="'Courier New', monospace",
    font_size="8px",
    title_font_size="10px",
    thermal=True,
)

PAPER_PROFILES: Dict[str, PaperProfile] = {p.id: p for p in (A4, THERMAL_80MM, THERMAL_57MM)}


def get_paper_profile(paper_id: Optional[str] = None) -> PaperProfile:
    """Look up a profile by id ('A4', '80mm', '57mm'); None means the configured default."""
    if paper_id is None:
        paper_id = get_config().default_paper_size
    try:
        return PAPER_PROFILES[paper_id]
    except KeyError:
        raise ValueError(
            f"Unknown paper size: {paper_id!r} (expected one of {', '.join(PAPER_PROFILES)})"
        ) from None
