# utils.py
# Helpers: card view model, rating badge, identity key, filter option lists

from __future__ import annotations
from numbers import Real
from typing import List, Optional
from pydantic import BaseModel
from models import AttractionRecord

FALLBACK_IMAGE_URL = "https://images.unsplash.com/photo-1507525428034-b723cf961d3e?q=80&w=1200&auto=format&fit=crop"

# static option lists shown in the filter dropdowns ("" = all)
CATEGORIES = ["Beach", "Fort", "Temple", "Waterfall", "Activity"]
LOCATIONS = ["Malvan", "Tarkarli", "Vengurla", "Sawantwadi", "Kankavli"]
ALL_CATEGORIES = "All Categories"
ALL_LOCATIONS = "All Locations"

PLACEHOLDER_COUNT = 6


class AttractionCard(BaseModel):
    key: str
    name: str
    description: Optional[str] = None
    image_url: str
    category: Optional[str] = None
    location: Optional[str] = None
    rating_badge: Optional[str] = None
    tags: List[str] = []


def rating_badge(item: AttractionRecord) -> Optional[str]:
    """
    "★ 4.7" for a numeric rating, one decimal. A rating stored as a string
    ("4.5") gets no badge, neither does a bool or any other JSON value.
    """
    r = item.rating
    if isinstance(r, bool) or not isinstance(r, Real):
        return None
    return f"★ {float(r):.1f}"


def card_key(item: AttractionRecord) -> str:
    """Stable list key: id when persisted, name otherwise (seed previews)."""
    if item.id is not None and item.id != "":
        return str(item.id)
    return item.name


def to_card(item: AttractionRecord) -> AttractionCard:
    return AttractionCard(
        key=card_key(item),
        name=item.name,
        description=item.description,
        image_url=item.image_url or FALLBACK_IMAGE_URL,
        category=item.category,
        location=item.location,
        rating_badge=rating_badge(item),
        tags=list(item.tags or []),
    )


def loading_placeholders(n: int = PLACEHOLDER_COUNT) -> List[dict]:
    # skeleton cards rendered instead of items while a request is in flight
    return [{"key": f"placeholder-{i}", "placeholder": True} for i in range(n)]


def filter_options() -> dict:
    return {
        "categories": [{"value": "", "label": ALL_CATEGORIES}] + [{"value": c, "label": c} for c in CATEGORIES],
        "locations": [{"value": "", "label": ALL_LOCATIONS}] + [{"value": loc, "label": loc} for loc in LOCATIONS],
    }
