# storefront/schemas/listing.py
"""
Pydantic models for catalog listings (jewelry products).

| Field        | Type                | Notes |
|--------------|---------------------|-------|
| title        | `str`               | required |
| price        | `float`             | >= 0 |
| category     | `Category`          | ring / necklace / earrings / bracelet |
| description  | `str`               | optional |
| images       | `list[ListingImage]`| hosted URLs, no upload here |
| metal_type   | `MetalType`         | required |
| metal_purity | `MetalPurity`       | optional |
| gemstones    | `list[Gemstone]`    | optional |
"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from storefront.schemas.common import CamelModel

Category = Literal["ring", "necklace", "earrings", "bracelet"]
MetalType = Literal["gold", "silver", "platinum", "rose_gold", "white_gold", "palladium"]
MetalPurity = Literal["10k", "14k", "18k", "22k", "24k", "925", "950", "999"]
GemstoneType = Literal["diamond", "ruby", "sapphire", "emerald", "amethyst", "pearl", "other"]


class ListingImage(CamelModel):
    url: str
    filename: Optional[str] = None


class Gemstone(CamelModel):
    type: GemstoneType


class ListingBase(CamelModel):
    title: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    category: Category
    description: str = ""
    images: List[ListingImage] = Field(default_factory=list)
    metal_type: MetalType
    metal_purity: Optional[MetalPurity] = None
    gemstones: List[Gemstone] = Field(default_factory=list)


class ListingCreate(ListingBase):
    pass


class ListingUpdate(CamelModel):
    """Partial update; only the fields sent are written."""
    title: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    category: Optional[Category] = None
    description: Optional[str] = None
    images: Optional[List[ListingImage]] = None
    metal_type: Optional[MetalType] = None
    metal_purity: Optional[MetalPurity] = None
    gemstones: Optional[List[Gemstone]] = None


class ListingOut(ListingBase):
    id: str
    created_at: Optional[datetime] = None


class ListingSummary(CamelModel):
    """Minimal display fields attached to order lines."""
    id: str
    title: str
    price: float
    image: Optional[str] = None
