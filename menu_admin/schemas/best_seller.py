from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from menu_admin.schemas.menu import MenuCategory


class ModalState(str, Enum):
    CLOSED = "closed"
    OPEN_EMPTY = "open_empty"
    OPEN_WITH_SELECTION = "open_with_selection"
    SUBMITTING = "submitting"


class MenuItemView(BaseModel):
    id: str
    name: str
    description: str
    price: float
    price_display: str
    category: MenuCategory
    image: Optional[str] = None
    placeholder_image: bool  # True when no image is set
    available: bool
    is_best_seller: bool


class BestSellerStats(BaseModel):
    total_best_sellers: int
    eligible_items: int
    landing_page_slot_limit: int  # display only


class AddModalView(BaseModel):
    state: ModalState
    eligible_items: list[MenuItemView] = Field(default_factory=list)
    selected_items: list[str] = Field(default_factory=list)
    selected_count: int = 0
    can_submit: bool = False
    submit_label: str
    notice: Optional[str] = None


class BestSellerView(BaseModel):
    """Rendered state of the best-seller admin screen."""

    loading: bool
    updating: bool
    error: Optional[str] = None
    success: Optional[str] = None
    stats: BestSellerStats
    best_seller_items: list[MenuItemView]
    modal: AddModalView


class BestSellerToggle(BaseModel):
    """PUT /admin/best-sellers/items/{item_id} body."""

    is_best_seller: bool
