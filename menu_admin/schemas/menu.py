from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class MenuCategory(str, Enum):
    FOOD = "Food"
    BEVERAGE = "Beverage"


# Category names still sent by older menu backends
_LEGACY_CATEGORIES = {
    "Makanan": MenuCategory.FOOD,
    "Minuman": MenuCategory.BEVERAGE,
}


class MenuItem(BaseModel):
    """Read-only projection of one menu item as returned by GET /menu."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    name: str
    description: str = ""
    price: float = Field(ge=0)
    category: MenuCategory
    image: Optional[str] = None
    available: bool
    is_best_seller: bool = Field(validation_alias=AliasChoices("isBestSeller", "is_best_seller"))

    @field_validator("category", mode="before")
    @classmethod
    def _map_legacy_category(cls, value: Any) -> Any:
        return _LEGACY_CATEGORIES.get(value, value)


class MenuListResponse(BaseModel):
    """GET /menu envelope: {"menuItems": [...]}."""

    model_config = ConfigDict(populate_by_name=True)

    menu_items: list[MenuItem] = Field(
        default_factory=list, validation_alias=AliasChoices("menuItems", "menu_items")
    )


class BestSellerUpdate(BaseModel):
    """PUT /menu/{id} body; serialized with the wire name isBestSeller."""

    is_best_seller: bool = Field(serialization_alias="isBestSeller")
