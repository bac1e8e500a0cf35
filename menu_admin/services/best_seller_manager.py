"""
Best-seller admin screen state: menu snapshot, derived lists, add-modal selection.
Every mutation goes to the menu API and is followed by a full reload; the snapshot is
only ever replaced, never patched.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Optional

from menu_admin.config import get_settings
from menu_admin.core.formatting import format_price
from menu_admin.schemas.best_seller import (
    AddModalView,
    BestSellerStats,
    BestSellerView,
    MenuItemView,
    ModalState,
)
from menu_admin.schemas.menu import MenuItem
from menu_admin.services.menu_client import MenuServiceError, fetch_menu, update_best_seller

logger = logging.getLogger(__name__)

LOAD_FAILED = "Failed to load menu data"
UPDATE_FAILED = "Failed to update menu"
EMPTY_SELECTION = "Select at least one menu item"
ADDED = "Menu item added to best sellers"
REMOVED = "Menu item removed from best sellers"
NO_ELIGIBLE_ITEMS = "No menu items are available to become best sellers"


def select_best_sellers(items: Iterable[MenuItem]) -> list[MenuItem]:
    return [item for item in items if item.is_best_seller]


def select_eligible(items: Iterable[MenuItem]) -> list[MenuItem]:
    """Items that can be promoted: available and not already best sellers."""
    return [item for item in items if not item.is_best_seller and item.available]


def to_item_view(item: MenuItem) -> MenuItemView:
    return MenuItemView(
        id=item.id,
        name=item.name,
        description=item.description,
        price=item.price,
        price_display=format_price(item.price),
        category=item.category,
        image=item.image,
        placeholder_image=not item.image,
        available=item.available,
        is_best_seller=item.is_best_seller,
    )


class BestSellerManager:
    """
    One admin screen's worth of state.

    `updating` only mirrors the disabled buttons of the screen; it does not
    serialize callers.
    """

    def __init__(self, slot_limit: Optional[int] = None) -> None:
        self.slot_limit = slot_limit if slot_limit is not None else get_settings().landing_page_slot_limit
        self.all_menu_items: tuple[MenuItem, ...] = ()
        self.loading = True
        self.updating = False
        self.error: Optional[str] = None
        self.success: Optional[str] = None
        self.modal_open = False
        self.selected_items: list[str] = []
        self.mounted = False
        self._submitting = False

    # Derived views

    @property
    def best_seller_items(self) -> list[MenuItem]:
        return select_best_sellers(self.all_menu_items)

    @property
    def available_menu_items(self) -> list[MenuItem]:
        return select_eligible(self.all_menu_items)

    @property
    def modal_state(self) -> ModalState:
        if not self.modal_open:
            return ModalState.CLOSED
        if self._submitting:
            return ModalState.SUBMITTING
        if self.selected_items:
            return ModalState.OPEN_WITH_SELECTION
        return ModalState.OPEN_EMPTY

    # Lifecycle

    async def mount(self) -> None:
        """First load; later calls are no-ops until unmount()."""
        if self.mounted:
            return
        self.mounted = True
        await self.load_menu()

    def unmount(self) -> None:
        self.all_menu_items = ()
        self.loading = True
        self.updating = False
        self.modal_open = False
        self.selected_items = []
        self._clear_messages()
        self.mounted = False

    def _clear_messages(self) -> None:
        self.error = None
        self.success = None

    # Operations

    async def load_menu(self) -> None:
        """Replace the snapshot with a fresh GET; on failure the snapshot becomes empty."""
        try:
            items = await fetch_menu()
        except MenuServiceError:
            logger.warning("menu_load_failed")
            self.all_menu_items = ()
            self.error = LOAD_FAILED
        else:
            self.all_menu_items = tuple(items)
        finally:
            self.loading = False

    async def reload(self) -> None:
        self._clear_messages()
        await self.load_menu()

    async def set_best_seller(self, item_id: str, is_best_seller: bool) -> None:
        self._clear_messages()
        self.updating = True
        try:
            try:
                status_code = await update_best_seller(item_id, is_best_seller)
            except MenuServiceError:
                self.error = UPDATE_FAILED
                return
            if not 200 <= status_code < 300:
                logger.warning("best_seller_update_rejected", extra={"item_id": item_id, "status_code": status_code})
                self.error = UPDATE_FAILED
                return
            self.success = ADDED if is_best_seller else REMOVED
            await self.load_menu()
        finally:
            self.updating = False

    async def bulk_add(self, item_ids: Iterable[str]) -> None:
        """
        PUT isBestSeller=true for every id concurrently and wait for all of them.
        Any request failing at transport level fails the whole batch with one message;
        status codes are not inspected and no per-item outcome is kept.
        """
        item_ids = list(item_ids)
        self._clear_messages()
        if not item_ids:
            self.error = EMPTY_SELECTION
            return

        self.updating = True
        self._submitting = True
        try:
            results = await asyncio.gather(
                *(update_best_seller(item_id, True) for item_id in item_ids),
                return_exceptions=True,
            )
            failures = [r for r in results if isinstance(r, BaseException)]
            for failure in failures:
                if not isinstance(failure, MenuServiceError):
                    raise failure
            if failures:
                logger.warning("best_seller_bulk_add_failed", extra={"item_ids": item_ids})
                self.error = UPDATE_FAILED
                return

            logger.info("best_seller_bulk_add", extra={"item_ids": item_ids})
            self.success = f"{len(item_ids)} menu item(s) added to best sellers"
            self.selected_items = []
            self.modal_open = False
            await self.load_menu()
        finally:
            self._submitting = False
            self.updating = False

    async def submit_selection(self) -> None:
        await self.bulk_add(list(self.selected_items))

    def toggle_selection(self, item_id: str) -> None:
        if item_id in self.selected_items:
            self.selected_items = [i for i in self.selected_items if i != item_id]
        else:
            self.selected_items = [*self.selected_items, item_id]

    def open_modal(self) -> None:
        self.modal_open = True

    def close_modal(self) -> None:
        self.modal_open = False
        self.selected_items = []
        self.error = None

    # Rendering

    def view(self) -> BestSellerView:
        best_sellers = self.best_seller_items
        eligible = self.available_menu_items
        selected_count = len(self.selected_items)
        return BestSellerView(
            loading=self.loading,
            updating=self.updating,
            error=self.error,
            success=self.success,
            stats=BestSellerStats(
                total_best_sellers=len(best_sellers),
                eligible_items=len(eligible),
                landing_page_slot_limit=self.slot_limit,
            ),
            best_seller_items=[to_item_view(item) for item in best_sellers],
            modal=AddModalView(
                state=self.modal_state,
                eligible_items=[to_item_view(item) for item in eligible] if self.modal_open else [],
                selected_items=list(self.selected_items),
                selected_count=selected_count,
                can_submit=selected_count > 0 and not self.updating,
                submit_label="Saving..." if self.updating else f"Add {selected_count} item(s)",
                notice=NO_ELIGIBLE_ITEMS if self.modal_open and not eligible else None,
            ),
        )
