"""
Admin best-seller screen: every route is one interaction and returns the rendered view.
Manager role required.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from menu_admin.core.auth import require_role
from menu_admin.schemas.auth import UserRole
from menu_admin.schemas.best_seller import BestSellerToggle, BestSellerView, ModalState
from menu_admin.services.best_seller_manager import BestSellerManager

router = APIRouter(
    prefix="/admin/best-sellers",
    tags=["best-sellers"],
    dependencies=[require_role(UserRole.MANAGER)],
)


def get_manager(request: Request) -> BestSellerManager:
    return request.app.state.best_seller_manager


Manager = Annotated[BestSellerManager, Depends(get_manager)]


def _ensure_idle(manager: BestSellerManager) -> None:
    if manager.updating:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Update in progress")


def _ensure_modal_open(manager: BestSellerManager) -> None:
    if manager.modal_state == ModalState.CLOSED:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Add dialog is not open")


@router.get(
    "",
    response_model=BestSellerView,
    summary="Best-seller screen",
    description="Loads the menu on first access, then returns the current screen state.",
)
async def get_screen(manager: Manager) -> BestSellerView:
    await manager.mount()
    return manager.view()


@router.post("/reload", response_model=BestSellerView)
async def reload_menu(manager: Manager) -> BestSellerView:
    await manager.reload()
    return manager.view()


@router.put("/items/{item_id}", response_model=BestSellerView)
async def set_best_seller(item_id: str, body: BestSellerToggle, manager: Manager) -> BestSellerView:
    _ensure_idle(manager)
    await manager.set_best_seller(item_id, body.is_best_seller)
    return manager.view()


@router.post("/modal", response_model=BestSellerView)
async def open_modal(manager: Manager) -> BestSellerView:
    manager.open_modal()
    return manager.view()


@router.delete("/modal", response_model=BestSellerView)
async def close_modal(manager: Manager) -> BestSellerView:
    manager.close_modal()
    return manager.view()


@router.post("/modal/selection/{item_id}", response_model=BestSellerView)
async def toggle_selection(item_id: str, manager: Manager) -> BestSellerView:
    _ensure_modal_open(manager)
    manager.toggle_selection(item_id)
    return manager.view()


@router.post("/modal/submit", response_model=BestSellerView)
async def submit_selection(manager: Manager) -> BestSellerView:
    _ensure_modal_open(manager)
    _ensure_idle(manager)
    await manager.submit_selection()
    return manager.view()
