"""
Menu API integration: GET the full collection, PUT a partial update per item.
Transport failures and malformed collections raise MenuServiceError; update status codes go back to the caller.
"""
from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from menu_admin.config import get_settings
from menu_admin.schemas.menu import BestSellerUpdate, MenuItem, MenuListResponse

logger = logging.getLogger(__name__)


class MenuServiceError(Exception):
    """The menu API could not be reached or answered with something unusable."""


def _headers() -> dict[str, str]:
    settings = get_settings()
    if settings.menu_api_token:
        return {"Authorization": f"Bearer {settings.menu_api_token}"}
    return {}


def item_url(item_id: str) -> str:
    return f"{get_settings().menu_api_url.rstrip('/')}/{quote(item_id, safe='')}"


async def fetch_menu() -> list[MenuItem]:
    """
    GET the menu collection: {"menuItems": [...]}.
    Raises MenuServiceError on transport failure, non-success status or malformed body.
    """
    settings = get_settings()
    url = settings.menu_api_url
    try:
        async with httpx.AsyncClient(timeout=settings.menu_request_timeout, headers=_headers()) as client:
            resp = await client.get(url)
    except httpx.HTTPError as e:
        logger.exception("menu_fetch_failed", extra={"url": url})
        raise MenuServiceError(f"GET {url} failed: {e}") from e

    logger.info("menu_fetch_response", extra={"status_code": resp.status_code})
    if not resp.is_success:
        raise MenuServiceError(f"GET {url} returned {resp.status_code}")
    try:
        body: Any = resp.json()
        return MenuListResponse.model_validate(body).menu_items
    except (ValueError, ValidationError) as e:
        logger.exception("menu_fetch_malformed", extra={"status_code": resp.status_code})
        raise MenuServiceError(f"GET {url} returned a malformed body") from e


async def update_best_seller(item_id: str, is_best_seller: bool) -> int:
    """
    PUT {"isBestSeller": flag} to the item. Returns the status code; the body is not inspected.
    Raises MenuServiceError only when the request itself fails.
    """
    settings = get_settings()
    url = item_url(item_id)
    payload = BestSellerUpdate(is_best_seller=is_best_seller).model_dump(by_alias=True)
    try:
        async with httpx.AsyncClient(timeout=settings.menu_request_timeout, headers=_headers()) as client:
            resp = await client.put(url, json=payload)
    except httpx.HTTPError as e:
        logger.exception("menu_update_failed", extra={"item_id": item_id, "url": url})
        raise MenuServiceError(f"PUT {url} failed: {e}") from e

    try:
        body = resp.json() if resp.headers.get("content-type", "").startswith("application/json") else {}
    except ValueError:
        body = {"raw": resp.text[:200]}
    logger.info(
        "menu_update_response",
        extra={
            "item_id": item_id,
            "status_code": resp.status_code,
            "menu_response": {"status_code": resp.status_code, "body": body},
        },
    )
    return resp.status_code
