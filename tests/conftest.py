"""
Pytest fixtures: fake menu API (respx), screen manager, ASGI test client, tokens.
"""
import os

MENU_API_URL = "http://menu.test/api/menu"
os.environ["MENU_API_URL"] = MENU_API_URL
os.environ.pop("MENU_API_TOKEN", None)

import json
import re

import httpx
import pytest
import pytest_asyncio
import respx
from httpx import ASGITransport, AsyncClient

from menu_admin.api.best_sellers import get_manager
from menu_admin.core.auth import create_access_token
from menu_admin.main import app
from menu_admin.schemas.auth import UserRole
from menu_admin.services.best_seller_manager import BestSellerManager


def make_item(item_id, name, *, best_seller=False, available=True, category="Food", price=25000, image=None):
    return {
        "_id": item_id,
        "name": name,
        "description": f"{name} description",
        "price": price,
        "category": category,
        "image": image,
        "available": available,
        "isBestSeller": best_seller,
    }


class FakeMenuBackend:
    """In-memory menu API: GET /menu and PUT /menu/{id} with {"isBestSeller": bool}."""

    def __init__(self, items):
        self.items = {item["_id"]: dict(item) for item in items}
        self.put_bodies = []
        self.get_status = 200
        self.put_status = 200
        self.fail_put_ids = set()

    def install(self, router):
        self.get_route = router.get(MENU_API_URL).mock(side_effect=self._get)
        self.put_route = router.put(url__regex=rf"^{re.escape(MENU_API_URL)}/(?P<item_id>[^/]+)$").mock(
            side_effect=self._put
        )

    def _get(self, request):
        if self.get_status != 200:
            return httpx.Response(self.get_status, json={"error": "unavailable"})
        return httpx.Response(200, json={"menuItems": list(self.items.values())})

    def _put(self, request, item_id):
        if item_id in self.fail_put_ids:
            raise httpx.ConnectError("connection refused", request=request)
        body = json.loads(request.content)
        self.put_bodies.append((item_id, body))
        if self.put_status != 200 or item_id not in self.items:
            return httpx.Response(404 if item_id not in self.items else self.put_status, json={"error": "rejected"})
        self.items[item_id].update(body)
        return httpx.Response(200, json={"menuItem": self.items[item_id]})

    def best_seller_ids(self):
        return {item_id for item_id, item in self.items.items() if item["isBestSeller"]}


@pytest.fixture
def menu_items():
    """Five items, two best sellers, three eligible."""
    return [
        make_item("m1", "Nasi Goreng", best_seller=True),
        make_item("m2", "Es Teh", best_seller=True, category="Beverage", price=5000),
        make_item("m3", "Mie Ayam", price=18000),
        make_item("m4", "Kopi Susu", category="Beverage", price=15000, image="/img/kopi.jpg"),
        make_item("m5", "Sate Ayam", price=30000),
    ]


@pytest.fixture
def menu_backend(menu_items):
    backend = FakeMenuBackend(menu_items)
    with respx.mock(assert_all_called=False) as router:
        backend.install(router)
        yield backend


@pytest.fixture
def manager():
    return BestSellerManager()


@pytest.fixture
def manager_token() -> str:
    return create_access_token("admin-1", UserRole.MANAGER)


@pytest.fixture
def customer_token() -> str:
    return create_access_token("customer-1", UserRole.CUSTOMER)


@pytest_asyncio.fixture
async def client(manager):
    app.dependency_overrides[get_manager] = lambda: manager
    # Creates a fake client
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
