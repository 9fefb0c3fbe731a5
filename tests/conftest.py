"""
Shared test fixtures for promptbank.

Each API test gets a fresh in-memory session registry; core tests build
their own stores with deterministic ids.
"""

import itertools
import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DEBUG", "false")

from promptbank.core.import_wizard import Bank, Category  # noqa: E402
from promptbank.core.session_registry import SessionRegistry  # noqa: E402
from promptbank.main import app  # noqa: E402


# ---------------------------------------------------------------------------
# Core fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def categories() -> dict[str, Category]:
    return {
        "character": Category("character", "角色 Character", "indigo"),
        "item": Category("item", "物品 Item", "amber"),
        "other": Category("other", "其他 Other"),
    }


@pytest.fixture()
def existing_banks() -> dict[str, Bank]:
    return {
        "hero": Bank(label="Hero", category_id="character", options=("knight",)),
        "weapon": Bank(label="Weapon", category_id="item", options=("sword", "bow")),
        "misc": Bank(label="Misc"),
    }


@pytest.fixture()
def id_factory():
    """Deterministic selection ids: sel-1, sel-2, ..."""
    counter = itertools.count(1)
    return lambda: f"sel-{next(counter)}"


# ---------------------------------------------------------------------------
# API fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def session_registry() -> SessionRegistry:
    return SessionRegistry(maxsize=16, ttl=600)


@pytest_asyncio.fixture()
async def test_client(session_registry):
    from promptbank.api.v1.helpers.sessions import get_session_registry

    app.dependency_overrides[get_session_registry] = lambda: session_registry

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture()
def open_payload() -> dict:
    return {
        "categories": {
            "character": {"label": "角色 Character", "color_tag": "indigo"},
            "item": {"label": "物品 Item"},
        },
        "existing_banks": {
            "weapon": {"label": "Weapon", "category_id": "item", "options": ["bow"]},
        },
        "raw_text": "A futuristic warrior stands. The warrior holds a sword.",
    }
