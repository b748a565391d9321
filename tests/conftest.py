from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from sawa_admin.client import ApiClient, create_http_client
from sawa_admin.config import Settings
from sawa_admin.controllers.toasts import Toaster
from sawa_admin.dependencies import get_http_client
from sawa_admin.gateways.registry import Gateways
from sawa_admin.main import app
from sawa_admin.session import RouteNavigator, SessionContext, SessionGuard
from tests.fake_api import ADMIN_TOKEN, FakeMarketplace

# Pytest only picks up fixtures from conftest.py files. Fixtures defined in other
# modules (like tests/seeds.py) are invisible unless we register them here.
# A plain `import tests.seeds` does not register them; pytest_plugins does.
pytest_plugins = ["tests.seeds"]

TEST_API_URL = "http://marketplace.test/api"


@pytest.fixture
def backend() -> FakeMarketplace:
    """Empty fake marketplace API; use ``seeded_api`` for one with data."""
    return FakeMarketplace()


@pytest.fixture
def settings() -> Settings:
    return Settings(api_base_url=TEST_API_URL, environment="test")


@pytest.fixture
def session() -> SessionContext:
    return SessionContext(token=ADMIN_TOKEN)


@pytest.fixture
def navigator() -> RouteNavigator:
    return RouteNavigator(route="/features")


@pytest.fixture
def toaster() -> Toaster:
    return Toaster()


@pytest_asyncio.fixture
async def http(backend: FakeMarketplace, settings: Settings) -> AsyncIterator[httpx.AsyncClient]:
    """Pooled client whose transport is the fake marketplace app."""
    async with create_http_client(settings, transport=ASGITransport(app=backend.app)) as http:
        yield http


@pytest.fixture
def api(
    settings: Settings,
    session: SessionContext,
    navigator: RouteNavigator,
    http: httpx.AsyncClient,
) -> ApiClient:
    return ApiClient(settings, session, SessionGuard(navigator), http=http)


@pytest.fixture
def gateways(api: ApiClient) -> Gateways:
    return Gateways.build(api)


@pytest_asyncio.fixture
async def client(http: httpx.AsyncClient) -> AsyncIterator[AsyncClient]:
    """HTTP client for the dashboard app, wired to the fake marketplace."""
    app.dependency_overrides[get_http_client] = lambda: http

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def admin(client: AsyncClient) -> AsyncClient:
    """Dashboard client carrying a valid session cookie."""
    client.cookies.set("token", ADMIN_TOKEN)
    return client
