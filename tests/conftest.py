import pytest
from httpx import ASGITransport, AsyncClient

from colonysim.dependencies import EmpireRegistry, get_registry
from colonysim.main import app


@pytest.fixture
def registry() -> EmpireRegistry:
    return EmpireRegistry()


@pytest.fixture
async def client(registry: EmpireRegistry) -> AsyncClient:
    """HTTP client backed by a fresh in-memory empire registry."""
    app.dependency_overrides[get_registry] = lambda: registry
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
