import pytest
import pytest_asyncio
from typing import AsyncGenerator, Dict, Any
import os
import sys
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from spa_auth.main import app
from spa_auth.core.config import AccessTokenOptions, RefreshTokenOptions, SpaAuthOptions
from spa_auth.core.security import TokenService, get_token_service

ACCESS_SECRET = "access-secret-for-tests"
REFRESH_SECRET = "refresh-secret-for-tests"

@pytest.fixture
def auth_options() -> SpaAuthOptions:
    """Token configuration with distinct access and refresh secrets."""
    return SpaAuthOptions(
        use_access_token=AccessTokenOptions(
            jwt_access_secret_key=ACCESS_SECRET,
            jwt_access_activation_period="15m",
        ),
        use_refresh_token=RefreshTokenOptions(
            jwt_refresh_secret_key=REFRESH_SECRET,
            jwt_refresh_activation_period="7 days",
        ),
    )

@pytest.fixture
def token_service(auth_options: SpaAuthOptions) -> TokenService:
    return TokenService(auth_options)

@pytest.fixture
def test_claims() -> Dict[str, Any]:
    return {"sub": "user-42", "email": "test@example.com", "roles": ["admin"]}

@pytest.fixture
def test_tokens(token_service: TokenService, test_claims: Dict[str, Any]) -> Dict[str, str]:
    """Create an access/refresh pair for the test principal."""
    pair = token_service.generate_tokens(test_claims)
    return {"access_token": pair.access_token, "refresh_token": pair.refresh_token}

@pytest_asyncio.fixture
async def test_app(token_service: TokenService) -> AsyncGenerator[FastAPI, None]:
    """Application wired to the test token service."""
    app.dependency_overrides[get_token_service] = lambda: token_service
    yield app
    app.dependency_overrides.clear()

@pytest_asyncio.fixture
async def client(test_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
        follow_redirects=True
    ) as ac:
        yield ac
