import pytest
from pydantic import ValidationError

from spa_auth.core.config import Settings
from spa_auth.core.security import TokenService

def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)

def test_options_without_refresh_secret():
    options = _settings(JWT_ACCESS_SECRET_KEY="a").spa_auth_options()
    assert options.use_access_token.jwt_access_secret_key == "a"
    assert options.use_access_token.jwt_access_activation_period == "15m"
    assert options.use_refresh_token is None

def test_options_with_refresh_secret():
    options = _settings(
        JWT_ACCESS_SECRET_KEY="a",
        JWT_REFRESH_SECRET_KEY="r",
        JWT_REFRESH_ACTIVATION_PERIOD="30 days",
        JWT_LEEWAY_SECONDS=10,
    ).spa_auth_options()
    assert options.use_refresh_token.jwt_refresh_secret_key == "r"
    assert options.use_refresh_token.jwt_refresh_activation_period == "30 days"
    assert options.leeway == 10

def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("JWT_ACCESS_SECRET_KEY", "from-env")
    monkeypatch.setenv("JWT_ACCESS_ACTIVATION_PERIOD", "1h")
    options = _settings().spa_auth_options()
    service = TokenService(options)
    claims = service.verify_access_token(service.generate_access_token({"sub": "u"}))
    assert claims["exp"] - claims["iat"] == 3600

def test_cors_origins_accept_comma_separated_string():
    settings = _settings(BACKEND_CORS_ORIGINS="http://localhost:3000, https://app.example.com")
    assert [str(o).rstrip("/") for o in settings.BACKEND_CORS_ORIGINS] == [
        "http://localhost:3000",
        "https://app.example.com",
    ]

def test_invalid_samesite_is_rejected():
    with pytest.raises(ValidationError):
        _settings(COOKIE_SAMESITE="sometimes")

def test_unsupported_jwt_algorithm_is_rejected():
    with pytest.raises(ValidationError):
        _settings(JWT_ALGORITHM="HS999")
