from datetime import timedelta
from typing import List, Literal
from pydantic import AnyHttpUrl, BaseModel, ConfigDict, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from jose.constants import ALGORITHMS

Duration = int | str | timedelta

DEFAULT_REFRESH_ACTIVATION_PERIOD = "5 days"

def check_algorithm(value: str) -> str:
    """Reject signing algorithms the JWT backend cannot use."""
    if value not in ALGORITHMS.SUPPORTED:
        raise ValueError(f"Unsupported JWT algorithm: {value}")
    return value

class AccessTokenOptions(BaseModel):
    """Secret and lifetime used for access tokens."""
    model_config = ConfigDict(frozen=True)

    jwt_access_secret_key: str | None = None
    jwt_access_activation_period: Duration = "15m"

class RefreshTokenOptions(BaseModel):
    """Secret and lifetime used for refresh tokens."""
    model_config = ConfigDict(frozen=True)

    jwt_refresh_secret_key: str | None = None
    jwt_refresh_activation_period: Duration | None = None

class SpaAuthOptions(BaseModel):
    """Immutable token configuration handed to the TokenService."""
    model_config = ConfigDict(frozen=True)

    use_access_token: AccessTokenOptions
    use_refresh_token: RefreshTokenOptions | None = None
    algorithm: str = "HS256"
    leeway: int = 0  # seconds of clock skew tolerated on exp

    @field_validator("algorithm")
    def validate_algorithm(cls, v: str) -> str:
        return check_algorithm(v)

class Settings(BaseSettings):
    # Project Info
    PROJECT_NAME: str = "SPA Auth Service"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "development"

    # Tokens
    JWT_ALGORITHM: str = "HS256"
    JWT_LEEWAY_SECONDS: int = 0
    JWT_ACCESS_SECRET_KEY: str | None = None
    JWT_ACCESS_ACTIVATION_PERIOD: str = "15m"
    JWT_REFRESH_SECRET_KEY: str | None = None
    JWT_REFRESH_ACTIVATION_PERIOD: str | None = None

    # Cookies
    COOKIE_EXPIRATION_SECONDS: int = 15 * 60
    COOKIE_DOMAIN: str | None = None
    COOKIE_SECURE: bool = True
    COOKIE_SAMESITE: Literal["lax", "strict", "none"] = "strict"
    ACCESS_PAYLOAD_COOKIE_NAME: str = "spa_access_payload"
    ACCESS_SIGNATURE_COOKIE_NAME: str = "spa_access_signature"

    @field_validator("JWT_ALGORITHM")
    def validate_jwt_algorithm(cls, v: str) -> str:
        return check_algorithm(v)

    # CORS
    BACKEND_CORS_ORIGINS: List[AnyHttpUrl] = []

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str] | str:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # Documentation
    SHOW_DOCS: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env", env_file_encoding="utf-8")

    def spa_auth_options(self) -> SpaAuthOptions:
        """Compose the token configuration from the loaded settings."""
        refresh = None
        if self.JWT_REFRESH_SECRET_KEY:
            refresh = RefreshTokenOptions(
                jwt_refresh_secret_key=self.JWT_REFRESH_SECRET_KEY,
                jwt_refresh_activation_period=self.JWT_REFRESH_ACTIVATION_PERIOD,
            )
        return SpaAuthOptions(
            use_access_token=AccessTokenOptions(
                jwt_access_secret_key=self.JWT_ACCESS_SECRET_KEY,
                jwt_access_activation_period=self.JWT_ACCESS_ACTIVATION_PERIOD,
            ),
            use_refresh_token=refresh,
            algorithm=self.JWT_ALGORITHM,
            leeway=self.JWT_LEEWAY_SECONDS,
        )

# Global instance
settings = Settings()
