import math
from datetime import datetime, UTC
from functools import lru_cache
from typing import Any
from jose import jwt, JWSError, JWTError, ExpiredSignatureError
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from spa_auth.core.config import (
    check_algorithm,
    DEFAULT_REFRESH_ACTIVATION_PERIOD,
    Duration,
    SpaAuthOptions,
    settings,
)
from spa_auth.core.duration import parse_duration
from spa_auth.core.exceptions import (
    ConfigurationError,
    InvalidClaimsError,
    TokenExpiredError,
    TokenInvalidError,
)
from spa_auth.schemas.token import (
    CookieObject,
    CookieOptions,
    Payload,
    TokenPair,
    TwoCookieAccessToken,
)

bearer_scheme = HTTPBearer(auto_error=False)

class TokenService:
    """
    Issue and verify access/refresh JWTs.

    Access and refresh tokens are signed with independent secrets. The service
    keeps no state besides the options it was built with, so a single instance
    can be shared across requests.
    """

    def __init__(self, options: SpaAuthOptions) -> None:
        self.options = options

    def generate_access_token(self, payload: Payload) -> str:
        """Create a signed access token for the given claims.

        Claims must be JSON serializable; anything else raises InvalidClaimsError.
        """
        access = self.options.use_access_token
        return self._sign(
            payload,
            self._require_secret(access.jwt_access_secret_key, "jwt_access_secret_key"),
            access.jwt_access_activation_period,
        )

    def generate_refresh_token(self, payload: Payload) -> str:
        """Create a signed refresh token for the given claims."""
        refresh = self.options.use_refresh_token
        secret = refresh.jwt_refresh_secret_key if refresh else None
        period = refresh.jwt_refresh_activation_period if refresh else None
        return self._sign(
            payload,
            self._require_secret(secret, "jwt_refresh_secret_key"),
            period or DEFAULT_REFRESH_ACTIVATION_PERIOD,
        )

    def generate_tokens(self, payload: Payload) -> TokenPair:
        """Create both access and refresh tokens"""
        return TokenPair(
            access_token=self.generate_access_token(payload),
            refresh_token=self.generate_refresh_token(payload),
        )

    def generate_access_token_as_two_cookies(
        self,
        payload: Payload,
        first_cookie_options: CookieOptions,
        second_cookie_options: CookieOptions,
    ) -> TwoCookieAccessToken:
        """
        Issue an access token and split it for cookie delivery.

        The first cookie carries ``header.payload`` so frontend code can read
        the claims; the second carries only the signature and is meant to be
        HttpOnly. Cookie options are passed through untouched.
        """
        token = self.generate_access_token(payload)
        parts = token.split(".")
        if len(parts) != 3:
            raise TokenInvalidError("Signed token is not a three-segment compact token")
        header, claims, signature = parts
        return TwoCookieAccessToken(
            first_cookie=CookieObject(value=f"{header}.{claims}", options=first_cookie_options),
            second_cookie=CookieObject(value=signature, options=second_cookie_options),
            token=token,
        )

    @staticmethod
    def join_token_cookies(first_value: str, second_value: str) -> str:
        """Rebuild a compact token from its header.payload and signature cookies."""
        if not first_value or not second_value:
            raise TokenInvalidError("Token cookie is missing")
        if first_value.count(".") != 1 or "." in second_value:
            raise TokenInvalidError("Token cookies are malformed")
        return f"{first_value}.{second_value}"

    def verify_access_token(self, token: str) -> Payload:
        """Verify and decode an access token"""
        secret = self.options.use_access_token.jwt_access_secret_key
        return self._verify(token, self._require_secret(secret, "jwt_access_secret_key"))

    def verify_refresh_token(self, token: str) -> Payload:
        """Verify and decode a refresh token"""
        refresh = self.options.use_refresh_token
        secret = refresh.jwt_refresh_secret_key if refresh else None
        return self._verify(token, self._require_secret(secret, "jwt_refresh_secret_key"))

    @staticmethod
    def _require_secret(secret: str | None, field: str) -> str:
        if not secret:
            raise ConfigurationError(f"({field}) field is required")
        return secret

    def _sign(self, payload: Payload, secret: str, period: Duration) -> str:
        lifetime = parse_duration(period)
        now = datetime.now(UTC).timestamp()
        issued_at = math.floor(now)
        to_encode = dict(payload)
        # exp is always derived from configuration, never from the caller
        to_encode.update({
            "iat": issued_at,
            "exp": math.floor(issued_at + lifetime.total_seconds()),
        })
        algorithm = self._require_algorithm()
        try:
            return jwt.encode(to_encode, secret, algorithm=algorithm)
        except TypeError as exc:
            raise InvalidClaimsError(f"Token claims must be JSON serializable: {exc}") from exc
        except JWSError as exc:
            raise ConfigurationError(f"Cannot sign tokens with {algorithm}: {exc}") from exc

    def _require_algorithm(self) -> str:
        try:
            return check_algorithm(self.options.algorithm)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc

    def _verify(self, token: str, secret: str) -> Payload:
        algorithm = self._require_algorithm()
        try:
            return jwt.decode(
                token,
                secret,
                algorithms=[algorithm],
                options={
                    "require_exp": True,
                    "leeway": self.options.leeway,
                    # claims are opaque to this service
                    "verify_aud": False,
                    "verify_sub": False,
                    "verify_jti": False,
                },
            )
        except ExpiredSignatureError as exc:
            raise TokenExpiredError() from exc
        except JWTError as exc:
            raise TokenInvalidError() from exc

@lru_cache
def get_token_service() -> TokenService:
    """Dependency returning the process-wide token service."""
    return TokenService(settings.spa_auth_options())

def access_cookie_options() -> tuple[CookieOptions, CookieOptions]:
    """Cookie attributes for the readable header.payload half and the HttpOnly signature half."""
    common = {
        "max_age": settings.COOKIE_EXPIRATION_SECONDS,
        "domain": settings.COOKIE_DOMAIN,
        "secure": settings.COOKIE_SECURE,
        "samesite": settings.COOKIE_SAMESITE,
    }
    return CookieOptions(httponly=False, **common), CookieOptions(httponly=True, **common)

def extract_access_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Read the access token from the Authorization header, or rebuild it from the two cookies."""
    if credentials is not None:
        return credentials.credentials

    first = request.cookies.get(settings.ACCESS_PAYLOAD_COOKIE_NAME)
    second = request.cookies.get(settings.ACCESS_SIGNATURE_COOKIE_NAME)
    if first is None and second is None:
        raise TokenInvalidError("Not authenticated")
    return TokenService.join_token_cookies(first or "", second or "")

def get_current_claims(
    token: str = Depends(extract_access_token),
    service: TokenService = Depends(get_token_service),
) -> dict[str, Any]:
    """Dependency to get the claims of the authenticated principal"""
    return service.verify_access_token(token)

def get_refresh_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    service: TokenService = Depends(get_token_service),
) -> dict[str, Any]:
    """Dependency verifying a refresh token passed as a bearer credential"""
    if credentials is None:
        raise TokenInvalidError("Refresh token required")
    return service.verify_refresh_token(credentials.credentials)
