from .token import (
    Payload,
    Token,
    TokenPair,
    CookieOptions,
    CookieObject,
    TwoCookieAccessToken,
    ClaimsResponse,
)

__all__ = [
    "Payload",
    "Token",
    "TokenPair",
    "CookieOptions",
    "CookieObject",
    "TwoCookieAccessToken",
    "ClaimsResponse",
]
