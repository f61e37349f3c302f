from datetime import datetime
from typing import Any, Literal
from pydantic import BaseModel, ConfigDict

Payload = dict[str, Any]

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

class TokenPair(BaseModel):
    """Access and refresh token issued together."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"

class CookieOptions(BaseModel):
    """Cookie attributes, named as Starlette's Response.set_cookie expects them."""
    model_config = ConfigDict(frozen=True)

    max_age: int | None = None
    expires: datetime | int | str | None = None
    path: str | None = "/"
    domain: str | None = None
    secure: bool = False
    httponly: bool = False
    samesite: Literal["lax", "strict", "none"] | None = "lax"

class CookieObject(BaseModel):
    value: str
    options: CookieOptions

class TwoCookieAccessToken(BaseModel):
    """An access token split into a header.payload cookie and a signature cookie."""
    first_cookie: CookieObject
    second_cookie: CookieObject
    token: str

class ClaimsResponse(BaseModel):
    claims: Payload
