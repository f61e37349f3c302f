from typing import Any
from fastapi import APIRouter, Depends, Response, status

from spa_auth.core.config import settings
from spa_auth.core.logging import auth_logger
from spa_auth.core.security import (
    TokenService,
    access_cookie_options,
    get_current_claims,
    get_refresh_claims,
    get_token_service,
)
from spa_auth.schemas.token import ClaimsResponse, CookieObject, Token, TokenPair

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={
        400: {"description": "Token configuration missing"},
        401: {"description": "Authentication failed"},
        500: {"description": "Internal server error"}
    }
)

def set_cookie(response: Response, key: str, cookie: CookieObject) -> None:
    """Attach a CookieObject to the response using its own attributes."""
    response.set_cookie(key=key, value=cookie.value, **cookie.options.model_dump())

@router.post(
    "/refresh",
    response_model=TokenPair,
    summary="Refresh token pair",
    description="""
    Exchange a valid refresh token for a new access/refresh token pair.

    The refresh token must be provided in the Authorization header
    with the Bearer prefix.
    """,
    responses={
        200: {
            "description": "New token pair generated successfully",
            "content": {
                "application/json": {
                    "example": {
                        "access_token": "eyJ0eXAiOiJKV1QiLCJhbGciOiJIUzI1...",
                        "refresh_token": "eyJ0eXAiOiJKV1QiLCJhbGciOiJIUzI1...",
                        "token_type": "bearer"
                    }
                }
            }
        }
    }
)
async def refresh_tokens(
    claims: dict[str, Any] = Depends(get_refresh_claims),
    service: TokenService = Depends(get_token_service)
) -> TokenPair:
    """
    Issue a fresh token pair for the principal of the refresh token.

    - **Authorization**: `Bearer <refresh token>`
    """
    pair = service.generate_tokens(claims)
    auth_logger.info("Token pair refreshed", extra={"sub": claims.get("sub")})
    return pair

@router.post(
    "/cookies",
    response_model=Token,
    summary="Issue access token as two cookies",
    description="""
    Exchange a valid refresh token for an access token delivered as two cookies.

    * The first cookie holds `header.payload` and is readable by frontend script
    * The second cookie holds the signature and is HttpOnly

    The full token is also returned in the body.
    """
)
async def issue_cookie_access_token(
    response: Response,
    claims: dict[str, Any] = Depends(get_refresh_claims),
    service: TokenService = Depends(get_token_service)
) -> Token:
    """
    Issue an access token split across the payload and signature cookies.

    - **Authorization**: `Bearer <refresh token>`
    """
    first_options, second_options = access_cookie_options()
    split = service.generate_access_token_as_two_cookies(claims, first_options, second_options)
    set_cookie(response, settings.ACCESS_PAYLOAD_COOKIE_NAME, split.first_cookie)
    set_cookie(response, settings.ACCESS_SIGNATURE_COOKIE_NAME, split.second_cookie)
    auth_logger.info("Access token issued as cookies", extra={"sub": claims.get("sub")})
    return Token(access_token=split.token)

@router.get(
    "/me",
    response_model=ClaimsResponse,
    summary="Current principal",
    description="""
    Return the verified claims of the current access token.

    The token is read from the `Authorization: Bearer` header, or rebuilt from
    the payload and signature cookies when no header is sent.
    """
)
async def read_current_claims(
    claims: dict[str, Any] = Depends(get_current_claims)
) -> ClaimsResponse:
    """Return the claims of the authenticated principal."""
    return ClaimsResponse(claims=claims)

@router.post(
    "/logout",
    status_code=status.HTTP_200_OK,
    summary="Logout",
    description="""
    Remove the access token cookies. Clients using bearer tokens should simply
    discard them.
    """,
    responses={
        200: {
            "description": "Successfully logged out",
            "content": {
                "application/json": {
                    "example": {"message": "Successfully logged out"}
                }
            }
        }
    }
)
async def logout(response: Response) -> dict:
    """Delete both access token cookies."""
    first_options, second_options = access_cookie_options()
    for key, options in (
        (settings.ACCESS_PAYLOAD_COOKIE_NAME, first_options),
        (settings.ACCESS_SIGNATURE_COOKIE_NAME, second_options),
    ):
        response.delete_cookie(
            key,
            path=options.path,
            domain=options.domain,
            secure=options.secure,
            httponly=options.httponly,
            samesite=options.samesite,
        )
    return {"message": "Successfully logged out"}
