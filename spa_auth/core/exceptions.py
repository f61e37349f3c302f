from typing import Any

class SpaAuthError(Exception):
    """Base class for token service errors."""
    default_detail = "Authentication error"

    def __init__(self, detail: str | dict[str, Any] | None = None) -> None:
        self.detail = detail if detail is not None else self.default_detail
        super().__init__(self.detail)

class ConfigurationError(SpaAuthError):
    """Raised when a required secret or duration is missing or unusable."""
    default_detail = "Secret key required"

class TokenInvalidError(SpaAuthError):
    """Raised when a token is malformed, wrongly signed or expired."""
    default_detail = "Could not validate credentials"

class TokenExpiredError(TokenInvalidError):
    """Raised when a token's exp claim has passed."""
    default_detail = "Token has expired"

class InvalidClaimsError(SpaAuthError, TypeError):
    """Raised when a payload holds values that cannot be encoded as JSON."""
    default_detail = "Token claims must be JSON serializable"
