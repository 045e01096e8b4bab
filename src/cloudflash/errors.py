"""Exceptions raised by cloudflash cloud operations.

Compile failures are not errors: they are returned as CompileFailure
results. The exceptions here cover infrastructure problems only.
"""

from typing import Optional


class CloudError(Exception):
    """Base exception for cloud API errors."""

    pass


class AuthError(CloudError):
    """Raised when no usable access token is available."""

    pass


class MissingCredentialsError(AuthError):
    """Raised when no access token has been configured."""

    pass


class InvalidTokenError(AuthError):
    """Raised when the server rejects the access token."""

    pass


class TransportError(CloudError):
    """Raised when the HTTP request could not be completed."""

    pass


class ResponseError(CloudError):
    """Base exception for responses that violate the expected schema.

    Attributes:
        body: Raw response text, for diagnostics
    """

    def __init__(self, message: str, body: Optional[str] = None):
        super().__init__(message)
        self.body = body


class MalformedResponseError(ResponseError):
    """Raised when a response body is not a JSON object with an "ok" field."""

    pass


class ProtocolMismatchError(ResponseError):
    """Raised when the server reports success but omits required fields."""

    pass


class DownloadError(CloudError):
    """Raised when a compiled binary cannot be downloaded."""

    pass


class FlashError(CloudError):
    """Raised when a flash request is not accepted."""

    pass


class ConfigError(Exception):
    """Raised when cloudflash configuration cannot be loaded."""

    pass
