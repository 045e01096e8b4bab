"""Access token providers.

Cloud operations ask a TokenProvider for a bearer token before every
request. Providers raise AuthError when no token is available; callers do
not retry.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..errors import MissingCredentialsError


class TokenProvider(ABC):
    """Interface for bearer token sources."""

    @abstractmethod
    def get_access_token(self) -> str:
        """Return a bearer token.

        Raises:
            AuthError: If no token can be obtained
        """
        pass


class StaticTokenProvider(TokenProvider):
    """Provides a fixed, preconfigured access token."""

    def __init__(self, access_token: Optional[str]):
        self.access_token = access_token

    def get_access_token(self) -> str:
        if not self.access_token:
            raise MissingCredentialsError(
                "No access token configured. "
                + "Set CLOUDFLASH_ACCESS_TOKEN or add access_token to the [cloud] config section."
            )
        return self.access_token
