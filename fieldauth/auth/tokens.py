"""
Credential generation and bearer verification.

Tokens are opaque random strings, not JWTs: the service stores them and
compares on each use, so there is nothing to sign or expire.
"""

import logging
import secrets
from typing import Optional

logger = logging.getLogger(__name__)

# 32 random bytes -> 64 hex characters
TOKEN_BYTES = 32


def generate_token() -> str:
    """
    Generate a secure random token.

    Returns:
        64-character lowercase hex string (256 bits of entropy)
    """
    return secrets.token_hex(TOKEN_BYTES)


class BearerAuthenticator:
    """
    Compares a presented bearer credential with the expected one.

    The HTTP layer pulls the credential out of the Authorization header;
    this class only decides whether it matches.

    Usage:
        auth = BearerAuthenticator()
        if not auth.verify(credentials.credentials, expected):
            ...reject as unauthorized
    """

    def verify(self, presented: Optional[str], expected_token: Optional[str]) -> bool:
        """
        Check the presented credential against the expected one.

        Args:
            presented: Token from the Authorization header (None if absent)
            expected_token: Credential the caller must hold

        Returns:
            True if the presented token matches, False otherwise
        """
        if not expected_token:
            logger.warning("Bearer verification attempted without an expected token")
            return False

        if not presented:
            logger.debug("Missing bearer credential")
            return False

        return secrets.compare_digest(presented.encode("utf-8"), expected_token.encode("utf-8"))
