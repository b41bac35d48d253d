"""Keyed hashing of invite tokens."""

import hashlib
import hmac

from pydantic import SecretStr

from tenantlink.domain.value import InviteToken, TokenHash

from .base import Service


class TokenHasher(Service):
    """HMAC-SHA256 over invite tokens with a server-held key.

    Hashing is deterministic so a stored digest can be found with a single
    unique-index lookup. Without the key, a leaked table cannot be brute
    forced offline.
    """

    def __init__(self, key: SecretStr) -> None:
        """Initialize hasher.

        Args:
            key: Server-side HMAC key

        Raises:
            ValueError: If the key is empty
        """
        secret = key.get_secret_value()
        if not secret:
            raise ValueError("Token hash key must not be empty")
        self._key = secret.encode("utf-8")

    def hash(self, token: InviteToken) -> TokenHash:
        """Compute the digest stored for a token.

        Args:
            token: Plaintext token

        Returns:
            Hex-encoded HMAC-SHA256 digest
        """
        digest = hmac.new(self._key, token.root.encode("utf-8"), hashlib.sha256)
        return TokenHash(digest.hexdigest())

    def verify(self, token: InviteToken, token_hash: TokenHash) -> bool:
        """Check a token against a stored digest in constant time.

        Args:
            token: Plaintext token
            token_hash: Stored digest

        Returns:
            True if the token produces the digest
        """
        return hmac.compare_digest(self.hash(token).root, token_hash.root)

    def __repr__(self) -> str:
        return "TokenHasher(key=**********)"
