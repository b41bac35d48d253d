"""Invite token generation."""

import secrets

from tenantlink.domain.value import TOKEN_ALPHABET, TOKEN_LENGTH, InviteToken

from .base import Service


class TokenGenerator(Service):
    """Produces unpredictable invite tokens.

    Each character is drawn independently from the 62-symbol alphabet by the
    OS CSPRNG, giving roughly 71 bits of entropy per token. Tokens carry no
    sequential or time-derived component.
    """

    def generate(self) -> InviteToken:
        """Generate a fresh token.

        Returns:
            A new 12-character base62 token
        """
        return InviteToken(
            "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH))
        )
