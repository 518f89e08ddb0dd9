"""
Participant identifiers
"""

from dataclasses import dataclass

import base58
from nacl.signing import SigningKey

PUBKEY_BYTES = 32


class InvalidPubkeyError(ValueError):
    """Raised when text or bytes do not form a valid public key"""


@dataclass(frozen=True)
class Pubkey:
    """
    32-byte participant identifier.

    Rendered as base58, the same way RPC nodes report node identities.

    Example:
        >>> key = Pubkey.from_string("Vote111111111111111111111111111111111111111")
        >>> str(key)
        'Vote111111111111111111111111111111111111111'
    """
    raw: bytes

    def __post_init__(self):
        if not isinstance(self.raw, bytes) or len(self.raw) != PUBKEY_BYTES:
            raise InvalidPubkeyError(
                f"pubkey must be {PUBKEY_BYTES} bytes, got {self.raw!r}"
            )

    @classmethod
    def from_string(cls, text: str) -> "Pubkey":
        """
        Parse a base58 encoded public key.

        Args:
            text: Base58 string

        Returns:
            Pubkey

        Raises:
            InvalidPubkeyError: if the text is not base58 or decodes to the wrong length
        """
        try:
            raw = base58.b58decode(text)
        except ValueError as e:
            raise InvalidPubkeyError(f"invalid base58 pubkey {text!r}: {e}") from e
        if len(raw) != PUBKEY_BYTES:
            raise InvalidPubkeyError(
                f"pubkey {text!r} decodes to {len(raw)} bytes, expected {PUBKEY_BYTES}"
            )
        return cls(raw)

    @classmethod
    def new_unique(cls) -> "Pubkey":
        """Identifier of a freshly generated ed25519 keypair"""
        signing_key = SigningKey.generate()
        return cls(bytes(signing_key.verify_key))

    def __str__(self) -> str:
        return base58.b58encode(self.raw).decode('ascii')

    def __repr__(self) -> str:
        return f"Pubkey({self})"
