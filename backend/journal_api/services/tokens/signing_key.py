"""
Signing key material for token issuance.

The key is derived exactly once, at application start-up, from the configured
secret and then passed by reference to every component that signs or verifies
tokens. Nothing reads it from ambient state afterwards.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass, field

log = logging.getLogger(__name__)

#: HS256 wants at least 256 bits of key material.
MIN_KEY_BYTES = 32

_BASE64_RE = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")


@dataclass(frozen=True, slots=True)
class SigningKey:
    """
    Immutable symmetric key.

    :ivar material: Raw key bytes.
    """

    material: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.material, bytes) or not self.material:
            raise ValueError("Signing key material must be non-empty bytes.")

    def __len__(self) -> int:
        return len(self.material)

    def __repr__(self) -> str:
        return f"SigningKey(<{len(self.material)} bytes>)"


def _looks_like_base64(value: str) -> bool:
    return bool(value) and len(value) % 4 == 0 and bool(_BASE64_RE.match(value))


class SigningKeyProvider:
    """
    Derive and hold the process-wide :class:`SigningKey`.

    Base64-looking secrets are decoded; anything else (or a value that fails
    to decode) is used as its UTF-8 bytes.
    """

    def __init__(self, key: SigningKey) -> None:
        self._key = key

    @classmethod
    def from_secret(cls, secret: str) -> SigningKeyProvider:
        """
        Build a provider from the configured secret string.

        :param secret: Secret as found in configuration.
        :raises ValueError: If the secret is empty.
        """
        if not secret:
            raise ValueError("JWT secret is not configured.")

        material: bytes
        if _looks_like_base64(secret):
            try:
                material = base64.b64decode(secret, validate=True)
            except (binascii.Error, ValueError):
                log.warning("signing_key.base64_decode_failed; using raw UTF-8 bytes")
                material = secret.encode("utf-8")
        else:
            log.info("signing_key.raw_secret; using UTF-8 bytes")
            material = secret.encode("utf-8")

        if not material:
            material = secret.encode("utf-8")

        if len(material) < MIN_KEY_BYTES:
            log.warning(
                "signing_key.too_short: %d bytes, HS256 expects at least %d",
                len(material),
                MIN_KEY_BYTES,
            )
        return cls(SigningKey(material))

    @property
    def key(self) -> SigningKey:
        """Return the derived key."""
        return self._key
