"""Steam Guard time-based one-time codes."""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import math
import struct
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Union

CODE_CHARS = "23456789BCDFGHJKMNPQRTVWXY"
CODE_LENGTH = 5
PERIOD_SECONDS = 30

_UINT64_MASK = (1 << 64) - 1

When = Union[datetime, int, float]


class InvalidSharedSecretError(ValueError):
    """The shared secret is not valid base64."""

    def __init__(self) -> None:
        super().__init__("invalid base64 shared secret")


def _unix_seconds(when: When) -> int:
    if isinstance(when, datetime):
        return math.floor(when.timestamp())
    return math.floor(when)


def generate_totp_code(shared_secret: str, when: When) -> str:
    """Generate the five-character Steam code for a base64 secret at a given time.

    ``when`` is a datetime or a Unix timestamp in seconds.
    """
    try:
        key = base64.b64decode(shared_secret, validate=True)
    except (binascii.Error, ValueError):
        raise InvalidSharedSecretError() from None

    counter = (_unix_seconds(when) & _UINT64_MASK) // PERIOD_SECONDS
    digest = hmac.new(key, struct.pack(">Q", counter), hashlib.sha1).digest()

    start = digest[19] & 0x0F
    full_code = int.from_bytes(digest[start : start + 4], "big") & 0x7FFFFFFF

    chars = []
    for _ in range(CODE_LENGTH):
        full_code, index = divmod(full_code, len(CODE_CHARS))
        chars.append(CODE_CHARS[index])
    return "".join(chars)


@dataclass(frozen=True)
class Totp:
    """A shared secret paired with the moment a code is wanted for."""

    shared_secret: str
    when: When

    @classmethod
    def now(cls, shared_secret: str) -> "Totp":
        """Pair the secret with the current time."""
        return cls(shared_secret, datetime.now(timezone.utc))

    def generate_code(self) -> str:
        return generate_totp_code(self.shared_secret, self.when)