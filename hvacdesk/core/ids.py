"""Identifier generation for new records."""

from __future__ import annotations

import secrets
import string

_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 9


def generate_id() -> str:
    """Return a short random base-36 identifier (collision-improbable, local)."""
    return "".join(secrets.choice(_ALPHABET) for _ in range(ID_LENGTH))
