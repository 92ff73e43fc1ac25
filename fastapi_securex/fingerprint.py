"""Client fingerprints derived from request headers.

A fingerprint is a consistency check, not a secret: it is a plain SHA-256
over a fixed, pipe-joined tuple of header values. The order of the headers
is part of the stored format and must not change.
"""

import hashlib
import hmac
from collections.abc import Mapping

SESSION_HEADERS = ("user-agent", "accept-language", "accept-encoding")
DEVICE_HEADERS = (*SESSION_HEADERS, "accept", "connection")


def _header(headers: Mapping[str, str], name: str) -> str:
    value = headers.get(name)
    if value is not None:
        return value

    # Plain dicts keep the caller's casing
    for key, candidate in headers.items():
        if key.lower() == name:
            return candidate
    return ""


def _digest(headers: Mapping[str, str], names: tuple[str, ...]) -> str:
    joined = "|".join(_header(headers, name) for name in names)
    return hashlib.sha256(joined.encode()).hexdigest()


def for_session(headers: Mapping[str, str]) -> str:
    """Fingerprint used to bind a session to its client."""
    return _digest(headers, SESSION_HEADERS)


def for_device(headers: Mapping[str, str]) -> str:
    """A more discriminating fingerprint that also covers Accept and Connection."""
    return _digest(headers, DEVICE_HEADERS)


def validate(fingerprint: str, headers: Mapping[str, str]) -> bool:
    """Check a stored session fingerprint against the current request.

    The comparison is constant-time and never raises.
    """
    if not isinstance(fingerprint, str):
        return False
    return hmac.compare_digest(fingerprint.encode(), for_session(headers).encode())
