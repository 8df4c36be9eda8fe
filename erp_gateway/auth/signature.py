"""Signature functions.

HMAC-SHA256 over ``app_key + client_id + timestamp``. The same function is
used by the client header helper and by the server-side verifier, so both
sides produce byte-identical digests for identical inputs.
"""

from __future__ import annotations

import hashlib
import hmac

MAX_TIMESTAMP_SKEW_SECONDS = 300  # 5 minutes
SIGNATURE_ALGORITHM = "sha256"


def build_message(app_key: str, client_id: str, timestamp: int | str) -> str:
    """Build the signed message.

    Fields are concatenated without a delimiter; this is the wire format
    existing clients sign.
    """
    return f"{app_key}{client_id}{timestamp}"


def _digest(app_key: str, client_id: str, timestamp: int | str, secret: str) -> bytes:
    return hmac.new(
        secret.encode("utf-8"),
        build_message(app_key, client_id, timestamp).encode("utf-8"),
        hashlib.sha256,
    ).digest()


def compute_signature(
    app_key: str,
    client_id: str,
    timestamp: int | str,
    secret: str,
) -> str:
    """Compute the HMAC-SHA256 signature of a request.

    Args:
        app_key: Public application key
        client_id: Public client identifier
        timestamp: Unix timestamp in seconds (as sent in X-Timestamp)
        secret: Plaintext shared secret

    Returns:
        Lower-case hex-encoded HMAC-SHA256 digest
    """
    return _digest(app_key, client_id, timestamp, secret).hex()


def verify_signature(
    app_key: str,
    client_id: str,
    timestamp: int | str,
    secret: str,
    provided_signature: str,
) -> bool:
    """Verify a request signature using constant-time comparison.

    The provided hex is decoded first, so either letter case is accepted.
    Input that is not hex is a mismatch.

    Returns:
        True if the signature is valid
    """
    try:
        provided = bytes.fromhex(provided_signature)
    except ValueError:
        return False
    expected = _digest(app_key, client_id, timestamp, secret)
    return hmac.compare_digest(expected, provided)


def check_timestamp(
    request_time: int,
    current_time: int,
    max_skew: int = MAX_TIMESTAMP_SKEW_SECONDS,
    reject_future: bool = False,
) -> bool:
    """Check if a request timestamp is inside the replay window.

    A timestamp exactly ``max_skew`` seconds old is still accepted.
    Without ``reject_future`` only stale timestamps are refused.

    Returns:
        True if timestamp is acceptable
    """
    age = current_time - request_time
    if reject_future:
        return abs(age) <= max_skew
    return age <= max_skew
