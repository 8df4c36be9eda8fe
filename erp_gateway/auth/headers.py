"""Header functions.

Creating signed request headers (client side) and extracting them from an
inbound request (server side).
"""

from __future__ import annotations

import time
from collections.abc import Mapping

from erp_gateway.auth.models import SignedRequest
from erp_gateway.auth.signature import compute_signature

APP_KEY_HEADER = "X-App-Key"
CLIENT_ID_HEADER = "X-Client-Id"
TIMESTAMP_HEADER = "X-Timestamp"
SIGNATURE_HEADER = "X-Signature"
ADMIN_KEY_HEADER = "X-Admin-Key"


def create_signed_headers(
    app_key: str,
    client_id: str,
    app_secret: str,
    timestamp: int | None = None,
) -> dict[str, str]:
    """Create the authentication headers for a gateway request.

    Args:
        app_key: Application key received at issuance
        client_id: Client ID received at issuance
        app_secret: Plaintext secret received at issuance
        timestamp: Unix seconds to sign; defaults to now

    Returns:
        Dictionary of headers to include in the request

    Raises:
        ValueError: If any credential part is empty
    """
    if not app_key or not client_id or not app_secret:
        raise ValueError(
            "Invalid credentials provided. app_key, client_id and app_secret are required."
        )

    if timestamp is None:
        timestamp = int(time.time())

    return {
        APP_KEY_HEADER: app_key,
        CLIENT_ID_HEADER: client_id,
        TIMESTAMP_HEADER: str(timestamp),
        SIGNATURE_HEADER: compute_signature(app_key, client_id, timestamp, app_secret),
    }


def _get_header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is not None:
        return value
    # Plain dicts are case-sensitive; Starlette headers already are not
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


def extract_signed_request(headers: Mapping[str, str]) -> SignedRequest | None:
    """Extract the signed request headers.

    Args:
        headers: Request headers (any mapping; lookup is case-insensitive)

    Returns:
        SignedRequest if all four headers are present and non-empty, None otherwise
    """
    values = [
        _get_header(headers, name)
        for name in (APP_KEY_HEADER, CLIENT_ID_HEADER, TIMESTAMP_HEADER, SIGNATURE_HEADER)
    ]
    if not all(values):
        return None

    app_key, client_id, timestamp, signature = values
    return SignedRequest(
        app_key=app_key,
        client_id=client_id,
        timestamp=timestamp,
        signature=signature,
    )
