"""
Gateway Authentication
======================
HMAC request signing, verification primitives and the admin-key gate.
"""

from erp_gateway.auth.admin import AdminKeyGate
from erp_gateway.auth.headers import (
    ADMIN_KEY_HEADER,
    APP_KEY_HEADER,
    CLIENT_ID_HEADER,
    SIGNATURE_HEADER,
    TIMESTAMP_HEADER,
    create_signed_headers,
    extract_signed_request,
)
from erp_gateway.auth.models import AuthenticatedClient, AuthFailureReason, SignedRequest
from erp_gateway.auth.signature import (
    MAX_TIMESTAMP_SKEW_SECONDS,
    SIGNATURE_ALGORITHM,
    build_message,
    check_timestamp,
    compute_signature,
    verify_signature,
)

__all__ = [
    # Models
    "AuthenticatedClient",
    "AuthFailureReason",
    "SignedRequest",
    # Signature
    "MAX_TIMESTAMP_SKEW_SECONDS",
    "SIGNATURE_ALGORITHM",
    "build_message",
    "check_timestamp",
    "compute_signature",
    "verify_signature",
    # Headers
    "ADMIN_KEY_HEADER",
    "APP_KEY_HEADER",
    "CLIENT_ID_HEADER",
    "SIGNATURE_HEADER",
    "TIMESTAMP_HEADER",
    "create_signed_headers",
    "extract_signed_request",
    # Admin
    "AdminKeyGate",
]
