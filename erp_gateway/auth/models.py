"""Authentication data models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AuthFailureReason(str, Enum):
    """Why a signed request was rejected. Logged, never returned to clients."""

    MISSING_HEADERS = "missing_headers"
    TIMESTAMP_INVALID = "timestamp_invalid"
    INVALID_CREDENTIAL = "invalid_credential"
    INVALID_SIGNATURE = "invalid_signature"


@dataclass(frozen=True)
class SignedRequest:
    """The four authentication headers of one inbound call."""

    app_key: str
    client_id: str
    timestamp: str
    signature: str


@dataclass(frozen=True)
class AuthenticatedClient:
    """Identity of a caller whose signature was verified."""

    app_key: str
    client_id: str
    credential_id: int | None = None
