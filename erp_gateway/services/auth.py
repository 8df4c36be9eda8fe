"""Request authenticator.

The single authorization decision for every HMAC-protected call:

1. Header presence (X-App-Key, X-Client-Id, X-Timestamp, X-Signature)
2. Timestamp freshness (replay window)
3. Credential lookup (active only)
4. Secret decryption
5. Signature recomputation and constant-time comparison

Client-side failures raise ``UnauthorizedError`` with a ``reason``; a secret
that cannot be decrypted raises ``CredentialDecryptionError`` instead, since
it points at corrupted data or a master key mismatch, not at a bad request.
No state is kept between calls.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from typing import NoReturn

import structlog
from sqlalchemy.exc import SQLAlchemyError

from erp_gateway.auth.headers import extract_signed_request
from erp_gateway.auth.models import AuthenticatedClient, AuthFailureReason
from erp_gateway.auth.signature import (
    MAX_TIMESTAMP_SKEW_SECONDS,
    check_timestamp,
    verify_signature,
)
from erp_gateway.errors import CredentialDecryptionError, InternalError, UnauthorizedError
from erp_gateway.services.credential import CredentialRegistry
from erp_gateway.services.secret_store import SecretStore

logger = structlog.get_logger()

_KEY_DISPLAY_LEN = 8


class RequestAuthenticator:
    """Verifies HMAC-signed requests against the credential registry."""

    def __init__(
        self,
        registry: CredentialRegistry,
        secret_store: SecretStore,
        signature_ttl_seconds: int = MAX_TIMESTAMP_SKEW_SECONDS,
        reject_future_timestamps: bool = False,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._registry = registry
        self._secret_store = secret_store
        self._ttl = signature_ttl_seconds
        self._reject_future = reject_future_timestamps
        self._clock = clock

    async def authenticate(self, headers: Mapping[str, str]) -> AuthenticatedClient:
        """Authenticate a request from its headers.

        Args:
            headers: Inbound request headers

        Returns:
            The verified client identity

        Raises:
            UnauthorizedError: If any check fails
            CredentialDecryptionError: If the stored secret cannot be decrypted
            InternalError: If the credential store is unavailable
        """
        signed = extract_signed_request(headers)
        if signed is None:
            self._reject(AuthFailureReason.MISSING_HEADERS, "Missing authentication headers.")

        return await self.validate_hmac_signature(
            signed.app_key,
            signed.client_id,
            signed.timestamp,
            signed.signature,
        )

    async def validate_hmac_signature(
        self,
        app_key: str,
        client_id: str,
        timestamp: str,
        signature: str,
    ) -> AuthenticatedClient:
        """Validate the HMAC signature of a request.

        Args:
            app_key: X-App-Key header value
            client_id: X-Client-Id header value
            timestamp: X-Timestamp header value, as received
            signature: X-Signature header value

        Returns:
            The verified client identity
        """
        # 2. Timestamp freshness
        try:
            request_time = int(timestamp)
        except (TypeError, ValueError):
            request_time = None

        current_time = int(self._clock())
        if request_time is None or not check_timestamp(
            request_time,
            current_time,
            max_skew=self._ttl,
            reject_future=self._reject_future,
        ):
            self._reject(
                AuthFailureReason.TIMESTAMP_INVALID,
                "Request timestamp is invalid or has expired.",
                app_key=app_key,
                request_time=request_time,
                server_time=current_time,
            )

        # 3. Active credential lookup
        try:
            credential = await self._registry.find_active_credential(app_key, client_id)
        except SQLAlchemyError:
            logger.exception("auth.lookup.failed", app_key_prefix=app_key[:_KEY_DISPLAY_LEN])
            raise InternalError("Credential lookup failed.") from None

        if credential is None:
            self._reject(
                AuthFailureReason.INVALID_CREDENTIAL,
                "Invalid App Key or Client ID.",
                app_key=app_key,
            )

        # 4. Decrypt the stored secret
        try:
            app_secret = self._secret_store.decrypt(credential.encrypted_secret)
        except CredentialDecryptionError:
            logger.error(
                "auth.decrypt.failed",
                credential_id=credential.id,
                app_key_prefix=app_key[:_KEY_DISPLAY_LEN],
                detail="corrupted record or master key mismatch",
            )
            raise

        # 5. Recompute and compare
        if not verify_signature(app_key, client_id, timestamp, app_secret, signature):
            self._reject(
                AuthFailureReason.INVALID_SIGNATURE,
                "Invalid signature.",
                app_key=app_key,
            )

        logger.debug(
            "auth.hmac.accepted",
            credential_id=credential.id,
            app_key_prefix=app_key[:_KEY_DISPLAY_LEN],
        )
        return AuthenticatedClient(
            app_key=credential.app_key,
            client_id=credential.client_id,
            credential_id=credential.id,
        )

    @staticmethod
    def _reject(
        reason: AuthFailureReason,
        message: str,
        app_key: str | None = None,
        **fields,
    ) -> NoReturn:
        logger.info(
            "auth.hmac.rejected",
            reason=reason.value,
            app_key_prefix=app_key[:_KEY_DISPLAY_LEN] if app_key else None,
            **fields,
        )
        raise UnauthorizedError(message, reason=reason.value)
