"""Encryption at rest for client secrets.

Secrets are sealed with AES-256-GCM under a process-wide master key and
stored as three colon-separated hex fields::

    ivHex:authTagHex:ciphertextHex

A fresh 16-byte IV is drawn for every encryption. Any tampering with the
stored record surfaces as ``CredentialDecryptionError``.
"""

from __future__ import annotations

import os

import structlog
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from erp_gateway.errors import ConfigurationError, CredentialDecryptionError

logger = structlog.get_logger()

KEY_LENGTH = 32
IV_LENGTH = 16
AUTH_TAG_LENGTH = 16
_SEPARATOR = ":"


class SecretStore:
    """AES-256-GCM wrapper around the master key."""

    def __init__(self, master_key: bytes | str) -> None:
        if isinstance(master_key, str):
            master_key = master_key.encode("utf-8")
        if not master_key or len(master_key) != KEY_LENGTH:
            raise ConfigurationError(
                f"Encryption master key is not valid (must be {KEY_LENGTH} bytes)."
            )
        self._aead = AESGCM(master_key)

    def encrypt(self, plaintext: str) -> str:
        """Encrypt a secret for storage.

        Args:
            plaintext: The secret to seal

        Returns:
            ``iv:authTag:ciphertext``, hex encoded
        """
        iv = os.urandom(IV_LENGTH)
        sealed = self._aead.encrypt(iv, plaintext.encode("utf-8"), None)
        # cryptography appends the tag to the ciphertext
        ciphertext, auth_tag = sealed[:-AUTH_TAG_LENGTH], sealed[-AUTH_TAG_LENGTH:]
        return _SEPARATOR.join((iv.hex(), auth_tag.hex(), ciphertext.hex()))

    def decrypt(self, record: str) -> str:
        """Decrypt a record produced by ``encrypt``.

        Raises:
            CredentialDecryptionError: If the record is malformed, was
                tampered with, or was sealed under another key.
        """
        parts = record.split(_SEPARATOR)
        if len(parts) != 3:
            logger.error("secret_store.decrypt.failed", reason="malformed_record", parts=len(parts))
            raise CredentialDecryptionError("Failed to decrypt secret.")

        try:
            iv, auth_tag, ciphertext = (bytes.fromhex(part) for part in parts)
        except ValueError:
            logger.error("secret_store.decrypt.failed", reason="invalid_hex")
            raise CredentialDecryptionError("Failed to decrypt secret.") from None

        if len(iv) != IV_LENGTH or len(auth_tag) != AUTH_TAG_LENGTH:
            logger.error(
                "secret_store.decrypt.failed",
                reason="invalid_lengths",
                iv_length=len(iv),
                tag_length=len(auth_tag),
            )
            raise CredentialDecryptionError("Failed to decrypt secret.")

        try:
            plaintext = self._aead.decrypt(iv, ciphertext + auth_tag, None)
        except InvalidTag:
            logger.error("secret_store.decrypt.failed", reason="authentication_failed")
            raise CredentialDecryptionError("Failed to decrypt secret.") from None

        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError:
            logger.error("secret_store.decrypt.failed", reason="invalid_utf8")
            raise CredentialDecryptionError("Failed to decrypt secret.") from None
