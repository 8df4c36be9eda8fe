"""Credential registry.

Finds the active credential of an (app key, client id) pair, issues new
credentials to ERP API accounts and deactivates them.
"""

from __future__ import annotations

import hmac
import secrets
import uuid
from dataclasses import dataclass

import structlog
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from erp_gateway.errors import (
    ConflictError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from erp_gateway.models.api_credential import ApiAccount, ApiCredential, utc_now
from erp_gateway.services.legacy_cipher import decrypt_password
from erp_gateway.services.secret_store import SecretStore

logger = structlog.get_logger()

_APP_KEY_BYTES = 20  # 40 hex chars
_APP_SECRET_BYTES = 32  # 64 hex chars
_CLIENT_ID_MAX_ATTEMPTS = 5
_KEY_DISPLAY_LEN = 8  # app key chars safe to show in logs


@dataclass(frozen=True)
class IssuedCredential:
    """Result of an issuance. ``app_secret`` is plaintext and shown only once."""

    name: str
    client_id: str
    app_key: str
    app_secret: str


class CredentialRegistry:
    """Persistence and lifecycle of API credentials."""

    def __init__(
        self,
        db_session: AsyncSession,
        secret_store: SecretStore,
        account_password_key: str | None = None,
    ) -> None:
        self._db = db_session
        self._secret_store = secret_store
        self._account_password_key = account_password_key

    async def find_active_credential(self, app_key: str, client_id: str) -> ApiCredential | None:
        """Find the active credential for an app key / client id pair.

        Returns:
            The credential, or None if absent or deactivated
        """
        result = await self._db.execute(
            select(ApiCredential).where(
                ApiCredential.app_key == app_key,
                ApiCredential.client_id == client_id,
                ApiCredential.is_active == True,  # noqa: E712
            )
        )
        return result.scalars().first()

    async def create(self, login: str, password: str) -> IssuedCredential:
        """Validate the account's login/password and issue a new credential.

        Args:
            login: ERP API account login
            password: Plaintext account password

        Returns:
            The new credential including the plaintext secret

        Raises:
            ValidationError: If login or password is blank
            UnauthorizedError: If the login/password pair is not valid
            ConflictError: If the account already holds an active credential
            InternalError: If no unique client id could be generated
        """
        if not login or not login.strip() or not password:
            raise ValidationError("login and password must not be empty.")

        account = await self._authenticate_account(login, password)

        existing = await self._db.execute(
            select(ApiCredential).where(
                ApiCredential.account_id == account.id,
                ApiCredential.is_active == True,  # noqa: E712
            )
        )
        if existing.scalars().first() is not None:
            raise ConflictError("API credentials already exist for this user.")

        client_id = await self._generate_client_id()
        app_key = secrets.token_hex(_APP_KEY_BYTES)
        app_secret = secrets.token_hex(_APP_SECRET_BYTES)

        credential = ApiCredential(
            account_id=account.id,
            app_key=app_key,
            client_id=client_id,
            encrypted_secret=self._secret_store.encrypt(app_secret),
            is_active=True,
        )
        self._db.add(credential)
        await self._db.flush()

        logger.info(
            "credential.issued",
            login=account.login,
            client_id=client_id,
            app_key_prefix=app_key[:_KEY_DISPLAY_LEN],
        )

        return IssuedCredential(
            name=account.description,
            client_id=client_id,
            app_key=app_key,
            app_secret=app_secret,
        )

    async def deactivate(self, app_key: str, client_id: str) -> ApiCredential:
        """Deactivate a credential. The row is kept for audit.

        Raises:
            NotFoundError: If no active credential matches
        """
        credential = await self.find_active_credential(app_key, client_id)
        if credential is None:
            raise NotFoundError("Active API credential not found.")

        credential.is_active = False
        credential.deactivated_at = utc_now()
        self._db.add(credential)
        await self._db.flush()

        logger.info(
            "credential.deactivated",
            client_id=client_id,
            app_key_prefix=app_key[:_KEY_DISPLAY_LEN],
        )
        return credential

    async def _authenticate_account(self, login: str, password: str) -> ApiAccount:
        """Check the login/password pair against the ERP account table.

        Every failure yields the same message so logins cannot be probed.
        """
        result = await self._db.execute(select(ApiAccount).where(ApiAccount.login == login))
        account = result.scalars().first()
        if account is None:
            logger.info("credential.issue.rejected", reason="unknown_login")
            raise UnauthorizedError("Invalid login or password.", reason="unknown_login")

        if not self._account_password_key:
            logger.error("credential.issue.rejected", reason="password_key_missing")
            raise UnauthorizedError("Invalid login or password.", reason="password_key_missing")

        stored_password = decrypt_password(account.password_cipher, self._account_password_key)
        if not stored_password or not hmac.compare_digest(
            stored_password.encode("utf-8"), password.encode("utf-8")
        ):
            logger.info("credential.issue.rejected", reason="bad_password", login=login)
            raise UnauthorizedError("Invalid login or password.", reason="bad_password")

        return account

    async def _generate_client_id(self) -> str:
        """Generate a client id that no credential row uses yet."""
        for _ in range(_CLIENT_ID_MAX_ATTEMPTS):
            candidate = self._new_client_id()
            result = await self._db.execute(
                select(func.count()).select_from(ApiCredential).where(
                    ApiCredential.client_id == candidate
                )
            )
            if result.scalar_one() == 0:
                return candidate

        raise InternalError("Failed to generate a unique Client ID after multiple attempts.")

    @staticmethod
    def _new_client_id() -> str:
        return uuid.uuid4().hex.upper()
