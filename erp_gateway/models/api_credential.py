"""API account and credential data models.

An ``ApiAccount`` is an ERP API user. Its password is held in the ERP's
own cipher and only ever checked during credential issuance.

An ``ApiCredential`` is the trust anchor of one API client. The shared
secret is stored encrypted (``ivHex:authTagHex:ciphertextHex``); the
plaintext is returned once at issuance and never persisted.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Optional

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    """Timezone-aware UTC timestamp for the audit columns."""
    return datetime.now(UTC)


class ApiAccount(SQLModel, table=True):
    """ERP API user allowed to request credentials."""

    __tablename__ = "api_accounts"

    id: Optional[int] = Field(default=None, primary_key=True)
    login: str = Field(unique=True, index=True)
    password_cipher: str = Field()
    description: str = Field(default="")
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))


class ApiCredential(SQLModel, table=True):
    """HMAC credential of one API client.

    Rows are never deleted: deactivation clears ``is_active`` and the row
    stays for audit.
    """

    __tablename__ = "api_credentials"
    __table_args__ = (
        UniqueConstraint("app_key", "client_id", name="uq_api_credentials_key_client"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    account_id: int = Field(foreign_key="api_accounts.id", index=True)
    app_key: str = Field(index=True)  # 40 hex chars
    client_id: str = Field(unique=True)  # 32 upper-case hex chars
    encrypted_secret: str = Field()
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    deactivated_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
