"""Shared fixtures for gateway unit tests."""

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

import erp_gateway.models  # noqa: F401
from erp_gateway.models.api_credential import ApiAccount
from erp_gateway.services.credential import CredentialRegistry
from erp_gateway.services.legacy_cipher import encrypt_password
from erp_gateway.services.secret_store import SecretStore
from tests.fakes import ACCOUNT_PASSWORD_KEY, MASTER_KEY


@pytest.fixture
def secret_store() -> SecretStore:
    """SecretStore under the test master key."""
    return SecretStore(MASTER_KEY)


@pytest.fixture
async def db_session():
    """Create in-memory SQLite database and session."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async_session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def registry(db_session: AsyncSession, secret_store: SecretStore) -> CredentialRegistry:
    """CredentialRegistry on the in-memory database."""
    return CredentialRegistry(
        db_session=db_session,
        secret_store=secret_store,
        account_password_key=ACCOUNT_PASSWORD_KEY,
    )


@pytest.fixture
def add_account(db_session: AsyncSession):
    """Factory: store an ERP API account with its password in the ERP cipher."""

    async def _add(
        login: str = "erp-user",
        password: str = "s3cret-Pass",
        description: str = "Warehouse integration",
    ) -> ApiAccount:
        account = ApiAccount(
            login=login,
            password_cipher=encrypt_password(password, ACCOUNT_PASSWORD_KEY),
            description=description,
        )
        db_session.add(account)
        await db_session.flush()
        return account

    return _add
