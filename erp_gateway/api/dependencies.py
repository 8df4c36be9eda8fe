"""FastAPI dependencies for the gateway.

Provides dependency injection for:
- Database sessions
- Startup-built security objects (auth config, secret store, admin gate)
- Per-request services (credential registry, request authenticator)
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from erp_gateway.auth.admin import AdminKeyGate
from erp_gateway.config import AuthConfig
from erp_gateway.db.session import get_session_dependency
from erp_gateway.services.auth import RequestAuthenticator
from erp_gateway.services.credential import CredentialRegistry
from erp_gateway.services.secret_store import SecretStore


def get_auth_config(request: Request) -> AuthConfig:
    """Auth config validated at startup."""
    return request.app.state.auth_config


def get_secret_store(request: Request) -> SecretStore:
    """Process-wide secret store built at startup."""
    return request.app.state.secret_store


def get_admin_gate(request: Request) -> AdminKeyGate:
    """Process-wide admin-key gate built at startup."""
    return request.app.state.admin_gate


SessionDep = Annotated[AsyncSession, Depends(get_session_dependency)]
AuthConfigDep = Annotated[AuthConfig, Depends(get_auth_config)]
SecretStoreDep = Annotated[SecretStore, Depends(get_secret_store)]
AdminGateDep = Annotated[AdminKeyGate, Depends(get_admin_gate)]


async def get_credential_registry(
    session: SessionDep,
    secret_store: SecretStoreDep,
    auth_config: AuthConfigDep,
) -> CredentialRegistry:
    """Get CredentialRegistry bound to the request's session."""
    return CredentialRegistry(
        db_session=session,
        secret_store=secret_store,
        account_password_key=auth_config.account_password_key,
    )


CredentialRegistryDep = Annotated[CredentialRegistry, Depends(get_credential_registry)]


async def get_request_authenticator(
    registry: CredentialRegistryDep,
    secret_store: SecretStoreDep,
    auth_config: AuthConfigDep,
) -> RequestAuthenticator:
    """Get a RequestAuthenticator for one inbound call."""
    return RequestAuthenticator(
        registry=registry,
        secret_store=secret_store,
        signature_ttl_seconds=auth_config.signature_ttl_seconds,
        reject_future_timestamps=auth_config.reject_future_timestamps,
    )


RequestAuthenticatorDep = Annotated[RequestAuthenticator, Depends(get_request_authenticator)]
