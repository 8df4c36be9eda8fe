"""GraphQL request context."""

from __future__ import annotations

from fastapi import Request
from strawberry.fastapi import BaseContext

from erp_gateway.api.dependencies import (
    AdminGateDep,
    CredentialRegistryDep,
    RequestAuthenticatorDep,
)
from erp_gateway.auth.admin import AdminKeyGate
from erp_gateway.auth.models import AuthenticatedClient
from erp_gateway.services.auth import RequestAuthenticator
from erp_gateway.services.credential import CredentialRegistry


class GatewayContext(BaseContext):
    """Per-request services handed to resolvers and permission classes.

    ``client`` is set by the HMAC permission once the caller is verified.
    """

    def __init__(
        self,
        registry: CredentialRegistry,
        authenticator: RequestAuthenticator,
        admin_gate: AdminKeyGate,
        request_id: str | None = None,
    ) -> None:
        super().__init__()
        self.registry = registry
        self.authenticator = authenticator
        self.admin_gate = admin_gate
        self.request_id = request_id
        self.client: AuthenticatedClient | None = None


async def get_context(
    request: Request,
    registry: CredentialRegistryDep,
    authenticator: RequestAuthenticatorDep,
    admin_gate: AdminGateDep,
) -> GatewayContext:
    """Build the GraphQL context through FastAPI dependency injection."""
    return GatewayContext(
        registry=registry,
        authenticator=authenticator,
        admin_gate=admin_gate,
        request_id=getattr(request.state, "request_id", None),
    )
