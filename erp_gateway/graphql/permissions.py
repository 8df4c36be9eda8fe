"""GraphQL permission classes.

``HmacAuthenticated`` runs the request authenticator for the field;
``AdminKeyRequired`` guards credential issuance with the admin-key gate.
Fields without either are public.
"""

from __future__ import annotations

from typing import Any

from strawberry.permission import BasePermission
from strawberry.types import Info

from erp_gateway.auth.headers import ADMIN_KEY_HEADER
from erp_gateway.errors import GatewayError
from erp_gateway.graphql.context import GatewayContext
from erp_gateway.graphql.errors import to_graphql_error


class HmacAuthenticated(BasePermission):
    """Require a valid HMAC-signed request."""

    message = "Unauthorized"

    async def has_permission(self, source: Any, info: Info, **kwargs: Any) -> bool:
        context: GatewayContext = info.context
        if context.client is not None:
            return True

        try:
            context.client = await context.authenticator.authenticate(context.request.headers)
        except GatewayError as exc:
            raise to_graphql_error(exc, context.request_id) from exc
        return True


class AdminKeyRequired(BasePermission):
    """Require the X-Admin-Key header to match the configured admin key."""

    message = "Unauthorized"

    def has_permission(self, source: Any, info: Info, **kwargs: Any) -> bool:
        context: GatewayContext = info.context
        try:
            context.admin_gate.require(context.request.headers.get(ADMIN_KEY_HEADER))
        except GatewayError as exc:
            raise to_graphql_error(exc, context.request_id) from exc
        return True
