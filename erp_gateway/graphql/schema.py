"""GraphQL schema of the authentication surface.

- ``me`` (HMAC): identity of the signed caller
- ``createApiCredential`` (admin key): issue a credential to an ERP API account
- ``deactivateApiCredential`` (admin key): retire a credential
"""

from __future__ import annotations

import strawberry
from strawberry.types import Info

from erp_gateway.errors import GatewayError
from erp_gateway.graphql.errors import MaskUnexpectedErrors, to_graphql_error
from erp_gateway.graphql.permissions import AdminKeyRequired, HmacAuthenticated


@strawberry.type(name="ApiClient")
class ApiClientType:
    """Identity of an authenticated API client."""

    app_key: str
    client_id: str


@strawberry.type(name="ApiCredential")
class ApiCredentialType:
    """A freshly issued credential."""

    name: str = strawberry.field(description="Description of the ERP API account.")
    client_id: str = strawberry.field(description="The generated Client ID.")
    app_key: str = strawberry.field(description="The generated App Key. Store this value.")
    app_secret: str = strawberry.field(
        description="The generated App Secret. Store this value securely. "
        "It will not be shown again."
    )


@strawberry.input
class CreateApiCredentialInput:
    login: str = strawberry.field(description="The login of the ERP API user.")
    password: str = strawberry.field(description="The password of the ERP API user.")


@strawberry.type
class Query:
    @strawberry.field(
        permission_classes=[HmacAuthenticated],
        description="The API client that signed this request.",
    )
    def me(self, info: Info) -> ApiClientType:
        client = info.context.client
        return ApiClientType(app_key=client.app_key, client_id=client.client_id)


@strawberry.type
class Mutation:
    @strawberry.mutation(
        name="createApiCredential",
        permission_classes=[AdminKeyRequired],
        description="Issue API credentials. The secret is returned only once.",
    )
    async def create_api_credential(
        self,
        info: Info,
        input: CreateApiCredentialInput,
    ) -> ApiCredentialType:
        try:
            issued = await info.context.registry.create(input.login, input.password)
        except GatewayError as exc:
            raise to_graphql_error(exc, info.context.request_id) from exc

        return ApiCredentialType(
            name=issued.name,
            client_id=issued.client_id,
            app_key=issued.app_key,
            app_secret=issued.app_secret,
        )

    @strawberry.mutation(
        name="deactivateApiCredential",
        permission_classes=[AdminKeyRequired],
        description="Deactivate API credentials. The record is kept for audit.",
    )
    async def deactivate_api_credential(
        self,
        info: Info,
        app_key: str,
        client_id: str,
    ) -> bool:
        try:
            await info.context.registry.deactivate(app_key, client_id)
        except GatewayError as exc:
            raise to_graphql_error(exc, info.context.request_id) from exc
        return True


schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    extensions=[MaskUnexpectedErrors],
)
