"""GraphQL endpoint of the gateway."""

from __future__ import annotations

from strawberry.fastapi import GraphQLRouter

from erp_gateway.graphql.context import GatewayContext, get_context
from erp_gateway.graphql.schema import schema


def create_graphql_router(graphiql: bool = False) -> GraphQLRouter:
    """Create the Strawberry router with the gateway context."""
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if graphiql else None,
    )


__all__ = ["GatewayContext", "create_graphql_router", "schema"]
