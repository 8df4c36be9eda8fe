"""Translation of gateway errors into GraphQL errors."""

from __future__ import annotations

from graphql import GraphQLError
from strawberry.extensions import MaskErrors
from strawberry.types import ExecutionContext

from erp_gateway.errors import GatewayError


def to_graphql_error(exc: GatewayError, request_id: str | None = None) -> GraphQLError:
    """Render a gateway error for the GraphQL response.

    Unauthorized and internal errors carry only their generic message.
    """
    return GraphQLError(
        exc.public_message,
        extensions={"code": exc.code, "request_id": request_id},
        original_error=exc,
    )


def should_mask_error(error: GraphQLError) -> bool:
    """Mask every resolver error that was not translated by ``to_graphql_error``.

    Parse and validation errors have no original error and stay visible.
    """
    original = error.original_error
    if original is None:
        return False
    return not isinstance(original, GraphQLError)


class MaskUnexpectedErrors(MaskErrors):
    """``MaskErrors`` bound to ``should_mask_error``.

    Registered as a class so the schema builds one instance per operation.
    """

    def __init__(self, *, execution_context: ExecutionContext | None = None) -> None:
        super().__init__(should_mask_error=should_mask_error)
        if execution_context is not None:
            self.execution_context = execution_context
