"""SQLModel data models."""

from erp_gateway.models.api_credential import ApiAccount, ApiCredential

__all__ = [
    "ApiAccount",
    "ApiCredential",
]
