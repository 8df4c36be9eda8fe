"""Gateway services layer."""

from erp_gateway.services.auth import RequestAuthenticator
from erp_gateway.services.credential import CredentialRegistry, IssuedCredential
from erp_gateway.services.secret_store import SecretStore

__all__ = ["CredentialRegistry", "IssuedCredential", "RequestAuthenticator", "SecretStore"]
