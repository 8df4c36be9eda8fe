"""Admin-key gate for credential issuance."""

from __future__ import annotations

import hmac

import structlog

from erp_gateway.errors import ConfigurationError, UnauthorizedError

logger = structlog.get_logger()


class AdminKeyGate:
    """Static bearer-key check protecting the issuance endpoints.

    The key is required at construction: an unset admin key must stop the
    gateway from starting instead of leaving issuance open.
    """

    def __init__(self, admin_key: str | None) -> None:
        if not admin_key:
            raise ConfigurationError("Admin API key is not defined.")
        self._admin_key = admin_key.encode("utf-8")

    def check(self, supplied_key: str | None) -> bool:
        """Return True if the supplied key matches the configured one."""
        if not supplied_key:
            return False
        return hmac.compare_digest(self._admin_key, supplied_key.encode("utf-8"))

    def require(self, supplied_key: str | None) -> None:
        """Raise UnauthorizedError unless the supplied key matches."""
        if not self.check(supplied_key):
            logger.warning("auth.admin.rejected", key_present=bool(supplied_key))
            raise UnauthorizedError("Invalid or missing Admin Key.", reason="invalid_admin_key")
