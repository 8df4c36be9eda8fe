"""Unit tests for the admin-key gate."""

from __future__ import annotations

import pytest

from erp_gateway.auth.admin import AdminKeyGate
from erp_gateway.errors import ConfigurationError, UnauthorizedError


class TestAdminKeyGate:
    def test_unset_key_fails_construction(self):
        with pytest.raises(ConfigurationError):
            AdminKeyGate(None)

        with pytest.raises(ConfigurationError):
            AdminKeyGate("")

    def test_matching_key_accepted(self):
        gate = AdminKeyGate("admin-key")

        assert gate.check("admin-key") is True
        gate.require("admin-key")

    @pytest.mark.parametrize("supplied", [None, "", "admin-ke", "admin-key ", "ADMIN-KEY"])
    def test_other_keys_rejected(self, supplied):
        gate = AdminKeyGate("admin-key")

        assert gate.check(supplied) is False
        with pytest.raises(UnauthorizedError) as exc_info:
            gate.require(supplied)

        assert exc_info.value.message == "Invalid or missing Admin Key."
