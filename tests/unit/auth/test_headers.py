"""Unit tests for signed header creation and extraction."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from starlette.datastructures import Headers

from erp_gateway.auth.headers import create_signed_headers, extract_signed_request
from erp_gateway.auth.signature import compute_signature, verify_signature


class TestCreateSignedHeaders:
    """Test the client-side header helper."""

    def test_contains_all_headers(self):
        headers = create_signed_headers("ak1", "c1", "secret", timestamp=1000)

        assert headers == {
            "X-App-Key": "ak1",
            "X-Client-Id": "c1",
            "X-Timestamp": "1000",
            "X-Signature": compute_signature("ak1", "c1", 1000, "secret"),
        }

    def test_defaults_to_current_time(self):
        with patch("erp_gateway.auth.headers.time.time", return_value=1234.9):
            headers = create_signed_headers("ak1", "c1", "secret")

        assert headers["X-Timestamp"] == "1234"

    def test_server_verifies_generated_headers(self):
        headers = create_signed_headers("ak1", "c1", "secret", timestamp=1000)

        assert verify_signature(
            headers["X-App-Key"],
            headers["X-Client-Id"],
            headers["X-Timestamp"],
            "secret",
            headers["X-Signature"],
        )

    @pytest.mark.parametrize(
        ("app_key", "client_id", "secret"),
        [("", "c1", "s"), ("ak1", "", "s"), ("ak1", "c1", "")],
    )
    def test_incomplete_credentials_rejected(self, app_key, client_id, secret):
        with pytest.raises(ValueError, match="Invalid credentials"):
            create_signed_headers(app_key, client_id, secret)


class TestExtractSignedRequest:
    """Test server-side header extraction."""

    def test_round_trip_through_starlette_headers(self):
        raw = create_signed_headers("ak1", "c1", "secret", timestamp=1000)
        signed = extract_signed_request(Headers(headers=raw))

        assert signed is not None
        assert signed.app_key == "ak1"
        assert signed.client_id == "c1"
        assert signed.timestamp == "1000"
        assert signed.signature == raw["X-Signature"]

    def test_plain_dict_lookup_is_case_insensitive(self):
        signed = extract_signed_request(
            {
                "x-app-key": "ak1",
                "X-CLIENT-ID": "c1",
                "x-timestamp": "1000",
                "X-Signature": "abc",
            }
        )

        assert signed is not None
        assert signed.client_id == "c1"

    @pytest.mark.parametrize(
        "missing", ["X-App-Key", "X-Client-Id", "X-Timestamp", "X-Signature"]
    )
    def test_missing_header_returns_none(self, missing):
        raw = create_signed_headers("ak1", "c1", "secret", timestamp=1000)
        del raw[missing]

        assert extract_signed_request(raw) is None

    def test_empty_header_returns_none(self):
        raw = create_signed_headers("ak1", "c1", "secret", timestamp=1000)
        raw["X-Signature"] = ""

        assert extract_signed_request(raw) is None
