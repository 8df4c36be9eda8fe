"""Unit tests for the ERP password cipher."""

from __future__ import annotations

import pytest

from erp_gateway.services.legacy_cipher import decrypt_password, encrypt_password


class TestLegacyCipher:
    def test_known_vector(self):
        """'B' shifted by key '!' (one step) is 'C'; wraps from '~' back to ' '."""
        assert encrypt_password("B", "!") == "C"
        assert encrypt_password("~", "!") == " "
        assert decrypt_password(" ", "!") == "~"

    def test_key_repeats_cyclically(self):
        assert encrypt_password("AAAA", '!"') == encrypt_password("AA", '!"') * 2

    @pytest.mark.parametrize("plaintext", ["s3cret-Pass", " ~!{}", "a" * 50])
    def test_round_trip(self, plaintext):
        key = "erp-password-key"
        ciphertext = encrypt_password(plaintext, key)

        assert ciphertext != plaintext
        assert decrypt_password(ciphertext, key) == plaintext

    def test_output_stays_printable(self):
        ciphertext = encrypt_password("Hello, World ~", "zzzz")

        assert all(32 <= ord(char) <= 126 for char in ciphertext)

    @pytest.mark.parametrize(("text", "key"), [("", "key"), ("text", ""), ("", "")])
    def test_empty_inputs_yield_empty_string(self, text, key):
        assert decrypt_password(text, key) == ""
