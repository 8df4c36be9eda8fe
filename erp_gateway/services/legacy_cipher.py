"""ERP password cipher.

The ERP stores API account passwords with a repeating-key Vigenère cipher
over the 95 printable ASCII characters (space to ``~``). Only the issuance
path uses it, to check the login/password pair of the requesting account.
"""

from __future__ import annotations

_ALPHABET_SIZE = 95
_BASE = 32  # ord(" ")


def _shift(text: str, key: str, direction: int) -> str:
    if not text or not key:
        return ""

    chars = []
    for index, char in enumerate(text):
        key_code = ord(key[index % len(key)]) - _BASE
        char_code = ord(char) - _BASE
        chars.append(chr(_BASE + (char_code + direction * key_code) % _ALPHABET_SIZE))
    return "".join(chars)


def encrypt_password(plaintext: str, key: str) -> str:
    """Encrypt a password the way the ERP stores it."""
    return _shift(plaintext, key, 1)


def decrypt_password(ciphertext: str, key: str) -> str:
    """Decrypt a stored ERP password.

    Returns an empty string when either argument is empty.
    """
    return _shift(ciphertext, key, -1)
