"""Fake implementations and constants for testing.

These allow unit tests to run without a configured deployment.
"""

from __future__ import annotations

from dataclasses import dataclass

MASTER_KEY = "k" * 16 + "0123456789abcdef"  # 32 bytes
ADMIN_KEY = "admin-test-key"
ACCOUNT_PASSWORD_KEY = "erp-password-key"


@dataclass
class FakeClock:
    """Controllable replacement for ``time.time``."""

    now: float = 1_700_000_000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
