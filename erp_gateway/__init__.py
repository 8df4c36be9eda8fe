"""ERP Gateway - GraphQL access to ERP entities behind HMAC API authentication."""

from __future__ import annotations

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION_NAME = "erp-gateway"


def _source_tree_version() -> str:
    # Running from a checkout that was never installed
    pyproject = Path(__file__).resolve().parent.parent / "pyproject.toml"
    try:
        with pyproject.open("rb") as f:
            return tomllib.load(f)["project"]["version"]
    except (OSError, KeyError, tomllib.TOMLDecodeError):
        return "0.0.0"


try:
    __version__ = version(DISTRIBUTION_NAME)
except PackageNotFoundError:
    __version__ = _source_tree_version()
