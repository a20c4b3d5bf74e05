"""Smoke test to verify the project scaffolding works."""

from __future__ import annotations

import pytest


def test_import() -> None:
    import wastemcp

    assert wastemcp.__version__ == "0.1.0"


def test_cli_entrypoint() -> None:
    from wastemcp.cli import main

    assert callable(main)


def test_lazy_import_from_wastemcp() -> None:
    import wastemcp

    assert wastemcp.build_server is not None
    assert wastemcp.WasteServer is not None
    assert wastemcp.ServerConfig is not None


def test_unknown_attribute() -> None:
    import wastemcp

    with pytest.raises(AttributeError, match="no attribute"):
        _ = wastemcp.NotAThing  # type: ignore[attr-defined]
