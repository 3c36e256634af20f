# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator

import pytest

from sure_client.infrastructure.logging import logger as logger_module


@pytest.fixture(autouse=True)
def _isolate_sure_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer ``SURE_*`` variables from leaking into settings under test."""
    for key in list(os.environ):
        if key.startswith("SURE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("REQUEST_ID", raising=False)


@pytest.fixture(autouse=True)
def _reset_request_context() -> Generator[None, None, None]:
    """Start every test without a bound request id."""
    token = logger_module._REQUEST_ID_CTX.set(None)
    try:
        yield
    finally:
        logger_module._REQUEST_ID_CTX.reset(token)
