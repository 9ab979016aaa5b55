"""
Shared pytest fixtures for jujuconf tests.
"""

from __future__ import annotations

import asyncio
from typing import Iterator

import pytest

from jujuconf.secrets.juju_controller import reset_local_controller_config
from jujuconf.tests.fakes import FakeJuju


@pytest.fixture
def fake_juju(monkeypatch: pytest.MonkeyPatch) -> FakeJuju:
    fake = FakeJuju()
    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake.create_subprocess_exec)
    return fake


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for var in (
        "JUJUCONF_CLI_PATH",
        "JUJUCONF_TIMEOUT_SECONDS",
        "JUJUCONF_ALLOW_EMPTY_OUTPUT",
        "JUJUCONF_LOG_CREDENTIALS",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_local_controller_config()
    yield
    reset_local_controller_config()
