from __future__ import annotations

import os
from pathlib import Path

import pytest

from core.config import ClientConfig
from tests.factories import BASE_URL


class SleepRecorder:
    """Stand-in for `asyncio.sleep` that records the requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(base_url=BASE_URL, max_retries=3, timeout_ms=5_000)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep AppSettings away from the developer's env vars and config dir."""

    for key in list(os.environ):
        if key.startswith("POKEDEX_D2_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)
