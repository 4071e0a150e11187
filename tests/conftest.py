from __future__ import annotations

import os

import pytest

from core.config import AppSettings


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    # Keep a developer's real credentials / .env out of the tests.
    for key in list(os.environ):
        if key.upper().startswith("METEOMATICS_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, username="alice", password="s3cret")
