from __future__ import annotations

import pytest
from pydantic import ValidationError

from notestore_cli.settings import Settings


def test_settings_load_from_env(monkeypatch) -> None:
    monkeypatch.setenv("NOTESTORE_TOKEN", "t")
    monkeypatch.setenv("NOTESTORE_BASE_URL", "https://notes.example.net")
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "3.5")
    s = Settings()
    assert s.notestore_token == "t"
    assert str(s.notestore_base_url).startswith("https://notes.example.net")
    assert s.http_timeout_seconds == 3.5
    assert s.log_file is None


def test_settings_require_token(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("NOTESTORE_TOKEN", raising=False)
    with pytest.raises(ValidationError):
        Settings()
