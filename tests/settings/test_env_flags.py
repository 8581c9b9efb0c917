from __future__ import annotations

import pytest

from config.config import env_flag, env_list


@pytest.mark.parametrize("value", ["1", "true", "TRUE", "yes", "on", " Yes "])
def test_env_flag_true_words(monkeypatch, value):
    monkeypatch.setenv("ARCHIVE_APPROVED_CARDS", value)
    assert env_flag("ARCHIVE_APPROVED_CARDS") is True


@pytest.mark.parametrize("value", ["0", "false", "no", "off", ""])
def test_env_flag_false_words(monkeypatch, value):
    monkeypatch.setenv("ARCHIVE_APPROVED_CARDS", value)
    assert env_flag("ARCHIVE_APPROVED_CARDS", "1") is False


def test_env_flag_default_when_unset(monkeypatch):
    monkeypatch.delenv("AUTO_INIT_DB", raising=False)
    assert env_flag("AUTO_INIT_DB") is False
    assert env_flag("AUTO_INIT_DB", "1") is True


def test_env_list_splits_and_trims(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.test, ,http://b.test ")
    assert env_list("ALLOWED_ORIGINS") == ["http://a.test", "http://b.test"]
