import logging
from pathlib import Path

from lish import config


def test_explicit_config_dir(monkeypatch, tmp_path):
    monkeypatch.setenv("LISH_CONFIG_DIR", str(tmp_path))
    assert config.get_config_dir() == tmp_path
    assert config.get_rc_path() == tmp_path / "init.lisp"
    assert config.get_history_path() == tmp_path / ".history"


def test_xdg_config_dir(monkeypatch, tmp_path):
    monkeypatch.delenv("LISH_CONFIG_DIR", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert config.get_config_dir() == tmp_path / "lish"


def test_home_fallback(monkeypatch, tmp_path):
    monkeypatch.delenv("LISH_CONFIG_DIR", raising=False)
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    assert config.get_config_dir() == Path(tmp_path) / ".config" / "lish"


def test_log_level(monkeypatch):
    monkeypatch.setenv("LISH_LOG_LEVEL", "debug")
    assert config.get_log_level() == logging.DEBUG
    monkeypatch.setenv("LISH_LOG_LEVEL", "nonsense")
    assert config.get_log_level() == logging.WARNING
