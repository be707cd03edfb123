"""Tests for config.py."""

import pytest

from releaseinfo.config import Config


def test_config_initialization(monkeypatch):
    monkeypatch.setenv("RELEASEINFO_LOG_LEVEL", "debug")
    monkeypatch.setenv("RELEASEINFO_CLASSIFY", "0")
    monkeypatch.delenv("RELEASEINFO_MAX_BATCH", raising=False)
    cfg = Config()
    assert cfg.log_level == "DEBUG"
    assert cfg.classify is False
    assert cfg.max_batch == 100  # Should default if missing


def test_config_update():
    cfg = Config()
    cfg.update({"max_batch": 5, "classify": "no", "log_level": "warning"})
    assert cfg.max_batch == 5
    assert cfg.classify is False
    assert cfg.log_level == "WARNING"


def test_config_update_rejects_non_positive_batch():
    cfg = Config()
    with pytest.raises(ValueError):
        cfg.update({"max_batch": 0})


def test_config_to_dict():
    cfg = Config()
    d = cfg.to_dict()
    assert set(d) == {"log_level", "classify", "max_batch"}


def test_config_update_rejects_non_integer_batch():
    cfg = Config()
    with pytest.raises(ValueError):
        cfg.update({"max_batch": None})
    with pytest.raises(ValueError):
        cfg.update({"max_batch": "many"})


def test_config_update_is_all_or_nothing():
    cfg = Config()
    before = cfg.to_dict()
    with pytest.raises(ValueError):
        cfg.update({"log_level": "debug", "classify": not before["classify"], "max_batch": 0})
    assert cfg.to_dict() == before
