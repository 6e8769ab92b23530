"""
Tests for environment configuration.
"""

from dataclasses import fields

import pytest

from ..config import Config, get_config


@pytest.fixture(autouse=True)
def fresh_config():
    get_config.cache_clear()
    yield
    get_config.cache_clear()


def test_defaults(monkeypatch):
    for name in ("SKILL_GOMOKU_LOG_LEVEL", "SKILL_GOMOKU_RANDOM_SEED", "SKILL_GOMOKU_ROOM_ID_LENGTH"):
        monkeypatch.delenv(name, raising=False)

    assert get_config() == Config()


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SKILL_GOMOKU_LOG_LEVEL", "debug")
    monkeypatch.setenv("SKILL_GOMOKU_RANDOM_SEED", "42")
    monkeypatch.setenv("SKILL_GOMOKU_ROOM_ID_LENGTH", "6")

    config = get_config()

    assert config.log_level == "DEBUG"
    assert config.random_seed == 42
    assert config.room_id_length == 6


def test_blank_seed_means_unseeded(monkeypatch):
    monkeypatch.setenv("SKILL_GOMOKU_RANDOM_SEED", " ")

    assert get_config().random_seed is None


def test_config_is_cached():
    assert get_config() is get_config()


def test_every_setting_is_read_from_the_environment():
    assert [f.name for f in fields(Config)] == ["log_level", "random_seed", "room_id_length"]
