"""Tests for Config validation and display."""

import pytest

from pixelblaster.config import Config
from pixelblaster.rules import ArenaRules
from pixelblaster.schemas import EscapePolicy


def test_defaults_validate():
    Config.validate()


def test_rejects_non_positive_tick_rate(monkeypatch):
    monkeypatch.setattr(Config, "TICK_RATE_HZ", 0)
    with pytest.raises(ValueError, match="PIXELBLASTER_TICK_RATE"):
        Config.validate()


def test_rejects_unknown_escape_policy(monkeypatch):
    monkeypatch.setattr(Config, "ESCAPE_POLICY", "teleport")
    with pytest.raises(ValueError, match="PIXELBLASTER_ESCAPE_POLICY"):
        Config.validate()


def test_rejects_negative_escape_delay(monkeypatch):
    monkeypatch.setattr(Config, "ESCAPE_DELAY_TICKS", -1)
    with pytest.raises(ValueError):
        Config.validate()


def test_display_lists_settings():
    text = Config.display()
    assert "Tick Rate" in text
    assert "Escape Policy" in text


def test_rules_pick_up_config(monkeypatch):
    monkeypatch.setattr(Config, "ESCAPE_POLICY", "nearest_safe")
    monkeypatch.setattr(Config, "ESCAPE_DELAY_TICKS", 3)
    rules = ArenaRules()
    assert rules.escape_policy == EscapePolicy.NEAREST_SAFE
    assert rules.escape_delay_ticks == 3


def test_seeded_rules_replay(monkeypatch):
    monkeypatch.setattr(Config, "RANDOM_SEED", 42)
    first = ArenaRules().rng.random()
    second = ArenaRules().rng.random()
    assert first == second
