"""Tests for color-coded log helpers and their tags."""

from pixelblaster.logging_utils import (
    LOG_TAG_ERROR,
    LOG_TAG_EVENT,
    LOG_TAG_TICK,
    Color,
    colored,
    log_error,
    log_event,
    log_success,
    log_tick,
)


def test_colored_wraps_in_ansi(monkeypatch):
    monkeypatch.delenv("PIXELBLASTER_NO_COLOR", raising=False)
    text = colored("hello", Color.RED, bold=True)
    assert text.startswith(Color.BOLD.value + Color.RED.value)
    assert text.endswith(Color.RESET.value)


def test_no_color_env_disables_ansi(monkeypatch):
    monkeypatch.setenv("PIXELBLASTER_NO_COLOR", "1")
    assert colored("hello", Color.RED) == "hello"


def test_log_helpers_prefix_tags(capsys, monkeypatch):
    monkeypatch.setenv("PIXELBLASTER_NO_COLOR", "1")
    log_tick("Tick 4: 2 events")
    log_event("enemy down")
    log_error("input failed")
    log_success("done")

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == f"{LOG_TAG_TICK} Tick 4: 2 events"
    assert lines[1] == f"{LOG_TAG_EVENT} enemy down"
    assert lines[2] == f"{LOG_TAG_ERROR} input failed"
    assert lines[3].endswith("done")


def test_tick_header_is_blue(capsys, monkeypatch):
    monkeypatch.delenv("PIXELBLASTER_NO_COLOR", raising=False)
    log_tick("Tick 1: 1 events")
    assert capsys.readouterr().out.startswith(Color.BLUE.value + LOG_TAG_TICK)
