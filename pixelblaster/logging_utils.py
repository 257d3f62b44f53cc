"""Console output for Pixel Blaster host loops.

Each kind of line a host prints (per-tick event headers, gameplay events, run
results, failures, run metadata) gets its own color and a text tag, so a
headless run stays readable with or without color. The simulation core itself
never prints.
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI codes used by the host loop."""

    BLUE = "\033[94m"      # Tick headers
    YELLOW = "\033[93m"    # Early stops, kills, level changes
    RED = "\033[91m"       # Failures, player hits, game over
    GREEN = "\033[92m"     # Finished runs, cleared levels
    CYAN = "\033[96m"      # Run setup and high score

    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap ``text`` in ``color`` unless PIXELBLASTER_NO_COLOR is set."""
    if os.getenv("PIXELBLASTER_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


def log_tick(message: str) -> None:
    """Header line for one tick's events."""
    print(colored(f"{LOG_TAG_TICK} {message}", Color.BLUE))


def log_event(message: str) -> None:
    print(colored(f"{LOG_TAG_EVENT} {message}", Color.YELLOW))


def log_error(message: str) -> None:
    print(colored(f"{LOG_TAG_ERROR} {message}", Color.RED))


def log_success(message: str) -> None:
    print(colored(f"{LOG_TAG_SUCCESS} {message}", Color.GREEN))


def log_info(message: str) -> None:
    print(colored(f"{LOG_TAG_INFO} {message}", Color.CYAN))


# Text tags, readable without color
LOG_TAG_TICK = "[#]"
LOG_TAG_EVENT = "[*]"
LOG_TAG_ERROR = "[!]"
LOG_TAG_SUCCESS = "[✓]"
LOG_TAG_INFO = "[i]"
