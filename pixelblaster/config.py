"""
Pixel Blaster Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


class Config:
    """Application configuration loaded from environment variables."""

    # Host loop pacing (frames per second requested from the host)
    TICK_RATE_HZ: int = int(os.getenv("PIXELBLASTER_TICK_RATE", "60"))

    # Seed for the default random source; unset means nondeterministic games
    RANDOM_SEED: int | None = _optional_int("PIXELBLASTER_SEED")

    # Escape relocation after a hit: "reset_to_start" or "nearest_safe"
    ESCAPE_POLICY: str = os.getenv("PIXELBLASTER_ESCAPE_POLICY", "reset_to_start")
    ESCAPE_DELAY_TICKS: int = int(os.getenv("PIXELBLASTER_ESCAPE_DELAY_TICKS", "0"))

    # High score file used by JsonScoreStore
    HIGH_SCORE_PATH: Path = Path(
        os.getenv("PIXELBLASTER_HIGH_SCORE_PATH", "pixelblaster_highscore.json")
    )

    # Logging
    VERBOSE: bool = bool(os.getenv("PIXELBLASTER_VERBOSE"))

    # Project Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    SCENARIOS_DIR: Path = PROJECT_ROOT / "examples" / "scenarios"

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors for unusable values."""
        if cls.TICK_RATE_HZ <= 0:
            raise ValueError(
                f"PIXELBLASTER_TICK_RATE must be positive, got {cls.TICK_RATE_HZ}"
            )

        allowed = ("reset_to_start", "nearest_safe")
        if cls.ESCAPE_POLICY not in allowed:
            raise ValueError(
                f"PIXELBLASTER_ESCAPE_POLICY must be one of {allowed}, "
                f"got '{cls.ESCAPE_POLICY}'"
            )

        if cls.ESCAPE_DELAY_TICKS < 0:
            raise ValueError(
                "PIXELBLASTER_ESCAPE_DELAY_TICKS cannot be negative"
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Pixel Blaster Configuration:",
            f"  Tick Rate: {cls.TICK_RATE_HZ} Hz",
            f"  Seed: {cls.RANDOM_SEED if cls.RANDOM_SEED is not None else 'random'}",
            f"  Escape Policy: {cls.ESCAPE_POLICY} (delay {cls.ESCAPE_DELAY_TICKS} ticks)",
            f"  High Score File: {cls.HIGH_SCORE_PATH}",
        ]
        return "\n".join(lines)
