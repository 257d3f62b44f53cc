"""
ScoreStore interface for pluggable high-score storage.

The simulation core never reads or writes storage. It only reports the current
score; a ScoreStore sitting outside the core compares that score against the
stored best and persists a new best when it is beaten.

Two included implementations:
1. InMemoryScoreStore - plain attribute, lost on exit (tests, prototyping)
2. JsonScoreStore - small JSON file on disk (single-player desktop use)

Usage pattern:
    store = JsonScoreStore("highscore.json")
    await store.initialize()
    high = await store.record_score(session.score)
    await store.close()
"""

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from .config import Config


class ScoreStore(ABC):
    """Abstract base class for high-score persistence.

    All methods are async so file or network backends never block the tick
    loop; the in-memory store simply returns immediately.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the backend (create directories, open connections)."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release backend resources."""
        pass

    @abstractmethod
    async def load_high_score(self) -> int:
        """Return the stored high score, 0 when nothing has been stored."""
        pass

    @abstractmethod
    async def save_high_score(self, score: int) -> None:
        """Unconditionally store ``score`` as the high score."""
        pass

    async def record_score(self, score: int) -> int:
        """Persist ``score`` if it beats the stored value; return the high score."""
        current = await self.load_high_score()
        if score > current:
            await self.save_high_score(score)
            return score
        return current


class InMemoryScoreStore(ScoreStore):
    """High score kept in process memory."""

    def __init__(self, initial: int = 0):
        self.high_score = initial

    async def initialize(self) -> None:
        pass

    async def close(self) -> None:
        # Keep the value so callers can inspect it after a run.
        pass

    async def load_high_score(self) -> int:
        return self.high_score

    async def save_high_score(self, score: int) -> None:
        self.high_score = score


class JsonScoreStore(ScoreStore):
    """High score stored as ``{"high_score": N}`` in a JSON file.

    File I/O runs in a worker thread (``asyncio.to_thread``). The value is
    cached after the first read. An unreadable or malformed file counts as no
    stored score and is overwritten by the next save.
    """

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path is not None else Config.HIGH_SCORE_PATH
        self._cached: Optional[int] = None

    async def initialize(self) -> None:
        await asyncio.to_thread(self.path.parent.mkdir, parents=True, exist_ok=True)

    async def close(self) -> None:
        return None

    async def load_high_score(self) -> int:
        if self._cached is None:
            self._cached = await asyncio.to_thread(self._read)
        return self._cached

    async def save_high_score(self, score: int) -> None:
        payload = json.dumps({"high_score": score}, indent=2)
        await asyncio.to_thread(self.path.write_text, payload, "utf-8")
        self._cached = score

    def _read(self) -> int:
        if not self.path.exists():
            return 0
        try:
            payload = json.loads(self.path.read_text("utf-8"))
            return max(0, int(payload.get("high_score", 0)))
        except (ValueError, TypeError, AttributeError):
            return 0
