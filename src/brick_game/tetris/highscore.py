from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


class HighScoreStore:
    """Single persisted integer. A missing or unreadable file reads as 0.

    ``path=None`` gives a store that never touches the filesystem.
    """

    def __init__(self, path: Optional[Union[str, Path]] = "highscore.txt") -> None:
        self.path = Path(path) if path is not None else None

    def load(self) -> int:
        if self.path is None:
            return 0
        try:
            value = int(self.path.read_text().strip())
        except (OSError, ValueError) as exc:
            logger.debug("no high score read from %s: %s", self.path, exc)
            return 0
        return max(0, value)

    def save(self, score: int) -> bool:
        """Store ``score`` if it beats the stored value; True when written."""
        if self.path is None or score <= self.load():
            return False
        try:
            self.path.write_text(str(int(score)))
        except OSError as exc:
            logger.warning("could not write high score to %s: %s", self.path, exc)
            return False
        logger.info("new high score %d", score)
        return True
