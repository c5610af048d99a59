"""
score_db.py: SQLite persistence for the best score.

Best effort only: storage errors are logged and swallowed so a broken
database can never interrupt the game loop.
"""

import logging
import sqlite3
from typing import Optional

from .constants import DB_FILE, BEST_SCORE_KEY

logger = logging.getLogger(__name__)


class ScoreStore:
    """Small key-value table holding the best score."""

    def __init__(self, db_file: str = DB_FILE, key: str = BEST_SCORE_KEY):
        self.key = key
        self.conn: Optional[sqlite3.Connection] = None
        try:
            self.conn = sqlite3.connect(db_file)
            self.setup()
        except sqlite3.Error as e:
            logger.warning("Score storage unavailable (%s): %s", db_file, e)
            self.conn = None

    def setup(self):
        """Creates the table if it doesn't exist."""
        self.conn.execute("""
            CREATE TABLE IF NOT EXISTS Settings (
                key TEXT PRIMARY KEY,
                value TEXT
            )
        """)
        self.conn.commit()

    def load_best(self) -> int:
        """Reads the stored best score. Missing or corrupt values read as 0."""
        if self.conn is None:
            return 0
        try:
            row = self.conn.execute(
                "SELECT value FROM Settings WHERE key=?", (self.key,)).fetchone()
        except sqlite3.Error as e:
            logger.warning("Could not read best score: %s", e)
            return 0
        if row is None:
            return 0
        try:
            return max(0, int(row[0]))
        except (TypeError, ValueError):
            logger.warning("Ignoring corrupt best score value %r", row[0])
            return 0

    def save_best(self, score: int) -> bool:
        """Stores the best score. Returns False if the write failed."""
        if self.conn is None:
            return False
        try:
            self.conn.execute(
                "INSERT OR REPLACE INTO Settings (key, value) VALUES (?, ?)",
                (self.key, str(score)))
            self.conn.commit()
        except sqlite3.Error as e:
            logger.warning("Could not save best score %d: %s", score, e)
            return False
        return True

    def close(self):
        if self.conn is not None:
            self.conn.close()
            self.conn = None
