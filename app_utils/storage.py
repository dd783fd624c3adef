import logging
import os
from typing import Optional

from sqlalchemy import create_engine, text

logger = logging.getLogger(__name__)

DATA_DIR = "data"
DB_PATH = os.path.join(DATA_DIR, "habits.db")


class KeyValueStorage:
    """
    String key -> string value storage in a single SQLite (or any SQLAlchemy) table.
    No versioning, no locking: the last set() wins.
    """

    def __init__(self, url=None):
        if url is None:
            os.makedirs(DATA_DIR, exist_ok=True)
            url = f"sqlite:///{DB_PATH}"
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        self.engine = create_engine(url, echo=False, connect_args=connect_args)

    def init_db(self):
        with self.engine.begin() as conn:
            conn.execute(text("""
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
            """))

    def get(self, key: str) -> Optional[str]:
        with self.engine.connect() as conn:
            row = conn.execute(text("SELECT value FROM kv WHERE key = :key"), {"key": key}).fetchone()
        if not row:
            return None
        return row[0]

    def set(self, key: str, value: str) -> bool:
        with self.engine.begin() as conn:
            conn.execute(text("""
                INSERT INTO kv(key, value) VALUES(:key, :value)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
            """), {"key": key, "value": value})
        logger.debug("Stored %d chars under %r", len(value), key)
        return True

    def dispose(self):
        self.engine.dispose()
