import logging
from typing import Optional

from .database import get_db_connection


class SQLiteHandler(logging.Handler):
    """
    Writes lexlingo log records to the SQLite `logs` table, one row per
    record, tagged with the emitting module's logger name.
    """

    def __init__(self, db_path: Optional[str] = None, level=logging.INFO):
        super().__init__(level)
        self.db_path = db_path

    def emit(self, record):
        try:
            conn = get_db_connection(self.db_path)
            with conn:
                conn.execute(
                    "INSERT INTO logs (level, logger, message) VALUES (?, ?, ?)",
                    (record.levelname, record.name, self.format(record)),
                )
            conn.close()
        except Exception:
            self.handleError(record)
