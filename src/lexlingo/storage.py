from typing import Optional

from .database import get_db_connection


class LocalStorage:
    """Named-slot string storage on top of the SQLite `storage` table.

    Every call runs in its own transaction, so a slot is always read or
    written as a whole.
    """

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path

    def get_item(self, key: str) -> Optional[str]:
        conn = get_db_connection(self.db_path)
        try:
            row = conn.execute(
                "SELECT value FROM storage WHERE key = ?", (key,)
            ).fetchone()
        finally:
            conn.close()
        return row["value"] if row else None

    def set_item(self, key: str, value: str):
        conn = get_db_connection(self.db_path)
        with conn:
            conn.execute(
                """
                INSERT INTO storage (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value),
            )
        conn.close()

    def remove_item(self, key: str):
        conn = get_db_connection(self.db_path)
        with conn:
            conn.execute("DELETE FROM storage WHERE key = ?", (key,))
        conn.close()
