import logging
import os
from logging.handlers import RotatingFileHandler

from lexlingo.app import setup_logging
from lexlingo.config import settings
from lexlingo.database import get_db_connection
from lexlingo.log_handler import SQLiteHandler


def test_file_handler_attached_once():
    setup_logging()
    logger = setup_logging()

    file_handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert os.path.isdir(settings.LOG_DIR)


def test_records_written_to_log_file():
    logger = setup_logging()
    logging.getLogger("lexlingo.vocabulary").info("saved a word")
    for handler in logger.handlers:
        handler.flush()

    with open(os.path.join(settings.LOG_DIR, settings.LOG_FILE), encoding="utf-8") as f:
        assert "INFO - saved a word" in f.read()


def test_sqlite_handler(monkeypatch):
    monkeypatch.setattr(settings, "LOG_TO_DB", True)
    logger = setup_logging()
    assert any(isinstance(h, SQLiteHandler) for h in logger.handlers)

    logging.getLogger("lexlingo.quiz").warning("quiz went sideways")

    conn = get_db_connection()
    rows = conn.execute("SELECT level, logger, message FROM logs").fetchall()
    conn.close()
    assert ("WARNING", "lexlingo.quiz", "quiz went sideways") in [tuple(r) for r in rows]
