import json
import logging
import time
from typing import Callable, List, Optional

import pandas as pd
from pydantic import ValidationError

from .config import settings
from .errors import StorageDecodeError
from .models import (
    AddResult,
    ImportResult,
    LoadResult,
    VocabularyEntry,
    WordRecord,
)
from .storage import LocalStorage

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["id", "word", "phonetic", "definition", "translation"]


def _now_ms() -> int:
    return int(time.time() * 1000)


def decode_entries(raw: str) -> List[VocabularyEntry]:
    """Parses a persisted blob; raises StorageDecodeError if it is unusable."""
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise StorageDecodeError(f"Invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise StorageDecodeError("Vocabulary blob is not a list")
    try:
        return [VocabularyEntry.model_validate(item) for item in data]
    except ValidationError as e:
        raise StorageDecodeError(f"Invalid vocabulary entry: {e}") from e


class VocabularyStore:
    """
    The saved-word list, newest first, kept as one JSON blob in a storage
    slot. Every mutation loads the whole list and writes the whole list back.
    """

    def __init__(
        self,
        storage: LocalStorage,
        key: Optional[str] = None,
        clock: Callable[[], int] = _now_ms,
    ):
        self.storage = storage
        self.key = key or settings.STORAGE_KEY
        self.clock = clock

    def read(self) -> LoadResult:
        raw = self.storage.get_item(self.key)
        if raw is None:
            return LoadResult(entries=[])
        try:
            return LoadResult(entries=decode_entries(raw))
        except StorageDecodeError as e:
            logger.warning(f"Discarding unreadable vocabulary in '{self.key}': {e}")
            return LoadResult(entries=[], recovered=True)

    def load(self) -> List[VocabularyEntry]:
        return self.read().entries

    def save(self, entries: List[VocabularyEntry]):
        blob = json.dumps([e.model_dump() for e in entries], ensure_ascii=False)
        self.storage.set_item(self.key, blob)

    def _next_id(self, entries: List[VocabularyEntry]) -> int:
        # ids are creation timestamps; bump past the newest so they stay unique
        latest = max((e.id for e in entries), default=0)
        return max(self.clock(), latest + 1)

    @staticmethod
    def contains(entries: List[VocabularyEntry], word: str) -> bool:
        needle = word.lower()
        return any(e.word.lower() == needle for e in entries)

    def add(self, record: WordRecord, translation: str = "") -> AddResult:
        entries = self.load()
        if self.contains(entries, record.word):
            return AddResult(added=False, entries=entries)

        entry = VocabularyEntry(
            id=self._next_id(entries),
            word=record.word,
            definition=record.definition,
            phonetic=record.phonetic,
            translation=translation or "",
        )
        entries = [entry] + entries
        self.save(entries)
        logger.info(f"Saved '{entry.word}' ({len(entries)} words)")
        return AddResult(added=True, entries=entries)

    def remove(self, entry_id: int) -> List[VocabularyEntry]:
        entries = [e for e in self.load() if e.id != entry_id]
        self.save(entries)
        return entries

    # --- CSV exchange ---
    def export_csv(self) -> str:
        entries = self.load()
        df = pd.DataFrame([e.model_dump() for e in entries], columns=CSV_COLUMNS)
        return df.to_csv(index=False)

    def import_csv(self, source) -> ImportResult:
        """
        Adds the rows of a CSV file (path or file-like) with at least a
        `word` column. Rows whose word is blank or already saved are skipped.
        """
        df = pd.read_csv(source, encoding="utf-8", dtype=str, keep_default_na=False)
        if "word" not in df.columns:
            raise ValueError("CSV file must have a 'word' column.")

        entries = self.load()
        added = skipped = 0
        for row in df.to_dict("records"):
            word = str(row.get("word", "")).strip()
            if not word or self.contains(entries, word):
                skipped += 1
                continue
            entry = VocabularyEntry(
                id=self._next_id(entries),
                word=word,
                definition=str(row.get("definition", "")).strip(),
                phonetic=str(row.get("phonetic", "")).strip(),
                translation=str(row.get("translation", "")).strip(),
            )
            entries = [entry] + entries
            added += 1

        if added:
            self.save(entries)
        logger.info(f"Imported {added} words from CSV, skipped {skipped}")
        return ImportResult(added=added, skipped=skipped, entries=entries)
