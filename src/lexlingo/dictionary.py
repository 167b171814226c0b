import logging
import random
from typing import Any, List, Optional
from urllib.parse import quote

import requests

from .config import settings
from .errors import NotFoundError
from .models import Sense, WordRecord

logger = logging.getLogger(__name__)

MAX_EXAMPLES = 3

FALLBACK_WORDS = [
    "serendipity",
    "ephemeral",
    "eloquent",
    "resilient",
    "curious",
    "harmony",
    "journey",
    "whisper",
    "brilliant",
    "gentle",
    "horizon",
    "courage",
    "wander",
    "vivid",
    "tranquil",
    "abundant",
    "candid",
    "diligent",
    "nostalgia",
    "sincere",
]


def _first_phonetic(entry: dict) -> str:
    phonetic = entry.get("phonetic")
    if phonetic:
        return str(phonetic)
    phonetics = entry.get("phonetics")
    if isinstance(phonetics, list) and phonetics and isinstance(phonetics[0], dict):
        return str(phonetics[0].get("text") or "")
    return ""


def flatten_senses(entry: dict) -> List[Sense]:
    """Flattens meanings[].definitions[] into one ordered list."""
    senses = []
    for meaning in entry.get("meanings") or []:
        if not isinstance(meaning, dict):
            continue
        part_of_speech = str(meaning.get("partOfSpeech") or "")
        for item in meaning.get("definitions") or []:
            if not isinstance(item, dict):
                continue
            senses.append(
                Sense(
                    part_of_speech=part_of_speech,
                    definition=str(item.get("definition") or ""),
                    example=str(item.get("example") or ""),
                )
            )
    return senses


def normalize_entries(payload: Any, word: str = "") -> WordRecord:
    """
    Builds a WordRecord from the dictionary's raw JSON payload.

    Only the first entry is used. Raises NotFoundError when the payload is
    not a non-empty list.
    """
    if not isinstance(payload, list) or not payload:
        raise NotFoundError(f'No definition found for "{word}".')
    entry = payload[0]
    if not isinstance(entry, dict):
        raise NotFoundError(f'No definition found for "{word}".')

    senses = flatten_senses(entry)
    examples = [s.example for s in senses if s.example][:MAX_EXAMPLES]

    return WordRecord(
        word=str(entry.get("word") or word),
        phonetic=_first_phonetic(entry),
        definition=senses[0].definition if senses else "",
        examples=examples,
    )


class DictionaryClient:
    """Looks words up in the public dictionary service."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.DICTIONARY_BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT

    def fetch_word(self, word: str) -> WordRecord:
        word = (word or "").strip()
        if not word:
            raise NotFoundError("Please enter a word.")

        url = f"{self.base_url}/{quote(word, safe='')}"
        r = self.session.get(url, timeout=self.timeout)
        try:
            payload = r.json()
        except ValueError:
            logger.warning(f"Dictionary returned a non-JSON body for {word!r}")
            raise NotFoundError(f'No definition found for "{word}".')

        record = normalize_entries(payload, word)
        logger.info(f"Looked up {record.word!r}")
        return record

    def fetch_random_word(self, rng=None) -> WordRecord:
        word = (rng or random).choice(FALLBACK_WORDS)
        return self.fetch_word(word)
