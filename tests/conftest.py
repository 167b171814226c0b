import logging

import pytest
from fastapi.testclient import TestClient

from lexlingo.app import create_app
from lexlingo.config import settings
from lexlingo.database import init_db
from lexlingo.dependencies import get_dictionary, get_translator
from lexlingo.errors import NotFoundError, TranslationError
from lexlingo.models import WordRecord
from lexlingo.storage import LocalStorage
from lexlingo.vocabulary import VocabularyStore


class FakeClock:
    def __init__(self, now=1_700_000_000_000):
        self.now = now

    def __call__(self):
        return self.now


class FakeDictionary:
    def __init__(self, words):
        self.words = {w.word.lower(): w for w in words}
        self.requests = []

    def fetch_word(self, word):
        self.requests.append(word)
        try:
            return self.words[word.lower()]
        except KeyError:
            raise NotFoundError(f'No definition found for "{word}".')

    def fetch_random_word(self, rng=None):
        return self.fetch_word(next(iter(self.words)))


class FakeTranslator:
    def __init__(self, translations):
        self.translations = translations

    def translate(self, text, target):
        if text not in self.translations:
            raise TranslationError("Translation failed.")
        return self.translations[text]


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "DB_DIR", str(tmp_path / "db"))
    monkeypatch.setattr(settings, "LOG_DIR", str(tmp_path / "log"))
    monkeypatch.setattr(settings, "LOG_TO_DB", False)
    yield
    logger = logging.getLogger("lexlingo")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def storage():
    init_db()
    return LocalStorage()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(storage, clock):
    return VocabularyStore(storage, clock=clock)


@pytest.fixture
def cat():
    return WordRecord(
        word="cat",
        phonetic="/kæt/",
        definition="A small domesticated carnivorous mammal.",
        examples=["The cat sat on the mat."],
    )


@pytest.fixture
def dog():
    return WordRecord(
        word="dog",
        phonetic="/dɒɡ/",
        definition="A domesticated carnivorous mammal.",
        examples=[],
    )


@pytest.fixture
def fake_dictionary(cat, dog):
    return FakeDictionary([cat, dog])


@pytest.fixture
def fake_translator():
    return FakeTranslator({"cat": "gato", "dog": "perro"})


@pytest.fixture
def app(fake_dictionary, fake_translator):
    app = create_app()
    app.dependency_overrides[get_dictionary] = lambda: fake_dictionary
    app.dependency_overrides[get_translator] = lambda: fake_translator
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
