import os

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def _env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes", "on")


def _env_timeout(name: str):
    value = os.environ.get(name)
    return float(value) if value else None


class Settings:
    PROJECT_NAME: str = "lexlingo"
    DEBUG: bool = _env_flag("DEBUG")
    LOG_DIR: str = os.environ.get("LOG_DIR", "log")
    LOG_FILE: str = "lexlingo.log"
    LOG_TO_DB: bool = _env_flag("LOG_TO_DB")
    DB_DIR: str = os.environ.get("DB_DIR", "db")
    DB_FILE: str = "lexlingo.db"
    STORAGE_KEY: str = "vocabulary"
    DICTIONARY_BASE_URL: str = os.environ.get(
        "DICTIONARY_BASE_URL", "https://api.dictionaryapi.dev/api/v2/entries/en"
    )
    TRANSLATE_URL: str = os.environ.get(
        "TRANSLATE_URL", "https://libretranslate.com/translate"
    )
    TRANSLATE_API_KEY: str = os.environ.get("TRANSLATE_API_KEY", "")
    DEFAULT_TARGET_LANGUAGE: str = os.environ.get("DEFAULT_TARGET_LANGUAGE", "es")
    HTTP_TIMEOUT = _env_timeout("HTTP_TIMEOUT")
    SESSION_COOKIE_NAME: str = "lexlingo_session_id"
    SESSION_TIMEOUT_MINUTES: int = 120
    ROOT_PATH: str = os.environ.get("ROOT_PATH", "")
    TEMPLATE_DIR: str = os.path.join(BASE_DIR, "templates")
    STATIC_DIR: str = os.path.join(BASE_DIR, "static")


settings = Settings()
