import logging
from typing import Optional

import requests

from .config import settings
from .errors import TranslationError

logger = logging.getLogger(__name__)

SOURCE_LANGUAGE = "en"

SUPPORTED_LANGUAGES = {
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "nl": "Dutch",
    "ru": "Russian",
    "ja": "Japanese",
    "ko": "Korean",
    "zh": "Chinese",
    "ar": "Arabic",
    "hi": "Hindi",
}


class TranslationClient:
    def __init__(
        self,
        endpoint: Optional[str] = None,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.endpoint = endpoint or settings.TRANSLATE_URL
        self.api_key = api_key if api_key is not None else settings.TRANSLATE_API_KEY
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT

    def translate(self, text: str, target: str) -> str:
        payload = {"q": text, "source": SOURCE_LANGUAGE, "target": target, "format": "text"}
        if self.api_key:
            payload["api_key"] = self.api_key
        try:
            r = self.session.post(
                self.endpoint,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"Translation request failed for {text!r}: {e}")
            raise TranslationError("Translation failed.") from e

        if not r.ok:
            logger.warning(f"Translation service answered {r.status_code} for {text!r}")
            raise TranslationError("Translation failed.")

        try:
            translated = r.json().get("translatedText")
        except (ValueError, AttributeError):
            translated = None
        if not isinstance(translated, str):
            raise TranslationError("Translation failed.")
        return translated
