from typing import Optional

from fastapi import Cookie, Depends, Response

from .config import settings
from .dictionary import DictionaryClient
from .globals import client_states, dictionary_client, translation_client
from .models import ClientState
from .storage import LocalStorage
from .translation import TranslationClient
from .vocabulary import VocabularyStore


def get_session_id(
    session_id: Optional[str] = Cookie(None, alias=settings.SESSION_COOKIE_NAME)
) -> Optional[str]:
    return session_id


def get_client_state(
    response: Response, session_id: Optional[str] = Depends(get_session_id)
) -> ClientState:
    state = client_states.get(session_id)
    if state is None:
        new_id, state = client_states.create()
        response.set_cookie(
            key=settings.SESSION_COOKIE_NAME,
            value=new_id,
            httponly=True,
            samesite="lax",
        )
    return state


def get_vocab_store() -> VocabularyStore:
    return VocabularyStore(LocalStorage())


def get_dictionary() -> DictionaryClient:
    return dictionary_client


def get_translator() -> TranslationClient:
    return translation_client
