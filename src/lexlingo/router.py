import logging
from typing import Optional

import requests
from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile
from fastapi.responses import HTMLResponse

from .config import settings
from .dependencies import (
    get_client_state,
    get_dictionary,
    get_session_id,
    get_translator,
    get_vocab_store,
)
from .dictionary import DictionaryClient
from .errors import NotFoundError, QuizStateError, TranslationError
from .globals import client_states, templates
from .models import ClientState, QuizSession
from .quiz import advance, build_session, current_question, quiz_result, record_answer
from .state import set_current_word
from .translation import SUPPORTED_LANGUAGES, TranslationClient
from .vocabulary import VocabularyStore

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(response: Response, status_code: int, message: str) -> dict:
    # status is set on the shared response so a freshly issued cookie survives
    response.status_code = status_code
    return {"error": message}


def _word_view(state: ClientState) -> dict:
    return {
        "word": state.current_word,
        "translation": state.current_translation,
        "target_language": state.target_language,
    }


def _quiz_view(session: QuizSession) -> dict:
    question = current_question(session)
    record = None
    if session.answer_revealed:
        record = session.answers[-1]
    return {
        "status": session.status,
        "current_index": session.current_index,
        "total_questions": session.total_questions,
        "score": session.score,
        "question": (
            {
                "word": question.word,
                "prompt": question.prompt,
                "options": question.options,
            }
            if question
            else None
        ),
        "answer_record": record,
    }


# --- Pages ---
@router.get("/", response_class=HTMLResponse)
async def home(request: Request):
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "languages": SUPPORTED_LANGUAGES,
            "default_language": settings.DEFAULT_TARGET_LANGUAGE,
        },
    )


@router.get("/api/languages")
async def get_languages():
    return [{"code": code, "name": name} for code, name in SUPPORTED_LANGUAGES.items()]


# --- Word lookup and translation ---
def _lookup(response: Response, state: ClientState, fetch) -> dict:
    try:
        record = fetch()
    except NotFoundError as e:
        logger.info(f"Lookup miss: {e}")
        return _error(response, 404, str(e))
    except requests.RequestException as e:
        logger.warning(f"Dictionary request failed: {e}")
        return _error(response, 502, "The dictionary service is unavailable.")
    set_current_word(state, record)
    return _word_view(state)


@router.get("/api/word/random")
def random_word(
    response: Response,
    state: ClientState = Depends(get_client_state),
    dictionary: DictionaryClient = Depends(get_dictionary),
):
    return _lookup(response, state, dictionary.fetch_random_word)


@router.get("/api/word/{word}")
def search_word(
    word: str,
    response: Response,
    state: ClientState = Depends(get_client_state),
    dictionary: DictionaryClient = Depends(get_dictionary),
):
    return _lookup(response, state, lambda: dictionary.fetch_word(word))


@router.post("/api/translate")
def translate_current_word(
    response: Response,
    lang: Optional[str] = Form(None),
    state: ClientState = Depends(get_client_state),
    translator: TranslationClient = Depends(get_translator),
):
    if state.current_word is None:
        return _error(response, 400, "Look up a word first.")
    lang = lang or state.target_language
    if lang not in SUPPORTED_LANGUAGES:
        return _error(response, 400, f"Unsupported language: {lang}")

    try:
        translated = translator.translate(state.current_word.word, lang)
    except TranslationError as e:
        return _error(response, 502, str(e))

    state.target_language = lang
    state.current_translation = translated
    return _word_view(state)


# --- Vocabulary ---
@router.get("/api/vocabulary")
def list_vocabulary(store: VocabularyStore = Depends(get_vocab_store)):
    result = store.read()
    return {"entries": result.entries, "recovered": result.recovered}


@router.post("/api/vocabulary")
def save_current_word(
    response: Response,
    state: ClientState = Depends(get_client_state),
    store: VocabularyStore = Depends(get_vocab_store),
):
    if state.current_word is None:
        return _error(response, 400, "Look up a word first.")
    result = store.add(state.current_word, state.current_translation)
    payload = result.model_dump()
    if not result.added:
        payload["message"] = f'"{state.current_word.word}" is already saved.'
    return payload


@router.delete("/api/vocabulary/{entry_id}")
def delete_entry(entry_id: int, store: VocabularyStore = Depends(get_vocab_store)):
    return {"entries": store.remove(entry_id)}


@router.get("/api/vocabulary/export")
def export_vocabulary(store: VocabularyStore = Depends(get_vocab_store)):
    return Response(
        content=store.export_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="vocabulary.csv"'},
    )


@router.post("/api/vocabulary/import")
def import_vocabulary(
    response: Response,
    file: UploadFile = File(...),
    store: VocabularyStore = Depends(get_vocab_store),
):
    try:
        result = store.import_csv(file.file)
    except ValueError as e:
        logger.warning(f"CSV import of {file.filename} failed: {e}")
        return _error(response, 400, f"Could not import {file.filename}: {e}")
    return result


# --- Quiz ---
@router.post("/api/quiz/start")
def start_quiz(
    response: Response,
    mode: str = Form("standard"),
    state: ClientState = Depends(get_client_state),
    store: VocabularyStore = Depends(get_vocab_store),
):
    try:
        session = build_session(store.load(), mode=mode)
    except ValueError as e:
        return _error(response, 400, str(e))
    if not session.questions:
        state.quiz = None
        return _error(response, 400, "Add at least 2 words to start a quiz.")

    state.quiz = session
    logger.info(f"Quiz started with {session.total_questions} questions [Mode: {mode}]")
    return _quiz_view(session)


@router.get("/api/quiz")
def get_quiz(response: Response, state: ClientState = Depends(get_client_state)):
    if state.quiz is None:
        return _error(response, 404, "No quiz in progress.")
    return _quiz_view(state.quiz)


@router.post("/api/quiz/answer")
def submit_answer(
    response: Response,
    answer: str = Form(...),
    state: ClientState = Depends(get_client_state),
):
    if state.quiz is None:
        return _error(response, 404, "No quiz in progress.")
    try:
        result = record_answer(state.quiz, answer)
    except QuizStateError as e:
        return _error(response, 400, str(e))

    payload = result.model_dump()
    payload["correct_answer"] = state.quiz.answers[-1].correct_answer
    return payload


@router.post("/api/quiz/next")
def next_question(response: Response, state: ClientState = Depends(get_client_state)):
    if state.quiz is None:
        return _error(response, 404, "No quiz in progress.")
    result = advance(state.quiz)
    payload = _quiz_view(state.quiz)
    payload["finished"] = result.finished
    return payload


@router.get("/api/quiz/result")
def get_result(response: Response, state: ClientState = Depends(get_client_state)):
    if state.quiz is None:
        return _error(response, 404, "No quiz in progress.")
    if not state.quiz.finished:
        return _error(response, 400, "The quiz is not finished yet.")
    return quiz_result(state.quiz)


@router.post("/api/reset")
async def reset_session(response: Response, session_id: str = Depends(get_session_id)):
    client_states.discard(session_id)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"status": "success"}
