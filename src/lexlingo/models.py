from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Dictionary ---
class WordRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    word: str
    phonetic: str = ""
    definition: str = ""
    examples: List[str] = Field(default_factory=list, max_length=3)


class Sense(BaseModel):
    part_of_speech: str = ""
    definition: str = ""
    example: str = ""


# --- Vocabulary ---
class VocabularyEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    word: str
    definition: str = ""
    phonetic: str = ""
    translation: str = ""


class LoadResult(BaseModel):
    entries: List[VocabularyEntry]
    recovered: bool = False


class AddResult(BaseModel):
    added: bool
    entries: List[VocabularyEntry]


class ImportResult(BaseModel):
    added: int
    skipped: int
    entries: List[VocabularyEntry]


# --- Quiz ---
class QuizQuestion(BaseModel):
    word: str
    prompt: str
    correct_answer: str
    options: List[str]


class AnswerRecord(BaseModel):
    question_index: int
    word: str
    user_answer: str
    correct_answer: str
    is_correct: bool


class QuizSession(BaseModel):
    questions: List[QuizQuestion]
    current_index: int = 0
    score: int = 0
    answers: List[AnswerRecord] = Field(default_factory=list)

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def finished(self) -> bool:
        return self.current_index >= len(self.questions)

    @property
    def answer_revealed(self) -> bool:
        return not self.finished and any(
            a.question_index == self.current_index for a in self.answers
        )

    @property
    def status(self) -> str:
        if self.finished:
            return "finished"
        if self.answer_revealed:
            return "answer_revealed"
        return "in_progress"


class AnswerResult(BaseModel):
    is_correct: bool
    updated_score: int


class AdvanceResult(BaseModel):
    finished: bool


class QuizResult(BaseModel):
    correct_count: int
    total_questions: int
    score_percentage: int
    answers: List[AnswerRecord]


# --- Client state ---
class ClientState(BaseModel):
    current_word: Optional[WordRecord] = None
    current_translation: str = ""
    target_language: str = "es"
    quiz: Optional[QuizSession] = None
    last_seen: datetime = Field(default_factory=datetime.now)
