import random
from abc import ABC, abstractmethod
from typing import List, Optional

from .errors import QuizStateError
from .models import (
    AdvanceResult,
    AnswerRecord,
    AnswerResult,
    QuizQuestion,
    QuizResult,
    QuizSession,
    VocabularyEntry,
)

NO_TRANSLATION = "(no translation saved)"
MIN_QUIZ_WORDS = 2
MAX_DISTRACTORS = 3


def shuffle(items: list, rng=None) -> list:
    """Fisher-Yates shuffle in place; returns the same list."""
    rng = rng or random
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


def answer_for(entry: VocabularyEntry) -> str:
    return entry.translation or NO_TRANSLATION


def make_prompt(word: str) -> str:
    return f'What is the translation of "{word}"?'


# --- Strategy Pattern: Quiz Generators ---
class QuizGenerator(ABC):
    """Abstract Base Class for different quiz generation strategies."""

    def __init__(self, rng=None):
        self.rng = rng or random

    @abstractmethod
    def generate(self, entries: List[VocabularyEntry]) -> List[QuizQuestion]:
        pass

    def _generate_options(self, correct: str, pool: List[str]) -> List[str]:
        """Takes the first three of the shuffled pool; repeats are kept."""
        candidates = shuffle([p for p in pool if p != correct], self.rng)
        return shuffle([correct] + candidates[:MAX_DISTRACTORS], self.rng)


class TranslationQuizGenerator(QuizGenerator):
    """Standard mode: one question per saved word, asking for its translation."""

    def generate(self, entries: List[VocabularyEntry]) -> List[QuizQuestion]:
        if len(entries) < MIN_QUIZ_WORDS:
            return []

        questions = []
        for i, entry in enumerate(entries):
            correct = answer_for(entry)
            others = [e.translation for j, e in enumerate(entries) if j != i]
            questions.append(
                QuizQuestion(
                    word=entry.word,
                    prompt=make_prompt(entry.word),
                    correct_answer=correct,
                    options=self._generate_options(correct, others),
                )
            )
        return shuffle(questions, self.rng)


class QuizFactory:
    """Factory to select the appropriate generator."""

    @staticmethod
    def create(mode: str = "standard", rng=None) -> QuizGenerator:
        if mode == "standard":
            return TranslationQuizGenerator(rng)
        raise ValueError(f"Unknown quiz mode: {mode}")


# --- Session transitions ---
def build_session(
    entries: List[VocabularyEntry], rng=None, mode: str = "standard"
) -> QuizSession:
    questions = QuizFactory.create(mode, rng).generate(list(entries))
    return QuizSession(questions=questions)


def current_question(session: QuizSession) -> Optional[QuizQuestion]:
    if session.finished:
        return None
    return session.questions[session.current_index]


def record_answer(session: QuizSession, selected: str) -> AnswerResult:
    question = current_question(session)
    if question is None:
        raise QuizStateError("The quiz is already finished.")
    if session.answer_revealed:
        raise QuizStateError("This question has already been answered.")

    is_correct = selected == question.correct_answer
    if is_correct:
        session.score += 1
    session.answers.append(
        AnswerRecord(
            question_index=session.current_index,
            word=question.word,
            user_answer=selected,
            correct_answer=question.correct_answer,
            is_correct=is_correct,
        )
    )
    return AnswerResult(is_correct=is_correct, updated_score=session.score)


def advance(session: QuizSession) -> AdvanceResult:
    if not session.finished:
        session.current_index += 1
    return AdvanceResult(finished=session.finished)


def quiz_result(session: QuizSession) -> QuizResult:
    total = session.total_questions
    return QuizResult(
        correct_count=session.score,
        total_questions=total,
        score_percentage=round((session.score / total) * 100) if total > 0 else 0,
        answers=session.answers,
    )
