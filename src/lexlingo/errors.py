class LexlingoError(Exception):
    """Base class for errors raised by the lexlingo core."""


class NotFoundError(LexlingoError):
    """The dictionary returned no usable entry for a word."""


class TranslationError(LexlingoError):
    """The translation call failed."""


class StorageDecodeError(LexlingoError):
    """The persisted vocabulary blob could not be parsed."""


class QuizStateError(LexlingoError):
    """An action is not allowed in the quiz session's current state."""
