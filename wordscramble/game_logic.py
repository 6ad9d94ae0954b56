from __future__ import annotations
import logging
import random
import unicodedata
from collections import Counter
from typing import Callable, List, Optional, Sequence, Tuple

from .dictionary import DictionaryService
from .schemas import SessionState, SubmissionResult, UsedWord
from .words import FALLBACK_ROOT_WORD, WordListSource

logger = logging.getLogger(__name__)

MIN_WORD_LENGTH = 3

# reason -> (title, message); '{root}' is filled in with the session's root word
REJECTIONS = {
    'duplicate': ('Word used already', 'Be more original'),
    'too short': ('Word not long enough', f'The word must be at least {MIN_WORD_LENGTH} characters'),
    'is root word': ('Word not possible', "You can't use the root word!"),
    'not spellable from root': ('Word not possible', "You can't spell that word from '{root}'!"),
    'not a real word': ('Word not recognized', "You can't just make them up, you know!"),
}


def normalize(word: str) -> str:
    # NFC so a precomposed letter counts once for length and spelling
    return unicodedata.normalize('NFC', word.strip().lower())


def is_original(word: str, used_words: Sequence[str]) -> bool:
    return word not in used_words


def is_long_enough(word: str) -> bool:
    return len(word) >= MIN_WORD_LENGTH


def is_not_root(word: str, root_word: str) -> bool:
    return word != root_word


def is_possible(word: str, root_word: str) -> bool:
    """True if every letter of word can be taken from a distinct letter of root_word."""
    available = Counter(root_word)
    needed = Counter(word)
    return all(available[letter] >= count for letter, count in needed.items())


class GameSession:
    """One player's game: a root word, the words found so far and the score.

    The word source is called on every start/reset and must raise (for example
    WordListError) when no list can be obtained; the session never picks a root
    word without one.
    """

    def __init__(
        self,
        dictionary: DictionaryService,
        word_source: Optional[Callable[[], Sequence[str]]] = None,
        language: Optional[str] = None,
        rng: Optional[random.Random] = None,
        session_id: Optional[str] = None,
    ):
        self.id = session_id
        self.dictionary = dictionary
        self.word_source = word_source or WordListSource()
        self.language = language or dictionary.language
        self.rng = rng or random.Random()
        self.root_word: str = ''
        self._used_words: List[str] = []
        self.score: int = 0

    @property
    def used_words(self) -> Tuple[str, ...]:
        return tuple(self._used_words)

    @property
    def started(self) -> bool:
        return bool(self.root_word)

    def start(self) -> str:
        # Load before touching state so a failed load leaves the session as it was
        words = [w for w in (normalize(w) for w in self.word_source()) if w]
        if words:
            root_word = self.rng.choice(words)
        else:
            logger.warning("Word list is empty, falling back to %r", FALLBACK_ROOT_WORD)
            root_word = FALLBACK_ROOT_WORD
        self.root_word = root_word
        self._used_words = []
        self.score = 0
        logger.debug("Session %s started with root word %r", self.id, self.root_word)
        return self.root_word

    reset = start

    def _check(self, word: str) -> Optional[str]:
        """Return the first failing rule's reason, or None if word is acceptable."""
        if not is_original(word, self._used_words):
            return 'duplicate'
        if not is_long_enough(word):
            return 'too short'
        if not is_not_root(word, self.root_word):
            return 'is root word'
        if not is_possible(word, self.root_word):
            return 'not spellable from root'
        if not self.dictionary.is_real_word(word, self.language):
            return 'not a real word'
        return None

    def submit(self, candidate: str) -> SubmissionResult:
        if not self.started:
            raise RuntimeError("Session has not been started")
        word = normalize(candidate)
        if not word:
            return SubmissionResult(word=word, ignored=True, score=self.score)

        reason = self._check(word)
        if reason:
            title, message = REJECTIONS[reason]
            logger.debug("Rejected %r for root %r: %s", word, self.root_word, reason)
            return SubmissionResult(
                word=word,
                reason=reason,
                title=title,
                message=message.format(root=self.root_word),
                score=self.score,
            )

        points = 1 + len(word)
        self._used_words.insert(0, word)
        self.score += points
        logger.debug("Accepted %r for root %r (+%d)", word, self.root_word, points)
        return SubmissionResult(word=word, accepted=True, points=points, score=self.score)

    def to_state(self) -> SessionState:
        return SessionState(
            sessionId=self.id,
            rootWord=self.root_word,
            usedWords=[UsedWord(word=w, length=len(w)) for w in self._used_words],
            score=self.score,
            language=self.language,
        )
