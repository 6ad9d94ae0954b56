from __future__ import annotations
import logging
import unicodedata
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Optional, Set, Union

from wordfreq import zipf_frequency

from .errors import DictionaryError

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = 'en'


class DictionaryService(ABC):
    """Answers whether a string is a real word in a given language."""

    def __init__(self, language: str = DEFAULT_LANGUAGE):
        self.language = language

    @abstractmethod
    def is_real_word(self, word: str, language: Optional[str] = None) -> bool:
        """language defaults to the service's own when None."""

    def is_valid(self, word: str) -> bool:
        return self.is_real_word(word, self.language)


class WordListDictionary(DictionaryService):
    """In-memory dictionary for a single language, backed by a word set."""

    def __init__(self, words: Iterable[str], language: str = DEFAULT_LANGUAGE):
        super().__init__(language)
        # Store lowercase words
        self._words: Set[str] = {unicodedata.normalize('NFC', w.strip().lower()) for w in words if w and w.strip()}

    @classmethod
    def from_file(cls, path: Union[str, Path], language: str = DEFAULT_LANGUAGE) -> 'WordListDictionary':
        src = Path(path)
        try:
            with src.open('r', encoding='utf-8') as infile:
                words = [line for line in infile]
        except OSError as exc:
            raise DictionaryError(f"Could not load dictionary from {src}") from exc
        dictionary = cls(words, language)
        logger.info("Loaded %d dictionary words from %s", len(dictionary), src)
        return dictionary

    def __len__(self) -> int:
        return len(self._words)

    def is_real_word(self, word: str, language: Optional[str] = None) -> bool:
        if not word:
            return False
        if (language or self.language) != self.language:
            return False
        return unicodedata.normalize('NFC', word.lower()) in self._words


class WordfreqDictionary(DictionaryService):
    """Treats any alphabetic word seen often enough in wordfreq's corpora as real."""

    def __init__(self, language: str = DEFAULT_LANGUAGE, min_zipf: float = 1.5):
        super().__init__(language)
        self.min_zipf = min_zipf

    def is_real_word(self, word: str, language: Optional[str] = None) -> bool:
        if not word or not word.isalpha():
            return False
        try:
            return zipf_frequency(word.lower(), language or self.language) >= self.min_zipf
        except LookupError:
            # wordfreq has no data for this language
            logger.warning("No word frequencies available for language %r", language)
            return False


def build_dictionary(config) -> DictionaryService:
    backend = getattr(config, 'DICTIONARY_BACKEND', 'wordfreq')
    language = getattr(config, 'LANGUAGE', DEFAULT_LANGUAGE)
    if backend == 'wordfreq':
        service: DictionaryService = WordfreqDictionary(language, getattr(config, 'WORDFREQ_MIN_ZIPF', 1.5))
    elif backend == 'wordlist':
        service = WordListDictionary.from_file(config.DICTIONARY_PATH, language)
    else:
        raise DictionaryError(f"Unknown dictionary backend {backend!r}")
    logger.info("Using %s dictionary (language=%s)", backend, language)
    return service
