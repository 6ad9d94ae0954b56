from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Optional, Union

from .config import Config
from .errors import WordListError

logger = logging.getLogger(__name__)

# Used when the word list loads but holds no usable words
FALLBACK_ROOT_WORD = 'silkworm'


def load_word_list(path: Optional[Union[str, Path]] = None) -> List[str]:
    """Read a newline-delimited word list, lowercased, with blank lines dropped.

    Raises WordListError when the file cannot be read at all.
    """
    src = Path(path or Config.WORD_LIST_PATH)
    try:
        text = src.read_text(encoding='utf-8')
    except OSError as exc:
        raise WordListError(f"Could not load word list from {src}") from exc
    words = [line.strip().lower() for line in text.split('\n')]
    words = [w for w in words if w]
    logger.info("Loaded %d root words from %s", len(words), src)
    return words


class WordListSource:
    """Loads the root word pool once and serves the cached copy afterwards."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = path
        self._words: Optional[List[str]] = None

    def __call__(self) -> List[str]:
        if self._words is None:
            self._words = load_word_list(self.path)
        return list(self._words)
