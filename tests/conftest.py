import os
import random
import sys

import pytest
from fastapi.testclient import TestClient

# Ensure the repo root (containing the `wordscramble` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from wordscramble.dictionary import WordListDictionary
from wordscramble.game_logic import GameSession
from wordscramble.main import create_app

WORDS = [
    'silk', 'milk', 'work', 'worm', 'works', 'mist', 'mils', 'slim', 'owls', 'mow',
    'sow', 'row', 'low', 'rim', 'skim', 'worms', 'milks', 'silks',
]


class TestConfig:
    __test__ = False

    TESTING = True
    WORD_LIST_PATH = os.path.join(ROOT, 'wordscramble', 'data', 'start.txt')
    DICTIONARY_BACKEND = 'wordlist'
    DICTIONARY_PATH = os.path.join(ROOT, 'wordscramble', 'data', 'words.txt')
    LANGUAGE = 'en'
    CORS_ORIGINS = ['*']
    LOG_LEVEL = 'WARNING'


@pytest.fixture()
def dictionary():
    return WordListDictionary(WORDS)


@pytest.fixture()
def session(dictionary):
    game = GameSession(dictionary, lambda: ['silkworm'], rng=random.Random(0), session_id='test')
    game.start()
    return game


@pytest.fixture()
def app(dictionary):
    return create_app(TestConfig, dictionary=dictionary, word_source=lambda: ['silkworm'])


@pytest.fixture()
def client(app):
    return TestClient(app)
