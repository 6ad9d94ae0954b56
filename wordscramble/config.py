import os
from pathlib import Path

DATA_DIR = Path(__file__).resolve().parent / 'data'


class Config:
    # Newline-delimited pool of root words
    WORD_LIST_PATH = os.environ.get('WORD_LIST_PATH') or str(DATA_DIR / 'start.txt')
    # 'wordfreq' or 'wordlist'
    DICTIONARY_BACKEND = os.environ.get('DICTIONARY_BACKEND', 'wordfreq')
    # Only read by the 'wordlist' backend
    DICTIONARY_PATH = os.environ.get('DICTIONARY_PATH') or str(DATA_DIR / 'words.txt')
    LANGUAGE = os.environ.get('LANGUAGE', 'en')
    # Minimum Zipf frequency for the wordfreq backend to call something a word
    WORDFREQ_MIN_ZIPF = float(os.environ.get('WORDFREQ_MIN_ZIPF', '1.5'))
    CORS_ORIGINS = [o.strip() for o in os.environ.get('CORS_ORIGINS', '*').split(',') if o.strip()]
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
