from __future__ import annotations
from pydantic import BaseModel
from typing import List, Literal, Optional

RejectionReason = Literal[
    'duplicate',
    'too short',
    'is root word',
    'not spellable from root',
    'not a real word',
]

class SubmitRequest(BaseModel):
    word: str

class SubmissionResult(BaseModel):
    word: str
    accepted: bool = False
    # Empty input after normalizing; nothing happened
    ignored: bool = False
    reason: Optional[RejectionReason] = None
    title: Optional[str] = None
    message: Optional[str] = None
    points: int = 0
    score: int = 0

class UsedWord(BaseModel):
    word: str
    length: int

class SessionState(BaseModel):
    sessionId: Optional[str] = None
    rootWord: str
    usedWords: List[UsedWord] = []
    score: int = 0
    language: str = 'en'

class SubmitResponse(BaseModel):
    result: SubmissionResult
    state: SessionState

class WordCheck(BaseModel):
    word: str
    language: str
    valid: bool
