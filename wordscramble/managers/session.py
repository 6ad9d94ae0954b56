from __future__ import annotations
import logging
import random
import uuid
from typing import Callable, Dict, Optional, Sequence

from ..dictionary import DictionaryService
from ..errors import SessionNotFound
from ..game_logic import GameSession
from ..schemas import SessionState, SubmissionResult

logger = logging.getLogger(__name__)


class SessionManager:
    def __init__(
        self,
        dictionary: DictionaryService,
        word_source: Callable[[], Sequence[str]],
        language: Optional[str] = None,
        sio=None,
        rng: Optional[random.Random] = None,
    ):
        self.dictionary = dictionary
        self.word_source = word_source
        self.language = language
        self.sio = sio
        self.rng = rng
        self.sessions: Dict[str, GameSession] = {}

    def create(self, session_id: Optional[str] = None) -> GameSession:
        session_id = session_id or uuid.uuid4().hex
        session = GameSession(
            self.dictionary,
            self.word_source,
            language=self.language,
            rng=self.rng,
            session_id=session_id,
        )
        session.start()
        self.sessions[session_id] = session
        logger.info("Created session %s", session_id)
        return session

    def get(self, session_id: str) -> GameSession:
        session = self.sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def get_or_create(self, session_id: str) -> GameSession:
        if session_id not in self.sessions:
            return self.create(session_id)
        return self.sessions[session_id]

    def submit(self, session_id: str, word: str) -> SubmissionResult:
        return self.get(session_id).submit(word)

    def reset(self, session_id: str) -> SessionState:
        session = self.get(session_id)
        session.reset()
        return session.to_state()

    def remove(self, session_id: str) -> None:
        if self.sessions.pop(session_id, None) is not None:
            logger.info("Removed session %s", session_id)

    async def emit_state(self, session_id: str):
        if not self.sio:
            return
        state = self.get(session_id).to_state()
        await self.sio.emit('session:state', state.model_dump(), room=session_id)

    async def emit_result(self, session_id: str, result: SubmissionResult):
        if not self.sio or result.ignored:
            return
        event = 'word:accepted' if result.accepted else 'word:rejected'
        await self.sio.emit(event, result.model_dump(), room=session_id)
        if result.accepted:
            await self.emit_state(session_id)
