from __future__ import annotations
import logging
import random
from typing import Callable, Optional, Sequence

import socketio
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .config import Config
from .dictionary import DictionaryService, build_dictionary
from .errors import SessionNotFound, StartupError
from .managers.session import SessionManager
from .routers import ws
from .schemas import SessionState, SubmitRequest, SubmitResponse, WordCheck
from .words import WordListSource

logger = logging.getLogger(__name__)


def create_app(
    config_class=Config,
    dictionary: Optional[DictionaryService] = None,
    word_source: Optional[Callable[[], Sequence[str]]] = None,
    rng: Optional[random.Random] = None,
) -> FastAPI:
    """Build the FastAPI app with its Socket.IO server attached.

    The word list and dictionary are loaded here so that a missing resource
    fails startup with a StartupError instead of surfacing on the first game.
    """
    logging.basicConfig(level=getattr(config_class, 'LOG_LEVEL', 'INFO'))

    try:
        if dictionary is None:
            dictionary = build_dictionary(config_class)
        if word_source is None:
            word_source = WordListSource(config_class.WORD_LIST_PATH)
        word_source()
    except StartupError:
        logger.exception("Could not start word scramble server")
        raise

    origins = getattr(config_class, 'CORS_ORIGINS', ['*'])
    sio = socketio.AsyncServer(async_mode='asgi', cors_allowed_origins=origins)
    app = FastAPI(title="Word Scramble Server", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    sessions = SessionManager(
        dictionary,
        word_source,
        language=getattr(config_class, 'LANGUAGE', None),
        sio=sio,
        rng=rng,
    )
    app.state.sessions = sessions
    app.state.dictionary = dictionary
    app.state.sio = sio
    app.state.ws_connections = {}
    # Mount Socket.IO ASGI application
    app.state.asgi_app = socketio.ASGIApp(sio, other_asgi_app=app)

    _register_routes(app, sessions, dictionary)
    app.include_router(ws.router, prefix='/ws')
    register_socketio_handlers(sio, sessions)
    return app


def _register_routes(app: FastAPI, sessions: SessionManager, dictionary: DictionaryService):
    @app.exception_handler(SessionNotFound)
    async def session_not_found(request: Request, exc: SessionNotFound):
        return JSONResponse(status_code=404, content={'detail': f"Session {exc.session_id} not found"})

    @app.get('/health')
    async def health():
        return {'status': 'ok'}

    @app.post('/sessions', status_code=201, response_model=SessionState)
    async def create_session():
        return sessions.create().to_state()

    @app.get('/sessions/{session_id}', response_model=SessionState)
    async def get_session(session_id: str):
        return sessions.get(session_id).to_state()

    @app.post('/sessions/{session_id}/words', response_model=SubmitResponse)
    async def submit_word(session_id: str, body: SubmitRequest):
        result = sessions.submit(session_id, body.word)
        await sessions.emit_result(session_id, result)
        return SubmitResponse(result=result, state=sessions.get(session_id).to_state())

    @app.post('/sessions/{session_id}/reset', response_model=SessionState)
    async def reset_session(session_id: str):
        state = sessions.reset(session_id)
        await sessions.emit_state(session_id)
        return state

    @app.delete('/sessions/{session_id}', status_code=204)
    async def delete_session(session_id: str):
        sessions.get(session_id)
        sessions.remove(session_id)
        return Response(status_code=204)

    # Dictionary validation REST endpoint
    @app.get('/dict/validate', response_model=WordCheck)
    async def validate_word(word: str, language: Optional[str] = None):
        language = language or dictionary.language
        valid = dictionary.is_real_word(word.strip().lower(), language)
        return WordCheck(word=word.strip().lower(), language=language, valid=valid)


def register_socketio_handlers(sio, sessions: SessionManager):
    """Bind Socket.IO events; each client sid owns at most one session."""

    async def _session_id(sid) -> Optional[str]:
        sess = await sio.get_session(sid)
        return sess.get('session_id') if sess else None

    @sio.event
    async def connect(sid, environ, auth=None):
        await sio.save_session(sid, {})

    @sio.event
    async def disconnect(sid, *args):
        session_id = await _session_id(sid)
        if session_id:
            sessions.remove(session_id)

    @sio.on('session:start')
    async def session_start(sid, *args):
        # Starting again replaces the previous session
        previous = await _session_id(sid)
        if previous:
            sessions.remove(previous)
            await sio.leave_room(sid, previous)
        session = sessions.create()
        await sio.save_session(sid, {'session_id': session.id})
        await sio.enter_room(sid, session.id)
        await sessions.emit_state(session.id)

    @sio.on('word:submit')
    async def word_submit(sid, payload=None):
        session_id = await _session_id(sid)
        if not session_id:
            return
        word = payload.get('word') if isinstance(payload, dict) else payload
        result = sessions.submit(session_id, str(word or ''))
        await sessions.emit_result(session_id, result)

    @sio.on('session:reset')
    async def session_reset(sid, *args):
        session_id = await _session_id(sid)
        if not session_id:
            return
        sessions.reset(session_id)
        await sessions.emit_state(session_id)


def create_asgi_app(config_class=Config):
    """Factory for uvicorn: uvicorn wordscramble.main:create_asgi_app --factory"""
    return create_app(config_class).state.asgi_app


def run():
    import uvicorn

    uvicorn.run('wordscramble.main:create_asgi_app', factory=True, host='0.0.0.0', port=8000)
