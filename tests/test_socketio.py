import asyncio

import pytest

from wordscramble.main import register_socketio_handlers
from wordscramble.managers.session import SessionManager


class FakeSio:
    """Records emitted events and keeps per-sid sessions like socketio.AsyncServer."""

    def __init__(self):
        self.handlers = {}
        self.sessions = {}
        self.rooms = {}
        self.emitted = []

    def event(self, handler):
        self.handlers[handler.__name__] = handler
        return handler

    def on(self, name):
        def decorator(handler):
            self.handlers[name] = handler
            return handler
        return decorator

    async def emit(self, event, data=None, room=None, to=None):
        self.emitted.append((event, data, room or to))

    async def save_session(self, sid, data):
        self.sessions[sid] = data

    async def get_session(self, sid):
        return self.sessions.get(sid)

    async def enter_room(self, sid, room):
        self.rooms.setdefault(sid, set()).add(room)

    async def leave_room(self, sid, room):
        self.rooms.get(sid, set()).discard(room)

    def trigger(self, name, *args):
        return asyncio.run(self.handlers[name](*args))

    def events(self, name):
        return [data for event, data, _ in self.emitted if event == name]


@pytest.fixture()
def sio(dictionary):
    fake = FakeSio()
    manager = SessionManager(dictionary, lambda: ['silkworm'], sio=fake)
    register_socketio_handlers(fake, manager)
    fake.manager = manager
    fake.trigger('connect', 'sid1', {}, None)
    return fake


def test_start_creates_session_and_joins_room(sio):
    sio.trigger('session:start', 'sid1')
    session_id = sio.sessions['sid1']['session_id']
    assert session_id in sio.manager.sessions
    assert session_id in sio.rooms['sid1']
    state = sio.events('session:state')[-1]
    assert state['rootWord'] == 'silkworm'
    assert state['sessionId'] == session_id


def test_submit_emits_accepted_and_state(sio):
    sio.trigger('session:start', 'sid1')
    sio.trigger('word:submit', 'sid1', {'word': 'Silk'})
    accepted = sio.events('word:accepted')
    assert accepted[-1]['word'] == 'silk'
    assert accepted[-1]['score'] == 5
    assert sio.events('session:state')[-1]['score'] == 5


def test_submit_emits_rejection(sio):
    sio.trigger('session:start', 'sid1')
    sio.trigger('word:submit', 'sid1', 'ow')
    rejected = sio.events('word:rejected')
    assert rejected[-1]['reason'] == 'too short'
    assert sio.events('word:accepted') == []


def test_blank_submit_emits_nothing(sio):
    sio.trigger('session:start', 'sid1')
    count = len(sio.emitted)
    sio.trigger('word:submit', 'sid1', '  ')
    assert len(sio.emitted) == count


def test_submit_without_session_is_ignored(sio):
    sio.trigger('word:submit', 'sid1', 'silk')
    assert sio.emitted == []


def test_reset(sio):
    sio.trigger('session:start', 'sid1')
    sio.trigger('word:submit', 'sid1', 'silk')
    sio.trigger('session:reset', 'sid1')
    state = sio.events('session:state')[-1]
    assert state['score'] == 0
    assert state['usedWords'] == []


def test_restart_replaces_session(sio):
    sio.trigger('session:start', 'sid1')
    first = sio.sessions['sid1']['session_id']
    sio.trigger('session:start', 'sid1')
    second = sio.sessions['sid1']['session_id']
    assert first != second
    assert list(sio.manager.sessions) == [second]
    assert sio.rooms['sid1'] == {second}


def test_disconnect_drops_session(sio):
    sio.trigger('session:start', 'sid1')
    sio.trigger('disconnect', 'sid1')
    assert sio.manager.sessions == {}


def test_submit_without_payload_is_ignored(sio):
    sio.trigger('session:start', 'sid1')
    count = len(sio.emitted)
    sio.trigger('word:submit', 'sid1')
    assert len(sio.emitted) == count
