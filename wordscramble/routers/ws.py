import json

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ..errors import SessionNotFound

router = APIRouter()

async def _broadcast(connections: list, message: dict):
    for conn in list(connections):
        await conn.send_json(message)

@router.websocket("/{session_id}")
async def websocket_endpoint(websocket: WebSocket, session_id: str):
    await websocket.accept()
    sessions = websocket.app.state.sessions
    # {session_id: [WebSocket, ...]}, one registry per app
    connections = websocket.app.state.ws_connections.setdefault(session_id, [])

    session = sessions.get_or_create(session_id)
    connections.append(websocket)

    try:
        # Send initial state to player
        await websocket.send_json({"type": "init", **session.to_state().model_dump()})
        while True:
            text = await websocket.receive_text()
            try:
                data = json.loads(text)
            except ValueError:
                await websocket.send_json({"type": "error", "error": "Message is not valid JSON"})
                continue
            kind = data.get("type") if isinstance(data, dict) else None
            try:
                if kind == "submit":
                    result = sessions.submit(session_id, str(data.get("word") or ""))
                    await websocket.send_json({"type": "result", **result.model_dump()})
                    if result.accepted:
                        state = sessions.get(session_id).to_state()
                        await _broadcast(connections, {"type": "state", **state.model_dump()})
                elif kind == "reset":
                    state = sessions.reset(session_id)
                    await _broadcast(connections, {"type": "state", **state.model_dump()})
                else:
                    await websocket.send_json({"type": "error", "error": f"Unknown message type {kind!r}"})
            except SessionNotFound:
                await websocket.send_json({"type": "error", "error": f"Session {session_id} not found"})
                await websocket.close(code=1008)
                return
    except WebSocketDisconnect:
        pass
    finally:
        connections.remove(websocket)
        if not connections:
            websocket.app.state.ws_connections.pop(session_id, None)
