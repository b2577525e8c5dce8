# cocktailbot/api/ws.py

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from cocktailbot.ws.manager import ws_manager

router = APIRouter(tags=["ws"])


@router.websocket("/ws/admin")
async def ws_admin(ws: WebSocket):
    """Machine events for the touchscreen and the admin page.

    Push only; anything the client sends is treated as keep-alive.
    """
    await ws_manager.connect(ws)
    try:
        while True:
            await ws.receive_text()
    except WebSocketDisconnect:
        ws_manager.disconnect(ws)
    except Exception:
        ws_manager.disconnect(ws)
