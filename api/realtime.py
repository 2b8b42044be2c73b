# api/realtime.py
from fastapi import APIRouter, WebSocket

router = APIRouter(tags=["realtime"])

def _frame_text(message: dict) -> str:
    text = message.get("text")
    if text is not None:
        return text
    return (message.get("bytes") or b"").decode("utf-8", errors="replace")

@router.websocket("/")
@router.websocket("/ws")
async def broadcast_socket(websocket: WebSocket):
    """Relay every frame from this peer to all other open peers. No auth, no schema."""
    registry = websocket.app.state.connections

    await websocket.accept()
    registry.add(websocket)
    print("🔌 New WebSocket connection")

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            text = _frame_text(message)
            print(f"📨 Received: {text}")
            await registry.broadcast(text, sender=websocket)
    finally:
        registry.remove(websocket)
        print("🔌 WebSocket connection closed")
