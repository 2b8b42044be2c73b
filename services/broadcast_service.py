"""
Real-time broadcast relay.

'ConnectionRegistry' tracks the WebSocket connections currently open on this
process and fans every inbound message out to all of them except the sender.
Delivery is best effort: peers that are no longer open, or whose send fails,
are skipped and dropped from the registry. Nothing is persisted or replayed.
"""

# services/broadcast_service.py
from typing import Iterator, List, Optional

from fastapi import WebSocket
from starlette.websockets import WebSocketState

GOING_AWAY = 1001


def is_open(websocket: WebSocket) -> bool:
    return (
        websocket.client_state == WebSocketState.CONNECTED
        and websocket.application_state == WebSocketState.CONNECTED
    )


class ConnectionRegistry:
    def __init__(self):
        self._connections: List[WebSocket] = []

    def add(self, websocket: WebSocket) -> None:
        if websocket not in self._connections:
            self._connections.append(websocket)

    def remove(self, websocket: WebSocket) -> None:
        if websocket in self._connections:
            self._connections.remove(websocket)

    def __len__(self) -> int:
        return len(self._connections)

    def __iter__(self) -> Iterator[WebSocket]:
        return iter(list(self._connections))

    def __contains__(self, websocket: WebSocket) -> bool:
        return websocket in self._connections

    async def broadcast(self, message: str, sender: Optional[WebSocket] = None) -> int:
        """Send 'message' to every open peer except 'sender'. Returns how many sends succeeded."""
        delivered = 0
        for peer in list(self._connections):
            if peer is sender or not is_open(peer):
                continue
            try:
                await peer.send_text(message)
                delivered += 1
            except Exception:
                # Peer went away between the state check and the send
                self.remove(peer)
        return delivered

    async def close_all(self) -> None:
        for peer in list(self._connections):
            if is_open(peer):
                try:
                    await peer.close(code=GOING_AWAY)
                except Exception as e:
                    print(f"⚠️ Error closing WebSocket: {e}")
        self._connections.clear()
