import asyncio

from starlette.websockets import WebSocketState

from services.broadcast_service import ConnectionRegistry


class FakeSocket:
    def __init__(self, name, fail_on_send=False):
        self.name = name
        self.client_state = WebSocketState.CONNECTED
        self.application_state = WebSocketState.CONNECTED
        self.fail_on_send = fail_on_send
        self.received = []
        self.close_code = None

    async def send_text(self, data):
        if self.fail_on_send:
            raise RuntimeError("socket is gone")
        self.received.append(data)

    async def close(self, code=1000):
        self.close_code = code
        self.client_state = WebSocketState.DISCONNECTED
        self.application_state = WebSocketState.DISCONNECTED


def _registry(*sockets):
    registry = ConnectionRegistry()
    for socket in sockets:
        registry.add(socket)
    return registry


def test_broadcast_reaches_everyone_but_the_sender():
    a, b, c = FakeSocket("a"), FakeSocket("b"), FakeSocket("c")
    registry = _registry(a, b, c)

    delivered = asyncio.run(registry.broadcast("hello", sender=a))

    assert delivered == 2
    assert a.received == []
    assert b.received == ["hello"]
    assert c.received == ["hello"]


def test_broadcast_skips_peers_that_are_not_open():
    a, b, c = FakeSocket("a"), FakeSocket("b"), FakeSocket("c")
    c.client_state = WebSocketState.DISCONNECTED
    registry = _registry(a, b, c)

    asyncio.run(registry.broadcast("hello", sender=a))

    assert b.received == ["hello"]
    assert c.received == []


def test_failed_send_is_swallowed_and_peer_dropped():
    a, b, broken = FakeSocket("a"), FakeSocket("b"), FakeSocket("broken", fail_on_send=True)
    registry = _registry(a, broken, b)

    delivered = asyncio.run(registry.broadcast("hello", sender=a))

    assert delivered == 1
    assert b.received == ["hello"]
    assert broken not in registry
    assert len(registry) == 2


def test_removed_peer_gets_nothing():
    a, b, c = FakeSocket("a"), FakeSocket("b"), FakeSocket("c")
    registry = _registry(a, b, c)

    registry.remove(c)
    asyncio.run(registry.broadcast("second", sender=a))

    assert b.received == ["second"]
    assert c.received == []


def test_add_is_idempotent_and_remove_tolerates_unknown():
    a = FakeSocket("a")
    registry = _registry(a, a)
    registry.remove(FakeSocket("stranger"))

    assert len(registry) == 1
    assert list(registry) == [a]


def test_close_all_closes_and_clears():
    a, b = FakeSocket("a"), FakeSocket("b")
    registry = _registry(a, b)

    asyncio.run(registry.close_all())

    assert a.close_code == 1001
    assert b.close_code == 1001
    assert len(registry) == 0


def test_websocket_relay_end_to_end(client, app):
    registry = app.state.connections

    with client.websocket_connect("/") as a, client.websocket_connect("/") as b:
        with client.websocket_connect("/") as c:
            a.send_text("hello")
            assert b.receive_text() == "hello"
            assert c.receive_text() == "hello"

            # a only sees b's message, so "hello" was never echoed back to it
            b.send_text("ping")
            assert a.receive_text() == "ping"
            assert c.receive_text() == "ping"

        assert len(registry) == 2

        a.send_text("second")
        assert b.receive_text() == "second"

    assert len(registry) == 0


def test_websocket_relays_binary_frames_as_text(client):
    with client.websocket_connect("/ws") as a, client.websocket_connect("/ws") as b:
        a.send_bytes("héllo".encode("utf-8"))
        assert b.receive_text() == "héllo"


def test_websocket_needs_no_authentication(client):
    with client.websocket_connect("/") as a, client.websocket_connect("/") as b:
        a.send_text('{"any": "shape"}')
        assert b.receive_text() == '{"any": "shape"}'
