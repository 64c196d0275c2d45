from __future__ import annotations

import asyncio
import hashlib
import json
import threading
from pathlib import Path

import pytest

from pavlov_rcon.client.session import RconSession

PASSWORD = "secret"


def _encode(fragment: bytes | str | dict) -> bytes:
    if isinstance(fragment, bytes):
        return fragment
    if isinstance(fragment, str):
        return fragment.encode("utf-8")
    return json.dumps(fragment).encode("utf-8")


class FakeRconServer:
    """In-process server speaking the Pavlov RCON handshake and reply framing.

    Replies are registered per verb as a list of fragments; fragments are
    written separately with a short pause in between so the client sees them
    in different reads.
    """

    def __init__(self, password: str = PASSWORD) -> None:
        self.password_hash = hashlib.md5(password.encode("utf-8")).hexdigest()
        self.prompt = b"Password: "
        self.close_after_prompt = False
        self.auth_line: str | None = None
        self.close_after_command = False
        self.fragment_delay = 0.05
        self.replies: dict[str, list[bytes]] = {}
        self.received_hashes: list[str] = []
        self.received_lines: list[str] = []
        self.connections = 0
        self.open_connections = 0
        self.port = 0
        self._server: asyncio.Server | None = None
        self._writers: set[asyncio.StreamWriter] = set()

    def reply(self, verb: str, *fragments: bytes | str | dict) -> None:
        self.replies[verb.lower()] = [_encode(f) for f in fragments]

    async def start(self) -> None:
        self._server = await asyncio.start_server(self._handle, "127.0.0.1", 0)
        self.port = self._server.sockets[0].getsockname()[1]

    async def stop(self) -> None:
        for writer in list(self._writers):
            writer.close()
        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()

    async def _handle(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        self.connections += 1
        self.open_connections += 1
        self._writers.add(writer)
        try:
            await self._serve(reader, writer)
        except (asyncio.IncompleteReadError, ConnectionError):
            pass
        finally:
            self.open_connections -= 1
            self._writers.discard(writer)
            writer.close()

    async def _serve(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        writer.write(self.prompt)
        await writer.drain()
        if self.close_after_prompt:
            return

        received = (await reader.readexactly(32)).decode()
        self.received_hashes.append(received)
        if self.auth_line is not None:
            auth_line = self.auth_line
        elif received == self.password_hash:
            auth_line = "Authenticated=1"
        else:
            auth_line = "Authenticated=0"
        writer.write(f"{auth_line}\n".encode())
        await writer.drain()
        if auth_line != "Authenticated=1":
            return

        while True:
            data = await reader.readline()
            if not data:
                return
            line = data.decode()
            self.received_lines.append(line)
            if self.close_after_command:
                return
            verb = line.split(" ", 1)[0].strip().lower()
            for i, fragment in enumerate(self.replies.get(verb, [])):
                if i:
                    await asyncio.sleep(self.fragment_delay)
                writer.write(fragment)
                await writer.drain()


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
async def rcon_server():
    server = FakeRconServer()
    await server.start()
    yield server
    await server.stop()


@pytest.fixture
async def session(rcon_server: FakeRconServer):
    rcon = RconSession(
        "127.0.0.1", rcon_server.port, password=PASSWORD, command_timeout=1.0
    )
    yield rcon
    await rcon.close()


@pytest.fixture
def threaded_rcon_server():
    """A FakeRconServer running on its own event loop thread, for sync callers."""
    server = FakeRconServer()
    loop = asyncio.new_event_loop()
    thread = threading.Thread(target=loop.run_forever, daemon=True)
    thread.start()
    asyncio.run_coroutine_threadsafe(server.start(), loop).result(timeout=5)
    yield server
    asyncio.run_coroutine_threadsafe(server.stop(), loop).result(timeout=5)
    loop.call_soon_threadsafe(loop.stop)
    thread.join(timeout=5)
    loop.close()
