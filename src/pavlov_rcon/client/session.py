"""Authenticated RCON session over a single TCP connection.

The protocol is strictly one command in flight at a time. Callers must not
issue concurrent commands on the same session.
"""

from __future__ import annotations

import asyncio
import codecs
import hashlib
import socket
from collections.abc import Sequence
from typing import TypeVar

from pydantic import ValidationError

from pavlov_rcon.client.framing import is_complete_block
from pavlov_rcon.exceptions import (
    AuthenticationFailedError,
    CommandFailedError,
    CommandTimeoutError,
    MissingAuthenticationPromptError,
    NotConnectedError,
    UnexpectedRconResponseError,
)
from pavlov_rcon.logging_config import get_logger
from pavlov_rcon.models.commands import Command
from pavlov_rcon.models.replies import BaseReply

PASSWORD_PROMPT = "Password: "
AUTHENTICATED = "Authenticated=1"

DEFAULT_PORT = 9100
DEFAULT_COMMAND_TIMEOUT = 2.0
DISCONNECT_GRACE_SECONDS = 0.5
READ_CHUNK_SIZE = 1024

ReplyT = TypeVar("ReplyT", bound=BaseReply)


class RconSession:
    """A single connection to a Pavlov VR RCON server.

    The password is hashed once here and the plaintext is not kept.
    ``connect()`` may be called again at any time to replace the current
    connection with a fresh one.
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        *,
        password: str,
        force_ipv4: bool = False,
        command_timeout: float = DEFAULT_COMMAND_TIMEOUT,
        name: str | None = None,
    ) -> None:
        self.name = name
        self.host = host
        self.port = port
        self.force_ipv4 = force_ipv4
        self.command_timeout = command_timeout
        self._password_hash = hashlib.md5(password.encode("utf-8")).hexdigest()
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None
        self._log = get_logger(server=name, host=host, port=port)

    async def __aenter__(self) -> RconSession:
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @property
    def connected(self) -> bool:
        return (
            self._writer is not None
            and self._reader is not None
            and not self._writer.is_closing()
            and not self._reader.at_eof()
        )

    async def connect(self, timeout: float | None = None) -> None:
        """Open a new connection and authenticate, replacing any previous one.

        ``timeout`` bounds the TCP connect plus the handshake. Cancelling the
        calling task cancels the connect as well. On failure the session is
        left disconnected.
        """
        await self._teardown()
        self._log.debug("connecting", force_ipv4=self.force_ipv4)
        self._reader, self._writer = await asyncio.wait_for(
            self._open_and_authenticate(), timeout=timeout
        )
        self._log.info("rcon session authenticated")

    async def close(self) -> None:
        """Close the connection. Safe to call when not connected."""
        await self._teardown()

    async def send_command(
        self,
        command: str,
        parameters: Sequence[str] | None = None,
        reply_type: type[ReplyT] = BaseReply,  # type: ignore[assignment]
    ) -> ReplyT:
        """Send ``command`` and decode its reply into ``reply_type``.

        Raises ``NotConnectedError`` without doing any I/O when the session
        is not connected, and ``CommandFailedError`` for every other failure,
        including a reply reporting ``Successful: false``.
        """
        return await self.execute(Command(command, tuple(parameters or ()), reply_type))

    async def send_text_command(
        self, command: str, parameters: Sequence[str] | None = None
    ) -> str:
        """Send ``command`` and return the raw text of its successful reply."""
        reply = await self.send_command(command, parameters)
        return reply.raw_reply

    async def execute(self, command: Command[ReplyT]) -> ReplyT:
        """Send a prebuilt command and decode into its reply type."""
        reader, writer = self._reader, self._writer
        if reader is None or writer is None or not self.connected:
            raise NotConnectedError(self.host, self.port)

        try:
            writer.write(command.to_line().encode("utf-8"))
            await asyncio.wait_for(writer.drain(), timeout=self.command_timeout)
            self._log.debug("command sent", command=command.verb, parameters=command.parameters)
            reply = await asyncio.wait_for(
                self._read_reply(reader, command), timeout=self.command_timeout
            )
        except asyncio.TimeoutError as e:
            timeout_error = CommandTimeoutError(self.host, self.port, self.command_timeout)
            timeout_error.__cause__ = e
            raise CommandFailedError(
                command.verb, command.parameters, timeout_error
            ) from timeout_error
        except Exception as e:
            raise CommandFailedError(command.verb, command.parameters, e) from e

        if not reply.successful:
            self._log.debug("command unsuccessful", command=command.verb)
            raise CommandFailedError(command.verb, command.parameters, reply=reply)
        return reply

    async def _open_and_authenticate(
        self,
    ) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
        family = socket.AF_INET if self.force_ipv4 else socket.AF_UNSPEC
        reader, writer = await asyncio.open_connection(self.host, self.port, family=family)
        try:
            await self._authenticate(reader, writer)
        except BaseException:
            writer.close()
            raise
        return reader, writer

    async def _authenticate(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        try:
            prompt = await reader.readexactly(len(PASSWORD_PROMPT))
        except asyncio.IncompleteReadError as e:
            raise MissingAuthenticationPromptError(
                self.host, self.port, e.partial.decode("utf-8", "replace")
            ) from e

        received = prompt.decode("utf-8", "replace")
        if received != PASSWORD_PROMPT:
            raise MissingAuthenticationPromptError(self.host, self.port, received)

        writer.write(self._password_hash.encode("ascii"))
        await writer.drain()

        line = (await reader.readline()).decode("utf-8", "replace").rstrip("\r\n")
        if line != AUTHENTICATED:
            raise AuthenticationFailedError(self.host, self.port, line)

    async def _read_reply(self, reader: asyncio.StreamReader, command: Command[ReplyT]) -> ReplyT:
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        text = ""
        while not is_complete_block(text):
            data = await reader.read(READ_CHUNK_SIZE)
            if not data:
                # StreamReader.read() only returns b"" at end of stream.
                raise NotConnectedError(self.host, self.port)
            text += decoder.decode(data)

        self._log.debug("reply received", command=command.verb, size=len(text))
        return self._decode_reply(text, command)

    def _decode_reply(self, text: str, command: Command[ReplyT]) -> ReplyT:
        try:
            reply = command.reply_type.model_validate_json(text)
        except ValidationError as e:
            raise UnexpectedRconResponseError(text, e) from e

        if reply.command.casefold() != command.verb.casefold():
            raise UnexpectedRconResponseError(text)

        reply.raw_reply = text
        return reply

    async def _teardown(self) -> None:
        writer = self._writer
        self._reader = None
        self._writer = None
        if writer is None:
            return
        try:
            writer.close()
            await asyncio.wait_for(writer.wait_closed(), timeout=DISCONNECT_GRACE_SECONDS)
        except Exception as e:
            self._log.warning("failed to close previous connection", error=str(e))
