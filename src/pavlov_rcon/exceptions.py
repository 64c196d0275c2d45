"""Error kinds raised by the RCON client."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pavlov_rcon.models.replies import BaseReply


class RconError(Exception):
    """Base class for all RCON client errors."""


class NotConnectedError(RconError):
    """Raised when an operation needs a live connection and there is none."""

    def __init__(self, host: str, port: int) -> None:
        self.host = host
        self.port = port
        super().__init__(f"Not connected to {host}:{port}")


class MissingAuthenticationPromptError(RconError):
    """The server did not open the session with the password prompt."""

    def __init__(self, host: str, port: int, received: str) -> None:
        self.host = host
        self.port = port
        self.received = received
        super().__init__(
            f"{host}:{port} did not send the password prompt (got {received!r})"
        )


class AuthenticationFailedError(RconError):
    """The server rejected the password hash."""

    def __init__(self, host: str, port: int, received: str) -> None:
        self.host = host
        self.port = port
        self.received = received
        super().__init__(f"Authentication with {host}:{port} failed (got {received!r})")


class CommandTimeoutError(RconError):
    """No complete reply arrived before the command deadline."""

    def __init__(self, host: str, port: int, timeout: float) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout
        super().__init__(f"No reply from {host}:{port} within {timeout:g}s")


class UnexpectedRconResponseError(RconError):
    """The reply was not decodable or named a different command."""

    def __init__(self, raw_reply: str, cause: Exception | None = None) -> None:
        self.raw_reply = raw_reply
        self.cause = cause
        message = f"Unexpected RCON response: {raw_reply!r}"
        if cause is not None:
            message = f"{message} ({cause})"
        super().__init__(message)


class CommandFailedError(RconError):
    """A command could not be completed, or the server reported it unsuccessful.

    ``cause`` is set when the failure came from I/O, a timeout or an
    unexpected response. It is ``None`` when the server answered with
    ``Successful: false``; ``reply`` then holds that reply.
    """

    def __init__(
        self,
        command: str,
        parameters: Sequence[str] = (),
        cause: Exception | None = None,
        reply: BaseReply | None = None,
    ) -> None:
        self.command = command
        self.parameters = tuple(parameters)
        self.cause = cause
        self.reply = reply
        line = " ".join((command, *self.parameters))
        if cause is not None:
            message = f"Command '{line}' failed: {cause}"
        else:
            message = f"Command '{line}' was not successful"
        super().__init__(message)
