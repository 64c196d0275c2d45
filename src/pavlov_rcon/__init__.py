"""Asyncio client for the Pavlov VR remote console (RCON) protocol."""

__version__ = "0.1.0"

from pavlov_rcon.client.session import RconSession  # noqa: E402
from pavlov_rcon.exceptions import (  # noqa: E402
    AuthenticationFailedError,
    CommandFailedError,
    CommandTimeoutError,
    MissingAuthenticationPromptError,
    NotConnectedError,
    RconError,
    UnexpectedRconResponseError,
)

__all__ = [
    "AuthenticationFailedError",
    "CommandFailedError",
    "CommandTimeoutError",
    "MissingAuthenticationPromptError",
    "NotConnectedError",
    "RconError",
    "RconSession",
    "UnexpectedRconResponseError",
    "__version__",
]
