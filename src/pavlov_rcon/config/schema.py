from __future__ import annotations

import os

from pydantic import BaseModel, field_validator, model_validator

from pavlov_rcon.client.session import DEFAULT_COMMAND_TIMEOUT, DEFAULT_PORT, RconSession


class ServerConfig(BaseModel):
    """Connection settings for a single RCON server."""

    name: str
    host: str
    port: int = DEFAULT_PORT
    password: str | None = None
    password_env: str | None = None
    force_ipv4: bool = False
    command_timeout: float = DEFAULT_COMMAND_TIMEOUT
    connect_timeout: float = 5.0

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not (0 < v < 65536):
            raise ValueError("'port' must be between 1 and 65535")
        return v

    @field_validator("command_timeout", "connect_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v

    @model_validator(mode="after")
    def validate_password_source(self) -> "ServerConfig":
        if (self.password is None) == (self.password_env is None):
            raise ValueError("exactly one of 'password' or 'password_env' is required")
        return self

    def resolve_password(self) -> str:
        if self.password is not None:
            return self.password
        value = os.environ.get(self.password_env or "")
        if value is None:
            raise ValueError(f"environment variable '{self.password_env}' is not set")
        return value

    def to_session(self) -> RconSession:
        return RconSession(
            self.host,
            self.port,
            password=self.resolve_password(),
            force_ipv4=self.force_ipv4,
            command_timeout=self.command_timeout,
            name=self.name,
        )


class RconConfig(BaseModel):
    """Top-level configuration file with a ``servers`` list."""

    servers: list[ServerConfig]

    @model_validator(mode="after")
    def validate_unique_names(self) -> "RconConfig":
        names = [s.name for s in self.servers]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"duplicate server names: {', '.join(duplicates)}")
        return self
