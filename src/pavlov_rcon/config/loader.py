from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from pavlov_rcon.config.schema import RconConfig, ServerConfig


class ConfigError(Exception):
    """Raised when config loading or validation fails."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


class ConfigLoader:
    """Reads a YAML file listing RCON servers and validates it."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> RconConfig:
        if not self.path.is_file():
            raise ConfigError(self.path, "Config file does not exist")

        try:
            raw = yaml.safe_load(self.path.read_text())
        except yaml.YAMLError as e:
            raise ConfigError(self.path, f"Invalid YAML: {e}") from e

        if raw is None:
            return RconConfig(servers=[])
        if not isinstance(raw, dict):
            raise ConfigError(self.path, "Expected a YAML mapping at top level")

        try:
            return RconConfig.model_validate(raw)
        except ValidationError as e:
            raise ConfigError(self.path, f"Validation error: {e}") from e

    def get_server(self, name: str | None = None) -> ServerConfig:
        """Return the named server, or the only one when ``name`` is omitted."""
        servers = self.load().servers
        if name is None:
            if len(servers) != 1:
                raise ConfigError(
                    self.path, f"{len(servers)} servers configured, choose one with --server"
                )
            return servers[0]
        for server in servers:
            if server.name == name:
                return server
        raise ConfigError(self.path, f"Unknown server: {name}")
