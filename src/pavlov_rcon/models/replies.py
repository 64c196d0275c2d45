"""Pydantic models for RCON reply payloads.

Field aliases follow the server's PascalCase JSON keys. Unknown keys are
ignored so a newer server can add fields without breaking decoding.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _ReplyModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class BaseReply(_ReplyModel):
    """Fields every reply carries."""

    command: str = Field(alias="Command")
    successful: bool = Field(alias="Successful")
    raw_reply: str = Field(default="", exclude=True)


class ServerInfo(_ReplyModel):
    map_label: str = Field(default="", alias="MapLabel")
    game_mode: str = Field(default="", alias="GameMode")
    server_name: str = Field(default="", alias="ServerName")
    teams: bool = Field(default=False, alias="Teams")
    team0_score: int = Field(default=0, alias="Team0Score")
    team1_score: int = Field(default=0, alias="Team1Score")
    round: int = Field(default=0, alias="Round")
    round_state: str = Field(default="", alias="RoundState")
    player_count: str = Field(default="", alias="PlayerCount")


class ServerInfoReply(BaseReply):
    server_info: ServerInfo = Field(alias="ServerInfo")


class PlayerListEntry(_ReplyModel):
    username: str = Field(alias="Username")
    unique_id: str = Field(alias="UniqueId")


class RefreshListReply(BaseReply):
    player_list: list[PlayerListEntry] = Field(default_factory=list, alias="PlayerList")


class PlayerInfo(_ReplyModel):
    player_name: str = Field(default="", alias="PlayerName")
    unique_id: str = Field(default="", alias="UniqueId")
    kda: str = Field(default="", alias="KDA")
    score: int = Field(default=0, alias="Score")
    dead: bool = Field(default=False, alias="Dead")
    cash: int = Field(default=0, alias="Cash")
    team_id: int = Field(default=0, alias="TeamId")


class InspectPlayerReply(BaseReply):
    player_info: PlayerInfo = Field(alias="PlayerInfo")


class BanListReply(BaseReply):
    ban_list: list[str] = Field(default_factory=list, alias="BanList")


class MapListEntry(_ReplyModel):
    map_id: str = Field(alias="MapId")
    game_mode: str = Field(alias="GameMode")


class MapListReply(BaseReply):
    map_list: list[MapListEntry] = Field(default_factory=list, alias="MapList")


class ItemListReply(BaseReply):
    item_list: list[str] = Field(default_factory=list, alias="ItemList")
