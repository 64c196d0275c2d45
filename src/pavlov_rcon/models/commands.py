"""Command values and builders for the Pavlov VR RCON verbs."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from pavlov_rcon.models.replies import (
    BanListReply,
    BaseReply,
    InspectPlayerReply,
    ItemListReply,
    MapListReply,
    RefreshListReply,
    ServerInfoReply,
)

ReplyT = TypeVar("ReplyT", bound=BaseReply)


@dataclass(frozen=True)
class Command(Generic[ReplyT]):
    """A single command line and the reply model it decodes into."""

    verb: str
    parameters: tuple[str, ...] = ()
    reply_type: type[ReplyT] = field(default=BaseReply, compare=False)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if not self.verb or " " in self.verb:
            raise ValueError(f"Invalid command verb: {self.verb!r}")
        # Accept any sequence but store a tuple.
        object.__setattr__(self, "parameters", tuple(str(p) for p in self.parameters))
        for part in (self.verb, *self.parameters):
            if "\n" in part or "\r" in part:
                raise ValueError(f"Command parts must not contain line breaks: {part!r}")

    def to_line(self) -> str:
        """Serialize to the wire form ``verb[ p1 p2 ...]\\n``."""
        if self.parameters:
            return f"{self.verb} {' '.join(self.parameters)}\n"
        return f"{self.verb}\n"


REPLY_TYPES: dict[str, type[BaseReply]] = {
    "serverinfo": ServerInfoReply,
    "refreshlist": RefreshListReply,
    "inspectplayer": InspectPlayerReply,
    "banlist": BanListReply,
    "maplist": MapListReply,
    "itemlist": ItemListReply,
}


def reply_type_for(verb: str) -> type[BaseReply]:
    """Return the reply model registered for ``verb``, or ``BaseReply``."""
    return REPLY_TYPES.get(verb.lower(), BaseReply)


def build(verb: str, parameters: Sequence[str] = ()) -> Command[BaseReply]:
    """Build a command for any verb, picking its registered reply model."""
    return Command(verb, tuple(parameters), reply_type_for(verb))


def server_info() -> Command[ServerInfoReply]:
    return Command("ServerInfo", reply_type=ServerInfoReply)


def refresh_list() -> Command[RefreshListReply]:
    return Command("RefreshList", reply_type=RefreshListReply)


def inspect_player(unique_id: str) -> Command[InspectPlayerReply]:
    return Command("InspectPlayer", (unique_id,), InspectPlayerReply)


def ban_list() -> Command[BanListReply]:
    return Command("Banlist", reply_type=BanListReply)


def map_list() -> Command[MapListReply]:
    return Command("MapList", reply_type=MapListReply)


def item_list() -> Command[ItemListReply]:
    return Command("ItemList", reply_type=ItemListReply)


def kick(unique_id: str) -> Command[BaseReply]:
    return Command("Kick", (unique_id,))


def ban(unique_id: str) -> Command[BaseReply]:
    return Command("Ban", (unique_id,))


def unban(unique_id: str) -> Command[BaseReply]:
    return Command("Unban", (unique_id,))


def kill_player(unique_id: str) -> Command[BaseReply]:
    return Command("KillPlayer", (unique_id,))


def slap(unique_id: str, damage: int) -> Command[BaseReply]:
    return Command("Slap", (unique_id, str(damage)))


def switch_team(unique_id: str, team_id: int) -> Command[BaseReply]:
    return Command("SwitchTeam", (unique_id, str(team_id)))


def give_item(unique_id: str, item: str) -> Command[BaseReply]:
    return Command("GiveItem", (unique_id, item))


def give_cash(unique_id: str, amount: int) -> Command[BaseReply]:
    return Command("GiveCash", (unique_id, str(amount)))


def give_team_cash(team_id: int, amount: int) -> Command[BaseReply]:
    return Command("GiveTeamCash", (str(team_id), str(amount)))


def switch_map(map_id: str, game_mode: str) -> Command[BaseReply]:
    return Command("SwitchMap", (map_id, game_mode))


def rotate_map() -> Command[BaseReply]:
    return Command("RotateMap")


def show_nametags(enabled: bool) -> Command[BaseReply]:
    return Command("Shownametags", ("True" if enabled else "False",))
