from pavlov_rcon.models.commands import Command
from pavlov_rcon.models.replies import (
    BanListReply,
    BaseReply,
    InspectPlayerReply,
    ItemListReply,
    MapListReply,
    RefreshListReply,
    ServerInfoReply,
)

__all__ = [
    "BanListReply",
    "BaseReply",
    "Command",
    "InspectPlayerReply",
    "ItemListReply",
    "MapListReply",
    "RefreshListReply",
    "ServerInfoReply",
]
