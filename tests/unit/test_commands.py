import pytest

from pavlov_rcon.models import commands
from pavlov_rcon.models.commands import Command, reply_type_for
from pavlov_rcon.models.replies import (
    BanListReply,
    BaseReply,
    InspectPlayerReply,
    RefreshListReply,
    ServerInfoReply,
)


class TestCommand:
    def test_line_without_parameters(self) -> None:
        assert Command("ServerInfo").to_line() == "ServerInfo\n"

    def test_line_with_parameters(self) -> None:
        assert Command("Kick", ("PlayerA", "cheating")).to_line() == "Kick PlayerA cheating\n"

    def test_empty_parameters_omit_space(self) -> None:
        assert Command("RotateMap", ()).to_line() == "RotateMap\n"

    def test_parameters_stored_as_tuple_of_str(self) -> None:
        cmd = Command("GiveCash", ["76561198", 500])  # type: ignore[arg-type]
        assert cmd.parameters == ("76561198", "500")

    def test_immutable(self) -> None:
        cmd = Command("ServerInfo")
        with pytest.raises(AttributeError):
            cmd.verb = "Kick"  # type: ignore[misc]

    def test_default_reply_type(self) -> None:
        assert Command("Kick", ("a",)).reply_type is BaseReply

    @pytest.mark.parametrize("verb", ["", "Server Info", "ServerInfo\n"])
    def test_invalid_verb(self, verb: str) -> None:
        with pytest.raises(ValueError):
            Command(verb)

    def test_parameter_with_newline(self) -> None:
        with pytest.raises(ValueError, match="line breaks"):
            Command("Kick", ("PlayerA\nServerInfo",))


class TestBuilders:
    def test_server_info(self) -> None:
        cmd = commands.server_info()
        assert cmd.to_line() == "ServerInfo\n"
        assert cmd.reply_type is ServerInfoReply

    def test_refresh_list(self) -> None:
        assert commands.refresh_list().reply_type is RefreshListReply

    def test_inspect_player(self) -> None:
        cmd = commands.inspect_player("76561198")
        assert cmd.to_line() == "InspectPlayer 76561198\n"
        assert cmd.reply_type is InspectPlayerReply

    def test_show_nametags(self) -> None:
        assert commands.show_nametags(True).to_line() == "Shownametags True\n"
        assert commands.show_nametags(False).to_line() == "Shownametags False\n"

    def test_numeric_parameters(self) -> None:
        assert commands.slap("76561198", 50).to_line() == "Slap 76561198 50\n"
        assert commands.give_team_cash(1, 2000).to_line() == "GiveTeamCash 1 2000\n"
        assert commands.switch_team("76561198", 0).to_line() == "SwitchTeam 76561198 0\n"

    def test_switch_map(self) -> None:
        assert commands.switch_map("UGC1758245796", "GUN").to_line() == "SwitchMap UGC1758245796 GUN\n"

    def test_ban_list(self) -> None:
        assert commands.ban_list().reply_type is BanListReply


class TestReplyTypes:
    def test_lookup_is_case_insensitive(self) -> None:
        assert reply_type_for("serverinfo") is ServerInfoReply
        assert reply_type_for("SERVERINFO") is ServerInfoReply

    def test_unknown_verb_falls_back(self) -> None:
        assert reply_type_for("Kick") is BaseReply

    def test_build_uses_registry(self) -> None:
        cmd = commands.build("RefreshList", [])
        assert cmd.reply_type is RefreshListReply
        assert cmd.to_line() == "RefreshList\n"
