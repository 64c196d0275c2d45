import asyncio
from pathlib import Path
from typing import NoReturn

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pavlov_rcon import __version__
from pavlov_rcon.client.session import DEFAULT_PORT
from pavlov_rcon.config.loader import ConfigError, ConfigLoader
from pavlov_rcon.config.schema import ServerConfig
from pavlov_rcon.exceptions import RconError
from pavlov_rcon.logging_config import configure_logging
from pavlov_rcon.models import commands
from pavlov_rcon.models.commands import Command, ReplyT

console = Console()

DEFAULT_CONFIG_PATH = Path("./rcon.yaml")


def _run_async(coro):
    """Run an async function from sync Click commands."""
    return asyncio.run(coro)


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{escape(message)}[/red]")
    raise SystemExit(1)


def _get_server(ctx: click.Context) -> ServerConfig:
    opts = ctx.obj
    try:
        if opts["host"]:
            if opts["password"] is None:
                raise click.UsageError("--password is required together with --host")
            server = ServerConfig(
                name=opts["host"],
                host=opts["host"],
                port=opts["port"] or DEFAULT_PORT,
                password=opts["password"],
                force_ipv4=opts["force_ipv4"],
            )
        else:
            server = ConfigLoader(Path(opts["config_path"])).get_server(opts["server"])
            if opts["port"] is not None:
                server = server.model_copy(update={"port": opts["port"]})
            if opts["force_ipv4"]:
                server = server.model_copy(update={"force_ipv4": True})
        if opts["timeout"] is not None:
            server = server.model_copy(update={"command_timeout": opts["timeout"]})
    except (ConfigError, ValidationError) as e:
        _fail(str(e))
    return server


def _call(ctx: click.Context, command: Command[ReplyT]) -> ReplyT:
    """Connect to the selected server, run one command and disconnect."""
    server = _get_server(ctx)

    async def run() -> ReplyT:
        session = server.to_session()
        try:
            await session.connect(timeout=server.connect_timeout)
            return await session.execute(command)
        finally:
            await session.close()

    try:
        return _run_async(run())
    except (RconError, OSError, ValueError) as e:
        _fail(str(e) or type(e).__name__)


@click.group()
@click.version_option(version=__version__, prog_name="pavlov-rcon")
@click.option("--config", "config_path", default=str(DEFAULT_CONFIG_PATH), type=click.Path(), help="Server config file")
@click.option("--server", default=None, help="Server name from the config file")
@click.option("--host", default=None, help="Connect to this host instead of a configured server")
@click.option("--port", default=None, type=int, help=f"RCON port (default {DEFAULT_PORT})")
@click.option("--password", default=None, help="RCON password (with --host)")
@click.option("--force-ipv4", is_flag=True, default=False, help="Only connect over IPv4")
@click.option("--timeout", default=None, type=float, help="Command reply timeout in seconds")
@click.option("--log-level", default="WARNING", help="Log level")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str,
    server: str | None,
    host: str | None,
    port: int | None,
    password: str | None,
    force_ipv4: bool,
    timeout: float | None,
    log_level: str,
) -> None:
    """Pavlov VR RCON client: send commands to a game server."""
    configure_logging(level=log_level)
    ctx.ensure_object(dict)
    ctx.obj.update(
        config_path=config_path,
        server=server,
        host=host,
        port=port,
        password=password,
        force_ipv4=force_ipv4,
        timeout=timeout,
    )


@cli.command()
@click.argument("verb")
@click.argument("params", nargs=-1)
@click.option("--raw", is_flag=True, default=False, help="Print the reply exactly as received")
@click.pass_context
def send(ctx: click.Context, verb: str, params: tuple[str, ...], raw: bool) -> None:
    """Send VERB with optional PARAMS and print the reply."""
    try:
        command = commands.build(verb, params)
    except ValueError as e:
        _fail(str(e))
    reply = _call(ctx, command)
    if raw:
        click.echo(reply.raw_reply)
    else:
        console.print_json(data=reply.model_dump(mode="json", by_alias=True))


@cli.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """Show the server's current map, mode and score."""
    reply = _call(ctx, commands.server_info())
    si = reply.server_info

    table = Table(title=si.server_name or "Server")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Map", si.map_label)
    table.add_row("Game mode", si.game_mode)
    table.add_row("Players", si.player_count)
    table.add_row("Round", f"{si.round} ({si.round_state})")
    if si.teams:
        table.add_row("Score", f"{si.team0_score} - {si.team1_score}")
    console.print(table)


@cli.command()
@click.pass_context
def players(ctx: click.Context) -> None:
    """List connected players."""
    reply = _call(ctx, commands.refresh_list())
    if not reply.player_list:
        console.print("No players connected.")
        return

    table = Table(title="Players")
    table.add_column("Username", style="cyan")
    table.add_column("Unique ID", style="magenta")
    for player in reply.player_list:
        table.add_row(player.username, player.unique_id)
    console.print(table)


@cli.command()
@click.pass_context
def validate(ctx: click.Context) -> None:
    """Validate the server config file."""
    path = Path(ctx.obj["config_path"])
    try:
        config = ConfigLoader(path).load()
    except ConfigError as e:
        _fail(f"invalid: {e}")

    for server in config.servers:
        console.print(
            f"[green]valid[/green]  {escape(server.name)}  {escape(server.host)}:{server.port}"
        )
    console.print(f"{len(config.servers)} server(s) in {escape(str(path))}")
