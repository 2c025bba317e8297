"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from adapters.monday_board import MondayBoardLookup
from adapters.partition_table import resolve_partitions
from cli.ui_components import build_partitions_table
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import ConfigurationError
from core.domain.models import Partition

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_monday(settings: AppSettings, partitions: tuple[Partition, ...]) -> tuple[bool, str, dict[int, str]]:
    """Query `me` and the names of the configured boards."""

    board_ids = sorted({p.partition_id for p in partitions})
    try:
        async with MondayBoardLookup(settings) as lookup:
            me = await lookup.whoami()
            boards = await lookup.list_boards(board_ids)
    except Exception as exc:
        return False, str(exc), {}

    names: dict[int, str] = {}
    for board in boards:
        try:
            names[int(board.get("id"))] = str(board.get("name") or "")
        except (TypeError, ValueError):
            continue
    return True, f"{me.get('name', '?')} (id {me.get('id', '?')})", names


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="pricebot Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    try:
        partitions = resolve_partitions(settings)
    except ConfigurationError as exc:
        table.add_row("Partition table", "FAIL", str(exc))
        _console.print(table)
        raise typer.Exit(code=1) from exc

    source = str(settings.partition_table_path) if settings.partition_table_path else "built-in"
    table.add_row("Partition table", "OK", f"{len(partitions)} partitions ({source})")
    table.add_row("Commands", "OK", f"{settings.price_command} <domain>, {settings.cancel_command}")

    if not settings.monday_api_token:
        table.add_row("Monday token", "FAIL", "Not set -> run `pricebot doctor setup`")
        _console.print(table)
        raise typer.Exit(code=1)
    table.add_row("Monday token", "OK", f"API version {settings.monday_api_version}")

    ok, detail, names = asyncio.run(_check_monday(settings, partitions))
    table.add_row("Monday connectivity", "OK" if ok else "FAIL", detail)

    if ok:
        for partition in partitions:
            name = names.get(partition.partition_id)
            table.add_row(
                f"Board {partition.language_code}",
                "OK" if name is not None else "MISSING",
                name if name is not None else f"{partition.partition_id} not visible with this token",
            )

    _console.print(table)
    if not ok:
        raise typer.Exit(code=1)


@app.command(name="partitions")
def show_partitions() -> None:
    """Show the partition table in use."""

    try:
        table = resolve_partitions(AppSettings())
    except ConfigurationError as exc:
        _console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    _console.print(build_partitions_table(table))


@app.command()
def boards(limit: int = typer.Option(1000, min=1, help="Maximum boards to list.")) -> None:
    """List the Monday.com boards visible with the configured token."""

    settings = AppSettings()

    async def _list() -> list[dict[str, Any]]:
        async with MondayBoardLookup(settings) as lookup:
            return await lookup.list_boards(limit=limit)

    try:
        found = asyncio.run(_list())
    except Exception as exc:
        _console.print(f"[red]Cannot list boards:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    table = Table(title="Monday.com boards")
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    for board in found:
        table.add_row(str(board.get("id")), str(board.get("name")))
    _console.print(table)


@app.command()
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    token = typer.prompt("Monday.com API token", hide_input=True, confirmation_prompt=False).strip()
    if not token:
        raise typer.BadParameter("token is required")

    values = {"PRICEBOT_MONDAY_API_TOKEN": token}
    price_command = typer.prompt("Price command", default="/price", show_default=True).strip()
    if price_command:
        values["PRICEBOT_PRICE_COMMAND"] = price_command

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved config to:[/green] {env_path}")
