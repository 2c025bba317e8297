"""CLI UI components (Rich).

Tables and panels shared by the `chat`, `quote` and `doctor` commands.
"""

from __future__ import annotations

from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Match, Partition, Quote
from core.domain.tables import group_for
from core.services.pricing import format_price


def print_banner(console: Console) -> None:
    """Print the welcome banner (skipped in non-interactive modes)."""

    title = Text("pricebot", style="bold cyan")
    subtitle = Text("Sponsored content quotes • Monday.com boards", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_matches_table(domain_name: str, matches: Sequence[Match]) -> Table:
    table = Table(title=f"Boards holding {domain_name}")
    table.add_column("Language", style="cyan", no_wrap=True)
    table.add_column("Board", style="white")
    table.add_column("Publisher cost", style="green", justify="right")
    for match in matches:
        table.add_row(match.language_code, str(match.partition_id), f"{match.publisher_cost} €")
    return table


def build_partitions_table(partitions: Sequence[Partition]) -> Table:
    table = Table(title="Partitions")
    table.add_column("Language", style="cyan", no_wrap=True)
    table.add_column("Board", style="white")
    table.add_column("Margin group", style="dim")
    for partition in partitions:
        group = group_for(partition.language_code)
        table.add_row(
            partition.language_code,
            str(partition.partition_id),
            group.label() if group else "-",
        )
    return table


def build_quote_panel(quote: Quote) -> Panel:
    """Panel with the price breakdown of a `Quote`."""

    body = Text()
    body.append(f"Domain: {quote.domain_name}\n")
    body.append(f"Language: {quote.language_code}\n")
    body.append(f"Publisher cost: {quote.publisher_cost} €\n")
    body.append(f"Margin: {format_price(quote.margin)} €\n")
    if quote.word_count:
        body.append(f"Copy: {quote.word_count} words × {quote.copy_rate} € = {format_price(quote.copy_price)} €\n")
    body.append(f"\nFinal price = {format_price(quote.final_price)}€", style="bold green")
    return Panel(body, title=Text("Quote", style="bold yellow"), border_style="yellow")
