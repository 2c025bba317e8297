"""pricebot command line.

- `chat`: console transport for the quote conversation.
- `quote`: one-shot, non-interactive quote.
- `doctor`: configuration and Monday.com diagnostics.
"""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from adapters.monday_board import MondayBoardLookup
from adapters.partition_table import resolve_partitions
from cli import doctor
from cli.ui_components import build_matches_table, build_quote_panel, print_banner
from core.config import AppSettings
from core.domain.errors import ConfigurationError, UserInputError
from core.domain.models import ChatMessage, Quote
from core.domain.tables import MAX_WORD_COUNT
from core.interfaces.partition_lookup import PartitionLookup
from core.logger import configure_logging
from core.services.conversation import ConversationStateMachine, select_match
from core.services.domain_search import FederatedDomainSearch
from core.services.pricing import build_quote
from core.services.session_store import SessionStore

app = typer.Typer(no_args_is_help=True, help="Price sponsored content from Monday.com boards.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def build_lookup(settings: AppSettings) -> MondayBoardLookup:
    if not settings.monday_api_token:
        raise ConfigurationError(
            "Monday.com API token missing: set PRICEBOT_MONDAY_API_TOKEN or run `pricebot doctor setup`."
        )
    return MondayBoardLookup(settings)


def build_search(settings: AppSettings, lookup: PartitionLookup) -> FederatedDomainSearch:
    return FederatedDomainSearch(
        partitions=resolve_partitions(settings),
        lookup=lookup,
        max_concurrency=settings.search_max_concurrency,
    )


def _fail(message: str) -> typer.Exit:
    _console.print(f"[red]{message}[/red]")
    return typer.Exit(code=1)


async def _chat_loop(settings: AppSettings, user_id: str) -> None:
    lookup = build_lookup(settings)
    async with lookup:
        with SessionStore() as sessions:
            machine = ConversationStateMachine(
                search=build_search(settings, lookup),
                sessions=sessions,
                price_command=settings.price_command,
                cancel_command=settings.cancel_command,
            )
            while True:
                try:
                    line = await asyncio.to_thread(_console.input, "[bold cyan]> [/bold cyan]")
                except (EOFError, KeyboardInterrupt):
                    break
                if line.strip().lower() in ("exit", "quit"):
                    break
                reply = await machine.handle(ChatMessage(sender_id=user_id, text=line))
                if reply:
                    _console.print(reply, markup=False)


@app.command()
def chat(
    user: str = typer.Option("console", "--user", "-u", help="Sender identity for the session."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Skip the welcome banner."),
) -> None:
    """Talk to the bot from the terminal (`exit` to quit)."""

    settings = AppSettings()
    configure_logging(settings.log_level)
    if not no_banner:
        print_banner(_console)
        _console.print(f"[dim]Start with: {settings.price_command} <domain>[/dim]")

    try:
        asyncio.run(_chat_loop(settings, user))
    except ConfigurationError as exc:
        raise _fail(str(exc)) from exc


async def _quote(settings: AppSettings, domain: str, lang: str, words: int) -> Quote:
    lookup = build_lookup(settings)
    async with lookup:
        matches = await build_search(settings, lookup).search(domain)
    if not matches:
        raise _fail(f'Domain "{domain}" was not found in any board.')

    _console.print(build_matches_table(domain, matches))
    try:
        match = select_match(matches, lang)
    except UserInputError as exc:
        codes = ", ".join(m.language_code for m in matches)
        raise _fail(f"Invalid language code. Please enter one of the following: {codes}") from exc

    return build_quote(
        domain_name=domain,
        language_code=match.language_code,
        publisher_cost=match.publisher_cost,
        word_count=words,
    )


@app.command()
def quote(
    domain: str = typer.Argument(..., help="Domain to price (exact item name on the boards)."),
    lang: str = typer.Option(..., "--lang", "-l", help="Language code of the article (IT, EN, DE...)."),
    words: int = typer.Option(
        0, "--words", "-w", min=0, max=MAX_WORD_COUNT, help="Copywriting word count (0 = no copy)."
    ),
) -> None:
    """Compute a quote without the conversation."""

    settings = AppSettings()
    configure_logging(settings.log_level)
    try:
        result = asyncio.run(_quote(settings, domain.strip(), lang, words))
    except ConfigurationError as exc:
        raise _fail(str(exc)) from exc

    _console.print(build_quote_panel(result))


def run(argv: list[str] | None = None) -> None:
    app(args=argv)
