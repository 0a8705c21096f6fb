# cli.py
import argparse
import asyncio
import logging
import sys
from datetime import datetime
from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.logging import RichHandler
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.catalog import CatalogClient, CatalogStatus
from sdk.config import ClientSettings
from sdk.errors import FetchError, FetchErrorKind, FetchResult
from sdk.models import Product

console = Console()

status_message = "Ready"

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: Sequence[Product], stale: bool = False):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    title = "📦 Products Catalog"
    if stale:
        title += " [dim](last good copy)[/dim]"
    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=6)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Price", justify="right", width=12)
    table.add_column("Stock", justify="right", width=8)
    table.add_column("Category", width=15)

    for p in products:
        table.add_row(
            str(p.id),
            p.name,
            f"${p.price:.2f}",
            str(p.stock),
            p.category.name if p.category else "-"
        )
    console.print(table)


def show_fetch_status(status: CatalogStatus):
    lines = []
    if status.has_data:
        state = "[green]fresh[/green]" if status.cache_valid else "[yellow]stale[/yellow]"
        fetched = status.fetched_on.astimezone().strftime("%Y-%m-%d %H:%M:%S")
        lines.append(f"Cache: {state}, {status.cache_age:.0f}s old (fetched {fetched})")
    else:
        lines.append("Cache: [dim]empty[/dim]")
    lines.append("Fetch in flight: " + ("yes" if status.in_flight else "no"))
    if status.last_error is not None:
        lines.append(f"Last error: [red]{status.last_error.message}[/red]")
    console.print(Panel.fit("\n".join(lines), title="ℹ️ Status", border_style="cyan"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def describe_error(error: FetchError) -> str:
    if error.kind is FetchErrorKind.MALFORMED and error.raw_body is not None:
        snippet = error.raw_body[:200]
        return f"{error.message}\n[dim]{snippet}[/dim]"
    return error.message


# ---------------------------
# Fetch wrapper with spinner
# ---------------------------
def run_fetch(loop: asyncio.AbstractEventLoop, client: CatalogClient,
              force_refresh: bool = False) -> FetchResult:
    """
    Runs one get_products call on the CLI's event loop, with a spinner.
    Updates status_message from the outcome.
    """
    global status_message
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        transient=True,
    ) as progress:
        progress.add_task(description="Loading products...", total=None)
        result = loop.run_until_complete(client.get_products(force_refresh=force_refresh))

    if result.ok:
        source = "cache" if result.from_cache else "server"
        status_message = f"Loaded {len(result.products)} products from {source}"
        console.print(show_status(status_message, True))
    else:
        status_message = f"Error: {result.error.message}"
        console.print(show_status(describe_error(result.error), False))
    return result


def show_result(client: CatalogClient, result: FetchResult):
    if result.ok:
        show_products(result.products)
        return
    stale = client.cached_products()
    if stale:
        show_products(stale, stale=True)


# ---------------------------
# Layout and Header
# ---------------------------
def create_header(base_url: str):
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Product Catalog",
        f"[bold blue]{base_url}[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


# ---------------------------
# Main menu
# ---------------------------
def menu(settings: ClientSettings):
    global status_message

    config = settings.to_config()
    loop = asyncio.new_event_loop()
    client = CatalogClient(config)

    console.clear()
    console.print(create_header(config.base_url))

    try:
        while True:
            if status_message:
                console.print(show_status(status_message, "Error" not in status_message))

            menu_table = Table.grid(padding=(0, 2))
            menu_table.add_column("Key", style="bold cyan", width=4)
            menu_table.add_column("Option", width=30)
            menu_table.add_row("1", "📦 List products")
            menu_table.add_row("2", "🔄 Refresh products")
            menu_table.add_row("3", "ℹ️ Cache status")
            menu_table.add_row("q", "👋 Quit")
            console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

            choice = prompt_with_autocomplete(
                "\nChoose an option",
                completer=WordCompleter(["1", "2", "3", "q", "quit", "exit"])
            ).strip()

            if choice == "1":
                show_result(client, run_fetch(loop, client))

            elif choice == "2":
                show_result(client, run_fetch(loop, client, force_refresh=True))

            elif choice == "3":
                show_fetch_status(client.status())

            elif choice.lower() in ("q", "quit", "exit"):
                if Confirm.ask("Are you sure you want to quit?"):
                    console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
                    return

            console.print()
            console.rule(style="dim")
    finally:
        loop.run_until_complete(client.aclose())
        loop.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Product catalog CLI")
    parser.add_argument("--base-url", help="Catalog API base URL (default: $CATALOG_BASE_URL)")
    parser.add_argument("--log-level", help="Logging level (default: $CATALOG_LOG_LEVEL)")
    return parser


def configure_logging(level: str):
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    overrides = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.log_level:
        overrides["log_level"] = args.log_level
    settings = ClientSettings(**overrides)
    configure_logging(settings.log_level)
    menu(settings)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
