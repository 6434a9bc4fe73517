"""Command-line interface for the circulation desk.

Built with Typer for commands and Rich for beautiful output.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from . import __version__
from .app_logger import setup_logging
from .config import get_config
from .db.schemas import ItemResponse, UserCreate
from .exceptions import DuplicateUserError
from .fines.schemas import FineAssessment
from .lending.schemas import LendingResult
from .library import Library, get_library

# Create the main app
app = typer.Typer(
    name="circulation",
    help="Run the circulation desk of a lending library.",
    no_args_is_help=True,
)

# Rich console for pretty output
console = Console()


@app.callback()
def main_callback() -> None:
    """Configure logging before any command runs."""
    setup_logging(get_config().log_level)


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[dim]{message}[/dim]")


def print_result(result: LendingResult) -> None:
    """Print the outcome of a lending operation."""
    if result.ok:
        print_success(result.message)
        if result.due_date:
            console.print(f"Item due date: [cyan]{result.due_date.isoformat()}[/cyan]")
    else:
        print_error(result.message)


def format_item_table(items: list[ItemResponse], title: str = "Items") -> Table:
    """Create a rich table for displaying items."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan")
    table.add_column("Title", max_width=40)
    table.add_column("Creator", style="green", max_width=25)
    table.add_column("Category")
    table.add_column("Renewable", justify="center")
    table.add_column("Value", justify="right")
    table.add_column("Due")

    for item in items:
        table.add_row(
            item.id,
            item.title,
            item.creator,
            item.category.value.replace("_", "/"),
            "yes" if item.renewable else "no",
            f"${item.value:.2f}",
            item.due_date.isoformat() if item.due_date else "-",
        )

    return table


def format_fine_panel(assessment: FineAssessment) -> Panel:
    """Create a rich panel summarising a fine assessment."""
    lines = [
        f"{fine.item_id} {fine.title}: {fine.overdue_days}d overdue, ${fine.amount}"
        + (" (capped)" if fine.capped else "")
        for fine in assessment.items
    ]
    lines.append(f"[bold]Total fines: ${assessment.total}[/bold]")
    style = "red" if assessment.owes else "green"
    return Panel("\n".join(lines), title=f"Fines for {assessment.card_number}", style=style)


# ============================================================================
# Commands
# ============================================================================


@app.command()
def version() -> None:
    """Show the version."""
    console.print(f"circulation {__version__}")


@app.command()
def catalog(
    available: bool = typer.Option(False, "--available", "-a", help="Only show items on the shelf"),
) -> None:
    """Show the seed catalog."""
    library = Library(populate=True)
    if available:
        items = library.catalog.list_available_items()
    else:
        items = library.catalog.list_items()
    console.print(format_item_table(items, title="Catalog"))


MENU = """[bold]Circulation Desk[/bold]
  1. Register user
  2. Check out item
  3. Return item
  4. Renew item
  5. Request item
  6. Calculate fines
  7. Available items
  8. My requests
  9. Fulfill requests
  q. Quit"""

MENU_CHOICES = ["1", "2", "3", "4", "5", "6", "7", "8", "9", "q"]


def _ask(label: str) -> str:
    return Prompt.ask(label, console=console).strip()


def _register(library: Library) -> None:
    name = _ask("Name")
    address = _ask("Address")
    phone = _ask("Phone number")
    try:
        user = library.catalog.register_user(
            UserCreate(name=name, address=address, phone_number=phone)
        )
    except DuplicateUserError:
        print_error("A user with the same details already exists.")
        return
    except ValueError as e:
        print_error(str(e))
        return
    print_success(f"Registered {user.name}")
    console.print(f"Library card number: [cyan]{user.card_number}[/cyan]")
    console.print(f"User ID: [cyan]{user.user_id}[/cyan]")


def _show_fines(library: Library) -> None:
    assessment = library.lending.calculate_fines(_ask("Library card number"))
    if not assessment.found:
        print_error(assessment.message or "User not found.")
        return
    console.print(format_fine_panel(assessment))


def _show_available(library: Library) -> None:
    items = library.catalog.list_available_items()
    if not items:
        print_info("No items available")
        return
    console.print(format_item_table(items, title="Available items"))


def _show_requests(library: Library) -> None:
    item_ids = library.lending.list_requests(_ask("Library card number"))
    if not item_ids:
        print_info("No outstanding requests")
        return
    console.print("Requested items: " + ", ".join(item_ids))


def _fulfill(library: Library) -> None:
    item_id = _ask("Item ID")
    removed = library.lending.fulfill_requests(item_id)
    if removed:
        print_success(f"Cleared {removed} request(s) for {item_id}")
    else:
        print_info(f"No outstanding requests for {item_id}")


def run_desk(library: Library) -> None:
    """Run the interactive desk loop until the user quits."""
    lending = library.lending
    actions = {
        "1": lambda: _register(library),
        "2": lambda: print_result(
            lending.checkout(_ask("Library card number"), _ask("Item ID"))
        ),
        "3": lambda: print_result(
            lending.return_item(_ask("Library card number"), _ask("Item ID"))
        ),
        "4": lambda: print_result(
            lending.renew(_ask("Library card number"), _ask("Item ID"))
        ),
        "5": lambda: print_result(
            lending.request_item(_ask("Library card number"), _ask("Item ID"))
        ),
        "6": lambda: _show_fines(library),
        "7": lambda: _show_available(library),
        "8": lambda: _show_requests(library),
        "9": lambda: _fulfill(library),
    }

    while True:
        console.print(MENU)
        try:
            choice = Prompt.ask("Choose an option", choices=MENU_CHOICES, console=console)
            if choice == "q":
                break
            actions[choice]()
        except (EOFError, KeyboardInterrupt):
            break
        console.print()

    console.print("Goodbye.")


@app.command()
def shell(
    empty: bool = typer.Option(False, "--empty", "-e", help="Start without the seed catalog"),
) -> None:
    """Open an interactive circulation desk session.

    All state lives in memory and is gone when the session ends.
    """
    library = get_library(populate=not empty)
    run_desk(library)


def main(args: Optional[list[str]] = None) -> None:
    """Entry point for the console script."""
    app(args)


if __name__ == "__main__":
    main()
