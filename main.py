import logging
import sys
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, Optional

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from lms.config import settings
from lms.library import Library
from lms.member import Member
from lms.sample_data import seed_library
from lms.utils.ui_helpers import (
    format_amount,
    print_current_loans,
    print_dashboard,
    print_items,
    print_members,
    print_return_receipt,
    print_stats_result,
    set_output_mode,
)

APP_NAME = settings.app_name

logging.basicConfig(level=getattr(logging, settings.log_level, logging.WARNING))
logger = logging.getLogger(__name__)

console = Console()


# Süreç başına tek Kütüphane örneği
class LibraryManager:
    _instance: Optional[Library] = None

    @classmethod
    def get_instance(cls) -> Library:
        """Library singleton örneğini al veya oluştur."""
        if cls._instance is None:
            library = Library()
            if settings.seed_sample_data:
                seed_library(library)
            cls._instance = library
            logger.debug("Library instance initialised")
        return cls._instance

    @classmethod
    def reset(cls, library: Optional[Library] = None) -> None:
        """Drop the current instance; the next get_instance() builds a fresh one."""
        cls._instance = library


@dataclass
class Session:
    """Who is using the terminal: a logged-in member, or a librarian."""
    role: str
    member: Optional[Member] = None

    @property
    def is_librarian(self) -> bool:
        return self.role == "librarian"


def _parse_day(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"Expected a date as YYYY-MM-DD, got {value!r}")


def _login(lib: Library, member_id: str) -> Optional[Member]:
    member = lib.find_member(member_id)
    if member is None:
        print("Invalid member ID")
    return member


# --- Typer CLI Uygulaması ---
app = typer.Typer(help=APP_NAME)


def _version_callback(value: bool) -> None:
    if value:
        print(f"{APP_NAME} {settings.app_version}")
        raise typer.Exit()


@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
):
    """Global options for the CLI (e.g. output mode)."""
    if output:
        set_output_mode(output)


@app.command("items")
def cli_items(available: bool = typer.Option(False, "--available", "-a", help="Only show items that can be borrowed")):
    """List catalog items."""
    lib = LibraryManager.get_instance()
    if available:
        print_items(lib.available_items(), title="Available Items")
    else:
        print_items(lib.list_items())


@app.command("members")
def cli_members():
    """List registered members."""
    print_members(LibraryManager.get_instance().list_members())


@app.command("loans")
def cli_loans(on: Optional[str] = typer.Option(None, "--on", help="Report as of this date (YYYY-MM-DD)")):
    """List every active loan (librarian view)."""
    lib = LibraryManager.get_instance()
    print_current_loans(lib.current_loans(), on=_parse_day(on))


@app.command("dashboard")
def cli_dashboard(
    member_id: str,
    on: Optional[str] = typer.Option(None, "--on", help="Report as of this date (YYYY-MM-DD)"),
):
    """Show a member's loans, due dates and late fees."""
    lib = LibraryManager.get_instance()
    member = _login(lib, member_id)
    if member:
        print_dashboard(member, on=_parse_day(on))


@app.command("borrow")
def cli_borrow(
    member_id: str,
    item_id: str,
    on: Optional[str] = typer.Option(None, "--on", help="Borrow date (YYYY-MM-DD), default today"),
):
    """Borrow an item for a member."""
    lib = LibraryManager.get_instance()
    member = _login(lib, member_id)
    if not member:
        return
    try:
        loan = lib.borrow_item(member, item_id, on=_parse_day(on))
    except LookupError:
        print("Item not found.")
        return
    except ValueError:
        print("Item not available. This item is currently borrowed.")
        return
    print(f"Item borrowed: {loan.item.title} by {member.name}")
    print(f"Due date: {loan.due_date.strftime(settings.date_format)}")


@app.command("return")
def cli_return(
    member_id: str,
    item_id: str,
    on: Optional[str] = typer.Option(None, "--on", help="Return date (YYYY-MM-DD), default today"),
):
    """Return a borrowed item and show any late fee."""
    lib = LibraryManager.get_instance()
    member = _login(lib, member_id)
    if not member:
        return
    if not member.has_loans():
        print("No items to return. You have no borrowed items.")
        return
    try:
        receipt = lib.return_item(member, item_id, on=_parse_day(on))
    except LookupError as e:
        print(f"Error: {e}")
        return
    print_return_receipt(receipt)


@app.command("stats")
def cli_stats():
    """Show library statistics."""
    print_stats_result(LibraryManager.get_instance().get_statistics())


@app.command("menu")
def cli_menu():
    """Start the interactive menu."""
    run_menu()


# --- Etkileşimli menü işleyicileri (her biri açık bir Session alır) ---
def show_available_items(lib: Library, session: Session) -> None:
    print_items(lib.available_items(), title="Available Items")


def show_all_items(lib: Library, session: Session) -> None:
    print_items(lib.list_items())


def show_all_members(lib: Library, session: Session) -> None:
    print_members(lib.list_members())


def show_current_loans(lib: Library, session: Session) -> None:
    print_current_loans(lib.current_loans())


def show_dashboard(lib: Library, session: Session) -> None:
    if session.member:
        print_dashboard(session.member)


def show_stats(lib: Library, session: Session) -> None:
    print_stats_result(lib.get_statistics())


def borrow_item(lib: Library, session: Session) -> None:
    """Ödünç alma akışı: ID iste, uygunluğu kontrol et, ödünç ver."""
    item_id = Prompt.ask("Enter Item ID to borrow").strip()
    if not item_id:
        return
    try:
        loan = lib.borrow_item(session.member, item_id)
    except LookupError:
        console.print(Panel.fit("Item not found.", title="Error", border_style="red"))
        return
    except ValueError:
        console.print(Panel.fit("This item is currently borrowed.", title="Item not available", border_style="yellow"))
        return
    console.print(Panel.fit(
        f"[bold]{loan.item.title}[/] borrowed successfully.\n"
        f"Due date: {loan.due_date.strftime(settings.date_format)}",
        title="✅ Borrowing Successful!",
        border_style="green",
    ))
    print_dashboard(session.member)


def return_item(lib: Library, session: Session) -> None:
    """İade akışı: ödünçlerden birini seç, iade et, ücreti göster."""
    member = session.member
    if not member.has_loans():
        console.print(Panel.fit("You have no borrowed items.", title="No items to return", border_style="blue"))
        return

    choices = [item.item_id for loan in member.loans for item in loan.items]
    for loan in member.loans:
        for item in loan.items:
            console.print(f"  {item.item_id} - {item.title}")
    item_id = Prompt.ask("Select item to return", choices=choices, default=choices[0])

    receipt = lib.return_item(member, item_id)
    print_return_receipt(receipt)
    if receipt.was_late:
        console.print(f"[bold yellow]Outstanding for this return:[/] {format_amount(receipt.total_fee)}")
    print_dashboard(member)


MEMBER_MENU: Dict[str, tuple] = {
    "1": ("View Available Items", "📚", show_available_items),
    "2": ("Borrow Item", "➕", borrow_item),
    "3": ("Return Item", "↩️", return_item),
    "4": ("View My Loans", "📊", show_dashboard),
    "0": ("Logout", "🚪", None),
}

LIBRARIAN_MENU: Dict[str, tuple] = {
    "1": ("View All Items", "📚", show_all_items),
    "2": ("View All Members", "👥", show_all_members),
    "3": ("View Current Loans", "📖", show_current_loans),
    "4": ("Statistics", "📊", show_stats),
    "0": ("Logout", "🚪", None),
}


def render_menu(title: str, menu: Dict[str, tuple]) -> None:
    table = Table.grid(padding=(0, 2))
    table.add_column(justify="right", style="bold cyan", width=4)
    table.add_column(justify="left", style="white")
    for key, (label, icon, _) in menu.items():
        table.add_row(f"[reverse]{key}[/]", f"{icon} {label}")

    console.print(Panel(table, title=title, border_style="cyan", box=box.HEAVY, padding=(1, 2)))


def run_session(lib: Library, session: Session) -> None:
    """Serve one login until the user logs out."""
    if session.is_librarian:
        menu, title = LIBRARIAN_MENU, f"{APP_NAME} - Librarian"
    else:
        menu, title = MEMBER_MENU, f"{APP_NAME} - {session.member.name}"
        print_dashboard(session.member)

    while True:
        render_menu(title, menu)
        choice = Prompt.ask("Please choose an option", choices=list(menu), default="1")
        handler: Optional[Callable[[Library, Session], None]] = menu[choice][2]
        if handler is None:
            console.print("[green]Logged out.[/]")
            return
        handler(lib, session)
        print()  # işlemler arasında boşluk bırakır


def login(lib: Library) -> Optional[Session]:
    """Ask for a role (and member ID); None means quit."""
    role = Prompt.ask("Select your role", choices=["member", "librarian", "quit"], default="member")
    if role == "quit":
        return None
    if role == "librarian":
        return Session(role="librarian")

    ids = ", ".join(m.member_id for m in lib.list_members())
    member_id = Prompt.ask(f"Enter Member ID ({ids})")
    member = lib.find_member(member_id)
    if member is None:
        console.print("[bold red]Invalid Member ID[/]")
        return Session(role="member")
    return Session(role="member", member=member)


def run_menu() -> None:
    """Kütüphane için etkileşimli menü."""
    lib = LibraryManager.get_instance()
    console.print(Panel.fit(f"[bold]{APP_NAME}[/]", border_style="cyan"))
    while True:
        session = login(lib)
        if session is None:
            console.print("[green]Goodbye![/]")
            break
        if session.role == "member" and session.member is None:
            continue
        run_session(lib, session)


if __name__ == "__main__":
    if len(sys.argv) > 1:
        app()
    else:
        run_menu()
