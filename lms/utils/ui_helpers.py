import os
import json
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple

from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from lms.config import settings

# Environment variable to control CLI output mode
# İzin verilen değerler: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"

_console = Console()


def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode
    # Geçersiz değerleri yoksay; mevcut varsayılanı koru


def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()


def format_amount(amount: Decimal) -> str:
    return f"{settings.currency_symbol}{amount:.2f}"


def format_date(value: date) -> str:
    return value.strftime(settings.date_format)


def _dump(payload: Any) -> None:
    print(json.dumps(payload, ensure_ascii=False))


def print_items(items: Sequence[Any], title: str = "All Items") -> None:
    """Öğe listesini mevcut çıktı moduna göre yazdır.
    - plain: 'ID: B001 - Title - Status: Available' satırları, veya 'No items in library.'
    - json: to_dict() dizisi
    - rich: Rich tablosu
    """
    mode = get_output_mode()

    if not items:
        print("No items in library.")
        return

    if mode == "json":
        _dump([item.to_dict() for item in items])
    elif mode == "rich":
        table = Table(title=f"📚 {title}", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True)
        table.add_column("Type", style="white")
        table.add_column("Title", style="white")
        table.add_column("Status", style="white")
        for item in items:
            style = "green" if item.is_available else "yellow"
            table.add_row(item.item_id, item.kind.value, item.title, f"[{style}]{item.status.value}[/]")
        _console.print(table)
    else:
        print(f"{title}:")
        for item in items:
            print(f"ID: {item.item_id} - {item.title} - Status: {item.status.value}")


def print_members(members: Sequence[Any]) -> None:
    mode = get_output_mode()

    if not members:
        print("No members registered.")
        return

    if mode == "json":
        _dump([member.to_dict() for member in members])
    elif mode == "rich":
        table = Table(title="👥 Members", header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True)
        table.add_column("Name", style="white")
        table.add_column("Loans", justify="right")
        for member in members:
            table.add_row(member.member_id, member.name, str(len(member.loans)))
        _console.print(table)
    else:
        print("All Members:")
        for member in members:
            print(f"ID: {member.member_id} - {member.name}")


def print_current_loans(loans: List[Tuple[Any, Any]], on: Optional[date] = None) -> None:
    """Librarian view: every active loan with its member."""
    mode = get_output_mode()

    if not loans:
        print("No current loans.")
        return

    if mode == "json":
        _dump([loan.to_dict(on) for _, loan in loans])
    elif mode == "rich":
        table = Table(title="📖 Current Loans", header_style="bold cyan")
        table.add_column("Member", style="white")
        table.add_column("Item", style="white")
        table.add_column("Due", no_wrap=True)
        table.add_column("Days Late", justify="right")
        for member, loan in loans:
            for item in loan.items:
                table.add_row(member.name, f"{item.title} ({item.item_id})",
                              format_date(loan.due_date), str(loan.days_overdue(on)))
        _console.print(table)
    else:
        print("Current Loans:")
        for member, loan in loans:
            for item in loan.items:
                print(f"Member: {member.name} - Item: {item.title} (ID: {item.item_id})")


def print_dashboard(member: Any, on: Optional[date] = None) -> None:
    """Üyenin ödünç aldığı öğeleri, son tarihleri ve gecikme ücretlerini göster."""
    mode = get_output_mode()
    loans = member.loans
    total = member.outstanding_fees(on)

    if mode == "json":
        _dump({
            "member": member.to_dict(),
            "loans": [loan.to_dict(on) for loan in loans],
            "total_outstanding_fees": str(total),
        })
        return

    lines: List[str] = ["Current Loans:"]
    if not loans:
        lines.append("No items borrowed.")
    for loan in loans:
        late = loan.days_overdue(on)
        for item in loan.items:
            lines.append(f"{item.title} - Due: {format_date(loan.due_date)}")
            if late > 0:
                lines.append(f"    Days Late: {late}, Late Fee: {format_amount(item.calculate_late_fee(late))}")
    if total > 0:
        lines.append("")
        lines.append(f"Total Outstanding Fees: {format_amount(total)}")

    if mode == "rich":
        _console.print(Panel.fit("\n".join(lines), title=f"📊 Dashboard - {member.name}", border_style="blue"))
    else:
        print("\n".join(lines))


def print_return_receipt(receipt: Any) -> None:
    mode = get_output_mode()
    titles = [item.title for item in receipt.loan.items]

    if mode == "json":
        _dump({
            "returned": [item.item_id for item in receipt.loan.items],
            "return_date": receipt.loan.return_date.isoformat(),
            "days_late": receipt.days_late,
            "late_fee": str(receipt.total_fee),
        })
        return

    lines: List[str] = []
    for fee in receipt.fees:
        lines.append(f"Late fee charged: {format_amount(fee.amount)} ({fee.item.title})")
        lines.append(f"Days late: {fee.days_late}")
    for title in titles:
        lines.append(f"Item returned: {title}")
    if receipt.was_late:
        lines.append("Item returned successfully. Please pay the late fee.")
    else:
        lines.append("Item returned successfully.")

    if mode == "rich":
        border = "yellow" if receipt.was_late else "green"
        _console.print(Panel.fit("\n".join(lines), title="✅ Return Successful", border_style=border))
    else:
        print("\n".join(lines))


def print_stats_result(stats: Dict[str, Any]) -> None:
    """İstatistikleri mevcut çıktı moduna göre yazdır."""
    mode = get_output_mode()

    if not stats:
        print("No statistics available.")
        return

    if mode == "json":
        payload = dict(stats)
        payload["outstanding_fees"] = str(payload.get("outstanding_fees", "0"))
        _dump(payload)
        return

    rows = [
        ("Total Items", stats.get("total_items", 0)),
        ("Available Items", stats.get("available_items", 0)),
        ("Borrowed Items", stats.get("borrowed_items", 0)),
        ("Members", stats.get("members", 0)),
        ("Active Loans", stats.get("active_loans", 0)),
        ("Overdue Loans", stats.get("overdue_loans", 0)),
        ("Outstanding Fees", format_amount(stats.get("outstanding_fees", Decimal("0")))),
    ]
    if mode == "rich":
        content = "\n".join(f"[bold]{label}:[/] {value}" for label, value in rows)
        _console.print(Panel.fit(content, title="📊 Stats", border_style="blue"))
    else:
        for label, value in rows:
            print(f"{label}: {value}")
