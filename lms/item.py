from __future__ import annotations

from decimal import Decimal
from typing import Dict, Optional, Tuple

from lms import fees
from lms.enums import ItemKind, ItemStatus

# Detail fields carried by each kind of item
DETAIL_FIELDS: Dict[ItemKind, Tuple[str, ...]] = {
    ItemKind.BOOK: ("author", "isbn"),
    ItemKind.MAGAZINE: ("issue_number",),
    ItemKind.DVD: ("director",),
}


class LibraryItem:
    """A single catalog entry: a book, a magazine issue or a DVD.

    The kind is a closed tag rather than a subclass; the late fee rate and
    the detail fields are looked up by kind. ``status`` is only changed by
    the loan lifecycle (see ``lms.loan.Loan``).
    """

    def __init__(self, kind: ItemKind, title: str, item_id: str,
                 details: Optional[Dict[str, str]] = None) -> None:
        details = dict(details or {})
        unknown = set(details) - set(DETAIL_FIELDS[kind])
        if unknown:
            raise ValueError(f"{kind.value} does not accept fields: {', '.join(sorted(unknown))}")
        if not item_id or not item_id.strip():
            raise ValueError("Item id cannot be empty.")

        self._kind = kind
        self._item_id = item_id.strip()
        self.title = title.strip()
        self.details = {name: details.get(name) for name in DETAIL_FIELDS[kind]}
        self._status = ItemStatus.AVAILABLE

    # ------------------------- Constructors ------------------------- #
    @classmethod
    def book(cls, title: str, item_id: str, author: str, isbn: str) -> "LibraryItem":
        return cls(ItemKind.BOOK, title, item_id, {"author": author, "isbn": isbn})

    @classmethod
    def magazine(cls, title: str, item_id: str, issue_number: str) -> "LibraryItem":
        return cls(ItemKind.MAGAZINE, title, item_id, {"issue_number": issue_number})

    @classmethod
    def dvd(cls, title: str, item_id: str, director: str) -> "LibraryItem":
        return cls(ItemKind.DVD, title, item_id, {"director": director})

    # ------------------------- Properties ------------------------- #
    @property
    def kind(self) -> ItemKind:
        return self._kind

    @property
    def item_id(self) -> str:
        return self._item_id

    @property
    def status(self) -> ItemStatus:
        return self._status

    @property
    def is_available(self) -> bool:
        return self._status is ItemStatus.AVAILABLE

    @property
    def daily_rate(self) -> Decimal:
        return fees.daily_rate(self._kind)

    def calculate_late_fee(self, days_late: int) -> Decimal:
        """Fee for returning this item ``days_late`` days after its due date."""
        return fees.calculate_late_fee(self._kind, days_late)

    def _set_status(self, status: ItemStatus) -> None:
        # Only Loan.on_borrow / Loan.on_return call this
        self._status = status

    def __repr__(self) -> str:
        return f"LibraryItem({self._kind.name}, {self._item_id!r}, {self.title!r}, {self._status.name})"

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self._item_id} - {self.title}"

    def to_dict(self) -> dict:
        data = {
            "id": self._item_id,
            "kind": self._kind.value,
            "title": self.title,
            "status": self._status.value,
            "daily_rate": str(self.daily_rate),
        }
        data.update(self.details)
        return data
