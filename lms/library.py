import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from lms.enums import ItemKind, ItemStatus
from lms.exceptions import (
    DuplicateItemError,
    DuplicateMemberError,
    ItemNotFoundError,
    ItemUnavailableError,
    LoanNotFoundError,
)
from lms.fees import ZERO
from lms.item import LibraryItem
from lms.loan import LateFee, Loan
from lms.member import Member
from lms.utils.validators import IdentifierValidator, TextValidator

logger = logging.getLogger(__name__)


@dataclass
class ReturnReceipt:
    """Outcome of returning an item: the closed loan and any fees charged."""
    loan: Loan
    fees: List[LateFee] = field(default_factory=list)

    @property
    def total_fee(self) -> Decimal:
        return sum((fee.amount for fee in self.fees), ZERO)

    @property
    def days_late(self) -> int:
        return max((fee.days_late for fee in self.fees), default=0)

    @property
    def was_late(self) -> bool:
        return bool(self.fees)


class Library:
    """Manages the item catalog, the member registry and the loans between them.

    All state lives in memory for the lifetime of the instance.
    """

    def __init__(self) -> None:
        self._items: Dict[str, LibraryItem] = {}
        self._members: Dict[str, Member] = {}

    # ------------------------- Catalog ------------------------- #
    def add_item(self, item: LibraryItem) -> LibraryItem:
        """Add an item to the catalog. Item ids are unique."""
        if not TextValidator.validate_title(item.title):
            raise ValueError("Item title cannot be empty.")
        key = IdentifierValidator.normalize(item.item_id)
        if key in self._items:
            raise DuplicateItemError(f"Item with ID {item.item_id} already exists.")
        self._items[key] = item
        logger.debug(f"Item added: {item!r}")
        return item

    def find_item(self, item_id: str) -> Optional[LibraryItem]:
        return self._items.get(IdentifierValidator.normalize(item_id))

    def list_items(self) -> List[LibraryItem]:
        return list(self._items.values())

    def available_items(self) -> List[LibraryItem]:
        return [item for item in self._items.values() if item.is_available]

    # ------------------------- Members ------------------------- #
    def register_member(self, member: Member) -> Member:
        if not TextValidator.validate_name(member.name):
            raise ValueError("Member name cannot be empty.")
        key = IdentifierValidator.normalize(member.member_id)
        if key in self._members:
            raise DuplicateMemberError(f"Member with ID {member.member_id} already exists.")
        self._members[key] = member
        logger.debug(f"Member registered: {member!r}")
        return member

    def find_member(self, member_id: str) -> Optional[Member]:
        """Login lookup: the member with ``member_id`` or None."""
        return self._members.get(IdentifierValidator.normalize(member_id))

    def list_members(self) -> List[Member]:
        return list(self._members.values())

    # ------------------------- Borrow / return ------------------------- #
    def borrow_item(self, member: Member, item_id: str, on: Optional[date] = None) -> Loan:
        """Lend the item with ``item_id`` to ``member``.

        Raises:
            ItemNotFoundError: no such item in the catalog.
            ItemUnavailableError: the item is already borrowed.
        """
        item = self.find_item(item_id)
        if item is None:
            raise ItemNotFoundError(f"Item {item_id} not found.")
        if item.status is not ItemStatus.AVAILABLE:
            raise ItemUnavailableError(f"Item {item.item_id} ({item.title}) is currently borrowed.")
        loan = Loan(member, item, borrow_date=on)
        loan.on_borrow()
        member.add_loan(loan)
        return loan

    def return_item(self, member: Member, item_id: str, on: Optional[date] = None) -> ReturnReceipt:
        """Return the member's loan that holds ``item_id``.

        Every item of that loan comes back together; the loan leaves the
        member's active loans.

        Raises:
            LoanNotFoundError: the member has no active loan for the item.
        """
        item = self.find_item(item_id)
        loan = member.find_loan(item.item_id) if item else None
        if loan is None:
            raise LoanNotFoundError(f"{member.name} has no active loan for item {item_id}.")
        charged = loan.on_return(on)
        member.remove_loan(loan)
        return ReturnReceipt(loan=loan, fees=charged)

    # ------------------------- Reporting ------------------------- #
    def current_loans(self) -> List[Tuple[Member, Loan]]:
        return [(member, loan) for member in self._members.values() for loan in member.loans]

    def overdue_loans(self, on: Optional[date] = None) -> List[Tuple[Member, Loan]]:
        return [(member, loan) for member, loan in self.current_loans() if loan.is_overdue(on)]

    def get_statistics(self, on: Optional[date] = None) -> Dict[str, Any]:
        """Get library statistics."""
        by_kind = Counter(item.kind for item in self._items.values())
        loans = self.current_loans()
        return {
            "total_items": len(self._items),
            "available_items": len(self.available_items()),
            "borrowed_items": len(self._items) - len(self.available_items()),
            "items_by_kind": {kind.value: by_kind.get(kind, 0) for kind in ItemKind},
            "members": len(self._members),
            "active_loans": len(loans),
            "overdue_loans": sum(1 for _, loan in loans if loan.is_overdue(on)),
            "outstanding_fees": sum((loan.accrued_fees(on) for _, loan in loans), ZERO),
        }
