"""Loan lifecycle.

A loan links one member to one or more items. It is created when the member
borrows, moves items to BORROWED in ``on_borrow`` and ends in ``on_return``,
which frees the items and computes a late fee per item using that item's own
daily rate. A returned loan is terminal: returning it again raises
``LoanAlreadyReturnedError`` and changes nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional, Tuple

from lms import fees
from lms.config import settings
from lms.enums import ItemStatus, LoanStatus
from lms.exceptions import ItemUnavailableError, LoanAlreadyReturnedError
from lms.item import LibraryItem

if TYPE_CHECKING:
    from lms.member import Member

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LateFee:
    """Fee charged for one item of a loan returned after its due date."""
    item: LibraryItem
    days_late: int
    amount: Decimal


class Loan:
    """Borrowing transaction between a member and one or more items."""

    def __init__(self, member: "Member", item: LibraryItem, *more_items: LibraryItem,
                 borrow_date: Optional[date] = None, due_date: Optional[date] = None) -> None:
        self._member = member
        self._items: Tuple[LibraryItem, ...] = (item,) + tuple(more_items)
        self._borrow_date = borrow_date or date.today()
        # due_date is only passed explicitly for back-dated sample loans
        self._due_date = due_date or self._borrow_date + timedelta(days=settings.loan_period_days)
        self._return_date: Optional[date] = None
        self._status = LoanStatus.ACTIVE

    # ------------------------- Properties ------------------------- #
    @property
    def member(self) -> "Member":
        return self._member

    @property
    def items(self) -> Tuple[LibraryItem, ...]:
        return self._items

    @property
    def item(self) -> LibraryItem:
        return self._items[0]

    @property
    def borrow_date(self) -> date:
        return self._borrow_date

    @property
    def due_date(self) -> date:
        return self._due_date

    @property
    def return_date(self) -> Optional[date]:
        return self._return_date

    @property
    def status(self) -> LoanStatus:
        return self._status

    @property
    def is_returned(self) -> bool:
        return self._status is LoanStatus.RETURNED

    # ------------------------- Lifecycle events ------------------------- #
    def on_borrow(self) -> None:
        """Mark every item as borrowed.

        Raises:
            ItemUnavailableError: if any item is already borrowed. No item is
                changed in that case.
        """
        if self.is_returned:
            raise LoanAlreadyReturnedError("Cannot borrow on a returned loan.")
        taken = [item for item in self._items if not item.is_available]
        if taken:
            raise ItemUnavailableError(
                f"Item {taken[0].item_id} ({taken[0].title}) is currently borrowed."
            )
        for item in self._items:
            item._set_status(ItemStatus.BORROWED)
            logger.info(f"Item borrowed: {item.title} by {self._member.name}")
        logger.info(f"Due date: {self._due_date.isoformat()}")

    def on_return(self, return_date: Optional[date] = None) -> List[LateFee]:
        """Close the loan, free its items and compute late fees.

        Args:
            return_date: date the items came back; today when omitted.

        Returns:
            One ``LateFee`` per item when the return is after the due date,
            otherwise an empty list.

        Raises:
            LoanAlreadyReturnedError: if the loan was already returned.
        """
        if self.is_returned:
            raise LoanAlreadyReturnedError(
                f"Loan for {self.item.title} was already returned on {self._return_date.isoformat()}."
            )
        self._return_date = return_date or date.today()
        self._status = LoanStatus.RETURNED

        charged: List[LateFee] = []
        late = fees.days_late(self._due_date, self._return_date)
        for item in self._items:
            item._set_status(ItemStatus.AVAILABLE)
            if late > 0:
                fee = LateFee(item=item, days_late=late, amount=item.calculate_late_fee(late))
                charged.append(fee)
                logger.info(f"Late fee charged: {fee.amount:.2f} for {item.title}")
                logger.info(f"Days late: {late}")
            logger.info(f"Item returned: {item.title}")
        return charged

    # ------------------------- Reporting ------------------------- #
    def days_overdue(self, on: Optional[date] = None) -> int:
        """Days past the due date as of ``on`` (or the return date once returned)."""
        if self._return_date is not None:
            return fees.days_late(self._due_date, self._return_date)
        return fees.days_late(self._due_date, on or date.today())

    def is_overdue(self, on: Optional[date] = None) -> bool:
        return not self.is_returned and self.days_overdue(on) > 0

    def accrued_fees(self, on: Optional[date] = None) -> Decimal:
        """Sum of the per-item fees owed if the loan were returned on ``on``."""
        late = self.days_overdue(on)
        return sum((item.calculate_late_fee(late) for item in self._items), fees.ZERO)

    def __repr__(self) -> str:
        ids = ", ".join(item.item_id for item in self._items)
        return f"Loan({self._member.member_id!r}, [{ids}], due={self._due_date.isoformat()}, {self._status.name})"

    def to_dict(self, on: Optional[date] = None) -> dict:
        return {
            "member_id": self._member.member_id,
            "member": self._member.name,
            "items": [item.item_id for item in self._items],
            "titles": [item.title for item in self._items],
            "borrow_date": self._borrow_date.isoformat(),
            "due_date": self._due_date.isoformat(),
            "return_date": self._return_date.isoformat() if self._return_date else None,
            "status": self._status.value,
            "days_late": self.days_overdue(on),
            "fee": str(self.accrued_fees(on)),
        }
