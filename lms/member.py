from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional, Tuple

from lms.exceptions import LoanNotFoundError
from lms.fees import ZERO

if TYPE_CHECKING:
    from lms.loan import Loan


class Member:
    """A registered library member and the loans they have not returned yet."""

    def __init__(self, member_id: str, name: str) -> None:
        if not member_id or not member_id.strip():
            raise ValueError("Member id cannot be empty.")
        self._member_id = member_id.strip()
        self.name = name.strip()
        self._loans: List["Loan"] = []

    @property
    def member_id(self) -> str:
        return self._member_id

    @property
    def loans(self) -> Tuple["Loan", ...]:
        """Read-only snapshot of the active loans, in borrow order."""
        return tuple(self._loans)

    def get_loans(self) -> Tuple["Loan", ...]:
        return self.loans

    def has_loans(self) -> bool:
        return bool(self._loans)

    def add_loan(self, loan: "Loan") -> None:
        self._loans.append(loan)

    def remove_loan(self, loan: "Loan") -> None:
        for index, existing in enumerate(self._loans):
            if existing is loan:
                del self._loans[index]
                return
        raise LoanNotFoundError(f"Loan is not active for member {self._member_id}.")

    def find_loan(self, item_id: str) -> Optional["Loan"]:
        """Active loan holding the item with ``item_id``, if any."""
        for loan in self._loans:
            if any(item.item_id == item_id for item in loan.items):
                return loan
        return None

    def outstanding_fees(self, on: Optional[date] = None) -> Decimal:
        """Late fees accrued so far on loans that are still out."""
        return sum((loan.accrued_fees(on) for loan in self._loans), ZERO)

    def __repr__(self) -> str:
        return f"Member({self._member_id!r}, {self.name!r}, loans={len(self._loans)})"

    def to_dict(self) -> dict:
        return {"id": self._member_id, "name": self.name, "active_loans": len(self._loans)}
