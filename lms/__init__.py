"""Library Loans - Core Application Package

This package contains the core modules including:
- Item catalog records (item.py, enums.py)
- Late fee policy (fees.py)
- Members and loans (member.py, loan.py)
- Library service orchestrating borrow/return (library.py)
- Demo catalog (sample_data.py)
"""

from lms.enums import ItemKind, ItemStatus, LoanStatus
from lms.item import LibraryItem
from lms.member import Member
from lms.loan import LateFee, Loan
from lms.library import Library, ReturnReceipt

__all__ = [
    "ItemKind",
    "ItemStatus",
    "LoanStatus",
    "LibraryItem",
    "Member",
    "LateFee",
    "Loan",
    "Library",
    "ReturnReceipt",
]
