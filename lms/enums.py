from enum import Enum


class ItemKind(Enum):
    BOOK = "Book"
    MAGAZINE = "Magazine"
    DVD = "DVD"


class ItemStatus(Enum):
    AVAILABLE = "Available"
    BORROWED = "Borrowed"


class LoanStatus(Enum):
    ACTIVE = "Active"
    RETURNED = "Returned"
