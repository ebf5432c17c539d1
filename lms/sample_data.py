"""Demo catalog and members loaded at start-up."""

from datetime import date, timedelta
from typing import Optional

from lms.item import LibraryItem
from lms.library import Library
from lms.loan import Loan
from lms.member import Member

SAMPLE_OVERDUE_DAYS = 5


def seed_library(library: Optional[Library] = None, today: Optional[date] = None) -> Library:
    """Fill ``library`` (or a new one) with the demo items and members.

    Member A001 starts with ``A Little Life`` (B001) on a loan that fell due
    ``SAMPLE_OVERDUE_DAYS`` days before ``today``.
    """
    library = library or Library()
    today = today or date.today()

    library.add_item(LibraryItem.book("A Little Life", "B001", "Hanya Yanagihara", "978-0385539258"))
    library.add_item(LibraryItem.book("The Midnight Library", "B002", "Matt Haig", "978-0525559474"))
    library.add_item(LibraryItem.book("Project Hail Mary", "B003", "Andy Weir", "978-0593135204"))
    library.add_item(LibraryItem.magazine("Mastika", "M001", "January 2025"))
    library.add_item(LibraryItem.dvd("The Hunger Games", "D001", "Gary Ross"))

    aleesya = library.register_member(Member("A001", "Aleesya Najwa"))
    library.register_member(Member("A002", "Amirul Danial"))
    library.register_member(Member("A003", "Alya Natasha"))
    library.register_member(Member("A004", "Arieq Danish"))

    book = library.find_item("B001")
    if book is not None:
        overdue = Loan(aleesya, book, borrow_date=today,
                       due_date=today - timedelta(days=SAMPLE_OVERDUE_DAYS))
        overdue.on_borrow()
        aleesya.add_loan(overdue)

    return library
