from datetime import date, timedelta
from decimal import Decimal

import pytest

from lms.exceptions import LoanNotFoundError
from lms.item import LibraryItem
from lms.loan import Loan
from lms.member import Member


@pytest.fixture
def member():
    return Member("A002", "Amirul Danial")


def _loan(member, item_id, kind="book", borrow_date=date(2025, 2, 1)):
    if kind == "book":
        item = LibraryItem.book(f"Title {item_id}", item_id, "Author", "isbn")
    else:
        item = LibraryItem.magazine(f"Issue {item_id}", item_id, "1")
    return Loan(member, item, borrow_date=borrow_date)


def test_new_member_has_no_loans(member):
    assert member.get_loans() == ()
    assert not member.has_loans()


def test_add_loan_keeps_order_without_dedup(member):
    first = _loan(member, "B1")
    second = _loan(member, "B2")
    member.add_loan(first)
    member.add_loan(second)
    member.add_loan(first)

    assert member.loans == (first, second, first)


def test_loans_is_a_snapshot(member):
    member.add_loan(_loan(member, "B1"))
    snapshot = member.get_loans()
    assert isinstance(snapshot, tuple)

    member.add_loan(_loan(member, "B2"))
    assert len(snapshot) == 1
    assert len(member.loans) == 2


def test_remove_loan(member):
    loans = [_loan(member, f"B{n}") for n in range(3)]
    for loan in loans:
        member.add_loan(loan)

    member.remove_loan(loans[1])

    assert len(member.loans) == 2
    assert loans[1] not in member.loans


def test_remove_unknown_loan_raises(member):
    with pytest.raises(LoanNotFoundError):
        member.remove_loan(_loan(member, "B9"))


def test_find_loan_by_item(member):
    loan = _loan(member, "B1")
    member.add_loan(loan)
    assert member.find_loan("B1") is loan
    assert member.find_loan("B2") is None


def test_outstanding_fees(member):
    book_loan = _loan(member, "B1")
    magazine_loan = _loan(member, "M1", kind="magazine")
    member.add_loan(book_loan)
    member.add_loan(magazine_loan)

    on = book_loan.due_date + timedelta(days=4)
    assert member.outstanding_fees(on) == Decimal("6.00")
    assert member.outstanding_fees(book_loan.due_date) == Decimal("0")
