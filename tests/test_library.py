from datetime import timedelta
from decimal import Decimal

import pytest

from lms.enums import ItemStatus
from lms.exceptions import (
    DuplicateItemError,
    DuplicateMemberError,
    ItemNotFoundError,
    ItemUnavailableError,
    LoanNotFoundError,
)
from lms.item import LibraryItem
from lms.member import Member


def test_add_list_and_find(empty_lib):
    assert empty_lib.list_items() == []

    item = LibraryItem.book("Ulysses", "B100", "James Joyce", "9780199535675")
    empty_lib.add_item(item)

    assert empty_lib.find_item("B100") is item
    assert empty_lib.find_item(" b100 ") is item
    assert len(empty_lib.list_items()) == 1


def test_find_missing_returns_none(lib):
    assert lib.find_item("X999") is None
    assert lib.find_member("Z001") is None


def test_add_duplicate_item(empty_lib):
    empty_lib.add_item(LibraryItem.dvd("Alien", "D100", "Ridley Scott"))
    with pytest.raises(DuplicateItemError, match="Item with ID D100 already exists."):
        empty_lib.add_item(LibraryItem.dvd("Aliens", "D100", "James Cameron"))
    assert len(empty_lib.list_items()) == 1


def test_add_item_with_blank_title(empty_lib):
    with pytest.raises(ValueError):
        empty_lib.add_item(LibraryItem.dvd("   ", "D100", "Nobody"))


def test_register_duplicate_member(empty_lib):
    empty_lib.register_member(Member("A100", "Ada"))
    with pytest.raises(DuplicateMemberError):
        empty_lib.register_member(Member("A100", "Grace"))


def test_sample_data(lib, today):
    assert [i.item_id for i in lib.list_items()] == ["B001", "B002", "B003", "M001", "D001"]
    assert [m.member_id for m in lib.list_members()] == ["A001", "A002", "A003", "A004"]

    aleesya = lib.find_member("A001")
    (loan,) = aleesya.loans
    assert loan.item.item_id == "B001"
    assert loan.due_date == today - timedelta(days=5)
    assert loan.borrow_date == today
    assert loan.to_dict(today)["borrow_date"] == today.isoformat()
    assert lib.find_item("B001").status is ItemStatus.BORROWED
    assert aleesya.outstanding_fees(today) == Decimal("5.00")


def test_borrow_item(lib, today):
    member = lib.find_member("A002")
    loan = lib.borrow_item(member, "D001", on=today)

    assert loan.due_date == today + timedelta(days=14)
    assert member.loans == (loan,)
    assert lib.find_item("D001").status is ItemStatus.BORROWED
    assert lib.find_item("D001") not in lib.available_items()


def test_borrow_unknown_item(lib):
    with pytest.raises(ItemNotFoundError):
        lib.borrow_item(lib.find_member("A002"), "X404")


def test_borrow_unavailable_item(lib):
    member = lib.find_member("A002")
    with pytest.raises(ItemUnavailableError):
        lib.borrow_item(member, "B001")
    assert member.loans == ()


def test_borrow_n_then_return_one(lib, today):
    member = lib.find_member("A003")
    loans = [lib.borrow_item(member, item_id, on=today) for item_id in ("B002", "B003", "M001")]
    assert len(member.get_loans()) == 3

    receipt = lib.return_item(member, "B003", on=today)

    assert len(member.get_loans()) == 2
    assert loans[1] not in member.get_loans()
    assert receipt.loan is loans[1]
    assert not receipt.was_late
    assert lib.find_item("B003").status is ItemStatus.AVAILABLE


def test_return_overdue_sample_loan(lib, today):
    member = lib.find_member("A001")
    receipt = lib.return_item(member, "B001", on=today)

    assert receipt.days_late == 5
    assert receipt.total_fee == Decimal("5.00")
    assert not member.has_loans()
    assert lib.find_item("B001").is_available


def test_return_without_loan(lib):
    with pytest.raises(LoanNotFoundError):
        lib.return_item(lib.find_member("A002"), "B001")
    with pytest.raises(LoanNotFoundError):
        lib.return_item(lib.find_member("A002"), "X404")


def test_current_and_overdue_loans(lib, today):
    member = lib.find_member("A004")
    lib.borrow_item(member, "M001", on=today)

    current = lib.current_loans()
    assert [(m.member_id, l.item.item_id) for m, l in current] == [("A001", "B001"), ("A004", "M001")]

    overdue = lib.overdue_loans(on=today)
    assert [(m.member_id, l.item.item_id) for m, l in overdue] == [("A001", "B001")]


def test_get_statistics(lib, today):
    stats = lib.get_statistics(on=today)
    assert stats["total_items"] == 5
    assert stats["available_items"] == 4
    assert stats["borrowed_items"] == 1
    assert stats["items_by_kind"] == {"Book": 3, "Magazine": 1, "DVD": 1}
    assert stats["members"] == 4
    assert stats["active_loans"] == 1
    assert stats["overdue_loans"] == 1
    assert stats["outstanding_fees"] == Decimal("5.00")
