from decimal import Decimal

import pytest

from lms.enums import ItemKind, ItemStatus
from lms.item import LibraryItem


def test_constructors_set_kind_and_details():
    book = LibraryItem.book("Project Hail Mary", "B003", "Andy Weir", "978-0593135204")
    dvd = LibraryItem.dvd("The Hunger Games", "D001", "Gary Ross")
    magazine = LibraryItem.magazine("Mastika", "M001", "January 2025")

    assert book.kind is ItemKind.BOOK
    assert book.details == {"author": "Andy Weir", "isbn": "978-0593135204"}
    assert dvd.details == {"director": "Gary Ross"}
    assert magazine.details == {"issue_number": "January 2025"}


def test_new_item_is_available():
    item = LibraryItem.book("Ulysses", "B100", "James Joyce", "9780199535675")
    assert item.status is ItemStatus.AVAILABLE
    assert item.is_available


def test_identifier_and_status_are_read_only():
    item = LibraryItem.dvd("Alien", "D100", "Ridley Scott")
    with pytest.raises(AttributeError):
        item.item_id = "D999"
    with pytest.raises(AttributeError):
        item.status = ItemStatus.BORROWED


def test_unknown_detail_field_rejected():
    with pytest.raises(ValueError, match="does not accept"):
        LibraryItem(ItemKind.DVD, "Alien", "D100", {"author": "Ridley Scott"})


def test_empty_identifier_rejected():
    with pytest.raises(ValueError):
        LibraryItem.book("Ulysses", "  ", "James Joyce", "9780199535675")


def test_daily_rate_follows_kind():
    assert LibraryItem.book("A", "B1", "x", "y").daily_rate == Decimal("1.00")
    assert LibraryItem.magazine("A", "M1", "1").daily_rate == Decimal("0.50")
    assert LibraryItem.dvd("A", "D1", "x").daily_rate == Decimal("2.00")


def test_to_dict():
    data = LibraryItem.dvd("The Hunger Games", "D001", "Gary Ross").to_dict()
    assert data == {
        "id": "D001",
        "kind": "DVD",
        "title": "The Hunger Games",
        "status": "Available",
        "daily_rate": "2.00",
        "director": "Gary Ross",
    }
