from datetime import date

import pytest

from lms.library import Library
from lms.sample_data import seed_library

# Fixed "today" so fee and due-date assertions do not depend on the clock
TODAY = date(2025, 3, 10)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def lib():
    # Her test için örnek verilerle doldurulmuş yeni bir kütüphane
    return seed_library(Library(), today=TODAY)


@pytest.fixture
def empty_lib():
    return Library()


@pytest.fixture
def cli_lib(monkeypatch):
    """Fresh seeded library behind the CLI singleton, plain output mode."""
    from main import LibraryManager

    monkeypatch.setenv("LIB_CLI_OUTPUT", "plain")
    library = seed_library(Library())
    LibraryManager.reset(library)
    yield library
    LibraryManager.reset()
