class LibraryError(Exception):
    """Base exception for library errors."""


class ItemNotFoundError(LibraryError, LookupError):
    """No item with the requested id exists in the catalog."""


class MemberNotFoundError(LibraryError, LookupError):
    """No member with the requested id is registered."""


class LoanNotFoundError(LibraryError, LookupError):
    """The member has no active loan for the requested item."""


class ItemUnavailableError(LibraryError, ValueError):
    """The item is already borrowed."""


class DuplicateItemError(LibraryError, ValueError):
    """An item with the same id is already in the catalog."""


class DuplicateMemberError(LibraryError, ValueError):
    """A member with the same id is already registered."""


class LoanAlreadyReturnedError(LibraryError, RuntimeError):
    """on_return was called on a loan that is already returned."""
