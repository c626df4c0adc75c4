"""
Error taxonomy for famledger.

All errors raised by the library derive from LedgerError so callers
(the CLI, or any other front end) can catch the whole family at once.
"""


class LedgerError(Exception):
    """Base class for all famledger errors."""


class ValidationError(LedgerError, ValueError):
    """Invalid input. Raised before the store is touched."""


class EmptySeriesError(ValidationError):
    """Recurrence parameters would generate zero occurrences."""


class StoreUnavailableError(LedgerError):
    """The transaction store failed to read or write.

    Wraps the underlying exception (available as __cause__). Never retried
    internally.
    """


class NotFoundError(LedgerError):
    """A transaction id named by the caller does not exist."""
