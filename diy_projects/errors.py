from __future__ import annotations


class DbError(RuntimeError):
    """Raised when a connection, statement or result set fails.

    The underlying driver exception is always chained as ``__cause__``.
    """


class InputError(ValueError):
    """Raised when console input cannot be parsed into the expected type."""
