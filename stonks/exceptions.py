"""Exception hierarchy for stock construction, advancement and storage."""


class StonksError(Exception):
    """Base class for every error raised by this package."""


class InvalidStateError(StonksError, ValueError):
    """A stock was constructed from values that violate its invariants."""


class InvalidArgumentError(StonksError, ValueError):
    """An operation was called with an argument outside its contract."""


class StorageError(StonksError, OSError):
    """The stocks file could not be read, parsed or written."""
