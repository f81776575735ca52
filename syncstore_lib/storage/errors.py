"""Exception types raised by synchronized stores."""


class StoreError(Exception):
    """Base class for store failures other than plain I/O errors."""


class UnsupportedValueError(StoreError, TypeError):
    """A value (or key) cannot be represented by the store's file format."""


class StoreFormatError(StoreError, ValueError):
    """The backing file exists but its content cannot be parsed."""
