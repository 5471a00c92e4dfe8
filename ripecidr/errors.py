# ripecidr/errors.py


class RipeCidrError(Exception):
    """Base class for all ripecidr errors."""


class MalformedRecordError(RipeCidrError, ValueError):
    """An attribute value does not have the expected shape (e.g. no range dash)."""


class AddressParseError(RipeCidrError, ValueError):
    """An address literal is not a dotted-quad IPv4 address."""


class InvalidRangeError(RipeCidrError, ValueError):
    """A range is empty (start > end) or falls outside the IPv4 space."""


class DatabaseNotFoundError(RipeCidrError, FileNotFoundError):
    """The local inetnum database file does not exist."""
