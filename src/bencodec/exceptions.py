"""Exception hierarchy for bencode decoding and encoding.

Decode errors carry the byte offset where the problem was detected, so a
caller can report ``malformed bencode: <reason> (offset N)``.
"""

from typing import Optional


class BencodeError(Exception):
    """Base exception for all bencode errors."""

    def __init__(self, message: str, offset: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.offset = offset

    def __str__(self) -> str:
        if self.offset is not None:
            return f"{self.message} (offset {self.offset})"
        return self.message


class BencodeDecodeError(BencodeError, ValueError):
    """Input is not well-formed canonical bencode."""

    def __str__(self) -> str:
        return f"malformed bencode: {super().__str__()}"


class UnexpectedEof(BencodeDecodeError):
    """Input ended before an item was complete."""


class InvalidLeadByte(BencodeDecodeError):
    """Byte does not start any value where a value was expected."""


class InvalidInteger(BencodeDecodeError):
    """Malformed digits, leading zero, negative zero or overflow."""


class InvalidStringLength(BencodeDecodeError):
    """Malformed length prefix or fewer bytes than declared."""


class InvalidDictionaryKey(BencodeDecodeError):
    """A dictionary key position held something other than a byte string."""


class DuplicateKey(BencodeDecodeError):
    """The same key appeared twice in one dictionary."""


class UnsortedKeys(BencodeDecodeError):
    """Dictionary keys were not in ascending byte order."""


class DepthExceeded(BencodeDecodeError):
    """Containers nested deeper than the configured maximum."""


class InputTooLarge(BencodeDecodeError):
    """An item needed more bytes than the configured input limit."""


class TrailingData(BencodeDecodeError):
    """Bytes remained after the single expected item."""


class BencodeEncodeError(BencodeError):
    """Encoding failed."""


class SinkError(BencodeEncodeError):
    """The output sink refused or truncated a write."""
