"""Errors raised by the bencode codec"""

from enum import IntEnum, unique


class BencodeError(Exception):
    """A catch-all for bencode errors"""


@unique
class ErrorKind(IntEnum):
    """The kind of grammar or policy violation found in the input."""

    # Input ended before the value was complete
    unexpected_eof = 0

    # A value started with a byte other than i, l, d or a digit
    invalid_leading_byte = 1

    # Empty digit run, leading zero, bare or negative zero, stray byte
    invalid_integer = 2

    # Integer does not fit in 64 bits
    integer_overflow = 3

    # Malformed byte string length prefix
    invalid_string_length = 4

    # Declared length or element count above max_length
    length_limit_exceeded = 5

    # Containers nested deeper than max_depth
    max_depth_exceeded = 6

    # A dict key that is not a byte string
    invalid_key_type = 7

    # Strict mode only
    duplicate_key = 8
    unsorted_key = 9

    # Bytes left over after the outermost value
    trailing_data = 10


class DecodeError(BencodeError):
    """The data being decoded is not valid bencode."""

    def __init__(self, kind, offset, text):
        self.kind = kind
        self.offset = offset
        self.text = text
        super(DecodeError, self).__init__(kind, offset, text)

    def __str__(self):
        return "{} at offset {}, {}".format(self.kind.name.upper(), self.offset, self.text)


class EncodingError(BencodeError, ValueError):
    """Data can not be represented as a bencode value."""
