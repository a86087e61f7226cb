"""
Decode bencode (http://en.wikipedia.org/wiki/Bencode)

The parser is a loop over an explicit stack of open containers, so input
nesting is limited by `max_depth` alone and never by the interpreter
recursion limit.

"""

from collections import namedtuple
import logging

from .constants import DEFAULT_MAX_DEPTH, INT64_MAX, INT64_MAX_DIGITS, INT64_MIN
from .errors import DecodeError, ErrorKind
from .reader import Reader
from .value import ByteString, Dict, Integer, List


log = logging.getLogger("bencanon")


_MARKER_INT = ord("i")
_MARKER_LIST = ord("l")
_MARKER_DICT = ord("d")
_MARKER_END = ord("e")
_MINUS = ord("-")
_COLON = ord(":")
_ZERO = ord("0")
_NINE = ord("9")


class DecodeOptions(
    namedtuple("DecodeOptions", ["max_depth", "max_length", "strict_canonical"])
):
    """Limits and policy for a single decode call.

    Args:
        max_depth (int): Maximum nesting of lists / dicts.
        max_length (int): Maximum declared byte string length, and maximum
            number of elements in one list or dict. None bounds both by the
            size of the input buffer.
        strict_canonical (bool): Reject dicts whose keys are not unique and
            in ascending byte order.
    """

    __slots__ = ()

    def __new__(cls, max_depth=DEFAULT_MAX_DEPTH, max_length=None, strict_canonical=False):
        if max_depth < 0:
            raise ValueError("max_depth must not be negative")
        if max_length is not None and max_length < 0:
            raise ValueError("max_length must not be negative")
        return super(DecodeOptions, cls).__new__(
            cls, max_depth, max_length, bool(strict_canonical)
        )


class _Frame(object):
    """A list or dict that is still being read."""

    __slots__ = ["value", "is_dict", "count", "key", "last_key"]

    def __init__(self, value):
        self.value = value
        self.is_dict = isinstance(value, Dict)
        self.count = 0
        # Dict only: key waiting for its value, and the previous key read
        self.key = None
        self.last_key = None


class _Decoder(object):
    def __init__(self, reader, options):
        self.reader = reader
        self.max_depth = options.max_depth
        self.max_length = options.max_length
        self.strict = options.strict_canonical

    def decode(self):
        reader = self.reader
        stack = []
        while True:
            if stack:
                frame = stack[-1]
                if reader.peek() == _MARKER_END:
                    if frame.key is not None:
                        raise DecodeError(
                            ErrorKind.invalid_leading_byte,
                            reader.position,
                            "dictionary key {!r} without value".format(frame.key.data),
                        )
                    reader.take_byte()
                    value = stack.pop().value
                elif frame.is_dict and frame.key is None:
                    self._read_key(frame)
                    continue
                else:
                    if not frame.is_dict:
                        self._count(frame)
                    value = self._read_value(stack)
            else:
                value = self._read_value(stack)

            if value is None:
                # Opened a container
                continue
            if not stack:
                return value
            frame = stack[-1]
            if frame.is_dict:
                # Last occurrence of a repeated key wins
                frame.value.entries[frame.key] = value
                frame.key = None
            else:
                frame.value.items.append(value)

    def _count(self, frame):
        frame.count += 1
        if self.max_length is not None and frame.count > self.max_length:
            raise DecodeError(
                ErrorKind.length_limit_exceeded,
                self.reader.position,
                "more than {} elements in container".format(self.max_length),
            )

    def _read_value(self, stack):
        """Read a scalar, or push a new container and return None."""
        reader = self.reader
        offset = reader.position
        byte = reader.peek()
        if byte == _MARKER_INT:
            return self._read_integer()
        if _ZERO <= byte <= _NINE:
            return ByteString(self._read_bytestring())
        if byte == _MARKER_LIST or byte == _MARKER_DICT:
            if len(stack) >= self.max_depth:
                raise DecodeError(
                    ErrorKind.max_depth_exceeded,
                    offset,
                    "containers nested deeper than {}".format(self.max_depth),
                )
            reader.take_byte()
            stack.append(_Frame(List() if byte == _MARKER_LIST else Dict()))
            return None
        raise DecodeError(
            ErrorKind.invalid_leading_byte,
            offset,
            "invalid token {!r}".format(bytes([byte])),
        )

    def _read_key(self, frame):
        reader = self.reader
        self._count(frame)
        offset = reader.position
        byte = reader.peek()
        if not _ZERO <= byte <= _NINE:
            raise DecodeError(
                ErrorKind.invalid_key_type,
                offset,
                "dictionary keys must be byte strings, found {!r}".format(bytes([byte])),
            )
        key = self._read_bytestring()
        if self.strict and frame.last_key is not None:
            if key == frame.last_key:
                raise DecodeError(
                    ErrorKind.duplicate_key, offset, "duplicate key {!r}".format(key)
                )
            if key < frame.last_key:
                raise DecodeError(
                    ErrorKind.unsorted_key,
                    offset,
                    "key {!r} sorts before {!r}".format(key, frame.last_key),
                )
        frame.last_key = key
        frame.key = ByteString(key)

    def _read_integer(self):
        reader = self.reader
        reader.take_byte()
        negative = reader.peek() == _MINUS
        if negative:
            reader.take_byte()
        offset = reader.position
        digits = reader.take_digits()
        if not digits:
            byte = reader.peek()
            raise DecodeError(
                ErrorKind.invalid_integer,
                reader.position,
                "expected a digit, found {!r}".format(bytes([byte])),
            )
        if digits[0] == _ZERO:
            if negative:
                raise DecodeError(ErrorKind.invalid_integer, offset, "negative zero")
            if len(digits) > 1:
                raise DecodeError(ErrorKind.invalid_integer, offset, "leading zero")
        if len(digits) > INT64_MAX_DIGITS:
            raise DecodeError(
                ErrorKind.integer_overflow, offset, "integer does not fit in 64 bits"
            )
        number = int(digits)
        if negative:
            number = -number
        if not INT64_MIN <= number <= INT64_MAX:
            raise DecodeError(
                ErrorKind.integer_overflow, offset, "integer does not fit in 64 bits"
            )
        reader.expect(_MARKER_END, ErrorKind.invalid_integer, "expected 'e' after integer")
        return Integer(number)

    def _read_bytestring(self):
        reader = self.reader
        offset = reader.position
        digits = reader.take_digits()
        if len(digits) > 1 and digits[0] == _ZERO:
            raise DecodeError(
                ErrorKind.invalid_string_length, offset, "leading zero in string length"
            )
        if len(digits) > INT64_MAX_DIGITS:
            raise DecodeError(
                ErrorKind.length_limit_exceeded, offset, "string length is too large"
            )
        length = int(digits)
        if self.max_length is not None and length > self.max_length:
            raise DecodeError(
                ErrorKind.length_limit_exceeded,
                offset,
                "string length {} is over the limit of {}".format(length, self.max_length),
            )
        reader.expect(
            _COLON, ErrorKind.invalid_string_length, "expected ':' after string length"
        )
        return reader.take_exact(length)


def decode_prefix(data, options=None):
    """Decode the bencode value at the start of `data`.

    Bytes after the value are left alone.

    Returns:
        tuple: (value, number of bytes consumed)

    Raises:
        DecodeError: if the data does not start with a valid value.
    """
    if isinstance(data, str):
        raise TypeError("decode takes bytes, not str")
    if options is None:
        options = DecodeOptions()
    reader = Reader(data)
    try:
        value = _Decoder(reader, options).decode()
    except DecodeError as error:
        log.debug("rejected bencode input; %s", error)
        raise
    return value, reader.position


def decode(data, options=None):
    """Decode a buffer holding exactly one bencode value, return a Value."""
    value, consumed = decode_prefix(data, options)
    size = len(memoryview(data).cast("B"))
    if consumed != size:
        error = DecodeError(
            ErrorKind.trailing_data,
            consumed,
            "{} byte(s) after valid value".format(size - consumed),
        )
        log.debug("rejected bencode input; %s", error)
        raise error
    return value
