"""
A bounds checked cursor over an input buffer.

"""

from .errors import DecodeError, ErrorKind


_DIGITS = frozenset(b"0123456789")


class Reader(object):
    """Reads bytes from a buffer, raising UNEXPECTED_EOF rather than running off the end."""

    def __init__(self, buffer, offset=0):
        self._buffer = memoryview(buffer).cast("B")
        self._size = len(self._buffer)
        self._pos = offset

    def __repr__(self):
        return "<reader {}/{}>".format(self._pos, self._size)

    @property
    def position(self):
        return self._pos

    def remaining(self):
        return self._size - self._pos

    def _eof(self, wanted=1):
        return DecodeError(
            ErrorKind.unexpected_eof,
            self._size,
            "needed {} byte(s) at offset {}, {} remaining".format(
                wanted, self._pos, self.remaining()
            ),
        )

    def peek(self):
        """Get the next byte (as an int) without advancing."""
        if self._pos >= self._size:
            raise self._eof()
        return self._buffer[self._pos]

    def take_byte(self):
        """Consume and return the next byte."""
        byte = self.peek()
        self._pos += 1
        return byte

    def take_exact(self, count):
        """Consume exactly `count` bytes, returned as bytes."""
        if count > self.remaining():
            raise self._eof(count)
        start = self._pos
        self._pos += count
        return self._buffer[start : self._pos].tobytes()

    def take_digits(self):
        """Consume the run of ascii digits at the cursor (may be empty)."""
        start = pos = self._pos
        buffer = self._buffer
        size = self._size
        while pos < size and buffer[pos] in _DIGITS:
            pos += 1
        self._pos = pos
        return buffer[start:pos].tobytes()

    def expect(self, byte, kind, text):
        """Consume `byte`, or raise an error of the given kind."""
        if self.peek() != byte:
            raise DecodeError(kind, self._pos, text)
        self._pos += 1
