"""
Canonical bencode codec.

    >>> from bencanon import decode, encode
    >>> value = decode(b"d3:cow3:moo4:spam4:eggse")
    >>> encode(value)
    b'd3:cow3:moo4:spam4:eggse'

"""

from ._version import __version__
from .decoder import DecodeOptions, decode, decode_prefix
from .encoder import encode
from .errors import BencodeError, DecodeError, EncodingError, ErrorKind
from .value import (
    ByteString,
    Dict,
    Integer,
    List,
    Value,
    ValueType,
    from_python,
    to_bytestring,
    to_python,
)
