"""
The bencode value model.

A decoded term is one of four classes, tagged by ValueType:

    Integer     signed 64 bit whole number
    ByteString  opaque bytes of explicit length
    List        ordered sequence of values
    Dict        mapping of ByteString keys on to values

"""

from enum import IntEnum, unique

from .constants import INT64_MAX, INT64_MIN
from .errors import EncodingError


@unique
class ValueType(IntEnum):
    """Tag identifying the kind of a Value."""

    integer = 0
    bytestring = 1
    list = 2
    dict = 3


class Value(object):
    """Base class for the four bencode value kinds."""

    __slots__ = []

    # Set by each subclass
    type = None

    def to_python(self):
        """Convert to plain Python data (int, bytes, list, dict)."""
        return to_python(self)


class Integer(Value):
    """A signed whole number."""

    __slots__ = ["value"]

    type = ValueType.integer

    def __init__(self, value):
        if isinstance(value, bool) or not isinstance(value, int):
            raise EncodingError("integer value must be an int, not {!r}".format(type(value)))
        # Plain int, so subclasses can not change how the value is written
        value = int(value)
        if not INT64_MIN <= value <= INT64_MAX:
            raise EncodingError("integer {} does not fit in 64 bits".format(value))
        self.value = value

    def __repr__(self):
        return "Integer({!r})".format(self.value)

    def __eq__(self, other):
        return isinstance(other, Integer) and other.value == self.value

    def __hash__(self):
        return hash((self.type, self.value))

    def __int__(self):
        return self.value


class ByteString(Value):
    """An opaque string of bytes. Not text, may hold any byte value."""

    __slots__ = ["data"]

    type = ValueType.bytestring

    def __init__(self, data=b""):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise EncodingError("byte string data must be bytes, not {!r}".format(type(data)))
        self.data = bytes(data)

    def __repr__(self):
        return "ByteString({!r})".format(self.data)

    def __str__(self):
        return self.data.decode("utf-8", "replace")

    def __bytes__(self):
        return self.data

    def __len__(self):
        return len(self.data)

    def __eq__(self, other):
        return isinstance(other, ByteString) and other.data == self.data

    def __hash__(self):
        return hash(self.data)

    def __lt__(self, other):
        if not isinstance(other, ByteString):
            return NotImplemented
        return self.data < other.data

    def __le__(self, other):
        if not isinstance(other, ByteString):
            return NotImplemented
        return self.data <= other.data

    def __gt__(self, other):
        if not isinstance(other, ByteString):
            return NotImplemented
        return self.data > other.data

    def __ge__(self, other):
        if not isinstance(other, ByteString):
            return NotImplemented
        return self.data >= other.data


def to_bytestring(obj):
    """Get a ByteString from a ByteString, bytes-like object or text (utf-8)."""
    if isinstance(obj, ByteString):
        return obj
    if isinstance(obj, str):
        return ByteString(obj.encode("utf-8"))
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return ByteString(obj)
    raise EncodingError("{!r} can not be used as a byte string".format(obj))


def _check_value(obj):
    if not isinstance(obj, Value):
        raise EncodingError("{!r} is not a bencode value".format(obj))
    return obj


class List(Value):
    """An ordered sequence of values."""

    __slots__ = ["items"]

    type = ValueType.list

    def __init__(self, items=()):
        self.items = [_check_value(item) for item in items]

    def __repr__(self):
        return "List({!r})".format(self.items)

    def __eq__(self, other):
        return isinstance(other, List) and other.items == self.items

    __hash__ = None

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]

    def append(self, item):
        self.items.append(_check_value(item))


class Dict(Value):
    """
    A mapping of ByteString keys on to values.

    Keys may be given as anything `to_bytestring` accepts. The mapping keeps
    insertion order, but that order has no bearing on the encoded form.

    """

    __slots__ = ["entries"]

    type = ValueType.dict

    def __init__(self, items=()):
        self.entries = {}
        if hasattr(items, "items"):
            items = items.items()
        for key, value in items:
            self[key] = value

    def __repr__(self):
        return "Dict({!r})".format(self.entries)

    def __eq__(self, other):
        return isinstance(other, Dict) and other.entries == self.entries

    __hash__ = None

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __contains__(self, key):
        try:
            return to_bytestring(key) in self.entries
        except EncodingError:
            return False

    def __getitem__(self, key):
        return self.entries[to_bytestring(key)]

    def __setitem__(self, key, value):
        # A repeated key keeps its first position and its last value
        self.entries[to_bytestring(key)] = _check_value(value)

    def get(self, key, default=None):
        return self.entries.get(to_bytestring(key), default)

    def keys(self):
        return self.entries.keys()

    def values(self):
        return self.entries.values()

    def items(self):
        return self.entries.items()

    def sorted_items(self):
        """Entries in canonical (ascending byte) key order."""
        return sorted(self.entries.items(), key=lambda item: item[0].data)


def from_python(obj):
    """Build a Value tree from plain Python data.

    Args:
        obj: int, bytes-like, str (encoded as utf-8), list or tuple, dict with
            bytes or str keys, or an existing Value.

    Returns:
        Value: The equivalent value tree.

    Raises:
        EncodingError: if anything in obj has no bencode equivalent.
    """
    root = []
    # Each entry is (python object, callback that stores the converted value)
    stack = [(obj, root.append)]
    # ids of the containers on the path from the root to the current object
    active = set()
    while stack:
        obj, store = stack.pop()
        if obj is _LEAVE:
            active.discard(store)
        elif isinstance(obj, Value):
            store(obj)
        elif isinstance(obj, bool):
            raise EncodingError("value {!r} can not be encoded in bencode".format(obj))
        elif isinstance(obj, int):
            store(Integer(obj))
        elif isinstance(obj, (bytes, bytearray, memoryview, str)):
            store(to_bytestring(obj))
        elif isinstance(obj, (list, tuple)):
            _enter(active, stack, obj)
            new_list = List()
            store(new_list)
            # Filled in order once the placeholders are resolved
            slots = [None] * len(obj)
            new_list.items = slots
            for index, item in enumerate(obj):
                stack.append((item, _slot_setter(slots, index)))
        elif isinstance(obj, dict):
            _enter(active, stack, obj)
            new_dict = Dict()
            store(new_dict)
            for key, item in obj.items():
                if not isinstance(key, (bytes, bytearray, memoryview, str, ByteString)):
                    raise EncodingError("dict keys must be bytes or str, not {!r}".format(key))
                stack.append((item, _key_setter(new_dict, to_bytestring(key))))
        else:
            raise EncodingError("value {!r} can not be encoded in bencode".format(obj))
    return root[0]


# Marks the point where a container's children have all been converted
_LEAVE = object()


def _enter(active, stack, container):
    """Put a container on the current path, failing if it is already there."""
    container_id = id(container)
    if container_id in active:
        raise EncodingError("cyclic structure can not be encoded in bencode")
    active.add(container_id)
    stack.append((_LEAVE, container_id))


def _slot_setter(slots, index):
    def store(value):
        slots[index] = value
    return store


def _key_setter(new_dict, key):
    # Reserve the key position now so insertion order follows the source
    new_dict.entries[key] = None

    def store(value):
        new_dict.entries[key] = value
    return store


def to_python(value):
    """Convert a Value tree to plain Python data."""
    root = []
    stack = [(value, root.append)]
    active = set()
    while stack:
        value, store = stack.pop()
        if value is _LEAVE:
            active.discard(store)
            continue
        value_type = value.type
        if value_type == ValueType.integer:
            store(value.value)
        elif value_type == ValueType.bytestring:
            store(value.data)
        elif value_type == ValueType.list:
            _enter(active, stack, value)
            slots = [None] * len(value.items)
            store(slots)
            for index, item in enumerate(value.items):
                stack.append((item, _slot_setter(slots, index)))
        elif value_type == ValueType.dict:
            _enter(active, stack, value)
            result = {}
            store(result)
            for key, item in value.entries.items():
                result[key.data] = None
                stack.append((item, _item_setter(result, key.data)))
        else:
            raise EncodingError("unknown value type {!r}".format(value_type))
    return root[0]


def _item_setter(result, key):
    def store(value):
        result[key] = value
    return store
