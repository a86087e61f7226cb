"""
Encode to canonical bencode.

Dict entries are always written in ascending byte order of their keys, so
equal value trees encode to identical bytes however their dicts were filled.

"""

from .errors import EncodingError
from .value import Value, ValueType, from_python


# Marks the end of a container on the work stack
_END = object()


def encode(value):
    """Encode a Value (or plain Python data) to bencode, return bytes."""
    if not isinstance(value, Value):
        value = from_python(value)

    binary = []
    append = binary.append
    stack = [value]
    pop = stack.pop
    push = stack.append
    # ids of the containers currently open
    active = set()
    while stack:
        value = pop()
        if isinstance(value, tuple):
            # (_END, id of the container being closed)
            active.discard(value[1])
            append(b"e")
            continue
        value_type = value.type
        if value_type == ValueType.integer:
            append("i{}e".format(value.value).encode())
        elif value_type == ValueType.bytestring:
            append("{}:".format(len(value.data)).encode())
            append(value.data)
        elif value_type == ValueType.list or value_type == ValueType.dict:
            if id(value) in active:
                raise EncodingError("cyclic structure can not be encoded in bencode")
            active.add(id(value))
            push((_END, id(value)))
            if value_type == ValueType.list:
                append(b"l")
                stack.extend(reversed(value.items))
            else:
                append(b"d")
                for key, item in reversed(value.sorted_items()):
                    push(item)
                    push(key)
        else:
            raise EncodingError("value {!r} can not be encoded in bencode".format(value))
    return b"".join(binary)
