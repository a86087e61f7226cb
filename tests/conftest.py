import pytest

from bencanon import DecodeOptions, from_python


METAINFO = (
    b"d8:announce31:http://tracker.example/announce"
    b"4:infod6:lengthi5000000000e4:name8:file.bin"
    b"12:piece lengthi262144e6:pieces20:" + b"\x00" * 20 + b"ee"
)


@pytest.fixture
def metainfo_bytes():
    """ canonical encoding of a small single file torrent
    """
    return METAINFO


@pytest.fixture
def metainfo():
    """ the value tree for metainfo_bytes, with dicts filled out of order
    """
    return from_python({
        b"info": {
            b"pieces": b"\x00" * 20,
            b"name": "file.bin",
            b"piece length": 262144,
            b"length": 5000000000,
        },
        b"announce": b"http://tracker.example/announce",
    })


@pytest.fixture
def strict():
    return DecodeOptions(strict_canonical=True)
