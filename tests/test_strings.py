import pytest

from pystruct.enum import Compliant
from pystruct.exceptions import PackException
from pystruct.streams import Buffer
from pystruct.strings import pack_string, unpack_string, pack_pascal, unpack_pascal, to_bytes


def test_unpack_string_stops_at_nul():
    buffer = Buffer(b'ab\x00cd')

    assert unpack_string(buffer, 0, 5) == 'ab'
    assert unpack_string(buffer, 3, 2) == 'cd'
    assert unpack_string(buffer, 0, 1) == 'a'
    assert unpack_string(buffer, 0, 0) == ''


def test_string_utf8():
    buffer = Buffer(8)
    pack_string('héllo', buffer, 0, 8)

    assert buffer.getvalue() == 'héllo'.encode('utf-8') + b'\x00\x00'
    assert unpack_string(buffer, 0, 8) == 'héllo'


def test_string_invalid_utf8_is_replaced():
    assert unpack_string(Buffer(b'a\xffb'), 0, 3) == 'a�b'


def test_pack_string_overwrites_previous_content():
    buffer = Buffer(b'xxxxx')
    pack_string('ab', buffer, 1, 3)

    assert buffer.getvalue() == b'xab\x00x'


def test_pascal_reads_its_own_prefix():
    buffer = Buffer(b'\x09\x02abz')

    assert unpack_pascal(buffer, 1, 4) == 'ab'


def test_pack_pascal():
    buffer = Buffer(6)
    pack_pascal(b'abc', buffer, 1, 5)

    assert buffer.getvalue() == b'\x00\x03abc\x00'


def test_pack_pascal_strict():
    buffer = Buffer(3)

    with pytest.raises(PackException) as exc:
        pack_pascal('abc', buffer, 0, 3, Compliant.PASCAL)

    assert exc.value.chain == ['p', 0]


def test_to_bytes():
    assert to_bytes('é') == b'\xc3\xa9'
    assert to_bytes(bytearray(b'ab')) == b'ab'

    with pytest.raises(TypeError):
        to_bytes(123)
