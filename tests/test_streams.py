import pytest

from pystruct.enum import Endianess
from pystruct.streams import Buffer


def test_buffer_init():
    assert Buffer(3).getvalue() == b'\x00\x00\x00'
    assert Buffer(b'ab').getvalue() == b'ab'
    assert Buffer(memoryview(b'ab')).getvalue() == b'ab'

    data = bytearray(2)
    buffer = Buffer(data)

    assert buffer.obj is data
    assert len(buffer) == 2
    assert repr(buffer) == '<Buffer(2)>'

    with pytest.raises(ValueError):
        Buffer('/tmp/some/path')


def test_buffer_integers():
    buffer = Buffer(b'\x01\x02')

    assert buffer.read('uint', 2, Endianess.LITTLE_ENDIAN, 0) == 0x0201
    assert buffer.read('uint', 2, Endianess.BIG_ENDIAN, 0) == 0x0102
    assert buffer.read('int', 1, Endianess.BIG_ENDIAN, 1) == 2

    buffer.write('int', 2, Endianess.BIG_ENDIAN, 0, -2)

    assert buffer.getvalue() == b'\xff\xfe'
    assert buffer[1] == 0xfe


def test_buffer_floats():
    buffer = Buffer(8)
    buffer.write('float', 8, Endianess.LITTLE_ENDIAN, 0, 0.1)

    assert buffer.read('float', 8, Endianess.LITTLE_ENDIAN, 0) == 0.1

    buffer.write('float', 4, Endianess.BIG_ENDIAN, 4, 49.75)

    assert buffer.read_bytes(4, 4) == b'\x42\x47\x00\x00'


def test_buffer_out_of_bounds():
    buffer = Buffer(3)

    with pytest.raises(ValueError):
        buffer.read('uint', 4, Endianess.LITTLE_ENDIAN, 0)

    with pytest.raises(ValueError):
        buffer.write('uint', 2, Endianess.LITTLE_ENDIAN, 2, 0)

    # nothing has been written
    assert buffer.getvalue() == b'\x00\x00\x00'


def test_buffer_bytes():
    buffer = Buffer(6)
    buffer.write_bytes(1, b'abc')
    buffer.fill(4, 6, 0x2a)

    assert buffer.getvalue() == b'\x00abc**'
    assert buffer.read_bytes(4, 10) == b'**'
    assert buffer.find(0, 1, 6) == -1
    assert buffer.find(0x2a, 0, 6) == 4


def test_buffer_float_overflow():
    buffer = Buffer(4)

    with pytest.raises(OverflowError):
        buffer.write('float', 4, Endianess.BIG_ENDIAN, 0, 1e40)

    assert buffer.getvalue() == b'\x00\x00\x00\x00'

    buffer.write('float', 4, Endianess.BIG_ENDIAN, 0, float('-inf'))

    assert buffer.getvalue() == b'\xff\x80\x00\x00'
