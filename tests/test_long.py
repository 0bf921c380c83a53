import pickle

import pytest

from pystruct.long import Long


def test_from_bits():
    value = Long.from_bits(0xffffffff, 0x7fffffff)

    assert value == 2 ** 63 - 1
    assert not value.unsigned

    # the words can be given as signed 32-bit integers too
    assert Long.from_bits(-1, -1) == -1
    assert Long.from_bits(-1, -1, unsigned=True) == 2 ** 64 - 1


def test_words():
    value = Long(0x0123456789abcdef, unsigned=True)

    assert value.high == 0x01234567
    assert value.low == 0x89abcdef

    value = Long(-2)

    assert value.high == 0xffffffff
    assert value.low == 0xfffffffe
    assert value.bits == 2 ** 64 - 2


def test_wrap_preserves_bits():
    assert Long(-1, unsigned=True) == 2 ** 64 - 1
    assert Long(2 ** 64 - 1) == -1
    assert Long(2 ** 63) == -2 ** 63
    assert Long(2 ** 64 + 5) == 5


def test_from_int():
    value = Long.from_int(-5)

    assert isinstance(value, Long)
    assert value == -5
    assert value.high == 0xffffffff

    assert Long.from_int(value) is value
    assert Long.from_int(value, unsigned=True) == 2 ** 64 - 5

    with pytest.raises(TypeError):
        Long.from_int(1.5)


def test_conversions():
    assert Long(-1).to_unsigned() == 2 ** 64 - 1
    assert Long(2 ** 64 - 1, unsigned=True).to_signed() == -1


def test_repr_and_pickle():
    value = Long(-1, unsigned=True)

    assert repr(value) == 'Long(18446744073709551615, unsigned=True)'

    other = pickle.loads(pickle.dumps(value))

    assert other == value
    assert other.unsigned
