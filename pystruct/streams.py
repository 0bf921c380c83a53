import logging
import math

import bitstring

from .enum import Endianess


logger = logging.getLogger(__name__)

# bitstring interpretations, the width is appended when packing
TOKENS = {
    ('int', Endianess.LITTLE_ENDIAN): 'intle',
    ('int', Endianess.BIG_ENDIAN): 'intbe',
    ('uint', Endianess.LITTLE_ENDIAN): 'uintle',
    ('uint', Endianess.BIG_ENDIAN): 'uintbe',
    ('float', Endianess.LITTLE_ENDIAN): 'floatle',
    ('float', Endianess.BIG_ENDIAN): 'floatbe',
}


def get_token(kind: str, endianess: Endianess, width: int) -> str:
    if width == 1 and kind != 'float':  # a single byte has no byte order
        return kind

    return TOKENS[(kind, endianess)]


class Buffer(object):
    '''Fixed-size mutable array of bytes with read/write primitives at a
    given offset for each numeric width and byte order.

    It wraps whatever the caller passes in order to be accessed in the same
    way: raw bytes are copied (they are read-only), a bytearray is used in
    place and an integer allocates that many zeroed bytes.'''
    def __init__(self, obj):
        self._type = type(obj)
        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)
        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of object to use as buffer' % self._type.__name__)

        init_method()

    def init_int(self):
        '''We think this is a size'''
        logger.debug('allocating %d bytes' % self.obj)
        self.obj = bytearray(self.obj)

    def init_bytes(self):
        self.obj = bytearray(self.obj)

    def init_memoryview(self):
        self.obj = bytearray(self.obj)

    def init_bytearray(self):
        pass

    def __len__(self):
        return len(self.obj)

    def __getitem__(self, index):
        return self.obj[index]

    def __repr__(self):
        return '<%s(%d)>' % (self.__class__.__name__, len(self))

    def getvalue(self) -> bytes:
        return bytes(self.obj)

    def _check(self, offset, size):
        if offset < 0 or offset + size > len(self.obj):
            raise ValueError('access of %d bytes at offset %d outside of a buffer of %d bytes' % (
                size, offset, len(self.obj)))

    def read(self, kind: str, width: int, endianess: Endianess, offset: int):
        '''Read an integer ("int", "uint") or a float ("float") of "width" bytes.'''
        self._check(offset, width)
        bits = bitstring.Bits(bytes(self.obj[offset:offset + width]))

        return getattr(bits, get_token(kind, endianess, width))

    def write(self, kind: str, width: int, endianess: Endianess, offset: int, value) -> None:
        self._check(offset, width)
        raw = bitstring.pack('%s:%d' % (get_token(kind, endianess, width), width * 8), value).tobytes()
        if kind == 'float' and math.isfinite(value):
            # a finite value too large for the width would be written as inf
            if math.isinf(getattr(bitstring.Bits(raw), get_token(kind, endianess, width))):
                raise OverflowError('%r is too large for a float of %d bytes' % (value, width))
        self.obj[offset:offset + width] = raw

    def read_bytes(self, offset: int, size: int) -> bytes:
        '''It returns at most "size" bytes, less if the buffer ends before.'''
        return bytes(self.obj[offset:offset + size])

    def write_bytes(self, offset: int, data: bytes) -> None:
        self._check(offset, len(data))
        self.obj[offset:offset + len(data)] = data

    def fill(self, offset: int, end: int, value: int = 0) -> None:
        if end <= offset:
            return

        self._check(offset, end - offset)
        self.obj[offset:end] = bytes([value]) * (end - offset)

    def find(self, value: int, start: int, end: int) -> int:
        return self.obj.find(value, start, end)
