"""
Codec registries: for each type code of the format mini-language they
tell how many bytes an element occupies, to which boundary it must be
aligned and how to unpack/pack it.

 x: pad byte (no data)
 c: char
 b: signed byte
 B: unsigned byte
 h: short
 H: unsigned short
 i: int
 I: unsigned int
 l: long
 L: unsigned long
 f: float
 d: double
 s: string (array of char, preceding decimal count indicates length)
 p: pascal string (with count byte, preceding decimal count indicates length)
 P: an integer type that is wide enough to hold a pointer
 q: long long
 Q: unsigned long long
 ?: boolean

There are three registries (native, little endian and big endian), all
generated from the same table: the native one uses the byte order of the
host and aligns each element to its own size, the other two are "standard"
i.e. no padding is ever inserted.

Every codec has the same signature

    unpack(buffer, offset, length, compliant) -> value
    pack(value, buffer, offset, length, compliant)

where "length" is the size of the whole field (only the strings care).
"""
import logging
from functools import lru_cache
from types import MappingProxyType
from typing import Callable, Mapping, NamedTuple, Optional, Tuple

from .enum import Endianess, Compliant
from .host import Host, HOST
from .long import Long
from .strings import unpack_string, pack_string, unpack_pascal, pack_pascal


logger = logging.getLogger(__name__)


class TypeCode(NamedTuple):
    size: int
    alignment: int
    unpack: Optional[Callable]
    pack: Optional[Callable]

    @property
    def is_pad(self) -> bool:
        return self.unpack is None


# code -> (kind, size); None as size means "as wide as a pointer"
CODES = {
    'x': ('pad', 1),
    'c': ('char', 1),
    'b': ('int', 1),
    'B': ('uint', 1),
    'h': ('int', 2),
    'H': ('uint', 2),
    'i': ('int', 4),
    'I': ('uint', 4),
    'l': ('int', 4),
    'L': ('uint', 4),
    'f': ('float', 4),
    'd': ('float', 8),
    's': ('string', 1),
    'p': ('pascal', 1),
    'P': ('pointer', None),
    'q': ('long', 8),
    'Q': ('ulong', 8),
    '?': ('bool', 1),
}

def numeric_codec(kind: str, size: int, endianess: Endianess) -> Tuple[Callable, Callable]:
    def unpack(buffer, offset, length=None, compliant=Compliant.NONE):
        return buffer.read(kind, size, endianess, offset)

    def pack(value, buffer, offset, length=None, compliant=Compliant.NONE):
        buffer.write(kind, size, endianess, offset, value)

    return unpack, pack


def long_codec(unsigned: bool, endianess: Endianess) -> Tuple[Callable, Callable]:
    '''The 64-bit value is handled as two 32-bit words, the least significant
    comes first in little endian.'''
    low_at, high_at = (0, 4) if endianess == Endianess.LITTLE_ENDIAN else (4, 0)

    def unpack(buffer, offset, length=None, compliant=Compliant.NONE):
        low = buffer.read('uint', 4, endianess, offset + low_at)
        high = buffer.read('uint', 4, endianess, offset + high_at)

        return Long.from_bits(low, high, unsigned=unsigned)

    def pack(value, buffer, offset, length=None, compliant=Compliant.NONE):
        value = Long.from_int(value, unsigned=unsigned)
        buffer.write('uint', 4, endianess, offset + low_at, value.low)
        buffer.write('uint', 4, endianess, offset + high_at, value.high)

    return unpack, pack


def unpack_char(buffer, offset, length=None, compliant=Compliant.NONE):
    return chr(buffer[offset])


def pack_char(value, buffer, offset, length=None, compliant=Compliant.NONE):
    code = value[0] if isinstance(value, (bytes, bytearray)) else ord(value[0])
    buffer.write('uint', 1, Endianess.LITTLE_ENDIAN, offset, code & 0xff)


def unpack_bool(buffer, offset, length=None, compliant=Compliant.NONE):
    return buffer[offset] != 0


def pack_bool(value, buffer, offset, length=None, compliant=Compliant.NONE):
    buffer.write('uint', 1, Endianess.LITTLE_ENDIAN, offset, 1 if value else 0)


def build_codec(kind: str, size: int, endianess: Endianess) -> Tuple[Optional[Callable], Optional[Callable]]:
    if kind == 'pad':
        return None, None
    if kind == 'char':
        return unpack_char, pack_char
    if kind == 'bool':
        return unpack_bool, pack_bool
    if kind == 'string':
        return unpack_string, pack_string
    if kind == 'pascal':
        return unpack_pascal, pack_pascal
    if kind in ('long', 'ulong'):
        return long_codec(kind == 'ulong', endianess)

    return numeric_codec(kind, size, endianess)


@lru_cache(maxsize=None)
def build_registry(endianess: Endianess, native: bool, host: Host = HOST) -> Mapping[str, TypeCode]:
    logger.debug('building %s registry for %s' % ('native' if native else endianess.name, host))
    registry = {}
    for code, (kind, size) in CODES.items():
        if kind == 'pointer':
            size = host.pointer_width
            kind = 'ulong' if host.is_64bit else 'uint'

        unpack, pack = build_codec(kind, size, endianess)
        registry[code] = TypeCode(size, size if native else 1, unpack, pack)

    return MappingProxyType(registry)


class Registries(NamedTuple):
    native: Mapping[str, TypeCode]
    little: Mapping[str, TypeCode]
    big: Mapping[str, TypeCode]
    host: Host


@lru_cache(maxsize=None)
def get_registries(host: Host = HOST) -> Registries:
    return Registries(
        native=build_registry(host.byteorder, True, host),
        little=build_registry(Endianess.LITTLE_ENDIAN, False, host),
        big=build_registry(Endianess.BIG_ENDIAN, False, host),
        host=host,
    )


def select(format: str, host: Host = None) -> Tuple[Mapping[str, TypeCode], bool]:
    '''Choose the registry from the first character of the format.

    It returns the registry and a boolean telling if that character is a
    prefix to skip (True) or the first type code (False).'''
    registries = get_registries(host or HOST)
    c = format[:1]

    if c == '<':
        return registries.little, True
    if c in ('>', '!'):
        return registries.big, True
    if c == '=':
        little = registries.host.byteorder == Endianess.LITTLE_ENDIAN
        return (registries.little if little else registries.big), True
    if c == '@':
        return registries.native, True

    return registries.native, False
