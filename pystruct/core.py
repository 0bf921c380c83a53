"""
Layout engine: walks a format string against a registry keeping track of
the cursor, and everything else (size computation, unpacking, packing) is
built on top of that single walk.
"""
import logging
from typing import Iterator, List, NamedTuple, Optional, Tuple

from .enum import Compliant
from .host import Host
from .registry import TypeCode, select
from .streams import Buffer
from .exceptions import (
    FormatException,
    UnpackException,
    PackException,
    TruncatedBufferException,
    InsufficientValuesException,
)


logger = logging.getLogger(__name__)

# what the codecs (and bitstring below them) can raise on wrong data/values
CODEC_ERRORS = (ValueError, TypeError, OverflowError, IndexError)


class FieldSlot(NamedTuple):
    '''A single occurrence of a type code in the format, with its resolved
    position and width.'''
    code: str
    type_code: TypeCode
    offset: int
    size: int

    @property
    def end(self) -> int:
        return self.offset + self.size

    @property
    def is_pad(self) -> bool:
        return self.type_code.is_pad


def align(position: int, alignment: int) -> int:
    if alignment > 1:
        position = -(-position // alignment) * alignment

    return position


def iter_fields(format: str, position: int = 0, host: Optional[Host] = None,
                compliant: Compliant = Compliant.NONE) -> Iterator[FieldSlot]:
    '''Yield each field occurrence of the format; the cursor starts at
    "position" and is only ever moved forward.

    Digits accumulate into the count of the following code; a character
    that is not a type code is skipped together with its count (unless
    Compliant.CODES is requested).'''
    registry, skip_first = select(format, host=host)

    decimal = ''
    for index in range(1 if skip_first else 0, len(format)):
        c = format[index]

        if '0' <= c <= '9':
            decimal += c
            continue

        type_code = registry.get(c)
        if type_code is None:
            if compliant & Compliant.CODES:
                raise FormatException(chain=[c, index], message='unknown type code %r' % c)
            logger.debug('ignoring character %r at index %d' % (c, index))
            decimal = ''
            continue

        position = align(position, type_code.alignment)

        count = int(decimal) if decimal else 0
        decimal = ''

        if c == 's':
            repeat, size = 1, count
        elif c == 'p':
            repeat, size = 1, count or 1
        else:
            repeat, size = count or 1, type_code.size

        for _ in range(repeat):
            yield FieldSlot(c, type_code, position, size)
            position += size


def calcsize(format: str, host: Optional[Host] = None, compliant: Compliant = Compliant.NONE) -> int:
    size = 0
    for slot in iter_fields(format, host=host, compliant=compliant):
        size = slot.end

    return size


sizeof = calcsize


def layout(format: str, host: Optional[Host] = None, compliant: Compliant = Compliant.NONE) -> List[Tuple[str, int, int]]:
    '''It returns (code, offset, size) for each occurrence, pad bytes included.'''
    return [(_.code, _.offset, _.size) for _ in iter_fields(format, host=host, compliant=compliant)]


def as_buffer(data) -> Buffer:
    return data if isinstance(data, Buffer) else Buffer(data)


def _unpack_slots(slots, buffer, check_bounds, compliant):
    unpacked = []

    for slot in slots:
        if slot.is_pad:
            continue

        if check_bounds and slot.end > len(buffer):
            raise TruncatedBufferException(
                chain=[slot.code, slot.offset],
                message='reached end of buffer, can\'t unpack anymore data')

        logger.debug('unpacking \'%s\' at offset %d' % (slot.code, slot.offset))

        try:
            value = slot.type_code.unpack(buffer, slot.offset, slot.size, compliant)
        except CODEC_ERRORS as e:
            logger.error(e)
            raise UnpackException(chain=[slot.code, slot.offset], message=str(e)) from e

        unpacked.append(value)

    return unpacked


def unpack_from(format: str, data, check_bounds: bool = False, offset: int = 0,
                host: Optional[Host] = None, compliant: Compliant = Compliant.NONE) -> list:
    '''This is one of the main APIs: it decodes the data starting at the given
    offset, so that structures concatenated in the same buffer can be read
    one after the other.

    With "check_bounds" a TruncatedBufferException is raised before reading
    a field that doesn't fit into the data, i.e. whose end goes past
    len(data); a field ending exactly at the end of the data is read.'''
    slots = iter_fields(format, position=offset, host=host, compliant=compliant)

    return _unpack_slots(slots, as_buffer(data), check_bounds, compliant)


def unpack(format: str, data, check_bounds: bool = False, host: Optional[Host] = None,
           compliant: Compliant = Compliant.NONE) -> list:
    return unpack_from(format, data, check_bounds, 0, host=host, compliant=compliant)


def iter_unpack(format: str, data, check_bounds: bool = False, host: Optional[Host] = None,
                compliant: Compliant = Compliant.NONE) -> Iterator[list]:
    '''Unpack the same structure over and over until the data is exhausted,
    trailing bytes not enough for a whole structure are ignored.'''
    size = calcsize(format, host=host, compliant=compliant)
    if size == 0:
        raise FormatException(chain=[format], message='iter_unpack() needs a format of non-zero size')

    buffer = as_buffer(data)
    for offset in range(0, len(buffer) - size + 1, size):
        yield unpack_from(format, buffer, check_bounds, offset, host=host, compliant=compliant)


def _pack_slots(slots, buffer, values, check_bounds, compliant):
    index = 0
    for slot in slots:
        if slot.is_pad:
            continue

        if index >= len(values):
            if check_bounds:
                raise InsufficientValuesException(
                    chain=[slot.code, slot.offset],
                    message='reached end of data, no more elements to pack')
            # nothing to write, the field stays zeroed
            continue

        logger.debug('packing \'%s\' at offset %d' % (slot.code, slot.offset))

        try:
            slot.type_code.pack(values[index], buffer, slot.offset, slot.size, compliant)
        except CODEC_ERRORS as e:
            logger.error(e)
            raise PackException(chain=[slot.code, slot.offset], message=str(e)) from e

        index += 1


def _values_from_args(args, check_bounds):
    '''Support pack(fmt, [v1, v2]), pack(fmt, [v1, v2], check_bounds) and
    pack(fmt, v1, v2), the latter always checks the bounds.'''
    if len(args) == 1 and isinstance(args[0], (list, tuple)):
        return args[0], check_bounds
    if len(args) == 2 and isinstance(args[0], (list, tuple)) and isinstance(args[1], bool):
        return args[0], args[1]

    return args, True


def pack(format: str, *args, check_bounds: bool = True, host: Optional[Host] = None,
         compliant: Compliant = Compliant.NONE) -> bytes:
    '''Encode the values into a buffer of exactly calcsize(format) bytes.

    The values can be passed as a single list or as positional arguments.'''
    values, check_bounds = _values_from_args(args, check_bounds)

    slots = list(iter_fields(format, host=host, compliant=compliant))
    buffer = Buffer(slots[-1].end if slots else 0)
    _pack_slots(slots, buffer, values, check_bounds, compliant)

    return buffer.getvalue()


def pack_into(format: str, data: bytearray, offset: int, *args, check_bounds: bool = True,
              host: Optional[Host] = None, compliant: Compliant = Compliant.NONE) -> None:
    '''Like pack() but writing inside a caller-owned bytearray starting at "offset".'''
    if not isinstance(data, bytearray):
        raise ValueError('pack_into() needs a bytearray, not \'%s\'' % data.__class__.__name__)

    values, check_bounds = _values_from_args(args, check_bounds)
    slots = iter_fields(format, position=offset, host=host, compliant=compliant)
    _pack_slots(slots, Buffer(data), values, check_bounds, compliant)


class Struct(object):
    """Compiled format: the registry and the layout are resolved once and
    reused by every call starting at offset zero."""

    def __init__(self, format: str, host: Optional[Host] = None, compliant: Compliant = Compliant.NONE):
        self.format = format
        self.host = host
        self.compliant = compliant
        self._slots = list(iter_fields(format, host=host, compliant=compliant))

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.format)

    @property
    def size(self) -> int:
        return self._slots[-1].end if self._slots else 0

    @property
    def layout(self) -> List[Tuple[str, int, int]]:
        return [(_.code, _.offset, _.size) for _ in self._slots]

    def _get_slots(self, offset):
        # the padding depends on where the structure starts
        if offset == 0:
            return self._slots

        return iter_fields(self.format, position=offset, host=self.host, compliant=self.compliant)

    def unpack_from(self, data, check_bounds: bool = False, offset: int = 0) -> list:
        return _unpack_slots(self._get_slots(offset), as_buffer(data), check_bounds, self.compliant)

    def unpack(self, data, check_bounds: bool = False) -> list:
        return self.unpack_from(data, check_bounds)

    def iter_unpack(self, data, check_bounds: bool = False) -> Iterator[list]:
        return iter_unpack(self.format, data, check_bounds, host=self.host, compliant=self.compliant)

    def pack(self, *args, check_bounds: bool = True) -> bytes:
        values, check_bounds = _values_from_args(args, check_bounds)

        buffer = Buffer(self.size)
        _pack_slots(self._slots, buffer, values, check_bounds, self.compliant)

        return buffer.getvalue()

    def pack_into(self, data: bytearray, offset: int, *args, check_bounds: bool = True) -> None:
        if not isinstance(data, bytearray):
            raise ValueError('pack_into() needs a bytearray, not \'%s\'' % data.__class__.__name__)

        values, check_bounds = _values_from_args(args, check_bounds)
        _pack_slots(self._get_slots(offset), Buffer(data), values, check_bounds, self.compliant)
