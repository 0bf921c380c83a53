"""
# Pystruct: C-struct like format strings.

A format string describes a sequence of typed fields, its first character
can select the byte order and the alignment mode:

 @: native order, size & alignment (default)
 =: native order, std. size & alignment
 <: little-endian, std. size & alignment
 >: big-endian, std. size & alignment
 !: same as >

the remaining characters are type codes (see pystruct.registry), each one
can be preceded by a decimal count: for the strings ('s' and 'p') it's the
length of the field, for everything else it's the number of repetitions.
Characters that are not type codes are ignored.

Three operations are defined on a format:

 1. calcsize(): the number of bytes the format occupies, alignment
    padding included.

 2. unpack()/unpack_from(): read the binary data and build the list of
    values, one for each field occurrence (pad bytes produce nothing).

 3. pack(): encode the values into a buffer of exactly calcsize() bytes.

All of them are the same walk over the format (see pystruct.core.iter_fields)
differing only in what is done at each field.

    >>> pack('<2H', [1, 2])
    b'\\x01\\x00\\x02\\x00'
    >>> unpack('<4s', b'AB\\x00\\x00')
    ['AB']
"""
from .core import (
    Struct,
    FieldSlot,
    iter_fields,
    calcsize,
    sizeof,
    layout,
    pack,
    pack_into,
    unpack,
    unpack_from,
    iter_unpack,
)
from .enum import Endianess, Compliant
from .exceptions import (
    PyStructException,
    FormatException,
    UnpackException,
    TruncatedBufferException,
    PackException,
    InsufficientValuesException,
)
from .host import Host, HOST
from .long import Long
