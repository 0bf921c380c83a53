"""
Codecs for the two textual type codes:

 - 's': fixed-length string, the preceding count is the length of the field
        and the text ends at the first NUL byte (if any);
 - 'p': pascal string, the first byte of the field holds the length of
        the text that follows, so at most count - 1 (and never more than 255)
        bytes of content fit.

Text is encoded as UTF-8; bytes are accepted as they are.
"""
import logging

from .enum import Compliant
from .exceptions import PackException, UnpackException


logger = logging.getLogger(__name__)

PASCAL_MAX = 0xff


def to_bytes(value) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)

    if isinstance(value, str):
        return value.encode('utf-8')

    raise TypeError('a string field needs str or bytes, not \'%s\'' % value.__class__.__name__)


def from_bytes(raw: bytes) -> str:
    return raw.decode('utf-8', errors='replace')


def unpack_string(buffer, offset, length, compliant=Compliant.NONE):
    end = buffer.find(0, offset, offset + length)
    if end == -1:
        end = offset + length

    # read_bytes() stops by itself at the end of the buffer
    return from_bytes(buffer.read_bytes(offset, end - offset))


def pack_string(value, buffer, offset, length, compliant=Compliant.NONE):
    raw = to_bytes(value)[:length]
    buffer.write_bytes(offset, raw)
    buffer.fill(offset + len(raw), offset + length)


def unpack_pascal(buffer, offset, length, compliant=Compliant.NONE):
    n = buffer[offset]
    if n >= length:
        if compliant & Compliant.PASCAL:
            raise UnpackException(chain=['p', offset], message='pascal length %d overflows a field of %d bytes' % (n, length))
        logger.warning('clamping pascal length %d to %d' % (n, length - 1))
        n = length - 1

    return from_bytes(buffer.read_bytes(offset + 1, n))


def pack_pascal(value, buffer, offset, length, compliant=Compliant.NONE):
    raw = to_bytes(value)
    n = min(len(raw), length - 1, PASCAL_MAX)
    if n < len(raw):
        if compliant & Compliant.PASCAL:
            raise PackException(chain=['p', offset], message='%d bytes don\'t fit a pascal string of %d bytes' % (len(raw), length))
        logger.warning('truncating pascal string from %d to %d bytes' % (len(raw), n))

    buffer.write_bytes(offset, bytes([n]))
    buffer.write_bytes(offset + 1, raw[:n])
    buffer.fill(offset + 1 + n, offset + length)
