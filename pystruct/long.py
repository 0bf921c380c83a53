"""
64-bit integers composed from (and decomposed into) two 32-bit words.

The buffer primitives only know about words of 32 bits at most, so the 'q',
'Q' and 64-bit 'P' codecs go through the Long class: it is an int (so it
compares, hashes and formats like any other integer) that remembers its
signedness and exposes the two words it's made of.

    >>> value = Long.from_bits(0xffffffff, 0x7fffffff)
    >>> value == 2 ** 63 - 1
    True
    >>> hex(Long(-1, unsigned=True))
    '0xffffffffffffffff'
"""
import operator


MASK32 = 0xffffffff
MASK64 = 0xffffffffffffffff


class Long(int):
    """Fixed-width 64-bit integer with explicit sign semantics.

    Any integer is wrapped modulo 2**64 and then read back as two's
    complement when signed, so the bit pattern is always preserved.
    """

    def __new__(cls, value=0, unsigned=False):
        value = operator.index(value) & MASK64
        if not unsigned and value >> 63:
            value -= 1 << 64

        instance = super().__new__(cls, value)
        instance.unsigned = unsigned

        return instance

    def __repr__(self):
        return '%s(%d, unsigned=%s)' % (self.__class__.__name__, self, self.unsigned)

    def __reduce__(self):
        return (self.__class__, (int(self), self.unsigned))

    @classmethod
    def from_bits(cls, low, high, unsigned=False) -> "Long":
        """Build the value from its two 32-bit words; each word can be given
        either signed or unsigned, only its bit pattern matters."""
        return cls(((high & MASK32) << 32) | (low & MASK32), unsigned=unsigned)

    @classmethod
    def from_int(cls, value, unsigned=False) -> "Long":
        """Promote a plain number, it's a no-op for values already of this type
        with the same signedness."""
        if isinstance(value, cls) and value.unsigned == unsigned:
            return value

        return cls(value, unsigned=unsigned)

    @property
    def bits(self) -> int:
        return int(self) & MASK64

    @property
    def high(self) -> int:
        '''unsigned value of the most significant 32-bit word'''
        return self.bits >> 32

    @property
    def low(self) -> int:
        '''unsigned value of the least significant 32-bit word'''
        return self.bits & MASK32

    def to_signed(self) -> "Long":
        return Long(self, unsigned=False)

    def to_unsigned(self) -> "Long":
        return Long(self, unsigned=True)
