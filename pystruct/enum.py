from enum import Enum, Flag, auto


class Endianess(Enum):
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN    = auto()


class Compliant(Flag):
    '''It indicates which degree of compliantness the format and the data must reflect'''
    NONE   = 0
    CODES  = 1 << 0  # reject characters that are not type codes
    PASCAL = 1 << 1  # reject pascal lengths that would be clamped
    STRICT = CODES | PASCAL
