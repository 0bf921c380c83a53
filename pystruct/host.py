"""
Description of the machine the "native" mode refers to.

Nothing in the registries reads the platform directly: a Host is detected
once at import time and passed explicitly where it's needed, so that a
caller can emulate a different machine (e.g. a 32-bit big endian one).
"""
import sys
from typing import NamedTuple

from .enum import Endianess


class Host(NamedTuple):
    byteorder: Endianess
    pointer_width: int  # bytes

    @classmethod
    def detect(cls) -> "Host":
        byteorder = Endianess.LITTLE_ENDIAN if sys.byteorder == 'little' else Endianess.BIG_ENDIAN
        pointer_width = 8 if sys.maxsize > 2 ** 32 else 4

        return cls(byteorder, pointer_width)

    @property
    def is_64bit(self) -> bool:
        return self.pointer_width == 8


HOST = Host.detect()
