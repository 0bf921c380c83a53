import logging
import os

import pytest

from pystruct.enum import Endianess
from pystruct.host import Host


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)


@pytest.fixture
def host64le():
    return Host(Endianess.LITTLE_ENDIAN, 8)


@pytest.fixture
def host32be():
    return Host(Endianess.BIG_ENDIAN, 4)
