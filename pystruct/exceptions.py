class PyStructException(Exception):
    '''Base class to extend in order to throw exception in pystruct.

    It takes as first argument the chain locating the field that caused
    the exception, usually its type code followed by its offset.
    '''

    def __init__(self, chain, message=''):
        self.chain = chain
        super().__init__(message)

    def __str__(self):
        msg = super().__str__()
        if not self.chain:
            return msg

        location = '@'.join(str(_) for _ in self.chain)
        return f'{msg} [{location}]' if msg else f'[{location}]'


class FormatException(PyStructException):
    pass


class UnpackException(PyStructException):
    pass


class TruncatedBufferException(UnpackException):
    '''Reached end of buffer, can't unpack anymore data.'''
    pass


class PackException(PyStructException):
    pass


class InsufficientValuesException(PackException):
    '''Reached end of data, no more elements to pack.'''
    pass
