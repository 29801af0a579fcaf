'''
Error kinds raised by slabwriter.

Every error is fatal for the worker that raises it: resources already acquired
are released on the way out and the runner aborts the worker group.
'''

class SlabWriterError(Exception):
    kind = 'SlabWriterError'

    def __str__(self):
        return "[%s] %s" % (self.kind, Exception.__str__(self))

class ConfigurationError(SlabWriterError, ValueError):
    '''
    Invalid contribution sizes, ranks, shapes or settings.
    '''
    kind = 'ConfigurationError'

class OutOfBoundsError(SlabWriterError, IndexError):
    '''
    A region selection does not fit in its declared shape.
    '''
    kind = 'OutOfBoundsError'

class StoreIOError(SlabWriterError, OSError):
    '''
    The array store could not create, open, write or close a file or object.
    '''
    kind = 'IOError'

class DuplicateNameError(SlabWriterError, KeyError):
    '''
    An attribute with the same name already exists on the dataset.
    '''
    kind = 'DuplicateNameError'
