import numpy as np

from slabwriter.errors import ConfigurationError
from slabwriter.utils.data import as_shape, prod, is_integral

class Contribution:
    '''
    Local payload of one worker

    The buffer is stored as a C-contiguous numpy array of shape
        (extent,) + row_shape, where extent is the number of rows the worker
        contributes along the partitioned (first) axis of the shared dataset.

    A flat buffer is accepted as long as its size is a multiple of the number
        of elements in one row, e.g., 20 integers with row_shape = (5,) become
        a contribution of 4 rows.
    '''

    def __init__(self, data, row_shape = (), dtype = None):
        self.row_shape = as_shape(row_shape)
        if any(s < 0 for s in self.row_shape):
            raise ConfigurationError("row shape %s has negative dimensions" % str(self.row_shape))
        data = np.ascontiguousarray(data, dtype = dtype)
        row_size = prod(self.row_shape)

        if data.shape[1:] == self.row_shape and data.ndim == len(self.row_shape) + 1:
            self.data = data
        elif row_size == 0:
            if data.size != 0:
                raise ConfigurationError("buffer of size %d does not fit rows of shape %s" % (data.size, str(self.row_shape)))
            self.data = data.reshape((0,) + self.row_shape)
        else:
            if data.size % row_size != 0:
                raise ConfigurationError(
                    "buffer of size %d can not be split in rows of shape %s" % (data.size, str(self.row_shape)))
            self.data = data.reshape((data.size // row_size,) + self.row_shape)

    @classmethod
    def filled(cls, extent, value, dtype = np.int32, row_shape = ()):
        if not is_integral(extent) or extent < 0:
            raise ConfigurationError("contribution size must be a non-negative integer, got %s" % str(extent))
        return cls(np.full((int(extent),) + as_shape(row_shape), value, dtype = dtype), row_shape)

    @property
    def extent(self):
        return self.data.shape[0]

    @property
    def shape(self):
        return self.data.shape

    @property
    def size(self):
        return self.data.size

    @property
    def dtype(self):
        return self.data.dtype

    @property
    def nbytes(self):
        return self.data.nbytes

    def __len__(self):
        return self.extent

    def __repr__(self):
        return "<Contribution rows: %d, row shape: %s, dtype: %s>" % (self.extent, str(self.row_shape), str(self.dtype))
