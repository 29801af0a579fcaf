from slabwriter.errors import OutOfBoundsError, ConfigurationError
from slabwriter.utils.data import as_shape, prod, is_integral

class RegionSelection:
    '''
    RegionSelection Class

    A RegionSelection describes a hyperslab, i.e., a rectangular block of
        a declared shape. Only the first axis is partitioned between workers,
        so a selection is a run of rows [offset, offset + extent) followed
        by the full range of every other axis:

        start = (offset, 0, 0, ...)
        count = (extent, shape[1], shape[2], ...)

    The same class describes the region inside the shared dataset and the
        region inside the local (in-memory) buffer. The two are declared against
        different shapes that happen to have the same number of rows selected.

    A selection can be applied to an h5py dataspace (h5py.h5s.SpaceID) with
        apply(), or used to index numpy arrays and h5py datasets with slices.
    '''

    def __init__(self, shape, start, count):
        self.shape = as_shape(shape)
        self.start = as_shape(start)
        self.count = as_shape(count)

    @property
    def offset(self):
        return self.start[0]

    @property
    def extent(self):
        return self.count[0]

    @property
    def size(self):
        return prod(self.count)

    @property
    def is_empty(self):
        return self.size == 0

    @property
    def slices(self):
        return tuple(slice(s, s + c) for s, c in zip(self.start, self.count))

    def apply(self, space):
        '''
        Select the region on an h5py dataspace. Empty regions select nothing
            instead of skipping the selection, so that workers without rows
            can still take part in collective operations
        '''
        if self.is_empty:
            space.select_none()
        else:
            space.select_hyperslab(self.start, self.count)
        return space

    def __eq__(self, other):
        if not isinstance(other, RegionSelection):
            return NotImplemented
        return (self.shape, self.start, self.count) == (other.shape, other.start, other.count)

    def __repr__(self):
        return "<RegionSelection shape: %s, start: %s, count: %s>" % (str(self.shape), str(self.start), str(self.count))

def select(global_shape, offset, extent):
    global_shape = as_shape(global_shape)
    if len(global_shape) == 0:
        raise ConfigurationError("scalar shapes can not be partitioned")
    if not (is_integral(offset) and is_integral(extent)):
        raise ConfigurationError("offset and extent must be integers")
    if offset < 0 or extent < 0 or offset + extent > global_shape[0]:
        raise OutOfBoundsError(
            "region [%d, %d) exceeds the first dimension of shape %s" % (offset, offset + extent, str(global_shape)))
    start = (int(offset),) + (0,)*(len(global_shape) - 1)
    count = (int(extent),) + global_shape[1:]
    return RegionSelection(global_shape, start, count)

def select_all(shape):
    shape = as_shape(shape)
    if len(shape) == 0:
        raise ConfigurationError("scalar shapes can not be partitioned")
    return select(shape, 0, shape[0])
