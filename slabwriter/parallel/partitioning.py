import logging
import numpy as np

from collections import namedtuple
from slabwriter.errors import ConfigurationError
from slabwriter.utils.data import is_integral

logger = logging.getLogger(__name__)

class Layout(namedtuple('Layout', ['global_extent', 'offset', 'extent'])):
    '''
    Position of one worker's contribution in the shared dataset: rows
        [offset, offset + extent) out of global_extent rows
    '''
    __slots__ = ()

    @property
    def stop(self):
        return self.offset + self.extent

    @property
    def interval(self):
        return slice(self.offset, self.stop)

def rank_plus_one(rank):
    return rank + 1

def even(num_elements, world_size):
    '''
    Block distribution of num_elements rows: every rank gets
        num_elements // world_size rows and the first num_elements % world_size
        ranks get one extra row
    '''
    if not is_integral(num_elements) or num_elements < 0:
        raise ConfigurationError("number of elements must be a non-negative integer")
    _check_world_size(world_size)
    n = num_elements // world_size
    r = num_elements % world_size
    def contribution_size(rank):
        return n + 1 if rank < r else n
    return contribution_size

def contribution_sizes(world_size, contribution_size):
    _check_world_size(world_size)
    sizes = np.zeros(world_size, dtype = np.int64)
    for rank in range(world_size):
        size = contribution_size(rank)
        if not is_integral(size):
            raise ConfigurationError("contribution size of rank %d is not an integer: %s" % (rank, repr(size)))
        if size < 0:
            raise ConfigurationError("contribution size of rank %d is negative: %d" % (rank, size))
        sizes[rank] = size
    return sizes

def resolve(rank, world_size, contribution_size):
    sizes = contribution_sizes(world_size, contribution_size)
    return _resolve_sizes(rank, sizes)

def exchange(group, local_size):
    '''
    Resolves the layout when sizes are not a closed-form function of the rank:
        every worker shares its local size with an all-gather before the
        prefix sum is computed
    '''
    if not is_integral(local_size) or local_size < 0:
        raise ConfigurationError("local contribution size must be a non-negative integer, got %s" % repr(local_size))
    sizes = np.asarray(group.allgather(int(local_size)), dtype = np.int64)
    if len(sizes) != group.size:
        raise ConfigurationError("expected %d contribution sizes, got %d" % (group.size, len(sizes)))
    return _resolve_sizes(group.rank, sizes)

def _resolve_sizes(rank, sizes):
    world_size = len(sizes)
    if not is_integral(rank) or not (0 <= rank < world_size):
        raise ConfigurationError("rank %s is not in [0, %d)" % (repr(rank), world_size))
    offsets = np.cumsum(sizes) - sizes
    layout = Layout(int(sizes.sum()), int(offsets[rank]), int(sizes[rank]))
    logger.debug("rank %d of %d resolved rows [%d, %d) of %d", rank, world_size, layout.offset, layout.stop, layout.global_extent)
    return layout

def _check_world_size(world_size):
    if not is_integral(world_size) or world_size < 1:
        raise ConfigurationError("world size must be a positive integer, got %s" % repr(world_size))
