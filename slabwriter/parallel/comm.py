import logging

logger = logging.getLogger(__name__)

def get_mpi():
    '''
    mpi4py is imported on demand, so that MPI is only initialized by
        processes that actually use it
    '''
    try:
        from mpi4py import MPI
    except ImportError:
        return None
    return MPI

class Group:
    '''
    Worker group seen by one process: its rank, the world size and the
        collective primitives used by the writer

    comm can be an mpi4py communicator, None (a single worker) or any object
        exposing Get_rank(), Get_size() and optionally Barrier(), allgather()
        and Abort(). Only mpi4py communicators enable MPI-IO.
    '''
    def __init__(self, comm = None):
        self.comm = comm
        if comm is None:
            self.rank, self.size = 0, 1
        else:
            self.rank = comm.Get_rank()
            self.size = comm.Get_size()

    @property
    def is_mpi(self):
        if self.comm is None:
            return False
        MPI = get_mpi()
        return MPI is not None and isinstance(self.comm, MPI.Comm)

    @property
    def is_parallel(self):
        return self.is_mpi and self.size > 1

    def barrier(self):
        if self.comm is not None and self.size > 1:
            self.comm.Barrier()

    def allgather(self, value):
        if self.comm is None:
            return [value]
        return list(self.comm.allgather(value))

    def abort(self, code = 1):
        if self.comm is not None and self.size > 1 and hasattr(self.comm, 'Abort'):
            logger.error("rank %d aborting the worker group with status %d", self.rank, code)
            self.comm.Abort(code)

    def __repr__(self):
        return "<Group rank: %d, size: %d, mpi: %s>" % (self.rank, self.size, self.is_mpi)

class CommManager:
    def __init__(self, comm = 'world'):
        self.MPI = get_mpi()
        self.groups = {}
        if type(comm) == str and comm == 'world':
            comm = self.MPI.COMM_WORLD if self.MPI is not None else None
        self.add_communicator('main', comm)
        logger.debug("rank %d of %d joined the worker group", self['main'].rank, self['main'].size)

    def __getitem__(self, index):
        if index in self.groups:
            return self.groups[index]
        else:
            raise IndexError("communicator '%s' does not exist" % index)

    def __contains__(self, index):
        return index in self.groups

    def add_communicator(self, label, comm):
        self.groups[label] = comm if isinstance(comm, Group) else Group(comm)

    @property
    def rank(self):
        return self['main'].rank

    @property
    def size(self):
        return self['main'].size

    def finalize(self):
        if self.MPI is not None and self.MPI.Is_initialized() and not self.MPI.Is_finalized():
            self.MPI.Finalize()
