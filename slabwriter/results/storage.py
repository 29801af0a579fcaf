import json
import logging
import os
import h5py

from contextlib import ExitStack, contextmanager
from importlib import resources
from slabwriter.arrays import Contribution, select, select_all
from slabwriter.constants import FILE_EXTENSION
from slabwriter.errors import ConfigurationError, SlabWriterError, StoreIOError
from slabwriter.parallel.comm import Group
from slabwriter.parallel.partitioning import resolve, exchange
from slabwriter.profiler import Profiler
from slabwriter.results import attributes
from slabwriter.settings import WriterSettings

logger = logging.getLogger(__name__)

@contextmanager
def store_errors(action):
    try:
        yield
    except SlabWriterError:
        raise
    except (OSError, RuntimeError, TypeError, ValueError) as error:
        raise StoreIOError("could not %s: %s" % (action, error)) from error

class StorageManager:
    '''
    Writes the contributions of a group of workers into shared HDF5 files

    Every label (e.g., 'ranks') maps to one file holding one dataset with
        the same name. File names and element types come from metadata.json,
        labels that are not listed there are stored in '<label>.h5' with the
        type of the data being saved.

    In a parallel run all the workers of the communicator have to call
        save_data with the same label, contribution size function and row
        shape, each one with its own local data.
    '''

    def __init__(self, workspace_path = None, router = None, settings = None):
        self.workspace_path = os.getcwd() if workspace_path is None else workspace_path
        self.metadata = json.loads(resources.files(__package__).joinpath('metadata.json').read_text())
        self.router = router
        self.settings = WriterSettings() if settings is None else settings
        rank = 0 if router is None else router.rank
        self.profiler = Profiler(rank, is_on = self.settings.profiler_on)
        self.persistent_files = {}

    def get_group(self, comm = 'main'):
        if self.router is None:
            return Group()
        return self.router[comm]

    def get_path(self, data_label):
        if data_label in self.metadata:
            fname = self.metadata[data_label]['fname']
        else:
            fname = data_label + FILE_EXTENSION
        return os.path.join(self.workspace_path, fname)

    def get_dtype(self, data_label):
        if data_label in self.metadata:
            return self.metadata[data_label]['dtype']
        return None

    def save_data(self, data_label, data, contribution_size = None, row_shape = (), comm = 'main', attrs = None):
        '''
        contribution_size : function rank -> number of rows written by the rank,
            it must be the same in every worker. If None, the number of rows of
            each worker is shared with the rest of the group
        row_shape : shape of one row, the dataset has shape (rows,) + row_shape
        attrs : dictionary of attributes attached to the dataset before closing
        '''
        group = self.get_group(comm)
        contribution = Contribution(data, row_shape, dtype = self.get_dtype(data_label))

        self.profiler.start('resolve_layout')
        if contribution_size is None:
            layout = exchange(group, contribution.extent)
        else:
            layout = resolve(group.rank, group.size, contribution_size)
            if layout.extent != contribution.extent:
                raise ConfigurationError(
                    "rank %d has %d rows but its contribution size is %d" % (group.rank, contribution.extent, layout.extent))
        self.profiler.stop('resolve_layout')

        global_shape = (layout.global_extent,) + contribution.row_shape
        file_region = select(global_shape, layout.offset, layout.extent)
        memory_region = select_all(contribution.shape)
        full_path = self.get_path(data_label)

        self._release(full_path)
        with ExitStack() as stack:
            f = stack.enter_context(self._open(full_path, self.settings.file_mode, group))

            self.profiler.start('create_dataset')
            data_set = self._create_dataset(f, data_label, global_shape, contribution.dtype)
            self.profiler.stop('create_dataset')

            self.profiler.start('collective_write')
            self._write_region(data_set, contribution, file_region, memory_region, group)
            self.profiler.stop('collective_write')

            if attrs:
                for name, value in attrs.items():
                    attributes.attach(data_set, name, value)
            group.barrier()

        logger.debug("rank %d wrote rows [%d, %d) of '%s' in %s",
            group.rank, layout.offset, layout.stop, data_label, full_path)
        return layout

    def attach_attribute(self, data_label, name, value, dtype = None, comm = 'main'):
        group = self.get_group(comm)
        full_path = self.get_path(data_label)
        self._release(full_path)
        with self._open(full_path, 'r+', group) as f:
            if data_label not in f:
                raise ConfigurationError("dataset '%s' does not exist in %s" % (data_label, full_path))
            attributes.attach(f[data_label], name, value, dtype = dtype)

    def load_data(self, data_label):
        full_path = self.get_path(data_label)
        if not full_path in self.persistent_files:
            with store_errors("open %s" % full_path):
                self.persistent_files[full_path] = h5py.File(full_path, 'r')
        return self.persistent_files[full_path][data_label]

    def close(self):
        for key in self.persistent_files:
            self.persistent_files[key].close()
        self.persistent_files = {}

    def exists(self, data_label):
        return os.path.exists(self.get_path(data_label))

    def _release(self, full_path):
        '''
        HDF5 can not truncate or append to a file that is still open for reading
        '''
        if full_path in self.persistent_files:
            self.persistent_files.pop(full_path).close()

    def _open(self, full_path, mode, group):
        kwargs = {}
        if group.is_parallel:
            if not h5py.get_config().mpi:
                raise StoreIOError("h5py was built without MPI support, parallel access is not available")
            kwargs = {'driver' : 'mpio', 'comm' : group.comm}
        with store_errors("open %s" % full_path):
            return h5py.File(full_path, mode, **kwargs)

    def _create_dataset(self, f, data_label, shape, dtype):
        if data_label in f:
            data_set = f[data_label]
            if not isinstance(data_set, h5py.Dataset) or data_set.shape != shape or data_set.dtype != dtype:
                raise ConfigurationError(
                    "existing '%s' does not match shape %s and dtype %s" % (data_label, str(shape), str(dtype)))
            return data_set
        with store_errors("create dataset '%s'" % data_label):
            return f.create_dataset(data_label, shape, dtype = dtype)

    def _write_region(self, data_set, contribution, file_region, memory_region, group):
        '''
        The low level interface is used because h5py skips zero sized writes,
            which would leave the other workers waiting in a collective write
        '''
        with store_errors("write '%s'" % data_set.name):
            file_space = data_set.id.get_space()
            file_region.apply(file_space)
            mem_space = h5py.h5s.create_simple(contribution.shape)
            memory_region.apply(mem_space)
            prop_list = h5py.h5p.create(h5py.h5p.DATASET_XFER)
            if group.is_parallel and self.settings.collective:
                prop_list.set_dxpl_mpio(h5py.h5fd.MPIO_COLLECTIVE)
            data_set.id.write(mem_space, file_space, contribution.data, dxpl = prop_list)
