'''
Parallel write exercises

    mpiexec -n 4 python -m slabwriter.run

Every rank writes rank + 1 copies of its rank into the 'ranks' dataset of
stuff.h5, then rank 0 alone writes a 4x5 integer matrix with a metadata
attribute into matrix.h5.
'''
import logging
import sys
import numpy as np

from slabwriter.arrays import Contribution
from slabwriter.constants import (RANKS_LABEL, MATRIX_LABEL, MATRIX_ROWS, MATRIX_COLUMNS,
    MATRIX_METADATA_ATTRIBUTE, MATRIX_METADATA_VALUE, LOG_FORMAT)
from slabwriter.errors import SlabWriterError
from slabwriter.parallel import CommManager, rank_plus_one
from slabwriter.results import StorageManager
from slabwriter.settings import WriterSettings

logger = logging.getLogger(__name__)

def write_ranks(storer, comm = 'main'):
    group = storer.get_group(comm)
    contribution = Contribution.filled(rank_plus_one(group.rank), group.rank)
    return storer.save_data(RANKS_LABEL, contribution.data, contribution_size = rank_plus_one, comm = comm)

def write_matrix(storer):
    '''
    Single writer: the matrix is stored by one process, so it is written
        with a group of its own
    '''
    matrix = np.arange(MATRIX_ROWS*MATRIX_COLUMNS, dtype = np.int32)
    single = StorageManager(storer.workspace_path, settings = storer.settings)
    return single.save_data(MATRIX_LABEL, matrix, contribution_size = lambda rank : MATRIX_ROWS,
        row_shape = (MATRIX_COLUMNS,), attrs = {MATRIX_METADATA_ATTRIBUTE : np.int32(MATRIX_METADATA_VALUE)})

def run(router = None, workspace_path = None, settings = None):
    '''
    Returns the exit status of the worker, errors are logged with their kind
    '''
    storer = StorageManager(workspace_path, router = router, settings = settings)
    rank = storer.get_group().rank
    try:
        write_ranks(storer)
        if rank == 0:
            write_matrix(storer)
        if storer.settings.profiler_on:
            storer.profiler.save(storer)
    except SlabWriterError as error:
        logger.error("%s", error)
        return 1
    finally:
        storer.close()
    return 0

def main():
    router = CommManager()
    logging.basicConfig(level = logging.INFO, format = LOG_FORMAT.format(rank = router.rank))
    status = run(router, settings = WriterSettings())
    if status != 0:
        router['main'].abort(status)
        sys.exit(status)
    router.finalize()

if __name__ == '__main__':
    main()
