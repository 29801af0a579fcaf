import logging
import numpy as np

from slabwriter.errors import DuplicateNameError, StoreIOError

logger = logging.getLogger(__name__)

def attach(dataset, name, value, dtype = None):
    '''
    Attaches a named metadata value to an open h5py dataset. Attributes are
        never overwritten implicitly. In MPI-IO files every worker has to
        attach the same value since attribute creation is collective
    '''
    if name in dataset.attrs:
        raise DuplicateNameError("attribute '%s' already exists on dataset '%s'" % (name, dataset.name))
    try:
        dataset.attrs.create(name, value, dtype = dtype)
    except (OSError, RuntimeError, TypeError, ValueError) as error:
        raise StoreIOError("could not write attribute '%s' on '%s': %s" % (name, dataset.name, error)) from error
    logger.debug("attached attribute '%s' to '%s'", name, dataset.name)

def read(dataset, name):
    value = dataset.attrs[name]
    if isinstance(value, np.generic):
        return value.item()
    return value
