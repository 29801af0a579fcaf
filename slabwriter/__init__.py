from slabwriter.errors import SlabWriterError, ConfigurationError, OutOfBoundsError, StoreIOError, DuplicateNameError
from slabwriter.settings import WriterSettings
from slabwriter.arrays import Contribution, RegionSelection, select, select_all
from slabwriter.parallel import CommManager, Group, Layout, resolve, exchange, even, rank_plus_one
from slabwriter.results import StorageManager

__version__ = '0.0.1'
