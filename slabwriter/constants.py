import numpy as np

# ----- Global -----

WARNINGS = False
DEFAULT_DTYPE = np.int32
FILE_EXTENSION = '.h5'
FILE_MODES = ('w', 'a',)

# ----- Exercises -----

RANKS_LABEL = 'ranks'
MATRIX_LABEL = 'IntegerMatrix'
MATRIX_ROWS = 4
MATRIX_COLUMNS = 5
MATRIX_METADATA_ATTRIBUTE = 'DummyMetadataInteger'
MATRIX_METADATA_VALUE = 42

# ----- Profiler -----

WRITE_JOBS = (
    'resolve_layout',
    'create_dataset',
    'collective_write',
)
PROFILER_LABEL = 'raw_write_times'

# ----- Logging -----

LOG_FORMAT = '%(asctime)s [rank {rank}] %(levelname)s %(name)s: %(message)s'
