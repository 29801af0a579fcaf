import numpy as np

from slabwriter.constants import WRITE_JOBS
from slabwriter.profiler import Profiler, Job
from slabwriter.results import StorageManager
from slabwriter.settings import WriterSettings

def test_job_duration():
    job = Job('write')
    job.stop()
    job.restart()
    job.stop()
    assert len(job.duration) == 2
    assert job.total >= 0

def test_off_profiler_records_nothing():
    profiler = Profiler()
    profiler.start('collective_write')
    profiler.stop('collective_write')
    assert profiler.jobs == {}
    assert np.array_equal(profiler.totals(), np.zeros(len(WRITE_JOBS)))

def test_save_and_summarize(tmp_path):
    storer = StorageManager(str(tmp_path), settings = WriterSettings(profiler_on = True))
    storer.save_data('ranks', [0], contribution_size = lambda rank : 1)
    assert set(storer.profiler.jobs) == set(WRITE_JOBS)
    storer.profiler.save(storer)
    summary = storer.profiler.summarize(storer)
    assert list(summary.columns) == list(WRITE_JOBS)
    assert len(summary) == 2
    assert (summary.loc['critical'] >= 0).all()
    storer.close()
