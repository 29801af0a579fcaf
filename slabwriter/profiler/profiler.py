import numpy as np
import pandas as pd

from time import perf_counter
from slabwriter.constants import WRITE_JOBS, PROFILER_LABEL

class Job:
    def __init__(self, label):
        self.time_stamps = []
        self.restart()
        self.end_time = None
        self.label = label

    def restart(self):
        self.start_time = perf_counter()
        if len(self.time_stamps) % 2 != 0:
            self.time_stamps[-1] = self.start_time
        else:
            self.time_stamps.append(self.start_time)

    def stop(self):
        if len(self.time_stamps) % 2 != 0:
            self.end_time = perf_counter()
            self.time_stamps.append(self.end_time)

    @property
    def duration(self):
        if len(self.time_stamps) >= 2:
            n = len(self.time_stamps) // 2 * 2
            tstamps = np.array(self.time_stamps[:n])
            return tstamps[1::2] - tstamps[::2]
        else:
            return None

    @property
    def total(self):
        d = self.duration
        return 0. if d is None else float(d.sum())

class Profiler:

    def __init__(self, rank = 0, is_on = False):
        self.jobs = {}
        self.rank = rank
        self.is_on = is_on
        self.summary = None

    def start(self, label):
        if not self.is_on: return
        if label in self.jobs:
            self.jobs[label].restart()
        else:
            self.jobs[label] = Job(label)

    def stop(self, label):
        if not self.is_on: return
        self.jobs[label].stop()

    def totals(self, jobs = WRITE_JOBS):
        return np.array([self.jobs[job].total if job in self.jobs else 0. for job in jobs])

    def save(self, storer, comm = 'main'):
        '''
        Every rank writes one row with its total time per job
        '''
        storer.save_data(PROFILER_LABEL, self.totals(), contribution_size = lambda rank : 1,
            row_shape = (len(WRITE_JOBS),), comm = comm)

    def summarize(self, storer):
        '''
        Returns a table with the time spent by each rank on each job, the last
            row holds the time of the critical (slowest) rank for each job
        '''
        raw_write_times = storer.load_data(PROFILER_LABEL)[:]
        self.summary = pd.DataFrame(raw_write_times, columns = list(WRITE_JOBS))
        self.summary.index.name = 'rank'
        self.summary.loc['critical'] = self.summary.max(axis = 0)
        return self.summary
