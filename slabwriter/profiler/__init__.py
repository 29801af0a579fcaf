from slabwriter.profiler.profiler import Profiler, Job
