from slabwriter.parallel.comm import CommManager, Group
from slabwriter.parallel.partitioning import Layout, resolve, exchange, even, rank_plus_one, contribution_sizes
