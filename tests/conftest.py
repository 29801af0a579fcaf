import pytest

from slabwriter.parallel import CommManager
from slabwriter.results import StorageManager
from slabwriter.settings import WriterSettings

class LoopbackComm:
    '''
    Stands for one worker of a group whose members run one after the other
        in the same process. allgather answers with the sizes given up front
    '''
    def __init__(self, rank, size, gathered = None):
        self.rank = rank
        self.size = size
        self.gathered = gathered
        self.barriers = 0
        self.aborted = None

    def Get_rank(self):
        return self.rank

    def Get_size(self):
        return self.size

    def Barrier(self):
        self.barriers += 1

    def Abort(self, code):
        self.aborted = code

    def allgather(self, value):
        values = list(self.gathered)
        values[self.rank] = value
        return values

@pytest.fixture
def loopback_storers(tmp_path):
    '''
    One StorageManager per rank, all of them appending to the same workspace
    '''
    def build(world_size, gathered = None):
        settings = WriterSettings(file_mode = 'a')
        return [StorageManager(str(tmp_path), router = CommManager(LoopbackComm(rank, world_size, gathered)), settings = settings)
            for rank in range(world_size)]
    return build

@pytest.fixture
def storer(tmp_path):
    s = StorageManager(str(tmp_path))
    yield s
    s.close()
