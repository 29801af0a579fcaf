import logging
import h5py
import numpy as np
import pytest

from slabwriter import run
from slabwriter.parallel import CommManager
from conftest import LoopbackComm
from slabwriter.settings import WriterSettings

def test_single_worker_exercises(tmp_path):
    assert run.run(workspace_path = str(tmp_path)) == 0
    with h5py.File(str(tmp_path / 'stuff.h5'), 'r') as f:
        assert list(f['ranks'][:]) == [0]
    with h5py.File(str(tmp_path / 'matrix.h5'), 'r') as f:
        matrix = f['IntegerMatrix']
        assert np.array_equal(matrix[:], np.arange(20).reshape(4, 5))
        assert matrix.attrs['DummyMetadataInteger'] == 42
        assert matrix.attrs['DummyMetadataInteger'].dtype == np.int32

def test_profiler_output(tmp_path):
    assert run.run(workspace_path = str(tmp_path), settings = WriterSettings(profiler_on = True)) == 0
    assert (tmp_path / 'profiler.h5').exists()

def test_failure_reports_kind(tmp_path, caplog):
    with caplog.at_level(logging.ERROR):
        status = run.run(workspace_path = str(tmp_path / 'missing'))
    assert status == 1
    assert '[IOError]' in caplog.text

class FakeMPI:
    def __init__(self):
        self.finalized = False

    def Is_initialized(self):
        return True

    def Is_finalized(self):
        return self.finalized

    def Finalize(self):
        self.finalized = True

def loopback_router(world_size):
    router = CommManager(LoopbackComm(0, world_size))
    router.MPI = FakeMPI()
    return router

def test_main_aborts_group_on_failure(monkeypatch):
    router = loopback_router(2)
    monkeypatch.setattr(run, 'CommManager', lambda : router)
    monkeypatch.setattr(run, 'run', lambda router, settings : 1)
    with pytest.raises(SystemExit) as exit:
        run.main()
    assert exit.value.code == 1
    assert router['main'].comm.aborted == 1
    assert not router.MPI.finalized

def test_main_finalizes_on_success(monkeypatch):
    router = loopback_router(2)
    monkeypatch.setattr(run, 'CommManager', lambda : router)
    monkeypatch.setattr(run, 'run', lambda router, settings : 0)
    run.main()
    assert router['main'].comm.aborted is None
    assert router.MPI.finalized

def test_finalize_once():
    router = loopback_router(1)
    router.finalize()
    router.finalize()
    assert router.MPI.finalized

def test_single_worker_abort_is_a_no_op():
    router = loopback_router(1)
    router['main'].abort(1)
    assert router['main'].comm.aborted is None
