import h5py
import numpy as np
import pytest

from slabwriter.arrays import select, select_all, RegionSelection
from slabwriter.errors import OutOfBoundsError, ConfigurationError

def test_out_of_bounds():
    with pytest.raises(OutOfBoundsError):
        select((6,), 5, 3)

def test_negative_offset():
    with pytest.raises(OutOfBoundsError):
        select((6,), -1, 2)

def test_last_rows_fit():
    region = select((6,), 3, 3)
    assert region.start == (3,)
    assert region.count == (3,)
    assert region.slices == (slice(3, 6),)

def test_full_range_on_other_axes():
    region = select((10, 4, 2), 6, 3)
    assert region.start == (6, 0, 0)
    assert region.count == (3, 4, 2)
    assert region.size == 24

def test_local_selection():
    assert select_all((4, 5)) == RegionSelection((4, 5), (0, 0), (4, 5))

def test_scalar_shape():
    with pytest.raises(ConfigurationError):
        select((), 0, 0)

def test_empty_selection():
    region = select((6,), 6, 0)
    assert region.is_empty
    space = h5py.h5s.create_simple((6,))
    region.apply(space)
    assert space.get_select_npoints() == 0

def test_apply_hyperslab():
    space = h5py.h5s.create_simple((10, 3))
    select((10, 3), 2, 4).apply(space)
    assert space.get_select_npoints() == 12
    assert space.get_select_bounds() == ((2, 0), (5, 2))

def test_slices_index_numpy_arrays():
    x = np.arange(12).reshape(6, 2)
    assert np.array_equal(x[select((6, 2), 1, 2).slices], [[2, 3], [4, 5]])
