import numpy as np

def is_array(x):
    return type(x) != str and hasattr(x, "__iter__")

def as_shape(shape):
    if shape is None:
        return ()
    if not is_array(shape):
        shape = (shape,)
    return tuple(int(s) for s in shape)

def prod(shape):
    return int(np.prod(shape, dtype = np.int64)) if len(shape) > 0 else 1

def is_integral(value):
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))
