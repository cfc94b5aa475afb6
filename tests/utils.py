from typing import Sequence
import numpy as np
import array_api_compat as api

backends = [api.array_namespace(np.zeros(1))]

#import torch as tr
#tr.set_default_dtype(tr.float64)
#backends.append(api.array_namespace(tr.zeros(1)))

def rand_data(xp, *shape: int, seed: int = 0):
    data = np.random.default_rng(seed).random(shape)
    return xp.asarray(data)

def rand_symmetric(xp, size: int, seed: int = 0):
    data = np.random.default_rng(seed).random((size, size))
    return xp.asarray(data + data.T)

def to_list(xp, array) -> list[float]:
    return [float(val) for val in xp.reshape(array, (-1,))]

def max_abs(xp, array) -> float:
    return float(xp.max(xp.abs(array)))

def normalized_abs(values: Sequence[float]) -> list[float]:
    norm = sum(val*val for val in values) ** 0.5
    return [abs(val) / norm for val in values]
