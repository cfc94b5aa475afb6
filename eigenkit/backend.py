# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Sequence
import numpy as np
import array_api_compat as api
from array_api_compat import to_device

#: Array of any array API compliant library.
ArrayLike = Any
#: Array API namespace, e.g. ``array_api_compat.numpy``.
ArrayNamespace = Any

__all__ = ["ArrayLike", "ArrayNamespace", "to_device", "get_namespace", "namespace_of_arrays",
           "as_matrix", "as_vector", "default_namespace", "float_matrices", "float_system",
           "shape", "linalg_errors"]


def get_namespace(obj: Any) -> ArrayNamespace:
    if not api.is_array_api_obj(obj):
        try:
            obj = obj.zeros(1)
        except AttributeError as err:
            raise TypeError("Provided object is not a recognized array or namespace.") from err
    return api.array_namespace(obj)

def namespace_of_arrays(*arrays: ArrayLike) -> ArrayNamespace:
    return api.array_namespace(*arrays)

def as_matrix(xp: ArrayNamespace, data: ArrayLike | Sequence[Sequence[float]]) -> ArrayLike:
    """Convert row-major input into a fresh float64 array of the namespace."""
    if api.is_array_api_obj(data):
        return xp.asarray(data, dtype=xp.float64, copy=True)
    return xp.asarray([[float(val) for val in row] for row in data], dtype=xp.float64)

def as_vector(xp: ArrayNamespace, data: ArrayLike | Sequence[float]) -> ArrayLike:
    """Convert input into a fresh one dimensional float64 array of the namespace."""
    if api.is_array_api_obj(data):
        return xp.asarray(data, dtype=xp.float64, copy=True)
    return xp.asarray([float(val) for val in data], dtype=xp.float64)

def default_namespace(*data: Any) -> ArrayNamespace:
    """Namespace of the arrays among data, numpy if there are none."""
    arrays = [obj for obj in data if api.is_array_api_obj(obj)]
    if arrays:
        return api.array_namespace(*arrays)
    return api.array_namespace(np.zeros(0))

def float_matrices(*data: ArrayLike | Sequence[Sequence[float]]) -> tuple[ArrayLike, ...]:
    """Float64 copies of matrices given as arrays or row-major sequences."""
    xp = default_namespace(*data)
    return tuple(as_matrix(xp, mat) for mat in data)

def float_system(
        mat: ArrayLike | Sequence[Sequence[float]],
        vec: ArrayLike | Sequence[float]) -> tuple[ArrayLike, ArrayLike]:
    """Float64 copies of a matrix and a vector in a common namespace."""
    xp = default_namespace(mat, vec)
    return as_matrix(xp, mat), as_vector(xp, vec)

def shape(array: ArrayLike) -> tuple[int, ...]:
    shp = array.shape
    if any(s is None for s in shp):
        raise ValueError("Array shape contains None dimension(s).")
    return shp

def linalg_errors(xp: ArrayNamespace) -> tuple[type[Exception], ...]:
    """Exception types raised by the linalg extension of a namespace for singular input."""
    errors: list[type[Exception]] = [np.linalg.LinAlgError]
    if api.is_torch_namespace(xp):
        import torch
        errors.append(torch.linalg.LinAlgError)
    return tuple(errors)
