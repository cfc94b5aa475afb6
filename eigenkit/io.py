# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Type, overload
import h5py
import numpy as np

from .backend import ArrayNamespace, ArrayLike, to_device
from .poweriteration import PowerResult
from .householder import HouseholderResult
from .qriteration import EigenDecompositionResult

@overload
def write(group: h5py.Group, obj: PowerResult) -> None: ...
@overload
def write(group: h5py.Group, obj: HouseholderResult) -> None: ...
@overload
def write(group: h5py.Group, obj: EigenDecompositionResult) -> None: ...
#implementation
def write(group: h5py.Group, obj: Any) -> None:
    if isinstance(obj, PowerResult):
        group.attrs["kind"] = "power"
        group.attrs["eigenvalue"] = obj.eigenvalue
        group.attrs["iterations"] = obj.iterations
        group.attrs["error"] = obj.error
        group.attrs["residual"] = obj.residual
        group.attrs["time"] = obj.time
        group.attrs["converged"] = obj.converged
        group.create_dataset("eigenvector", data=to_numpy(obj.eigenvector))
        group.create_dataset("history", data=np.asarray(obj.history, dtype=np.float64))
    elif isinstance(obj, HouseholderResult):
        group.attrs["kind"] = "householder"
        group.create_dataset("orthogonal", data=to_numpy(obj.orthogonal))
        group.create_dataset("tridiagonal", data=to_numpy(obj.tridiagonal))
    elif isinstance(obj, EigenDecompositionResult):
        group.attrs["kind"] = "eigendecomposition"
        group.attrs["iterations"] = obj.iterations
        group.attrs["converged"] = obj.converged
        group.attrs["off_diagonal"] = obj.off_diagonal
        group.attrs["time"] = obj.time
        group.create_dataset("eigenvalues", data=to_numpy(obj.eigenvalues))
        group.create_dataset("eigenvectors", data=to_numpy(obj.eigenvectors))
    else:
        raise ValueError(f"Cannot write object of type {type(obj).__name__}.")

@overload
def read(group: h5py.Group, cls: Type[PowerResult], xp: ArrayNamespace) -> PowerResult: ...
@overload
def read(group: h5py.Group, cls: Type[HouseholderResult], xp: ArrayNamespace) -> HouseholderResult: ...
@overload
def read(group: h5py.Group, cls: Type[EigenDecompositionResult], xp: ArrayNamespace) -> EigenDecompositionResult: ...
#implementation
def read(group: h5py.Group, cls: Any, xp: ArrayNamespace) -> Any:
    if cls == PowerResult:
        return PowerResult(eigenvalue=float(get_attr(group, "eigenvalue")),
                           eigenvector=get_array(group, "eigenvector", xp),
                           iterations=int(get_attr(group, "iterations")),
                           error=float(get_attr(group, "error")),
                           residual=float(get_attr(group, "residual")),
                           time=float(get_attr(group, "time")),
                           history=[float(val) for val in np.asarray(get_dataset(group, "history"))],
                           converged=bool(get_attr(group, "converged")))
    elif cls == HouseholderResult:
        return HouseholderResult(orthogonal=get_array(group, "orthogonal", xp),
                                 tridiagonal=get_array(group, "tridiagonal", xp))
    elif cls == EigenDecompositionResult:
        return EigenDecompositionResult(eigenvalues=get_array(group, "eigenvalues", xp),
                                        eigenvectors=get_array(group, "eigenvectors", xp),
                                        iterations=int(get_attr(group, "iterations")),
                                        converged=bool(get_attr(group, "converged")),
                                        off_diagonal=float(get_attr(group, "off_diagonal")),
                                        time=float(get_attr(group, "time")))

    raise ValueError("Invalid class.")

def to_numpy(array: ArrayLike) -> np.ndarray:
    return np.asarray(to_device(array, "cpu"))

def get_attr(group: h5py.Group, name: str) -> Any:
    return group.attrs[name]

def get_dataset(group: h5py.Group, name: str) -> h5py.Dataset:
    dataset = group[name]
    assert isinstance(dataset, h5py.Dataset)
    return dataset

def get_array(group: h5py.Group, name: str, xp: ArrayNamespace) -> ArrayLike:
    return xp.asarray(np.asarray(get_dataset(group, name)))
