# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Optional, Sequence, Type, overload
import h5py

from .backend import ArrayNamespace, get_namespace, as_matrix, as_vector
from .options import ConvergenceOptions, OptionStore, get_options, set_options, set_defaults
from .poweriteration import PowerResult
from .powermethod import (
    PowerMethodKind,
    regular_power as _regular_power,
    inverse_power as _inverse_power,
    farthest_eigenvalue_power as _farthest_eigenvalue_power,
    nearest_eigenvalue_power as _nearest_eigenvalue_power
)
from .householder import HouseholderResult, HouseholderReduction
from .qriteration import EigenDecompositionResult, ShiftedQR
from .eigendecomposition import SymmetricEigenSolver
from .resolver import EigenvectorResolver

from .io import write as _write
from .io import read as _read

type MatrixInput[NDArray] = NDArray | Sequence[Sequence[float]]
type VectorInput[NDArray] = NDArray | Sequence[float]

class EigenKit[NDArray: Any]:
    """
    Eigenvalue algorithms bound to one array namespace. Matrices and vectors can be passed
    as arrays or as (nested) sequences in row-major order, they are converted to float64
    arrays of the namespace. Convergence parameters that are not passed explicitly are taken
    from the current options, see :meth:`convergence`.
    """

    #: Array namespace for the underlying array library.
    namespace: ArrayNamespace

    _options: OptionStore

    def __init__(self, namespace: Any) -> None:
        self.namespace = get_namespace(namespace)
        self._options = {}
        set_defaults(ConvergenceOptions(self._options))

    def matrix(self, data: MatrixInput[NDArray]) -> NDArray:
        """
        Dense float64 copy of the input matrix.
        """
        return as_matrix(self.namespace, data)

    def vector(self, data: VectorInput[NDArray]) -> NDArray:
        """
        Dense float64 copy of the input vector.
        """
        return as_vector(self.namespace, data)

    #-------------------------------------------------------------------------------------------------
    # power methods

    def regular_power(
            self,
            matrix: MatrixInput[NDArray],
            guess: VectorInput[NDArray],
            eps: Optional[float] = None,
            max_iterations: Optional[int] = None) -> PowerResult[NDArray]:
        """
        Eigenvalue of largest magnitude and its normalized eigenvector.
        """
        eps, max_iterations = self._power_params(eps, max_iterations)
        return _regular_power(self.matrix(matrix), self.vector(guess), eps, max_iterations)

    def inverse_power(
            self,
            matrix: MatrixInput[NDArray],
            guess: VectorInput[NDArray],
            eps: Optional[float] = None,
            max_iterations: Optional[int] = None) -> PowerResult[NDArray]:
        """
        Eigenvalue of smallest magnitude and its normalized eigenvector.
        """
        eps, max_iterations = self._power_params(eps, max_iterations)
        return _inverse_power(self.matrix(matrix), self.vector(guess), eps, max_iterations)

    def farthest_eigenvalue_power(
            self,
            matrix: MatrixInput[NDArray],
            guess: VectorInput[NDArray],
            shift: float,
            eps: Optional[float] = None,
            max_iterations: Optional[int] = None) -> PowerResult[NDArray]:
        """
        Eigenvalue farthest from the shift and its normalized eigenvector.
        """
        eps, max_iterations = self._power_params(eps, max_iterations)
        return _farthest_eigenvalue_power(self.matrix(matrix), self.vector(guess), shift,
                                          eps, max_iterations, self._resolver())

    def nearest_eigenvalue_power(
            self,
            matrix: MatrixInput[NDArray],
            guess: VectorInput[NDArray],
            shift: float,
            eps: Optional[float] = None,
            max_iterations: Optional[int] = None) -> PowerResult[NDArray]:
        """
        Eigenvalue nearest to the shift and its normalized eigenvector.
        """
        eps, max_iterations = self._power_params(eps, max_iterations)
        return _nearest_eigenvalue_power(self.matrix(matrix), self.vector(guess), shift,
                                         eps, max_iterations, self._resolver())

    def power_method(
            self,
            kind: PowerMethodKind | str,
            matrix: MatrixInput[NDArray],
            guess: VectorInput[NDArray],
            shift: float = 0.0,
            eps: Optional[float] = None,
            max_iterations: Optional[int] = None) -> PowerResult[NDArray]:
        """
        Power method variant selected by kind ("regular", "inverse", "farthest" or "nearest").
        """
        kind = PowerMethodKind(kind)
        if kind == PowerMethodKind.REGULAR:
            return self.regular_power(matrix, guess, eps, max_iterations)
        elif kind == PowerMethodKind.INVERSE:
            return self.inverse_power(matrix, guess, eps, max_iterations)
        elif kind == PowerMethodKind.FARTHEST:
            return self.farthest_eigenvalue_power(matrix, guess, shift, eps, max_iterations)
        return self.nearest_eigenvalue_power(matrix, guess, shift, eps, max_iterations)

    #-------------------------------------------------------------------------------------------------
    # similarity transformations

    def householder_tridiagonalize(self, matrix: MatrixInput[NDArray]) -> HouseholderResult[NDArray]:
        """
        Householder reduction :math:`A=QTQ^T` of a symmetric matrix to tridiagonal form.
        """
        return HouseholderReduction()(self.matrix(matrix))

    def qr_eigen_solve(
            self,
            tridiagonal: MatrixInput[NDArray],
            orthogonal: MatrixInput[NDArray],
            max_iterations: Optional[int] = None,
            tolerance: Optional[float] = None) -> EigenDecompositionResult[NDArray]:
        """
        Shifted QR iteration on a symmetric tridiagonal matrix. The eigenvectors are accumulated
        onto the orthogonal matrix of the Householder reduction.
        """
        iteration = self._qr_iteration(max_iterations, tolerance)
        return iteration(self.matrix(tridiagonal), self.matrix(orthogonal))

    def complete_eigen_decomposition(
            self,
            matrix: MatrixInput[NDArray],
            max_iterations: Optional[int] = None,
            tolerance: Optional[float] = None) -> EigenDecompositionResult[NDArray]:
        """
        All eigenvalues and eigenvectors of a symmetric matrix.
        """
        solver = SymmetricEigenSolver(iteration=self._qr_iteration(max_iterations, tolerance))
        return solver.decompose(self.matrix(matrix))

    def resolve_eigenvector(
            self,
            matrix: MatrixInput[NDArray],
            target: float,
            max_iterations: Optional[int] = None,
            tolerance: Optional[float] = None) -> NDArray:
        """
        Eigenvector of a symmetric matrix belonging to the eigenvalue closest to target.
        """
        return self._resolver(max_iterations, tolerance)(self.matrix(matrix), target)

    #-------------------------------------------------------------------------------------------------
    # io

    @overload
    def write(self, group: h5py.Group, obj: PowerResult[NDArray]) -> None: ...
    @overload
    def write(self, group: h5py.Group, obj: HouseholderResult[NDArray]) -> None: ...
    @overload
    def write(self, group: h5py.Group, obj: EigenDecompositionResult[NDArray]) -> None: ...
    # implementation
    def write(self, group: h5py.Group, obj: Any) -> None:
        """
        Write a result to a hdf5 group.
        """
        _write(group, obj)

    @overload
    def read(self, group: h5py.Group, cls: Type[PowerResult]) -> PowerResult[NDArray]: ...
    @overload
    def read(self, group: h5py.Group, cls: Type[HouseholderResult]) -> HouseholderResult[NDArray]: ...
    @overload
    def read(self, group: h5py.Group, cls: Type[EigenDecompositionResult]) -> EigenDecompositionResult[NDArray]: ...
    # implementation
    def read(self, group: h5py.Group, cls: Any) -> Any:
        """
        Read a result from a hdf5 group, arrays are placed in the namespace of this object.
        """
        return _read(group, cls, self.namespace)

    #-------------------------------------------------------------------------------------------------
    # options

    def convergence(
            self, *,
            eps: Optional[float] = None,
            max_iterations: Optional[int] = None,
            qr_max_iterations: Optional[int] = None,
            tolerance: Optional[float] = None) -> ConvergenceOptions:
        """
        Convergence options, parameters that are not given are taken from the current options.
        Use as context manager to apply them temporarily or pass them to :meth:`set_options`.
        """
        current = self.get_options()
        return ConvergenceOptions(
                self._options,
                eps=current.eps if eps is None else eps,
                max_iterations=current.max_iterations if max_iterations is None else max_iterations,
                qr_max_iterations=current.qr_max_iterations if qr_max_iterations is None else qr_max_iterations,
                tolerance=current.tolerance if tolerance is None else tolerance)

    def set_options(self, options: ConvergenceOptions) -> None:
        """
        Set options for the current thread.
        """
        set_options(options)

    def get_options(self) -> ConvergenceOptions:
        """
        Get the current options.
        """
        return get_options(self._options)

    def _power_params(self, eps: Optional[float], max_iterations: Optional[int]) -> tuple[float, int]:
        opts = self.get_options()
        return (opts.eps if eps is None else eps,
                opts.max_iterations if max_iterations is None else max_iterations)

    def _qr_iteration(self, max_iterations: Optional[int] = None, tolerance: Optional[float] = None) -> ShiftedQR:
        opts = self.get_options()
        return ShiftedQR(max_iterations=opts.qr_max_iterations if max_iterations is None else max_iterations,
                         tolerance=opts.tolerance if tolerance is None else tolerance)

    def _resolver(self, max_iterations: Optional[int] = None, tolerance: Optional[float] = None) -> EigenvectorResolver:
        return EigenvectorResolver(SymmetricEigenSolver(iteration=self._qr_iteration(max_iterations, tolerance)))

    def __repr__(self) -> str:
        return f"EigenKit({self.namespace.__name__})"
