# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from dataclasses import dataclass, field
import logging

from .backend import ArrayLike, float_matrices
from .householder import HouseholderReduction
from .qriteration import ShiftedQR, EigenDecompositionResult

logger = logging.getLogger(__name__)

@dataclass
class SymmetricEigenSolver:
    """
    Full eigendecomposition of a symmetric matrix. The matrix is reduced to tridiagonal form by
    Householder reflections and diagonalized by the shifted QR iteration.
    """

    #: Tridiagonal reduction.
    reduction: HouseholderReduction = field(default_factory=HouseholderReduction)

    #: Iteration diagonalizing the tridiagonal matrix.
    iteration: ShiftedQR = field(default_factory=ShiftedQR)

    def __call__[T: ArrayLike](self, mat: T, /) -> tuple[T, T]:
        vals, vecs = self.decompose(mat)
        return vals, vecs

    def decompose[T: ArrayLike](self, mat: T) -> EigenDecompositionResult[T]:
        house = self.reduction(mat)
        res = self.iteration(house.tridiagonal, house.orthogonal)
        logger.info("Finished eigendecomposition in %d QR steps, converged=%s",
                    res.iterations, res.converged)
        return res

def complete_eigen_decomposition[T: ArrayLike](
        mat: T,
        max_iterations: int = 1000,
        tolerance: float = 1e-10) -> EigenDecompositionResult[T]:
    mat, = float_matrices(mat)
    solver = SymmetricEigenSolver(iteration=ShiftedQR(max_iterations=max_iterations, tolerance=tolerance))
    return solver.decompose(mat)
