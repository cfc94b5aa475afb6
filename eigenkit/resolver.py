# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from dataclasses import dataclass, field
import logging

from .backend import ArrayLike, namespace_of_arrays, float_matrices
from .eigendecomposition import SymmetricEigenSolver
from .matrixeigenvaluedecomposition import MatrixEigenvalueDecomposition
from .qriteration import ShiftedQR

logger = logging.getLogger(__name__)

@dataclass
class EigenvectorResolver:
    """
    Finds the eigenvector belonging to an eigenvalue estimate. The matrix is fully decomposed
    and the eigenvector of the closest eigenvalue is returned. The linear scan after a cubic
    decomposition is meant for the small matrices of interactive use.
    """

    #: Full eigendecomposition of the matrix.
    solver: MatrixEigenvalueDecomposition = field(default_factory=SymmetricEigenSolver)

    def __call__[T: ArrayLike](self, mat: T, target: float, /) -> T:
        xp = namespace_of_arrays(mat)
        vals, vecs = self.solver(mat)

        dists = xp.abs(vals - target)
        idx = int(xp.argmin(dists))
        logger.debug("Closest eigenvalue to %.15g is %.15g (index %d, difference %.3e)",
                     target, float(vals[idx]), idx, float(dists[idx]))
        return xp.asarray(vecs[:, idx], copy=True)

def resolve_eigenvector[T: ArrayLike](
        mat: T,
        target: float,
        max_iterations: int = 1000,
        tolerance: float = 1e-10) -> T:
    mat, = float_matrices(mat)
    iteration = ShiftedQR(max_iterations=max_iterations, tolerance=tolerance)
    return EigenvectorResolver(SymmetricEigenSolver(iteration=iteration))(mat, target)
