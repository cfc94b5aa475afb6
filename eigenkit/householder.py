# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from dataclasses import dataclass
import logging

from .backend import ArrayLike, namespace_of_arrays, float_matrices
from .contractor import OptimizeKind, DEFAULT_OPTIMIZER, similarity_transform, chain_product
from .utils import check_square, check_symmetric, check_pos, identity, norm

logger = logging.getLogger(__name__)

@dataclass(kw_only=True)
class HouseholderResult[T: ArrayLike]:
    #: Orthogonal matrix :math:`Q` with :math:`Q^TAQ=T`.
    orthogonal: T
    #: Symmetric tridiagonal matrix :math:`T`.
    tridiagonal: T

    def reconstruct(self) -> T:
        """:math:`QTQ^T`, which equals the input matrix up to rounding."""
        return chain_product(self.orthogonal, self.tridiagonal, self.orthogonal.T)

@dataclass
class HouseholderReduction:
    """
    Reduction of a symmetric matrix to tridiagonal form by a sequence of Householder reflections.
    """

    #: Norm of the sub-column below which a column counts as already eliminated.
    threshold: float = 1e-14

    #: Allowed asymmetry of the input, relative to its largest entry.
    symmetry_tol: float = 1e-10

    #: Contraction path optimizer for the similarity transformations.
    optimizer: OptimizeKind = DEFAULT_OPTIMIZER

    def __post_init__(self) -> None:
        check_pos("threshold", self.threshold)
        check_pos("symmetry_tol", self.symmetry_tol)

    def __call__[T: ArrayLike](self, mat: T, /) -> HouseholderResult[T]:
        """
        Calculate :math:`A=QTQ^T` and return :math:`Q` and :math:`T`.
        """
        size = check_square(mat)
        check_symmetric(mat, self.symmetry_tol)
        xp = namespace_of_arrays(mat)

        trafo = identity(xp, size)
        tri = xp.asarray(mat, dtype=xp.float64, copy=True)
        for col in range(size - 2):
            reflector = self.reflector(tri, col)
            tri = similarity_transform(tri, reflector, self.optimizer)
            trafo = trafo @ reflector
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Householder step %d: column norm below sub-diagonal=%.3e",
                             col, norm(tri[col+2:, col]))

        logger.info("Finished Householder reduction of a %dx%d matrix", size, size)
        return HouseholderResult(orthogonal=trafo, tridiagonal=tri)

    def reflector[T: ArrayLike](self, mat: T, col: int) -> T:
        """
        Reflector :math:`H=I-2vv^T` zeroing the entries of column col below the first sub-diagonal.
        Returns the identity if there is nothing to eliminate.
        """
        xp = namespace_of_arrays(mat)
        size = mat.shape[0]

        vec = xp.zeros(size, dtype=xp.float64)
        vec[col+1:] = mat[col+1:, col]
        vec_norm = norm(vec)
        if vec_norm < self.threshold:
            return identity(xp, size)

        # sign of the leading entry avoids cancellation
        sign = -1.0 if float(vec[col+1]) < 0.0 else 1.0
        vec[col+1] = vec[col+1] + sign * vec_norm
        vec = vec / norm(vec)

        return identity(xp, size) - 2.0 * (vec[:, None] * vec[None, :])

def householder_tridiagonalize[T: ArrayLike](mat: T) -> HouseholderResult[T]:
    """Householder reduction of an array or row-major sequence, see :class:`HouseholderReduction`."""
    mat, = float_matrices(mat)
    return HouseholderReduction()(mat)
