# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Iterator
from dataclasses import dataclass
from math import sqrt
import logging
import time

from .backend import ArrayLike, namespace_of_arrays, shape, float_matrices
from .contractor import chain_product, similarity_transform
from .errors import DimensionMismatchError
from .givens import qr_givens
from .utils import check_square, check_pos, identity

logger = logging.getLogger(__name__)

@dataclass(kw_only=True)
class EigenDecompositionResult[T: ArrayLike]:
    #: Eigenvalues in the order of the final diagonal, not sorted.
    eigenvalues: T
    #: Eigenvectors as columns, column i belongs to eigenvalue i.
    eigenvectors: T
    #: Number of QR steps performed.
    iterations: int = 0
    #: Whether all sub-diagonal entries dropped below the tolerance.
    converged: bool = True
    #: Largest remaining sub-diagonal magnitude.
    off_diagonal: float = 0.0
    #: Time taken by the iteration.
    time: float = 0.0

    def __iter__(self) -> Iterator[T]:
        return iter((self.eigenvalues, self.eigenvectors))

    def __len__(self) -> int:
        return shape(self.eigenvalues)[0]

    def pair(self, idx: int) -> tuple[float, T]:
        """Eigenvalue and eigenvector with index idx."""
        return float(self.eigenvalues[idx]), self.eigenvectors[:, idx]

    def reconstruct(self) -> T:
        """:math:`V\\Lambda V^T`, which equals the decomposed matrix if the iteration converged."""
        xp = namespace_of_arrays(self.eigenvalues)
        return chain_product(self.eigenvectors,
                             self.eigenvalues[:, None] * identity(xp, len(self)),
                             self.eigenvectors.T)

def off_diagonal(mat: ArrayLike) -> float:
    """Largest magnitude on the first sub-diagonal."""
    xp = namespace_of_arrays(mat)
    if mat.shape[0] < 2:
        return 0.0
    return float(xp.max(xp.abs(xp.linalg.diagonal(mat, offset=-1))))

def is_converged(mat: ArrayLike, tolerance: float) -> bool:
    return off_diagonal(mat) <= tolerance

def active_end(mat: ArrayLike, tolerance: float) -> int:
    """Last row of the bottom-most block that has not decoupled yet."""
    for end in range(mat.shape[0] - 1, 0, -1):
        if abs(float(mat[end, end-1])) > tolerance:
            return end
    return mat.shape[0] - 1

def active_start(mat: ArrayLike, end: int, tolerance: float) -> int:
    """First row of the unreduced block ending at row end."""
    start = end
    while start > 0 and abs(float(mat[start, start-1])) > tolerance:
        start -= 1
    return start

def wilkinson_shift(mat: ArrayLike, end: int | None = None) -> float:
    """
    Eigenvalue of the 2x2 block ending at row end that is closer to its last diagonal entry.
    Falls back to the last diagonal entry for complex eigenvalues.
    """
    if end is None:
        end = mat.shape[0] - 1
    if end < 1:
        return 0.0
    a = float(mat[end-1, end-1])
    b = float(mat[end-1, end])
    c = float(mat[end, end-1])
    d = float(mat[end, end])

    trace = a + d
    det = a*d - b*c
    discriminant = trace*trace - 4.0*det
    if discriminant < 0.0:
        return d

    root = sqrt(discriminant)
    val1 = (trace + root) / 2.0
    val2 = (trace - root) / 2.0
    if abs(d - val1) < abs(d - val2):
        return val1
    return val2

@dataclass
class ShiftedQR:
    """
    QR iteration with Wilkinson shifts for symmetric tridiagonal matrices. The orthogonal
    factors of all steps are accumulated onto the provided orthogonal matrix, so that the
    columns of the result are eigenvectors of the matrix the tridiagonal one was reduced from.
    """

    #: Upper bound on the number of QR steps.
    max_iterations: int = 1000

    #: Sub-diagonal magnitude below which an entry counts as zero.
    tolerance: float = 1e-10

    def __setattr__(self, name: str, value: Any) -> None:
        if name in ("max_iterations", "tolerance"):
            check_pos(name, value)
        super().__setattr__(name, value)

    def __call__[T: ArrayLike](self, tri: T, trafo: T, /) -> EigenDecompositionResult[T]:
        size = check_square(tri)
        if shape(trafo) != (size, size):
            raise DimensionMismatchError(
                f"Orthogonal matrix of shape {shape(trafo)} does not match tridiagonal matrix of size {size}")
        xp = namespace_of_arrays(tri, trafo)
        stamp = time.time()

        mat = xp.asarray(tri, dtype=xp.float64, copy=True)
        vecs = xp.asarray(trafo, dtype=xp.float64, copy=True)

        iterations = 0
        while not is_converged(mat, self.tolerance):
            if iterations == self.max_iterations:
                logger.warning("QR iteration did not converge in %d iterations, off-diagonal=%.3e",
                               self.max_iterations, off_diagonal(mat))
                break
            iterations += 1

            # only the unreduced block is iterated, decoupled eigenvalues stay in place
            end = active_end(mat, self.tolerance)
            start = active_start(mat, end, self.tolerance)
            shift = wilkinson_shift(mat, end)
            block = mat[start:end+1, start:end+1]
            q, _ = qr_givens(block - shift * identity(xp, end + 1 - start))

            rotation = identity(xp, size)
            rotation[start:end+1, start:end+1] = q
            mat = similarity_transform(mat, rotation)
            vecs = vecs @ rotation
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("QR iteration %d: block=[%d, %d] shift=%.15g off-diagonal=%.3e",
                             iterations, start, end, shift, off_diagonal(mat))

        remaining = off_diagonal(mat)
        eigenvalues = xp.asarray(xp.linalg.diagonal(mat), copy=True)
        logger.info("Finished QR iteration after %d steps with eigenvalues %s",
                    iterations, [float(val) for val in eigenvalues])

        return EigenDecompositionResult(eigenvalues=eigenvalues,
                                        eigenvectors=vecs,
                                        iterations=iterations,
                                        converged=remaining <= self.tolerance,
                                        off_diagonal=remaining,
                                        time=time.time() - stamp)

def qr_eigen_solve[T: ArrayLike](
        tri: T,
        trafo: T,
        max_iterations: int = 1000,
        tolerance: float = 1e-10) -> EigenDecompositionResult[T]:
    tri, trafo = float_matrices(tri, trafo)
    return ShiftedQR(max_iterations=max_iterations, tolerance=tolerance)(tri, trafo)
