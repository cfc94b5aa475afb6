# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from math import sqrt

from .backend import ArrayLike, namespace_of_arrays
from .utils import identity

#: Entries below this magnitude are treated as already eliminated.
GIVENS_THRESHOLD = 1e-14

def givens_rotation(val1: float, val2: float) -> tuple[float, float]:
    """
    Rotation :math:`(c, s)` with :math:`-s a + c b = 0` and :math:`c \\geq 0`.
    The ratio of the smaller to the larger entry is used to avoid overflow.
    """
    if abs(val2) < GIVENS_THRESHOLD:
        return 1.0, 0.0
    if abs(val2) > abs(val1):
        t = val1 / val2
        s = 1.0 / sqrt(1.0 + t*t)
        c = s * t
        if c < 0.0:
            c, s = -c, -s
        return c, s
    t = val2 / val1
    c = 1.0 / sqrt(1.0 + t*t)
    return c, c * t

def rotate_rows(mat: ArrayLike, i: int, j: int, c: float, s: float) -> None:
    """Apply :math:`G^T` to rows i and j in place."""
    top, bottom = mat[i, :], mat[j, :]
    new_top = c * top + s * bottom
    new_bottom = c * bottom - s * top
    mat[i, :] = new_top
    mat[j, :] = new_bottom

def rotate_cols(mat: ArrayLike, i: int, j: int, c: float, s: float) -> None:
    """Apply :math:`G` to columns i and j in place."""
    left, right = mat[:, i], mat[:, j]
    new_left = c * left + s * right
    new_right = c * right - s * left
    mat[:, i] = new_left
    mat[:, j] = new_right

def qr_givens[T: ArrayLike](mat: T) -> tuple[T, T]:
    """
    QR decomposition of a tridiagonal (or upper Hessenberg) matrix with one Givens rotation
    per non vanishing sub-diagonal entry. Returns :math:`Q` and :math:`R` with :math:`M=QR`.
    """
    xp = namespace_of_arrays(mat)
    size = mat.shape[0]
    q = identity(xp, size)
    r = xp.asarray(mat, dtype=xp.float64, copy=True)
    for i in range(size - 1):
        if abs(float(r[i+1, i])) > GIVENS_THRESHOLD:
            c, s = givens_rotation(float(r[i, i]), float(r[i+1, i]))
            rotate_rows(r, i, i+1, c, s)
            rotate_cols(q, i, i+1, c, s)
    return q, r
