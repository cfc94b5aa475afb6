# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from .backend import ArrayLike, namespace_of_arrays, shape
from .errors import (
    ZeroInitialGuessError,
    EmptyMatrixError,
    DimensionMismatchError,
    NonSymmetricMatrixError
)

def check_pos(msg: str, value: int | float):
    if value <= 0:
        raise ValueError(f"{msg} must be above zero, got {value}")

def check_square(mat: ArrayLike) -> int:
    """Return the size of a square matrix or raise for empty and non square input."""
    shp = shape(mat)
    if len(shp) == 0 or 0 in shp:
        raise EmptyMatrixError()
    if len(shp) != 2:
        raise DimensionMismatchError(f"Expected a matrix, got an array of shape {shp}")
    rows, cols = shp
    if rows != cols:
        raise DimensionMismatchError(f"Matrix must be square, got shape {(rows, cols)}")
    return rows

def check_guess(mat: ArrayLike, guess: ArrayLike) -> None:
    """Validate a matrix together with the initial guess of a power method."""
    xp = namespace_of_arrays(guess)
    if bool(xp.all(guess == 0.0)):
        raise ZeroInitialGuessError()
    size = check_square(mat)
    if shape(guess) != (size,):
        raise DimensionMismatchError(
            f"Matrix of size {size} does not match initial guess of shape {shape(guess)}")

def asymmetry(mat: ArrayLike) -> float:
    xp = namespace_of_arrays(mat)
    return float(xp.max(xp.abs(mat - mat.T)))

def check_symmetric(mat: ArrayLike, tol: float) -> None:
    """Raise if the matrix deviates from its transpose by more than tol relative to its largest entry."""
    xp = namespace_of_arrays(mat)
    scale = max(1.0, float(xp.max(xp.abs(mat))))
    diff = asymmetry(mat)
    if diff > tol * scale:
        raise NonSymmetricMatrixError(diff)

def is_symmetric(mat: ArrayLike, tol: float) -> bool:
    xp = namespace_of_arrays(mat)
    return asymmetry(mat) <= tol * max(1.0, float(xp.max(xp.abs(mat))))

def identity(xp, size: int) -> ArrayLike:
    return xp.eye(size, dtype=xp.float64)

def dot(vec1: ArrayLike, vec2: ArrayLike) -> float:
    xp = namespace_of_arrays(vec1, vec2)
    return float(xp.sum(vec1 * vec2))

def norm(vec: ArrayLike) -> float:
    xp = namespace_of_arrays(vec)
    return float(xp.sqrt(xp.sum(vec * vec)))

def residual(mat: ArrayLike, value: float, vec: ArrayLike) -> float:
    """:math:`\\|Mv-\\lambda v\\|_2`"""
    return norm(mat @ vec - value * vec)
