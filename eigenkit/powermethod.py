# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Optional
from dataclasses import replace
from enum import Enum
import logging
import math

from .backend import ArrayLike, namespace_of_arrays, linalg_errors, float_system
from .convergence import ConvergenceCriteria
from .errors import SingularMatrixError
from .poweriteration import PowerIteration, PowerResult
from .resolver import EigenvectorResolver
from .utils import check_guess, is_symmetric, identity, residual

logger = logging.getLogger(__name__)

#: Allowed asymmetry, relative to the largest entry, for resolving eigenvectors by full decomposition.
SYMMETRY_TOL = 1e-10

class PowerMethodKind(Enum):
    REGULAR = "regular"
    INVERSE = "inverse"
    FARTHEST = "farthest"
    NEAREST = "nearest"

def invert[T: ArrayLike](mat: T) -> T:
    xp = namespace_of_arrays(mat)
    try:
        inv = xp.linalg.inv(mat)
    except linalg_errors(xp) as err:
        raise SingularMatrixError(f"Failed to compute the inverse of the matrix: {err}") from err
    if not bool(xp.all(xp.isfinite(inv))):
        raise SingularMatrixError("Inverse of the matrix has non-finite entries")
    return inv

def shifted[T: ArrayLike](mat: T, shift: float) -> T:
    """:math:`M-sI`"""
    xp = namespace_of_arrays(mat)
    return mat - shift * identity(xp, mat.shape[0])

def regular_power[T: ArrayLike](
        mat: T,
        guess: T,
        eps: float = 1e-10,
        max_iterations: int = 1000) -> PowerResult[T]:
    """
    Eigenvalue of largest magnitude and its eigenvector.
    """
    mat, guess = float_system(mat, guess)
    check_guess(mat, guess)
    res = PowerIteration(ConvergenceCriteria(eps, max_iterations))(mat, guess)
    logger.info("Finished the regular power method: eigenvalue=%.15g iterations=%d error=%.3e",
                res.eigenvalue, res.iterations, res.error)
    return res

def inverse_power[T: ArrayLike](
        mat: T,
        guess: T,
        eps: float = 1e-10,
        max_iterations: int = 1000) -> PowerResult[T]:
    """
    Eigenvalue of smallest magnitude and its eigenvector, obtained by power iteration on the
    inverse matrix. Raises :class:`SingularMatrixError` if the matrix cannot be inverted.
    """
    mat, guess = float_system(mat, guess)
    check_guess(mat, guess)
    res = PowerIteration(ConvergenceCriteria(eps, max_iterations))(invert(mat), guess)

    if res.eigenvalue == 0.0:
        logger.warning("Eigenvalue estimate of the inverse matrix is zero")
        value = math.inf
    else:
        value = 1.0 / res.eigenvalue
    logger.info("Finished the inverse power method: eigenvalue=%.15g iterations=%d error=%.3e",
                value, res.iterations, res.error)
    return replace(res, eigenvalue=value, residual=residual(mat, value, res.eigenvector))

def farthest_eigenvalue_power[T: ArrayLike](
        mat: T,
        guess: T,
        shift: float,
        eps: float = 1e-10,
        max_iterations: int = 1000,
        resolver: Optional[EigenvectorResolver] = None) -> PowerResult[T]:
    """
    Eigenvalue farthest from the shift, obtained by power iteration on :math:`M-sI`.
    """
    mat, guess = float_system(mat, guess)
    check_guess(mat, guess)
    res = PowerIteration(ConvergenceCriteria(eps, max_iterations))(shifted(mat, shift), guess)
    value = res.eigenvalue + shift
    vec = recover_eigenvector(mat, value, res.eigenvector, resolver)
    logger.info("Finished the farthest eigenvalue power method: eigenvalue=%.15g iterations=%d",
                value, res.iterations)
    return replace(res, eigenvalue=value, eigenvector=vec, residual=residual(mat, value, vec))

def nearest_eigenvalue_power[T: ArrayLike](
        mat: T,
        guess: T,
        shift: float,
        eps: float = 1e-10,
        max_iterations: int = 1000,
        resolver: Optional[EigenvectorResolver] = None) -> PowerResult[T]:
    """
    Eigenvalue nearest to the shift, obtained by inverse power iteration on :math:`M-sI`.
    Raises :class:`SingularMatrixError` if the shift is an eigenvalue.
    """
    mat, guess = float_system(mat, guess)
    check_guess(mat, guess)
    res = inverse_power(shifted(mat, shift), guess, eps, max_iterations)
    value = res.eigenvalue + shift
    vec = recover_eigenvector(mat, value, res.eigenvector, resolver)
    logger.info("Finished the nearest eigenvalue power method: eigenvalue=%.15g iterations=%d",
                value, res.iterations)
    return replace(res, eigenvalue=value, eigenvector=vec, residual=residual(mat, value, vec))

def recover_eigenvector[T: ArrayLike](
        mat: T,
        value: float,
        vec: T,
        resolver: Optional[EigenvectorResolver] = None) -> T:
    """
    Eigenvector of the matrix for the eigenvalue found by a shifted power method. Symmetric
    matrices are resolved by full decomposition, otherwise the iterated vector is kept.
    """
    if not is_symmetric(mat, SYMMETRY_TOL):
        logger.warning("Matrix is not symmetric, keeping the eigenvector of the power iteration")
        return vec
    if resolver is None:
        resolver = EigenvectorResolver()
    return resolver(mat, value)

def power_method[T: ArrayLike](
        kind: PowerMethodKind | str,
        mat: T,
        guess: T,
        shift: float = 0.0,
        eps: float = 1e-10,
        max_iterations: int = 1000) -> PowerResult[T]:
    """
    Run the power method variant given by kind. The shift is ignored by the regular and
    inverse variants.
    """
    kind = PowerMethodKind(kind)
    if kind == PowerMethodKind.REGULAR:
        return regular_power(mat, guess, eps, max_iterations)
    elif kind == PowerMethodKind.INVERSE:
        return inverse_power(mat, guess, eps, max_iterations)
    elif kind == PowerMethodKind.FARTHEST:
        return farthest_eigenvalue_power(mat, guess, shift, eps, max_iterations)
    elif kind == PowerMethodKind.NEAREST:
        return nearest_eigenvalue_power(mat, guess, shift, eps, max_iterations)
    raise ValueError(f"Unknown power method {kind}")
