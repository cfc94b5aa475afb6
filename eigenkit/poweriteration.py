# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Optional
from dataclasses import dataclass, field
import logging
import math
import time

from .backend import ArrayLike
from .convergence import ConvergenceCriteria
from .utils import dot, norm, residual

logger = logging.getLogger(__name__)

#: Lower bound of the denominator of the relative error.
ERROR_FLOOR = 1e-15

@dataclass(kw_only=True)
class PowerResult[T: ArrayLike]:
    #: Eigenvalue estimate.
    eigenvalue: float
    #: Eigenvector with unit L2 norm.
    eigenvector: T
    #: Number of iterations of the core iteration.
    iterations: int
    #: Relative change of the eigenvalue in the last iteration.
    error: float = math.inf
    #: :math:`\|Mv-\lambda v\|_2` with respect to the input matrix.
    residual: float = math.nan
    #: Time taken to compute the eigenpair.
    time: float = 0.0
    #: Eigenvalue estimates of the core iteration.
    history: list[float] = field(default_factory=list)
    #: Whether the relative change dropped below eps.
    converged: bool = False

def relative_error(new: float, old: float) -> float:
    return abs(new - old) / max(abs(new), abs(old), ERROR_FLOOR)

@dataclass
class PowerIteration:
    """
    Normalized power iteration. Converges to the eigenvalue of largest magnitude if it is
    distinct in magnitude and the guess has a component along its eigenvector.
    """

    #: Convergence criteria of the iteration.
    criteria: ConvergenceCriteria = field(default_factory=ConvergenceCriteria)

    def __call__[T: ArrayLike](self, mat: T, guess: T, /) -> PowerResult[T]:
        """
        Iterate :math:`v_{k+1} = Mv_k/\\|Mv_k\\|` starting from the guess. The eigenvalue estimate
        is :math:`\\lambda_k = (Mv_k)\\cdot v_k`.
        """
        eps, max_iterations = self.criteria.eps, self.criteria.max_iterations
        stamp = time.time()

        vec = guess / norm(guess)
        value = 0.0
        previous: Optional[float] = None
        error = math.inf
        history: list[float] = []
        iteration = 0
        while iteration < max_iterations:
            iteration += 1
            prod = mat @ vec
            prod_norm = norm(prod)
            if prod_norm == 0.0:
                logger.warning("Norm of M*v is zero in iteration %d, stopping the iteration", iteration)
                break

            value = dot(prod, vec)
            vec = prod / prod_norm
            # the first estimate has nothing to be compared with
            if previous is not None:
                error = relative_error(value, previous)
            previous = value
            history.append(value)
            logger.debug("Power iteration %d: eigenvalue=%.15g error=%.3e", iteration, value, error)

            if error < eps:
                break
        else:
            logger.warning("Power iteration did not converge in %d iterations, error=%.3e",
                           max_iterations, error)

        return PowerResult(eigenvalue=value,
                           eigenvector=vec,
                           iterations=iteration,
                           error=error,
                           residual=residual(mat, value, vec),
                           converged=error < eps,
                           time=time.time() - stamp,
                           history=history)
