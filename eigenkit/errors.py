# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

"""Exceptions raised for input the eigenvalue algorithms cannot work with."""

class EigenError(ValueError):
    """Base class of all input errors of eigenkit."""

class ZeroInitialGuessError(EigenError):
    """The initial guess of a power method is the zero vector."""

    def __init__(self) -> None:
        super().__init__("Initial guess cannot be the zero vector")

class EmptyMatrixError(EigenError):
    """The matrix has no entries."""

    def __init__(self) -> None:
        super().__init__("Matrix cannot be empty")

class DimensionMismatchError(EigenError):
    """The dimensions of the operands do not fit together."""

class SingularMatrixError(EigenError):
    """The matrix could not be inverted."""

class NonSymmetricMatrixError(EigenError):
    """The algorithm requires a symmetric matrix."""

    #: Largest absolute difference between the matrix and its transpose.
    asymmetry: float

    def __init__(self, asymmetry: float) -> None:
        self.asymmetry = asymmetry
        super().__init__(f"Matrix must be symmetric, found max|A-A^T| = {asymmetry:.3e}")
