# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

"""
eigenkit computes eigenvalues and eigenvectors of dense real matrices with power iterations
and with a Householder reduction followed by the shifted QR iteration.
"""

import logging

from .eigenkit import EigenKit
from .errors import (
    EigenError,
    ZeroInitialGuessError,
    EmptyMatrixError,
    DimensionMismatchError,
    SingularMatrixError,
    NonSymmetricMatrixError
)
from .powermethod import (
    PowerMethodKind,
    regular_power,
    inverse_power,
    farthest_eigenvalue_power,
    nearest_eigenvalue_power,
    power_method
)
from .householder import householder_tridiagonalize
from .qriteration import qr_eigen_solve
from .eigendecomposition import complete_eigen_decomposition
from .resolver import resolve_eigenvector

__all__ = [
    "EigenKit",
    "EigenError",
    "ZeroInitialGuessError",
    "EmptyMatrixError",
    "DimensionMismatchError",
    "SingularMatrixError",
    "NonSymmetricMatrixError",
    "PowerMethodKind",
    "regular_power",
    "inverse_power",
    "farthest_eigenvalue_power",
    "nearest_eigenvalue_power",
    "power_method",
    "householder_tridiagonalize",
    "qr_eigen_solve",
    "complete_eigen_decomposition",
    "resolve_eigenvector",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
