# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

"""typing has all classes used in the external API of eigenkit."""

from .convergence import ConvergenceCriteria
from .poweriteration import PowerIteration, PowerResult
from .powermethod import PowerMethodKind
from .householder import HouseholderReduction, HouseholderResult
from .qriteration import ShiftedQR, EigenDecompositionResult
from .eigendecomposition import SymmetricEigenSolver
from .resolver import EigenvectorResolver
from .matrixeigenvaluedecomposition import MatrixEigenvalueDecomposition
from .options import ConvergenceOptions

from .eigenkit import EigenKit
