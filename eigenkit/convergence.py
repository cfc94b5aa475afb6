# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any
from dataclasses import dataclass

from .utils import check_pos

@dataclass
class ConvergenceCriteria:
    """
    Stopping rule of an iterative method.
    """

    #: Relative change of the estimate below which the iteration is stopped.
    eps: float = 1e-10

    #: Upper bound on the number of iterations.
    max_iterations: int = 1000

    def __setattr__(self, name: str, value: Any) -> None:
        if name in ("eps", "max_iterations"):
            check_pos(name, value)
        super().__setattr__(name, value)
