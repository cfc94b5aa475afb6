# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Literal
import opt_einsum as oe

from .backend import ArrayLike

OptimizeKind = Literal["optimal", "dp", "greedy", "random-greedy", "random-greedy-128", "branch-all", "branch-2", "auto", "auto-hq"]
DEFAULT_OPTIMIZER: OptimizeKind = "greedy"

def similarity_transform[T: ArrayLike](
        mat: T,
        trafo: T,
        optimizer: OptimizeKind = DEFAULT_OPTIMIZER) -> T:
    """:math:`H^TMH` as a single contraction."""
    return oe.contract("ji,jk,kl->il", trafo, mat, trafo, optimize=optimizer) # type: ignore

def chain_product[T: ArrayLike](*mats: T, optimizer: OptimizeKind = DEFAULT_OPTIMIZER) -> T:
    """Product of a chain of matrices, contracted in the order chosen by the optimizer."""
    symbols = [oe.get_symbol(i) for i in range(len(mats)+1)]
    eq = ",".join(symbols[i] + symbols[i+1] for i in range(len(mats)))
    eq += f"->{symbols[0]}{symbols[-1]}"
    return oe.contract(eq, *mats, optimize=optimizer) # type: ignore
