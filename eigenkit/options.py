# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Hashable, Optional, Self
import threading

from .utils import check_pos

#: Options of one EigenKit, keyed by thread. The entry under None holds the defaults.
type OptionStore = dict[Optional[Hashable], "ConvergenceOptions"]

class ConvergenceOptions:
    """
    Context manager for the default convergence parameters of the iterative methods.
    """

    #: Relative change of the eigenvalue below which the power methods stop.
    eps: float
    #: Maximum number of power iterations.
    max_iterations: int
    #: Maximum number of QR steps of the full eigendecomposition.
    qr_max_iterations: int
    #: Sub-diagonal magnitude below which the QR iteration counts an entry as zero.
    tolerance: float

    def __init__(
            self,
            store: OptionStore, *,
            eps: float = 1e-10,
            max_iterations: int = 1000,
            qr_max_iterations: int = 1000,
            tolerance: float = 1e-10) -> None:
        self._store = store
        self.key = threading.get_ident()
        self.eps = eps
        self.max_iterations = max_iterations
        self.qr_max_iterations = qr_max_iterations
        self.tolerance = tolerance

    def __setattr__(self, name: str, value: Any) -> None:
        if name in ("eps", "max_iterations", "qr_max_iterations", "tolerance"):
            check_pos(name, value)
        super().__setattr__(name, value)

    def __enter__(self) -> Self:
        self._tmp = self._store.get(self.key)
        self._store[self.key] = self
        return self

    def __exit__(self, *_) -> None:
        if self._tmp is not None:
            self._store[self.key] = self._tmp
        else:
            del self._store[self.key]

    def __repr__(self) -> str:
        return (f"ConvergenceOptions(eps={self.eps}, max_iterations={self.max_iterations}, "
                f"qr_max_iterations={self.qr_max_iterations}, tolerance={self.tolerance})")

def get_options(store: OptionStore) -> ConvergenceOptions:
    key = threading.get_ident()
    if key in store:
        return store[key]
    elif None in store:
        return store[None]
    raise KeyError("No options set for the current thread.")

def set_options(opts: ConvergenceOptions) -> None:
    opts._store[opts.key] = opts

def set_defaults(opts: ConvergenceOptions) -> None:
    opts._store[None] = opts
