"""Sparse differential-algebraic system of a lumped-parameter model."""

from __future__ import annotations

from typing import Any

import numpy as np
from scipy import sparse
from scipy.sparse.linalg import splu


class SparseSystem:
    """Matrices, vectors and linear solve of the system ``E·ydot + F·y + C = 0``.

    Blocks write their entries into ``F``, ``E``, ``dC_dy`` and ``dC_dydot``
    by item assignment (``system.F[i, j] = value``) and into ``C`` by index.
    The Newton iteration solves ``jacobian · dydot = residual`` with

    ``jacobian = c_ydot·(E + dC/dydot) + c_y·(F + dC/dy)`` and
    ``residual = -(C + E·ydot + F·y)``.
    """

    def __init__(self, n: int = 0) -> None:
        if n < 0:
            raise ValueError(f"System size must be non-negative, got {n}")
        self.size = n
        self.F = sparse.lil_matrix((n, n), dtype=float)
        self.E = sparse.lil_matrix((n, n), dtype=float)
        self.dC_dy = sparse.lil_matrix((n, n), dtype=float)
        self.dC_dydot = sparse.lil_matrix((n, n), dtype=float)
        self.C = np.zeros(n, dtype=float)

        self.jacobian = sparse.csc_matrix((n, n), dtype=float)
        self.residual = np.zeros(n, dtype=float)
        self.dydot = np.zeros(n, dtype=float)

    def reserve(self, model: Any) -> None:
        """Fill the system once from ``model`` to establish its sparsity pattern.

        The model's constant, time-dependent (at time 0) and solution-dependent
        (at a solution of all ones) contributions are written, and the
        Jacobian is assembled once with unit coefficients.
        """
        model.update_constant(self)
        model.update_time(self, 0.0)
        dummy_y = np.ones(self.size, dtype=float)
        dummy_dy = np.ones(self.size, dtype=float)
        model.update_solution(self, dummy_y, dummy_dy)
        self.update_jacobian(1.0, 1.0)

    def update_residual(self, y: Any, ydot: Any) -> None:
        """Evaluate ``residual = -(C + E·ydot + F·y)``."""
        y = np.asarray(y, dtype=float)
        ydot = np.asarray(ydot, dtype=float)
        self.residual = -self.C - self.E @ ydot - self.F @ y

    def update_jacobian(self, time_coeff_ydot: float, time_coeff_y: float) -> None:
        """Assemble the Jacobian from the system matrices and time coefficients."""
        jacobian = (self.E + self.dC_dydot) * time_coeff_ydot + (
            self.F + self.dC_dy
        ) * time_coeff_y
        self.jacobian = sparse.csc_matrix(jacobian, dtype=float)

    def solve(self) -> None:
        """Solve ``jacobian · dydot = residual`` for the increment ``dydot``.

        Raises numpy.linalg.LinAlgError if the Jacobian is singular.
        """
        if self.size == 0:
            self.dydot = np.zeros(0, dtype=float)
            return
        try:
            factor = splu(self.jacobian.tocsc())
        except RuntimeError as exc:
            raise np.linalg.LinAlgError(
                f"Cannot factorize system Jacobian: {exc}"
            ) from exc
        self.dydot = factor.solve(np.asarray(self.residual, dtype=float))