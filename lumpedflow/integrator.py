"""Generalized-alpha time integration of a lumped-parameter model."""

from __future__ import annotations

import math
from typing import Any

import numpy as np

from .sparse_system import SparseSystem
from .state import State


class ConvergenceError(RuntimeError):
    """Raised when the non-linear iteration does not reach the tolerance."""


class Integrator:
    """Generalized-alpha integrator with Newton-Raphson iterations.

    ``rho`` is the spectral radius: 0 gives the BDF2 scheme, 1 the
    trapezoidal rule. The model must provide a ``dofhandler`` whose ``len``
    is the number of degrees of freedom, and the hooks ``update_constant``,
    ``update_time``, ``update_solution``, ``post_solve``.
    """

    def __init__(
        self,
        model: Any,
        time_step_size: float,
        rho: float,
        atol: float,
        max_iter: int,
    ) -> None:
        self.model = model
        self.alpha_m = 0.5 * (3.0 - rho) / (1.0 + rho)
        self.alpha_f = 1.0 / (1.0 + rho)
        self.gamma = 0.5 + self.alpha_m - self.alpha_f
        self.ydot_init_coeff = 1.0 - 1.0 / self.gamma

        self.time_step_size = time_step_size
        self.y_coeff = self.gamma * time_step_size
        self.y_coeff_jacobian = self.alpha_f * self.y_coeff

        self.size = len(model.dofhandler)
        self.system = SparseSystem(self.size)
        self.atol = atol
        self.max_iter = max_iter

        self.n_iter = 0
        self.n_nonlin_iter = 0

        self.system.reserve(model)

    def update_params(self, time_step_size: float) -> None:
        """Change the time step size and refresh the model's contributions."""
        self.time_step_size = time_step_size
        self.y_coeff = self.gamma * time_step_size
        self.y_coeff_jacobian = self.alpha_f * self.y_coeff
        self.model.update_constant(self.system)
        self.model.update_time(self.system, 0.0)

    def step(self, old_state: State, time: float) -> State:
        """Advance ``old_state`` from ``time`` by one time step and return the new state.

        Raises ConvergenceError if the residual does not fall below the
        absolute tolerance within the maximum number of iterations.
        """
        # Predictor: constant y, consistent ydot
        new_state = State(
            old_state.y.copy(), old_state.ydot * self.ydot_init_coeff
        )

        new_time = time + self.alpha_f * self.time_step_size
        self.model.update_time(self.system, new_time)

        self.n_iter += 1

        for i in range(self.max_iter):
            ydot_am = old_state.ydot + (new_state.ydot - old_state.ydot) * self.alpha_m
            y_af = old_state.y + (new_state.y - old_state.y) * self.alpha_f

            self.model.update_solution(self.system, y_af, ydot_am)
            self.system.update_residual(y_af, ydot_am)

            if np.max(np.abs(self.system.residual), initial=0.0) < self.atol:
                break
            if i == self.max_iter - 1:
                raise ConvergenceError(
                    "Maximum number of non-linear iterations reached."
                )

            self.system.update_jacobian(self.alpha_m, self.y_coeff_jacobian)
            self.system.solve()

            self.model.post_solve(new_state.y)

            new_state.ydot += self.system.dydot
            new_state.y += self.system.dydot * self.y_coeff

            self.n_nonlin_iter += 1

        return new_state

    def avg_nonlin_iter(self) -> float:
        """Average number of non-linear iterations per step (NaN before any step)."""
        if self.n_iter == 0:
            return math.nan
        return self.n_nonlin_iter / self.n_iter