"""Resistor-capacitor-inductor blood vessel with optional stenosis."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Sequence

import numpy as np

from .block import Block, TripletsContributions


@dataclass(frozen=True)
class VesselInput:
    """Description of a parameter read from the model configuration."""

    is_optional: bool = False


class BloodVessel(Block):
    """Blood vessel with Poiseuille resistance, capacitance, inductance and stenosis.

    Governing equations, with ``S`` the stenosis coefficient::

        P_in - P_out - (R + S|Q_in|) Q_in - L dQ_out = 0
        Q_in - Q_out - C dP_in + C (R + 2 S|Q_in|) dQ_in = 0

    Local variables are ``[P_in, Q_in, P_out, Q_out]``.
    """

    class ParamId(IntEnum):
        """Local IDs of the parameters."""

        RESISTANCE = 0
        CAPACITANCE = 1
        INDUCTANCE = 2
        STENOSIS_COEFFICIENT = 3

    BLOCK_TYPE = "blood_vessel"
    BLOCK_CLASS = "vessel"

    def __init__(self, block_id: int, model: Any) -> None:
        super().__init__(
            block_id,
            model,
            self.BLOCK_TYPE,
            self.BLOCK_CLASS,
            [
                ("R_poiseuille", VesselInput()),
                ("C", VesselInput(is_optional=True)),
                ("L", VesselInput(is_optional=True)),
                ("stenosis_coefficient", VesselInput(is_optional=True)),
            ],
        )
        self.num_triplets = TripletsContributions(5, 3, 2)

    def _param(self, values: Sequence[float], local_id: int) -> float:
        return float(values[self.global_param_ids[local_id]])

    def setup_dofs(self, dofhandler: Any) -> None:
        """Register the two equations of the vessel."""
        self.setup_dofs_(dofhandler, 2, [])

    def update_constant(self, system: Any, parameters: Sequence[float]) -> None:
        """Write the constant entries of E and F."""
        capacitance = self._param(parameters, self.ParamId.CAPACITANCE)
        inductance = self._param(parameters, self.ParamId.INDUCTANCE)
        resistance = self._param(parameters, self.ParamId.RESISTANCE)

        eq0, eq1 = self.global_eqn_ids[0], self.global_eqn_ids[1]
        v = self.global_var_ids

        system.E[eq0, v[3]] = -inductance
        system.E[eq1, v[0]] = -capacitance
        system.E[eq1, v[1]] = capacitance * resistance
        system.F[eq0, v[0]] = 1.0
        system.F[eq0, v[1]] = -resistance
        system.F[eq0, v[2]] = -1.0
        system.F[eq1, v[1]] = 1.0
        system.F[eq1, v[3]] = -1.0

    def update_solution(
        self, system: Any, parameters: Sequence[float], y: Any, dy: Any
    ) -> None:
        """Write the stenosis terms of C and their derivatives."""
        capacitance = self._param(parameters, self.ParamId.CAPACITANCE)
        stenosis_coeff = self._param(parameters, self.ParamId.STENOSIS_COEFFICIENT)

        eq0, eq1 = self.global_eqn_ids[0], self.global_eqn_ids[1]
        q_var = self.global_var_ids[1]
        q_in = float(y[q_var])
        dq_in = float(dy[q_var])
        stenosis_resistance = stenosis_coeff * abs(q_in)

        system.C[eq0] = stenosis_resistance * -q_in
        system.C[eq1] = stenosis_resistance * 2.0 * capacitance * dq_in

        sgn_q_in = float(np.sign(q_in))
        system.dC_dy[eq0, q_var] = stenosis_coeff * sgn_q_in * -2.0 * q_in
        system.dC_dy[eq1, q_var] = stenosis_coeff * sgn_q_in * 2.0 * capacitance * dq_in

        system.dC_dydot[eq1, q_var] = stenosis_resistance * 2.0 * capacitance

    def update_gradient(
        self, jacobian: Any, residual: Any, alpha: Any, y: Any, dy: Any
    ) -> None:
        """Write the gradient with respect to the parameters and the residual.

        The stenosis coefficient is optional here: with only three parameters
        it is taken as zero and its column is left untouched.
        """
        v = self.global_var_ids
        p = self.global_param_ids
        eq0, eq1 = self.global_eqn_ids[0], self.global_eqn_ids[1]
        has_stenosis = len(p) > 3

        y0, y1, y2, y3 = (float(y[v[k]]) for k in range(4))
        dy0, dy1, dy3 = float(dy[v[0]]), float(dy[v[1]]), float(dy[v[3]])

        resistance = self._param(alpha, self.ParamId.RESISTANCE)
        capacitance = self._param(alpha, self.ParamId.CAPACITANCE)
        inductance = self._param(alpha, self.ParamId.INDUCTANCE)
        stenosis_coeff = (
            self._param(alpha, self.ParamId.STENOSIS_COEFFICIENT)
            if has_stenosis
            else 0.0
        )
        stenosis_resistance = stenosis_coeff * abs(y1)

        jacobian[eq0, p[0]] = -y1
        jacobian[eq0, p[2]] = -dy3
        if has_stenosis:
            jacobian[eq0, p[3]] = -abs(y1) * y1

        jacobian[eq1, p[0]] = capacitance * dy1
        jacobian[eq1, p[1]] = -dy0 + (resistance + 2 * stenosis_resistance) * dy1
        if has_stenosis:
            jacobian[eq1, p[3]] = 2.0 * capacitance * abs(y1) * dy1

        residual[eq0] = (
            y0 - (resistance + stenosis_resistance) * y1 - y2 - inductance * dy3
        )
        residual[eq1] = (
            y1
            - y3
            - capacitance * dy0
            + capacitance * (resistance + 2.0 * stenosis_resistance) * dy1
        )