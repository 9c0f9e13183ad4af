"""Junction of one inlet and several outlets joined by blood vessel branches."""

from __future__ import annotations

from typing import Any, Sequence

from .block import Block, TripletsContributions
from .blood_vessel import VesselInput


class BloodVesselJunction(Block):
    """Junction with one inlet and any number of outlets.

    Each inlet-outlet pair is joined by a branch with Poiseuille resistance
    ``R_i``, inductance ``L_i`` and stenosis coefficient ``S_i``. Governing
    equations::

        Q_in - sum_i Q_out,i = 0
        P_in - P_out,i - (R_i + S_i|Q_out,i|) Q_out,i - L_i dQ_out,i = 0

    Local variables are ``[P_in, Q_in, P_out,1, Q_out,1, ...]``. Parameters
    are ordered as all resistances, then all inductances, then all stenosis
    coefficients.
    """

    BLOCK_TYPE = "blood_vessel_junction"
    BLOCK_CLASS = "junction"

    def __init__(self, block_id: int, model: Any) -> None:
        super().__init__(
            block_id,
            model,
            self.BLOCK_TYPE,
            self.BLOCK_CLASS,
            [
                ("R_poiseuille", VesselInput()),
                ("L", VesselInput()),
                ("stenosis_coefficient", VesselInput()),
            ],
        )
        self.input_params_list = True
        self.num_outlets = 0

    def setup_dofs(self, dofhandler: Any) -> None:
        """Register one mass-conservation equation and one equation per outlet.

        Raises ValueError unless the junction has exactly one inlet.
        """
        if len(self.inlet_nodes) != 1:
            raise ValueError(
                "Blood vessel junction does not support multiple inlets."
            )
        self.num_outlets = len(self.outlet_nodes)
        self.setup_dofs_(dofhandler, self.num_outlets + 1, [])
        n = self.num_outlets
        self.num_triplets = TripletsContributions(1 + 4 * n, 3 * n, 2 * n)

    def update_constant(self, system: Any, parameters: Sequence[float]) -> None:
        """Write the constant entries of E and F."""
        n = self.num_outlets
        eqn = self.global_eqn_ids
        v = self.global_var_ids
        p = self.global_param_ids

        system.F[eqn[0], v[1]] = 1.0
        for i in range(n):
            resistance = float(parameters[p[i]])
            inductance = float(parameters[p[n + i]])
            q_out, p_out = v[3 + 2 * i], v[2 + 2 * i]
            row = eqn[i + 1]

            system.F[eqn[0], q_out] = -1.0
            system.F[row, q_out] = -resistance
            system.F[row, v[0]] = 1.0
            system.F[row, p_out] = -1.0
            system.E[row, q_out] = -inductance

    def update_solution(
        self, system: Any, parameters: Sequence[float], y: Any, dy: Any
    ) -> None:
        """Write the stenosis terms of C and their derivatives."""
        n = self.num_outlets
        eqn = self.global_eqn_ids
        v = self.global_var_ids
        p = self.global_param_ids

        for i in range(n):
            stenosis_coeff = float(parameters[p[2 * n + i]])
            q_var = v[3 + 2 * i]
            q_out = float(y[q_var])
            stenosis_resistance = stenosis_coeff * abs(q_out)
            row = eqn[i + 1]

            system.C[row] = -stenosis_resistance * q_out
            system.dC_dy[row, q_var] = -2.0 * stenosis_resistance

    def update_gradient(
        self, jacobian: Any, residual: Any, alpha: Any, y: Any, dy: Any
    ) -> None:
        """Write the gradient with respect to the parameters and the residual.

        Stenosis coefficients are optional here: with only resistances and
        inductances given they are taken as zero and their columns are left
        untouched.
        """
        n = self.num_outlets
        eqn = self.global_eqn_ids
        v = self.global_var_ids
        p = self.global_param_ids
        has_stenosis = n > 0 and len(p) // n > 2

        p_in = float(y[v[0]])
        q_in = float(y[v[1]])

        residual[eqn[0]] = q_in
        for i in range(n):
            resistance = float(alpha[p[i]])
            inductance = float(alpha[p[n + i]])
            stenosis_coeff = float(alpha[p[2 * n + i]]) if has_stenosis else 0.0
            q_out = float(y[v[3 + 2 * i]])
            p_out = float(y[v[2 + 2 * i]])
            dq_out = float(dy[v[3 + 2 * i]])
            stenosis_resistance = stenosis_coeff * abs(q_out)
            row = eqn[i + 1]

            jacobian[row, p[i]] = -q_out
            jacobian[row, p[n + i]] = -dq_out
            if has_stenosis:
                jacobian[row, p[2 * n + i]] = -abs(q_out) * q_out

            residual[eqn[0]] -= q_out
            residual[row] = (
                p_in
                - p_out
                - (resistance + stenosis_resistance) * q_out
                - inductance * dq_out
            )