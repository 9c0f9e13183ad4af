"""Closed-loop coronary boundary condition driven by a ventricular pressure."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Sequence

from .block import Block, TripletsContributions
from .blood_vessel import VesselInput

LEFT_BLOCK_TYPE = "closed_loop_coronary_left_bc"
RIGHT_BLOCK_TYPE = "closed_loop_coronary_right_bc"


class ClosedLoopCoronaryBC(Block):
    """Coronary bed connected on both sides, with intramyocardial pressure
    taken from a ventricle.

    Governing equations (with ``P_a = 0``)::

        P_out - P_in + (R_am + R_a) Q_in + R_v Q_out
            - R_am C_a dP_in + R_am R_a C_a dQ_in = 0
        Q_in - Q_out - C_a dP_in + C_a R_a dQ_in - dV_im = 0
        C_im P_out + C_im R_v Q_out - C_im P_im - V_im = 0

    where ``P_im = I_m * P_ventricle``. Local variables are
    ``[P_in, Q_in, P_out, Q_out, V_im]``. ``ventricle_var_id`` is the global
    variable index of the ventricular pressure and ``im_param_id`` the global
    parameter index of the scaling ``I_m``.
    """

    class ParamId(IntEnum):
        """Local IDs of the parameters."""

        RA = 0
        RAM = 1
        RV = 2
        CA = 3
        CIM = 4

    BLOCK_CLASS = "closed_loop"

    def __init__(
        self,
        block_id: int,
        model: Any,
        block_type: Any,
        ventricle_var_id: int,
        im_param_id: int,
    ) -> None:
        super().__init__(
            block_id,
            model,
            block_type,
            self.BLOCK_CLASS,
            [
                ("Ra", VesselInput()),
                ("Ram", VesselInput()),
                ("Rv", VesselInput()),
                ("Ca", VesselInput()),
                ("Cim", VesselInput()),
            ],
        )
        self.ventricle_var_id = ventricle_var_id
        self.im_param_id = im_param_id
        self.num_triplets = TripletsContributions(9, 5, 0)

    def _param(self, values: Sequence[float], local_id: int) -> float:
        return float(values[self.global_param_ids[local_id]])

    def setup_dofs(self, dofhandler: Any) -> None:
        """Register the three equations and the intramyocardial volume."""
        self.setup_dofs_(dofhandler, 3, ["volume_im"])

    def update_constant(self, system: Any, parameters: Sequence[float]) -> None:
        """Write the constant entries of E and F."""
        ra = self._param(parameters, self.ParamId.RA)
        ram = self._param(parameters, self.ParamId.RAM)
        rv = self._param(parameters, self.ParamId.RV)
        ca = self._param(parameters, self.ParamId.CA)
        cim = self._param(parameters, self.ParamId.CIM)
        eqn = self.global_eqn_ids
        v = self.global_var_ids

        system.E[eqn[0], v[0]] = -ram * ca
        system.E[eqn[0], v[1]] = ram * ra * ca
        system.E[eqn[1], v[0]] = -ca
        system.E[eqn[1], v[1]] = ca * ra
        system.E[eqn[1], v[4]] = -1.0

        system.F[eqn[0], v[0]] = -1.0
        system.F[eqn[0], v[1]] = ra + ram
        system.F[eqn[0], v[2]] = 1.0
        system.F[eqn[0], v[3]] = rv
        system.F[eqn[1], v[1]] = 1.0
        system.F[eqn[1], v[3]] = -1.0
        system.F[eqn[2], v[2]] = cim
        system.F[eqn[2], v[3]] = cim * rv
        system.F[eqn[2], v[4]] = -1.0

    def update_solution(
        self, system: Any, parameters: Sequence[float], y: Any, dy: Any
    ) -> None:
        """Write the intramyocardial pressure term of C."""
        cim = self._param(parameters, self.ParamId.CIM)
        im = float(parameters[self.im_param_id])
        pim = im * float(y[self.ventricle_var_id])
        system.C[self.global_eqn_ids[2]] = -cim * pim