"""Cardiac chamber modelled as a time-varying elastance with an outflow inductor."""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Any, Sequence

from .block import Block, TripletsContributions
from .blood_vessel import VesselInput


class ChamberElastanceInductor(Block):
    """Cardiac chamber with time-varying elastance and an inductor.

    Governing equations::

        P_in - E(t) (V_c - V_rest(t)) = 0
        P_in - P_out - L dQ_out = 0
        Q_in - Q_out - dV_c = 0

    with the activation ``A(t) = 0.5 - 0.5 cos(2 pi t_contract / t_twitch)``
    during the twitch and zero otherwise,
    ``E(t) = (E_max - E_min) A(t) + E_min`` and
    ``V_rest(t) = (1 - A(t)) (V_rd - V_rs) + V_rs``.

    Local variables are ``[P_in, Q_in, P_out, Q_out, V_c]``. The model must
    provide ``cardiac_cycle_period`` and the current ``time``.
    """

    class ParamId(IntEnum):
        """Local IDs of the parameters."""

        EMAX = 0
        EMIN = 1
        VRD = 2
        VRS = 3
        TACTIVE = 4
        TTWITCH = 5
        IMPEDANCE = 6

    BLOCK_TYPE = "chamber_elastance_inductor"
    BLOCK_CLASS = "chamber"

    def __init__(self, block_id: int, model: Any) -> None:
        super().__init__(
            block_id,
            model,
            self.BLOCK_TYPE,
            self.BLOCK_CLASS,
            [
                ("Emax", VesselInput()),
                ("Emin", VesselInput()),
                ("Vrd", VesselInput()),
                ("Vrs", VesselInput()),
                ("t_active", VesselInput()),
                ("t_twitch", VesselInput()),
                ("Impedance", VesselInput()),
            ],
        )
        self.num_triplets = TripletsContributions(6, 2, 0)

    def _param(self, values: Sequence[float], local_id: int) -> float:
        return float(values[self.global_param_ids[local_id]])

    def setup_dofs(self, dofhandler: Any) -> None:
        """Register the three equations and the chamber volume ``Vc``."""
        self.setup_dofs_(dofhandler, 3, ["Vc"])

    def update_constant(self, system: Any, parameters: Sequence[float]) -> None:
        """Write the constant entries of E and F."""
        inductance = self._param(parameters, self.ParamId.IMPEDANCE)
        eqn = self.global_eqn_ids
        v = self.global_var_ids

        system.F[eqn[0], v[0]] = 1.0

        system.F[eqn[1], v[0]] = 1.0
        system.F[eqn[1], v[2]] = -1.0
        system.E[eqn[1], v[3]] = -inductance

        system.F[eqn[2], v[1]] = 1.0
        system.F[eqn[2], v[3]] = -1.0
        system.E[eqn[2], v[4]] = -1.0

    def update_time(self, system: Any, parameters: Sequence[float]) -> None:
        """Write the elastance and rest-volume terms for the model's current time."""
        elastance, rest_volume = self._elastance_values(parameters)
        row = self.global_eqn_ids[0]
        system.F[row, self.global_var_ids[4]] = -elastance
        system.C[row] = elastance * rest_volume

    def _elastance_values(self, parameters: Sequence[float]) -> tuple[float, float]:
        emax = self._param(parameters, self.ParamId.EMAX)
        emin = self._param(parameters, self.ParamId.EMIN)
        vrd = self._param(parameters, self.ParamId.VRD)
        vrs = self._param(parameters, self.ParamId.VRS)
        t_active = self._param(parameters, self.ParamId.TACTIVE)
        t_twitch = self._param(parameters, self.ParamId.TTWITCH)

        t_in_cycle = math.fmod(self.model.time, self.model.cardiac_cycle_period)
        t_contract = t_in_cycle - t_active if t_in_cycle >= t_active else 0.0

        activation = 0.0
        if t_contract <= t_twitch:
            activation = -0.5 * math.cos(2.0 * math.pi * t_contract / t_twitch) + 0.5

        rest_volume = (1.0 - activation) * (vrd - vrs) + vrs
        elastance = (emax - emin) * activation + emin
        return elastance, rest_volume