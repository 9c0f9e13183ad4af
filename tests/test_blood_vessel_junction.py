from dataclasses import dataclass

import numpy as np
import pytest

from lumpedflow.blood_vessel_junction import BloodVesselJunction
from lumpedflow.sparse_system import SparseSystem


@dataclass
class _Node:
    pres_dof: int
    flow_dof: int


class _Model:
    def get_block_name(self, block_id):
        return f"J{block_id}"


class _DOFs:
    def __init__(self):
        self.variables = []
        self.equations = []

    def register_variable(self, name):
        self.variables.append(name)
        return len(self.variables) - 1

    def register_equation(self, name):
        self.equations.append(name)
        return len(self.equations) - 1


PARAMS = [100.0, 200.0, 3.0, 4.0, 0.5, 0.7]  # R1, R2, L1, L2, S1, S2
Y = np.array([10.0, 5.0, 8.0, 2.0, 7.0, -3.0])
DY = np.array([0.1, 0.2, 0.3, 0.4, 0.5, 0.6])


def _junction(num_params=6):
    junction = BloodVesselJunction(0, _Model())
    junction.inlet_nodes = [_Node(0, 1)]
    junction.outlet_nodes = [_Node(2, 3), _Node(4, 5)]
    dofs = _DOFs()
    junction.setup_dofs(dofs)
    junction.setup_params_(range(num_params))
    return junction, dofs


def test_setup_dofs_registers_equations_and_variables():
    junction, dofs = _junction()
    assert junction.num_outlets == 2
    assert junction.global_eqn_ids == [0, 1, 2]
    assert junction.global_var_ids == [0, 1, 2, 3, 4, 5]
    assert dofs.equations == ["J0"] * 3
    assert dofs.variables == []


def test_setup_dofs_triplet_counts():
    junction, _ = _junction()
    assert junction.num_triplets.F == 9
    assert junction.num_triplets.E == 6
    assert junction.num_triplets.D == 4


def test_input_params_are_a_list():
    junction = BloodVesselJunction(0, _Model())
    assert junction.input_params_list is True
    assert [name for name, _ in junction.input_params] == [
        "R_poiseuille",
        "L",
        "stenosis_coefficient",
    ]


@pytest.mark.parametrize("inlets", [[], [_Node(0, 1), _Node(6, 7)]])
def test_setup_dofs_requires_single_inlet(inlets):
    junction = BloodVesselJunction(0, _Model())
    junction.inlet_nodes = inlets
    junction.outlet_nodes = [_Node(2, 3)]
    with pytest.raises(ValueError, match="multiple inlets"):
        junction.setup_dofs(_DOFs())


def test_update_constant_entries():
    junction, _ = _junction()
    system = SparseSystem(6)
    junction.update_constant(system, PARAMS)
    F = system.F.toarray()
    E = system.E.toarray()
    assert F[0, 1] == 1.0
    assert F[0, 3] == -1.0 and F[0, 5] == -1.0
    assert F[1, 0] == 1.0 and F[1, 2] == -1.0 and F[1, 3] == -PARAMS[0]
    assert F[2, 0] == 1.0 and F[2, 4] == -1.0 and F[2, 5] == -PARAMS[1]
    assert E[1, 3] == -PARAMS[2]
    assert E[2, 5] == -PARAMS[3]
    assert np.count_nonzero(E) == 2


def test_update_solution_is_odd_in_flow():
    junction, _ = _junction()
    pos, neg = SparseSystem(6), SparseSystem(6)
    junction.update_solution(pos, PARAMS, Y, DY)
    junction.update_solution(neg, PARAMS, -Y, DY)
    np.testing.assert_allclose(pos.C, -neg.C)
    assert pos.C[0] == 0.0
    np.testing.assert_allclose(pos.dC_dy.toarray(), neg.dC_dy.toarray())


def test_update_solution_derivative_matches_finite_difference():
    junction, _ = _junction()
    h = 1e-6
    for var, row in ((3, 1), (5, 2)):
        up, down, base = SparseSystem(6), SparseSystem(6), SparseSystem(6)
        y_up, y_down = Y.copy(), Y.copy()
        y_up[var] += h
        y_down[var] -= h
        junction.update_solution(up, PARAMS, y_up, DY)
        junction.update_solution(down, PARAMS, y_down, DY)
        junction.update_solution(base, PARAMS, Y, DY)
        numeric = (up.C[row] - down.C[row]) / (2 * h)
        assert base.dC_dy[row, var] == pytest.approx(numeric, rel=1e-6)


def test_update_solution_without_stenosis_is_zero():
    junction, _ = _junction()
    system = SparseSystem(6)
    junction.update_solution(system, PARAMS[:4] + [0.0, 0.0], Y, DY)
    np.testing.assert_array_equal(system.C, np.zeros(6))


def test_gradient_residual_matches_system_equations():
    junction, _ = _junction()
    system = SparseSystem(6)
    junction.update_constant(system, PARAMS)
    junction.update_solution(system, PARAMS, Y, DY)
    expected = system.F @ Y + system.E @ DY + system.C

    jacobian = np.zeros((3, 6))
    residual = np.zeros(3)
    junction.update_gradient(jacobian, residual, np.array(PARAMS), Y, DY)
    np.testing.assert_allclose(residual, expected[:3])


@pytest.mark.parametrize("k", range(6))
def test_gradient_jacobian_matches_parameter_change(k):
    junction, _ = _junction()
    alpha = np.array(PARAMS)
    jacobian = np.zeros((3, 6))
    residual = np.zeros(3)
    junction.update_gradient(jacobian, residual, alpha, Y, DY)

    shifted = alpha.copy()
    shifted[k] += 1.0
    residual_shifted = np.zeros(3)
    junction.update_gradient(np.zeros((3, 6)), residual_shifted, shifted, Y, DY)
    np.testing.assert_allclose(residual_shifted - residual, jacobian[:, k])


def test_gradient_without_stenosis_parameters():
    junction, _ = _junction(num_params=4)
    jacobian = np.zeros((3, 6))
    residual = np.zeros(3)
    junction.update_gradient(jacobian, residual, np.array(PARAMS[:4]), Y, DY)

    full, _ = _junction()
    residual_full = np.zeros(3)
    full.update_gradient(
        np.zeros((3, 6)), residual_full, np.array(PARAMS[:4] + [0.0, 0.0]), Y, DY
    )
    np.testing.assert_allclose(residual, residual_full)
    np.testing.assert_array_equal(jacobian[:, 4:], np.zeros((3, 2)))


def test_gradient_mass_conservation_row():
    junction, _ = _junction()
    jacobian = np.zeros((3, 6))
    residual = np.zeros(3)
    junction.update_gradient(jacobian, residual, np.array(PARAMS), Y, DY)
    assert residual[0] == pytest.approx(Y[1] - Y[3] - Y[5])
    np.testing.assert_array_equal(jacobian[0], np.zeros(6))