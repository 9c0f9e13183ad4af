# lumpedflow

Building blocks for lumped-parameter (zero-dimensional) blood flow models.
A 0D vascular model describes pressure and flow with a system of nonlinear
differential-algebraic equations

    E · ẏ + F · y + C(y, ẏ, t) = 0

`lumpedflow` provides elements that write their entries into sparse system
matrices. It also provides a generalized-α integrator that advances such a
system in time, with Newton–Raphson iterations at each step.

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Modules

- `lumpedflow.state`
  - `State` holds the solution vector `y` and its time derivative `ydot` as
    numpy arrays of equal shape.
  - `State.zero(n)` makes a zero state of size `n`.
  - `copy()` makes an independent copy.
- `lumpedflow.sparse_system`
  - `SparseSystem(n)` holds the matrices `F`, `E`, `dC_dy` and `dC_dydot`
    (scipy sparse, written by item assignment) and the vector `C`.
  - `update_residual(y, ydot)` sets `residual = -(C + E·ydot + F·y)`.
  - `update_jacobian(c_ydot, c_y)` sets
    `jacobian = c_ydot·(E + dC_dydot) + c_y·(F + dC_dy)`.
  - `solve()` stores the solution of `jacobian · dydot = residual` in `dydot`.
    It raises `numpy.linalg.LinAlgError` if the Jacobian cannot be factorized.
  - `reserve(model)` fills the system once from a model, to establish its
    sparsity pattern.
- `lumpedflow.integrator`
  - `Integrator(model, time_step_size, rho, atol, max_iter)` is the
    generalized-α integrator. The spectral radius `rho` sets its damping:
    `rho=0` gives BDF2 and `rho=1` gives the trapezoidal rule.
  - `step(state, time)` returns the state one time step later. It raises
    `ConvergenceError`, a `RuntimeError`, if the residual's largest absolute
    entry does not fall below `atol` within `max_iter` iterations.
  - `update_params(time_step_size)` changes the step size.
  - `avg_nonlin_iter()` returns the average number of Newton iterations per
    step. It returns NaN before the first step.
- `lumpedflow.block`
  - `Block` is the base class of every element. Its `update_constant`,
    `update_time`, `update_solution` and `post_solve` hooks do nothing by
    default. Its `update_gradient` raises `GradientUnavailableError`.
  - `TripletsContributions` counts the matrix entries an element adds.
- Elements:
  - `lumpedflow.blood_vessel.BloodVessel`: a resistor, capacitor and inductor
    with a stenosis term. It also provides `update_gradient` for the gradient
    with respect to its parameters.
  - `lumpedflow.blood_vessel_junction.BloodVesselJunction`: one inlet split
    into any number of outlets. Each outlet has a resistive, inductive and
    stenotic branch. `setup_dofs` raises `ValueError` unless the junction
    has exactly one inlet. It also provides `update_gradient`.
  - `lumpedflow.chamber_elastance_inductor.ChamberElastanceInductor`: a
    cardiac chamber with a time-varying elastance and an outflow inductor.
  - `lumpedflow.closed_loop_coronary.ClosedLoopCoronaryBC`: a coronary bed
    whose intramyocardial pressure is a scaled ventricular pressure. The
    global variable and parameter indices of that pressure and its scaling
    are given to the constructor.

## What a model must provide

The integrator works with a model object that you supply. It needs:

- a `dofhandler` whose `len()` is the number of degrees of freedom;
- `update_constant(system)`;
- `update_time(system, time)`;
- `update_solution(system, y, ydot)`;
- `post_solve(y)`.

Elements expect their `model` to provide `get_block_name(block_id)`.
`ChamberElastanceInductor` also reads `model.time` and
`model.cardiac_cycle_period`. In `setup_dofs`, elements call
`register_variable(name)` and `register_equation(name)` on the DOF handler.
They read `pres_dof` and `flow_dof` from the nodes in `inlet_nodes` and
`outlet_nodes`.

## Sketch of use

Solving a small linear system directly:

```python
from lumpedflow.sparse_system import SparseSystem

system = SparseSystem(2)
system.F[0, 0] = 1.0
system.F[1, 1] = 2.0
system.C[:] = [-1.0, -4.0]
system.update_residual([0.0, 0.0], [0.0, 0.0])
system.update_jacobian(0.0, 1.0)
system.solve()
print(system.dydot)  # [1. 2.]
```

Time stepping with a model as described above:

```python
from lumpedflow.integrator import Integrator
from lumpedflow.state import State

integrator = Integrator(model, time_step_size=0.01, rho=0.5, atol=1e-8, max_iter=30)
state = State.zero(len(model.dofhandler))
time = 0.0
for _ in range(100):
    state = integrator.step(state, time)
    time += 0.01
print(integrator.avg_nonlin_iter())
```

## What this package does not do

`lumpedflow` contains no model class and no degree-of-freedom handler. It
also contains no node or parameter objects. It does not read model
configuration files or write results to CSV. It has no command-line program
and no parameter calibration. You assemble the model, connect the elements
and store results yourself.