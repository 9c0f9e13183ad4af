"""Base class for the elements of a lumped-parameter model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence


class GradientUnavailableError(RuntimeError):
    """Raised when a block offers no gradient with respect to its parameters."""


@dataclass
class TripletsContributions:
    """Number of matrix entries an element contributes to the global system.

    ``F`` and ``E`` count entries in the F and E matrices, ``D`` counts
    entries in the dC/dy and dC/dydot matrices.
    """

    F: int = 0
    E: int = 0
    D: int = 0

    def __iadd__(self, other: "TripletsContributions") -> "TripletsContributions":
        self.F += other.F
        self.E += other.E
        self.D += other.D
        return self

    def __add__(self, other: "TripletsContributions") -> "TripletsContributions":
        return TripletsContributions(
            self.F + other.F, self.E + other.E, self.D + other.D
        )


class Block:
    """An element of a 0D model and its contribution to the global system.

    Subclasses override the ``update_*`` hooks to write their entries into
    the system; the base implementations contribute nothing.
    """

    def __init__(
        self,
        block_id: int,
        model: Any,
        block_type: Any,
        block_class: Any,
        input_params: Sequence[tuple[str, Any]],
    ) -> None:
        self.id = block_id
        self.model = model
        self.block_type = block_type
        self.block_class = block_class
        self.input_params: tuple[tuple[str, Any], ...] = tuple(input_params)

        self.inlet_nodes: list[Any] = []
        self.outlet_nodes: list[Any] = []

        self.steady = False
        self.input_params_list = False

        self.global_param_ids: list[int] = []
        self.global_var_ids: list[int] = []
        self.global_eqn_ids: list[int] = []

        self.num_triplets = TripletsContributions()

    @property
    def name(self) -> str:
        """Name of the block as registered in its model."""
        return self.model.get_block_name(self.id)

    def setup_params_(self, param_ids: Iterable[int]) -> None:
        """Set the global IDs of the block's parameters."""
        self.global_param_ids = list(param_ids)

    def setup_dofs_(
        self,
        dofhandler: Any,
        num_equations: int,
        internal_var_names: Iterable[str],
    ) -> None:
        """Collect node DOFs and register internal variables and equations.

        Variable IDs are ordered as pressure and flow of each inlet node,
        then of each outlet node, then the internal variables.
        """
        for node in (*self.inlet_nodes, *self.outlet_nodes):
            self.global_var_ids.append(node.pres_dof)
            self.global_var_ids.append(node.flow_dof)

        name = self.name
        self.global_var_ids.extend(
            dofhandler.register_variable(f"{var_name}:{name}")
            for var_name in internal_var_names
        )
        self.global_eqn_ids.extend(
            dofhandler.register_equation(name) for _ in range(num_equations)
        )

    def setup_dofs(self, dofhandler: Any) -> None:
        """Set up the degrees of freedom of the block; none by default."""

    def setup_model_dependent_params(self) -> dict[str, int]:
        """Resolve settings that depend on the rest of the model.

        Returns the resolved settings by name; the base block has none.
        """
        return {}

    def update_constant(self, system: Any, parameters: Sequence[float]) -> None:
        """Write constant contributions into ``system``; none by default."""

    def update_time(self, system: Any, parameters: Sequence[float]) -> None:
        """Write time-dependent contributions into ``system``; none by default."""

    def update_solution(
        self, system: Any, parameters: Sequence[float], y: Any, dy: Any
    ) -> None:
        """Write solution-dependent contributions into ``system``; none by default."""

    def post_solve(self, y: Any) -> Any:
        """Adjust the solution after a linear solve and return it.

        The base block leaves ``y`` unchanged.
        """
        return y

    def update_gradient(
        self, jacobian: Any, residual: Any, alpha: Any, y: Any, dy: Any
    ) -> None:
        """Write the gradient with respect to the parameters.

        The base block has no gradient and raises GradientUnavailableError.
        """
        raise GradientUnavailableError(
            f"Gradient calculation not implemented for block {self.name}"
        )