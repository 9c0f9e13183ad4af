"""Solution state of a lumped-parameter system."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


def _empty() -> np.ndarray:
    return np.zeros(0, dtype=float)


@dataclass
class State:
    """Current values ``y`` and time derivatives ``ydot`` of all variables."""

    y: np.ndarray = field(default_factory=_empty)
    ydot: np.ndarray = field(default_factory=_empty)

    def __post_init__(self) -> None:
        self.y = np.asarray(self.y, dtype=float)
        self.ydot = np.asarray(self.ydot, dtype=float)
        if self.y.shape != self.ydot.shape:
            raise ValueError(
                f"y and ydot must have the same shape, got {self.y.shape} "
                f"and {self.ydot.shape}"
            )

    @classmethod
    def zero(cls, n: int) -> "State":
        """Return a new state of size ``n`` with all entries zero."""
        if n < 0:
            raise ValueError(f"State size must be non-negative, got {n}")
        return cls(np.zeros(n, dtype=float), np.zeros(n, dtype=float))

    def copy(self) -> "State":
        """Return an independent copy of this state."""
        return State(self.y.copy(), self.ydot.copy())

    def __len__(self) -> int:
        return len(self.y)