"""Lumped-parameter hemodynamics elements, sparse system assembly and a
generalized-alpha time integrator."""

__version__ = "0.1.0"

__all__ = [
    "block",
    "blood_vessel",
    "blood_vessel_junction",
    "chamber_elastance_inductor",
    "closed_loop_coronary",
    "integrator",
    "sparse_system",
    "state",
]