"""
Eigensolvers for the lowest eigenpairs of symmetric matrices.

DavidsonSolver : matrix-free, diagonal-preconditioned subspace iteration
DenseSolver : ``scipy.linalg.eigh`` on an explicit matrix
SparseSolver : ``scipy.sparse.linalg.eigsh`` on a matrix-vector product
"""

from .eigenpair import Eigenpair
from .davidson import DavidsonSolver, DavidsonSolverOptions, DavidsonState
from .dense import DenseSolver, DenseSolverOptions
from .sparse import SparseSolver, SparseSolverOptions

__all__ = [
    "DavidsonSolver",
    "DavidsonSolverOptions",
    "DavidsonState",
    "DenseSolver",
    "DenseSolverOptions",
    "Eigenpair",
    "SparseSolver",
    "SparseSolverOptions",
]
