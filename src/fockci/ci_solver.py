"""
Couples a Hamiltonian builder, integrals and an eigensolver.
"""
from __future__ import annotations

import logging

import numpy as np

from .exceptions import NotSolvedError
from .hamiltonian.builder import HamiltonianBuilder
from .hamiltonian.parameters import HamiltonianParameters
from .solvers.davidson import DavidsonSolver, DavidsonSolverOptions
from .solvers.dense import DenseSolver, DenseSolverOptions
from .solvers.eigenpair import Eigenpair
from .solvers.sparse import SparseSolver, SparseSolverOptions

logger = logging.getLogger(__name__)


class CISolver:
    """
    Solve the CI eigenvalue problem of a builder for given integrals.

    Parameters
    ----------
    builder : HamiltonianBuilder
        Determines the Fock space and the form of the Hamiltonian.
    parameters : HamiltonianParameters
        Integrals; their number of orbitals must match the builder's.

    Examples
    --------
    >>> solver = CISolver(FCI(ProductFockSpace(4, 2, 2)), parameters)
    >>> solver.solve(DenseSolverOptions())
    >>> solver.energies[0]
    """

    def __init__(self, builder: HamiltonianBuilder, parameters: HamiltonianParameters):
        builder._check_parameters(parameters)
        self.builder = builder
        self.parameters = parameters
        self._eigenpairs: list[Eigenpair] | None = None

    def default_davidson_options(self, number_of_requested_eigenpairs: int = 1,
                                 **kwargs) -> DavidsonSolverOptions:
        """
        Davidson options with a guess built from the Fock space.

        A single eigenpair starts from the Hartree-Fock expansion; several
        eigenpairs start from unit vectors on the lowest diagonal elements.
        """
        fock_space = self.builder.fock_space
        r = number_of_requested_eigenpairs
        if r == 1:
            guess = fock_space.hartree_fock_expansion()
        else:
            diagonal = self.builder.calculate_diagonal(self.parameters)
            lowest = np.argsort(diagonal, kind="stable")[:r]
            guess = np.zeros((fock_space.dimension, r))
            guess[lowest, np.arange(r)] = 1.0
        return DavidsonSolverOptions(guess, number_of_requested_eigenpairs=r, **kwargs)

    def _matrix_vector_product(self):
        diagonal = self.builder.calculate_diagonal(self.parameters)

        def matvec(x):
            return self.builder.matrix_vector_product(self.parameters, x, diagonal)

        return matvec, diagonal

    def solve(self, options=None) -> list[Eigenpair]:
        """
        Find the lowest eigenpairs.

        Parameters
        ----------
        options : DenseSolverOptions, SparseSolverOptions or DavidsonSolverOptions, optional
            Selects the eigensolver. Defaults to
            :meth:`default_davidson_options`.

        Returns
        -------
        list of Eigenpair
            Electronic eigenvalues (without the scalar) and eigenvectors.
        """
        if options is None:
            options = self.default_davidson_options()

        dim = self.builder.fock_space.dimension
        if isinstance(options, DenseSolverOptions):
            solver = DenseSolver(self.builder.construct_hamiltonian(self.parameters), options)
        elif isinstance(options, SparseSolverOptions):
            matvec, _ = self._matrix_vector_product()
            solver = SparseSolver(matvec, dim, options)
        elif isinstance(options, DavidsonSolverOptions):
            matvec, diagonal = self._matrix_vector_product()
            solver = DavidsonSolver(matvec, diagonal, options)
        else:
            raise TypeError(f"Unknown solver options {type(options).__name__}.")

        logger.info("Solving %s of dimension %d with %s",
                    type(self.builder).__name__, dim, type(solver).__name__)
        self._eigenpairs = solver.solve()
        return self._eigenpairs

    @property
    def eigenpairs(self) -> list[Eigenpair]:
        if self._eigenpairs is None:
            raise NotSolvedError("The CI eigenvalue problem has not been solved yet.")
        return self._eigenpairs

    def get_eigenpair(self, index: int = 0) -> Eigenpair:
        return self.eigenpairs[index]

    @property
    def energies(self) -> np.ndarray:
        """Total energies, i.e. the eigenvalues plus the scalar of the parameters."""
        return np.array([pair.eigenvalue for pair in self.eigenpairs]) + self.parameters.scalar
