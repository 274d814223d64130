"""
Lanczos diagonalization through ``scipy.sparse.linalg.eigsh``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import numpy as np
from scipy.linalg import eigh
from scipy.sparse.linalg import LinearOperator, eigsh

from ..exceptions import NotSolvedError
from .eigenpair import Eigenpair

logger = logging.getLogger(__name__)


@dataclass
class SparseSolverOptions:
    """
    Options for :class:`SparseSolver`.

    ``convergence_threshold = 0`` asks ARPACK for machine precision;
    ``maximum_number_of_iterations = None`` uses the ARPACK default.
    """
    number_of_requested_eigenpairs: int = 1
    convergence_threshold: float = 0.0
    maximum_number_of_iterations: int | None = None
    initial_guess: np.ndarray | None = None


class SparseSolver:
    """
    Lowest eigenpairs of a symmetric matrix given as a matrix-vector product.

    Parameters
    ----------
    matrix_vector_product : callable
        ``x -> A @ x``.
    dim : int
        Dimension of ``A``.
    options : SparseSolverOptions, optional
    """

    def __init__(self, matrix_vector_product: Callable[[np.ndarray], np.ndarray], dim: int,
                 options: SparseSolverOptions | None = None):
        self.options = options if options is not None else SparseSolverOptions()
        r = self.options.number_of_requested_eigenpairs
        if not 1 <= r <= dim:
            raise ValueError(f"Cannot find {r} eigenpairs of a matrix of dimension {dim}.")
        if self.options.initial_guess is not None and np.shape(self.options.initial_guess) != (dim,):
            raise ValueError(f"The initial guess must have shape ({dim},).")
        self.matrix_vector_product = matrix_vector_product
        self.dim = dim
        self._eigenpairs: list[Eigenpair] | None = None

    def solve(self) -> list[Eigenpair]:
        r = self.options.number_of_requested_eigenpairs

        # Handle small matrices where eigsh would fail
        if self.dim <= 2 or r >= self.dim - 1:
            A = np.column_stack([self.matrix_vector_product(e) for e in np.eye(self.dim)])
            eigenvalues, eigenvectors = eigh(A, subset_by_index=[0, r - 1])
        else:
            operator = LinearOperator(
                (self.dim, self.dim), matvec=self.matrix_vector_product, dtype=np.float64
            )
            eigenvalues, eigenvectors = eigsh(
                operator,
                k=r,
                which="SA",
                tol=self.options.convergence_threshold,
                maxiter=self.options.maximum_number_of_iterations,
                v0=self.options.initial_guess,
            )
            order = np.argsort(eigenvalues)
            eigenvalues = eigenvalues[order]
            eigenvectors = eigenvectors[:, order]

        self._eigenpairs = [
            Eigenpair(float(eigenvalues[i]), eigenvectors[:, i].copy()) for i in range(r)
        ]
        logger.info("Sparse diagonalization of dimension %d: eigenvalues %s", self.dim, eigenvalues)
        return self._eigenpairs

    @property
    def eigenpairs(self) -> list[Eigenpair]:
        if self._eigenpairs is None:
            raise NotSolvedError("The sparse eigenproblem has not been solved yet.")
        return self._eigenpairs
