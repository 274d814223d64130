"""
Exact diagonalization of an explicit symmetric matrix.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from scipy.linalg import eigh

from ..exceptions import NotSolvedError
from .eigenpair import Eigenpair

logger = logging.getLogger(__name__)


@dataclass
class DenseSolverOptions:
    number_of_requested_eigenpairs: int = 1


class DenseSolver:
    """
    Lowest eigenpairs of a dense symmetric matrix with ``scipy.linalg.eigh``.

    Parameters
    ----------
    matrix : ndarray
        Symmetric ``(dim, dim)`` matrix.
    options : DenseSolverOptions, optional
        Number of requested eigenpairs.
    """

    def __init__(self, matrix: np.ndarray, options: DenseSolverOptions | None = None):
        matrix = np.asarray(matrix, dtype=np.float64)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise ValueError(f"Expected a square matrix, got shape {matrix.shape}.")
        self.options = options if options is not None else DenseSolverOptions()
        r = self.options.number_of_requested_eigenpairs
        if not 1 <= r <= matrix.shape[0]:
            raise ValueError(
                f"Cannot find {r} eigenpairs of a matrix of dimension {matrix.shape[0]}."
            )
        self.matrix = matrix
        self._eigenpairs: list[Eigenpair] | None = None

    def solve(self) -> list[Eigenpair]:
        r = self.options.number_of_requested_eigenpairs
        eigenvalues, eigenvectors = eigh(self.matrix, subset_by_index=[0, r - 1])
        self._eigenpairs = [
            Eigenpair(float(eigenvalues[i]), eigenvectors[:, i].copy()) for i in range(r)
        ]
        logger.info("Dense diagonalization of dimension %d: eigenvalues %s",
                    self.matrix.shape[0], eigenvalues)
        return self._eigenpairs

    @property
    def eigenpairs(self) -> list[Eigenpair]:
        if self._eigenpairs is None:
            raise NotSolvedError("The dense eigenproblem has not been solved yet.")
        return self._eigenpairs
