"""
Davidson diagonalization for the lowest eigenpairs of a symmetric matrix.

The matrix is only accessed through a matrix-vector product and its
diagonal, which is used to precondition the residual correction equation.
The subspace lives in a preallocated column store of
``maximum_subspace_dimension`` columns and is collapsed onto the lowest
Ritz vectors when it would overflow.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

import numpy as np
from line_profiler import profile
from scipy.linalg import eigh

from ..exceptions import DavidsonNotConvergedError, NotSolvedError
from .eigenpair import Eigenpair

logger = logging.getLogger(__name__)

DEFAULT_CONVERGENCE_THRESHOLD = 1.0e-08
DEFAULT_CORRECTION_THRESHOLD = 1.0e-12
DEFAULT_MAXIMUM_SUBSPACE_DIMENSION = 15
DEFAULT_COLLAPSED_SUBSPACE_DIMENSION = 2
DEFAULT_MAXIMUM_NUMBER_OF_ITERATIONS = 128
DEFAULT_INCLUSION_THRESHOLD = 1.0e-03

VectorFunction = Callable[[np.ndarray], np.ndarray]


class DavidsonState(Enum):
    INITIALIZING = "initializing"
    ITERATING = "iterating"
    CONVERGED = "converged"
    FAILED = "failed"


@dataclass
class DavidsonSolverOptions:
    """
    Options for :class:`DavidsonSolver`.

    Attributes
    ----------
    initial_guess : ndarray
        Guess vector(s), shape ``(dim,)`` or ``(dim, m)``. Orthonormalized by
        the solver.
    number_of_requested_eigenpairs : int
        Number of lowest eigenpairs to find.
    convergence_threshold : float
        Tolerance on the norm of every residual vector.
    correction_threshold : float
        Lower bound on ``|diagonal - eigenvalue|`` in the preconditioner.
    maximum_subspace_dimension : int
        Subspace dimension that triggers a collapse.
    collapsed_subspace_dimension : int
        Subspace dimension after a collapse.
    maximum_number_of_iterations : int
        Number of iterations after which the solver gives up.
    inclusion_threshold : float
        Minimal norm of a correction after orthogonalization against the
        subspace; smaller corrections are dropped.
    """
    initial_guess: np.ndarray
    number_of_requested_eigenpairs: int = 1
    convergence_threshold: float = DEFAULT_CONVERGENCE_THRESHOLD
    correction_threshold: float = DEFAULT_CORRECTION_THRESHOLD
    maximum_subspace_dimension: int = DEFAULT_MAXIMUM_SUBSPACE_DIMENSION
    collapsed_subspace_dimension: int = DEFAULT_COLLAPSED_SUBSPACE_DIMENSION
    maximum_number_of_iterations: int = DEFAULT_MAXIMUM_NUMBER_OF_ITERATIONS
    inclusion_threshold: float = DEFAULT_INCLUSION_THRESHOLD


def _orthonormalize_one(v: np.ndarray, basis: np.ndarray | None, threshold: float) -> np.ndarray | None:
    """Project ``v`` out of the orthonormal columns of ``basis`` and normalize."""
    if basis is not None and basis.shape[1] > 0:
        v = v - basis @ (basis.T @ v)
    norm = float(np.linalg.norm(v))
    if norm <= threshold:
        return None
    return v / norm


class DavidsonSolver:
    """
    Davidson eigensolver.

    Parameters
    ----------
    matrix_vector_product : callable
        ``x -> A @ x`` for vectors of length ``dim``.
    diagonal : ndarray
        Diagonal of ``A``.
    options : DavidsonSolverOptions
        Initial guess, thresholds and subspace dimensions.

    Raises
    ------
    ValueError
        If the options are inconsistent: fewer guess vectors than requested
        eigenpairs, a collapsed dimension outside
        ``[number_of_requested_eigenpairs, maximum_subspace_dimension)``,
        more guess vectors than the maximum subspace dimension, non-positive
        thresholds or mismatched dimensions.
    """

    def __init__(self, matrix_vector_product: VectorFunction, diagonal: np.ndarray,
                 options: DavidsonSolverOptions):
        self.matrix_vector_product = matrix_vector_product
        self.diagonal = np.asarray(diagonal, dtype=np.float64).ravel()
        self.options = options
        self.dim = self.diagonal.size
        self._V_0 = self._check_options(options)

        self.state = DavidsonState.INITIALIZING
        self._eigenpairs: list[Eigenpair] | None = None
        self._number_of_iterations = 0

    @classmethod
    def from_matrix(cls, A: np.ndarray, options: DavidsonSolverOptions) -> DavidsonSolver:
        """Davidson solver for an explicit square matrix."""
        A = np.asarray(A, dtype=np.float64)
        if A.ndim != 2 or A.shape[0] != A.shape[1]:
            raise ValueError(f"Expected a square matrix, got shape {A.shape}.")
        return cls(lambda x: A @ x, np.diag(A).copy(), options)

    def _check_options(self, options: DavidsonSolverOptions) -> np.ndarray:
        V_0 = np.asarray(options.initial_guess, dtype=np.float64)
        if V_0.ndim == 1:
            V_0 = V_0[:, None]
        if V_0.ndim != 2 or V_0.shape[0] != self.dim:
            raise ValueError(
                f"The initial guess must have {self.dim} rows, got shape {V_0.shape}."
            )

        r = options.number_of_requested_eigenpairs
        if r < 1:
            raise ValueError("At least one eigenpair must be requested.")
        if r > self.dim:
            raise ValueError(f"Cannot find {r} eigenpairs of a matrix of dimension {self.dim}.")
        if V_0.shape[1] < r:
            raise ValueError(
                "You have to specify at least as many initial guesses as number of requested eigenpairs."
            )
        if options.collapsed_subspace_dimension < r:
            raise ValueError(
                "The collapsed subspace dimension must be at least the number of requested eigenpairs."
            )
        if options.collapsed_subspace_dimension >= options.maximum_subspace_dimension:
            raise ValueError(
                "The collapsed subspace dimension must be smaller than the maximum subspace dimension."
            )
        if V_0.shape[1] > options.maximum_subspace_dimension:
            raise ValueError("The initial guess has more columns than the maximum subspace dimension.")
        for name in ("convergence_threshold", "correction_threshold", "inclusion_threshold"):
            if getattr(options, name) <= 0.0:
                raise ValueError(f"The {name.replace('_', ' ')} must be positive.")
        if options.maximum_number_of_iterations < 1:
            raise ValueError("The maximum number of iterations must be positive.")

        # Gram-Schmidt on the normalized guesses
        columns = []
        for guess in V_0.T:
            norm = np.linalg.norm(guess)
            if norm == 0.0:
                continue
            basis = np.column_stack(columns) if columns else None
            v = _orthonormalize_one(guess / norm, basis, options.inclusion_threshold)
            if v is not None:
                columns.append(v)
        if len(columns) < r:
            raise ValueError(
                f"The initial guess spans {len(columns)} dimensions, {r} are required."
            )
        return np.column_stack(columns)

    def _apply(self, V: np.ndarray) -> np.ndarray:
        return np.column_stack([self.matrix_vector_product(v) for v in V.T])

    @profile
    def solve(self) -> list[Eigenpair]:
        """
        Run the Davidson iterations.

        Returns
        -------
        list of Eigenpair
            The lowest ``number_of_requested_eigenpairs`` eigenpairs in
            ascending order.

        Raises
        ------
        DavidsonNotConvergedError
            If the residuals are not converged within the maximum number of
            iterations, or no correction can extend the subspace.
        """
        options = self.options
        r = options.number_of_requested_eigenpairs
        maximum = options.maximum_subspace_dimension

        self.state = DavidsonState.INITIALIZING
        self._eigenpairs = None
        self._number_of_iterations = 0

        V = np.zeros((self.dim, maximum), order="F")
        VA = np.zeros((self.dim, maximum), order="F")
        m = self._V_0.shape[1]
        V[:, :m] = self._V_0
        VA[:, :m] = self._apply(V[:, :m])
        S = V[:, :m].T @ VA[:, :m]

        self.state = DavidsonState.ITERATING
        while True:
            S = 0.5 * (S + S.T)
            Lambda_all, Z_all = eigh(S)
            Lambda = Lambda_all[:r]
            Z = Z_all[:, :r]

            X = V[:, :m] @ Z  # Ritz vectors
            R = VA[:, :m] @ Z - X * Lambda[None, :]
            residual_norms = np.linalg.norm(R, axis=0)
            logger.debug(
                "Davidson iteration %d: subspace %d, eigenvalues %s, residual norms %s",
                self._number_of_iterations, m, Lambda, residual_norms,
            )

            if np.all(residual_norms <= options.convergence_threshold):
                self.state = DavidsonState.CONVERGED
                self._eigenpairs = [Eigenpair(float(Lambda[i]), X[:, i].copy()) for i in range(r)]
                logger.info(
                    "Davidson converged in %d iterations, eigenvalues %s",
                    self._number_of_iterations, Lambda,
                )
                return self._eigenpairs

            self._number_of_iterations += 1
            if self._number_of_iterations >= options.maximum_number_of_iterations:
                self.state = DavidsonState.FAILED
                raise DavidsonNotConvergedError(
                    f"The Davidson algorithm did not converge in "
                    f"{options.maximum_number_of_iterations} iterations "
                    f"(residual norms {residual_norms})."
                )

            # diagonal preconditioner
            denominator = np.abs(self.diagonal[:, None] - Lambda[None, :])
            Delta = R / np.maximum(denominator, options.correction_threshold)

            corrections: list[np.ndarray] = []
            for i in range(r):
                if residual_norms[i] <= options.convergence_threshold:
                    continue
                delta = Delta[:, i] / np.linalg.norm(Delta[:, i])
                v = _orthonormalize_one(delta, V[:, :m], options.inclusion_threshold)
                if v is not None and corrections:
                    v = _orthonormalize_one(v, np.column_stack(corrections), options.inclusion_threshold)
                if v is None:
                    logger.debug("Dropped the negligible correction for root %d", i)
                    continue
                corrections.append(v)

            if not corrections:
                self.state = DavidsonState.FAILED
                logger.warning("Davidson stagnated: no correction extends the subspace")
                raise DavidsonNotConvergedError(
                    f"The Davidson subspace cannot be extended (residual norms {residual_norms})."
                )

            if m + len(corrections) > maximum:
                collapsed = min(options.collapsed_subspace_dimension, m)
                Z_collapsed = Z_all[:, :collapsed]
                V[:, :collapsed] = V[:, :m] @ Z_collapsed
                VA[:, :collapsed] = VA[:, :m] @ Z_collapsed
                S = np.diag(Lambda_all[:collapsed])  # Z^T S Z
                logger.debug("Collapsed the Davidson subspace from %d to %d", m, collapsed)
                m = collapsed
                corrections = corrections[: maximum - m]

            m_0 = m
            for v in corrections:
                V[:, m] = v
                m += 1
            VA[:, m_0:m] = self._apply(V[:, m_0:m])

            # only the new rows and columns of S
            S_new = np.zeros((m, m))
            S_new[:m_0, :m_0] = S
            block = V[:, :m].T @ VA[:, m_0:m]
            S_new[:, m_0:m] = block
            S_new[m_0:m, :] = block.T
            S = S_new

    def _check_solved(self):
        if self.state is not DavidsonState.CONVERGED:
            raise NotSolvedError(
                f"The Davidson solver has not converged yet (state: {self.state.value})."
            )

    @property
    def eigenpairs(self) -> list[Eigenpair]:
        self._check_solved()
        return self._eigenpairs

    @property
    def eigenvalues(self) -> np.ndarray:
        return np.array([pair.eigenvalue for pair in self.eigenpairs])

    @property
    def eigenvectors(self) -> np.ndarray:
        """Eigenvectors as columns, shape ``(dim, number_of_requested_eigenpairs)``."""
        return np.column_stack([pair.eigenvector for pair in self.eigenpairs])

    @property
    def number_of_iterations(self) -> int:
        self._check_solved()
        return self._number_of_iterations
