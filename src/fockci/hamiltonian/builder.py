"""
Common interface of the Hamiltonian builders.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from ..fock_space import BaseFockSpace
from .parameters import HamiltonianParameters


class HamiltonianBuilder(ABC):
    """
    Builds the matrix representation of a Hamiltonian in a Fock space, or
    its action on a coefficient vector.
    """

    @property
    @abstractmethod
    def fock_space(self) -> BaseFockSpace:
        """The Fock space in which the Hamiltonian is represented."""

    @abstractmethod
    def construct_hamiltonian(self, parameters: HamiltonianParameters) -> np.ndarray:
        """
        Return the dense ``(dim, dim)`` Hamiltonian matrix.

        The diagonal equals :meth:`calculate_diagonal` exactly.
        """

    @abstractmethod
    def matrix_vector_product(
        self, parameters: HamiltonianParameters, x: np.ndarray, diagonal: np.ndarray
    ) -> np.ndarray:
        """
        Return the action of the Hamiltonian on ``x``.

        Parameters
        ----------
        parameters : HamiltonianParameters
            Integrals in an orthonormal orbital basis.
        x : ndarray
            Coefficient vector of length ``dim``.
        diagonal : ndarray
            The diagonal of the Hamiltonian; the diagonal contribution to the
            product is ``diagonal * x``.
        """

    @abstractmethod
    def calculate_diagonal(self, parameters: HamiltonianParameters) -> np.ndarray:
        """Return the diagonal of the Hamiltonian matrix."""

    def _check_parameters(self, parameters: HamiltonianParameters):
        if parameters.K != self.fock_space.K:
            raise ValueError(
                f"The number of orbitals of the Hamiltonian parameters ({parameters.K}) and "
                f"the Fock space ({self.fock_space.K}) are incompatible."
            )

    def _check_vectors(self, x: np.ndarray, diagonal: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        dim = self.fock_space.dimension
        x = np.asarray(x, dtype=np.float64)
        diagonal = np.asarray(diagonal, dtype=np.float64)
        if x.shape != (dim,):
            raise ValueError(f"The coefficient vector must have shape ({dim},), got {x.shape}.")
        if diagonal.shape != (dim,):
            raise ValueError(f"The diagonal must have shape ({dim},), got {diagonal.shape}.")
        return x, diagonal
