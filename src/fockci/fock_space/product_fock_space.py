"""
Product of an alpha and a beta Fock space.
"""
from __future__ import annotations

from typing import NamedTuple

import numpy as np

from ..onv import ONV
from .base import BaseFockSpace, FockSpaceType
from .fock_space import ADDRESS_LIMIT, FockSpace


class Configuration(NamedTuple):
    """An alpha and a beta ONV over the same orbitals."""
    alpha: ONV
    beta: ONV


class ProductFockSpace(BaseFockSpace):
    """
    The tensor product of the alpha and beta Fock spaces of ``K`` orbitals.

    Addresses are alpha-major: ``I = I_alpha * dim_beta + I_beta``, so an
    FCI coefficient vector reshapes to a ``(dim_alpha, dim_beta)`` matrix.

    Parameters
    ----------
    K : int
        Number of spatial orbitals.
    N_alpha, N_beta : int
        Number of alpha and beta electrons.
    """

    fock_space_type = FockSpaceType.PRODUCT_FOCK_SPACE

    def __init__(self, K: int, N_alpha: int, N_beta: int):
        super().__init__(K)
        self.N_alpha = N_alpha
        self.N_beta = N_beta
        self.fock_space_alpha = FockSpace(K, N_alpha)
        self.fock_space_beta = FockSpace(K, N_beta)
        dimension = self.fock_space_alpha.dimension * self.fock_space_beta.dimension
        if dimension > ADDRESS_LIMIT:
            raise OverflowError(
                f"The product Fock space dimension {dimension} exceeds the address range."
            )
        self._dimension = dimension

    def __repr__(self):
        return f"ProductFockSpace(K={self.K}, N_alpha={self.N_alpha}, N_beta={self.N_beta})"

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def N(self) -> int:
        return self.N_alpha + self.N_beta

    @property
    def shape(self) -> tuple[int, int]:
        """``(dim_alpha, dim_beta)``, the shape of a reshaped coefficient vector."""
        return self.fock_space_alpha.dimension, self.fock_space_beta.dimension

    def get_address(self, representation) -> int:
        """Address of an ``(alpha, beta)`` pair of representations or ONVs."""
        alpha, beta = representation
        I_alpha = self.fock_space_alpha.get_address(alpha)
        I_beta = self.fock_space_beta.get_address(beta)
        return I_alpha * self.fock_space_beta.dimension + I_beta

    def calculate_representation(self, address: int) -> tuple[int, int]:
        self._check_address(address)
        I_alpha, I_beta = divmod(address, self.fock_space_beta.dimension)
        return (
            self.fock_space_alpha.calculate_representation(I_alpha),
            self.fock_space_beta.calculate_representation(I_beta),
        )

    def make_configuration(self, address: int) -> Configuration:
        alpha, beta = self.calculate_representation(address)
        return Configuration(ONV(self.K, self.N_alpha, alpha), ONV(self.K, self.N_beta, beta))

    def __iter__(self):
        betas = list(self.fock_space_beta)
        for alpha in self.fock_space_alpha:
            for beta in betas:
                yield Configuration(alpha.copy(), beta.copy())

    def occupation_numbers(self) -> tuple[np.ndarray, np.ndarray]:
        """
        Alpha and beta string occupation matrices.

        Returns
        -------
        tuple of ndarray
            Arrays of shape ``(dim_alpha, K)`` and ``(dim_beta, K)`` with a 1
            where a string occupies an orbital.
        """
        return (
            occupation_number_matrix(self.fock_space_alpha),
            occupation_number_matrix(self.fock_space_beta),
        )


def occupation_number_matrix(fock_space: FockSpace) -> np.ndarray:
    """Return the ``(dimension, K)`` 0/1 occupation matrix of a Fock space."""
    occupations = np.zeros((fock_space.dimension, fock_space.K))
    for I, onv in enumerate(fock_space):
        occupations[I, onv.occupation_indices] = 1.0
    return occupations
