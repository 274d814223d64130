"""
Frozen-core wrappers around the Hamiltonian builders.

The lowest ``X`` spatial orbitals are doubly occupied in every
configuration. Their interaction with the active electrons is folded into
the active one-electron integrals, and their own energy is a constant shift
of the diagonal.
"""
from __future__ import annotations

import numpy as np

from ..fock_space import FockSpaceType, FrozenFockSpace, FrozenProductFockSpace
from .builder import HamiltonianBuilder
from .doci import DOCI
from .fci import FCI
from .parameters import HamiltonianParameters


def _check_number_of_frozen_orbitals(parameters: HamiltonianParameters, X: int):
    if not 0 <= X <= parameters.K:
        raise ValueError(f"Cannot freeze {X} of {parameters.K} orbitals.")


def freeze_hamiltonian_parameters(parameters: HamiltonianParameters, X: int) -> HamiltonianParameters:
    """
    Active-space parameters for ``X`` doubly occupied frozen orbitals.

    ``h'_pq = h_pq + sum_l (2 g_pqll - g_pllq)`` over the frozen orbitals
    ``l``; ``g'`` is the active block of ``g`` and the scalar is unchanged.
    """
    _check_number_of_frozen_orbitals(parameters, X)
    h, g = parameters.h, parameters.g
    frozen = slice(0, X)
    active = slice(X, parameters.K)

    coulomb = np.einsum("pqll->pq", g[active, active, frozen, frozen])
    exchange = np.einsum("pllq->pq", g[active, frozen, frozen, active])
    h_active = h[active, active] + 2.0 * coulomb - exchange
    g_active = g[active, active, active, active]
    return HamiltonianParameters(h_active, g_active, parameters.scalar)


def frozen_core_energy(parameters: HamiltonianParameters, X: int) -> float:
    """
    Energy of ``X`` doubly occupied frozen orbitals.

    ``sum_i (2 h_ii + g_iiii) + sum_{i<j} (4 g_iijj - 2 g_ijji)``.
    """
    _check_number_of_frozen_orbitals(parameters, X)
    h = parameters.h[:X, :X]
    g = parameters.g[:X, :X, :X, :X]

    energy = 2.0 * np.trace(h) + np.einsum("iiii->", g)
    pair = 4.0 * np.einsum("iijj->ij", g) - 2.0 * np.einsum("ijji->ij", g)
    energy += np.triu(pair, k=1).sum()
    return float(energy)


class FrozenCoreCI(HamiltonianBuilder):
    """
    Decorates an active-space builder with ``X`` frozen orbitals.

    Parameters are always given in the full orbital basis; the active builder
    receives :func:`freeze_hamiltonian_parameters` of them.

    Parameters
    ----------
    active_builder : HamiltonianBuilder
        Builder over the ``K - X`` active orbitals.
    X : int
        Number of frozen orbitals.
    fock_space : BaseFockSpace, optional
        The full-orbital view of the Fock space; defaults to the active
        builder's Fock space.
    """

    def __init__(self, active_builder: HamiltonianBuilder, X: int, fock_space=None):
        if X < 0:
            raise ValueError(f"The number of frozen orbitals must be non-negative, got {X}.")
        self.active_builder = active_builder
        self.X = X
        self.K = active_builder.fock_space.K + X
        self._fock_space = fock_space if fock_space is not None else active_builder.fock_space

    @property
    def fock_space(self):
        return self._fock_space

    def _check_parameters(self, parameters: HamiltonianParameters):
        if parameters.K != self.K:
            raise ValueError(
                f"The number of orbitals of the Hamiltonian parameters ({parameters.K}) does not "
                f"match the {self.X} frozen and {self.K - self.X} active orbitals."
            )

    def construct_hamiltonian(self, parameters: HamiltonianParameters) -> np.ndarray:
        self._check_parameters(parameters)
        H = self.active_builder.construct_hamiltonian(
            freeze_hamiltonian_parameters(parameters, self.X)
        )
        H[np.diag_indices_from(H)] += frozen_core_energy(parameters, self.X)
        return H

    def calculate_diagonal(self, parameters: HamiltonianParameters) -> np.ndarray:
        self._check_parameters(parameters)
        diagonal = self.active_builder.calculate_diagonal(
            freeze_hamiltonian_parameters(parameters, self.X)
        )
        return diagonal + frozen_core_energy(parameters, self.X)

    def matrix_vector_product(
        self, parameters: HamiltonianParameters, x: np.ndarray, diagonal: np.ndarray
    ) -> np.ndarray:
        """
        Delegate to the active builder.

        ``diagonal`` is the full diagonal from :meth:`calculate_diagonal`, so
        the frozen-core energy is already part of it.
        """
        self._check_parameters(parameters)
        return self.active_builder.matrix_vector_product(
            freeze_hamiltonian_parameters(parameters, self.X), x, diagonal
        )


class FrozenCoreDOCI(FrozenCoreCI):
    """DOCI in the active orbitals of a :class:`FrozenFockSpace`."""

    def __init__(self, fock_space: FrozenFockSpace):
        if fock_space.fock_space_type is not FockSpaceType.FROZEN_FOCK_SPACE:
            raise ValueError(f"FrozenCoreDOCI requires a FrozenFockSpace, got {fock_space!r}.")
        super().__init__(DOCI(fock_space.active_fock_space), fock_space.X, fock_space)


class FrozenCoreFCI(FrozenCoreCI):
    """FCI in the active orbitals of a :class:`FrozenProductFockSpace`."""

    def __init__(self, fock_space: FrozenProductFockSpace):
        if fock_space.fock_space_type is not FockSpaceType.FROZEN_PRODUCT_FOCK_SPACE:
            raise ValueError(
                f"FrozenCoreFCI requires a FrozenProductFockSpace, got {fock_space!r}."
            )
        super().__init__(FCI(fock_space.active_product_fock_space), fock_space.X, fock_space)
