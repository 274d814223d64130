"""
Fock spaces in which the lowest X orbitals are permanently occupied.
"""
from __future__ import annotations

from ..onv import ONV
from .base import BaseFockSpace, FockSpaceType
from .fock_space import FockSpace
from .product_fock_space import Configuration, ProductFockSpace


def _check_frozen(K: int, N: int, X: int):
    if X < 0:
        raise ValueError(f"The number of frozen orbitals must be non-negative, got {X}.")
    if X > N or X > K:
        raise ValueError(f"Cannot freeze {X} orbitals with {N} electrons in {K} orbitals.")


class FrozenFockSpace(BaseFockSpace):
    """
    The Fock space of ``N`` electrons in ``K`` orbitals with the first ``X``
    orbitals frozen (always occupied).

    Configurations are addressed through the active Fock space of
    ``N - X`` electrons in ``K - X`` orbitals; representations and ONVs are
    expressed in all ``K`` orbitals.
    """

    fock_space_type = FockSpaceType.FROZEN_FOCK_SPACE

    def __init__(self, K: int, N: int, X: int):
        _check_frozen(K, N, X)
        super().__init__(K)
        self.N = N
        self.X = X
        self.active_fock_space = FockSpace(K - X, N - X)
        self._frozen_mask = (1 << X) - 1

    def __repr__(self):
        return f"FrozenFockSpace(K={self.K}, N={self.N}, X={self.X})"

    @property
    def dimension(self) -> int:
        return self.active_fock_space.dimension

    def get_address(self, representation) -> int:
        if isinstance(representation, ONV):
            representation = representation.representation
        if representation & self._frozen_mask != self._frozen_mask:
            raise ValueError(
                f"Representation {representation:#b} does not occupy the {self.X} frozen orbitals."
            )
        return self.active_fock_space.get_address(representation >> self.X)

    def calculate_representation(self, address: int) -> int:
        active = self.active_fock_space.calculate_representation(address)
        return (active << self.X) | self._frozen_mask

    def make_onv(self, address: int) -> ONV:
        return ONV(self.K, self.N, self.calculate_representation(address))

    def set_next_onv(self, onv: ONV):
        active = FockSpace.ulong_next_permutation(onv.representation >> self.X)
        onv.set_representation((active << self.X) | self._frozen_mask)

    def __iter__(self):
        for active in self.active_fock_space:
            yield ONV(self.K, self.N, (active.representation << self.X) | self._frozen_mask)


class FrozenProductFockSpace(BaseFockSpace):
    """
    Product of frozen alpha and beta Fock spaces sharing the same ``X``
    frozen orbitals.
    """

    fock_space_type = FockSpaceType.FROZEN_PRODUCT_FOCK_SPACE

    def __init__(self, K: int, N_alpha: int, N_beta: int, X: int):
        _check_frozen(K, min(N_alpha, N_beta), X)
        super().__init__(K)
        self.N_alpha = N_alpha
        self.N_beta = N_beta
        self.X = X
        self.frozen_fock_space_alpha = FrozenFockSpace(K, N_alpha, X)
        self.frozen_fock_space_beta = FrozenFockSpace(K, N_beta, X)
        self.active_product_fock_space = ProductFockSpace(K - X, N_alpha - X, N_beta - X)

    def __repr__(self):
        return (
            f"FrozenProductFockSpace(K={self.K}, N_alpha={self.N_alpha}, "
            f"N_beta={self.N_beta}, X={self.X})"
        )

    @property
    def dimension(self) -> int:
        return self.active_product_fock_space.dimension

    def get_address(self, representation) -> int:
        alpha, beta = representation
        I_alpha = self.frozen_fock_space_alpha.get_address(alpha)
        I_beta = self.frozen_fock_space_beta.get_address(beta)
        return I_alpha * self.frozen_fock_space_beta.dimension + I_beta

    def calculate_representation(self, address: int) -> tuple[int, int]:
        self._check_address(address)
        I_alpha, I_beta = divmod(address, self.frozen_fock_space_beta.dimension)
        return (
            self.frozen_fock_space_alpha.calculate_representation(I_alpha),
            self.frozen_fock_space_beta.calculate_representation(I_beta),
        )

    def __iter__(self):
        betas = list(self.frozen_fock_space_beta)
        for alpha in self.frozen_fock_space_alpha:
            for beta in betas:
                yield Configuration(alpha.copy(), beta.copy())
