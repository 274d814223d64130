"""
A Fock space spanned by an explicit list of configurations.
"""
from __future__ import annotations

from ..onv import ONV
from .base import BaseFockSpace, FockSpaceType
from .product_fock_space import Configuration


class SelectedFockSpace(BaseFockSpace):
    """
    An ordered selection of ``(alpha, beta)`` configurations.

    The address of a configuration is its position in the selection.

    Parameters
    ----------
    K : int
        Number of spatial orbitals.
    N_alpha, N_beta : int
        Number of alpha and beta electrons of every configuration.

    Examples
    --------
    >>> space = SelectedFockSpace(3, 1, 1)
    >>> space.add_configuration("001", "010")
    >>> space.dimension
    1
    """

    fock_space_type = FockSpaceType.SELECTED_FOCK_SPACE

    def __init__(self, K: int, N_alpha: int, N_beta: int):
        super().__init__(K)
        self.N_alpha = N_alpha
        self.N_beta = N_beta
        self.configurations: list[Configuration] = []
        self._addresses: dict[tuple[int, int], int] = {}

    def __repr__(self):
        return (
            f"SelectedFockSpace(K={self.K}, N_alpha={self.N_alpha}, "
            f"N_beta={self.N_beta}, dimension={self.dimension})"
        )

    @classmethod
    def from_fock_space(cls, fock_space: BaseFockSpace) -> SelectedFockSpace:
        """
        Select every configuration of another Fock space.

        A single-spin space (full or frozen) yields the doubly occupied
        configurations ``(onv, onv)``; a product space (full or frozen) yields
        all its ``(alpha, beta)`` pairs in address order.
        """
        kind = fock_space.fock_space_type
        if kind in (FockSpaceType.FOCK_SPACE, FockSpaceType.FROZEN_FOCK_SPACE):
            selected = cls(fock_space.K, fock_space.N, fock_space.N)
            for onv in fock_space:
                selected._append(Configuration(onv, onv.copy()))
        elif kind in (FockSpaceType.PRODUCT_FOCK_SPACE, FockSpaceType.FROZEN_PRODUCT_FOCK_SPACE):
            selected = cls(fock_space.K, fock_space.N_alpha, fock_space.N_beta)
            for configuration in fock_space:
                selected._append(configuration)
        else:
            raise ValueError(f"Cannot select configurations from a {kind.value}.")
        return selected

    @property
    def dimension(self) -> int:
        return len(self.configurations)

    def _make_onv(self, onv, N: int) -> ONV:
        if isinstance(onv, str):
            if len(onv) != self.K or set(onv) - {"0", "1"}:
                raise ValueError(
                    f"ONV string {onv!r} is not a bitstring over {self.K} orbitals."
                )
            onv = int(onv, 2) if onv else 0
        return ONV(self.K, N, onv)

    def _append(self, configuration: Configuration):
        key = (configuration.alpha.representation, configuration.beta.representation)
        if key in self._addresses:
            raise ValueError(f"Configuration {configuration} is already part of the selection.")
        self._addresses[key] = len(self.configurations)
        self.configurations.append(configuration)

    def add_configuration(self, alpha, beta):
        """
        Add a configuration.

        Parameters
        ----------
        alpha, beta : str or int
            Alpha and beta ONVs, either as bitstrings read from right to left
            (``"0011"`` occupies orbitals 0 and 1) or as integer
            representations.

        Raises
        ------
        ValueError
            If an ONV does not match the number of orbitals or electrons, or
            the configuration was already selected.
        """
        configuration = Configuration(
            self._make_onv(alpha, self.N_alpha), self._make_onv(beta, self.N_beta)
        )
        self._append(configuration)

    def add_configurations(self, alphas, betas):
        """Add several configurations, see :meth:`add_configuration`."""
        alphas = list(alphas)
        betas = list(betas)
        if len(alphas) != len(betas):
            raise ValueError("The number of alpha and beta ONVs does not match.")
        for alpha, beta in zip(alphas, betas):
            self.add_configuration(alpha, beta)

    def get_address(self, representation) -> int:
        alpha, beta = representation
        if isinstance(alpha, ONV):
            alpha = alpha.representation
        if isinstance(beta, ONV):
            beta = beta.representation
        try:
            return self._addresses[(alpha, beta)]
        except KeyError:
            raise ValueError(
                f"Configuration ({alpha:#b}, {beta:#b}) is not part of the selection."
            ) from None

    def calculate_representation(self, address: int) -> tuple[int, int]:
        self._check_address(address)
        alpha, beta = self.configurations[address]
        return alpha.representation, beta.representation

    def get_configuration(self, address: int) -> Configuration:
        self._check_address(address)
        return self.configurations[address]

    def __iter__(self):
        for alpha, beta in self.configurations:
            yield Configuration(alpha.copy(), beta.copy())
