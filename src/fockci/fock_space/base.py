"""
Capability interface shared by every Fock-space variant.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

import numpy as np


class FockSpaceType(Enum):
    FOCK_SPACE = "FockSpace"
    PRODUCT_FOCK_SPACE = "ProductFockSpace"
    FROZEN_FOCK_SPACE = "FrozenFockSpace"
    FROZEN_PRODUCT_FOCK_SPACE = "FrozenProductFockSpace"
    SELECTED_FOCK_SPACE = "SelectedFockSpace"


class BaseFockSpace(ABC):
    """
    A set of configurations with a dense address for each of them.

    Every variant can translate a representation into its address and back,
    and iterate its configurations in address order.

    Parameters
    ----------
    K : int
        Number of spatial orbitals.
    """

    fock_space_type: FockSpaceType

    def __init__(self, K: int):
        if K < 0:
            raise ValueError(f"The number of orbitals must be non-negative, got {K}.")
        self.K = K

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Number of configurations in the space."""

    @abstractmethod
    def get_address(self, representation) -> int:
        """Address of the configuration with the given representation."""

    @abstractmethod
    def calculate_representation(self, address: int):
        """Representation of the configuration at the given address."""

    @abstractmethod
    def __iter__(self):
        """Iterate over fresh configuration objects in address order."""

    def __len__(self):
        return self.dimension

    def _check_address(self, address: int):
        if not 0 <= address < self.dimension:
            raise ValueError(
                f"Address {address} is out of range for a Fock space of dimension {self.dimension}."
            )

    def hartree_fock_expansion(self) -> np.ndarray:
        """
        Coefficient vector of the single configuration with address 0.

        For the full, product and frozen spaces this is the configuration
        with the lowest orbitals occupied.
        """
        expansion = np.zeros(self.dimension)
        expansion[0] = 1.0
        return expansion
