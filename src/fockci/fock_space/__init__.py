"""
Fock spaces: sets of occupation-number configurations with dense addresses.

Variants
--------
FockSpace : all ONVs of N electrons in K orbitals (vertex-weight addressing)
ProductFockSpace : alpha x beta product of two FockSpaces
FrozenFockSpace, FrozenProductFockSpace : the above with X frozen orbitals
SelectedFockSpace : an explicit list of (alpha, beta) configurations

All variants implement :class:`BaseFockSpace` and carry a
:class:`FockSpaceType` tag.
"""

from .base import BaseFockSpace, FockSpaceType
from .fock_space import ADDRESS_LIMIT, FockSpace
from .product_fock_space import Configuration, ProductFockSpace, occupation_number_matrix
from .frozen_fock_space import FrozenFockSpace, FrozenProductFockSpace
from .selected_fock_space import SelectedFockSpace

__all__ = [
    "ADDRESS_LIMIT",
    "BaseFockSpace",
    "Configuration",
    "FockSpace",
    "FockSpaceType",
    "FrozenFockSpace",
    "FrozenProductFockSpace",
    "ProductFockSpace",
    "SelectedFockSpace",
    "occupation_number_matrix",
]
