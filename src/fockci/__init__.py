"""
Configuration interaction in occupation-number Fock spaces.

Subpackages
-----------
fock_space : ONV addressing and the Fock-space variants
hamiltonian : integrals and DOCI/FCI/selected/frozen-core Hamiltonian builders
solvers : Davidson, dense and sparse eigensolvers

Examples
--------
>>> from fockci.energy import fci_energy
>>> from fockci.hamiltonian import hamiltonian_parameters_from_pyscf
>>> parameters = hamiltonian_parameters_from_pyscf(mol, rhf)
>>> fci_energy(parameters, 1, 1)
"""

from .ci_solver import CISolver
from .exceptions import DavidsonNotConvergedError, FockCIError, NotSolvedError
from .onv import ONV

__all__ = [
    "CISolver",
    "DavidsonNotConvergedError",
    "FockCIError",
    "NotSolvedError",
    "ONV",
]
