"""
Configuration-interaction Hamiltonians in a Fock space.

This module provides the integral container and the builders that turn it
into a dense Hamiltonian matrix, a matrix-vector product or a diagonal in a
given Fock space.

Main Entry Points
-----------------
HamiltonianParameters : One- and two-electron integrals plus a scalar
    Integrals in chemist notation ``g[p,q,r,s] = (pq|rs)`` in an
    orthonormal orbital basis.

DOCI, FCI, SelectedCI : Hamiltonian builders
    Doubly occupied CI in a FockSpace of electron pairs, full CI in an
    alpha x beta ProductFockSpace and CI in an explicit SelectedFockSpace.

FrozenCoreDOCI, FrozenCoreFCI : Frozen-core builders
    DOCI and FCI in the active orbitals of a frozen Fock space, with the
    frozen-core energy on the diagonal.

hamiltonian_parameters_from_pyscf : Integrals from PySCF output
    MO integrals of a converged RHF calculation.

Utilities
---------
PySCFIntegralProvider : AO integrals evaluated once, transformed on request.

read_fcidump : Integrals and electron numbers from an FCIDUMP file.

spin_orbital_hamiltonian, fock_space_block : Brute-force reference
    Hamiltonian on all spin-orbital occupations, restricted to the
    configurations of a Fock space.

rhf_energy_from_mo_integrals : Compute RHF energy from MO integrals
    Validation function to verify that MO integrals are correct by
    reproducing the RHF energy.

Examples
--------
FCI matrix of H2 from PySCF:

>>> from pyscf import gto, scf
>>> from fockci.fock_space import ProductFockSpace
>>> from fockci.hamiltonian import FCI, hamiltonian_parameters_from_pyscf
>>> mol = gto.M(atom='H 0 0 0; H 0 0 1', basis='sto-3g')
>>> rhf = scf.RHF(mol).run()
>>> parameters = hamiltonian_parameters_from_pyscf(mol, rhf)
>>> H = FCI(ProductFockSpace(2, 1, 1)).construct_hamiltonian(parameters)
"""

from .parameters import HamiltonianParameters
from .builder import HamiltonianBuilder
from .doci import DOCI
from .fci import FCI
from .selected_ci import SelectedCI
from .frozen_core import (
    FrozenCoreCI,
    FrozenCoreDOCI,
    FrozenCoreFCI,
    freeze_hamiltonian_parameters,
    frozen_core_energy,
)
from .pyscf_glue import (
    IntegralProvider,
    PySCFIntegralProvider,
    hamiltonian_parameters_from_pyscf,
    read_fcidump,
)
from .reference import fock_space_block, spin_orbital_hamiltonian
from .checks import rhf_energy_from_hamiltonian_parameters, rhf_energy_from_mo_integrals

__all__ = [
    "DOCI",
    "FCI",
    "FrozenCoreCI",
    "FrozenCoreDOCI",
    "FrozenCoreFCI",
    "HamiltonianBuilder",
    "HamiltonianParameters",
    "IntegralProvider",
    "PySCFIntegralProvider",
    "SelectedCI",
    "fock_space_block",
    "freeze_hamiltonian_parameters",
    "frozen_core_energy",
    "hamiltonian_parameters_from_pyscf",
    "read_fcidump",
    "rhf_energy_from_hamiltonian_parameters",
    "rhf_energy_from_mo_integrals",
    "spin_orbital_hamiltonian",
]
