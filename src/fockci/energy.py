import numpy as np
from pyscf import fci

from .ci_solver import CISolver
from .fock_space import FockSpace, FrozenFockSpace, FrozenProductFockSpace, ProductFockSpace
from .hamiltonian import DOCI, FCI, FrozenCoreDOCI, FrozenCoreFCI, HamiltonianParameters


def doci_energy(parameters: HamiltonianParameters, N_P: int, options=None) -> float:
    """
    Calculate the DOCI ground state energy.

    Parameters
    ----------
    parameters : HamiltonianParameters
        Integrals in the orbital basis that defines the electron pairs.
    N_P : int
        Number of electron pairs.
    options : solver options, optional
        See :meth:`CISolver.solve`; Davidson by default.

    Returns
    -------
    float
        Total energy (including the scalar) in Hartree.
    """
    solver = CISolver(DOCI(FockSpace(parameters.K, N_P)), parameters)
    solver.solve(options)
    return float(solver.energies[0])


def fci_energy(parameters: HamiltonianParameters, N_alpha: int, N_beta: int, options=None) -> float:
    """
    Calculate the Full Configuration Interaction (FCI) ground state energy.

    Parameters
    ----------
    parameters : HamiltonianParameters
        Integrals.
    N_alpha, N_beta : int
        Number of alpha and beta electrons.
    options : solver options, optional
        See :meth:`CISolver.solve`; Davidson by default.

    Returns
    -------
    float
        Total energy in Hartree.
    """
    solver = CISolver(FCI(ProductFockSpace(parameters.K, N_alpha, N_beta)), parameters)
    solver.solve(options)
    return float(solver.energies[0])


def frozen_core_doci_energy(parameters: HamiltonianParameters, N_P: int, X: int, options=None) -> float:
    """DOCI ground state energy with the lowest ``X`` orbitals doubly occupied."""
    solver = CISolver(FrozenCoreDOCI(FrozenFockSpace(parameters.K, N_P, X)), parameters)
    solver.solve(options)
    return float(solver.energies[0])


def frozen_core_fci_energy(parameters: HamiltonianParameters, N_alpha: int, N_beta: int, X: int,
                           options=None) -> float:
    """FCI ground state energy with the lowest ``X`` orbitals doubly occupied."""
    fock_space = FrozenProductFockSpace(parameters.K, N_alpha, N_beta, X)
    solver = CISolver(FrozenCoreFCI(fock_space), parameters)
    solver.solve(options)
    return float(solver.energies[0])


def pyscf_fci_energy(parameters: HamiltonianParameters, N_alpha: int, N_beta: int) -> float:
    """
    Reference FCI energy from PySCF's ``direct_spin1`` solver for the same
    integrals.
    """
    solver = fci.direct_spin1.FCI()
    solver.conv_tol = 1e-12
    energy, _ = solver.kernel(
        parameters.h.copy(), parameters.g.copy(), parameters.K, (N_alpha, N_beta),
        ecore=parameters.scalar,
    )
    return float(energy)
