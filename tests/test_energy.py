import numpy as np
import pytest

from fockci.energy import (
    doci_energy,
    fci_energy,
    frozen_core_doci_energy,
    frozen_core_fci_energy,
    pyscf_fci_energy,
)
from fockci.solvers import DenseSolverOptions, SparseSolverOptions


def test_energy_drivers_agree_across_solvers(random_parameters):
    parameters = random_parameters(4, seed=60, scalar=0.5)
    dense = fci_energy(parameters, 2, 2, DenseSolverOptions())
    sparse = fci_energy(parameters, 2, 2, SparseSolverOptions())
    assert np.isclose(dense, sparse, atol=1e-8)
    assert np.isclose(
        doci_energy(parameters, 2, DenseSolverOptions()),
        doci_energy(parameters, 2, SparseSolverOptions()),
        atol=1e-8,
    )


def test_frozen_core_without_frozen_orbitals(random_parameters):
    parameters = random_parameters(4, seed=61)
    options = DenseSolverOptions()
    assert np.isclose(
        frozen_core_fci_energy(parameters, 2, 1, 0, options), fci_energy(parameters, 2, 1, options)
    )
    assert np.isclose(
        frozen_core_doci_energy(parameters, 2, 0, options), doci_energy(parameters, 2, options)
    )


@pytest.mark.slow
def test_fci_energy_matches_pyscf_h4(h4_rhf):
    from pyscf import fci

    from fockci.hamiltonian.pyscf_glue import hamiltonian_parameters_from_pyscf

    mol, rhf = h4_rhf
    parameters = hamiltonian_parameters_from_pyscf(mol, rhf)
    e_pyscf, _ = fci.FCI(rhf).kernel()

    assert np.isclose(fci_energy(parameters, 2, 2), e_pyscf, atol=1e-7)
    assert np.isclose(pyscf_fci_energy(parameters, 2, 2), e_pyscf, atol=1e-7)


@pytest.mark.slow
def test_variational_ordering_h4(h4_rhf):
    from fockci.hamiltonian.pyscf_glue import hamiltonian_parameters_from_pyscf

    mol, rhf = h4_rhf
    parameters = hamiltonian_parameters_from_pyscf(mol, rhf)
    options = DenseSolverOptions()

    e_fci = fci_energy(parameters, 2, 2, options)
    e_doci = doci_energy(parameters, 2, options)
    e_frozen = frozen_core_fci_energy(parameters, 2, 2, 1, options)
    e_frozen_doci = frozen_core_doci_energy(parameters, 2, 1, options)

    assert e_fci <= e_frozen + 1e-10
    assert e_fci <= e_doci + 1e-10
    assert e_doci <= e_frozen_doci + 1e-10
    assert e_doci <= rhf.e_tot + 1e-8
