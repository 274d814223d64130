import numpy as np
import pytest

pyscf = pytest.importorskip("pyscf")

from fockci.fock_space import ProductFockSpace
from fockci.hamiltonian import FCI
from fockci.hamiltonian.checks import rhf_energy_from_mo_integrals
from fockci.hamiltonian.pyscf_glue import (
    PySCFIntegralProvider,
    hamiltonian_parameters_from_pyscf,
    read_fcidump,
)


@pytest.mark.slow
def test_rhf_energy_matches_pyscf_h2(h2_rhf):
    mol, rhf = h2_rhf
    e_from_ints = rhf_energy_from_mo_integrals(mol, rhf)
    assert np.isclose(e_from_ints, rhf.e_tot, atol=1e-8), (
        f"{e_from_ints=} vs {rhf.e_tot=}"
    )


@pytest.mark.slow
def test_rhf_energy_matches_pyscf_h4(h4_rhf):
    mol, rhf = h4_rhf
    e_from_ints = rhf_energy_from_mo_integrals(mol, rhf)
    assert np.isclose(e_from_ints, rhf.e_tot, atol=1e-8), (
        f"{e_from_ints=} vs {rhf.e_tot=}"
    )


@pytest.mark.slow
def test_parameters_from_pyscf_are_symmetric(h4_rhf):
    mol, rhf = h4_rhf
    parameters = hamiltonian_parameters_from_pyscf(mol, rhf)
    assert parameters.K == rhf.mo_coeff.shape[1]
    assert parameters.is_symmetric(atol=1e-10)
    assert np.isclose(parameters.scalar, mol.energy_nuc())


@pytest.mark.slow
def test_provider_matches_mean_field_glue(h4_rhf):
    mol, rhf = h4_rhf
    provider = PySCFIntegralProvider(mol)
    parameters = provider.hamiltonian_parameters(rhf.mo_coeff)
    reference = hamiltonian_parameters_from_pyscf(mol, rhf)
    assert np.allclose(parameters.h, reference.h, atol=1e-10)
    assert np.allclose(parameters.g, reference.g, atol=1e-10)
    assert parameters.scalar == reference.scalar


@pytest.mark.slow
def test_fci_hartree_fock_element_is_rhf_energy(h2_rhf):
    mol, rhf = h2_rhf
    parameters = hamiltonian_parameters_from_pyscf(mol, rhf)
    diagonal = FCI(ProductFockSpace(parameters.K, 1, 1)).calculate_diagonal(parameters)
    # address 0 occupies α0 and β0
    assert np.isclose(diagonal[0] + parameters.scalar, rhf.e_tot, atol=1e-8)


def test_provider_rejects_unrestricted_orbitals(h2_rhf):
    mol, rhf = h2_rhf
    provider = PySCFIntegralProvider(mol)
    with pytest.raises(ValueError):
        provider.hamiltonian_parameters(np.stack([rhf.mo_coeff, rhf.mo_coeff]))


def test_fcidump_roundtrip(tmp_path, random_parameters):
    from pyscf.tools import fcidump

    parameters = random_parameters(3, seed=50, scalar=0.25)
    path = tmp_path / "FCIDUMP"
    fcidump.from_integrals(str(path), parameters.h, parameters.g, 3, 3, nuc=0.25, ms=1, tol=0.0)

    read, nelec = read_fcidump(path)
    assert nelec == (2, 1)
    assert np.allclose(read.h, parameters.h, atol=1e-10)
    assert np.allclose(read.g, parameters.g, atol=1e-10)
    assert np.isclose(read.scalar, 0.25)
