import numpy as np
import pytest


# 1) BLOCK spin ordering consistency (cross-spin one-electron blocks must be zero)
def test_spin_block_cross_terms_zero():
    from fockci.hamiltonian.reference import spin_expand_one_electron, spin_expand_two_electron

    # Small distinct 1e and 2e tensors to make violations obvious
    h = np.array([[0.7, -0.2],
                  [-0.2, 0.3]], dtype=float)
    g = np.arange(2 ** 4, dtype=float).reshape(2, 2, 2, 2)  # distinct entries

    H = spin_expand_one_electron(h)
    G = spin_expand_two_electron(g)

    n = h.shape[0]
    assert np.allclose(H[0:n, n:2*n], 0.0)
    assert np.allclose(H[n:2*n, 0:n], 0.0)
    # chemist notation: spin must match within (PQ| and |RS)
    assert np.allclose(G[0:n, n:2*n, :, :], 0.0)
    assert np.allclose(G[:, :, n:2*n, 0:n], 0.0)


# 2) PySCF glue: RHF energy must match expectation value on BLOCK-ordered HF determinant
@pytest.mark.slow
def test_reference_hamiltonian_rhf_energy_matches_h2_sto3g(h2_rhf):
    from fockci.hamiltonian.pyscf_glue import hamiltonian_parameters_from_pyscf
    from fockci.hamiltonian.reference import spin_orbital_hamiltonian

    mol, rhf = h2_rhf
    parameters = hamiltonian_parameters_from_pyscf(mol, rhf)
    H = spin_orbital_hamiltonian(parameters)

    # BLOCK ordering HF determinant: occupy α0 and β0 at bit positions 0 and nmo
    nmo = rhf.mo_coeff.shape[1]
    ket_index = (1 << 0) | (1 << nmo)  # α0 + β0
    energy = H[ket_index, ket_index]
    # Be explicit with tolerance due to PySCF minor version differences
    assert np.isclose(energy, rhf.e_tot, atol=1e-6), f"{energy=} vs {rhf.e_tot=}"


# 3) Physicist-ordered integrals silently give wrong energies
def test_physicist_integrals_are_not_chemist_integrals(random_parameters):
    from fockci.hamiltonian.checks import rhf_energy_from_hamiltonian_parameters
    from fockci.hamiltonian.parameters import HamiltonianParameters

    parameters = random_parameters(3, seed=70)
    physicist = HamiltonianParameters(parameters.h, parameters.g.transpose(0, 2, 1, 3))
    e_chem = rhf_energy_from_hamiltonian_parameters(parameters, 2)
    e_phys = rhf_energy_from_hamiltonian_parameters(physicist, 2)
    assert not np.isclose(e_chem, e_phys)


# 4) FCI vectors are alpha-major, like PySCF's (na, nb) CI matrices
@pytest.mark.slow
def test_fci_vector_reshapes_like_pyscf(h4_rhf):
    from pyscf import fci

    from fockci import CISolver
    from fockci.fock_space import ProductFockSpace
    from fockci.hamiltonian import FCI
    from fockci.hamiltonian.pyscf_glue import hamiltonian_parameters_from_pyscf
    from fockci.solvers import DenseSolverOptions

    mol, rhf = h4_rhf
    cisolver = fci.FCI(rhf)
    cisolver.conv_tol = 1e-12
    _, ci_pyscf = cisolver.kernel()

    parameters = hamiltonian_parameters_from_pyscf(mol, rhf)
    fock_space = ProductFockSpace(parameters.K, 2, 2)
    solver = CISolver(FCI(fock_space), parameters)
    solver.solve(DenseSolverOptions())
    ci = solver.get_eigenpair().eigenvector.reshape(fock_space.shape)

    overlap = abs(np.sum(ci * ci_pyscf))
    assert np.isclose(overlap, 1.0, atol=1e-6)
