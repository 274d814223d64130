import numpy as np
import pytest

from fockci.hamiltonian.parameters import HamiltonianParameters


def _random_parameters(K, seed=0, scalar=0.0):
    """Random integrals with the permutational symmetry of real orbitals."""
    rng = np.random.default_rng(seed)
    h = rng.standard_normal((K, K))
    h = 0.5 * (h + h.T)

    g = rng.standard_normal((K, K, K, K))
    g = g + g.transpose(1, 0, 2, 3)
    g = g + g.transpose(0, 1, 3, 2)
    g = g + g.transpose(2, 3, 0, 1)
    return HamiltonianParameters(h, g / 8.0, scalar)


@pytest.fixture
def random_parameters():
    return _random_parameters


@pytest.fixture(scope="session")
def h2_rhf():
    pytest.importorskip("pyscf")
    from pyscf import gto, scf

    mol = gto.M(atom="H 0 0 0; H 0 0 0.74", basis="sto-3g", unit="Ang")
    mf = scf.RHF(mol)
    mf.conv_tol = 1e-12
    rhf = mf.run()
    return mol, rhf


@pytest.fixture(scope="session")
def h4_rhf():
    pytest.importorskip("pyscf")
    from pyscf import gto, scf

    # Use geometry without symmetry
    geometry = "H 0 0 0; H 1 0 1; H 0 2 3; H 0 -1 4.5"
    mol = gto.M(atom=geometry, basis="sto-3g")
    mf = scf.RHF(mol)
    mf.conv_tol = 1e-12
    rhf = mf.run()
    return mol, rhf
