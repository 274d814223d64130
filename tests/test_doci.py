import numpy as np
import pytest

from fockci.fock_space import FockSpace, ProductFockSpace, SelectedFockSpace
from fockci.hamiltonian import DOCI, SelectedCI
from fockci.hamiltonian.reference import fock_space_block, spin_orbital_hamiltonian


def test_doci_matches_spin_orbital_reference(random_parameters):
    parameters = random_parameters(4, seed=1)
    fock_space = FockSpace(4, 2)
    H = DOCI(fock_space).construct_hamiltonian(parameters)

    H_ref = fock_space_block(spin_orbital_hamiltonian(parameters), fock_space)
    assert np.allclose(H, H_ref, atol=1e-10)


def test_doci_matrix_is_symmetric_with_exact_diagonal(random_parameters):
    parameters = random_parameters(6, seed=2)
    builder = DOCI(FockSpace(6, 3))
    H = builder.construct_hamiltonian(parameters)

    assert H.shape == (20, 20)
    assert np.allclose(H, H.T)
    assert np.array_equal(np.diag(H), builder.calculate_diagonal(parameters))


def test_doci_pair_couplings():
    fock_space = FockSpace(5, 2)
    I, J, p, q = DOCI(fock_space).pair_couplings()
    assert len(I) == fock_space.count_total_one_electron_couplings() // 2
    assert np.all(J > I)
    for i, j, a, b in zip(I, J, p, q):
        source = fock_space.calculate_representation(int(i))
        target = fock_space.calculate_representation(int(j))
        assert target == source ^ (1 << int(a)) ^ (1 << int(b))


def test_doci_matrix_vector_product(random_parameters):
    parameters = random_parameters(6, seed=3)
    builder = DOCI(FockSpace(6, 2))
    H = builder.construct_hamiltonian(parameters)
    diagonal = builder.calculate_diagonal(parameters)

    x = np.random.default_rng(0).standard_normal(builder.fock_space.dimension)
    assert np.allclose(builder.matrix_vector_product(parameters, x, diagonal), H @ x, atol=1e-10)

    # the supplied diagonal is used as is
    shifted = builder.matrix_vector_product(parameters, x, diagonal + 1.0)
    assert np.allclose(shifted, H @ x + x, atol=1e-10)


def test_doci_equals_selected_ci_on_doubly_occupied_configurations(random_parameters):
    parameters = random_parameters(5, seed=4)
    fock_space = FockSpace(5, 2)
    H_doci = DOCI(fock_space).construct_hamiltonian(parameters)
    H_selected = SelectedCI(SelectedFockSpace.from_fock_space(fock_space)).construct_hamiltonian(parameters)
    assert np.allclose(H_doci, H_selected, atol=1e-10)


def test_doci_rejects_mismatched_inputs(random_parameters):
    builder = DOCI(FockSpace(4, 2))
    with pytest.raises(ValueError):
        builder.construct_hamiltonian(random_parameters(5))
    parameters = random_parameters(4)
    with pytest.raises(ValueError):
        builder.matrix_vector_product(parameters, np.ones(5), np.ones(6))
    with pytest.raises(ValueError):
        builder.matrix_vector_product(parameters, np.ones(6), np.ones(5))
    with pytest.raises(ValueError):
        DOCI(ProductFockSpace(4, 2, 2))
