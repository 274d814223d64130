import numpy as np
import pytest

from fockci.fock_space import ProductFockSpace, SelectedFockSpace
from fockci.hamiltonian import FCI, SelectedCI


@pytest.mark.parametrize("K, N_alpha, N_beta", [(4, 2, 1), (4, 2, 2), (5, 3, 1)])
def test_selected_ci_in_complete_space_equals_fci(random_parameters, K, N_alpha, N_beta):
    parameters = random_parameters(K, seed=10 + K)
    product = ProductFockSpace(K, N_alpha, N_beta)
    builder = SelectedCI(SelectedFockSpace.from_fock_space(product))

    H_fci = FCI(product).construct_hamiltonian(parameters)
    assert np.allclose(builder.construct_hamiltonian(parameters), H_fci, atol=1e-10)
    assert np.allclose(builder.calculate_diagonal(parameters), np.diag(H_fci), atol=1e-12)


def test_selected_ci_is_a_submatrix_of_fci(random_parameters):
    parameters = random_parameters(4, seed=11)
    product = ProductFockSpace(4, 2, 2)
    H_fci = FCI(product).construct_hamiltonian(parameters)

    selected = SelectedFockSpace(4, 2, 2)
    alphas = ["0011", "0101", "1010", "1100", "0011"]
    betas = ["0011", "0110", "0101", "1100", "1001"]
    selected.add_configurations(alphas, betas)
    index = [product.get_address((int(a, 2), int(b, 2))) for a, b in zip(alphas, betas)]

    H = SelectedCI(selected).construct_hamiltonian(parameters)
    assert np.allclose(H, H_fci[np.ix_(index, index)], atol=1e-10)


def test_selected_ci_matrix_vector_product(random_parameters):
    parameters = random_parameters(4, seed=12)
    builder = SelectedCI(SelectedFockSpace.from_fock_space(ProductFockSpace(4, 2, 1)))
    H = builder.construct_hamiltonian(parameters)
    diagonal = builder.calculate_diagonal(parameters)

    x = np.random.default_rng(3).standard_normal(builder.fock_space.dimension)
    assert np.allclose(builder.matrix_vector_product(parameters, x, diagonal), H @ x, atol=1e-10)


def test_selected_ci_couplings_are_cached_per_parameters(random_parameters):
    builder = SelectedCI(SelectedFockSpace.from_fock_space(ProductFockSpace(3, 1, 1)))
    parameters = random_parameters(3, seed=13)
    first = builder.couplings(parameters)
    assert builder.couplings(parameters) is first

    other = random_parameters(3, seed=14)
    assert builder.couplings(other) is not first


def test_selected_ci_rejects_wrong_fock_space():
    with pytest.raises(ValueError):
        SelectedCI(ProductFockSpace(3, 1, 1))


def test_selected_ci_cached_couplings_cannot_go_stale(random_parameters):
    builder = SelectedCI(SelectedFockSpace.from_fock_space(ProductFockSpace(3, 1, 1)))
    parameters = random_parameters(3, seed=15)
    builder.couplings(parameters)
    with pytest.raises(ValueError):
        parameters.g[0, 1, 0, 1] += 1.0
