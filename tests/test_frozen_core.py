import numpy as np
import pytest

from fockci.fock_space import FockSpace, FrozenFockSpace, FrozenProductFockSpace, ProductFockSpace
from fockci.hamiltonian import (
    DOCI,
    FCI,
    FrozenCoreDOCI,
    FrozenCoreFCI,
    freeze_hamiltonian_parameters,
    frozen_core_energy,
)
from fockci.hamiltonian.checks import rhf_energy_from_hamiltonian_parameters
from fockci.hamiltonian.reference import fock_space_block, spin_orbital_hamiltonian


def test_frozen_core_energy_is_closed_shell_energy(random_parameters):
    parameters = random_parameters(5, seed=20)
    for X in range(4):
        expected = rhf_energy_from_hamiltonian_parameters(parameters, X) - parameters.scalar
        assert np.isclose(frozen_core_energy(parameters, X), expected)


def test_freeze_hamiltonian_parameters_shapes(random_parameters):
    parameters = random_parameters(4, seed=21, scalar=0.7)
    frozen = freeze_hamiltonian_parameters(parameters, 1)
    assert frozen.K == 3
    assert frozen.scalar == 0.7
    assert np.allclose(frozen.g, parameters.g[1:, 1:, 1:, 1:])
    assert frozen.is_symmetric()

    unchanged = freeze_hamiltonian_parameters(parameters, 0)
    assert np.allclose(unchanged.h, parameters.h)
    with pytest.raises(ValueError):
        freeze_hamiltonian_parameters(parameters, 5)


def test_frozen_core_doci_k4_x1(random_parameters):
    parameters = random_parameters(4, seed=22)
    fock_space = FrozenFockSpace(4, 2, 1)
    builder = FrozenCoreDOCI(fock_space)
    assert builder.active_builder.fock_space.K == 3

    H = builder.construct_hamiltonian(parameters)
    H_active = DOCI(FockSpace(3, 1)).construct_hamiltonian(freeze_hamiltonian_parameters(parameters, 1))
    shift = frozen_core_energy(parameters, 1)
    assert np.allclose(H - H_active, shift * np.eye(3))

    H_ref = fock_space_block(spin_orbital_hamiltonian(parameters), fock_space)
    assert np.allclose(H, H_ref, atol=1e-10)


def test_frozen_core_fci_matches_reference(random_parameters):
    parameters = random_parameters(4, seed=23)
    fock_space = FrozenProductFockSpace(4, 2, 2, 1)
    builder = FrozenCoreFCI(fock_space)

    H = builder.construct_hamiltonian(parameters)
    H_ref = fock_space_block(spin_orbital_hamiltonian(parameters), fock_space)
    assert np.allclose(H, H_ref, atol=1e-10)

    H_active = FCI(ProductFockSpace(3, 1, 1)).construct_hamiltonian(
        freeze_hamiltonian_parameters(parameters, 1)
    )
    assert np.allclose(H - H_active, frozen_core_energy(parameters, 1) * np.eye(9))


def test_frozen_core_diagonal_and_matrix_vector_product(random_parameters):
    parameters = random_parameters(5, seed=24)
    builder = FrozenCoreFCI(FrozenProductFockSpace(5, 3, 2, 1))
    H = builder.construct_hamiltonian(parameters)
    diagonal = builder.calculate_diagonal(parameters)
    assert np.allclose(np.diag(H), diagonal)

    x = np.random.default_rng(4).standard_normal(builder.fock_space.dimension)
    assert np.allclose(builder.matrix_vector_product(parameters, x, diagonal), H @ x, atol=1e-10)


def test_frozen_core_rejects_active_parameters(random_parameters):
    builder = FrozenCoreDOCI(FrozenFockSpace(4, 2, 1))
    with pytest.raises(ValueError):
        builder.calculate_diagonal(random_parameters(3))
    with pytest.raises(ValueError):
        FrozenCoreDOCI(FockSpace(4, 2))
    with pytest.raises(ValueError):
        FrozenCoreFCI(FrozenFockSpace(4, 2, 1))
