import numpy as np
import pytest

from fockci import CISolver, NotSolvedError
from fockci.fock_space import FockSpace, ProductFockSpace
from fockci.hamiltonian import DOCI, FCI
from fockci.solvers import DenseSolverOptions, SparseSolverOptions


def _lowest(parameters, builder, r=1):
    return np.linalg.eigvalsh(builder.construct_hamiltonian(parameters))[:r]


def test_dense_sparse_and_davidson_agree(random_parameters):
    parameters = random_parameters(4, seed=30, scalar=2.0)
    builder = FCI(ProductFockSpace(4, 2, 2))
    expected = _lowest(parameters, builder)[0] + parameters.scalar

    for options in (DenseSolverOptions(), SparseSolverOptions(), None):
        solver = CISolver(builder, parameters)
        solver.solve(options)
        assert np.isclose(solver.energies[0], expected, atol=1e-8)


def test_several_eigenpairs_with_default_davidson_guess(random_parameters):
    parameters = random_parameters(4, seed=31)
    builder = FCI(ProductFockSpace(4, 2, 1))
    solver = CISolver(builder, parameters)

    options = solver.default_davidson_options(3, collapsed_subspace_dimension=4)
    assert options.initial_guess.shape == (builder.fock_space.dimension, 3)
    assert np.allclose(options.initial_guess.sum(axis=0), 1.0)

    solver.solve(options)
    assert np.allclose(solver.energies, _lowest(parameters, builder, 3), atol=1e-8)
    assert solver.get_eigenpair(2).eigenvalue == solver.eigenpairs[2].eigenvalue


def test_hartree_fock_guess_for_one_eigenpair(random_parameters):
    solver = CISolver(DOCI(FockSpace(4, 2)), random_parameters(4))
    guess = solver.default_davidson_options().initial_guess
    assert guess.shape == (6,)
    assert guess[0] == 1.0 and guess.sum() == 1.0


def test_results_before_solve_raise(random_parameters):
    solver = CISolver(DOCI(FockSpace(4, 2)), random_parameters(4))
    with pytest.raises(NotSolvedError):
        solver.energies
    with pytest.raises(NotSolvedError):
        solver.get_eigenpair()


def test_mismatched_orbitals_raise(random_parameters):
    with pytest.raises(ValueError):
        CISolver(DOCI(FockSpace(4, 2)), random_parameters(5))


def test_unknown_options_raise(random_parameters):
    solver = CISolver(DOCI(FockSpace(4, 2)), random_parameters(4))
    with pytest.raises(TypeError):
        solver.solve({"number_of_requested_eigenpairs": 1})
