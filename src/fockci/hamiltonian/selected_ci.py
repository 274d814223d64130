"""
Configuration interaction in an explicitly selected set of configurations.

Matrix elements follow the Slater-Condon rules for a spin-free
Hamiltonian in chemist notation,

    H = sum_pq h_pq E_pq + 1/2 sum_pqrs g_pqrs (E_pq E_rs - delta_qr E_ps),

evaluated on pairs of (alpha, beta) configurations with the fermionic
phases of :func:`fockci.fermion_ops.excite`.
"""
from __future__ import annotations

import numpy as np
from line_profiler import profile

from ..fermion_ops import excite
from ..fock_space import FockSpaceType, SelectedFockSpace
from .builder import HamiltonianBuilder
from .parameters import HamiltonianParameters


def _set_bits(bits: int) -> list[int]:
    orbitals = []
    while bits:
        lowest = bits & -bits
        orbitals.append(lowest.bit_length() - 1)
        bits ^= lowest
    return orbitals


def _single_excitation(h, g, source, target, same_spin_common, other_spin):
    """``<target| H |source>`` for one replacement within a spin string."""
    (p,) = _set_bits(source & ~target)
    (q,) = _set_bits(target & ~source)
    phase, _ = excite(source, [p], [q])

    value = h[q, p]
    for r in _set_bits(same_spin_common):
        value += g[q, p, r, r] - g[q, r, r, p]
    for r in _set_bits(other_spin):
        value += g[q, p, r, r]
    return phase * value


def _double_excitation(g, source, target):
    """``<target| H |source>`` for two replacements within a spin string."""
    p1, p2 = _set_bits(source & ~target)
    q1, q2 = _set_bits(target & ~source)
    phase, _ = excite(source, [p1, p2], [q2, q1])
    return phase * (g[q1, p1, q2, p2] - g[q1, p2, q2, p1])


def _mixed_excitation(g, source_alpha, target_alpha, source_beta, target_beta):
    """``<target| H |source>`` for one alpha and one beta replacement."""
    (p_a,) = _set_bits(source_alpha & ~target_alpha)
    (q_a,) = _set_bits(target_alpha & ~source_alpha)
    (p_b,) = _set_bits(source_beta & ~target_beta)
    (q_b,) = _set_bits(target_beta & ~source_beta)
    phase_a, _ = excite(source_alpha, [p_a], [q_a])
    phase_b, _ = excite(source_beta, [p_b], [q_b])
    return phase_a * phase_b * g[q_a, p_a, q_b, p_b]


class SelectedCI(HamiltonianBuilder):
    """
    Hamiltonian builder for a :class:`~fockci.fock_space.SelectedFockSpace`.

    The off-diagonal couplings depend on the integrals, so they are
    evaluated once per :class:`HamiltonianParameters` instance and reused
    by subsequent matrix-vector products with the same instance.
    """

    def __init__(self, fock_space: SelectedFockSpace):
        if fock_space.fock_space_type is not FockSpaceType.SELECTED_FOCK_SPACE:
            raise ValueError(f"SelectedCI requires a SelectedFockSpace, got {fock_space!r}.")
        self._fock_space = fock_space
        self._cache = None

    @property
    def fock_space(self) -> SelectedFockSpace:
        return self._fock_space

    def _representations(self):
        alphas = [c.alpha.representation for c in self._fock_space.configurations]
        betas = [c.beta.representation for c in self._fock_space.configurations]
        return alphas, betas

    @profile
    def couplings(self, parameters: HamiltonianParameters) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Non-zero off-diagonal elements of the upper triangle.

        Returns
        -------
        I, J, values : ndarray
            ``H[I, J] = H[J, I] = values`` with ``I < J``.
        """
        self._check_parameters(parameters)
        if self._cache is not None and self._cache[0] is parameters:
            return self._cache[1]

        h, g = parameters.h, parameters.g
        alphas, betas = self._representations()
        dim = len(alphas)

        I_idx, J_idx, values = [], [], []
        for I in range(dim):
            a_I, b_I = alphas[I], betas[I]
            for J in range(I + 1, dim):
                a_J, b_J = alphas[J], betas[J]
                n_alpha = (a_I ^ a_J).bit_count() // 2
                n_beta = (b_I ^ b_J).bit_count() // 2

                if n_alpha + n_beta > 2:
                    continue
                if n_alpha == 1 and n_beta == 0:
                    value = _single_excitation(h, g, a_I, a_J, a_I & a_J, b_I)
                elif n_alpha == 0 and n_beta == 1:
                    value = _single_excitation(h, g, b_I, b_J, b_I & b_J, a_I)
                elif n_alpha == 2:
                    value = _double_excitation(g, a_I, a_J)
                elif n_beta == 2:
                    value = _double_excitation(g, b_I, b_J)
                else:
                    value = _mixed_excitation(g, a_I, a_J, b_I, b_J)

                if value != 0.0:
                    I_idx.append(I)
                    J_idx.append(J)
                    values.append(value)

        result = (
            np.asarray(I_idx, dtype=np.int64),
            np.asarray(J_idx, dtype=np.int64),
            np.asarray(values, dtype=np.float64),
        )
        self._cache = (parameters, result)
        return result

    def calculate_diagonal(self, parameters: HamiltonianParameters) -> np.ndarray:
        self._check_parameters(parameters)
        h, g = parameters.h, parameters.g
        K = self._fock_space.K
        dim = self._fock_space.dimension

        n_a = np.zeros((dim, K))
        n_b = np.zeros((dim, K))
        for I, (alpha, beta) in enumerate(self._fock_space.configurations):
            n_a[I, alpha.occupation_indices] = 1.0
            n_b[I, beta.occupation_indices] = 1.0

        coulomb = np.einsum("ppqq->pq", g)
        same_spin = coulomb - np.einsum("pqqp->pq", g)
        return (
            (n_a + n_b) @ np.diag(h)
            + 0.5 * np.einsum("ip,pq,iq->i", n_a, same_spin, n_a)
            + 0.5 * np.einsum("ip,pq,iq->i", n_b, same_spin, n_b)
            + np.einsum("ip,pq,iq->i", n_a, coulomb, n_b)
        )

    def construct_hamiltonian(self, parameters: HamiltonianParameters) -> np.ndarray:
        dim = self._fock_space.dimension
        I, J, values = self.couplings(parameters)
        H = np.zeros((dim, dim))
        H[I, J] = values
        H[J, I] = values
        H[np.diag_indices(dim)] = self.calculate_diagonal(parameters)
        return H

    def matrix_vector_product(
        self, parameters: HamiltonianParameters, x: np.ndarray, diagonal: np.ndarray
    ) -> np.ndarray:
        self._check_parameters(parameters)
        x, diagonal = self._check_vectors(x, diagonal)
        dim = self._fock_space.dimension
        I, J, values = self.couplings(parameters)

        matvec = diagonal * x
        matvec += np.bincount(I, weights=values * x[J], minlength=dim)
        matvec += np.bincount(J, weights=values * x[I], minlength=dim)
        return matvec
