"""
Brute-force Hamiltonian on the complete spin-orbital Fock space.

Every one of the ``2^(2K)`` spin-orbital occupations is a basis state.
Spin orbitals use BLOCK ordering: [α0..α(K-1), β0..β(K-1)], so bit ``p`` of
a basis state is alpha orbital ``p`` and bit ``K + p`` is beta orbital
``p``. Only intended for small ``K``, to validate the configuration-space
builders.
"""
from __future__ import annotations

import numpy as np
from line_profiler import profile
from scipy.sparse import coo_matrix, csr_matrix, identity

from ..fermion_ops import annihilate
from ..fock_space import FockSpaceType
from .parameters import HamiltonianParameters


def spin_expand_one_electron(h: np.ndarray) -> np.ndarray:
    """
    Expand spatial integrals (K,K) into spin-orbital (2K,2K) in BLOCK order.
    """
    K = h.shape[0]
    h_spin = np.zeros((2 * K, 2 * K), dtype=h.dtype)
    # αα and ββ blocks
    h_spin[:K, :K] = h
    h_spin[K:, K:] = h
    return h_spin


def spin_expand_two_electron(g: np.ndarray) -> np.ndarray:
    """
    Expand spatial integrals in chemist order (pq|rs) into spin orbitals
    (BLOCK α…β).

    Nonzero only when spin(P) == spin(Q) and spin(R) == spin(S).
    """
    K = g.shape[0]
    G = np.zeros((2 * K,) * 4, dtype=g.dtype)
    alpha = slice(0, K)
    beta = slice(K, 2 * K)
    for first in (alpha, beta):
        for second in (alpha, beta):
            G[first, first, second, second] = g
    return G


def ladder_operators(M: int):
    """
    Annihilation and creation operator matrices for ``M`` spin orbitals.

    Returns
    -------
    tuple of lists
        ([a_p], [a_p†]) as sparse matrices on the ``2^M`` basis states.
    """
    dim = 1 << M
    a_ops = []
    adag_ops = []
    for p in range(M):
        rows, cols, data = [], [], []
        for ket in range(dim):
            res = annihilate(ket, p)
            if res:
                ph, bra = res
                rows.append(bra)
                cols.append(ket)
                data.append(ph)
        A = coo_matrix((data, (rows, cols)), shape=(dim, dim), dtype=np.float64).tocsr()
        a_ops.append(A)
        adag_ops.append(A.transpose().tocsr())
    return a_ops, adag_ops


@profile
def spin_orbital_hamiltonian(parameters: HamiltonianParameters, threshold: float = 1e-14) -> csr_matrix:
    """
    Build the Hamiltonian on all spin-orbital occupations.

    ``H = sum_PQ h_PQ a†_P a_Q + 1/2 sum_PQRS (PQ|RS) a†_P a†_R a_S a_Q
    + scalar``.

    Parameters
    ----------
    parameters : HamiltonianParameters
        Spatial-orbital integrals.
    threshold : float, optional
        Integrals with a smaller magnitude are skipped.

    Returns
    -------
    scipy.sparse.csr_matrix
        Matrix of shape ``(4^K, 4^K)``.
    """
    h_spin = spin_expand_one_electron(parameters.h)
    g_spin = spin_expand_two_electron(parameters.g)
    M = h_spin.shape[0]
    a, adag = ladder_operators(M)
    dim = 1 << M
    H = csr_matrix((dim, dim), dtype=np.float64)

    # 1-electron term
    for p, q in np.argwhere(abs(h_spin) > threshold):
        H += h_spin[p, q] * (adag[p] @ a[q])

    # 2-electron term
    for p, q, r, s in np.argwhere(abs(g_spin) > threshold):
        if p == r or q == s:
            continue
        H += 0.5 * g_spin[p, q, r, s] * (adag[p] @ adag[r] @ a[s] @ a[q])

    if parameters.scalar != 0.0:
        H += parameters.scalar * identity(dim, format="csr", dtype=np.float64)

    return H.tocsr()


def spin_orbital_indices(fock_space) -> np.ndarray:
    """
    Spin-orbital basis state of every configuration of a Fock space, in
    address order.

    A single-spin space (full or frozen) is read as the doubly occupied
    configurations ``(onv, onv)``; product and selected spaces give their
    ``(alpha, beta)`` pairs.
    """
    K = fock_space.K
    if fock_space.fock_space_type in (FockSpaceType.FOCK_SPACE, FockSpaceType.FROZEN_FOCK_SPACE):
        pairs = ((onv, onv) for onv in fock_space)
    else:
        pairs = iter(fock_space)
    return np.array(
        [alpha.representation | (beta.representation << K) for alpha, beta in pairs],
        dtype=np.int64,
    )


def fock_space_block(H: csr_matrix, fock_space) -> np.ndarray:
    """
    Restrict a spin-orbital Hamiltonian to the configurations of a Fock space.

    Rows and columns follow the addresses of ``fock_space``.
    """
    index = spin_orbital_indices(fock_space)
    return H[index][:, index].toarray()
