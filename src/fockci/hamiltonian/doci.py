"""
Doubly occupied configuration interaction (DOCI).

In DOCI every spatial orbital is either empty or doubly occupied, so a
configuration is described by a single spin string (the alpha and beta
strings coincide) and the only couplings are pair excitations p -> q.
"""
from __future__ import annotations

import numpy as np
from line_profiler import profile

from ..fock_space import FockSpace, FockSpaceType, occupation_number_matrix
from .builder import HamiltonianBuilder
from .parameters import HamiltonianParameters


class DOCI(HamiltonianBuilder):
    """
    DOCI Hamiltonian builder.

    Parameters
    ----------
    fock_space : FockSpace
        The Fock space of electron pairs; ``N`` is the number of pairs.
    """

    def __init__(self, fock_space: FockSpace):
        if fock_space.fock_space_type is not FockSpaceType.FOCK_SPACE:
            raise ValueError(f"DOCI requires a FockSpace, got {fock_space!r}.")
        self._fock_space = fock_space
        self._couplings = None

    @property
    def fock_space(self) -> FockSpace:
        return self._fock_space

    @profile
    def pair_couplings(self) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """
        Enumerate all pair excitations towards a larger address.

        The table only depends on the Fock space, so it is computed once and
        cached.

        Returns
        -------
        I, J, p, q : ndarray
            Integer arrays such that the pair excitation ``p -> q`` turns the
            configuration with address ``I`` into the one with address
            ``J > I``.
        """
        if self._couplings is not None:
            return self._couplings

        fock_space = self._fock_space
        K = fock_space.K
        N = fock_space.N
        dim = fock_space.dimension

        count = fock_space.count_total_one_electron_couplings() // 2
        I_idx = np.empty(count, dtype=np.int64)
        J_idx = np.empty(count, dtype=np.int64)
        p_idx = np.empty(count, dtype=np.int64)
        q_idx = np.empty(count, dtype=np.int64)

        n = 0
        onv = fock_space.make_onv(0)
        for I in range(dim):
            for e1 in range(N):
                p = onv.occupation_indices[e1]

                # Remove the weight of the annihilated electron from the address.
                # Only creations above p (and thus J > I) are considered.
                address = I - fock_space.get_vertex_weight(p, e1 + 1)
                e2 = e1 + 1
                q = p + 1
                address, q, e2, _ = fock_space.shift_until_next_unoccupied_orbital(onv, address, q, e2)

                while q < K:
                    I_idx[n] = I
                    J_idx[n] = address + fock_space.get_vertex_weight(q, e2)
                    p_idx[n] = p
                    q_idx[n] = q
                    n += 1

                    q += 1
                    address, q, e2, _ = fock_space.shift_until_next_unoccupied_orbital(onv, address, q, e2)

            # skip the permutation past the last address
            if I < dim - 1:
                fock_space.set_next_onv(onv)

        if n != count:
            raise RuntimeError(f"Enumerated {n} DOCI couplings, expected {count}.")
        self._couplings = (I_idx, J_idx, p_idx, q_idx)
        return self._couplings

    def calculate_diagonal(self, parameters: HamiltonianParameters) -> np.ndarray:
        """
        Return the DOCI diagonal.

        For occupied pairs ``p`` and ``q``:
        ``sum_p (2 h_pp + g_pppp) + sum_{q<p} 2 (2 g_ppqq - g_pqqp)``.
        """
        self._check_parameters(parameters)
        h, g = parameters.h, parameters.g
        n = occupation_number_matrix(self._fock_space)

        one = 2.0 * np.diag(h) + np.einsum("pppp->p", g)
        coulomb = np.einsum("ppqq->pq", g)
        exchange = np.einsum("pqqp->pq", g)
        pair = 2.0 * coulomb - exchange
        np.fill_diagonal(pair, 0.0)

        return n @ one + np.einsum("ip,pq,iq->i", n, pair, n)

    def construct_hamiltonian(self, parameters: HamiltonianParameters) -> np.ndarray:
        self._check_parameters(parameters)
        dim = self._fock_space.dimension
        I, J, p, q = self.pair_couplings()
        values = parameters.g[p, q, p, q]

        H = np.zeros((dim, dim))
        np.add.at(H, (I, J), values)
        np.add.at(H, (J, I), values)
        H[np.diag_indices(dim)] = self.calculate_diagonal(parameters)
        return H

    @profile
    def matrix_vector_product(
        self, parameters: HamiltonianParameters, x: np.ndarray, diagonal: np.ndarray
    ) -> np.ndarray:
        self._check_parameters(parameters)
        x, diagonal = self._check_vectors(x, diagonal)
        dim = self._fock_space.dimension
        I, J, p, q = self.pair_couplings()
        values = parameters.g[p, q, p, q]

        matvec = diagonal * x
        matvec += np.bincount(I, weights=values * x[J], minlength=dim)
        matvec += np.bincount(J, weights=values * x[I], minlength=dim)
        return matvec
