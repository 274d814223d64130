"""
Full configuration interaction (FCI) in the alpha x beta product Fock space.

The Hamiltonian is written in terms of the singlet excitation operators
E_pq = E^alpha_pq + E^beta_pq,

    H = sum_pq k_pq E_pq + 1/2 sum_pqrs g_pqrs E_pq E_rs,
    k_pq = h_pq - 1/2 sum_r g_prrq,

and every E^sigma_pq is a sparse matrix on its spin-string Fock space,
enumerated once with the incremental address shifts of
:class:`~fockci.fock_space.FockSpace`.
"""
from __future__ import annotations

import numpy as np
from line_profiler import profile
from scipy.sparse import coo_matrix

from ..fock_space import FockSpace, FockSpaceType, ProductFockSpace
from .builder import HamiltonianBuilder
from .parameters import HamiltonianParameters


@profile
def excitation_table(fock_space: FockSpace) -> tuple[np.ndarray, ...]:
    """
    Enumerate ``E_qp |I> = sign |J>`` for every string ``I`` of a Fock space.

    Includes the diagonal entries ``E_pp |I> = |I>`` for occupied ``p``.

    Parameters
    ----------
    fock_space : FockSpace
        Single-spin Fock space.

    Returns
    -------
    I, J, q, p, sign : ndarray
        Integer arrays; ``q`` is the created and ``p`` the annihilated orbital.
    """
    K = fock_space.K
    N = fock_space.N
    dim = fock_space.dimension

    count = dim * N * (K - N + 1)
    table = np.empty((5, count), dtype=np.int64)

    n = 0
    onv = fock_space.make_onv(0)
    for I in range(dim):
        for e1 in range(N):
            p = onv.occupation_indices[e1]
            table[:, n] = (I, I, p, p, 1)
            n += 1

            base = I - fock_space.get_vertex_weight(p, e1 + 1)

            # creation above p
            address, q, e2, sign = fock_space.shift_until_next_unoccupied_orbital(
                onv, base, p + 1, e1 + 1
            )
            while q < K:
                J = address + fock_space.get_vertex_weight(q, e2)
                table[:, n] = (I, J, q, p, sign)
                n += 1
                q += 1
                address, q, e2, sign = fock_space.shift_until_next_unoccupied_orbital(
                    onv, address, q, e2, sign
                )

            # creation below p: the electron created at q is preceded by e2 + 1 electrons
            address, q, e2, sign = fock_space.shift_until_previous_unoccupied_orbital(
                onv, base, p - 1, e1 - 1
            )
            while q >= 0:
                J = address + fock_space.get_vertex_weight(q, e2 + 2)
                table[:, n] = (I, J, q, p, sign)
                n += 1
                q -= 1
                address, q, e2, sign = fock_space.shift_until_previous_unoccupied_orbital(
                    onv, address, q, e2, sign
                )

        if I < dim - 1:
            fock_space.set_next_onv(onv)

    if n != count:
        raise RuntimeError(f"Enumerated {n} excitations, expected {count}.")
    return tuple(table)


def excitation_operators(fock_space: FockSpace):
    """
    Sparse representations of all ``E_pq`` on a spin-string Fock space.

    Returns
    -------
    gather : scipy.sparse.csr_matrix
        Shape ``(K*K*dim, dim)``; row block ``p*K + q`` is ``E_pq``, so
        ``gather @ C`` stacks ``E_pq C`` for every ``pq``.
    scatter : scipy.sparse.csr_matrix
        Shape ``(dim, K*K*dim)``; ``scatter @ W`` is ``sum_pq E_pq W_pq``
        for a stack ``W`` of ``K*K`` blocks.
    """
    K = fock_space.K
    dim = fock_space.dimension
    I, J, q, p, sign = excitation_table(fock_space)
    block = q * K + p
    data = sign.astype(np.float64)
    gather = coo_matrix((data, (block * dim + J, I)), shape=(K * K * dim, dim)).tocsr()
    scatter = coo_matrix((data, (J, block * dim + I)), shape=(dim, K * K * dim)).tocsr()
    return gather, scatter


class FCI(HamiltonianBuilder):
    """
    FCI Hamiltonian builder.

    Parameters
    ----------
    fock_space : ProductFockSpace
        The alpha x beta Fock space. Addresses are alpha-major.
    """

    def __init__(self, fock_space: ProductFockSpace):
        if fock_space.fock_space_type is not FockSpaceType.PRODUCT_FOCK_SPACE:
            raise ValueError(f"FCI requires a ProductFockSpace, got {fock_space!r}.")
        self._fock_space = fock_space
        self._operators = None
        self._diagonal_cache = None

    @property
    def fock_space(self) -> ProductFockSpace:
        return self._fock_space

    def _excitation_operators(self):
        if self._operators is None:
            alpha = excitation_operators(self._fock_space.fock_space_alpha)
            if self._fock_space.N_alpha == self._fock_space.N_beta:
                beta = alpha
            else:
                beta = excitation_operators(self._fock_space.fock_space_beta)
            self._operators = (alpha, beta)
        return self._operators

    @profile
    def sigma(self, parameters: HamiltonianParameters, X: np.ndarray) -> np.ndarray:
        """
        Apply the full Hamiltonian (diagonal included) to a block of vectors.

        Parameters
        ----------
        parameters : HamiltonianParameters
            Integrals in an orthonormal orbital basis.
        X : ndarray
            Shape ``(dim, m)``.

        Returns
        -------
        ndarray
            ``H @ X``, shape ``(dim, m)``.
        """
        self._check_parameters(parameters)
        K = self._fock_space.K
        dim_a, dim_b = self._fock_space.shape
        m = X.shape[1]
        (gather_a, scatter_a), (gather_b, scatter_b) = self._excitation_operators()

        C = np.asarray(X, dtype=np.float64).reshape(dim_a, dim_b, m)

        # D[r, s] = E_rs C
        D = (gather_a @ C.reshape(dim_a, dim_b * m)).reshape(K, K, dim_a, dim_b, m)
        C_b = C.transpose(1, 0, 2).reshape(dim_b, dim_a * m)
        D += (gather_b @ C_b).reshape(K, K, dim_b, dim_a, m).transpose(0, 1, 3, 2, 4)

        # W[p, q] = k_pq C + 1/2 sum_rs g_pqrs D[r, s]
        W = 0.5 * np.tensordot(parameters.g, D, axes=([2, 3], [0, 1]))
        W += parameters.k()[:, :, None, None, None] * C[None, None]
        del D

        # sigma = sum_pq E_pq W[p, q]
        sigma = (scatter_a @ W.reshape(K * K * dim_a, dim_b * m)).reshape(dim_a, dim_b, m)
        W_b = W.transpose(0, 1, 3, 2, 4).reshape(K * K * dim_b, dim_a * m)
        sigma += (scatter_b @ W_b).reshape(dim_b, dim_a, m).transpose(1, 0, 2)
        return sigma.reshape(dim_a * dim_b, m)

    def calculate_diagonal(self, parameters: HamiltonianParameters) -> np.ndarray:
        """
        Return the FCI diagonal in closed form.

        For alpha occupations ``A`` and beta occupations ``B``:
        ``sum_{p in A+B} h_pp + 1/2 sum_{p,q in A} (g_ppqq - g_pqqp)
        + 1/2 sum_{p,q in B} (g_ppqq - g_pqqp) + sum_{p in A, q in B} g_ppqq``.
        """
        self._check_parameters(parameters)
        h, g = parameters.h, parameters.g
        n_a, n_b = self._fock_space.occupation_numbers()

        coulomb = np.einsum("ppqq->pq", g)
        exchange = np.einsum("pqqp->pq", g)
        same_spin = coulomb - exchange

        diagonal_a = n_a @ np.diag(h) + 0.5 * np.einsum("ip,pq,iq->i", n_a, same_spin, n_a)
        diagonal_b = n_b @ np.diag(h) + 0.5 * np.einsum("ip,pq,iq->i", n_b, same_spin, n_b)
        mixed = n_a @ coulomb @ n_b.T

        return (diagonal_a[:, None] + diagonal_b[None, :] + mixed).ravel()

    def _own_diagonal(self, parameters: HamiltonianParameters) -> np.ndarray:
        if self._diagonal_cache is None or self._diagonal_cache[0] is not parameters:
            self._diagonal_cache = (parameters, self.calculate_diagonal(parameters))
        return self._diagonal_cache[1]

    @profile
    def construct_hamiltonian(self, parameters: HamiltonianParameters) -> np.ndarray:
        """
        Assemble the dense FCI matrix column block by column block.

        Each block of unit vectors goes through :meth:`sigma`, whose
        intermediates hold ``K*K`` copies of the block, so the block width is
        chosen to keep them at a fraction of the returned matrix.
        """
        self._check_parameters(parameters)
        K = self._fock_space.K
        dim = self._fock_space.dimension
        width = max(1, dim // (4 * K * K))

        H = np.empty((dim, dim))
        for start in range(0, dim, width):
            stop = min(start + width, dim)
            X = np.zeros((dim, stop - start))
            X[np.arange(start, stop), np.arange(stop - start)] = 1.0
            H[:, start:stop] = self.sigma(parameters, X)
        H[np.diag_indices(dim)] = self._own_diagonal(parameters)
        return H

    def matrix_vector_product(
        self, parameters: HamiltonianParameters, x: np.ndarray, diagonal: np.ndarray
    ) -> np.ndarray:
        """
        Return ``H x`` where the diagonal of ``H`` is replaced by ``diagonal``.
        """
        self._check_parameters(parameters)
        x, diagonal = self._check_vectors(x, diagonal)
        matvec = self.sigma(parameters, x[:, None])[:, 0]
        matvec += (diagonal - self._own_diagonal(parameters)) * x
        return matvec
