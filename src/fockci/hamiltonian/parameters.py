"""
Hamiltonian parameters: the one- and two-electron integrals in an
orthonormal orbital basis.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class HamiltonianParameters:
    """
    Integrals defining a second-quantized electronic Hamiltonian.

    Fields:
      h: one-electron integrals, shape (K, K)
      g: two-electron integrals in chemist notation g[p,q,r,s] = (pq|rs),
         shape (K, K, K, K)
      scalar: constant energy (nuclear repulsion, core energy)

    Raises
    ------
    ValueError
        If ``h`` is not square or ``g`` does not have shape ``(K, K, K, K)``.
    """
    h: np.ndarray
    g: np.ndarray
    scalar: float = 0.0

    def __post_init__(self):
        h = np.array(self.h, dtype=np.float64)
        g = np.array(self.g, dtype=np.float64)
        if h.ndim != 2 or h.shape[0] != h.shape[1]:
            raise ValueError(f"The one-electron integrals must be a square matrix, got shape {h.shape}.")
        K = h.shape[0]
        if g.shape != (K, K, K, K):
            raise ValueError(
                f"The two-electron integrals must have shape {(K, K, K, K)}, got {g.shape}."
            )
        # builders cache results per instance
        h.flags.writeable = False
        g.flags.writeable = False
        object.__setattr__(self, "h", h)
        object.__setattr__(self, "g", g)
        object.__setattr__(self, "scalar", float(self.scalar))

    @property
    def K(self) -> int:
        """Number of orbitals."""
        return self.h.shape[0]

    def is_symmetric(self, atol: float = 1e-12) -> bool:
        """Check the Hermiticity of ``h`` and the 8-fold symmetry of ``g``."""
        g = self.g
        return bool(
            np.allclose(self.h, self.h.T, atol=atol)
            and np.allclose(g, g.transpose(1, 0, 2, 3), atol=atol)
            and np.allclose(g, g.transpose(0, 1, 3, 2), atol=atol)
            and np.allclose(g, g.transpose(2, 3, 0, 1), atol=atol)
        )

    def k(self) -> np.ndarray:
        """
        One-electron integrals corrected for the normal ordering of the
        two-electron operator, ``k_pq = h_pq - 1/2 sum_r g_prrq``.
        """
        return self.h - 0.5 * np.einsum("prrq->pq", self.g)

    def transform(self, C: np.ndarray) -> HamiltonianParameters:
        """Return the parameters in the rotated orbital basis ``C``."""
        C = np.asarray(C, dtype=np.float64)
        h = C.T @ self.h @ C
        g = np.einsum("pqrs,pi,qj,rk,sl->ijkl", self.g, C, C, C, C, optimize=True)
        return HamiltonianParameters(h, g, self.scalar)
