"""
Eigenvalue/eigenvector pairs returned by the eigensolvers.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Eigenpair:
    eigenvalue: float
    eigenvector: np.ndarray

    def is_equal_to(self, other: Eigenpair, tolerance: float = 1e-08) -> bool:
        """
        Compare with another eigenpair.

        Eigenvectors are only defined up to a sign, so ``v`` and ``-v`` are
        considered equal.
        """
        if self.eigenvector.shape != other.eigenvector.shape:
            return False
        if abs(self.eigenvalue - other.eigenvalue) > tolerance:
            return False
        return bool(
            np.allclose(self.eigenvector, other.eigenvector, atol=tolerance)
            or np.allclose(self.eigenvector, -other.eigenvector, atol=tolerance)
        )
