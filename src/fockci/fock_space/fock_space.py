"""
The full Fock space of N electrons in K orbitals and its addressing scheme.

ONVs and addresses are linked through the vertex weights of the weighted
lattice (arithmetic triangle) of Helgaker, Jørgensen and Olsen, *Molecular
Electronic-Structure Theory* (2000), section 11.8. The address of an ONV is
the sum of the vertex weights along its path through the lattice, which
orders the ONVs by the numeric value of their representation.
"""
from __future__ import annotations

import math

import numpy as np

from ..onv import ONV
from .base import BaseFockSpace, FockSpaceType

# Addresses are used as numpy indices.
ADDRESS_LIMIT = int(np.iinfo(np.int64).max)


class FockSpace(BaseFockSpace):
    """
    The full Fock space for ``K`` orbitals and ``N`` electrons.

    Parameters
    ----------
    K : int
        Number of orbitals.
    N : int
        Number of electrons.

    Raises
    ------
    ValueError
        If ``N < 0`` or ``N > K``.
    OverflowError
        If ``C(K, N)`` does not fit in the address range.

    Examples
    --------
    >>> fock_space = FockSpace(4, 2)
    >>> fock_space.dimension
    6
    >>> bin(fock_space.calculate_representation(0))
    '0b11'
    """

    fock_space_type = FockSpaceType.FOCK_SPACE

    def __init__(self, K: int, N: int):
        super().__init__(K)
        self.N = N
        self._dimension = self.calculate_dimension(K, N)

        # (K+1) x (N+1) zero matrix, e.g. for K=5, N=2 the final table is
        #   [ 1 0  0 ]
        #   [ 1 1  0 ]
        #   [ 1 2  1 ]
        #   [ 1 3  3 ]
        #   [ 0 4  6 ]
        #   [ 0 0 10 ]
        weights = np.zeros((K + 1, N + 1), dtype=np.int64)

        # The reverse-lexically largest string leaves the first K-N orbitals
        # empty, i.e. makes K-N vertical moves from (0, 0).
        weights[: K - N + 1, 0] = 1

        # W(p, m) = W(p-1, m) + W(p-1, m-1)
        for m in range(1, N + 1):
            for p in range(m, K - N + m + 1):
                weights[p, m] = weights[p - 1, m] + weights[p - 1, m - 1]

        weights.flags.writeable = False
        self.vertex_weights = weights
        # plain ints for the traversal loops
        self._weights = weights.tolist()

    def __repr__(self):
        return f"FockSpace(K={self.K}, N={self.N})"

    @property
    def dimension(self) -> int:
        return self._dimension

    @staticmethod
    def calculate_dimension(K: int, N: int) -> int:
        """
        Return the dimension ``C(K, N)`` of the Fock space.

        Raises
        ------
        ValueError
            If ``K`` or ``N`` is negative or ``N > K``.
        OverflowError
            If the binomial coefficient exceeds the address range.
        """
        if K < 0 or N < 0:
            raise ValueError(f"K and N must be non-negative, got K={K}, N={N}.")
        if N > K:
            raise ValueError(f"Cannot place {N} electrons in {K} orbitals.")
        dimension = math.comb(K, N)
        if dimension > ADDRESS_LIMIT:
            raise OverflowError(
                f"The Fock space dimension C({K}, {N}) = {dimension} exceeds the address range."
            )
        return dimension

    def get_vertex_weight(self, p: int, m: int) -> int:
        return self._weights[p][m]

    def get_address(self, representation) -> int:
        """
        Return the address of an ONV (or of its representation).

        The ``i``-th set bit (1-based), found at orbital ``p``, contributes
        ``W(p, i)`` to the address.
        """
        if isinstance(representation, ONV):
            representation = representation.representation
        if representation < 0 or representation >> self.K or representation.bit_count() != self.N:
            raise ValueError(
                f"Representation {representation:#b} is not part of {self!r}."
            )
        address = 0
        electron_count = 0
        bits = representation
        while bits:
            lowest = bits & -bits
            p = lowest.bit_length() - 1
            electron_count += 1
            address += self._weights[p][electron_count]
            bits ^= lowest
        return address

    def calculate_representation(self, address: int) -> int:
        """
        Return the representation of the ONV with the given address.

        Walks the orbitals from ``K`` down to 1 and occupies an orbital
        whenever its vertex weight fits in the remaining address.
        """
        self._check_address(address)
        representation = 0
        m = self.N
        if m == 0:
            return representation
        for p in range(self.K, 0, -1):
            weight = self._weights[p - 1][m]
            if weight <= address:
                address -= weight
                representation |= 1 << (p - 1)
                m -= 1
                if m == 0:
                    break
        return representation

    @staticmethod
    def ulong_next_permutation(representation: int) -> int:
        """
        Return the next bit pattern with the same number of set bits.

        Examples
        --------
        >>> bin(FockSpace.ulong_next_permutation(0b011))
        '0b101'
        >>> bin(FockSpace.ulong_next_permutation(0b101))
        '0b110'
        """
        if representation <= 0:
            raise ValueError("The next permutation is only defined for a non-empty bit pattern.")
        # t gets the least significant 0 bits of representation set to 1
        t = representation | (representation - 1)
        trailing_zeros = (representation & -representation).bit_length() - 1
        # Set the most significant bit to change, clear the least significant
        # ones and add the necessary 1 bits.
        return (t + 1) | (((~t & (t + 1)) - 1) >> (trailing_zeros + 1))

    def make_onv(self, address: int) -> ONV:
        return ONV(self.K, self.N, self.calculate_representation(address))

    def set_next_onv(self, onv: ONV):
        """Advance ``onv`` in place to the ONV with the next address."""
        onv.set_representation(self.ulong_next_permutation(onv.representation))

    def onvs(self):
        """Generate fresh ONVs in address order."""
        return iter(self)

    def __iter__(self):
        representation = self.calculate_representation(0)
        for address in range(self._dimension):
            yield ONV(self.K, self.N, representation)
            if address < self._dimension - 1:
                representation = self.ulong_next_permutation(representation)

    def shift_until_next_unoccupied_orbital(
        self, onv: ONV, address: int, q: int, e: int, sign: int = 1, annihilated: int = 1
    ) -> tuple[int, int, int, int]:
        """
        Move the orbital cursor upwards past the occupied orbitals of ``onv``.

        Every occupied orbital ``q`` that is crossed belongs to electron
        ``e``, whose vertex weight has to be replaced by that of a path with
        ``annihilated`` fewer electrons.

        Parameters
        ----------
        onv : ONV
            The (unmodified) ONV that is being traversed.
        address : int
            Partial address, updated with the weight differences.
        q : int
            Orbital cursor.
        e : int
            Electron cursor (0-based index into ``onv.occupation_indices``).
        sign : int, optional
            Sign that is flipped once per crossed electron.
        annihilated : int, optional
            Number of electrons previously annihilated below ``q``.

        Returns
        -------
        tuple of int
            The updated ``(address, q, e, sign)``.
        """
        occupied = onv.occupation_indices
        weights = self._weights
        while e < self.N and q == occupied[e]:
            # +1 because electron e is the (e+1)-th in the path
            address += weights[q][e + 1 - annihilated] - weights[q][e + 1]
            e += 1
            q += 1
            sign = -sign
        return address, q, e, sign

    def shift_until_previous_unoccupied_orbital(
        self, onv: ONV, address: int, q: int, e: int, sign: int = 1, created: int = 1
    ) -> tuple[int, int, int, int]:
        """
        Move the orbital cursor downwards past the occupied orbitals of ``onv``.

        Every occupied orbital ``q`` that is crossed belongs to electron
        ``e``, whose vertex weight has to be replaced by that of a path with
        ``created`` more electrons. See
        :meth:`shift_until_next_unoccupied_orbital` for the parameters.
        """
        occupied = onv.occupation_indices
        weights = self._weights
        while e >= 0 and q == occupied[e]:
            address += weights[q][e + 1 + created] - weights[q][e + 1]
            e -= 1
            q -= 1
            sign = -sign
        return address, q, e, sign

    def count_one_electron_couplings(self, onv: ONV) -> int:
        """
        Number of ONVs with a larger address that couple with ``onv``
        through a one-electron operator.
        """
        V = self.K - self.N
        return sum(V + e - p for e, p in enumerate(onv.occupation_indices))

    def count_two_electron_couplings(self, onv: ONV) -> int:
        """
        Number of ONVs with a larger address that couple with ``onv``
        through a two-electron operator (single and double replacements).

        A double replacement ``{p1 < p2} -> {q1, q2}`` raises the address if
        and only if ``max(q1, q2) > p2``. With ``u`` virtual orbitals above
        ``p2`` there are ``(V - u) * u + C(u, 2)`` such virtual pairs.
        """
        V = self.K - self.N
        occupied = onv.occupation_indices
        count = self.count_one_electron_couplings(onv)
        for e2 in range(1, self.N):
            u = V + e2 - occupied[e2]
            count += e2 * ((V - u) * u + math.comb(u, 2))
        return count

    def count_total_one_electron_couplings(self) -> int:
        """Number of non-zero off-diagonal one-electron couplings (both triangles)."""
        return (self.K - self.N) * self.N * self._dimension

    def count_total_two_electron_couplings(self) -> int:
        """Number of non-zero off-diagonal two-electron couplings (both triangles)."""
        V = self.K - self.N
        doubles = math.comb(V, 2) * self.N * (self.N - 1) * self._dimension // 2
        return doubles + self.count_total_one_electron_couplings()
