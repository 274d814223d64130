"""
Occupation-number vectors (ONVs).

An ONV is a string of creation operators acting on the vacuum, e.g. for three
electrons in four spatial orbitals

    a_0† a_1† a_2† |vac> = |0111>

Bitstrings are read from right to left (reverse lexical notation): the least
significant bit is orbital 0, so the example above is represented by the
integer ``0b0111 == 7``.
"""
from __future__ import annotations

from .fermion_ops import phase_factor


class ONV:
    """
    A fixed-width occupation-number vector.

    Parameters
    ----------
    K : int
        Number of (spatial) orbitals.
    N : int
        Number of electrons.
    representation : int
        Bit pattern, bit ``p`` set if orbital ``p`` is occupied.

    Attributes
    ----------
    occupation_indices : list of int
        Orbital index of each electron in ascending order. It is only kept in
        sync with ``representation`` by :meth:`update_occupation_indices`;
        :meth:`annihilate` and :meth:`create` do not resync it so that hot
        loops can apply several bit edits and resync once.
    """

    __slots__ = ("K", "N", "representation", "occupation_indices")

    def __init__(self, K: int, N: int, representation: int):
        if representation < 0 or representation >> K:
            raise ValueError(
                f"Representation {representation:#b} does not fit in {K} orbitals."
            )
        if representation.bit_count() != N:
            raise ValueError(
                f"Representation {representation:#b} does not hold {N} electrons."
            )
        self.K = K
        self.N = N
        self.representation = representation
        self.occupation_indices: list[int] = []
        self.update_occupation_indices()

    def __repr__(self):
        return f"ONV(K={self.K}, N={self.N}, representation={self})"

    def __str__(self):
        return format(self.representation, f"0{self.K}b") if self.K else ""

    def __eq__(self, other):
        if not isinstance(other, ONV):
            return NotImplemented
        return (self.K, self.N, self.representation) == (other.K, other.N, other.representation)

    def __hash__(self):
        return hash((self.K, self.N, self.representation))

    def copy(self) -> ONV:
        return ONV(self.K, self.N, self.representation)

    def set_representation(self, representation: int):
        """Replace the bit pattern and resync the occupation indices."""
        self.representation = representation
        self.update_occupation_indices()

    def update_occupation_indices(self):
        """Extract the positions of the set bits into ``occupation_indices``."""
        indices = []
        bits = self.representation
        while bits:
            lowest = bits & -bits
            indices.append(lowest.bit_length() - 1)
            bits ^= lowest
        self.occupation_indices = indices

    def get_occupied_index(self, electron: int) -> int:
        return self.occupation_indices[electron]

    def is_occupied(self, p: int) -> bool:
        """Return whether orbital ``p`` is occupied."""
        if not 0 <= p < self.K:
            raise ValueError(f"Orbital index {p} is out of range for {self.K} orbitals.")
        return bool((self.representation >> p) & 1)

    def operator_phase_factor(self, p: int) -> int:
        """
        Phase factor (+1 or -1) of applying a ladder operator on orbital ``p``.

        If there are ``m`` occupied orbitals below ``p`` the phase factor is
        ``(-1)^m``.
        """
        return phase_factor(self.representation, p)

    def annihilate(self, p: int) -> bool:
        """
        Annihilate orbital ``p`` in place.

        Returns ``False`` (state unchanged) if ``p`` is unoccupied. The
        occupation indices are not updated.
        """
        if not self.is_occupied(p):
            return False
        self.representation &= ~(1 << p)
        return True

    def create(self, p: int) -> bool:
        """
        Create an electron in orbital ``p`` in place.

        Returns ``False`` (state unchanged) if ``p`` is already occupied. The
        occupation indices are not updated.
        """
        if self.is_occupied(p):
            return False
        self.representation |= 1 << p
        return True

    def annihilate_with_phase(self, p: int, sign: int = 1) -> tuple[bool, int]:
        """
        Annihilate orbital ``p`` in place and track the fermionic phase.

        Parameters
        ----------
        p : int
            Orbital index.
        sign : int, optional
            Sign accumulated so far, by default +1.

        Returns
        -------
        tuple of (bool, int)
            Whether the annihilation was possible, and ``sign`` multiplied by
            the phase factor of the operator (``sign`` itself on failure).
        """
        if not self.is_occupied(p):
            return False, sign
        sign *= self.operator_phase_factor(p)
        self.representation &= ~(1 << p)
        return True, sign

    def create_with_phase(self, p: int, sign: int = 1) -> tuple[bool, int]:
        """
        Create an electron in orbital ``p`` in place and track the phase.

        See :meth:`annihilate_with_phase`.
        """
        if self.is_occupied(p):
            return False, sign
        sign *= self.operator_phase_factor(p)
        self.representation |= 1 << p
        return True, sign

    def slice(self, start: int, end: int) -> int:
        """
        Return the bits in ``[start, end)`` as an integer.

        Both indices count from the least significant bit, e.g.
        ``"010011".slice(1, 4)`` gives ``"001"``.
        """
        if not 0 <= start <= end <= self.K:
            raise ValueError(f"Invalid slice [{start}, {end}) for {self.K} orbitals.")
        return (self.representation >> start) & ((1 << (end - start)) - 1)
