"""
Fermionic operators for occupation-number bitstrings.

This module provides the fundamental fermionic creation and annihilation
operators acting on occupation-number vectors represented as plain integers.
Bit ``p`` of the integer is the occupation of orbital ``p`` (least
significant bit is orbital 0). The operators account for the fermionic
anticommutation relations by tracking the phase factor coming from the
occupied orbitals with a lower index.

Functions
---------
phase_factor(state, p)
    Return (-1)^(number of occupied orbitals below p).
annihilate(state, p)
    Apply a_p to a bitstring.
create(state, p)
    Apply a_p† to a bitstring.
excite(state, annihilations, creations)
    Apply a string of annihilators followed by creators.
"""


def is_occupied(state: int, p: int) -> bool:
    return bool((state >> p) & 1)


def phase_factor(state: int, p: int) -> int:
    """Return (-1)^(# of occupied orbitals with index < p)."""
    mask = (1 << p) - 1
    return -1 if ((state & mask).bit_count() % 2) else 1


def annihilate(state: int, p: int):
    """
    Apply the fermionic annihilation operator ``a_p`` to ``|state>``.

    Returns
    -------
    (phase, new_state) or ``None``
        Returns ``None`` if orbital ``p`` is unoccupied.
    """
    if not is_occupied(state, p):
        return None
    return phase_factor(state, p), state & ~(1 << p)


def create(state: int, p: int):
    """
    Apply the fermionic creation operator ``a_p†`` to ``|state>``.

    Returns
    -------
    (phase, new_state) or ``None``
        Returns ``None`` if orbital ``p`` is already occupied.
    """
    if is_occupied(state, p):
        return None
    return phase_factor(state, p), state | (1 << p)


def excite(state: int, annihilations, creations):
    """
    Apply ``a†_{c_n} ... a†_{c_1} a_{a_m} ... a_{a_1}`` to ``|state>``.

    The annihilators are applied first, in the given order, followed by the
    creators in the given order.

    Parameters
    ----------
    state : int
        Bitstring the operator string acts on.
    annihilations : iterable of int
        Orbitals to annihilate, applied left to right.
    creations : iterable of int
        Orbitals to create, applied left to right.

    Returns
    -------
    (phase, new_state) or ``None``
        ``None`` if any operator in the string kills the state.
    """
    phase = 1
    for p in annihilations:
        res = annihilate(state, p)
        if res is None:
            return None
        ph, state = res
        phase *= ph
    for p in creations:
        res = create(state, p)
        if res is None:
            return None
        ph, state = res
        phase *= ph
    return phase, state
