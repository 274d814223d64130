"""
Check molecular orbital integrals give correct RHF energy.
"""
from .parameters import HamiltonianParameters
from .pyscf_glue import hamiltonian_parameters_from_pyscf


def rhf_energy_from_hamiltonian_parameters(parameters: HamiltonianParameters, nocc: int) -> float:
    """
    Closed-shell energy of the determinant that doubly occupies the lowest
    ``nocc`` orbitals, including the scalar.
    """
    h, g = parameters.h, parameters.g
    occ = range(nocc)
    e_one = 2.0 * sum(h[i, i] for i in occ)
    e_coul = sum(2.0 * g[i, i, j, j] for i in occ for j in occ)  # 2*(ii|jj)
    e_exch = sum(g[i, j, j, i] for i in occ for j in occ)  # (ij|ji)
    return e_one + (e_coul - e_exch) + parameters.scalar


def rhf_energy_from_mo_integrals(mol, rhf) -> float:
    """
    Compute RHF total energy directly from MO integrals. Assumes closed-shell
    (RHF) occupations: doubly-occupy the lowest nocc spatial MOs.
    """
    parameters = hamiltonian_parameters_from_pyscf(mol, rhf)
    nocc = rhf.mol.nelectron // 2
    return rhf_energy_from_hamiltonian_parameters(parameters, nocc)
