"""
Molecular integrals from PySCF.

The configuration-space builders only see :class:`HamiltonianParameters`;
everything that knows about molecules, basis sets and AO integrals lives
here and is handed to the caller as an integral provider.
"""
from __future__ import annotations

import logging
from typing import Protocol

import numpy as np
from line_profiler import profile
from pyscf import ao2mo, scf
from pyscf.tools import fcidump

from .parameters import HamiltonianParameters

logger = logging.getLogger(__name__)


class IntegralProvider(Protocol):
    """Anything that can express the Hamiltonian in a given orbital basis."""

    def hamiltonian_parameters(self, mo_coeff: np.ndarray) -> HamiltonianParameters:
        ...


def _check_mo_coeff(mo_coeff) -> np.ndarray:
    C = np.asarray(mo_coeff)
    if C.ndim != 2:
        raise ValueError(
            f"Expected restricted orbital coefficients of shape (nao, nmo), got {C.shape}."
        )
    return C


class PySCFIntegralProvider:
    """
    Integral provider backed by a PySCF molecule.

    The AO integrals are evaluated once, on construction, and transformed to
    any orbital basis on request.

    Parameters
    ----------
    mol : pyscf.gto.Mole
        Built molecule.
    """

    def __init__(self, mol):
        self.mol = mol
        self.hcore_ao = scf.hf.get_hcore(mol)
        self.eri_ao = mol.intor("int2e", aosym="s8")
        self.nuclear_repulsion = mol.energy_nuc()
        logger.debug("Evaluated AO integrals for %d basis functions", mol.nao_nr())

    @profile
    def hamiltonian_parameters(self, mo_coeff: np.ndarray) -> HamiltonianParameters:
        """
        Integrals in the orbital basis ``mo_coeff`` (columns are orbitals).

        Returns
        -------
        HamiltonianParameters
            ``h = C^T h_AO C``, ``g`` in chemist order ``(pq|rs)`` and the
            nuclear repulsion as scalar.
        """
        C = _check_mo_coeff(mo_coeff)
        nmo = C.shape[1]
        h = C.T @ self.hcore_ao @ C
        eri_mo_packed = ao2mo.full(self.eri_ao, C)  # packed (pq|rs), chemist
        g = ao2mo.restore(1, eri_mo_packed, nmo)  # (n,n,n,n)
        return HamiltonianParameters(h, g, self.nuclear_repulsion)


@profile
def hamiltonian_parameters_from_pyscf(mol, rhf) -> HamiltonianParameters:
    """
    Return the Hamiltonian parameters in the MO basis of a converged RHF
    calculation.

    Parameters
    ----------
    mol : pyscf.gto.Mole
        Molecule.
    rhf : scf.RHF
        Mean-field object with restricted ``mo_coeff``.
    """
    C = _check_mo_coeff(rhf.mo_coeff)
    nmo = C.shape[1]

    # 1e AO->MO
    h1_ao = rhf.get_hcore()
    h1 = C.T @ h1_ao @ C

    # 2e AO->MO, chemist order
    eri_mo_packed = ao2mo.full(mol, C)
    eri_mo = ao2mo.restore(1, eri_mo_packed, nmo)

    return HamiltonianParameters(h1, eri_mo, mol.energy_nuc())


def read_fcidump(path) -> tuple[HamiltonianParameters, tuple[int, int]]:
    """
    Read integrals from an FCIDUMP file.

    Returns
    -------
    parameters : HamiltonianParameters
        One- and two-electron integrals, with the core energy as scalar.
    nelec : tuple of int
        Number of alpha and beta electrons, from ``NELEC`` and ``MS2``.
    """
    data = fcidump.read(str(path))
    norb = data["NORB"]
    h1 = np.asarray(data["H1"]).reshape(norb, norb)
    g = ao2mo.restore(1, np.asarray(data["H2"]), norb)

    n_electrons = data["NELEC"]
    ms2 = data.get("MS2", 0)
    if (n_electrons + ms2) % 2:
        raise ValueError(f"NELEC={n_electrons} and MS2={ms2} are inconsistent.")
    nelec = ((n_electrons + ms2) // 2, (n_electrons - ms2) // 2)

    logger.info("Read FCIDUMP %s: %d orbitals, %s electrons", path, norb, nelec)
    return HamiltonianParameters(h1, g, data.get("ECORE", 0.0)), nelec
