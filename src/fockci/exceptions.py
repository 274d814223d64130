"""
Exception types raised by fockci.

Invalid input is reported with the built-in ``ValueError`` and Fock-space
dimensions that do not fit the address range with ``OverflowError``. The
types below cover the conditions that have no built-in counterpart.
"""


class FockCIError(Exception):
    """Base class for fockci specific errors."""


class DavidsonNotConvergedError(FockCIError, RuntimeError):
    """The Davidson iterations reached the iteration limit without converging."""


class NotSolvedError(FockCIError, RuntimeError):
    """Results were requested from a solver that has not (successfully) solved."""
