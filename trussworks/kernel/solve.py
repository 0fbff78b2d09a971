# trussworks/kernel/solve.py
"""Reduced linear solve with boundary conditions and mechanism detection."""

import logging

import numpy as np
import scipy.linalg
from scipy.linalg import LinAlgError
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


class SingularSystemError(RuntimeError):
    """Raised when the structure is unstable (mechanism) or ill-conditioned."""
    pass


def check_restraint_count(n_restrained: int, n_free: int, minimum: int = 3) -> None:
    """
    Pre-solve rigid-body check.

    A plane body has 3 rigid-body modes (2 translations, 1 rotation). With at
    least one free DOF and fewer than `minimum` restrained DOFs the structure
    can always move as a mechanism.
    """
    if n_free > 0 and n_restrained < minimum:
        raise SingularSystemError(
            f"Insufficient supports: {n_restrained} restrained DOF(s), "
            f"need at least {minimum} to prevent rigid-body motion."
        )


def solve_linear(
    K: np.ndarray,
    F: np.ndarray,
    free_dofs: Sequence[int],
    cond_limit: Optional[float] = 1e12
) -> np.ndarray:
    """
    Solve K·d = F with restrained DOFs held at zero, by partitioning.

    Only the free-free block is solved:

        Kff · Uf = Ff

    using an LU factorisation (no explicit inverse). Restrained DOFs stay
    exactly zero in the returned vector.

    Args:
        K: Global stiffness matrix (ndof x ndof)
        F: Global load vector (ndof,)
        free_dofs: Ordered free DOF indices (must be non-empty)
        cond_limit: Max condition number of Kff, None to skip the check

    Returns:
        d: Full displacement vector (ndof,)

    Raises:
        SingularSystemError: zero pivot, cond(Kff) > cond_limit, or
            non-finite solution
    """
    ndof = K.shape[0]
    free = np.asarray(free_dofs, dtype=int)
    if free.size == 0:
        raise ValueError("solve_linear needs at least one free DOF")

    Kff = K[np.ix_(free, free)]
    Ff = F[free]

    if cond_limit is not None:
        cond = np.linalg.cond(Kff)
        logger.debug("cond(Kff) = %.3e for %d free DOFs", cond, free.size)
        if not np.isfinite(cond) or cond > cond_limit:
            raise SingularSystemError(
                f"Unstable system (cond={cond:.2e}). Check supports. Need cond < {cond_limit:.0e}."
            )

    try:
        lu, piv = scipy.linalg.lu_factor(Kff)
    except (LinAlgError, ValueError) as e:
        raise SingularSystemError(f"Singular stiffness matrix: {e}") from e

    # U is the upper triangle of lu; an exactly zero pivot means Kff is singular
    zero_pivots = np.flatnonzero(np.diag(lu) == 0.0)
    if zero_pivots.size:
        raise SingularSystemError(
            f"Singular stiffness matrix: zero pivot at free DOF position {zero_pivots[0]}"
        )

    Uf = scipy.linalg.lu_solve((lu, piv), Ff)

    if not np.all(np.isfinite(Uf)):
        raise SingularSystemError("Singular stiffness matrix: non-finite displacements")

    d = np.zeros(ndof, dtype=float)
    d[free] = Uf
    return d
