# trussworks/kernel/assemble.py
"""
ASSEMBLY: Global Matrix Scatter-Add
===================================

Assembly doesn't care what the element is. It needs:
- Total number of DOFs
- For each element: its DOF map and its stiffness matrix (global axes)

and performs, for every element,

    K[dof_map[a], dof_map[b]] += ke[a, b]

Entries are ACCUMULATED, never overwritten: a node shared by several members
receives a contribution from each of them.

USAGE:
------
    contributions = [(dof.element_dof_map([e.n1, e.n2]),
                      truss2d_global_stiffness(nodes, e)) for e in elements]
    K = assemble_global_K(dof.ndof(), contributions)
"""

import numpy as np
from typing import List, Sequence, Tuple


def assemble_global_K(
    ndof: int,
    contributions: List[Tuple[List[int], np.ndarray]]
) -> np.ndarray:
    """
    Assemble the global stiffness matrix from element contributions.

    Parameters:
    -----------
    ndof : int
        Total number of DOFs (2 × n_nodes for a plane truss)

    contributions : List[Tuple[List[int], np.ndarray]]
        (dof_map, ke) per element. ke must be square with len(dof_map) rows.

    Returns:
    --------
    np.ndarray
        Global stiffness matrix K, shape (ndof, ndof). Symmetric positive
        semi-definite; becomes positive definite once enough DOFs are fixed.
    """
    K = np.zeros((ndof, ndof), dtype=float)

    for dof_map, ke in contributions:
        n_element_dofs = len(dof_map)

        assert ke.shape == (n_element_dofs, n_element_dofs), \
            f"Element ke shape {ke.shape} doesn't match dof_map length {n_element_dofs}"

        for a in range(n_element_dofs):
            ia = dof_map[a]
            for b in range(n_element_dofs):
                ib = dof_map[b]
                K[ia, ib] += ke[a, b]

    return K


def add_nodal_load(
    F: np.ndarray,
    node_dofs: Sequence[int],
    load_vector: Sequence[float],
) -> None:
    """
    Add a point load to the global load vector (in-place).

    Example:
    --------
    >>> F = np.zeros(6)  # 3 nodes, 2 DOF each
    >>> add_nodal_load(F, [2, 3], [0.0, -10.0])
    >>> # Now F[3] = -10 (downward force at node index 1)
    """
    for ia, val in zip(node_dofs, load_vector):
        F[ia] += val
