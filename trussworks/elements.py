# trussworks/elements.py
"""
2D TRUSS ELEMENT: Stiffness Matrix from Direction Cosines
=========================================================

A truss bar has stiffness only along its axis. In LOCAL coordinates
(x' along the bar):

    k_local = (EA/L) × [ 1  -1 ]
                       [-1   1 ]

With direction cosines

    c = (x2 - x1) / L
    s = (y2 - y1) / L

the 4×4 stiffness in GLOBAL coordinates, DOF order [u1x, u1y, u2x, u2y], is:

    ke = (EA/L) × [  c²   cs   -c²  -cs ]
                  [  cs   s²   -cs  -s² ]
                  [ -c²  -cs    c²   cs ]
                  [ -cs  -s²    cs   s² ]

Sign convention for axial force: positive = tension (elongation),
negative = compression (shortening).
"""

import numpy as np
from typing import Dict, Hashable, Tuple

from .model import Node, Element


def element_geometry(nodes: Dict[Hashable, Node], element: Element) -> Tuple[float, float, float]:
    """
    Length and direction cosines of a member.

    Returns:
    --------
    (L, c, s)

    Raises:
    -------
    ValueError
        If the member has zero length (coincident end nodes)
    """
    n1 = nodes[element.n1]
    n2 = nodes[element.n2]
    dx = n2.x - n1.x
    dy = n2.y - n1.y
    L = float(np.hypot(dx, dy))
    if L <= 0.0:
        raise ValueError(
            f"Element {element.id} has zero length (nodes {element.n1} and {element.n2} "
            f"at same location: ({n1.x}, {n1.y}))"
        )
    return L, dx / L, dy / L


def truss2d_global_stiffness(nodes: Dict[Hashable, Node], element: Element) -> np.ndarray:
    """
    4×4 global stiffness matrix of a plane truss member.

    The matrix is symmetric with rank 1 (a single deformation mode: axial
    stretch). It has the block structure

        ke = (EA/L) × [ B  -B ]
                      [-B   B ]

    where B is the outer product of (c, s).
    """
    L, c, s = element_geometry(nodes, element)
    EA_L = element.E * element.A / L

    B = np.array([
        [c*c, c*s],
        [c*s, s*s],
    ], dtype=float)

    ke = np.zeros((4, 4), dtype=float)
    ke[0:2, 0:2] = B
    ke[0:2, 2:4] = -B
    ke[2:4, 0:2] = -B
    ke[2:4, 2:4] = B

    return EA_L * ke


def truss2d_elongation(
    nodes: Dict[Hashable, Node],
    element: Element,
    d_global: np.ndarray,
    dof,
) -> float:
    """
    Change in member length from global displacements (small displacements).

        δ = (u2x - u1x)·c + (u2y - u1y)·s
    """
    _, c, s = element_geometry(nodes, element)
    u1x, u1y, u2x, u2y = (d_global[i] for i in dof.element_dof_map([element.n1, element.n2]))
    return float((u2x - u1x) * c + (u2y - u1y) * s)


def truss2d_axial_force(
    nodes: Dict[Hashable, Node],
    element: Element,
    d_global: np.ndarray,
    dof,
) -> float:
    """
    Axial force N = (EA/L)·δ. Positive = tension, negative = compression.

    Example:
    --------
    >>> N = truss2d_axial_force(nodes, bar, d, dof)
    >>> print(f"N = {N:.2f} ({'tension' if N > 0 else 'compression'})")
    """
    L, _, _ = element_geometry(nodes, element)
    delta_L = truss2d_elongation(nodes, element, d_global, dof)
    return (element.E * element.A / L) * delta_L
