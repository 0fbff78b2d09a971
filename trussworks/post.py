# trussworks/post.py
"""
Post-processing: nodal displacements, support reactions, member forces,
equilibrium checks and summary metrics.
"""

from dataclasses import dataclass
from typing import Any, Dict, Hashable, Iterable, List, Tuple

import numpy as np

from .elements import truss2d_axial_force
from .kernel.dof import DOFManager
from .model import Element, Load, Node


@dataclass(frozen=True)
class Vector2:
    """A nodal quantity in global axes (displacement or reaction)."""
    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y}


@dataclass(frozen=True)
class ElementResult:
    """
    Axial result for one member.

    force : positive = tension, negative = compression
    stress : force / A
    """
    id: Hashable
    force: float
    stress: float

    @property
    def state(self) -> str:
        if self.force > 0:
            return "T"
        if self.force < 0:
            return "C"
        return "0"

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'force': self.force, 'stress': self.stress}


def compute_reactions(K: np.ndarray, d: np.ndarray, F: np.ndarray) -> np.ndarray:
    """
    R = K·d − F at every DOF.

    At free DOFs this is the equilibrium residual (≈ 0), at restrained DOFs it
    is the support reaction.
    """
    return K @ d - F


def nodal_displacements(
    dof: DOFManager,
    nodes: Iterable[Node],
    d_global: np.ndarray,
) -> Dict[Hashable, Vector2]:
    """Node id → displacement, in node order."""
    return {
        node.id: Vector2(float(d_global[dof.idx(node.id, 0)]),
                         float(d_global[dof.idx(node.id, 1)]))
        for node in nodes
    }


def nodal_reactions(
    dof: DOFManager,
    nodes: Iterable[Node],
    R: np.ndarray,
) -> Dict[Hashable, Vector2]:
    """
    Node id → support reaction, in node order.

    A component is reported only on a restrained axis. Free axes are exactly
    0.0: the residual there is round-off, not a physical reaction.
    """
    result = {}
    for node in nodes:
        rx = float(R[dof.idx(node.id, 0)]) if node.rx else 0.0
        ry = float(R[dof.idx(node.id, 1)]) if node.ry else 0.0
        result[node.id] = Vector2(rx, ry)
    return result


def element_results(
    dof: DOFManager,
    nodes: Dict[Hashable, Node],
    elements: Iterable[Element],
    d_global: np.ndarray,
    skipped: Iterable[int] = (),
) -> List[ElementResult]:
    """
    Axial force and stress per member, in input order.

    `skipped` holds the input positions of members left out of assembly.
    They are reported with zero force.
    """
    skipped = set(skipped)
    results = []
    for i, e in enumerate(elements):
        if i in skipped:
            results.append(ElementResult(e.id, 0.0, 0.0))
            continue
        N = truss2d_axial_force(nodes, e, d_global, dof)
        stress = N / e.A if e.A != 0 else float('nan')
        results.append(ElementResult(e.id, N, stress))
    return results


def equilibrium_residual(
    nodes: Dict[Hashable, Node],
    loads: Iterable[Load],
    reactions: Dict[Hashable, Vector2],
    about: Tuple[float, float] = (0.0, 0.0),
) -> Tuple[float, float, float]:
    """
    Net force and moment of applied loads plus reactions.

    Moments are taken about `about`, counterclockwise positive:

        M = Σ (x - x0)·Fy - (y - y0)·Fx

    For a solved structure all three values are ≈ 0. Loads on unknown nodes
    are ignored, as in assembly.

    Returns:
    --------
    (sum_fx, sum_fy, sum_m)
    """
    x0, y0 = about
    sum_fx = sum_fy = sum_m = 0.0

    def add(node: Node, fx: float, fy: float):
        nonlocal sum_fx, sum_fy, sum_m
        sum_fx += fx
        sum_fy += fy
        sum_m += (node.x - x0) * fy - (node.y - y0) * fx

    for load in loads:
        node = nodes.get(load.node_id)
        if node is not None:
            add(node, load.fx, load.fy)
    for node_id, r in reactions.items():
        add(nodes[node_id], r.x, r.y)

    return sum_fx, sum_fy, sum_m


def solution_summary(
    displacements: Dict[Hashable, Vector2],
    results: List[ElementResult],
) -> Dict[str, Any]:
    """
    Headline metrics of a solution.

    Returns:
    --------
    Dict with keys:
        - max_displacement: largest nodal displacement magnitude
        - max_displacement_node: node id where it occurs
        - max_tension: largest positive axial force (0 if none)
        - max_compression: largest compressive force magnitude (0 if none)
        - max_abs_stress: largest |stress|
    """
    max_disp = 0.0
    max_disp_node = None
    for node_id, u in displacements.items():
        mag = float(np.hypot(u.x, u.y))
        if max_disp_node is None or mag > max_disp:
            max_disp, max_disp_node = mag, node_id

    forces = [r.force for r in results]
    stresses = [abs(r.stress) for r in results if np.isfinite(r.stress)]

    return {
        'max_displacement': max_disp,
        'max_displacement_node': max_disp_node,
        'max_tension': max([f for f in forces if f > 0], default=0.0),
        'max_compression': abs(min([f for f in forces if f < 0], default=0.0)),
        'max_abs_stress': max(stresses, default=0.0),
    }
