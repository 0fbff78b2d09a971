# trussworks/model.py
"""
2D TRUSS MODEL DEFINITIONS: Node, Element, Load
===============================================

A 2D TRUSS is a plane structure where:
- Members carry only AXIAL forces (tension or compression)
- Joints are idealized as frictionless pins (no moment transfer)
- Each node has 2 DOFs: ux, uy (translations only)

The records below are what a caller (editor, REST client, preset library)
hands to the solver. They are immutable: one solve call never changes them.

Caller record format (see from_dict / to_dict):

    node     {"id": 1, "x": 0.0, "y": 0.0, "rx": 1, "ry": 1}
    element  {"id": 1, "n1": 1, "n2": 2, "E": 210e6, "A": 10.0}
    load     {"nodeId": 3, "fx": 0.0, "fy": -10.0}
"""

from dataclasses import dataclass
from typing import Any, Dict, Hashable, Iterable, List


@dataclass(frozen=True)
class Node:
    """
    A joint in the plane.

    Parameters:
    -----------
    id : Hashable
        Unique key for this node within a solve call

    x, y : float
        Position in global coordinates (length units)

    rx, ry : bool
        Restraint flags, one per axis. True = displacement fixed at zero.
        - rx=ry=False: free joint
        - rx=ry=True: pinned support
        - rx=False, ry=True: roller (vertical restraint only)

    Examples:
    ---------
    >>> Node(1, 0.0, 0.0, rx=True, ry=True)   # pin
    >>> Node(2, 4.0, 0.0, ry=True)            # roller
    """
    id: Hashable
    x: float
    y: float
    rx: bool = False
    ry: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Node":
        return cls(
            id=data['id'],
            x=float(data['x']),
            y=float(data['y']),
            rx=bool(data.get('rx', False)),
            ry=bool(data.get('ry', False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'x': self.x, 'y': self.y,
                'rx': int(self.rx), 'ry': int(self.ry)}


@dataclass(frozen=True)
class Element:
    """
    A two-force (axial-only) member between nodes n1 and n2.

    Parameters:
    -----------
    id : Hashable
        Identifier reported back in the element results

    n1, n2 : Hashable
        Node ids of the member ends. Direction n1 → n2 fixes the sign of the
        direction cosines but not the stiffness or the axial force.

    E : float
        Elastic modulus (force / length²)

    A : float
        Cross-sectional area (length²). Axial stiffness is k = EA/L.
    """
    id: Hashable
    n1: Hashable
    n2: Hashable
    E: float
    A: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Element":
        return cls(
            id=data['id'],
            n1=data['n1'],
            n2=data['n2'],
            E=float(data['E']),
            A=float(data['A']),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'n1': self.n1, 'n2': self.n2, 'E': self.E, 'A': self.A}


@dataclass(frozen=True)
class Load:
    """Concentrated force at a node, global axes."""
    node_id: Hashable
    fx: float = 0.0
    fy: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Load":
        return cls(
            node_id=data['nodeId'],
            fx=float(data.get('fx', 0.0)),
            fy=float(data.get('fy', 0.0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {'nodeId': self.node_id, 'fx': self.fx, 'fy': self.fy}


def merge_loads(loads: Iterable[Load]) -> List[Load]:
    """
    Combine loads acting on the same node into one load per node.

    Order follows the first appearance of each node id.
    """
    merged: Dict[Hashable, Load] = {}
    for load in loads:
        prev = merged.get(load.node_id)
        if prev is None:
            merged[load.node_id] = load
        else:
            merged[load.node_id] = Load(load.node_id, prev.fx + load.fx, prev.fy + load.fy)
    return list(merged.values())


def _coerce(items, cls):
    return [item if isinstance(item, cls) else cls.from_dict(item) for item in items]


def coerce_model(nodes, elements, loads):
    """
    Accept dataclasses or caller record dicts, return dataclass lists.
    """
    return _coerce(nodes, Node), _coerce(elements, Element), _coerce(loads, Load)
