# trussworks/presets.py
"""
PRESETS: A Small Library of Classic Plane Trusses
=================================================

Ready-made models for demos, tests and the REST API:

    triangle    3 nodes, 3 bars, apex load         (ideal starting point)
    warren      7 nodes, 11 bars                   (classic bridge)
    pratt       10 nodes, 17 bars                  (industrial truss)
    cantilever  6 nodes, 9 bars, two fixed nodes   (wall-mounted bracket)

Each preset is stored with 0-based node references. build_preset assigns
1-based ids (nodes and elements), takes E from the unit system and uses the
configured default area for every member.

    nodes, elements, loads = build_preset('warren', 'SI_kN_m')
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple, Union

from .config import CONFIG, DEFAULT_UNITS, UnitSystem, get_unit_system
from .model import Element, Load, Node


@dataclass(frozen=True)
class Preset:
    """
    A preset truss layout.

    nodes : (x, y, rx, ry) per node
    elements : (i, j) 0-based node positions per bar
    loads : (i, fx, fy) 0-based node position per load
    """
    key: str
    name: str
    description: str
    nodes: Tuple[Tuple[float, float, int, int], ...]
    elements: Tuple[Tuple[int, int], ...]
    loads: Tuple[Tuple[int, float, float], ...]


PRESETS: Dict[str, Preset] = {
    'triangle': Preset(
        key='triangle',
        name='Simple triangle',
        description='Ideal starting point',
        nodes=(
            (0, 0, 1, 1),
            (4, 0, 0, 1),
            (2, 3, 0, 0),
        ),
        elements=((0, 1), (1, 2), (2, 0)),
        loads=((2, 0, -10),),
    ),
    'warren': Preset(
        key='warren',
        name='Warren',
        description='Classic bridge',
        nodes=(
            (0, 0, 1, 1),
            (2, 0, 0, 0),
            (4, 0, 0, 0),
            (6, 0, 0, 1),
            (1, 1.5, 0, 0),
            (3, 1.5, 0, 0),
            (5, 1.5, 0, 0),
        ),
        elements=((0, 1), (1, 2), (2, 3), (4, 5), (5, 6), (0, 4), (4, 1),
                  (1, 5), (5, 2), (2, 6), (6, 3)),
        loads=((5, 0, -10),),
    ),
    'pratt': Preset(
        key='pratt',
        name='Pratt',
        description='Industrial truss',
        nodes=(
            (0, 0, 1, 1),
            (2, 0, 0, 0),
            (4, 0, 0, 0),
            (6, 0, 0, 0),
            (8, 0, 0, 1),
            (0, 2, 0, 0),
            (2, 2, 0, 0),
            (4, 2, 0, 0),
            (6, 2, 0, 0),
            (8, 2, 0, 0),
        ),
        elements=((0, 1), (1, 2), (2, 3), (3, 4), (5, 6), (6, 7), (7, 8), (8, 9),
                  (0, 5), (1, 6), (2, 7), (3, 8), (4, 9),
                  (5, 1), (6, 2), (7, 3), (8, 4)),
        loads=((7, 0, -15),),
    ),
    'cantilever': Preset(
        key='cantilever',
        name='Cantilever',
        description='Bracket fixed to a wall',
        nodes=(
            (0, 0, 1, 1),
            (0, 2, 1, 1),
            (3, 0, 0, 0),
            (3, 2, 0, 0),
            (6, 0, 0, 0),
            (6, 2, 0, 0),
        ),
        elements=((0, 2), (2, 4), (1, 3), (3, 5), (0, 1), (2, 3), (4, 5), (1, 2), (3, 4)),
        loads=((4, 0, -10), (5, 0, -10)),
    ),
}


def get_preset(key: str) -> Preset:
    try:
        return PRESETS[key]
    except KeyError:
        raise KeyError(f"Unknown preset '{key}'. Available: {', '.join(PRESETS)}") from None


def build_preset(
    key: str,
    units: Union[str, UnitSystem] = DEFAULT_UNITS,
    A: float = None,
) -> Tuple[List[Node], List[Element], List[Load]]:
    """
    Instantiate a preset as solver inputs.

    Args:
        key: Preset key ('triangle', 'warren', 'pratt', 'cantilever')
        units: Unit system key or UnitSystem; sets E of every member
        A: Member area, defaults to CONFIG.default_area

    Returns:
        (nodes, elements, loads) with 1-based node and element ids
    """
    preset = get_preset(key)
    if isinstance(units, str):
        units = get_unit_system(units)
    if A is None:
        A = CONFIG.default_area

    nodes = [
        Node(id=i + 1, x=float(x), y=float(y), rx=bool(rx), ry=bool(ry))
        for i, (x, y, rx, ry) in enumerate(preset.nodes)
    ]
    elements = [
        Element(id=k + 1, n1=i + 1, n2=j + 1, E=units.E, A=A)
        for k, (i, j) in enumerate(preset.elements)
    ]
    loads = [Load(node_id=i + 1, fx=float(fx), fy=float(fy)) for i, fx, fy in preset.loads]
    return nodes, elements, loads
