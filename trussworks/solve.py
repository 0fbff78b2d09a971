# trussworks/solve.py
"""
SOLVE: The Plane Truss Pipeline
===============================

One call runs the direct stiffness method end to end:

    1. Index nodes            DOFManager.from_nodes
    2. Assemble K and F       assemble_truss
    3. Partition DOFs         DOFManager.partition
    4. Solve Kff·Uf = Ff      solve_linear (LU)
    5. Post-process           reactions, member forces

Three mutually exclusive outcomes:

    TrussSolution       success
    FullyRestrained     every DOF is restrained, nothing to solve
    SingularSystemError raised for mechanisms / singular systems

`analyze` returns the same three outcomes as plain dicts for callers that
work with records (editor front-ends, JSON).
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional, Union

import numpy as np

from .assembly import assemble_truss
from .config import CONFIG, SolverConfig
from .kernel.dof import DOFManager
from .kernel.solve import SingularSystemError, check_restraint_count, solve_linear
from .model import Element, Load, Node, coerce_model
from .post import (
    ElementResult,
    Vector2,
    compute_reactions,
    element_results,
    nodal_displacements,
    nodal_reactions,
)
from .validate import check_size, validate_model

logger = logging.getLogger(__name__)

FULLY_RESTRAINED_MESSAGE = "structure fully restrained"
SINGULAR_MESSAGE = "unstable structure / singular matrix"


@dataclass(frozen=True)
class FullyRestrained:
    """Trivial case: no free DOFs, so every displacement is zero. Carries no results."""
    message: str = FULLY_RESTRAINED_MESSAGE

    def to_dict(self) -> Dict[str, Any]:
        return {'message': self.message}


@dataclass
class TrussSolution:
    """
    Result of a successful solve.

    displacements, reactions : node id → Vector2, in node order
    element_results : one ElementResult per input element, in input order

    The raw vectors and the DOF bookkeeping are kept for checks and plotting.
    """
    displacements: Dict[Hashable, Vector2]
    reactions: Dict[Hashable, Vector2]
    element_results: List[ElementResult]
    d: np.ndarray
    R: np.ndarray
    F: np.ndarray
    free_dofs: List[int] = field(default_factory=list)
    restrained_dofs: List[int] = field(default_factory=list)
    skipped_elements: List[Hashable] = field(default_factory=list)
    skipped_loads: List[int] = field(default_factory=list)

    def element(self, element_id: Hashable) -> ElementResult:
        for r in self.element_results:
            if r.id == element_id:
                return r
        raise KeyError(element_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'displacements': {k: v.to_dict() for k, v in self.displacements.items()},
            'reactions': {k: v.to_dict() for k, v in self.reactions.items()},
            'elementResults': [r.to_dict() for r in self.element_results],
        }


def solve_structure(
    nodes: List[Union[Node, Dict[str, Any]]],
    elements: List[Union[Element, Dict[str, Any]]],
    loads: List[Union[Load, Dict[str, Any]]],
    config: Optional[SolverConfig] = None,
) -> Union[TrussSolution, FullyRestrained]:
    """
    Solve a 2D pin-jointed truss.

    Args:
        nodes: Node objects or {id, x, y, rx, ry} records
        elements: Element objects or {id, n1, n2, E, A} records
        loads: Load objects or {nodeId, fx, fy} records
        config: SolverConfig, defaults to the global CONFIG

    Returns:
        TrussSolution, or FullyRestrained if no DOF is free

    Raises:
        SingularSystemError: mechanism, insufficient supports, singular Kff
        ValidationError: duplicate node ids, model too large, or (strict
            mode) invalid elements/loads
    """
    config = config or CONFIG
    nodes, elements, loads = coerce_model(nodes, elements, loads)

    dof = DOFManager.from_nodes(nodes)
    check_size(dof.n_nodes, len(elements), config)

    by_id = {n.id: n for n in nodes}
    if config.strict:
        validate_model(by_id, elements, loads)

    system = assemble_truss(dof, by_id, elements, loads)
    free, restrained = dof.partition(nodes)

    if not free:
        logger.info("All %d DOFs restrained, nothing to solve", len(restrained))
        return FullyRestrained()

    check_restraint_count(len(restrained), len(free), config.min_restrained_dofs)
    d = solve_linear(system.K, system.F, free, cond_limit=config.cond_limit)
    R = compute_reactions(system.K, d, system.F)

    solution = TrussSolution(
        displacements=nodal_displacements(dof, nodes, d),
        reactions=nodal_reactions(dof, nodes, R),
        element_results=element_results(dof, by_id, elements, d, system.skipped_indices),
        d=d,
        R=R,
        F=system.F,
        free_dofs=free,
        restrained_dofs=restrained,
        skipped_elements=system.skipped_elements,
        skipped_loads=system.skipped_loads,
    )
    logger.debug("Solved %d free DOFs, %d elements", len(free), len(elements))
    return solution


def analyze(nodes, elements, loads, config: Optional[SolverConfig] = None) -> Dict[str, Any]:
    """
    Record-in, record-out wrapper around solve_structure.

    Returns exactly one of:
        {"message": "structure fully restrained"}
        {"error": "unstable structure / singular matrix"}
        {"displacements": {...}, "reactions": {...}, "elementResults": [...]}

    ValidationError is not converted and propagates to the caller.
    """
    try:
        result = solve_structure(nodes, elements, loads, config)
    except SingularSystemError as e:
        logger.info("Solve failed: %s", e)
        return {'error': SINGULAR_MESSAGE}
    return result.to_dict()
