# trussworks/assembly.py
"""Global K and F for a plane truss (uses kernel internally)."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Hashable, List

import numpy as np

from .elements import truss2d_global_stiffness
from .kernel.assemble import add_nodal_load, assemble_global_K
from .kernel.dof import DOFManager
from .model import Element, Load, Node
from .validate import element_issue, load_issue

logger = logging.getLogger(__name__)


@dataclass
class AssembledSystem:
    K: np.ndarray
    F: np.ndarray
    skipped_elements: List[Hashable] = field(default_factory=list)
    skipped_loads: List[int] = field(default_factory=list)
    # input positions of skipped elements; ids need not be unique
    skipped_indices: List[int] = field(default_factory=list)


def assemble_truss(
    dof: DOFManager,
    nodes: Dict[Hashable, Node],
    elements: List[Element],
    loads: List[Load],
) -> AssembledSystem:
    """
    Build K and F.

    Elements with a dangling node reference or zero length, and loads on
    unknown nodes, contribute nothing. They are logged and listed on the
    returned system so callers can report them.
    """
    ndof = dof.ndof()

    contributions = []
    skipped_elements = []
    skipped_indices = []
    for i, e in enumerate(elements):
        issue = element_issue(nodes, e)
        if issue is not None:
            logger.warning("Skipping element: %s", issue.message)
            skipped_elements.append(e.id)
            skipped_indices.append(i)
            continue
        contributions.append((dof.element_dof_map([e.n1, e.n2]),
                              truss2d_global_stiffness(nodes, e)))
    K = assemble_global_K(ndof, contributions)

    F = np.zeros(ndof, dtype=float)
    skipped_loads = []
    for i, load in enumerate(loads):
        issue = load_issue(nodes, i, load)
        if issue is not None:
            logger.warning("Skipping load: %s", issue.message)
            skipped_loads.append(i)
            continue
        add_nodal_load(F, dof.node_dofs(load.node_id), (load.fx, load.fy))

    logger.debug(
        "Assembled %d DOFs from %d elements (%d skipped), %d loads (%d skipped)",
        ndof, len(contributions), len(skipped_elements), len(loads), len(skipped_loads),
    )
    return AssembledSystem(K, F, skipped_elements, skipped_loads, skipped_indices)
