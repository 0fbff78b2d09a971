# trussworks/kernel/dof.py
"""
DOF MANAGER: Node Indexing and DOF Partitioning
===============================================

PURPOSE:
--------
This module handles the mapping from (node_id, local_dof) to global DOF indices
and the split of those DOFs into free and restrained sets.

Node ids are caller keys (ints, strings, anything hashable), so the manager
first maps every id to a contiguous 0-based index in the iteration order of the
node collection:

    nodes = [Node("A", ...), Node("B", ...), Node("C", ...)]
    index:   A → 0,  B → 1,  C → 2

With 2 DOFs per node (ux, uy) the global DOF of a node at index i is:

    ux → 2i
    uy → 2i + 1

The manager is built ONCE per solve call and handed to every later stage
(assembly, partition, post-processing) so they all agree on the numbering.

USAGE:
------
    dof = DOFManager.from_nodes(nodes)
    dof.idx("B", 1)                 # → 3
    dof.element_dof_map(["A", "C"]) # → [0, 1, 4, 5]
    free, restrained = dof.partition(nodes)
"""

from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, List, Tuple

from ..errors import ValidationError, ValidationIssue


@dataclass
class DOFManager:
    """
    Manages degree-of-freedom indexing for a plane truss.

    This is the bridge between "node 'B', y-displacement" and "global DOF index 3".

    Attributes:
    -----------
    dof_per_node : int
        Number of DOFs per node (2 for a plane truss: ux, uy)

    node_index : Dict[Hashable, int]
        Node id → 0-based node index, in node iteration order

    Examples:
    ---------
    >>> dof = DOFManager(dof_per_node=2, node_index={10: 0, 20: 1})
    >>> dof.idx(20, 0)
    2
    >>> dof.ndof()
    4
    """
    dof_per_node: int = 2
    node_index: Dict[Hashable, int] = field(default_factory=dict)

    @classmethod
    def from_nodes(cls, nodes: Iterable, dof_per_node: int = 2) -> "DOFManager":
        """
        Build the id → index map from a node collection.

        Raises:
        -------
        ValidationError
            If two nodes share the same id
        """
        node_index: Dict[Hashable, int] = {}
        issues = []
        for node in nodes:
            if node.id in node_index:
                issues.append(ValidationIssue(
                    'duplicate_node', node.id, f"Duplicate node id {node.id!r}"
                ))
                continue
            node_index[node.id] = len(node_index)
        if issues:
            raise ValidationError(issues)
        return cls(dof_per_node=dof_per_node, node_index=node_index)

    @property
    def n_nodes(self) -> int:
        return len(self.node_index)

    def index(self, node_id: Hashable) -> int:
        """0-based node index. KeyError for an unknown id."""
        return self.node_index[node_id]

    def idx(self, node_id: Hashable, local_dof: int) -> int:
        """
        Get the global DOF index for a node's local DOF.

        Parameters:
        -----------
        node_id : Hashable
            The caller's node id
        local_dof : int
            0 = ux, 1 = uy

        Returns:
        --------
        int
            Global DOF index in the system matrices
        """
        return self.dof_per_node * self.index(node_id) + local_dof

    def ndof(self) -> int:
        """Total DOFs (size of K)."""
        return self.dof_per_node * len(self.node_index)

    def node_dofs(self, node_id: Hashable) -> List[int]:
        base = self.dof_per_node * self.index(node_id)
        return list(range(base, base + self.dof_per_node))

    def element_dof_map(self, node_ids: List[Hashable]) -> List[int]:
        """
        Flattened global DOF indices for an element's nodes.

        >>> dof = DOFManager(2, {"A": 0, "B": 1, "C": 2})
        >>> dof.element_dof_map(["A", "C"])
        [0, 1, 4, 5]
        """
        result = []
        for node_id in node_ids:
            result.extend(self.node_dofs(node_id))
        return result

    def partition(self, nodes: Iterable) -> Tuple[List[int], List[int]]:
        """
        Split DOFs into free and restrained lists.

        Nodes are visited in the same order used for indexing, x before y, so
        position k of the free list is row k of the reduced system.

        Returns:
        --------
        (free_dofs, restrained_dofs)
        """
        free: List[int] = []
        restrained: List[int] = []
        for node in nodes:
            ix = self.idx(node.id, 0)
            iy = self.idx(node.id, 1)
            (restrained if node.rx else free).append(ix)
            (restrained if node.ry else free).append(iy)
        return free, restrained
