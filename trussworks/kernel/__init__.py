# trussworks/kernel - Linear structural analysis core
"""
KERNEL: DOF NUMBERING, ASSEMBLY, SOLVE
======================================

The plumbing of the direct stiffness method, independent of the element:
- DOFManager maps node ids to global DOF indices and partitions free/restrained
- assemble_global_K scatter-adds element stiffness, add_nodal_load point loads
- solve_linear solves the reduced system and detects mechanisms

The element (truss2d stiffness, axial force) lives in trussworks.elements.
"""

from .dof import DOFManager
from .solve import solve_linear, check_restraint_count, SingularSystemError

__all__ = ['DOFManager', 'solve_linear', 'check_restraint_count', 'SingularSystemError']
