# trussworks - Plane truss analysis by the direct stiffness method
"""
TRUSSWORKS: Linear-Elastic 2D Truss Solver
==========================================

Given node coordinates, support restraints, member connectivity/properties and
point loads, compute nodal displacements, support reactions and member axial
forces/stresses.

ARCHITECTURE:
-------------
    kernel/         DOF numbering, scatter-add assembly, LU solve
    model.py        Node, Element, Load records
    elements.py     2D truss element stiffness and axial force
    assembly.py     Global K and F for a truss (skip policy + logging)
    validate.py     Strict pre-assembly checks
    post.py         Reactions, member forces, equilibrium, metrics
    solve.py        solve_structure / analyze pipeline
    presets.py      Classic truss layouts
    config.py       SolverConfig and unit systems

    api/ (repo root) exposes the solver over HTTP (FastAPI)
"""

from .config import CONFIG, SolverConfig, UNIT_SYSTEMS, UnitSystem
from .errors import ValidationError, ValidationIssue
from .kernel import DOFManager, SingularSystemError, solve_linear
from .model import Element, Load, Node, merge_loads
from .post import ElementResult, Vector2, equilibrium_residual, solution_summary
from .presets import PRESETS, build_preset
from .solve import FullyRestrained, TrussSolution, analyze, solve_structure

__version__ = "0.1.0"

__all__ = [
    'CONFIG', 'SolverConfig', 'UNIT_SYSTEMS', 'UnitSystem',
    'ValidationError', 'ValidationIssue',
    'DOFManager', 'SingularSystemError', 'solve_linear',
    'Element', 'Load', 'Node', 'merge_loads',
    'ElementResult', 'Vector2', 'equilibrium_residual', 'solution_summary',
    'PRESETS', 'build_preset',
    'FullyRestrained', 'TrussSolution', 'analyze', 'solve_structure',
]
