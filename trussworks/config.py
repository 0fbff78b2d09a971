# trussworks/config.py
"""
Solver configuration and unit systems.
"""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass
class SolverConfig:
    """Global solver configuration."""

    # Max condition number of Kff before the structure is treated as a mechanism.
    # None disables the check (LU pivot failure is still detected).
    cond_limit: Optional[float] = 1e12

    # A plane body has 3 rigid-body modes
    min_restrained_dofs: int = 3

    # strict=True rejects dangling references and zero-length members
    # instead of skipping them
    strict: bool = False

    # Dense K is ndof x ndof; refuse models above this size
    max_dofs: int = 5000

    # Default member area used by the preset library
    default_area: float = 10.0


@dataclass(frozen=True)
class UnitSystem:
    """
    A consistent set of units.

    E is the default elastic modulus expressed in force / length².
    """
    key: str
    name: str
    force: str
    length: str
    E: float

    @property
    def stress(self) -> str:
        return f"{self.force}/{self.length}²"


UNIT_SYSTEMS: Dict[str, UnitSystem] = {
    'SI_kN_m': UnitSystem('SI_kN_m', 'SI (kN, m)', force='kN', length='m', E=210e6),
    'SI_N_mm': UnitSystem('SI_N_mm', 'SI (N, mm)', force='N', length='mm', E=210000.0),
    'Imperial': UnitSystem('Imperial', 'Imperial (kip, ft)', force='kip', length='ft', E=29000.0),
}

DEFAULT_UNITS = 'SI_kN_m'


def get_unit_system(key: str) -> UnitSystem:
    try:
        return UNIT_SYSTEMS[key]
    except KeyError:
        raise KeyError(
            f"Unknown unit system '{key}'. Available: {', '.join(UNIT_SYSTEMS)}"
        ) from None


# Global config instance
CONFIG = SolverConfig()
