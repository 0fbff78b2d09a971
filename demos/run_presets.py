"""
PRESET TRUSS DEMO
=================

Solve one (or every) preset truss and print displacements, reactions,
member forces and an equilibrium check.

Examples:
  python demos/run_presets.py
  python demos/run_presets.py --preset pratt --units SI_N_mm
  python demos/run_presets.py --preset warren --strict -v
"""

import argparse
import logging
from dataclasses import replace

from trussworks.config import CONFIG, DEFAULT_UNITS, UNIT_SYSTEMS
from trussworks.kernel.solve import SingularSystemError
from trussworks.post import equilibrium_residual, solution_summary
from trussworks.presets import PRESETS, build_preset
from trussworks.solve import FullyRestrained, solve_structure


def report(key, units_key, config):
    units = UNIT_SYSTEMS[units_key]
    nodes, elements, loads = build_preset(key, units)

    print("=" * 70)
    print(f"{PRESETS[key].name.upper()}  ({units.name})")
    print("=" * 70)

    try:
        result = solve_structure(nodes, elements, loads, config)
    except SingularSystemError as e:
        print(f"Unstable: {e}")
        return
    if isinstance(result, FullyRestrained):
        print(result.message)
        return

    print(f"\n{'node':>6} {'ux':>14} {'uy':>14} {'Rx':>12} {'Ry':>12}")
    for node in nodes:
        u = result.displacements[node.id]
        r = result.reactions[node.id]
        print(f"{node.id:>6} {u.x:>14.6e} {u.y:>14.6e} {r.x:>12.4f} {r.y:>12.4f}")

    print(f"\n{'bar':>6} {'n1':>4} {'n2':>4} {'N (' + units.force + ')':>14} {'':>3} {'stress':>14}")
    for element, r in zip(elements, result.element_results):
        print(f"{r.id:>6} {element.n1:>4} {element.n2:>4} {r.force:>14.4f} {r.state:>3} {r.stress:>14.6f}")

    by_id = {n.id: n for n in nodes}
    fx, fy, m = equilibrium_residual(by_id, loads, result.reactions)
    print(f"\nEquilibrium: ΣFx={fx:.2e}  ΣFy={fy:.2e}  ΣM={m:.2e}")

    summary = solution_summary(result.displacements, result.element_results)
    print(f"Max |u| = {summary['max_displacement']:.4e} {units.length} at node {summary['max_displacement_node']}")
    print(f"Max tension = {summary['max_tension']:.3f} {units.force}, "
          f"max compression = {summary['max_compression']:.3f} {units.force}")
    print()


def main():
    parser = argparse.ArgumentParser(
        description='Solve preset trusses and print the results',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--preset', choices=list(PRESETS), default=None,
                        help='Preset to solve (default: all)')
    parser.add_argument('--units', choices=list(UNIT_SYSTEMS), default=DEFAULT_UNITS,
                        help=f'Unit system (default: {DEFAULT_UNITS})')
    parser.add_argument('--strict', action='store_true',
                        help='Reject invalid elements/loads instead of skipping them')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    config = replace(CONFIG, strict=args.strict)

    keys = [args.preset] if args.preset else list(PRESETS)
    for key in keys:
        report(key, args.units, config)


if __name__ == "__main__":
    main()
