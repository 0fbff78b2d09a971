# File: tests/test_presets.py
"""
Test the preset library and unit systems, and check known results for each
classic truss.
"""

import numpy as np
import pytest

from trussworks.config import CONFIG, UNIT_SYSTEMS, get_unit_system
from trussworks.presets import PRESETS, build_preset, get_preset
from trussworks.solve import TrussSolution, solve_structure


def test_unit_systems():
    assert set(UNIT_SYSTEMS) == {'SI_kN_m', 'SI_N_mm', 'Imperial'}
    assert UNIT_SYSTEMS['SI_kN_m'].E == 210e6
    assert UNIT_SYSTEMS['SI_N_mm'].E == 210000
    assert UNIT_SYSTEMS['Imperial'].force == 'kip'
    assert UNIT_SYSTEMS['SI_N_mm'].stress == 'N/mm²'

    with pytest.raises(KeyError):
        get_unit_system('cgs')


def test_unit_system_is_frozen():
    with pytest.raises(Exception):  # dataclass.FrozenInstanceError
        UNIT_SYSTEMS['SI_kN_m'].E = 1.0


def test_unknown_preset():
    with pytest.raises(KeyError):
        get_preset('howe')


@pytest.mark.parametrize("key", list(PRESETS))
def test_build_preset_ids_and_properties(key):
    preset = PRESETS[key]
    nodes, elements, loads = build_preset(key, 'Imperial')

    assert [n.id for n in nodes] == list(range(1, len(preset.nodes) + 1))
    assert [e.id for e in elements] == list(range(1, len(preset.elements) + 1))
    assert all(e.E == 29000.0 for e in elements)
    assert all(e.A == CONFIG.default_area for e in elements)

    ids = {n.id for n in nodes}
    assert all(e.n1 in ids and e.n2 in ids for e in elements)
    assert all(l.node_id in ids for l in loads)


def test_build_preset_custom_area():
    _, elements, _ = build_preset('triangle', A=0.5)
    assert all(e.A == 0.5 for e in elements)


@pytest.mark.parametrize("key", list(PRESETS))
@pytest.mark.parametrize("units", list(UNIT_SYSTEMS))
def test_every_preset_is_stable(key, units):
    result = solve_structure(*build_preset(key, units))
    assert isinstance(result, TrussSolution)
    assert result.skipped_elements == []


@pytest.mark.parametrize("key", list(PRESETS))
def test_forces_independent_of_uniform_modulus(key):
    """
    Changing E rescales displacements only; member forces of a truss with
    uniform EA do not depend on E.
    """
    a = solve_structure(*build_preset(key, 'SI_kN_m'))
    b = solve_structure(*build_preset(key, 'Imperial'))

    for ra, rb in zip(a.element_results, b.element_results):
        assert np.isclose(ra.force, rb.force, rtol=1e-6, atol=1e-9)


def test_warren_symmetric_reactions():
    """Centre top-chord load on a symmetric span: 5 + 5."""
    result = solve_structure(*build_preset('warren'))

    assert np.isclose(result.reactions[1].y, 5.0, rtol=1e-6)
    assert np.isclose(result.reactions[4].y, 5.0, rtol=1e-6)
    assert np.isclose(result.reactions[1].x, 0.0, atol=1e-6)


def test_warren_chords():
    """Sagging span: bottom chord in tension, top chord in compression."""
    result = solve_structure(*build_preset('warren'))

    bottom = [result.element(i).force for i in (1, 2, 3)]
    top = [result.element(i).force for i in (4, 5)]
    assert all(f > 0 for f in bottom), bottom
    assert all(f < 0 for f in top), top


def test_pratt_end_panel():
    """
    At the pinned end only the vertical post and the bottom chord meet:
    the chord carries nothing and the post carries the full reaction.
    """
    result = solve_structure(*build_preset('pratt'))

    assert np.isclose(result.reactions[1].y, 7.5, rtol=1e-6)
    assert np.isclose(result.reactions[5].y, 7.5, rtol=1e-6)
    assert np.isclose(result.element(1).force, 0.0, atol=1e-6)
    assert np.isclose(result.element(9).force, -7.5, rtol=1e-6)


def test_cantilever_wall_reactions():
    """
    Moment about the lower wall node: 2 × 10 × 6 = 120 is taken by a
    horizontal couple between the two wall nodes, 2 m apart.
    """
    result = solve_structure(*build_preset('cantilever'))

    assert np.isclose(result.reactions[1].x, 60.0, rtol=1e-6)
    assert np.isclose(result.reactions[2].x, -60.0, rtol=1e-6)
    assert np.isclose(result.reactions[1].y + result.reactions[2].y, 20.0, rtol=1e-6)

    # bar between the two fixed wall nodes cannot deform
    assert result.element(5).force == 0.0
