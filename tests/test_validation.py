# File: tests/test_validation.py
"""
Input policies: parity mode skips bad references, strict mode rejects them.
"""

import logging

import numpy as np
import pytest

from trussworks.config import SolverConfig
from trussworks.errors import ValidationError
from trussworks.model import Element, Load, Node, merge_loads
from trussworks.solve import solve_structure


E = 210e6
A = 10.0
STRICT = SolverConfig(strict=True)


def make_triangle():
    nodes = [
        Node(1, 0.0, 0.0, rx=True, ry=True),
        Node(2, 4.0, 0.0, ry=True),
        Node(3, 2.0, 3.0),
    ]
    elements = [Element(1, 1, 2, E, A), Element(2, 2, 3, E, A), Element(3, 3, 1, E, A)]
    loads = [Load(3, 0.0, -10.0)]
    return nodes, elements, loads


def with_bad_records():
    nodes, elements, loads = make_triangle()
    elements = elements + [
        Element(4, 3, 99, E, A),   # unknown node
        Element(5, 1, 1, E, A),    # n1 == n2
    ]
    loads = loads + [Load(42, 5.0, 5.0)]
    return nodes, elements, loads


class TestParityMode:
    """Default: skip and log, solve the rest."""

    def test_skipped_records_do_not_change_the_solution(self, caplog):
        clean = solve_structure(*make_triangle())

        with caplog.at_level(logging.WARNING, logger="trussworks"):
            dirty = solve_structure(*with_bad_records())

        np.testing.assert_allclose(dirty.d, clean.d)
        assert dirty.skipped_elements == [4, 5]
        assert dirty.skipped_loads == [1]
        assert len(caplog.records) == 3

    def test_skipped_elements_reported_with_zero_force(self):
        result = solve_structure(*with_bad_records())

        assert [r.id for r in result.element_results] == [1, 2, 3, 4, 5]
        assert result.element(4).force == 0.0
        assert result.element(5).stress == 0.0

    def test_skipped_element_sharing_an_id(self):
        """Only the dangling member is zeroed, not the valid one with the same id."""
        nodes, elements, loads = make_triangle()
        elements = elements + [Element(1, 3, 99, E, A)]

        result = solve_structure(nodes, elements, loads)

        assert [r.id for r in result.element_results] == [1, 2, 3, 1]
        assert np.isclose(result.element_results[0].force, 10.0 / 3.0, atol=1e-2)
        assert result.element_results[3].force == 0.0
        assert result.skipped_elements == [1]

    def test_coincident_nodes_skipped(self):
        nodes, elements, loads = make_triangle()
        nodes = nodes + [Node(4, 2.0, 3.0, rx=True, ry=True)]  # same place as node 3
        elements = elements + [Element(4, 3, 4, E, A)]

        clean = solve_structure(*make_triangle())
        result = solve_structure(nodes, elements, loads)

        assert result.skipped_elements == [4]
        assert np.isclose(result.element(2).force, clean.element(2).force, rtol=1e-9)
        assert result.reactions[4].x == 0.0 and result.reactions[4].y == 0.0


class TestStrictMode:
    """strict=True: a typed ValidationError before assembly."""

    def test_collects_every_issue(self):
        with pytest.raises(ValidationError) as exc:
            solve_structure(*with_bad_records(), STRICT)

        kinds = [(i.kind, i.ref) for i in exc.value.issues]
        assert kinds == [('missing_node', 4), ('zero_length', 5), ('invalid_load', 1)]

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            solve_structure(*with_bad_records(), STRICT)

    def test_non_positive_properties(self):
        nodes, elements, loads = make_triangle()
        elements[1] = Element(2, 2, 3, E, 0.0)

        with pytest.raises(ValidationError) as exc:
            solve_structure(nodes, elements, loads, STRICT)
        assert exc.value.issues[0].kind == 'bad_property'

    def test_minimum_model(self):
        with pytest.raises(ValidationError) as exc:
            solve_structure([Node(1, 0.0, 0.0, True, True)], [], [], STRICT)
        assert exc.value.issues[0].kind == 'too_small'

    def test_clean_model_passes(self):
        result = solve_structure(*make_triangle(), STRICT)
        assert np.isclose(result.reactions[1].y, 5.0)


class TestAlwaysEnforced:

    def test_duplicate_node_ids(self):
        nodes, elements, loads = make_triangle()
        nodes.append(Node(2, 8.0, 0.0))

        with pytest.raises(ValidationError) as exc:
            solve_structure(nodes, elements, loads)
        assert exc.value.issues[0].kind == 'duplicate_node'

    def test_size_guard(self):
        with pytest.raises(ValidationError) as exc:
            solve_structure(*make_triangle(), SolverConfig(max_dofs=4))
        assert exc.value.issues[0].kind == 'too_large'


def test_merge_loads():
    loads = [Load(3, 1.0, 0.0), Load(1, 0.0, -2.0), Load(3, 0.5, -1.0)]

    merged = merge_loads(loads)

    assert merged == [Load(3, 1.5, -1.0), Load(1, 0.0, -2.0)]


def test_merged_and_separate_loads_solve_the_same():
    nodes, elements, _ = make_triangle()
    loads = [Load(3, 0.0, -4.0), Load(3, 0.0, -6.0)]

    a = solve_structure(nodes, elements, loads)
    b = solve_structure(nodes, elements, merge_loads(loads))

    np.testing.assert_allclose(a.d, b.d)
