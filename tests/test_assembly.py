# File: tests/test_assembly.py
"""
Test element stiffness and global assembly (K and F).
"""

import logging

import numpy as np
import pytest

from trussworks.assembly import assemble_truss
from trussworks.elements import element_geometry, truss2d_global_stiffness
from trussworks.kernel.assemble import add_nodal_load, assemble_global_K
from trussworks.kernel.dof import DOFManager
from trussworks.model import Element, Load, Node


E = 200e9
A = 0.001


def test_element_geometry_direction_cosines():
    nodes = {1: Node(1, 0.0, 0.0), 2: Node(2, 3.0, 4.0)}
    L, c, s = element_geometry(nodes, Element(1, 1, 2, E, A))

    assert np.isclose(L, 5.0)
    assert np.isclose(c, 0.6)
    assert np.isclose(s, 0.8)


def test_element_geometry_zero_length_raises():
    nodes = {1: Node(1, 1.0, 1.0), 2: Node(2, 1.0, 1.0)}
    with pytest.raises(ValueError):
        element_geometry(nodes, Element(1, 1, 2, E, A))


def test_horizontal_member_stiffness():
    """
    A horizontal bar only couples the x DOFs:

        ke = EA/L × [ 1 0 -1 0 ]
                    [ 0 0  0 0 ]
                    [-1 0  1 0 ]
                    [ 0 0  0 0 ]
    """
    L = 2.0
    nodes = {1: Node(1, 0.0, 0.0), 2: Node(2, L, 0.0)}
    ke = truss2d_global_stiffness(nodes, Element(1, 1, 2, E, A))

    k = E * A / L
    expected = k * np.array([
        [ 1, 0, -1, 0],
        [ 0, 0,  0, 0],
        [-1, 0,  1, 0],
        [ 0, 0,  0, 0],
    ], dtype=float)
    np.testing.assert_allclose(ke, expected, rtol=1e-12, atol=1e-6)


def test_inclined_member_stiffness_properties():
    """
    Symmetric, rows sum to zero (rigid translation costs no force),
    and rank 1 (single axial mode).
    """
    nodes = {1: Node(1, 0.0, 0.0), 2: Node(2, 3.0, 4.0)}
    ke = truss2d_global_stiffness(nodes, Element(1, 1, 2, E, A))

    np.testing.assert_allclose(ke, ke.T, rtol=1e-12)
    np.testing.assert_allclose(ke.sum(axis=1), 0.0, atol=1e-3)
    assert np.linalg.matrix_rank(ke / ke.max()) == 1

    k = E * A / 5.0
    assert np.isclose(ke[0, 0], k * 0.36)
    assert np.isclose(ke[0, 1], k * 0.48)
    assert np.isclose(ke[1, 1], k * 0.64)
    assert np.isclose(ke[0, 2], -k * 0.36)


def test_assembly_accumulates_shared_node():
    """Two collinear bars meeting at the middle node: K[mid, mid] = 2·EA/L."""
    L = 1.0
    nodes = [Node(1, 0.0, 0.0), Node(2, L, 0.0), Node(3, 2 * L, 0.0)]
    by_id = {n.id: n for n in nodes}
    elements = [Element(1, 1, 2, E, A), Element(2, 2, 3, E, A)]
    dof = DOFManager.from_nodes(nodes)

    contributions = [(dof.element_dof_map([e.n1, e.n2]), truss2d_global_stiffness(by_id, e))
                     for e in elements]
    K = assemble_global_K(dof.ndof(), contributions)

    k = E * A / L
    assert K.shape == (6, 6)
    assert np.isclose(K[2, 2], 2 * k)
    assert np.isclose(K[0, 2], -k)
    assert np.isclose(K[2, 4], -k)
    assert K[0, 4] == 0.0
    np.testing.assert_allclose(K, K.T)


def test_add_nodal_load_in_place():
    F = np.zeros(6)
    add_nodal_load(F, [2, 3], [0.0, -10.0])
    add_nodal_load(F, [2, 3], [1.5, -5.0])
    np.testing.assert_allclose(F, [0, 0, 1.5, -15.0, 0, 0])


def test_assemble_truss_loads_are_additive():
    nodes = [Node(1, 0.0, 0.0), Node(2, 1.0, 0.0)]
    by_id = {n.id: n for n in nodes}
    dof = DOFManager.from_nodes(nodes)
    loads = [Load(2, 1.0, -2.0), Load(2, 3.0, -4.0)]

    system = assemble_truss(dof, by_id, [Element(1, 1, 2, E, A)], loads)

    np.testing.assert_allclose(system.F, [0.0, 0.0, 4.0, -6.0])
    assert system.skipped_elements == []
    assert system.skipped_loads == []


def test_assemble_truss_skips_bad_references(caplog):
    """
    Dangling node references, zero-length bars and loads on unknown nodes
    contribute nothing and are logged.
    """
    nodes = [Node(1, 0.0, 0.0), Node(2, 1.0, 0.0)]
    by_id = {n.id: n for n in nodes}
    dof = DOFManager.from_nodes(nodes)
    elements = [
        Element(1, 1, 2, E, A),
        Element(2, 1, 99, E, A),   # unknown node
        Element(3, 2, 2, E, A),    # zero length
    ]
    loads = [Load(2, 0.0, -1.0), Load(42, 5.0, 5.0)]

    with caplog.at_level(logging.WARNING, logger="trussworks.assembly"):
        system = assemble_truss(dof, by_id, elements, loads)

    assert system.skipped_elements == [2, 3]
    assert system.skipped_indices == [1, 2]
    assert system.skipped_loads == [1]
    np.testing.assert_allclose(system.F, [0.0, 0.0, 0.0, -1.0])

    only_bar_1 = truss2d_global_stiffness(by_id, elements[0])
    np.testing.assert_allclose(system.K, only_bar_1)

    messages = " ".join(r.getMessage() for r in caplog.records)
    assert "unknown node" in messages
    assert "zero length" in messages
