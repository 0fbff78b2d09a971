# trussworks/validate.py
"""
Pre-assembly model checks.

Two policies share the same checks:

- parity (default): problem elements and loads are skipped during assembly
  and logged (see trussworks.assembly)
- strict: validate_model raises ValidationError listing every problem
  before anything is assembled

Duplicate node ids and the size guard are enforced in both modes.
"""

import math
from typing import Dict, Hashable, Iterable, List

from .config import SolverConfig
from .errors import ValidationError, ValidationIssue
from .model import Node, Element, Load


def element_issue(nodes: Dict[Hashable, Node], element: Element):
    """Return the ValidationIssue that makes an element unusable, or None."""
    missing = [n for n in (element.n1, element.n2) if n not in nodes]
    if missing:
        return ValidationIssue(
            'missing_node', element.id,
            f"Element {element.id} references unknown node(s) {', '.join(map(repr, missing))}"
        )
    n1 = nodes[element.n1]
    n2 = nodes[element.n2]
    if element.n1 == element.n2 or math.hypot(n2.x - n1.x, n2.y - n1.y) == 0.0:
        return ValidationIssue(
            'zero_length', element.id,
            f"Element {element.id} has zero length (nodes {element.n1!r} and {element.n2!r})"
        )
    return None


def load_issue(nodes: Dict[Hashable, Node], index: int, load: Load):
    if load.node_id not in nodes:
        return ValidationIssue(
            'invalid_load', index,
            f"Load #{index} references unknown node {load.node_id!r}"
        )
    return None


def property_issue(element: Element):
    if not (element.E > 0 and element.A > 0):
        return ValidationIssue(
            'bad_property', element.id,
            f"Element {element.id} needs E > 0 and A > 0 (got E={element.E}, A={element.A})"
        )
    return None


def check_size(n_nodes: int, n_elements: int, config: SolverConfig) -> None:
    """
    Size guard (always on) plus the editor's minimum model (strict only).
    """
    issues = []
    ndof = 2 * n_nodes
    if ndof > config.max_dofs:
        issues.append(ValidationIssue(
            'too_large', ndof,
            f"Model has {ndof} DOFs, limit is {config.max_dofs}"
        ))
    if config.strict and (n_nodes < 2 or n_elements < 1):
        issues.append(ValidationIssue(
            'too_small', n_nodes,
            f"Need at least 2 nodes and 1 element (got {n_nodes} nodes, {n_elements} elements)"
        ))
    if issues:
        raise ValidationError(issues)


def find_issues(
    nodes: Dict[Hashable, Node],
    elements: Iterable[Element],
    loads: Iterable[Load],
) -> List[ValidationIssue]:
    issues = []
    for element in elements:
        issue = element_issue(nodes, element) or property_issue(element)
        if issue is not None:
            issues.append(issue)
    for i, load in enumerate(loads):
        issue = load_issue(nodes, i, load)
        if issue is not None:
            issues.append(issue)
    return issues


def validate_model(
    nodes: Dict[Hashable, Node],
    elements: Iterable[Element],
    loads: Iterable[Load],
) -> None:
    """
    Strict pre-assembly pass.

    Raises:
    -------
    ValidationError
        With one ValidationIssue per invalid element or load
    """
    issues = find_issues(nodes, elements, loads)
    if issues:
        raise ValidationError(issues)
