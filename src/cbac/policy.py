"""
Policy matrix model for cbac.

A resolution produces a grid of boolean decisions, one row per content
item and one column per access kind:

    Policy       = dict[access, bool]      one row
    PolicyMatrix = dict[content, Policy]   the whole grid

The functions here build and transform that grid. They never assume any
ordering of keys.

Collaborator types:
    Evaluator: (content, access) -> bool, answers one cell
    DecisionProviderFactory: (contents, subject, accesses) -> Evaluator,
        supplied by the caller and free to do any setup (e.g. batch-load
        content metadata) before returning its evaluator
"""

import inspect
from typing import Any, Callable, Hashable, Iterable, TypeVar

from cbac.maps import fill


A = TypeVar("A", bound=Hashable)
C = TypeVar("C", bound=Hashable)


Policy = dict[A, bool]
PolicyMatrix = dict[C, dict[A, bool]]

Evaluator = Callable[[C, A], bool]
DecisionProviderFactory = Callable[[list[C], Any, list[A]], Callable[[C, A], bool]]


def build_default(contents: Iterable[C], accesses: Iterable[A]) -> PolicyMatrix[C, A]:
    """
    Build a deny-everything matrix.

    Args:
        contents: Content identifiers (duplicates collapse to one row)
        accesses: Access identifiers every row is keyed by

    Returns:
        Matrix with one row per distinct content, all values False
    """
    accesses = list(accesses)
    return {content: fill({}, accesses, False) for content in contents}


def apply_decisions(
    matrix: PolicyMatrix[C, A],
    decide: Callable[[C, A], bool],
) -> PolicyMatrix[C, A]:
    """
    Overwrite every cell of the matrix with the evaluator's verdict.

    Only cells that already exist are visited, so the shape of the matrix
    never changes. The matrix is updated in place and returned.

    Args:
        matrix: Matrix to update
        decide: Evaluator called once per (content, access) cell

    Returns:
        The same matrix

    Raises:
        TypeError: If the evaluator returns an awaitable
    """
    for content, policy in matrix.items():
        for access in policy:
            policy[access] = verdict(decide(content, access))
    return matrix


def verdict(value: Any) -> bool:
    """Coerce an evaluator result to bool, rejecting awaitables."""
    if inspect.isawaitable(value):
        if inspect.iscoroutine(value):
            value.close()
        msg = "Evaluator returned an awaitable; evaluators must be synchronous"
        raise TypeError(msg)
    return bool(value)


def filter_to(matrix: PolicyMatrix[C, A], accesses: Iterable[A]) -> PolicyMatrix[C, A]:
    """
    Reshape every row to exactly the given accesses.

    Accesses missing from a row default to False and any access outside
    the given set is dropped.

    Args:
        matrix: Source matrix (left untouched)
        accesses: Accesses every resulting row is keyed by

    Returns:
        New matrix with the same content keys
    """
    accesses = list(accesses)
    return {
        content: {access: policy.get(access, False) for access in accesses}
        for content, policy in matrix.items()
    }
