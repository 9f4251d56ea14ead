"""
Small mapping helpers shared by the registry and the policy model.
"""

from typing import Hashable, Iterable, TypeVar


K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


def key_set(items: Iterable[K]) -> dict[K, bool]:
    """
    Turn a sequence into a membership map.

    Every item becomes a key mapped to True. Repeated items collapse to a
    single key, and the first-seen order is kept.

    Args:
        items: Items to index

    Returns:
        Dict with one True entry per distinct item
    """
    return {item: True for item in items}


def fill(mapping: dict[K, V], keys: Iterable[K], value: V) -> dict[K, V]:
    """
    Set every key in `keys` to `value`.

    The mapping is updated in place and returned for chaining.
    """
    for key in keys:
        mapping[key] = value
    return mapping
