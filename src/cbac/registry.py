"""
Access registry for cbac.

The registry holds the fixed set of access kinds an engine may reason
about. It is built once and never changes afterwards, so it can be shared
freely between threads and engines.

Usage:
    from cbac.registry import AccessRegistry

    registry = AccessRegistry(["view", "edit", "delete"])
    registry.validate(["view"])   # ["view"]
    registry.validate([])         # ["view", "edit", "delete"]
    registry.validate(["nuke"])   # raises UnknownAccessError
"""

from typing import Generic, Hashable, Iterable, Iterator, TypeVar

from cbac.errors import UnknownAccessError
from cbac.maps import key_set


A = TypeVar("A", bound=Hashable)


class AccessRegistry(Generic[A]):
    """
    Immutable, de-duplicated set of recognized access kinds.

    Registration order is kept, so an empty request always expands to the
    same sequence for the lifetime of the registry.

    Attributes:
        _members: Membership map of registered accesses, in registration order
    """

    def __init__(self, accesses: Iterable[A] = ()) -> None:
        """
        Build a registry.

        Args:
            accesses: Access identifiers to register (duplicates are dropped)
        """
        self._members: dict[A, bool] = key_set(accesses)

    @property
    def accesses(self) -> tuple[A, ...]:
        """All registered accesses, in registration order."""
        return tuple(self._members)

    def validate(self, requested: Iterable[A] = ()) -> list[A]:
        """
        Check a requested access subset against the registry.

        Args:
            requested: Accesses the caller asked for (empty means all)

        Returns:
            The requested accesses with duplicates removed, or every
            registered access when nothing was requested

        Raises:
            UnknownAccessError: On the first requested access that is not
                registered. Nothing is returned in that case.
        """
        requested = list(requested)
        if not requested:
            return list(self._members)

        for access in requested:
            if access not in self._members:
                raise UnknownAccessError(access=access)

        return list(key_set(requested))

    def __contains__(self, access: object) -> bool:
        """Check if an access is registered using 'in' operator."""
        return access in self._members

    def __iter__(self) -> Iterator[A]:
        """Iterate over registered accesses."""
        return iter(self._members)

    def __len__(self) -> int:
        """Return the number of registered accesses."""
        return len(self._members)

    def __repr__(self) -> str:
        """String representation of the registry."""
        accesses = ", ".join(str(access) for access in self._members)
        return f"<AccessRegistry: [{accesses}]>"
