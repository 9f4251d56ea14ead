"""
Ready-made decision providers.

A decision provider is a factory called once per resolution with
(contents, subject, possible_accesses); it returns the evaluator the
engine calls for every (content, access) cell.

The providers here cover the simple cases: constant answers, and a
static in-memory grant table. Anything that needs real data (ownership,
sharing, ...) is written by the caller.
"""

import logging
from typing import Any, Callable, Hashable, Iterable, Mapping


logger = logging.getLogger(__name__)


def allow_all(contents: list[Any], subject: Any, accesses: list[Any]) -> Callable[[Any, Any], bool]:
    """Provider whose evaluator grants every access."""
    return lambda content, access: True


def deny_all(contents: list[Any], subject: Any, accesses: list[Any]) -> Callable[[Any, Any], bool]:
    """Provider whose evaluator denies every access."""
    return lambda content, access: False


class StaticGrantProvider:
    """
    Decision provider backed by a fixed grant table.

    The table maps subject -> content -> granted accesses. Anything not
    listed is denied. The table is copied on construction and never
    changes afterwards.

    Usage:
        provider = StaticGrantProvider({
            "alice": {"doc-1": ["view", "edit"]},
        })
        engine = PolicyEngine(provider, ["view", "edit", "delete"])

    Attributes:
        subject_key: Maps the subject passed to the engine to a table key
    """

    def __init__(
        self,
        grants: Mapping[Hashable, Mapping[Hashable, Iterable[Hashable]]],
        subject_key: Callable[[Any], Hashable] | None = None,
    ) -> None:
        """
        Initialize the provider.

        Args:
            grants: subject -> content -> iterable of granted accesses
            subject_key: Optional function turning a subject object into
                its table key (defaults to the subject itself)
        """
        self._grants: dict[Hashable, dict[Hashable, frozenset[Hashable]]] = {
            subject: {content: frozenset(accesses) for content, accesses in table.items()}
            for subject, table in grants.items()
        }
        self.subject_key = subject_key

    def _table(self, subject: Any) -> dict[Hashable, frozenset[Hashable]]:
        key = self.subject_key(subject) if self.subject_key else subject
        table = self._grants.get(key, {})
        if not table:
            logger.debug("No grants for subject %r", key)
        return table

    def __call__(
        self,
        contents: list[Hashable],
        subject: Any,
        accesses: list[Hashable],
    ) -> Callable[[Hashable, Hashable], bool]:
        """Look up the subject's grants once and return an evaluator."""
        table = self._table(subject)

        def evaluate(content: Hashable, access: Hashable) -> bool:
            return access in table.get(content, frozenset())

        return evaluate

    def __repr__(self) -> str:
        """String representation of the provider."""
        return f"<StaticGrantProvider: {len(self._grants)} subject(s)>"
