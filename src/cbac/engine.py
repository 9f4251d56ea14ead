"""
Policy Engine for cbac.

The engine turns "which of these contents may this subject access, and
how?" into a complete decision matrix. It does not decide anything itself:
verdicts come from a decision provider supplied by the caller. The engine
owns everything around that call.

How it works:
    1. Validate the requested accesses against the registry
    2. Build a default matrix (every cell False)
    3. Ask the provider factory for an evaluator (once per resolution)
    4. Overwrite every cell with the evaluator's verdict
    5. Reshape every row to exactly the validated accesses

Guarantees:
    - Deny-by-default: a cell the evaluator never answers stays False
    - All-or-nothing: an error means no matrix, never a half-filled one
    - Provider errors propagate unchanged (same exception object)
    - Stateless: nothing is kept between calls, so one engine can serve
      concurrent callers without locking

Usage:
    engine = PolicyEngine(provider, ["view", "edit", "delete"])
    matrix = engine.resolve([doc1, doc2], user)
    policy = engine.resolve_one(doc1, user, ["view"])
    allowed = engine.resolve_access(doc1, user, "view")
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, Generic, Hashable, Iterable, TypeVar

from cbac.errors import UnknownAccessError, UnknownContentError
from cbac.policy import (
    Policy,
    PolicyMatrix,
    apply_decisions,
    build_default,
    filter_to,
    verdict,
)
from cbac.registry import AccessRegistry


logger = logging.getLogger(__name__)

A = TypeVar("A", bound=Hashable)
C = TypeVar("C", bound=Hashable)
S = TypeVar("S")


class _BaseEngine(Generic[A, C, S]):
    """
    Shared state and the provider-independent steps of a resolution.

    Attributes:
        registry: The accesses this engine can resolve
        provider: The caller's decision-provider factory
    """

    def __init__(
        self,
        provider: Callable[..., Any],
        accesses: Iterable[A] | AccessRegistry[A] = (),
    ) -> None:
        """
        Initialize the engine.

        Args:
            provider: Decision-provider factory,
                (contents, subject, possible_accesses) -> evaluator
            accesses: Registered accesses, or a prebuilt AccessRegistry
        """
        if not callable(provider):
            msg = "Decision provider must be callable"
            raise TypeError(msg)

        if isinstance(accesses, AccessRegistry):
            self.registry: AccessRegistry[A] = accesses
        else:
            self.registry = AccessRegistry(accesses)
        self.provider = provider

    def _prepare(
        self,
        contents: Iterable[C],
        requested: Iterable[A],
    ) -> tuple[list[C], list[A], PolicyMatrix[C, A]]:
        """Validate accesses and build the default matrix."""
        possible = self.registry.validate(requested)
        contents = list(contents)
        logger.debug(
            "Resolving %d content item(s) for accesses %s",
            len(contents),
            possible,
        )
        return contents, possible, build_default(contents, possible)

    @staticmethod
    def _finish(
        matrix: PolicyMatrix[C, A],
        decide: Callable[[C, A], bool],
        possible: list[A],
    ) -> PolicyMatrix[C, A]:
        """Apply the evaluator's verdicts and reshape the rows."""
        apply_decisions(matrix, decide)
        return filter_to(matrix, possible)

    @staticmethod
    def _pick(matrix: PolicyMatrix[C, A], content: C) -> Policy[A]:
        """Return the row for one content item."""
        policy = matrix.get(content)
        if policy is None:
            raise UnknownContentError(content=content)
        return policy

    @staticmethod
    def _read(policy: Policy[A], access: A) -> bool:
        """Return the verdict for one access."""
        if access not in policy:
            raise UnknownAccessError(access=access)
        return policy[access]

    def __repr__(self) -> str:
        """String representation of the engine."""
        return f"<{self.__class__.__name__}: {self.registry!r}>"


class PolicyEngine(_BaseEngine[A, C, S]):
    """
    Resolves decision matrices with a synchronous provider factory.

    Type parameters:
        A: access identifier (hashable)
        C: content identifier (hashable)
        S: subject, passed through to the provider untouched
    """

    provider: Callable[[list[C], S, list[A]], Callable[[C, A], bool]]

    def resolve(
        self,
        contents: Iterable[C],
        subject: S,
        accesses: Iterable[A] = (),
    ) -> PolicyMatrix[C, A]:
        """
        Resolve the decision matrix for a list of contents.

        Args:
            contents: Content identifiers (duplicates collapse to one row)
            subject: On whose behalf the check is performed
            accesses: Accesses to resolve (empty means every registered one)

        Returns:
            Matrix keyed by every given content, each row keyed by exactly
            the resolved accesses

        Raises:
            UnknownAccessError: If a requested access is not registered
            Exception: Whatever the provider factory raised, unchanged
        """
        contents, possible, matrix = self._prepare(contents, accesses)

        try:
            decide = self.provider(contents, subject, possible)
        except Exception as e:
            logger.debug("Decision provider failed: %r", e)
            raise

        return self._finish(matrix, decide, possible)

    def resolve_one(
        self,
        content: C,
        subject: S,
        accesses: Iterable[A] = (),
    ) -> Policy[A]:
        """
        Resolve the policy for a single content item.

        Raises:
            UnknownAccessError: If a requested access is not registered
            UnknownContentError: If the resolved matrix has no row for content
        """
        return self._pick(self.resolve([content], subject, accesses), content)

    def resolve_access(self, content: C, subject: S, access: A) -> bool:
        """
        Resolve a single access for a single content item.

        An unregistered access raises UnknownAccessError instead of
        returning False.
        """
        return self._read(self.resolve_one(content, subject, [access]), access)


class AsyncPolicyEngine(_BaseEngine[A, C, S]):
    """
    Resolves decision matrices inside an event loop.

    The provider factory may be a coroutine function; it is awaited once
    per resolution. The evaluator it returns may be a plain callable or a
    coroutine function, in which case each verdict is awaited. The
    engine adds no timeout of its own; wrap calls in asyncio.wait_for
    when bounded latency is needed.
    """

    provider: Callable[
        [list[C], S, list[A]],
        Callable[[C, A], bool] | Awaitable[Callable[[C, A], bool]],
    ]

    async def resolve(
        self,
        contents: Iterable[C],
        subject: S,
        accesses: Iterable[A] = (),
    ) -> PolicyMatrix[C, A]:
        """Resolve the decision matrix for a list of contents."""
        contents, possible, matrix = self._prepare(contents, accesses)

        try:
            decide = self.provider(contents, subject, possible)
            if inspect.isawaitable(decide):
                decide = await decide
        except Exception as e:
            logger.debug("Decision provider failed: %r", e)
            raise

        return await self._finish_async(matrix, decide, possible)

    @staticmethod
    async def _finish_async(
        matrix: PolicyMatrix[C, A],
        decide: Callable[[C, A], bool | Awaitable[bool]],
        possible: list[A],
    ) -> PolicyMatrix[C, A]:
        """Apply (and await, where needed) the verdicts, then reshape the rows."""
        for content, policy in matrix.items():
            for access in policy:
                value = decide(content, access)
                if inspect.isawaitable(value):
                    value = await value
                policy[access] = verdict(value)
        return filter_to(matrix, possible)

    async def resolve_one(
        self,
        content: C,
        subject: S,
        accesses: Iterable[A] = (),
    ) -> Policy[A]:
        """Resolve the policy for a single content item."""
        return self._pick(await self.resolve([content], subject, accesses), content)

    async def resolve_access(self, content: C, subject: S, access: A) -> bool:
        """Resolve a single access for a single content item."""
        return self._read(await self.resolve_one(content, subject, [access]), access)
