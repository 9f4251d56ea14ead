"""
cbac - content-based access control resolution engine.

Given content items, a subject and a set of access kinds, cbac produces a
matrix of allow/deny decisions. The decisions themselves come from a
decision provider supplied by the caller; cbac validates the requested
accesses, shapes the result and classifies errors.

Example usage:
    from cbac import PolicyEngine

    def provider(contents, user, accesses):
        owned = load_owned_ids(user, contents)
        return lambda content, access: content.id in owned

    engine = PolicyEngine(provider, ["view", "edit", "delete"])
    engine.resolve_access(doc, user, "view")

    $ cbac resolve documents.yaml --subject alice --content doc-1
"""

__version__ = "0.1.0"
__author__ = "cbac Contributors"

from cbac.engine import AsyncPolicyEngine, PolicyEngine
from cbac.errors import (
    AccessError,
    CBACError,
    ContentError,
    UnknownAccessError,
    UnknownContentError,
)
from cbac.policy import (
    DecisionProviderFactory,
    Evaluator,
    Policy,
    PolicyMatrix,
    apply_decisions,
    build_default,
    filter_to,
)
from cbac.providers import StaticGrantProvider, allow_all, deny_all
from cbac.registry import AccessRegistry

__all__ = [
    "__version__",
    "__author__",
    # Engine
    "PolicyEngine",
    "AsyncPolicyEngine",
    "AccessRegistry",
    # Model
    "Policy",
    "PolicyMatrix",
    "Evaluator",
    "DecisionProviderFactory",
    "build_default",
    "apply_decisions",
    "filter_to",
    # Providers
    "StaticGrantProvider",
    "allow_all",
    "deny_all",
    # Errors
    "CBACError",
    "AccessError",
    "UnknownAccessError",
    "ContentError",
    "UnknownContentError",
]
