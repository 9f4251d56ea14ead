"""
Configuration models for cbac.

An engine configuration names the registered accesses and, optionally, a
static grant table used by the command-line interface:

    name: documents
    accesses: [view, edit, delete]
    grants:
      alice@example.com:
        doc-1: [view, edit]

Design Decisions:
    - Models are immutable (frozen=True) and reject unknown keys
    - Names are always strings: YAML numbers and dates used as subjects,
      contents or accesses are turned back into text, and yes/no/on/off
      are never read as booleans
    - Every access named in grants must be registered; a typo is an
      error at load time, not a silent denial at resolve time
"""

from datetime import date
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from cbac.engine import PolicyEngine
from cbac.providers import StaticGrantProvider


class _ConfigLoader(yaml.SafeLoader):
    """SafeLoader without the implicit boolean resolver."""


_ConfigLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:bool"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _as_name(value: Any) -> Any:
    """Turn scalar YAML values (42, 1.5, 2024-01-01) into their text form."""
    if isinstance(value, (int, float, date)) and not isinstance(value, bool):
        return str(value)
    return value


Name = Annotated[str, BeforeValidator(_as_name)]


class EngineConfig(BaseModel):
    """
    Complete engine configuration.

    Attributes:
        name: Optional name for this configuration
        accesses: Registered access kinds, in display order
        grants: subject -> content -> granted accesses
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: Name | None = Field(
        default=None,
        description="Optional name for this configuration",
    )
    accesses: list[Name] = Field(
        ...,
        description="Registered access kinds",
        min_length=1,
    )
    grants: dict[Name, dict[Name, list[Name]]] = Field(
        default_factory=dict,
        description="subject -> content -> granted accesses",
    )

    @field_validator("accesses")
    @classmethod
    def validate_unique_accesses(cls, v: list[str]) -> list[str]:
        """Access names must be non-empty and unique."""
        seen: set[str] = set()
        for access in v:
            if not access.strip():
                msg = "Access names must not be empty"
                raise ValueError(msg)
            if access in seen:
                msg = f"Duplicate access: {access}"
                raise ValueError(msg)
            seen.add(access)
        return v

    @model_validator(mode="after")
    def validate_granted_accesses(self) -> "EngineConfig":
        """Every granted access must be registered."""
        registered = set(self.accesses)
        for subject, table in self.grants.items():
            for content, granted in table.items():
                unknown = [access for access in granted if access not in registered]
                if unknown:
                    msg = (
                        f"Unknown access(es) {', '.join(unknown)} "
                        f"granted to {subject} on {content}"
                    )
                    raise ValueError(msg)
        return self


# =============================================================================
# Loading Helpers
# =============================================================================


def load_config(path: Path | str) -> EngineConfig:
    """
    Load an engine configuration from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        Validated EngineConfig object

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the YAML doesn't match the schema
    """
    path = Path(path)
    with path.open() as f:
        data = yaml.load(f, Loader=_ConfigLoader)

    return EngineConfig.model_validate(data)


def load_config_from_string(content: str) -> EngineConfig:
    """Load an engine configuration from a YAML string."""
    data = yaml.load(content, Loader=_ConfigLoader)
    return EngineConfig.model_validate(data)


def build_engine(config: EngineConfig) -> PolicyEngine[str, str, str]:
    """Build an engine that answers from the configuration's grant table."""
    return PolicyEngine(StaticGrantProvider(config.grants), config.accesses)
