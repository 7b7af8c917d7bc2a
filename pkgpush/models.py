"""Data models for pkgpush.

These Pydantic models represent the core data structures used throughout
the publish pipeline. Everything here is built fresh for one publish or
revert run and thrown away afterwards.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

REGISTRY_SOURCE = "registry"


class RawDependency(BaseModel):
    """A dependency as declared in pyproject.toml, before classification.

    Attributes:
        name: Canonical (PEP 503) package name.
        requirement: PEP 440 specifier string, "" when unconstrained.
        optional: True for dependencies declared under an extra.
        environments: Environments the dependency is restricted to. Empty
            means it applies everywhere.
        options: Source options ([tool.uv.sources] entry, direct URL,
            override flag) inspected by the source handlers.
    """

    name: str
    requirement: str = ""
    optional: bool = False
    environments: frozenset[str] = frozenset()
    options: dict[str, Any] = Field(default_factory=dict)


class Dependency(BaseModel):
    """A classified dependency.

    Attributes:
        source: Name of the source handler that claimed the dependency.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    requirement: str = ""
    optional: bool = False
    environments: frozenset[str] = frozenset()
    is_override: bool = False
    source: str = REGISTRY_SOURCE

    @property
    def registry_managed(self) -> bool:
        return self.source == REGISTRY_SOURCE

    @property
    def production(self) -> bool:
        """No environment restriction, or the restriction includes prod."""
        return not self.environments or "prod" in self.environments


class Requirement(BaseModel):
    """One entry of Metadata.requirements."""

    model_config = ConfigDict(frozen=True)

    requirement: str
    optional: bool = False


class ProjectConfig(BaseModel):
    """The [project] fields a release is built from."""

    name: str
    version: str
    description: str | None = None


class Metadata(BaseModel):
    """Canonical release manifest sent to the registry.

    Optional fields left as None are "missing" and are reported as such;
    they are also left out of the payload sent to the registry. The record
    is shared by the report, the upsert and the archive, so its containers
    are read-only too: tuples and mapping proxies.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    description: str | None = None
    licenses: tuple[str, ...] | None = None
    contributors: tuple[str, ...] | None = None
    links: Mapping[str, str] | None = None
    requirements: Mapping[str, Requirement] = Field(
        default_factory=dict, validate_default=True
    )
    files: tuple[str, ...] = ()

    @field_validator("links", "requirements")
    @classmethod
    def _read_only(cls, value: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
        return None if value is None else MappingProxyType(dict(value))

    @field_serializer("links", "requirements")
    def _as_dict(self, value: Mapping[str, Any] | None) -> dict[str, Any] | None:
        return None if value is None else dict(value)

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready representation for the registry API and the archive."""
        return self.model_dump(mode="json", exclude_none=True)


class Credentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    password: str = Field(repr=False)


class ApiKey(BaseModel):
    """A key previously issued by the registry."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(repr=False)


Auth = Union[Credentials, ApiKey]


class ApiResponse(BaseModel):
    """Status code and decoded body of one registry call."""

    status_code: int
    body: Any = None

    def succeeded(self, codes: frozenset[int]) -> bool:
        return self.status_code in codes


class Stage(str, Enum):
    PACKAGE_UPSERT = "package_upsert"
    RELEASE_UPLOAD = "release_upload"
    REVERT = "revert"


class Published(BaseModel):
    kind: Literal["published"] = "published"
    version: str


class Reverted(BaseModel):
    kind: Literal["reverted"] = "reverted"
    version: str


class Failed(BaseModel):
    """The registry rejected one of the calls.

    Attributes:
        stage: Which call was rejected.
        status_code: HTTP status returned by the registry.
        body: Decoded response body.
    """

    kind: Literal["failed"] = "failed"
    stage: Stage
    status_code: int
    body: Any = None


class Declined(BaseModel):
    """The operator answered no; nothing was sent."""

    kind: Literal["declined"] = "declined"


PublishOutcome = Annotated[
    Union[Published, Reverted, Failed, Declined], Field(discriminator="kind")
]
