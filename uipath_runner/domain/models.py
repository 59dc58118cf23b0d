"""Typed domain models shared across runtime layers.

Entities are read-only projections of Orchestrator API payloads. Composite
references carry enough context across a resolution stage boundary that the
next stage needs no extra round-trip to the server.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

OptionValueT = TypeVar("OptionValueT")


@dataclass(frozen=True)
class HealthStatus:
    """Health response contract used by health-check surfaces.

    Attributes:
        status: Overall status text for service health.
        detail: Additional message suitable for operational diagnostics.
    """

    status: str
    detail: str


@dataclass(frozen=True)
class Folder:
    """Organizational unit scoping releases and jobs.

    Attributes:
        folder_id: Organizational unit id.
        display_name: Fully-qualified folder name.
    """

    folder_id: int
    display_name: str


@dataclass(frozen=True)
class ProcessReference:
    """Composite key identifying one deployed process release.

    Attributes:
        release_key: Release key used for job start.
        process_key: Package key used for entry-point lookup.
        process_version: Package version used for entry-point lookup.
    """

    release_key: str
    process_key: str
    process_version: str

    @property
    def package_key(self) -> str:
        """Return the `processKey:version` key used by the entry-point listing."""

        return f"{self.process_key}:{self.process_version}"


@dataclass(frozen=True)
class ProcessRelease:
    """Deployable, versioned process definition inside one folder.

    Attributes:
        reference: Composite release/process/version key.
        display_name: Release display name.
        folder_id: Owning organizational unit id.
    """

    reference: ProcessReference
    display_name: str
    folder_id: int


@dataclass(frozen=True)
class EntryPointReference:
    """Composite key identifying one package entry point.

    Attributes:
        unique_id: Entry-point unique id.
        input_arguments_schema: JSON-schema text of the input arguments, when declared.
    """

    unique_id: str
    input_arguments_schema: str | None = None


@dataclass(frozen=True)
class EntryPoint:
    """Named invocation point inside a process package.

    Attributes:
        reference: Entry-point unique id and schema.
        path: Entry-point path used as display name.
    """

    reference: EntryPointReference
    path: str


@dataclass(frozen=True)
class OptionItem(Generic[OptionValueT]):
    """One selectable `(name, value)` pair produced by a resolution stage.

    Attributes:
        name: Human-readable display name.
        value: Typed value propagated to the next stage.
        description: Optional display hint.
    """

    name: str
    value: OptionValueT
    description: str | None = None

    def option_to_payload(self, value: Any | None = None) -> dict[str, Any]:
        """Render the option as a plain name/value mapping.

        Args:
            value: Optional edge-encoded value replacing the typed value.

        Returns:
            dict[str, Any]: Serializable option payload.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        payload: dict[str, Any] = {"name": self.name, "value": self.value if value is None else value}
        if self.description is not None:
            payload["description"] = self.description
        return payload
