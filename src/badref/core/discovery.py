"""Resource enumeration boundary.

This module defines the interface the core uses to obtain raw objects from
a cluster, plus the loop that walks every listable resource kind. Listing
failures for a single kind are collected and skipped so that one broken
API (for example an aggregated API that is down) never aborts the scan.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol


@dataclass(frozen=True)
class ResourceKind:
    """
    A resource type advertised by the cluster's discovery API.

    Attributes:
        group_version: API group/version, e.g. `apps/v1` or `v1`.
        kind: Object kind, e.g. `ReplicaSet`.
        name: Plural resource name used in URLs, e.g. `replicasets`.
        namespaced: True if objects of this kind live in a namespace.
        verbs: Verbs supported by the resource.
    """

    group_version: str
    kind: str
    name: str
    namespaced: bool
    verbs: tuple[str, ...] = ()

    @property
    def listable(self) -> bool:
        """Return True if the resource supports the `list` verb."""
        return "list" in self.verbs

    def __str__(self) -> str:
        return f"{self.group_version}, Kind={self.kind}"


@dataclass(frozen=True)
class ListingFailure:
    """A resource kind that could not be listed."""

    kind: ResourceKind
    error: str


@dataclass(frozen=True)
class EnumerationResult:
    """Raw objects collected from the cluster plus per-kind failures."""

    objects: list[tuple[Mapping[str, Any], bool]] = field(default_factory=list)
    failures: list[ListingFailure] = field(default_factory=list)

    @property
    def discovered(self) -> int:
        """Return the number of objects collected."""
        return len(self.objects)


class ResourceEnumerator(Protocol):
    """Interface for discovery and listing operations used by the core."""

    def discover_kinds(self) -> list[ResourceKind]:
        """Return every resource kind the cluster advertises."""
        ...

    def list_objects(self, kind: ResourceKind) -> list[Mapping[str, Any]]:
        """Return all objects of the kind, across all namespaces."""
        ...


def enumerate_objects(enumerator: ResourceEnumerator) -> EnumerationResult:
    """
    Collect (raw object, is_namespaced) pairs for every listable kind.

    Discovery errors propagate to the caller. Errors while listing a
    single kind are recorded in the result and scanning continues.

    Args:
        enumerator: Adapter used to discover kinds and list objects.

    Returns:
        An EnumerationResult with the collected objects and failures.
    """
    result = EnumerationResult()

    for kind in enumerator.discover_kinds():
        if not kind.listable:
            continue
        try:
            items = enumerator.list_objects(kind)
        except Exception as e:  # noqa: BLE001
            result.failures.append(ListingFailure(kind=kind, error=str(e)))
            continue
        result.objects.extend((item, kind.namespaced) for item in items)

    return result
