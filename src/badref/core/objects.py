"""Core domain models for cluster objects and their owner references.

These models represent Kubernetes objects in a simple, immutable form.
They are intentionally free of kubernetes client types and UI/CLI concerns:
only the fields needed to reason about ownership are kept.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class OwnerRef:
    """
    A declared ownership edge from a dependent object to its owner.

    Attributes:
        uid: Identifier of the owner object.
        kind: Owner kind as cached on the reference.
        name: Owner name as cached on the reference.
        api_version: Owner apiVersion as cached on the reference.
        is_controller: True if the owner is the managing controller.
    """

    uid: str
    kind: str
    name: str
    api_version: str
    is_controller: bool = False


@dataclass(frozen=True)
class ObjectDescriptor:
    """Lightweight representation of one discovered cluster object."""

    api_version: str
    kind: str
    name: str
    namespace: str
    uid: str
    is_namespaced: bool
    owner_references: tuple[OwnerRef, ...] = field(default_factory=tuple)

    @property
    def kind_namespace_name(self) -> str:
        """Return `<namespace> <Kind>/<name>`, or `<Kind>/<name>` for cluster-scoped kinds."""
        if self.is_namespaced:
            return f"{self.namespace} {self.kind}/{self.name}"
        return f"{self.kind}/{self.name}"


# Objects keyed by uid.
ObjectCatalog = dict[str, ObjectDescriptor]
