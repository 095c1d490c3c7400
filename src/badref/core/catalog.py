from __future__ import annotations

from typing import Any, Iterable, Mapping

from badref.core.objects import ObjectCatalog, ObjectDescriptor, OwnerRef


def _str(value: Any) -> str:
    """Return value as a string, mapping None to an empty string."""
    return "" if value is None else str(value)


def owner_ref_from_raw(raw: Mapping[str, Any]) -> OwnerRef:
    """Convert one raw `ownerReferences` entry into an OwnerRef."""
    return OwnerRef(
        uid=_str(raw.get("uid")),
        kind=_str(raw.get("kind")),
        name=_str(raw.get("name")),
        api_version=_str(raw.get("apiVersion")),
        is_controller=bool(raw.get("controller") or False),
    )


def descriptor_from_raw(raw: Mapping[str, Any], is_namespaced: bool) -> ObjectDescriptor:
    """
    Convert a raw (JSON-shaped) cluster object into an ObjectDescriptor.

    Only `apiVersion`, `kind` and the `metadata` fields name, namespace,
    uid and ownerReferences are read; everything else is ignored.
    """
    metadata = raw.get("metadata") or {}
    refs = metadata.get("ownerReferences") or []
    return ObjectDescriptor(
        api_version=_str(raw.get("apiVersion")),
        kind=_str(raw.get("kind")),
        name=_str(metadata.get("name")),
        namespace=_str(metadata.get("namespace")),
        uid=_str(metadata.get("uid")),
        is_namespaced=is_namespaced,
        owner_references=tuple(owner_ref_from_raw(r) for r in refs),
    )


def build_catalog(
    objects: Iterable[tuple[Mapping[str, Any], bool]],
) -> ObjectCatalog:
    """
    Build the object catalog from (raw object, is_namespaced) pairs.

    When two objects share a uid, the one observed last wins.
    """
    catalog: ObjectCatalog = {}
    for raw, is_namespaced in objects:
        descriptor = descriptor_from_raw(raw, is_namespaced)
        catalog[descriptor.uid] = descriptor
    return catalog
