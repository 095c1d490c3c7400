"""Builders for raw, JSON-shaped cluster objects used across tests."""

from __future__ import annotations

from typing import Any


def owner_ref(
    owner: dict[str, Any],
    *,
    controller: bool | None = None,
    **overrides: Any,
) -> dict[str, Any]:
    ref = {
        "apiVersion": owner["apiVersion"],
        "kind": owner["kind"],
        "name": owner["metadata"]["name"],
        "uid": owner["metadata"]["uid"],
    }
    if controller is not None:
        ref["controller"] = controller
    ref.update(overrides)
    return ref


def raw_object(
    kind: str,
    name: str,
    uid: str,
    *,
    namespace: str | None = None,
    api_version: str = "v1",
    owners: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    metadata: dict[str, Any] = {"name": name, "uid": uid}
    if namespace is not None:
        metadata["namespace"] = namespace
    if owners:
        metadata["ownerReferences"] = owners
    return {"apiVersion": api_version, "kind": kind, "metadata": metadata}
