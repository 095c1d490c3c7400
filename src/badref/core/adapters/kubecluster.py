from __future__ import annotations

import os
from typing import Any, Mapping

from kubernetes import client
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from badref.core.discovery import ResourceKind


class DiscoveryError(RuntimeError):
    """Raised when the cluster's discovery API cannot be queried."""


class KubernetesAdapter:
    """Adapter around the kubernetes client discovery and list APIs."""

    _REQUEST_TIMEOUT_ENV = "BADREF_REQUEST_TIMEOUT"
    _PAGE_SIZE_ENV = "BADREF_PAGE_SIZE"
    _DEFAULT_REQUEST_TIMEOUT_SECONDS = 30
    _DEFAULT_PAGE_SIZE = 500

    def __init__(self, api_client: client.ApiClient) -> None:
        """Create an adapter for the cluster behind the given ApiClient."""
        self.api_client = api_client

    def _request_timeout(self) -> float:
        """Return the per-request timeout in seconds, honoring env override."""
        raw = os.getenv(self._REQUEST_TIMEOUT_ENV)
        if raw is None:
            return self._DEFAULT_REQUEST_TIMEOUT_SECONDS
        try:
            value = float(raw)
        except ValueError:
            return self._DEFAULT_REQUEST_TIMEOUT_SECONDS
        return value if value > 0 else self._DEFAULT_REQUEST_TIMEOUT_SECONDS

    def _page_size(self) -> int:
        """Return the list page size, honoring env override."""
        raw = os.getenv(self._PAGE_SIZE_ENV)
        if raw is None:
            return self._DEFAULT_PAGE_SIZE
        try:
            value = int(raw)
        except ValueError:
            return self._DEFAULT_PAGE_SIZE
        return value if value > 0 else self._DEFAULT_PAGE_SIZE

    def _get(
        self,
        path: str,
        response_type: str,
        query_params: list[tuple[str, Any]] | None = None,
    ) -> Any:
        """Issue an authenticated GET against the API server."""
        return self.api_client.call_api(
            path,
            "GET",
            query_params=query_params or [],
            header_params={"Accept": "application/json"},
            response_type=response_type,
            auth_settings=["BearerToken"],
            _return_http_data_only=True,
            _preload_content=True,
            _request_timeout=self._request_timeout(),
        )

    def preferred_group_versions(self) -> list[str]:
        """Return the preferred version of every API group, core group first."""
        timeout = self._request_timeout()
        try:
            core = client.CoreApi(self.api_client).get_api_versions(
                _request_timeout=timeout
            )
            groups = client.ApisApi(self.api_client).get_api_versions(
                _request_timeout=timeout
            )
        except (ApiException, HTTPError) as exc:
            raise DiscoveryError(f"Could not query API groups: {exc}") from exc

        group_versions: list[str] = []
        if core.versions:
            group_versions.append(core.versions[0])
        for g in groups.groups or []:
            preferred = getattr(g, "preferred_version", None)
            if preferred and preferred.group_version:
                group_versions.append(preferred.group_version)
            elif g.versions:
                group_versions.append(g.versions[0].group_version)
        return group_versions

    @staticmethod
    def _base_path(group_version: str) -> str:
        """Return the URL prefix for a group version (`/api/v1` for the core group)."""
        if "/" in group_version:
            return f"/apis/{group_version}"
        return f"/api/{group_version}"

    def discover_kinds(self) -> list[ResourceKind]:
        """Return every top-level resource kind at its group's preferred version."""
        kinds: list[ResourceKind] = []
        for gv in self.preferred_group_versions():
            try:
                resource_list = self._get(self._base_path(gv), "V1APIResourceList")
            except (ApiException, HTTPError) as exc:
                raise DiscoveryError(
                    f"Could not discover resources for {gv}: {exc}"
                ) from exc

            for r in resource_list.resources or []:
                # subresources such as pods/log or deployments/scale
                if "/" in r.name:
                    continue
                kinds.append(
                    ResourceKind(
                        group_version=gv,
                        kind=r.kind,
                        name=r.name,
                        namespaced=bool(r.namespaced),
                        verbs=tuple(r.verbs or ()),
                    )
                )
        return kinds

    def list_objects(self, kind: ResourceKind) -> list[Mapping[str, Any]]:
        """List all objects of a kind across all namespaces, following pagination."""
        path = f"{self._base_path(kind.group_version)}/{kind.name}"
        items: list[Mapping[str, Any]] = []
        token: str | None = None

        while True:
            params: list[tuple[str, Any]] = [("limit", self._page_size())]
            if token:
                params.append(("continue", token))
            payload = self._get(path, "object", query_params=params) or {}

            for item in payload.get("items") or []:
                # list items usually omit apiVersion/kind
                item.setdefault("apiVersion", kind.group_version)
                item.setdefault("kind", kind.kind)
                items.append(item)

            token = (payload.get("metadata") or {}).get("continue")
            if not token:
                return items
