from types import SimpleNamespace

import pytest
from kubernetes import client
from kubernetes.client.rest import ApiException

from badref.core.adapters.kubecluster import DiscoveryError, KubernetesAdapter
from badref.core.discovery import ResourceKind


class _ApiClientStub:
    """Records GET calls and replays canned responses keyed by path."""

    def __init__(self, responses):
        self.responses = responses
        self.calls: list[tuple[str, dict]] = []

    def call_api(self, path, method, **kwargs):
        assert method == "GET"
        self.calls.append((path, kwargs))
        response = self.responses[path]
        if callable(response):
            return response(kwargs)
        if isinstance(response, Exception):
            raise response
        return response


def _resource(name, kind, namespaced=True, verbs=("get", "list")):
    return SimpleNamespace(name=name, kind=kind, namespaced=namespaced, verbs=list(verbs))


def _patch_group_versions(monkeypatch, core_versions, groups):
    monkeypatch.setattr(
        client,
        "CoreApi",
        lambda api: SimpleNamespace(get_api_versions=lambda **kw: SimpleNamespace(versions=core_versions)),
    )
    monkeypatch.setattr(
        client,
        "ApisApi",
        lambda api: SimpleNamespace(get_api_versions=lambda **kw: SimpleNamespace(groups=groups)),
    )


def test_preferred_group_versions_core_first(monkeypatch):
    groups = [
        SimpleNamespace(
            preferred_version=SimpleNamespace(group_version="apps/v1"),
            versions=[SimpleNamespace(group_version="apps/v1")],
        ),
        SimpleNamespace(
            preferred_version=None,
            versions=[SimpleNamespace(group_version="example.com/v1alpha1")],
        ),
    ]
    _patch_group_versions(monkeypatch, ["v1"], groups)

    adapter = KubernetesAdapter(_ApiClientStub({}))

    assert adapter.preferred_group_versions() == ["v1", "apps/v1", "example.com/v1alpha1"]


def test_preferred_group_versions_wraps_api_errors(monkeypatch):
    def _fail(**kw):
        raise ApiException(status=503, reason="Service Unavailable")

    monkeypatch.setattr(client, "CoreApi", lambda api: SimpleNamespace(get_api_versions=_fail))

    with pytest.raises(DiscoveryError, match="API groups"):
        KubernetesAdapter(_ApiClientStub({})).preferred_group_versions()


def test_discover_kinds_skips_subresources(monkeypatch):
    api = _ApiClientStub(
        {
            "/api/v1": SimpleNamespace(
                resources=[
                    _resource("pods", "Pod"),
                    _resource("pods/log", "Pod", verbs=("get",)),
                    _resource("nodes", "Node", namespaced=False),
                ]
            ),
            "/apis/apps/v1": SimpleNamespace(resources=[_resource("replicasets", "ReplicaSet")]),
        }
    )
    adapter = KubernetesAdapter(api)
    monkeypatch.setattr(adapter, "preferred_group_versions", lambda: ["v1", "apps/v1"])

    kinds = adapter.discover_kinds()

    assert kinds == [
        ResourceKind("v1", "Pod", "pods", True, ("get", "list")),
        ResourceKind("v1", "Node", "nodes", False, ("get", "list")),
        ResourceKind("apps/v1", "ReplicaSet", "replicasets", True, ("get", "list")),
    ]
    assert api.calls[0][1]["response_type"] == "V1APIResourceList"


def test_discover_kinds_fails_when_a_group_is_unavailable(monkeypatch):
    api = _ApiClientStub({"/apis/metrics.k8s.io/v1beta1": ApiException(status=503)})
    adapter = KubernetesAdapter(api)
    monkeypatch.setattr(adapter, "preferred_group_versions", lambda: ["metrics.k8s.io/v1beta1"])

    with pytest.raises(DiscoveryError, match="metrics.k8s.io/v1beta1"):
        adapter.discover_kinds()


def test_list_objects_follows_continue_tokens_and_fills_type_meta():
    pages = {
        None: {
            "metadata": {"continue": "page-2"},
            "items": [{"metadata": {"name": "a", "uid": "1"}}],
        },
        "page-2": {
            "metadata": {},
            "items": [{"apiVersion": "apps/v1", "kind": "ReplicaSet", "metadata": {"name": "b", "uid": "2"}}],
        },
    }

    def _page(kwargs):
        params = dict(kwargs["query_params"])
        return pages[params.get("continue")]

    api = _ApiClientStub({"/apis/apps/v1/replicasets": _page})
    kind = ResourceKind("apps/v1", "ReplicaSet", "replicasets", True, ("list",))

    items = KubernetesAdapter(api).list_objects(kind)

    assert [i["metadata"]["name"] for i in items] == ["a", "b"]
    assert items[0]["apiVersion"] == "apps/v1"
    assert items[0]["kind"] == "ReplicaSet"
    assert len(api.calls) == 2
    assert api.calls[0][1]["response_type"] == "object"


def test_list_objects_core_group_path():
    api = _ApiClientStub({"/api/v1/pods": {"items": []}})

    assert KubernetesAdapter(api).list_objects(ResourceKind("v1", "Pod", "pods", True, ("list",))) == []


def test_request_timeout_and_page_size_env_overrides(monkeypatch):
    api = _ApiClientStub({"/api/v1/pods": {"items": []}})
    adapter = KubernetesAdapter(api)

    monkeypatch.setenv("BADREF_REQUEST_TIMEOUT", "7.5")
    monkeypatch.setenv("BADREF_PAGE_SIZE", "50")
    adapter.list_objects(ResourceKind("v1", "Pod", "pods", True, ("list",)))

    _, kwargs = api.calls[0]
    assert kwargs["_request_timeout"] == 7.5
    assert ("limit", 50) in kwargs["query_params"]


@pytest.mark.parametrize("value", ["abc", "0", "-3"])
def test_invalid_env_overrides_fall_back_to_defaults(monkeypatch, value: str):
    monkeypatch.setenv("BADREF_REQUEST_TIMEOUT", value)
    monkeypatch.setenv("BADREF_PAGE_SIZE", value)
    adapter = KubernetesAdapter(_ApiClientStub({}))

    assert adapter._request_timeout() == KubernetesAdapter._DEFAULT_REQUEST_TIMEOUT_SECONDS
    assert adapter._page_size() == KubernetesAdapter._DEFAULT_PAGE_SIZE
