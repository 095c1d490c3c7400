"""Connection helpers for Kubernetes.

This module centralizes creation of a kubernetes ApiClient from a
kubeconfig file (optionally a specific context), falling back to the
in-cluster service account configuration when no kubeconfig is available.
"""

import yaml
from kubernetes import client, config
from kubernetes.config.config_exception import ConfigException


class AuthError(RuntimeError):
    """Raised when the Kubernetes client configuration cannot be loaded."""


def _format_auth_error(message: str, context: str | None) -> str:
    """Return a user-friendly configuration error message."""
    if context and "context" in message.lower():
        return (
            f"Kubernetes context '{context}' could not be loaded: {message}\n"
            "List available contexts with:\n  $ kubectl config get-contexts"
        )
    return f"Kubernetes configuration could not be loaded: {message}"


def get_client(
    kubeconfig: str | None = None, context: str | None = None
) -> client.ApiClient:
    """
    Create and return a configured kubernetes ApiClient.

    The kubeconfig is resolved by the kubernetes client library (explicit
    path, then `KUBECONFIG`, then `~/.kube/config`). If none is found and no
    kubeconfig or context was requested explicitly, the in-cluster service
    account configuration is used instead. A kubeconfig that exists but is
    not valid YAML is always an error.
    """
    try:
        config.load_kube_config(config_file=kubeconfig, context=context)
    except yaml.YAMLError as exc:
        raise AuthError(
            _format_auth_error(f"invalid kubeconfig YAML: {exc}", context)
        ) from exc
    except ConfigException as exc:
        if kubeconfig or context:
            raise AuthError(_format_auth_error(str(exc), context)) from exc
        try:
            config.load_incluster_config()
        except ConfigException as in_cluster_exc:
            raise AuthError(_format_auth_error(str(exc), context)) from in_cluster_exc
    return client.ApiClient()
