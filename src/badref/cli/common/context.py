"""Application context management for the CLI."""

from dataclasses import dataclass

from rich.markup import escape

from badref.cli.common.exits import SETUP_FAILURE_CODE, die
from badref.core.adapters.kubecluster import KubernetesAdapter
from badref.core.auth import AuthError, get_client


@dataclass
class ScanAppContext:
    """Application context holding the cluster adapter."""

    adapter: KubernetesAdapter


def build_scan_context(kubeconfig: str | None, context: str | None) -> ScanAppContext:
    """Build and return the application context with a configured cluster adapter.

    Args:
        kubeconfig: Optional path to a kubeconfig file.
        context: Optional kubeconfig context name.

    Returns:
        ScanAppContext: Application context with configured adapter.
    """
    try:
        client = get_client(kubeconfig, context)
    except AuthError as exc:
        die(escape(str(exc)), code=SETUP_FAILURE_CODE)
    return ScanAppContext(adapter=KubernetesAdapter(client))
