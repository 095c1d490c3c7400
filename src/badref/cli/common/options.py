"""Common CLI options for the CLI."""

import typer

KubeconfigOpt = typer.Option(
    None,
    "--kubeconfig",
    help="Path to the kubeconfig file (defaults to $KUBECONFIG or ~/.kube/config)",
)

ContextOpt = typer.Option(
    None,
    "--context",
    "-c",
    help="Kubeconfig context to use (defaults to the current context)",
)
