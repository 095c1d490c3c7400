"""Command for scanning a cluster for invalid owner references."""

import typer
from rich.markup import escape

from badref.cli.common.context import build_scan_context
from badref.cli.common.exits import SETUP_FAILURE_CODE, exit_from_exc
from badref.cli.common.options import ContextOpt, KubeconfigOpt
from badref.cli.common.output import out
from badref.core.adapters.kubecluster import DiscoveryError
from badref.core.catalog import build_catalog
from badref.core.discovery import EnumerationResult, enumerate_objects
from badref.core.validation import Severity, ValidationResult, validate


def report(result: ValidationResult, enumeration: EnumerationResult) -> None:
    """Print listing failures, findings and summary counts for one scan."""
    for failure in enumeration.failures:
        out.warn(f"Error during list of {failure.kind}: {escape(failure.error)}")

    if result.findings:
        out.findings_table(result.findings, title="Owner reference findings")

    out.kv(
        {
            "Discovered resources": enumeration.discovered,
            "Scanned objects": result.scanned_objects,
            "Checked owner references": result.scanned_owner_refs,
            "Errors": result.count(Severity.ERROR),
            "Warnings": result.count(Severity.INFO),
        }
    )

    if result.has_errors:
        out.error("=== ERRORS FOUND ===")
    else:
        out.success("All OK!")


def scan(
    kubeconfig: str | None = KubeconfigOpt,
    context: str | None = ContextOpt,
):
    """
    Find invalid ownerReferences in a Kubernetes cluster.

    Exits 1 if any ERROR-level finding exists, 2 if the cluster could not
    be reached or discovered.
    """
    appctx = build_scan_context(kubeconfig, context)

    try:
        with out.status("Discovering and listing resources..."):
            enumeration = enumerate_objects(appctx.adapter)
    except DiscoveryError as exc:
        exit_from_exc(exc, message=escape(str(exc)), code=SETUP_FAILURE_CODE)

    out.info(f"Discovered {enumeration.discovered} resources")

    catalog = build_catalog(enumeration.objects)
    result = validate(catalog)
    report(result, enumeration)

    raise typer.Exit(result.exit_code)
