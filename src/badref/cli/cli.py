"""CLI application for auditing Kubernetes owner references."""

import typer

from badref.cli.commands.scan import scan

app = typer.Typer(
    help="badref - find invalid ownerReferences in a Kubernetes cluster",
    add_completion=False,
)

app.command()(scan)


if __name__ == "__main__":
    app()
