"""Entry point of the hook sidecar.

virt-launcher's sidecar shim runs `onDefineDomain --vmi <json> --domain <xml>`
and uses whatever the command prints on stdout as the new domain XML. A
non-zero exit code aborts the domain definition.
"""

from __future__ import annotations

from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console

from cli.ui_components import build_error_panel
from core.config import HookSettings
from core.domain.errors import HookError
from core.logging_setup import get_logger, setup_logger
from core.services.vnc_password import on_define_domain as inject_vnc_password

app = typer.Typer(
    add_completion=False,
    help="KubeVirt hook: set the VNC password from the `vncPasswd` VMI annotation.",
)

_LOGGER = get_logger(__name__)


@app.command()
def on_define_domain(
    vmi: Annotated[str, typer.Option("--vmi", help="VMI to change in JSON format.")] = "",
    domain: Annotated[str, typer.Option("--domain", help="Domain spec in XML format.")] = "",
) -> None:
    """Print the domain XML with the VNC password applied."""

    try:
        settings = HookSettings()
    except ValidationError as exc:
        typer.echo(f"Invalid hook configuration: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    setup_logger(level=settings.log_level, log_file=settings.log_file)

    if not vmi or not domain:
        _LOGGER.error("Bad input vmi=%d, domain=%d", len(vmi), len(domain))
        raise typer.Exit(code=1)

    try:
        new_domain = inject_vnc_password(
            vmi,
            domain,
            missing_graphics=settings.missing_graphics,
        )
    except HookError as err:
        _LOGGER.error("onDefineDomain failed: %s", err.summary())
        Console(stderr=True).print(build_error_panel(err))
        raise typer.Exit(code=1) from err

    typer.echo(new_domain)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
