"""Rich components for the CLI.

Why separate:
- stdout belongs to virt-launcher (it reads the new domain XML from it), so
  everything rendered here is meant for a stderr console.
"""

from __future__ import annotations

from rich.panel import Panel
from rich.text import Text

from core.domain.errors import DecodeError, HookError


def build_error_panel(err: HookError) -> Panel:
    """Panel describing a failed hook invocation, payload included."""

    title = Text("onDefineDomain failed", style="bold red")
    body = Text()
    body.append(err.summary() + "\n")
    if isinstance(err, DecodeError):
        body.append(f"\nInput: {err.kind.value}", style="dim")
    if err.payload:
        payload = err.payload.decode("utf-8", errors="replace") if isinstance(err.payload, bytes) else err.payload
        body.append("\nPayload:\n", style="bold")
        body.append(payload)

    return Panel(body, title=title, border_style="red")
