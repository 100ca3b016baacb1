"""Decoding of the VMI JSON handed over by virt-launcher."""

from __future__ import annotations

from pydantic import ValidationError

from core.domain.errors import DecodeError, PayloadKind
from core.domain.models import VirtualMachineInstance


def decode_vmi(payload: bytes | str) -> VirtualMachineInstance:
    """Parse and validate the VMI in one step.

    Malformed JSON and a document of the wrong shape both surface as
    `DecodeError(kind=instance-spec)` with the payload attached.
    """

    try:
        return VirtualMachineInstance.model_validate_json(payload)
    except ValidationError as exc:
        raise DecodeError(PayloadKind.INSTANCE_SPEC, _first_error(exc), payload) from exc
    except ValueError as exc:
        # Bytes that are not even valid UTF-8.
        raise DecodeError(PayloadKind.INSTANCE_SPEC, str(exc), payload) from exc


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors(include_url=False)
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
    return f"{location}: {first.get('msg', 'invalid value')}"
