"""Tests for decoding the VMI JSON payload."""

from __future__ import annotations

import json

import pytest

from adapters.vmi_json import decode_vmi
from conftest import build_vmi
from core.domain.errors import DecodeError, PayloadKind


def test_decode_vmi_reads_annotations(vmi_with_password: bytes) -> None:
    """Expose the metadata annotations of a well-formed VMI."""

    vmi = decode_vmi(vmi_with_password)

    assert vmi.kind == "VirtualMachineInstance"
    assert vmi.api_version == "kubevirt.io/v1"
    assert vmi.metadata.name == "testvmi"
    assert vmi.get_annotations()["vncPasswd"] == "s3cr3t"


def test_decode_vmi_accepts_text_payload() -> None:
    """Accept the payload as str as well as bytes."""

    vmi = decode_vmi(json.dumps(build_vmi({"a": "b"})))

    assert vmi.get_annotations() == {"a": "b"}


@pytest.mark.parametrize(
    "document",
    [
        {"metadata": {"name": "x", "annotations": None}},
        {"metadata": {"name": "x"}},
        {"metadata": None},
        {},
    ],
)
def test_decode_vmi_without_annotations(document: dict) -> None:
    """Treat absent or null annotations as an empty mapping."""

    vmi = decode_vmi(json.dumps(document).encode())

    assert vmi.get_annotations() == {}


@pytest.mark.parametrize(
    "payload",
    [
        b"",
        b'{"metadata": {"annotations": {"vncPasswd": "s3c',
        b"not json at all",
        b"[]",
        b'"a string"',
        b'{"metadata": {"annotations": {"vncPasswd": 1234}}}',
        b'{"metadata": {"annotations": ["vncPasswd"]}}',
    ],
)
def test_decode_vmi_rejects_bad_payload(payload: bytes) -> None:
    """Raise a DecodeError for the instance spec that keeps the payload."""

    with pytest.raises(DecodeError) as excinfo:
        decode_vmi(payload)

    err = excinfo.value
    assert err.kind is PayloadKind.INSTANCE_SPEC
    assert err.payload == payload
    assert err.summary().startswith("Failed to decode given VMI spec:")
    assert payload.decode() in str(err)
