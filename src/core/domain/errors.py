"""Typed hook errors.

Why here:
- The core never terminates the process; it raises a `HookError` and lets the
  CLI boundary decide how to exit.
- Every error keeps the offending payload so the operator can diagnose it.
"""

from __future__ import annotations

from enum import Enum


class PayloadKind(str, Enum):
    """Which of the two hook inputs an error refers to."""

    INSTANCE_SPEC = "instance-spec"
    DOMAIN_DESCRIPTION = "domain-description"

    def label(self) -> str:
        """Human readable label for messages and logging."""

        return "VMI spec" if self is PayloadKind.INSTANCE_SPEC else "Domain spec"


def _payload_text(payload: bytes | str) -> str:
    if isinstance(payload, bytes):
        return payload.decode("utf-8", errors="replace")
    return payload


class HookError(Exception):
    """Base class for every failure of a hook invocation."""

    def __init__(self, reason: str, payload: bytes | str = b"") -> None:
        self.reason = reason
        self.payload = payload
        super().__init__(self.describe())

    def summary(self) -> str:
        """Message without the payload, safe for one-line logging."""

        return self.reason

    def describe(self) -> str:
        text = _payload_text(self.payload)
        return f"{self.summary()} {text}" if text else self.summary()


class DecodeError(HookError):
    """One of the inputs is not well-formed or does not have the expected shape."""

    def __init__(self, kind: PayloadKind, reason: str, payload: bytes | str) -> None:
        self.kind = kind
        super().__init__(reason, payload)

    def summary(self) -> str:
        return f"Failed to decode given {self.kind.label()}: {self.reason}"


class EncodeError(HookError):
    """The mutated domain cannot be serialised back to XML."""

    def summary(self) -> str:
        return f"Failed to encode new Domain spec: {self.reason}"


class MissingGraphicsDeviceError(HookError):
    """The domain has no graphics device to receive the password."""

    def summary(self) -> str:
        return f"No graphics device in Domain spec: {self.reason}"
