"""VNC password extension of the libvirt domain schema.

KubeVirt's domain types do not carry the graphics `passwd` attribute, so the
hook extends them: each extended type is the upstream type plus one optional
field. Decoding and encoding of the upstream fields is inherited untouched.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar, Type

from pydantic import Field

from core.domain.libvirt import Devices, DomainSpec, Graphics

# Annotation on the VMI that carries the VNC password.
VNC_PASSWORD_ANNOTATION = "vncPasswd"


class MissingGraphicsPolicy(str, Enum):
    """What to do when the domain has no graphics device to protect."""

    FAIL = "fail"
    SKIP = "skip"


class PasswordGraphics(Graphics):
    """Graphics device with the `passwd` attribute."""

    xml_attributes: ClassVar[tuple[str, ...]] = Graphics.xml_attributes + ("password",)

    password: str = Field(
        default="",
        alias="passwd",
        description="VNC password. Empty means no `passwd` attribute.",
    )

    def _omit_attribute(self, field: str, value: str | None) -> bool:
        if field == "password":
            return not value
        return super()._omit_attribute(field, value)


class PasswordDevices(Devices):
    graphics_model: ClassVar[Type[Graphics]] = PasswordGraphics

    graphics: list[PasswordGraphics] = Field(default_factory=list)


class PasswordDomainSpec(DomainSpec):
    """Domain whose graphics devices accept a password."""

    devices_model: ClassVar[Type[Devices]] = PasswordDevices

    devices: PasswordDevices | None = None

    def first_graphics(self) -> PasswordGraphics | None:
        """Return the default graphics device, the first one declared."""

        if self.devices is None or not self.devices.graphics:
            return None
        return self.devices.graphics[0]
