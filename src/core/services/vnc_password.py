"""onDefineDomain: inject the VNC password into the domain XML.

The whole hook is this one pass: decode the VMI and the domain, look up the
`vncPasswd` annotation, set it on the first graphics device and encode the
domain again. It is stateless and does no I/O; the CLI feeds it the two
payloads and prints the result.
"""

from __future__ import annotations

from adapters.domain_xml import decode_domain, document_text, encode_domain
from adapters.vmi_json import decode_vmi
from core.domain.errors import MissingGraphicsDeviceError
from core.domain.vnc import VNC_PASSWORD_ANNOTATION, MissingGraphicsPolicy
from core.logging_setup import get_logger

_LOGGER = get_logger(__name__)


def on_define_domain(
    vmi_json: bytes | str,
    domain_xml: bytes | str,
    *,
    missing_graphics: MissingGraphicsPolicy = MissingGraphicsPolicy.FAIL,
) -> str:
    """Return the domain XML with the VMI's VNC password applied.

    - Without the `vncPasswd` annotation the original document is returned
      as-is, not re-encoded.
    - With it, the first graphics device gets `passwd` set (any previous value
      is replaced) and the domain is encoded again.

    Raises `DecodeError`, `EncodeError` or `MissingGraphicsDeviceError`.
    """

    _LOGGER.info("Hook's onDefineDomain callback method has been called")

    vmi = decode_vmi(vmi_json)
    domain = decode_domain(domain_xml)

    annotations = vmi.get_annotations()
    if VNC_PASSWORD_ANNOTATION not in annotations:
        _LOGGER.info("No %s annotation on the VMI, domain left untouched", VNC_PASSWORD_ANNOTATION)
        return document_text(domain_xml, domain)

    graphics = domain.first_graphics()
    if graphics is None:
        if missing_graphics is MissingGraphicsPolicy.SKIP:
            _LOGGER.warning("Domain has no graphics device, VNC password not applied")
            return document_text(domain_xml, domain)
        raise MissingGraphicsDeviceError("the VNC password needs a default graphics device", domain_xml)

    graphics.password = annotations[VNC_PASSWORD_ANNOTATION]
    _LOGGER.info("VNC password set on graphics device (type=%s)", graphics.type)

    return encode_domain(domain, source=domain_xml)
