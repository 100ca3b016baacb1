"""Decoding/encoding of the libvirt domain XML (lxml).

Why a dedicated parser:
- Domain XML comes from outside the process; entity resolution and network
  access are disabled.
- Whitespace and comments are preserved so an untouched document encodes back
  to the same content.

Text payloads are parsed as text: their XML declaration is dropped first, since
the characters are already decoded and a declared encoding no longer applies.
Encoding writes the new root back into the original document, so the DOCTYPE
(with its internal subset) and comments around the root are kept. The result
is text and carries no XML declaration.
"""

from __future__ import annotations

import re

from lxml import etree

from core.domain.errors import DecodeError, EncodeError, PayloadKind
from core.domain.vnc import PasswordDomainSpec

_XML_DECLARATION = re.compile(r"^\s*<\?xml\b[^>]*\?>")


def _parser() -> etree.XMLParser:
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_blank_text=False,
        remove_comments=False,
    )


def _parse(payload: bytes | str) -> etree._Element:
    if isinstance(payload, str):
        payload = _XML_DECLARATION.sub("", payload, count=1)
    return etree.fromstring(payload, parser=_parser())


def decode_domain(payload: bytes | str) -> PasswordDomainSpec:
    """Decode a domain XML document into the extended domain model."""

    try:
        root = _parse(payload)
    except (etree.XMLSyntaxError, ValueError) as exc:
        raise DecodeError(PayloadKind.DOMAIN_DESCRIPTION, str(exc) or "document is empty", payload) from exc

    # SchemaMismatchError and pydantic's ValidationError are both ValueErrors.
    try:
        return PasswordDomainSpec.from_element(root)
    except ValueError as exc:
        raise DecodeError(PayloadKind.DOMAIN_DESCRIPTION, str(exc), payload) from exc


def document_text(payload: bytes | str, domain: PasswordDomainSpec) -> str:
    """Return `payload`, already decoded by `decode_domain`, as text.

    Bytes are decoded with the encoding the parser detected for them.
    """

    if isinstance(payload, str):
        return payload
    return payload.decode(domain.source_encoding() or "utf-8")


def encode_domain(domain: PasswordDomainSpec, *, source: bytes | str = b"") -> str:
    """Encode the domain model back to XML text.

    `source` is the document the model was decoded from. Its prolog is kept in
    the output, and it is attached to an `EncodeError` for diagnosis.
    """

    try:
        root = domain.to_element()
        if not source:
            return etree.tostring(root, encoding="unicode")

        document = _parse(source)
        document.attrib.clear()
        for key, value in root.attrib.items():
            document.set(key, value)
        document.text = root.text
        document[:] = list(root)
        return etree.tostring(document.getroottree(), encoding="unicode")
    except (TypeError, ValueError) as exc:
        # lxml refuses NUL bytes and control characters in attribute values.
        raise EncodeError(str(exc), source) from exc
