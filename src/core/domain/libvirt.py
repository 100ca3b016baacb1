"""Libvirt domain schema (subset) bound to XML.

Why not a full schema:
- The domain XML is owned by KubeVirt/libvirt and changes between versions.
  The hook only needs the path `<domain>/<devices>/<graphics>`.

How fidelity is kept:
- Every model remembers the element it was decoded from. Encoding starts from a
  copy of that element and only writes back the fields the model declares, so
  unknown devices, metadata, foreign namespaces, comments and whitespace come
  out exactly as they went in.
- Attribute values stay strings. `None` means the attribute is absent, `""`
  means present and empty.
"""

from __future__ import annotations

import copy
from typing import Any, ClassVar, Self, Sequence, Type

from lxml import etree
from pydantic import BaseModel, Field, PrivateAttr
from pydantic.config import ConfigDict


class SchemaMismatchError(ValueError):
    """The element does not have the shape the model expects."""


def _local_name(element: etree._Element) -> str | None:
    # Comments and processing instructions have a non-string tag.
    if not isinstance(element.tag, str):
        return None
    return etree.QName(element).localname


def _children(parent: etree._Element, tag: str) -> list[etree._Element]:
    return [child for child in parent if _local_name(child) == tag]


def _child_text(parent: etree._Element, tag: str) -> str | None:
    found = _children(parent, tag)
    if not found:
        return None
    return found[0].text or ""


def _set_child_text(parent: etree._Element, tag: str, value: str | None) -> None:
    found = _children(parent, tag)
    if value is None:
        for child in found:
            parent.remove(child)
        return
    if not found:
        etree.SubElement(parent, tag).text = value
    elif (found[0].text or "") != value:
        found[0].text = value


def _replace_children(parent: etree._Element, tag: str, models: Sequence["XmlElement"]) -> None:
    """Write `models` over the `tag` children of `parent`, keeping their positions."""

    existing = _children(parent, tag)
    formatted = [model.to_element() for model in models]

    for old, new in zip(existing, formatted):
        parent.replace(old, new)
    for old in existing[len(formatted):]:
        parent.remove(old)

    extra = formatted[len(existing):]
    if not extra:
        return
    if existing:
        index = parent.index(formatted[len(existing) - 1]) + 1
        for offset, element in enumerate(extra):
            parent.insert(index + offset, element)
    else:
        parent.extend(extra)


class XmlElement(BaseModel):
    """Base for models that map onto one XML element."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    xml_tag: ClassVar[str]
    # Field names encoded as XML attributes; the field alias is the attribute name.
    xml_attributes: ClassVar[tuple[str, ...]] = ()

    _source: etree._Element | None = PrivateAttr(default=None)

    @classmethod
    def attribute_name(cls, field: str) -> str:
        return cls.model_fields[field].alias or field

    @classmethod
    def from_element(cls, element: etree._Element) -> Self:
        tag = _local_name(element)
        if tag != cls.xml_tag:
            raise SchemaMismatchError(f"expected <{cls.xml_tag}> element, got <{tag}>")

        values: dict[str, Any] = {}
        for field in cls.xml_attributes:
            key = cls.attribute_name(field)
            if key in element.attrib:
                values[field] = element.get(key)
        values.update(cls._parse_children(element))

        model = cls.model_validate(values)
        model._source = element
        return model

    @classmethod
    def _parse_children(cls, element: etree._Element) -> dict[str, Any]:
        return {}

    def to_element(self) -> etree._Element:
        if self._source is not None:
            element = copy.deepcopy(self._source)
        else:
            element = etree.Element(self.xml_tag)

        for field in self.xml_attributes:
            key = self.attribute_name(field)
            value = getattr(self, field)
            if self._omit_attribute(field, value):
                element.attrib.pop(key, None)
            else:
                element.set(key, value)

        self._format_children(element)
        return element

    def _omit_attribute(self, field: str, value: str | None) -> bool:
        return value is None

    def _format_children(self, element: etree._Element) -> None:
        return None


class GraphicsListen(XmlElement):
    """`<listen>` child of a graphics device."""

    xml_tag: ClassVar[str] = "listen"
    xml_attributes: ClassVar[tuple[str, ...]] = ("type", "address", "network", "socket")

    type: str | None = None
    address: str | None = None
    network: str | None = None
    socket: str | None = None


class Graphics(XmlElement):
    """`<graphics>` device (VNC, SPICE, ...)."""

    xml_tag: ClassVar[str] = "graphics"
    xml_attributes: ClassVar[tuple[str, ...]] = (
        "type",
        "port",
        "tls_port",
        "autoport",
        "default_mode",
        "keymap",
        "passwd_valid_to",
        "listen_address",
        "share_policy",
    )

    type: str | None = None
    port: str | None = None
    tls_port: str | None = Field(default=None, alias="tlsPort")
    autoport: str | None = None
    default_mode: str | None = Field(default=None, alias="defaultMode")
    keymap: str | None = None
    passwd_valid_to: str | None = Field(default=None, alias="passwdValidTo")
    listen_address: str | None = Field(default=None, alias="listen")
    share_policy: str | None = Field(default=None, alias="sharePolicy")

    listens: list[GraphicsListen] = Field(default_factory=list)

    @classmethod
    def _parse_children(cls, element: etree._Element) -> dict[str, Any]:
        return {"listens": [GraphicsListen.from_element(child) for child in _children(element, "listen")]}

    def _format_children(self, element: etree._Element) -> None:
        _replace_children(element, "listen", self.listens)


class Devices(XmlElement):
    """`<devices>` list. Only graphics devices are typed."""

    xml_tag: ClassVar[str] = "devices"
    graphics_model: ClassVar[Type[Graphics]] = Graphics

    emulator: str | None = None
    graphics: list[Graphics] = Field(default_factory=list)

    @classmethod
    def _parse_children(cls, element: etree._Element) -> dict[str, Any]:
        return {
            "emulator": _child_text(element, "emulator"),
            "graphics": [cls.graphics_model.from_element(child) for child in _children(element, "graphics")],
        }

    def _format_children(self, element: etree._Element) -> None:
        _set_child_text(element, "emulator", self.emulator)
        _replace_children(element, "graphics", self.graphics)


class DomainSpec(XmlElement):
    """Root `<domain>` element."""

    xml_tag: ClassVar[str] = "domain"
    xml_attributes: ClassVar[tuple[str, ...]] = ("type", "id")
    devices_model: ClassVar[Type[Devices]] = Devices

    type: str | None = None
    id: str | None = None
    name: str | None = None
    uuid: str | None = None
    devices: Devices | None = None

    @classmethod
    def _parse_children(cls, element: etree._Element) -> dict[str, Any]:
        found = _children(element, "devices")
        if len(found) > 1:
            raise SchemaMismatchError("domain has more than one <devices> element")
        return {
            "name": _child_text(element, "name"),
            "uuid": _child_text(element, "uuid"),
            "devices": cls.devices_model.from_element(found[0]) if found else None,
        }

    def source_encoding(self) -> str | None:
        """Encoding of the document this domain was decoded from."""

        if self._source is None:
            return None
        return self._source.getroottree().docinfo.encoding

    def _format_children(self, element: etree._Element) -> None:
        _set_child_text(element, "name", self.name)
        _set_child_text(element, "uuid", self.uuid)
        _replace_children(element, "devices", _present(self.devices))


def _present(model: XmlElement | None) -> list[XmlElement]:
    return [] if model is None else [model]
