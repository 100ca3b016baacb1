"""Shared fixtures: a KubeVirt-style VMI and the domain XML virt-launcher builds for it."""

from __future__ import annotations

import json
from typing import Any

import pytest

DOMAIN_XML = """<domain type="kvm" xmlns:qemu="http://libvirt.org/schemas/domain/qemu/1.0">
  <name>default_testvmi</name>
  <uuid>5a9fc181-957e-5c32-9e5a-2de5e9673531</uuid>
  <memory unit="b">8388608</memory>
  <os>
    <type arch="x86_64" machine="q35">hvm</type>
  </os>
  <sysinfo type="smbios">
    <system>
      <entry name="manufacturer">KubeVirt &amp; friends</entry>
    </system>
  </sysinfo>
  <devices>
    <emulator>/usr/bin/qemu-system-x86_64</emulator>
    <interface type="ethernet">
      <source></source>
      <model type="virtio-non-transitional"></model>
      <alias name="ua-default"></alias>
    </interface>
    <controller type="usb" index="0" model="none"></controller>
    <video>
      <model type="vga" heads="1" vram="16384"></model>
    </video>
    <graphics type="vnc">
      <listen type="socket" socket="/var/run/kubevirt-private/abc/virt-vnc"></listen>
    </graphics>
    <disk device="disk" type="file">
      <source file="/var/run/kubevirt-ephemeral-disks/disk-data/containerdisk/disk.qcow2"></source>
      <target bus="virtio" dev="vda"></target>
      <driver cache="none" name="qemu" type="qcow2" discard="unmap"></driver>
    </disk>
  </devices>
  <metadata>
    <kubevirt xmlns="http://kubevirt.io">
      <uid>7ba1c3c4-8d3b-4d7f-9f4e-22f1f0c9b6b1</uid>
      <graceperiod>
        <deletionGracePeriodSeconds>30</deletionGracePeriodSeconds>
      </graceperiod>
    </kubevirt>
  </metadata>
  <qemu:commandline>
    <qemu:arg value="-chardev"></qemu:arg>
  </qemu:commandline>
</domain>"""

DOMAIN_WITHOUT_GRAPHICS_XML = """<domain type="kvm">
  <name>default_headless</name>
  <devices>
    <emulator>/usr/bin/qemu-system-x86_64</emulator>
    <controller type="usb" index="0" model="none"></controller>
  </devices>
</domain>"""


def build_vmi(annotations: dict[str, str] | None = None) -> dict[str, Any]:
    """Return a minimal VirtualMachineInstance document."""

    metadata: dict[str, Any] = {"name": "testvmi", "namespace": "default"}
    if annotations is not None:
        metadata["annotations"] = annotations
    return {
        "apiVersion": "kubevirt.io/v1",
        "kind": "VirtualMachineInstance",
        "metadata": metadata,
        "spec": {"domain": {"devices": {}, "resources": {}}},
        "status": {"phase": "Scheduled"},
    }


@pytest.fixture
def domain_xml() -> bytes:
    return DOMAIN_XML.encode("utf-8")


@pytest.fixture
def headless_domain_xml() -> bytes:
    return DOMAIN_WITHOUT_GRAPHICS_XML.encode("utf-8")


@pytest.fixture
def vmi_with_password() -> bytes:
    annotations = {
        "hooks.kubevirt.io/hookSidecars": '[{"image": "registry:5000/kubevirt/vnc-passwd-hook:devel"}]',
        "vncPasswd": "s3cr3t",
    }
    return json.dumps(build_vmi(annotations)).encode("utf-8")


@pytest.fixture
def vmi_without_password() -> bytes:
    return json.dumps(build_vmi({})).encode("utf-8")


LATIN1_DOMAIN_XML = """<?xml version="1.0" encoding="ISO-8859-1"?>
<domain type="kvm"><name>café</name><devices><graphics type="vnc"/></devices></domain>"""

PROLOG_DOMAIN_XML = """<!DOCTYPE domain [
<!ENTITY host "node01">
]>
<!-- generated by virt-launcher -->
<domain type="kvm"><name>&host;</name><devices><graphics type="vnc"/></devices></domain>"""
