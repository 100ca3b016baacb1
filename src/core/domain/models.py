"""VirtualMachineInstance models (Pydantic v2).

Only the slice of the KubeVirt VMI that the hook reads is typed: the object
metadata, and within it the annotations. Everything else is accepted and
ignored so that newer VMI schema versions keep decoding.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class ObjectMeta(BaseModel):
    """Kubernetes object metadata (subset)."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(
        default=None,
        description="Name of the VMI.",
    )
    namespace: str | None = Field(
        default=None,
        description="Namespace the VMI lives in.",
    )
    uid: str | None = Field(
        default=None,
        description="Cluster-assigned unique identifier.",
    )
    labels: dict[str, str] = Field(
        default_factory=dict,
        description="Identifying key/value labels.",
    )
    annotations: dict[str, str] = Field(
        default_factory=dict,
        description="Non-identifying key/value annotations (side channel for hook options).",
    )

    @field_validator("labels", "annotations", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        # A JSON `null` map decodes as an empty one.
        return {} if value is None else value


class VirtualMachineInstance(BaseModel):
    """The VMI as handed to the hook by virt-launcher."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    api_version: str | None = Field(
        default=None,
        alias="apiVersion",
    )
    kind: str | None = None
    metadata: ObjectMeta = Field(
        default_factory=ObjectMeta,
        description="Object metadata, including annotations.",
    )
    spec: dict[str, Any] = Field(
        default_factory=dict,
        description="VMI spec, kept opaque: the hook never reads it.",
    )

    @field_validator("metadata", "spec", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    def get_annotations(self) -> dict[str, str]:
        return self.metadata.annotations
