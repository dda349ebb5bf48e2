"""The host status snapshot reported by ``bootstat status``.

Serialized form (YAML)::

    apiVersion: org.containers.bootc/v1alpha1
    kind: BootcHost
    metadata:
      name: host
    spec:
      image:
        image: quay.io/example/someimage:latest
        transport: registry
        signature: insecure
      bootOrder: default
    status:
      staged: null
      booted:
        image: ...
        cachedUpdate: null
        incompatible: false
        pinned: false
        store: ostreeContainer
        ostree:
          checksum: 26836632adf6228d64ef07a26fd3efaf177104efd1f341a2cf7909a3e4e2c72c
          deploySerial: 0
      rollback: null
      rollbackQueued: false
      type: bootcHost
"""

from enum import StrEnum
from typing import Literal

from pydantic import Field, NonNegativeInt

from bootstat.domain.deployment.model.value import BootOrder
from bootstat.domain.image.model.value import ImageReference, ImageStatus, Store
from bootstat.domain.shared.model.value import ValueObject

API_VERSION = "org.containers.bootc/v1alpha1"
KIND = "BootcHost"
OBJECT_NAME = "host"


class HostType(StrEnum):
    BOOTC_HOST = "bootcHost"


class BootEntryOstree(ValueObject):
    checksum: str
    deploy_serial: NonNegativeInt


class BootEntry(ValueObject):
    image: ImageStatus | None = None
    cached_update: ImageStatus | None = None
    incompatible: bool = False
    store: Store | None = None
    pinned: bool = False
    ostree: BootEntryOstree | None = None


class HostSpec(ValueObject):
    """Declared intent: the image to track and the boot order."""

    image: ImageReference | None = None
    boot_order: BootOrder = BootOrder.DEFAULT


class HostStatus(ValueObject):
    """Observed state."""

    staged: BootEntry | None = None
    booted: BootEntry | None = None
    rollback: BootEntry | None = None
    rollback_queued: bool = False
    ty: HostType | None = Field(default=None, alias="type")


class ObjectMeta(ValueObject):
    name: str = OBJECT_NAME


class Host(ValueObject):
    api_version: Literal["org.containers.bootc/v1alpha1"] = API_VERSION
    kind: Literal["BootcHost"] = KIND
    metadata: ObjectMeta = ObjectMeta()
    spec: HostSpec = HostSpec()
    status: HostStatus = HostStatus()
