from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum

from bootstat.domain.deployment.model.deployment import Deployment
from bootstat.domain.shared.error import ParseError
from bootstat.domain.storage.port.image_store import ImageStore
from bootstat.domain.storage.port.sysroot import Sysroot

BOOTC_GROUP = "bootc"
BACKEND_KEY = "backend"


class Backend(StrEnum):
    OSTREE_CONTAINER = "ostree-container"

    @classmethod
    def parse(cls, value: str) -> "Backend":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ParseError(f"Invalid backend: {value}") from None


@dataclass
class Storage:
    """Session handle: the sysroot plus the image stores it can use.

    Attributes:
        sysroot: Deployment enumeration.
        store: Store used when a deployment does not name a backend.
        backends: Stores by backend name, for deployments that do.
    """

    sysroot: Sysroot
    store: ImageStore
    backends: Mapping[Backend, ImageStore] = field(default_factory=dict)

    def store_for(self, deployment: Deployment) -> ImageStore | None:
        """The image store named in the deployment origin, if any."""
        if deployment.origin is None:
            return None
        name = deployment.origin.optional_string(BOOTC_GROUP, BACKEND_KEY)
        if name is None:
            return None
        backend = Backend.parse(name)
        try:
            return self.backends[backend]
        except KeyError:
            raise ParseError(f"Backend not available: {backend}") from None
