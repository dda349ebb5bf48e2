from abc import abstractmethod
from typing import Protocol

from bootstat.domain.deployment.model.deployment import Deployment
from bootstat.domain.image.model.ostree_ref import OstreeImageReference
from bootstat.domain.image.model.state import ImageState
from bootstat.domain.image.model.value import CachedImageStatus, Store


class ImageStore(Protocol):
    """Backend holding the container images deployments were created from."""

    @abstractmethod
    def spec(self) -> Store: ...

    @abstractmethod
    def image_status(
        self, deployment: Deployment, image: OstreeImageReference
    ) -> CachedImageStatus: ...

    @abstractmethod
    def query_image_commit(self, checksum: str) -> ImageState: ...
