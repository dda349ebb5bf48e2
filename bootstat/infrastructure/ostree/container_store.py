"""Image store for deployments created from container images pulled into ostree."""

import hashlib
import json
from typing import Any

from bootstat.domain.deployment.model.deployment import Deployment
from bootstat.domain.image.model.ostree_ref import OstreeImageReference
from bootstat.domain.image.model.state import CachedImageUpdate, ImageState
from bootstat.domain.image.model.value import CachedImageStatus, Store
from bootstat.domain.image.service.image_status import cached_image_status
from bootstat.domain.image.service.translate import from_external
from bootstat.domain.shared.error import ParseError
from bootstat.infrastructure.ostree.repo import OstreeRepo

# Commit metadata written when an image is imported
MANIFEST_DIGEST_KEY = "ostree.manifest-digest"
IMAGE_CONFIG_KEY = "ostree.container.image-config"
# Detached metadata written when an update is fetched but not deployed
CACHED_UPDATE_MANIFEST_KEY = "ostree-ext.cached-update.manifest"
CACHED_UPDATE_CONFIG_KEY = "ostree-ext.cached-update.config"


def _load_json(key: str, value: str | None) -> dict[str, Any] | None:
    if value is None:
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON in {key}: {e}") from e


class OstreeContainerStore:
    """Reads image metadata from the commits of the sysroot repository."""

    def __init__(self, repo: OstreeRepo) -> None:
        self._repo = repo

    def spec(self) -> Store:
        return Store.OSTREE_CONTAINER

    def query_image_commit(self, checksum: str) -> ImageState:
        digest = self._repo.metadata_string(checksum, MANIFEST_DIGEST_KEY)
        if digest is None:
            raise ParseError(f"Commit {checksum} is not a container image: missing {MANIFEST_DIGEST_KEY}")
        config = _load_json(
            IMAGE_CONFIG_KEY, self._repo.metadata_string(checksum, IMAGE_CONFIG_KEY)
        )

        cached_update = None
        manifest = self._repo.detached_metadata_string(checksum, CACHED_UPDATE_MANIFEST_KEY)
        if manifest is not None:
            cached_update = CachedImageUpdate(
                manifest_digest=f"sha256:{hashlib.sha256(manifest.encode()).hexdigest()}",
                configuration=_load_json(
                    CACHED_UPDATE_CONFIG_KEY,
                    self._repo.detached_metadata_string(checksum, CACHED_UPDATE_CONFIG_KEY),
                ),
            )

        return ImageState(
            manifest_digest=digest,
            configuration=config,
            cached_update=cached_update,
        )

    def image_status(
        self, deployment: Deployment, image: OstreeImageReference
    ) -> CachedImageStatus:
        state = self.query_image_commit(deployment.checksum)
        return cached_image_status(from_external(image), state)
