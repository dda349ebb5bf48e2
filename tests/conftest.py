"""Global test fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest

from bootstat.domain.deployment.model.deployment import Deployment
from bootstat.domain.deployment.model.origin import Origin
from bootstat.domain.image.model.ostree_ref import OstreeImageReference
from bootstat.domain.image.model.state import ImageState
from bootstat.domain.image.model.value import CachedImageStatus, Store
from bootstat.domain.image.service.image_status import cached_image_status
from bootstat.domain.image.service.translate import from_external
from bootstat.domain.shared.error import NotBootedError
from bootstat.domain.storage.model.storage import Backend, Storage

FIXTURES_DIR = Path(__file__).parent / "fixtures"

DIGEST = "sha256:" + "ab" * 32
UPDATE_DIGEST = "sha256:" + "cd" * 32

FEDORA_ORIGIN = """\
[origin]
container-image-reference=ostree-unverified-registry:quay.io/example/someimage:latest
"""


class FakeSysroot:
    """In-memory sysroot."""

    def __init__(self, deployments: list[Deployment], booted: Deployment | None = None):
        self._deployments = deployments
        self._booted = booted

    def is_booted(self) -> bool:
        return self._booted is not None

    def deployments(self) -> list[Deployment]:
        return list(self._deployments)

    def booted_deployment(self) -> Deployment | None:
        return self._booted

    def require_booted_deployment(self) -> Deployment:
        if self._booted is None:
            raise NotBootedError("Not booted into an OSTree deployment")
        return self._booted


class FakeImageStore:
    """Image store returning the same image state for every commit."""

    def __init__(self, state: ImageState | None = None):
        self.state = state or ImageState(
            manifest_digest=DIGEST,
            configuration={
                "config": {
                    "Labels": {
                        "org.opencontainers.image.version": "stream9.20240807.0",
                        "org.opencontainers.image.created": "2024-08-07T10:00:00Z",
                    }
                }
            },
        )
        self.calls: list[tuple[Deployment, OstreeImageReference]] = []

    def spec(self) -> Store:
        return Store.OSTREE_CONTAINER

    def image_status(
        self, deployment: Deployment, image: OstreeImageReference
    ) -> CachedImageStatus:
        self.calls.append((deployment, image))
        return cached_image_status(from_external(image), self.state)

    def query_image_commit(self, checksum: str) -> ImageState:
        return self.state


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def make_deployment() -> Callable[..., Deployment]:
    """Factory for deployments; ``origin`` is keyfile text."""

    def factory(
        osname: str = "fedora",
        index: int = 0,
        checksum: str | None = None,
        serial: int = 0,
        staged: bool = False,
        pinned: bool = False,
        origin: str | None = None,
    ) -> Deployment:
        return Deployment(
            osname=osname,
            index=index,
            checksum=checksum or f"{index:02d}" * 32,
            deploy_serial=serial,
            staged=staged,
            pinned=pinned,
            origin=Origin.parse(origin) if origin is not None else None,
        )

    return factory


@pytest.fixture
def image_store() -> FakeImageStore:
    return FakeImageStore()


@pytest.fixture
def make_storage(image_store: FakeImageStore) -> Callable[..., Storage]:
    def factory(deployments: list[Deployment], booted: Deployment | None = None) -> Storage:
        return Storage(
            sysroot=FakeSysroot(deployments, booted),
            store=image_store,
            backends={Backend.OSTREE_CONTAINER: image_store},
        )

    return factory
