import asyncio

from dishka import Provider, Scope, provide

from bootstat.config import Config
from bootstat.domain.storage.model.storage import Backend, Storage
from bootstat.domain.storage.port.image_store import ImageStore
from bootstat.domain.storage.port.sysroot import Sysroot
from bootstat.infrastructure.ostree.container_store import OstreeContainerStore
from bootstat.infrastructure.ostree.repo import OstreeRepo
from bootstat.infrastructure.ostree.sysroot import FilesystemSysroot


class OstreeProvider(Provider):
    @provide(scope=Scope.APP)
    async def get_sysroot(self, config: Config) -> Sysroot:
        # Enumerating deployments touches the disk; keep it off the event loop
        return await asyncio.to_thread(
            FilesystemSysroot.load, config.sysroot.path, config.sysroot.running_root
        )

    @provide(scope=Scope.APP)
    def get_repo(self, config: Config) -> OstreeRepo:
        return OstreeRepo(config.sysroot.repo_path, binary=config.sysroot.ostree_binary)

    @provide(scope=Scope.APP)
    def get_image_store(self, repo: OstreeRepo) -> ImageStore:
        return OstreeContainerStore(repo)

    @provide(scope=Scope.APP)
    def get_storage(self, sysroot: Sysroot, store: ImageStore) -> Storage:
        return Storage(
            sysroot=sysroot,
            store=store,
            backends={Backend.OSTREE_CONTAINER: store},
        )
