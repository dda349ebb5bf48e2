from dishka import AsyncContainer, Provider, Scope, from_context, make_async_container, provide

from bootstat.config import Config
from bootstat.domain.host.service.status import StatusService
from bootstat.domain.storage.model.storage import Storage
from bootstat.infrastructure.ostree.di import OstreeProvider


class StatusProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)

    @provide(scope=Scope.APP)
    def get_status_service(self, storage: Storage) -> StatusService:
        return StatusService(storage=storage)


def create_container(config: Config | None = None) -> AsyncContainer:
    config = config or Config()

    return make_async_container(
        StatusProvider(),
        OstreeProvider(),
        context={Config: config},
    )
