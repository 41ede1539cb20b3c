"""FastAPI dependencies for the notification module."""

from fastapi import Depends

from promissio.core.config import get_settings
from promissio.modules.contracts.infrastructure.repositories.contract_repository import (
    ContractRepository,
)
from promissio.modules.contracts.presentation.dependencies import (
    get_contract_repository,
)
from promissio.modules.notification.application.queries.get_contract_notifications_query import (
    GetContractNotificationsQueryHandler,
)
from promissio.modules.notification.domain.services.notification_deriver import (
    NotificationDeriver,
)
from promissio.utils.date import utc_now


def get_notification_deriver() -> NotificationDeriver:
    config = get_settings().notifications
    return NotificationDeriver(window_days=config.window_days, limit=config.limit)


def get_notifications_handler(
    repository: ContractRepository = Depends(get_contract_repository),
    deriver: NotificationDeriver = Depends(get_notification_deriver),
) -> GetContractNotificationsQueryHandler:
    return GetContractNotificationsQueryHandler(repository, deriver, clock=utc_now)
