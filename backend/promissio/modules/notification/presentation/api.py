"""Notification feed route."""

from fastapi import APIRouter, Depends

from promissio.modules.notification.application.queries.get_contract_notifications_query import (
    GetContractNotificationsQuery,
    GetContractNotificationsQueryHandler,
)
from promissio.modules.notification.presentation.dependencies import (
    get_notifications_handler,
)
from promissio.modules.notification.presentation.schemas import (
    NotificationFeedResponse,
    NotificationResponse,
)

router = APIRouter()


@router.get("", response_model=NotificationFeedResponse)
async def get_notifications(
    handler: GetContractNotificationsQueryHandler = Depends(get_notifications_handler),
) -> NotificationFeedResponse:
    """Notifications derived from all contracts at server time."""
    notifications = await handler.execute(GetContractNotificationsQuery())
    return NotificationFeedResponse(
        notifications=[NotificationResponse.from_domain(n) for n in notifications],
        has_alerts=bool(notifications),
    )
