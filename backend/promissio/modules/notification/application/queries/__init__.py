from .get_contract_notifications_query import (
    GetContractNotificationsQuery,
    GetContractNotificationsQueryHandler,
)

__all__ = ["GetContractNotificationsQuery", "GetContractNotificationsQueryHandler"]
