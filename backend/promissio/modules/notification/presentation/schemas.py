"""Response schemas for the notification feed."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from promissio.modules.notification.domain.value_objects.notification import (
    Notification,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NotificationResponse(_CamelModel):
    id: str
    type: str
    title: str
    description: str
    date: datetime
    contract_id: str

    @classmethod
    def from_domain(cls, notification: Notification) -> "NotificationResponse":
        return cls(
            id=notification.id,
            type=notification.kind.value,
            title=notification.title,
            description=notification.description,
            date=notification.date,
            contract_id=notification.contract_id,
        )


class NotificationFeedResponse(_CamelModel):
    notifications: list[NotificationResponse]
    has_alerts: bool
