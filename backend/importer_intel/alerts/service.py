"""AlertService: importer alert subscriptions and the notification feed."""

import logging

from importer_intel.alerts.persistence import JsonFileBackend, NotificationStore, SubscriptionStore
from importer_intel.config import Settings
from importer_intel.schemas.alerts import Notification, Subscription

logger = logging.getLogger("intel.alerts")


class AlertService:
    def __init__(self, settings: Settings, backend: JsonFileBackend | None = None):
        backend = backend or JsonFileBackend(settings.data_dir)
        self.subscriptions = SubscriptionStore(backend, settings.subscriptions_key)
        self.notifications = NotificationStore(backend, settings.notifications_key)

    async def load(self) -> None:
        await self.subscriptions.load()
        await self.notifications.load()

    async def subscribe(self, company_name: str, email: str) -> Subscription:
        """Subscribe ``email`` to alerts for ``company_name``.

        Re-subscribing keeps the company's original position and replaces the
        email. Raises pydantic.ValidationError for a malformed email.
        """
        subscription = await self.subscriptions.upsert(
            Subscription(company_name=company_name, email=email)
        )
        await self.notifications.push(f"You are now subscribed to alerts for {company_name}.")
        logger.info("Subscribed to alerts for %r", company_name)
        return subscription

    def list_notifications(self) -> list[Notification]:
        return list(self.notifications.notifications)

    @property
    def unread_count(self) -> int:
        return self.notifications.unread_count

    async def clear_notifications(self) -> None:
        await self.notifications.clear()
