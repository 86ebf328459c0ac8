"""Durable storage for subscriptions and notifications.

Each store is read once at startup and written through after every change.
Missing or corrupt data loads as an empty list; the problem is logged and
the next save overwrites it.
"""

import asyncio
import json
import logging
import os
import time

import aiofiles
import aiofiles.os
from pydantic import BaseModel, ValidationError

from importer_intel.schemas.alerts import Notification, Subscription

logger = logging.getLogger("intel.persistence")


class JsonFileBackend:
    """Opaque JSON blobs keyed by name, one file per key under ``data_dir``."""

    def __init__(self, data_dir: str):
        self.data_dir = data_dir

    def path_for(self, key: str) -> str:
        return os.path.join(self.data_dir, f"{key}.json")

    async def read(self, key: str) -> str | None:
        path = self.path_for(key)
        if not os.path.exists(path):
            return None
        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            return await f.read()

    async def write(self, key: str, text: str) -> None:
        """Replace the blob for ``key``. Readers never see a partially written file."""
        os.makedirs(self.data_dir, exist_ok=True)
        path = self.path_for(key)
        tmp_path = f"{path}.tmp"
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(text)
        await aiofiles.os.replace(tmp_path, path)


async def _load_list(backend: JsonFileBackend, key: str, model: type[BaseModel]) -> list:
    try:
        text = await backend.read(key)
    except OSError as e:
        logger.error("Could not read %s: %s", key, e)
        return []
    if not text:
        return []

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error("Stored %s is not valid JSON, starting empty: %s", key, e)
        return []
    if not isinstance(raw, list):
        logger.error("Stored %s is not a list, starting empty", key)
        return []

    items = []
    for entry in raw:
        try:
            items.append(model.model_validate(entry))
        except ValidationError:
            logger.warning("Skipping invalid entry in %s: %r", key, entry)
    return items


class SubscriptionStore:
    def __init__(self, backend: JsonFileBackend, key: str):
        self.backend = backend
        self.key = key
        self.subscriptions: list[Subscription] = []
        self._save_lock = asyncio.Lock()

    async def load(self) -> None:
        self.subscriptions = await _load_list(self.backend, self.key, Subscription)
        logger.info("Loaded %d subscriptions", len(self.subscriptions))

    async def save(self) -> None:
        async with self._save_lock:
            payload = [s.model_dump(by_alias=True) for s in self.subscriptions]
            await self.backend.write(self.key, json.dumps(payload))

    def get(self, company_name: str) -> Subscription | None:
        for sub in self.subscriptions:
            if sub.company_name == company_name:
                return sub
        return None

    async def upsert(self, subscription: Subscription) -> Subscription:
        """Store ``subscription``, replacing an existing one for the same company in place."""
        for i, existing in enumerate(self.subscriptions):
            if existing.company_name == subscription.company_name:
                self.subscriptions[i] = subscription
                break
        else:
            self.subscriptions.append(subscription)
        await self.save()
        return subscription


class NotificationStore:
    """Notifications, newest first. Every stored notification counts as unread."""

    def __init__(self, backend: JsonFileBackend, key: str):
        self.backend = backend
        self.key = key
        self.notifications: list[Notification] = []
        self._save_lock = asyncio.Lock()

    async def load(self) -> None:
        self.notifications = await _load_list(self.backend, self.key, Notification)
        logger.info("Loaded %d notifications", len(self.notifications))

    async def save(self) -> None:
        async with self._save_lock:
            payload = [n.model_dump() for n in self.notifications]
            await self.backend.write(self.key, json.dumps(payload))

    @property
    def unread_count(self) -> int:
        return len(self.notifications)

    async def push(self, message: str) -> Notification:
        now_ms = int(time.time() * 1000)
        notification = Notification(id=self._next_id(now_ms), message=message, timestamp=now_ms)
        self.notifications.insert(0, notification)
        await self.save()
        return notification

    def _next_id(self, now_ms: int) -> str:
        """Millisecond timestamp, suffixed with a counter when already taken."""
        taken = {n.id for n in self.notifications}
        candidate = str(now_ms)
        suffix = 1
        while candidate in taken:
            candidate = f"{now_ms}-{suffix}"
            suffix += 1
        return candidate

    async def clear(self) -> None:
        self.notifications = []
        await self.save()
