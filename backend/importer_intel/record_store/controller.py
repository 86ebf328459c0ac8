"""DetailController: drives detail fetches and refreshes into the record store."""

import logging
from typing import Callable

from importer_intel.errors import GenerationError, MalformedResponseError
from importer_intel.record_store.store import ActiveRecord, ImporterRecordStore
from importer_intel.schemas.importer import ImporterSummary
from importer_intel.services.intel_client import ImporterIntelClient

logger = logging.getLogger("intel.records")

UNEXPECTED_ERROR = "An unexpected error occurred while fetching details."


class DetailController:
    """Selection, fetch and refresh for the active importer.

    ``find_summary`` resolves a name against the summaries currently on
    screen; names it does not know are ignored.
    """

    def __init__(
        self,
        store: ImporterRecordStore,
        client: ImporterIntelClient,
        find_summary: Callable[[str], ImporterSummary | None],
    ):
        self.store = store
        self.client = client
        self.find_summary = find_summary

    def select(self, name: str) -> ActiveRecord | None:
        """Synchronous half of view_details: show the placeholder."""
        summary = self.find_summary(name)
        if summary is None:
            logger.info("Ignoring selection of unknown importer %r", name)
            return None
        active = self.store.select(summary)
        self.store.begin_fetch(name)
        return active

    async def load(self, name: str) -> bool:
        """Fetch details for ``name`` and apply them if it is still selected.

        Must follow a successful ``select``. Returns whether the outcome
        (record or error note) was applied.
        """
        try:
            record = await self.client.fetch_detailed_importer(name)
        except (MalformedResponseError, GenerationError) as e:
            logger.warning("Detail fetch for %r failed: %s", name, e)
            return self.store.apply_error(name, str(e))
        except Exception:
            logger.exception("Detail fetch for %r raised unexpectedly", name)
            return self.store.apply_error(name, UNEXPECTED_ERROR)
        finally:
            self.store.end_fetch(name)
        return self.store.apply_full(name, record)

    async def view_details(self, name: str) -> ActiveRecord | None:
        if self.select(name) is None:
            return None
        await self.load(name)
        return self.store.active

    async def refresh(self, name: str) -> bool:
        """Re-fetch the active record.

        Returns False without doing anything when ``name`` is not active or
        is already being fetched. Failures are kept in ``refresh_error``.
        """
        if not self.store.begin_refresh(name):
            logger.info("Refresh for %r rejected (not active or busy)", name)
            return False
        try:
            record = await self.client.fetch_detailed_importer(name)
        except (MalformedResponseError, GenerationError) as e:
            logger.warning("Refresh for %r failed: %s", name, e)
            self.store.fail_refresh(name, str(e))
            return True
        except Exception:
            logger.exception("Refresh for %r raised unexpectedly", name)
            self.store.fail_refresh(name, UNEXPECTED_ERROR)
            return True
        self.store.apply_refresh(name, record)
        return True
