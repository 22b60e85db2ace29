"""ProjectRepository -- replace-the-collection load and best-effort save.

The stateful caller loads the whole collection, runs engine computations on
that snapshot, applies the proposed field updates, and saves the whole
collection back. Load order:

    remote sheet (non-empty)  -> also backed up to the local store
    local store               -> when remote is empty, down, or not configured
    empty list                -> when neither has data

Saves always write the local backup first, then push to the remote.
"""

import logging

from fiscal_tracker.schemas.models import Project
from fiscal_tracker.storage.local_store import LocalProjectStore
from fiscal_tracker.sync.circuit_breaker import CircuitOpenError
from fiscal_tracker.sync.sheets_client import SheetsClient, SheetsSyncError

logger = logging.getLogger(__name__)


class ProjectRepository:
    """Loads and saves the project collection across remote and local storage.

    Args:
        store: Local JSON store used as backup and offline fallback.
        client: Remote sheets client; ``None`` runs local-only.
    """

    def __init__(self, store: LocalProjectStore, client: SheetsClient | None = None):
        self.store = store
        self.client = client

    async def _load_remote(self) -> list[Project] | None:
        if self.client is None or not self.client.is_configured:
            return None
        try:
            return await self.client.fetch_projects()
        except (SheetsSyncError, CircuitOpenError) as exc:
            logger.warning("Remote load failed, falling back to local store: %s", exc)
            return None

    async def load(self) -> list[Project]:
        """Load the collection, preferring the remote sheet."""
        remote = await self._load_remote()
        if remote:
            self.store.save(remote)
            return remote

        local = self.store.load()
        if local:
            return local

        logger.info("No projects found remotely or locally")
        return []

    async def save(self, projects: list[Project]) -> bool:
        """Save the collection. Returns the remote outcome (local when offline)."""
        local_ok = self.store.save(projects)
        if self.client is None or not self.client.is_configured:
            return local_ok
        return await self.client.push_projects(projects)

    async def reset(self) -> list[Project]:
        """Drop the local copy and reload from the remote sheet."""
        self.store.clear()
        return await self.load()
