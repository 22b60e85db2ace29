"""LocalProjectStore -- local JSON backup of the project collection.

Stores the whole collection as one camelCase JSON list (default:
``data/projects.json``). It is the offline fallback behind the remote
sheets sync and the backup written on every save.

Security considerations:
    - JSON file size limit: 10 MB cap via ``stat().st_size`` before ``json.load()``
    - Atomic write: tmp file + ``os.replace()`` with cleanup on exception
    - All file I/O uses ``encoding="utf-8"``

Concurrency:
    Assumes a single writer. Callers serialize saves.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from fiscal_tracker.paths import PROJECTS_STORE_PATH
from fiscal_tracker.schemas.models import Project

logger = logging.getLogger(__name__)

MAX_STORE_FILE_SIZE: int = 10 * 1024 * 1024  # 10 MB


class LocalProjectStore:
    """Loads and saves the project collection as a local JSON file.

    Usage::

        store = LocalProjectStore()
        projects = store.load() or []
        store.save(projects)
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or PROJECTS_STORE_PATH

    def load(self) -> list[Project] | None:
        """Load the stored collection.

        Returns ``None`` when the file is missing, oversized, corrupt, not a
        list, or holds an entry that fails validation. A bad store is
        treated like an empty one so the caller can fall back.
        """
        if not self.path.exists():
            logger.debug("No local store at %s", self.path)
            return None

        try:
            file_size = self.path.stat().st_size
        except OSError:
            logger.warning("Cannot stat local store %s", self.path)
            return None

        if file_size > MAX_STORE_FILE_SIZE:
            logger.warning(
                "Local store %s exceeds size limit (%d bytes > %d), ignoring",
                self.path, file_size, MAX_STORE_FILE_SIZE,
            )
            return None

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Corrupt local store %s: %s", self.path, exc)
            return None

        if not isinstance(data, list):
            logger.warning("Local store %s is not a list, ignoring", self.path)
            return None

        try:
            projects = [Project.model_validate(item) for item in data]
        except ValidationError as exc:
            logger.warning("Local store %s failed validation: %s", self.path, exc)
            return None

        logger.info("Loaded %d projects from %s", len(projects), self.path)
        return projects

    def save(self, projects: list[Project]) -> bool:
        """Persist the collection with an atomic write. Returns success."""
        payload = [p.to_wire() for p in projects]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_fd = tempfile.NamedTemporaryFile(
                dir=str(self.path.parent),
                suffix=".json",
                mode="w",
                encoding="utf-8",
                delete=False,
            )
        except OSError as exc:
            logger.error("Cannot write local store %s: %s", self.path, exc)
            return False

        tmp_name = tmp_fd.name
        try:
            json.dump(payload, tmp_fd, indent=2, ensure_ascii=False)
            tmp_fd.close()
            os.replace(tmp_name, str(self.path))
        except (OSError, TypeError, ValueError) as exc:
            tmp_fd.close()
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            logger.error("Failed to save local store %s: %s", self.path, exc)
            return False

        logger.debug("Saved %d projects to %s", len(projects), self.path)
        return True

    def clear(self) -> None:
        """Remove the stored collection, if any."""
        try:
            self.path.unlink()
            logger.info("Cleared local store %s", self.path)
        except FileNotFoundError:
            pass
