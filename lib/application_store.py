# =============================================================================
# lib/application_store.py - In-Memory Application Store
# =============================================================================
# Holds every application record for the lifetime of one store instance.
#
# The store is an ordinary object: the FastAPI app owns one on app.state,
# tests create their own. Nothing is shared through module globals.
#
# IDs come from a single counter that starts at the highest numeric ID in
# the initial records and only ever goes up, so deleted IDs are never
# handed out again.
#
# Usage:
#   from lib.application_store import ApplicationStore
#   store = ApplicationStore(load_seed_data(path))
#   record = store.create(ApplicationCreate(name="X", description="Y"))
# =============================================================================

from __future__ import annotations

import logging
import threading
from typing import Any, Iterable

from core.models.application import (
    Application,
    ApplicationCreate,
    ApplicationStatus,
)
from lib.utils import numeric_id

# Set up logging for this module
logger = logging.getLogger(__name__)


class ApplicationStore:
    """
    In-memory store of application records.

    Records are frozen models. update() and delete() replace or remove the
    slot holding a record, so a record returned earlier is never modified.

    Mutations run under a lock: the sync route handlers execute on
    FastAPI's threadpool, and "find slot then mutate" or "bump counter
    then append" must not interleave.

    Example:
        store = ApplicationStore([Application(id="40", name="A", description="B")])
        created = store.create(ApplicationCreate(name="X", description="Y"))
        created.id  # "41"
    """

    def __init__(self, records: Iterable[Application] | None = None):
        self._records: list[Application] = list(records or [])
        self._lock = threading.Lock()
        self._last_id = max(
            (n for n in (numeric_id(r.id) for r in self._records) if n is not None),
            default=0,
        )
        logger.debug(
            f"Store initialized with {len(self._records)} records, last_id={self._last_id}"
        )

    def __len__(self) -> int:
        return len(self._records)

    @property
    def last_id(self) -> int:
        """Highest ID assigned (or loaded) so far."""
        return self._last_id

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def find_all(self) -> list[Application]:
        """Return every record, unfiltered. The list is a copy."""
        return list(self._records)

    def find_by_id(self, record_id: str) -> Application | None:
        """Return the record with this ID, or None if there isn't one."""
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create(self, fields: ApplicationCreate) -> Application:
        """
        Add a new record.

        Assigns the next ID and the in_review status.

        Args:
            fields: Validated name and description

        Returns:
            The stored record
        """
        with self._lock:
            self._last_id += 1
            record = Application(
                id=str(self._last_id),
                name=fields.name,
                description=fields.description,
                status=ApplicationStatus.IN_REVIEW,
            )
            self._records.append(record)

        logger.info(f"Created application: {record.id}")
        return record

    def update(self, record_id: str, patch: dict[str, Any]) -> Application | None:
        """
        Merge patch into a record and store the result in its slot.

        Args:
            record_id: ID of the record to update
            patch: Fields to overwrite; keys not present are kept

        Returns:
            The updated record, or None if no record has this ID
        """
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                return None

            current = self._records[index]
            # Validated: stored status is always one of ApplicationStatus
            updated = Application.model_validate({**current.model_dump(), **patch, "id": current.id})
            self._records[index] = updated

        logger.info(f"Updated application: {record_id}")
        return updated

    def delete(self, record_id: str) -> bool:
        """
        Remove a record.

        Returns:
            True if a record was removed, False if no record has this ID
        """
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                return False
            del self._records[index]

        logger.info(f"Deleted application: {record_id}")
        return True

    def _index_of(self, record_id: str) -> int | None:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return None
