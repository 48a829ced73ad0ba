"""
Snapshot persistence: a SQLAlchemy-backed load/save store and a debounced
background saver.

The saver follows a "debounce then overwrite" policy. Every change hands it
the full current snapshot. It writes only once no newer change has arrived
for ``delay`` seconds, and a newer snapshot always supersedes a pending one.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from typing import Any, Callable, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError

from proctor_scheduler.domain.db import DEFAULT_DB_URL
from proctor_scheduler.domain.repositories import DatabaseManager, SnapshotRepository
from proctor_scheduler.domain.store import EntityStore
from proctor_scheduler.errors import PersistenceError

logger = logging.getLogger(__name__)

Snapshot = Dict[str, Any]


class SnapshotStorage:
    """
    Load/save contract over the ``snapshots`` table.

    ``load_snapshot`` and ``save_snapshot`` never raise: failures are logged
    and reported as ``None``/``False`` so the in-memory store stays usable.
    """

    def __init__(self, db_url: str = DEFAULT_DB_URL, db: Optional[DatabaseManager] = None):
        self.db = db or DatabaseManager(db_url)
        self._tables_ready = False

    def _ensure_tables(self) -> None:
        if not self._tables_ready:
            self.db.create_tables()
            self._tables_ready = True

    def read(self, owner_key: str) -> Optional[Snapshot]:
        """
        Read an owner's snapshot.

        Raises:
            PersistenceError: If the database or the stored JSON is unreadable
        """
        try:
            self._ensure_tables()
            session = self.db.get_session()
            try:
                doc = SnapshotRepository.get_by_owner(session, owner_key)
                payload = doc.payload if doc is not None else None
            finally:
                session.close()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not read snapshot for '{owner_key}': {e}") from e

        if payload is None:
            return None
        try:
            data = json.loads(payload)
        except ValueError as e:
            raise PersistenceError(f"Stored snapshot for '{owner_key}' is corrupt: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(f"Stored snapshot for '{owner_key}' is not an object")
        return data

    def write(self, owner_key: str, snapshot: Snapshot) -> None:
        """
        Overwrite an owner's snapshot.

        Raises:
            PersistenceError: If the snapshot cannot be encoded or stored
        """
        try:
            payload = json.dumps(snapshot, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Snapshot for '{owner_key}' is not serializable: {e}") from e
        try:
            self._ensure_tables()
            session = self.db.get_session()
            try:
                SnapshotRepository.upsert(session, owner_key, payload)
            except SQLAlchemyError:
                session.rollback()
                raise
            finally:
                session.close()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not save snapshot for '{owner_key}': {e}") from e

    def load_snapshot(self, owner_key: str) -> Optional[Snapshot]:
        try:
            data = self.read(owner_key)
        except PersistenceError as e:
            logger.error("Snapshot load failed: %s", e)
            return None
        if data is None:
            logger.info("No stored snapshot for '%s'", owner_key)
        else:
            logger.info("Loaded snapshot for '%s'", owner_key)
        return data

    def save_snapshot(self, owner_key: str, snapshot: Snapshot) -> bool:
        try:
            self.write(owner_key, snapshot)
        except PersistenceError as e:
            logger.error("Snapshot save failed: %s", e)
            return False
        logger.info(
            "Saved snapshot for '%s': %d exams, %d teachers",
            owner_key, len(snapshot.get("exams", [])), len(snapshot.get("teachers", [])),
        )
        return True


def load_into_store(store: EntityStore, storage: SnapshotStorage, owner_key: str) -> bool:
    """
    Apply an owner's stored snapshot to a store at startup.

    Returns:
        True if a snapshot was found and applied
    """
    data = storage.load_snapshot(owner_key)
    if not data:
        return False
    try:
        store.apply_loaded(data)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        logger.error("Stored snapshot for '%s' could not be applied: %s", owner_key, e)
        return False
    return True


class DebouncedSaver:
    """
    Background writer with "latest write wins" semantics.

    Usage:
        saver = DebouncedSaver(lambda snap: storage.save_snapshot(owner, snap))
        store.subscribe(saver)
        ...
        saver.close()  # flushes the last pending snapshot

    Attributes:
        delay: Quiet period in seconds before a pending snapshot is written.
    """

    def __init__(self, save: Callable[[Snapshot], bool], delay: float = 1.5):
        self._save = save
        self.delay = delay
        self._cond = threading.Condition()
        self._write_lock = threading.Lock()
        self._pending: Optional[Snapshot] = None
        self._pending_seq = 0
        self._written_seq = 0
        self._due = 0.0
        self._closed = False
        self._thread = threading.Thread(target=self._run, name="snapshot-saver", daemon=True)
        self._thread.start()

    def __call__(self, store: EntityStore) -> None:
        self.schedule(store.to_snapshot())

    @property
    def has_pending(self) -> bool:
        with self._cond:
            return self._pending is not None

    def schedule(self, snapshot: Snapshot) -> None:
        """Queue a snapshot, superseding any pending one and restarting the quiet period."""
        with self._cond:
            if self._closed:
                raise RuntimeError("DebouncedSaver is closed")
            self._pending = snapshot
            self._pending_seq += 1
            self._due = time.monotonic() + self.delay
            self._cond.notify_all()

    def _take(self):
        snapshot, seq = self._pending, self._pending_seq
        self._pending = None
        return snapshot, seq

    def _run(self) -> None:
        while True:
            with self._cond:
                while not self._closed:
                    if self._pending is None:
                        self._cond.wait()
                        continue
                    remaining = self._due - time.monotonic()
                    if remaining <= 0:
                        break
                    self._cond.wait(remaining)
                if self._closed:
                    return
                snapshot, seq = self._take()
            self._write(snapshot, seq)

    def _write(self, snapshot: Snapshot, seq: int) -> bool:
        with self._write_lock:
            if seq <= self._written_seq:
                return False
            try:
                ok = bool(self._save(snapshot))
            except Exception as e:
                logger.error("Snapshot write failed: %s", e)
                ok = False
            self._written_seq = seq
            return ok

    def flush(self) -> bool:
        """Write the pending snapshot now. Returns False if there was nothing to write."""
        with self._cond:
            if self._pending is None:
                return False
            snapshot, seq = self._take()
        return self._write(snapshot, seq)

    def close(self, flush: bool = True) -> None:
        """Stop the worker thread, writing the last pending snapshot unless ``flush`` is False."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()
        self._thread.join()
        if flush:
            self.flush()

    def __enter__(self) -> "DebouncedSaver":
        return self

    def __exit__(self, *args) -> None:
        self.close()
