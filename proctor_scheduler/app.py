"""Workspace - wires the store, its services and persistence for one owner."""

from __future__ import annotations

import logging
from typing import Optional

from proctor_scheduler.config import SchedulerConfig
from proctor_scheduler.domain.store import EntityStore, settings_from_defaults
from proctor_scheduler.io.persistence import DebouncedSaver, SnapshotStorage, load_into_store
from proctor_scheduler.services.editor import AssignmentEditor
from proctor_scheduler.services.merge import MergeOperator

logger = logging.getLogger(__name__)


class Workspace:
    """
    One owner's dataset with everything needed to edit it.

    Changes made through ``editor`` or ``merger`` are persisted by the
    debounced saver; ``close()`` writes whatever is still pending.
    """

    def __init__(
        self,
        cfg: SchedulerConfig,
        storage: Optional[SnapshotStorage] = None,
        owner_key: Optional[str] = None,
    ):
        self.cfg = cfg
        self.owner_key = owner_key or cfg.storage.owner_key
        self.storage = storage or SnapshotStorage(cfg.storage.db_url)
        self.store = EntityStore(
            settings=settings_from_defaults(cfg.settings_defaults),
            exam_defaults=cfg.exam_defaults,
        )
        self.editor = AssignmentEditor(self.store, cfg.rules)
        self.merger = MergeOperator(self.store, cfg.rules)
        self.saver: Optional[DebouncedSaver] = None

    @classmethod
    def open(
        cls,
        cfg: SchedulerConfig,
        storage: Optional[SnapshotStorage] = None,
        owner_key: Optional[str] = None,
    ) -> "Workspace":
        """Load the owner's snapshot and start autosaving."""
        workspace = cls(cfg, storage=storage, owner_key=owner_key)
        workspace.load()
        workspace.start_autosave()
        return workspace

    def load(self) -> bool:
        return load_into_store(self.store, self.storage, self.owner_key)

    def save(self) -> bool:
        """Write the current snapshot immediately."""
        return self.storage.save_snapshot(self.owner_key, self.store.to_snapshot())

    def start_autosave(self) -> None:
        if self.saver is not None:
            return
        owner_key = self.owner_key
        storage = self.storage
        self.saver = DebouncedSaver(
            lambda snapshot: storage.save_snapshot(owner_key, snapshot),
            delay=self.cfg.persistence.save_delay_seconds,
        )
        self.store.subscribe(self.saver)

    def close(self) -> None:
        if self.saver is None:
            return
        self.store.unsubscribe(self.saver)
        self.saver.close(flush=True)
        self.saver = None

    def __enter__(self) -> "Workspace":
        return self

    def __exit__(self, *args) -> None:
        self.close()
