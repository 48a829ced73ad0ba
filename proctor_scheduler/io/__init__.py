"""I/O: JSON snapshots, snapshot persistence and CSV import/export."""

from .export_csv import export_program_csv, export_stats_csv
from .import_csv import import_teachers_csv
from .persistence import DebouncedSaver, SnapshotStorage, load_into_store
from .snapshot import backup_filename, export_snapshot, import_snapshot, parse_snapshot

__all__ = [
    "export_program_csv",
    "export_stats_csv",
    "import_teachers_csv",
    "DebouncedSaver",
    "SnapshotStorage",
    "load_into_store",
    "backup_filename",
    "export_snapshot",
    "import_snapshot",
    "parse_snapshot",
]
