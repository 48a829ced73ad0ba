"""Exam proctor/examiner duty scheduling.

Modules:
- config: load configuration (YAML or JSON)
- errors: exception taxonomy
- domain: records, the entity store and snapshot storage models
- services: availability, editing, merging, statistics and conflict checks
- io: JSON snapshots, debounced persistence and CSV import/export
- app: workspace wiring the store to its services and storage
- cli: command-line interface entrypoints
"""

__all__ = [
    "config",
    "errors",
    "domain",
    "services",
    "io",
    "app",
    "cli",
]
