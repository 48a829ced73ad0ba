"""Configuration loading (YAML or JSON)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


@dataclass
class StorageConfig:
    db_url: str = "sqlite:///proctor_scheduler.db"
    owner_key: str = "default"


@dataclass
class PersistenceConfig:
    save_delay_seconds: float = 1.5


@dataclass
class RulesConfig:
    enforce_slot_conflicts: bool = True
    enforce_allowed_slots: bool = False


@dataclass
class SettingsDefaults:
    school_name: str = ""
    exam_period: str = ""
    principal_name: str = ""
    allowed_dates: List[str] = field(default_factory=list)
    allowed_times: List[str] = field(default_factory=list)


@dataclass
class ExamDefaults:
    grade: str = "9. Sınıf"
    proctor_count: int = 1
    examiner_count: int = 1


@dataclass
class SchedulerConfig:
    storage: StorageConfig = field(default_factory=StorageConfig)
    persistence: PersistenceConfig = field(default_factory=PersistenceConfig)
    rules: RulesConfig = field(default_factory=RulesConfig)
    settings_defaults: SettingsDefaults = field(default_factory=SettingsDefaults)
    exam_defaults: ExamDefaults = field(default_factory=ExamDefaults)


def _section(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = raw.get(key) or {}
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a mapping, got {type(value).__name__}")
    return value


def _as_time(value: Any) -> str:
    # YAML 1.1 reads unquoted 10:30 as the sexagesimal integer 630
    if isinstance(value, int):
        return f"{value // 60:02d}:{value % 60:02d}"
    return str(value)


def _read_raw(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        raw = json.loads(text)
    else:
        raw = yaml.safe_load(text)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level")
    return raw


def load_config(path: Optional[str | Path] = None) -> SchedulerConfig:
    """
    Load scheduler configuration from a YAML or JSON file.

    Missing sections and keys keep their defaults, so ``load_config(None)``
    returns a fully populated default configuration.

    Args:
        path: Path to a ``.yaml``/``.yml`` or ``.json`` file, or None

    Returns:
        SchedulerConfig

    Raises:
        ValueError: If a section has the wrong shape
    """
    if path is None:
        return SchedulerConfig()

    raw = _read_raw(Path(path))
    defaults = _section(raw, "defaults")

    storage = _section(raw, "storage")
    persistence = _section(raw, "persistence")
    rules = _section(raw, "rules")
    settings = _section(defaults, "settings")
    exam = _section(defaults, "exam")

    return SchedulerConfig(
        storage=StorageConfig(**storage),
        persistence=PersistenceConfig(
            save_delay_seconds=float(persistence.get("save_delay_seconds", 1.5)),
        ),
        rules=RulesConfig(
            enforce_slot_conflicts=bool(rules.get("enforce_slot_conflicts", True)),
            enforce_allowed_slots=bool(rules.get("enforce_allowed_slots", False)),
        ),
        settings_defaults=SettingsDefaults(
            school_name=str(settings.get("school_name", "")),
            exam_period=str(settings.get("exam_period", "")),
            principal_name=str(settings.get("principal_name", "")),
            allowed_dates=[str(d) for d in settings.get("allowed_dates") or []],
            allowed_times=[_as_time(t) for t in settings.get("allowed_times") or []],
        ),
        exam_defaults=ExamDefaults(
            grade=str(exam.get("grade", "9. Sınıf")),
            proctor_count=int(exam.get("proctor_count", 1)),
            examiner_count=int(exam.get("examiner_count", 1)),
        ),
    )
