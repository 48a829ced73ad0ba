"""Tests for configuration loading."""

import json

import pytest

from proctor_scheduler.config import load_config


def test_defaults_without_file():
    cfg = load_config(None)
    assert cfg.storage.owner_key == "default"
    assert cfg.persistence.save_delay_seconds == 1.5
    assert cfg.rules.enforce_slot_conflicts is True
    assert cfg.rules.enforce_allowed_slots is False
    assert cfg.exam_defaults.grade == "9. Sınıf"


def test_yaml_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        """
storage:
  db_url: "sqlite:///test.db"
rules:
  enforce_allowed_slots: true
defaults:
  settings:
    school_name: "Test Lisesi"
    allowed_dates: [2025-02-10, "2025-02-11"]
    allowed_times: [10:30, "09:00"]
  exam:
    proctor_count: 2
""",
        encoding="utf-8",
    )
    cfg = load_config(path)

    assert cfg.storage.db_url == "sqlite:///test.db"
    assert cfg.storage.owner_key == "default"
    assert cfg.rules.enforce_allowed_slots is True
    assert cfg.settings_defaults.school_name == "Test Lisesi"
    assert cfg.settings_defaults.allowed_dates == ["2025-02-10", "2025-02-11"]
    assert cfg.settings_defaults.allowed_times == ["10:30", "09:00"]
    assert cfg.exam_defaults.proctor_count == 2
    assert cfg.exam_defaults.examiner_count == 1


def test_json_config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"persistence": {"save_delay_seconds": 0.25}}), encoding="utf-8")

    cfg = load_config(path)

    assert cfg.persistence.save_delay_seconds == 0.25


def test_bad_section_shape(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("rules: [1, 2]\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_shipped_sample_config_loads():
    from pathlib import Path

    cfg = load_config(Path(__file__).resolve().parent.parent / "scheduler_config.yaml")
    assert cfg.storage.db_url.startswith("sqlite:///")
