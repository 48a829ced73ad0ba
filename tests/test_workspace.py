"""Tests for the workspace and the command-line interface."""

import json

import pytest

from proctor_scheduler.app import Workspace
from proctor_scheduler.cli import main
from proctor_scheduler.config import load_config
from proctor_scheduler.domain.entities import Exam


@pytest.fixture
def cfg(tmp_path):
    cfg = load_config(None)
    cfg.storage.db_url = f"sqlite:///{tmp_path / 'workspace.db'}"
    cfg.persistence.save_delay_seconds = 60
    cfg.settings_defaults.school_name = "Varsayılan Lise"
    return cfg


def test_fresh_workspace_uses_config_defaults(cfg):
    with Workspace.open(cfg) as ws:
        assert ws.store.settings.school_name == "Varsayılan Lise"
        assert ws.store.draft.proctors == [""]
        assert ws.store.teachers == []


def test_changes_survive_reopen(cfg):
    ws = Workspace.open(cfg)
    ali = ws.editor.add_teacher("Ali", "Fizik")
    ws.editor.create_exam(Exam(date="2025-02-10", time="09:00", subject="Fizik", examiners=["Ali"], proctors=[""]))
    ws.editor.update_settings(exam_period="Şubat 2025")
    ws.close()

    with Workspace.open(cfg) as reopened:
        assert [t.id for t in reopened.store.teachers] == [ali.id]
        assert reopened.store.exams[0].examiners == ["Ali"]
        assert reopened.store.settings.exam_period == "Şubat 2025"
        assert reopened.store.settings.school_name == "Varsayılan Lise"


def test_owners_are_isolated(cfg):
    with Workspace.open(cfg, owner_key="a") as ws:
        ws.editor.add_teacher("Ali", "Fizik")
    with Workspace.open(cfg, owner_key="b") as ws:
        assert ws.store.teachers == []


def test_explicit_save(cfg):
    ws = Workspace(cfg)
    ws.editor.add_teacher("Ali", "Fizik")
    assert ws.save() is True
    assert ws.storage.load_snapshot(cfg.storage.owner_key)["teachers"][0]["name"] == "Ali"


@pytest.mark.integration
def test_cli_workflow(tmp_path, capsys):
    db = f"sqlite:///{tmp_path / 'cli.db'}"
    base = ["--db", db, "--owner", "okul"]

    main(base + ["init-db"])
    main(base + ["add-teacher", "--name", "Ali Kaya", "--branch", "Fizik"])
    main(base + ["add-teacher", "--name", "Veli Şahin", "--branch", "Kimya"])
    main(base + ["add-exam", "--date", "2025-02-10", "--time", "09:00", "--subject", "Fizik",
                 "--students", "3", "--examiners", "Ali Kaya", "--proctors", "Veli Şahin"])
    capsys.readouterr()

    main(base + ["stats"])
    out = capsys.readouterr().out
    assert "Ali Kaya" in out
    assert "total=1" in out

    main(base + ["duties", "--teacher", "Veli Şahin"])
    out = capsys.readouterr().out
    assert "2025-02-10 09:00 Fizik" in out
    assert "proctor" in out

    main(base + ["validate"])
    assert "[OK]" in capsys.readouterr().out

    backup = tmp_path / "backup.json"
    main(base + ["export-json", "--out", str(backup)])
    data = json.loads(backup.read_text(encoding="utf-8"))
    assert len(data["exams"]) == 1
    assert [t["name"] for t in data["teachers"]] == ["Ali Kaya", "Veli Şahin"]


@pytest.mark.integration
def test_cli_rejects_conflicting_exam(tmp_path, capsys):
    base = ["--db", f"sqlite:///{tmp_path / 'cli.db'}"]
    main(base + ["add-exam", "--date", "2025-02-10", "--time", "09:00", "--subject", "A", "--examiners", "Ali"])

    with pytest.raises(SystemExit) as excinfo:
        main(base + ["add-exam", "--date", "2025-02-10", "--time", "09:00", "--subject", "B", "--proctors", "Ali"])

    assert excinfo.value.code == 1
    assert "Slot conflict" in capsys.readouterr().out


@pytest.mark.integration
def test_cli_init_db_reset_drops_saved_data(tmp_path, capsys):
    base = ["--db", f"sqlite:///{tmp_path / 'cli.db'}"]
    main(base + ["add-teacher", "--name", "Ali Kaya", "--branch", "Fizik"])

    main(base + ["init-db", "--reset"])
    assert "[OK] Database reset" in capsys.readouterr().out

    main(base + ["export-json", "--out", str(tmp_path / "after.json")])
    data = json.loads((tmp_path / "after.json").read_text(encoding="utf-8"))
    assert data["teachers"] == []


@pytest.mark.integration
def test_cli_validate_reports_imported_conflicts(tmp_path, capsys):
    snapshot = {
        "exams": [
            {"id": 1, "date": "2025-02-10", "time": "09:00", "subject": "A", "examiners": ["Ali"], "proctors": []},
            {"id": 2, "date": "2025-02-10", "time": "09:00", "subject": "B", "examiners": [], "proctors": ["Ali"]},
        ],
        "teachers": [{"id": 3, "name": "Ali", "branch": "Fizik"}],
        "settings": {},
    }
    path = tmp_path / "conflict.json"
    path.write_text(json.dumps(snapshot), encoding="utf-8")
    base = ["--db", f"sqlite:///{tmp_path / 'cli.db'}"]
    main(base + ["import-json", str(path)])
    capsys.readouterr()

    with pytest.raises(SystemExit) as excinfo:
        main(base + ["validate"])

    assert excinfo.value.code == 1
    assert "[ERROR] Ali is in exams 1 and 2 at 2025-02-10 09:00" in capsys.readouterr().out
