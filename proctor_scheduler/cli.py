"""Command-line interface for the exam duty scheduler."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from proctor_scheduler.app import Workspace
from proctor_scheduler.config import load_config
from proctor_scheduler.domain.db import init_database, reset_database
from proctor_scheduler.domain.entities import GRADES, Exam
from proctor_scheduler.errors import SchedulerError, SlotConflictError
from proctor_scheduler.io.export_csv import export_program_csv, export_stats_csv
from proctor_scheduler.io.import_csv import import_teachers_csv
from proctor_scheduler.io.snapshot import backup_filename, read_snapshot_file, write_snapshot_file
from proctor_scheduler.services.constraints import validate_exam_constraints
from proctor_scheduler.services.statistics import duties_for_teacher, sorted_program, teacher_stats


def _split_names(value: str | None) -> list[str]:
    if not value:
        return []
    return [name.strip() for name in value.split(",")]


def _load_cfg(args: argparse.Namespace):
    cfg = load_config(args.config)
    if args.db:
        cfg.storage.db_url = args.db
    if args.owner:
        cfg.storage.owner_key = args.owner
    return cfg


def _cmd_init_db(args: argparse.Namespace) -> None:
    """Initialize the database."""
    cfg = _load_cfg(args)
    if args.reset:
        reset_database(cfg.storage.db_url)
        print(f"[OK] Database reset: {cfg.storage.db_url}")
        return
    init_database(cfg.storage.db_url)
    print(f"[OK] Database initialized: {cfg.storage.db_url}")


def _cmd_import_json(args: argparse.Namespace, ws: Workspace) -> None:
    counts = read_snapshot_file(ws.store, args.file)
    print(f"[OK] Imported {counts['exams']} exams and {counts['teachers']} teachers from {args.file}")


def _cmd_export_json(args: argparse.Namespace, ws: Workspace) -> None:
    path = write_snapshot_file(ws.store, args.out or backup_filename())
    print(f"[OK] Exported snapshot to {path}")


def _cmd_import_teachers(args: argparse.Namespace, ws: Workspace) -> None:
    count = import_teachers_csv(ws.editor, args.file)
    print(f"[OK] Imported {count} teachers")


def _cmd_add_teacher(args: argparse.Namespace, ws: Workspace) -> None:
    teacher = ws.editor.add_teacher(args.name, args.branch)
    print(f"[OK] Added teacher {teacher.id}: {teacher.name} ({teacher.branch})")


def _cmd_rename_teacher(args: argparse.Namespace, ws: Workspace) -> None:
    current = ws.store.get_teacher(args.id)
    branch = args.branch if args.branch is not None else (current.branch if current else "")
    teacher = ws.editor.update_teacher(args.id, args.name, branch)
    print(f"[OK] Teacher {teacher.id} is now {teacher.name} ({teacher.branch})")


def _cmd_add_exam(args: argparse.Namespace, ws: Workspace) -> None:
    exam = Exam(
        date=args.date,
        time=args.time,
        subject=args.subject,
        grade=args.grade,
        student_count=args.students,
        examiners=_split_names(args.examiners),
        proctors=_split_names(args.proctors),
    )
    created = ws.editor.create_exam(exam)
    print(f"[OK] Added exam {created.id}: {created.date} {created.time} {created.subject}")


def _cmd_merge(args: argparse.Namespace, ws: Workspace) -> None:
    merged = ws.merger.merge(args.source, args.target)
    if merged is None:
        print(f"[INFO] Nothing merged: exam {args.source} or {args.target} not found")
        return
    print(f"[OK] Merged exam {args.source} into {merged.id}: {merged.subject} ({merged.grade})")


def _cmd_stats(args: argparse.Namespace, ws: Workspace) -> None:
    if args.csv:
        count = export_stats_csv(ws.store, args.csv)
        print(f"[OK] Exported statistics for {count} teachers to {args.csv}")
        return
    for row in teacher_stats(ws.store):
        print(f"{row.teacher.name:<30} {row.teacher.branch:<20} "
              f"examiner={row.examiner_count} proctor={row.proctor_count} total={row.total}")


def _cmd_program(args: argparse.Namespace, ws: Workspace) -> None:
    if args.csv:
        count = export_program_csv(ws.store, args.csv)
        print(f"[OK] Exported {count} exams to {args.csv}")
        return
    for exam in sorted_program(ws.store):
        examiners = ", ".join(n for n in exam.examiners if n)
        proctors = ", ".join(n for n in exam.proctors if n)
        print(f"[{exam.id}] {exam.date} {exam.time} {exam.subject} ({exam.grade}, {exam.student_count} students) "
              f"examiners: {examiners or '-'} proctors: {proctors or '-'}")


def _cmd_duties(args: argparse.Namespace, ws: Workspace) -> None:
    teacher = ws.store.find_teacher(args.teacher)
    if teacher is None:
        raise SystemExit(f"[ERROR] No teacher named {args.teacher!r}")
    settings = ws.store.settings
    print(f"{settings.school_name}\n{settings.exam_period}\n")
    print(f"{teacher.name} ({teacher.branch})")
    for exam in duties_for_teacher(ws.store, teacher):
        role = "examiner" if teacher.name in exam.examiners else "proctor"
        print(f"  {exam.date} {exam.time} {exam.subject} ({exam.grade}) - {role}")
    print(f"\n{settings.principal_name}")


def _cmd_validate(args: argparse.Namespace, ws: Workspace) -> None:
    try:
        validate_exam_constraints(ws.store.exams)
    except SlotConflictError as e:
        for c in e.conflicts:
            print(f"[ERROR] {c.teacher_name} is in exams {c.exam_id} and {c.other_exam_id} at {c.date} {c.time}")
        raise SystemExit(1)
    print(f"[OK] No slot conflicts in {len(ws.store.exams)} exams")


def _cmd_reset(args: argparse.Namespace, ws: Workspace) -> None:
    if not args.yes:
        raise SystemExit("[ERROR] Refusing to delete all exams and teachers without --yes")
    ws.editor.reset()
    print("[OK] All exams and teachers deleted")


def _run_in_workspace(args: argparse.Namespace) -> None:
    cfg = _load_cfg(args)
    ws = Workspace.open(cfg)
    try:
        args.handler(args, ws)
    except SchedulerError as e:
        print(f"[ERROR] {e}")
        raise SystemExit(1)
    finally:
        ws.close()


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="proctor-scheduler",
        description="Exam proctor and examiner duty scheduler",
    )

    # Global options
    parser.add_argument("--config", help="Path to config YAML/JSON")
    parser.add_argument("--db", help="Database URL (default: from config)")
    parser.add_argument("--owner", help="Dataset owner key (default: from config)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")

    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init-db", help="Initialize database")
    init.add_argument("--reset", action="store_true", help="Drop and recreate all tables (deletes all data)")
    init.set_defaults(func=_cmd_init_db)

    def workspace_command(name: str, handler, help_text: str) -> argparse.ArgumentParser:
        p = sub.add_parser(name, help=help_text)
        p.set_defaults(func=_run_in_workspace, handler=handler)
        return p

    imp = workspace_command("import-json", _cmd_import_json, "Replace all data with a JSON snapshot")
    imp.add_argument("file", type=Path)

    exp = workspace_command("export-json", _cmd_export_json, "Export all data as a JSON snapshot")
    exp.add_argument("--out", type=Path, help="Output path (default: exam_backup_<date>.json)")

    imt = workspace_command("import-teachers", _cmd_import_teachers, "Add teachers from a CSV")
    imt.add_argument("file", type=Path)

    at = workspace_command("add-teacher", _cmd_add_teacher, "Add a teacher")
    at.add_argument("--name", required=True)
    at.add_argument("--branch", default="")

    rt = workspace_command("rename-teacher", _cmd_rename_teacher, "Rename a teacher everywhere")
    rt.add_argument("--id", type=int, required=True)
    rt.add_argument("--name", required=True)
    rt.add_argument("--branch")

    ae = workspace_command("add-exam", _cmd_add_exam, "Add an exam session")
    ae.add_argument("--date", required=True, help="YYYY-MM-DD")
    ae.add_argument("--time", required=True, help="HH:MM")
    ae.add_argument("--subject", required=True)
    ae.add_argument("--grade", default=GRADES[0], help=f"One of: {', '.join(GRADES)}")
    ae.add_argument("--students", type=int, default=0)
    ae.add_argument("--examiners", help="Comma-separated teacher names")
    ae.add_argument("--proctors", help="Comma-separated teacher names")

    mg = workspace_command("merge", _cmd_merge, "Merge a source exam into a target exam")
    mg.add_argument("--source", type=int, required=True)
    mg.add_argument("--target", type=int, required=True)

    st = workspace_command("stats", _cmd_stats, "Show per-teacher duty counts")
    st.add_argument("--csv", type=Path, help="Write statistics to CSV instead")

    pg = workspace_command("program", _cmd_program, "Show the exam program")
    pg.add_argument("--csv", type=Path, help="Write program to CSV instead")

    du = workspace_command("duties", _cmd_duties, "Show a teacher's duty notice")
    du.add_argument("--teacher", required=True, help="Teacher name")

    workspace_command("validate", _cmd_validate, "Check for same-slot conflicts")

    rs = workspace_command("reset", _cmd_reset, "Delete all exams and teachers")
    rs.add_argument("--yes", action="store_true")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
