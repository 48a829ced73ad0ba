"""CSV export of the exam program and workload statistics."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from proctor_scheduler.domain.store import EntityStore
from proctor_scheduler.services.statistics import sorted_program, teacher_stats

logger = logging.getLogger(__name__)

PROGRAM_COLUMNS = ["date", "time", "subject", "grade", "student_count", "examiners", "proctors"]
STATS_COLUMNS = ["name", "branch", "examiner_count", "proctor_count", "total"]


def program_frame(store: EntityStore) -> pd.DataFrame:
    """Exam program ordered by (date, time) with filled seats joined by ', '."""
    rows = [
        {
            "date": exam.date,
            "time": exam.time,
            "subject": exam.subject,
            "grade": exam.grade,
            "student_count": exam.student_count,
            "examiners": ", ".join(n for n in exam.examiners if n),
            "proctors": ", ".join(n for n in exam.proctors if n),
        }
        for exam in sorted_program(store)
    ]
    return pd.DataFrame(rows, columns=PROGRAM_COLUMNS)


def stats_frame(store: EntityStore) -> pd.DataFrame:
    rows = [
        {
            "name": row.teacher.name,
            "branch": row.teacher.branch,
            "examiner_count": row.examiner_count,
            "proctor_count": row.proctor_count,
            "total": row.total,
        }
        for row in teacher_stats(store)
    ]
    return pd.DataFrame(rows, columns=STATS_COLUMNS)


def export_program_csv(store: EntityStore, csv_path: str | Path) -> int:
    """
    Export the exam program to CSV.
    
    Returns:
        Number of exams written
    """
    df = program_frame(store)
    df.to_csv(csv_path, index=False)
    logger.info("Exported %d exams to %s", len(df), csv_path)
    return len(df)


def export_stats_csv(store: EntityStore, csv_path: str | Path) -> int:
    """
    Export per-teacher workload statistics to CSV.
    
    Returns:
        Number of teachers written
    """
    df = stats_frame(store)
    df.to_csv(csv_path, index=False)
    logger.info("Exported statistics for %d teachers to %s", len(df), csv_path)
    return len(df)
