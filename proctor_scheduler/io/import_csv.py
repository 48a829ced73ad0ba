"""CSV import of teacher lists."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from proctor_scheduler.errors import FormatError
from proctor_scheduler.services.editor import AssignmentEditor

logger = logging.getLogger(__name__)


def import_teachers_csv(editor: AssignmentEditor, csv_path: str | Path) -> int:
    """
    Add teachers from a CSV with a ``name`` column and an optional ``branch`` column.
    
    Rows with a blank name are skipped. Existing teachers are kept.
    
    Args:
        editor: Assignment editor of the target store
        csv_path: Path to teachers CSV
    
    Returns:
        Number of teachers added
    
    Raises:
        FormatError: If the CSV has no ``name`` column
    """
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
    
    # Normalize column names
    df.columns = df.columns.str.lower().str.strip()
    if "name" not in df.columns:
        raise FormatError(f"{csv_path} has no 'name' column")
    if "branch" not in df.columns:
        df["branch"] = ""
    
    df["name"] = df["name"].str.strip()
    df = df[df["name"] != ""]
    
    added = 0
    for _, row in df.iterrows():
        editor.add_teacher(row["name"], row["branch"])
        added += 1
    
    logger.info("Imported %d teachers from %s", added, csv_path)
    return added
