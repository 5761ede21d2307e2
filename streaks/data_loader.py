"""
Data Loader Module for Streak Analysis

Reads a CSV with a header row into ordered rows (mappings from column name to
cell) plus the column list. Cells are kept as strings; empty cells become None.
Numeric parsing happens later, per column, in the extraction step.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import pandas as pd

from core.exceptions import DataLoadError

logger = logging.getLogger(__name__)


def frame_to_rows(df: pd.DataFrame) -> Tuple[List[Dict[str, Any]], List[str]]:
    """
    Convert a DataFrame into (rows, columns), with NaN cells as None.

    Row order follows the frame's order; the index is discarded.
    """
    columns = [str(c) for c in df.columns]
    clean = df.astype(object).where(df.notna(), None)
    clean.columns = columns
    return clean.to_dict("records"), columns


def load_csv(path: Union[str, Path]) -> Tuple[List[Dict[str, Any]], List[str]]:
    """
    Load a CSV file.

    Args:
        path: CSV file with a header row

    Returns:
        rows: One dict per non-blank line
        columns: Header names in file order

    Raises:
        DataLoadError: File missing, unreadable, empty or not parseable
    """
    p = Path(path)
    if not p.exists():
        raise DataLoadError("File not found", context={"path": str(p)})

    try:
        df = pd.read_csv(
            p,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            skipinitialspace=True,
        )
    except pd.errors.EmptyDataError as e:
        raise DataLoadError("File is empty", context={"path": str(p)}, cause=e) from e
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise DataLoadError("File is not valid CSV", context={"path": str(p)}, cause=e) from e
    except OSError as e:
        raise DataLoadError("File is not readable", context={"path": str(p)}, cause=e) from e

    df = df.mask(df.eq(""))
    rows, columns = frame_to_rows(df)

    logger.info("Loaded %d rows x %d columns from %s", len(rows), len(columns), p.name)
    return rows, columns
