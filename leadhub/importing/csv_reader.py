"""Turn an uploaded CSV file plus a confirmed column mapping into lead rows."""

from __future__ import annotations

import io
from collections.abc import Mapping

import pandas as pd

from leadhub.core.exceptions import ValidationError
from leadhub.schemas.imports import LEAD_ROW_FIELDS, LeadRow


def decode_csv(content: bytes) -> str:
    """UTF-8 (BOM tolerated) with a latin-1 fallback for spreadsheet exports."""
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        return content.decode("latin-1")


def read_csv_frame(content: bytes) -> pd.DataFrame:
    if not content.strip():
        raise ValidationError("CSV file is empty.")
    try:
        frame = pd.read_csv(
            io.StringIO(decode_csv(content)),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise ValidationError(f"Could not parse CSV file: {exc}") from exc
    frame.columns = [str(column).strip() for column in frame.columns]
    return frame


def read_csv_rows(content: bytes, mapping: Mapping[str, str]) -> list[LeadRow]:
    """Apply a field -> column mapping to every data row of the file.

    Unmapped fields stay None; blank cells become None.
    """
    unknown = sorted(set(mapping) - set(LEAD_ROW_FIELDS))
    if unknown:
        raise ValidationError(f"Unknown lead fields in mapping: {', '.join(unknown)}")

    frame = read_csv_frame(content)
    missing = sorted({column for column in mapping.values() if column not in frame.columns})
    if missing:
        raise ValidationError(f"Columns not found in CSV: {', '.join(missing)}")

    rows: list[LeadRow] = []
    for record in frame.to_dict(orient="records"):
        values = {}
        for field_name, column in mapping.items():
            cell = record.get(column)
            values[field_name] = cell if cell is not None and str(cell).strip() else None
        rows.append(LeadRow(**values))
    return rows
