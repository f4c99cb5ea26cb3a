"""Field parsers applied to raw CSV cells during import."""

from __future__ import annotations

import re
import warnings

import pandas as pd

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_AMOUNT_TOKEN_RE = re.compile(r"\$?(\d+(?:\.\d+)?)([kK]?)")
_NON_DIGIT_RE = re.compile(r"\D")


def parse_call_count(raw: str | None) -> int:
    """Leading integer of the cell; anything unparseable or negative is 0."""
    if not raw:
        return 0
    match = _LEADING_INT_RE.match(raw)
    if match is None:
        return 0
    return max(0, int(match.group(1)))


def parse_tags(raw: str | None) -> list[str] | None:
    if not raw:
        return None
    if "," in raw:
        return [tag for tag in (piece.strip().lower() for piece in raw.split(",")) if tag]
    tag = raw.strip().lower()
    return [tag] if tag else None


def parse_date(raw: str | None) -> str | None:
    """Parse a date in any common format into a UTC ISO-8601 string.

    Returns None instead of raising when the value cannot be understood.
    """
    if not raw or not raw.strip():
        return None
    try:
        with warnings.catch_warnings():
            # Mixed-format inputs make pandas warn about per-element parsing.
            warnings.simplefilter("ignore")
            parsed = pd.to_datetime(raw.strip(), errors="coerce", utc=True)
    except (ValueError, TypeError, OverflowError):
        return None
    if parsed is None or pd.isna(parsed):
        return None
    return parsed.to_pydatetime(warn=False).isoformat()


def parse_loan_amount(raw: str | None) -> float:
    """Largest number mentioned in a loan amount cell.

    "$20,000 – $30,000" -> 30000, "$50k" -> 50000, "Less than $20,000" -> 20000.
    """
    if not raw:
        return 0
    values: list[float] = []
    for digits, suffix in _AMOUNT_TOKEN_RE.findall(raw.replace(",", "")):
        value = float(digits)
        if suffix:
            value *= 1000
        values.append(value)
    return max(values, default=0)


def normalize_phone(raw: str | None) -> str:
    """Digits-only form used for phone comparisons."""
    if not raw:
        return ""
    return _NON_DIGIT_RE.sub("", raw)
