"""Map free-text CSV status values onto the pipeline status taxonomy."""

from __future__ import annotations

import re
import string
from collections.abc import Iterable
from dataclasses import dataclass

from leadhub.core.enums import LeadStatus, LeadSubStatus


@dataclass(frozen=True)
class StatusMapping:
    status: str
    sub_status: str | None = None


@dataclass(frozen=True)
class StatusPreview:
    csv_value: str
    mapped_status: str
    mapped_sub_status: str | None
    is_recognized: bool


DEFAULT_STATUS = StatusMapping(LeadStatus.NEW.value)


def _pending(sub_status: LeadSubStatus) -> StatusMapping:
    return StatusMapping(LeadStatus.PENDING.value, sub_status.value)


def _bad_lead(sub_status: LeadSubStatus) -> StatusMapping:
    return StatusMapping(LeadStatus.BAD_LEAD.value, sub_status.value)


_PHRASES: dict[str, StatusMapping] = {
    "new": DEFAULT_STATUS,
    "no answer": StatusMapping(LeadStatus.NO_ANSWER.value),
    "call back": StatusMapping(LeadStatus.CALL_BACK.value),
    "settled": StatusMapping(LeadStatus.SETTLED.value),
    "pending": StatusMapping(LeadStatus.PENDING.value),
    "waiting on banking": _pending(LeadSubStatus.WAITING_ON_BANKING),
    "indicative offer": _pending(LeadSubStatus.INDICATIVE_OFFER),
    "docs out": _pending(LeadSubStatus.DOCS_OUT),
    "submitted": _pending(LeadSubStatus.SUBMITTED),
    "pending approval": _pending(LeadSubStatus.PENDING_APPROVAL),
    "approved": _pending(LeadSubStatus.APPROVED),
    "bad lead": StatusMapping(LeadStatus.BAD_LEAD.value),
    "duplicate": _bad_lead(LeadSubStatus.DUPLICATE),
    "invalid number": _bad_lead(LeadSubStatus.INVALID_NUMBER),
    "below minimum deposit": _bad_lead(LeadSubStatus.BELOW_MINIMUM_DEPOSIT),
    "ineligible": _bad_lead(LeadSubStatus.INELIGIBLE),
    "ineligable": _bad_lead(LeadSubStatus.INELIGIBLE),  # common misspelling
    "excessive dishonors": _bad_lead(LeadSubStatus.EXCESSIVE_DISHONORS),
    "not interested": _bad_lead(LeadSubStatus.NOT_INTERESTED),
}

# Every phrase is also reachable in its run-together form ("NoAnswer").
STATUS_TABLE: dict[str, StatusMapping] = {
    **_PHRASES,
    **{phrase.replace(" ", ""): mapping for phrase, mapping in _PHRASES.items() if " " in phrase},
}

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_status_text(raw: str) -> str:
    """ASCII-lowercase, fold underscores to spaces, trim and collapse whitespace."""
    folded = raw.translate(_ASCII_LOWER).replace("_", " ")
    return _WHITESPACE_RE.sub(" ", folded).strip()


def _lookup(raw: str) -> StatusMapping | None:
    normalized = normalize_status_text(raw)
    mapping = STATUS_TABLE.get(normalized)
    if mapping is None:
        mapping = STATUS_TABLE.get(_WHITESPACE_RE.sub("", normalized))
    return mapping


def normalize_status(raw: str | None) -> StatusMapping:
    """Resolve a CSV status cell; unknown or empty values become `new`."""
    if not raw or not raw.strip():
        return DEFAULT_STATUS
    return _lookup(raw) or DEFAULT_STATUS


def is_recognized_status(raw: str | None) -> bool:
    if not raw or not raw.strip():
        return False
    return _lookup(raw) is not None


def preview_status_mappings(values: Iterable[str | None]) -> list[StatusPreview]:
    """Show how each distinct status in a file will be imported.

    Blank values are ignored; order follows first appearance.
    """
    previews: list[StatusPreview] = []
    seen: set[str] = set()
    for value in values:
        if not value or value in seen:
            continue
        seen.add(value)
        mapping = normalize_status(value)
        previews.append(
            StatusPreview(
                csv_value=value,
                mapped_status=mapping.status,
                mapped_sub_status=mapping.sub_status,
                is_recognized=is_recognized_status(value),
            )
        )
    return previews
