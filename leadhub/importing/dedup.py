"""Duplicate detection across existing leads and earlier rows of one import."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from leadhub.importing.parsers import normalize_phone

MIN_PHONE_DIGITS = 10


@dataclass(frozen=True)
class LeadIdentity:
    external_id: str | None = None
    email: str | None = None
    phone: str | None = None


def _text_key(value: str | None) -> str:
    return (value or "").strip().lower()


def _phone_key(value: str | None) -> str:
    digits = normalize_phone(value)
    return digits if len(digits) >= MIN_PHONE_DIGITS else ""


class DuplicateDetector:
    """Tracks seen external ids, emails and phones for one tenant.

    Rows must be checked in file order: `record` makes an accepted row's
    identity visible to every later row of the same import.
    """

    def __init__(self, existing: Iterable[LeadIdentity] = ()) -> None:
        self.external_ids: set[str] = set()
        self.emails: set[str] = set()
        self.phones: set[str] = set()
        for identity in existing:
            self.record(identity)

    def duplicate_reason(self, identity: LeadIdentity) -> str | None:
        """Name of the first matching identity field, or None."""
        external_id = _text_key(identity.external_id)
        if external_id and external_id in self.external_ids:
            return "external_id"
        email = _text_key(identity.email)
        if email and email in self.emails:
            return "email"
        phone = _phone_key(identity.phone)
        if phone and phone in self.phones:
            return "phone"
        return None

    def is_duplicate(self, identity: LeadIdentity) -> bool:
        return self.duplicate_reason(identity) is not None

    def record(self, identity: LeadIdentity) -> None:
        external_id = _text_key(identity.external_id)
        if external_id:
            self.external_ids.add(external_id)
        email = _text_key(identity.email)
        if email:
            self.emails.add(email)
        phone = _phone_key(identity.phone)
        if phone:
            self.phones.add(phone)
