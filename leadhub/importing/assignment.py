"""Resolve which broker user an imported lead belongs to."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from leadhub.importing.allocation import DistributionAllocator


@dataclass(frozen=True)
class AssignableUser:
    user_id: str
    email: str
    name: str


def _normalize(value: str | None) -> str:
    return (value or "").strip().lower()


class AssignmentResolver:
    """Match broker hints from a CSV row against the tenant's users.

    Lookup order is email, then exact name, then a substring scan over
    names in user order (owner first). Exact email and name collisions
    resolve to the last listed user. A hint that matches nobody leaves the
    lead unassigned; only rows without any hint are distributed.
    """

    def __init__(
        self,
        users: Iterable[AssignableUser],
        allocator: DistributionAllocator | None = None,
    ) -> None:
        self.users = list(users)
        self.allocator = allocator or DistributionAllocator.disabled()
        self._by_email: dict[str, str] = {}
        self._by_name: dict[str, str] = {}
        for user in self.users:
            email = _normalize(user.email)
            if email:
                self._by_email[email] = user.user_id
            name = _normalize(user.name)
            if name:
                self._by_name[name] = user.user_id

    def find_by_email(self, email: str) -> str | None:
        return self._by_email.get(_normalize(email))

    def find_by_name(self, name: str) -> str | None:
        wanted = _normalize(name)
        if not wanted:
            return None
        exact = self._by_name.get(wanted)
        if exact is not None:
            return exact
        for user in self.users:
            candidate = _normalize(user.name)
            if candidate and (wanted in candidate or candidate in wanted):
                return user.user_id
        return None

    def resolve(self, broker_email: str | None, broker_name: str | None) -> str | None:
        email_hint = _normalize(broker_email)
        name_hint = _normalize(broker_name)

        if email_hint:
            user_id = self.find_by_email(email_hint)
            if user_id is not None:
                return user_id
        if name_hint:
            user_id = self.find_by_name(name_hint)
            if user_id is not None:
                return user_id

        if email_hint or name_hint:
            return None
        return self.allocator.next_assignee()
