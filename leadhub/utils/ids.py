"""Identifier generation helpers."""

from __future__ import annotations

import uuid


def new_id() -> str:
    """Create a UUID4-based primary key."""
    return str(uuid.uuid4())


def new_import_id() -> str:
    """Create a UUID4-based identifier for one import run."""
    return str(uuid.uuid4())
