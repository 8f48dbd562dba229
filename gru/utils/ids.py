"""Identifier helpers."""

from __future__ import annotations

import uuid


def generate_uuid(name: str) -> uuid.UUID:
    """Generate a name-based (SHA-1) UUID in the DNS namespace."""
    return uuid.uuid5(uuid.NAMESPACE_DNS, name)