"""Deterministic template keys."""

from __future__ import annotations

from enum import Enum

KEY_SEPARATOR = ":"


def build_key(prefix: str, *fields: Enum | str | None) -> str:
    """
    Build the lookup key of a compiled template.

    Enum members contribute their value and ``None`` an empty segment, so
    ``build_key("event", a, b)`` and ``build_key("event", a, b, None)`` differ.
    Callers keep the fields to closed vocabularies; nothing is escaped.
    """
    segments = [prefix]
    for field in fields:
        if field is None:
            segments.append("")
        elif isinstance(field, Enum):
            segments.append(str(field.value))
        else:
            segments.append(field)
    return KEY_SEPARATOR.join(segments)


__all__ = ["KEY_SEPARATOR", "build_key"]
