"""Turn comma-separated configuration strings into canonical tuples."""

from __future__ import annotations


def _split_csv(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [item.strip() for item in str(raw).split(",") if item.strip()]


def normalize_header_list(raw: str | None) -> tuple[str, ...]:
    """Split a header or method list, dropping blanks and lowercasing entries."""

    return tuple(item.lower() for item in _split_csv(raw))


def split_allow_origins(raw: str | None) -> tuple[str, ...]:
    """Split an origin list. Case is preserved since origins compare exactly."""

    return tuple(_split_csv(raw))
