"""Ordering helpers for content records."""

from __future__ import annotations

from collections.abc import Iterable

from folio.content.models import ContentRecord


def sort_by_publish_date(records: Iterable[ContentRecord]) -> list[ContentRecord]:
    """Return a new list ordered newest first.

    The sort is stable: records sharing a publish date keep their input
    order. The loader yields records in path order, so ties resolve the
    same way on every build.
    """
    return sorted(records, key=lambda r: r.metadata.publish_date, reverse=True)


def latest(records: Iterable[ContentRecord], count: int) -> list[ContentRecord]:
    """Return the ``count`` newest records, newest first."""
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    return sort_by_publish_date(records)[:count]
