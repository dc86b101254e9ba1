"""Tests for publish-date ordering and slicing."""

import random
from datetime import date, timedelta

import pytest
from folio.content.models import CollectionName, ContentRecord, PostFrontmatter
from folio.content.sorting import latest, sort_by_publish_date


def _make_record(slug: str, publish_date: date, draft: bool = False) -> ContentRecord:
    """Helper to build a ContentRecord with sensible defaults."""
    return ContentRecord(
        slug=slug,
        collection=CollectionName.BLOG,
        metadata=PostFrontmatter(
            title=slug.title(),
            description="",
            publish_date=publish_date,
            draft=draft,
        ),
        body="",
    )


class TestSortByPublishDate:
    def test_newest_first(self):
        records = [
            _make_record("a", date(2024, 1, 1)),
            _make_record("b", date(2024, 6, 15)),
            _make_record("c", date(2023, 12, 25)),
        ]
        ordered = sort_by_publish_date(records)
        assert [r.slug for r in ordered] == ["b", "a", "c"]

    def test_non_increasing(self):
        rng = random.Random(7)
        records = [
            _make_record(f"r{i}", date(2020, 1, 1) + timedelta(days=rng.randrange(1500)))
            for i in range(50)
        ]
        ordered = sort_by_publish_date(records)
        dates = [r.metadata.publish_date for r in ordered]
        assert all(a >= b for a, b in zip(dates, dates[1:]))

    def test_idempotent(self):
        records = [
            _make_record("a", date(2024, 1, 1)),
            _make_record("b", date(2024, 1, 1)),
            _make_record("c", date(2024, 3, 1)),
        ]
        once = sort_by_publish_date(records)
        twice = sort_by_publish_date(once)
        assert [r.slug for r in once] == [r.slug for r in twice]

    def test_stable_for_equal_dates(self):
        same = date(2024, 5, 5)
        records = [
            _make_record("zeta", same),
            _make_record("newer", date(2024, 6, 1)),
            _make_record("alpha", same),
            _make_record("mid", same),
        ]
        ordered = sort_by_publish_date(records)
        assert [r.slug for r in ordered] == ["newer", "zeta", "alpha", "mid"]

    def test_does_not_modify_input(self):
        records = [
            _make_record("a", date(2023, 1, 1)),
            _make_record("b", date(2024, 1, 1)),
        ]
        original = list(records)
        result = sort_by_publish_date(records)
        assert records == original
        assert result is not records

    def test_accepts_iterables(self):
        gen = (_make_record(s, date(2024, 1, i)) for i, s in enumerate("abc", start=1))
        assert [r.slug for r in sort_by_publish_date(gen)] == ["c", "b", "a"]

    def test_empty(self):
        assert sort_by_publish_date([]) == []


class TestLatest:
    def test_latest_three_of_ten(self):
        records = [_make_record(f"p{i}", date(2024, 1, 1) + timedelta(days=i * 3)) for i in range(10)]
        random.Random(3).shuffle(records)

        top = latest(records, 3)

        assert [r.slug for r in top] == ["p9", "p8", "p7"]

    def test_count_larger_than_input(self):
        records = [_make_record("only", date(2024, 1, 1))]
        assert latest(records, 3) == records

    def test_zero(self):
        assert latest([_make_record("a", date(2024, 1, 1))], 0) == []

    def test_negative_count(self):
        with pytest.raises(ValueError):
            latest([], -1)
