"""Aggregate classified records into per-run statistics."""

from __future__ import annotations

from collections.abc import Iterable

from .models import Category, EmailRecord, SortStats


def ranked(counts: dict[str, int], limit: int | None = None) -> list[tuple[str, int]]:
    """Return (label, count) pairs by count descending, then label ascending."""
    pairs = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return pairs if limit is None else pairs[:limit]


class StatsAggregator:
    """Accumulates counts and per-category record lists for one batch."""

    def __init__(self) -> None:
        self.stats = SortStats()
        self.categories: dict[Category, list[EmailRecord]] = {c: [] for c in Category}

    def add(self, record: EmailRecord) -> None:
        """Fold a single classified record into the running totals."""
        stats = self.stats
        stats.total_emails += 1

        category_key = str(record.category)
        stats.by_category[category_key] = stats.by_category.get(category_key, 0) + 1

        type_key = record.email_type.label
        stats.by_type[type_key] = stats.by_type.get(type_key, 0) + 1

        stats.by_sender[record.sender] = stats.by_sender.get(record.sender, 0) + 1

        if record.date is not None:
            month = record.date.strftime("%Y-%m")
            stats.by_date[month] = stats.by_date.get(month, 0) + 1

        self.categories[record.category].append(record)

    def add_all(self, records: Iterable[EmailRecord]) -> None:
        for record in records:
            self.add(record)

    def top_senders(self, limit: int) -> list[tuple[str, int]]:
        return ranked(self.stats.by_sender, limit)

    def count(self, category: Category) -> int:
        return self.stats.by_category.get(str(category), 0)

    def percentage(self, category: Category) -> float:
        """Share of the batch in ``category``, 0.0 for an empty batch."""
        if self.stats.total_emails == 0:
            return 0.0
        return self.count(category) * 100 / self.stats.total_emails
